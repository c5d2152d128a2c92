from __future__ import annotations
from enum import Enum
from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator

# -------- thresholds --------------------------------------------------------
# at least half the regions must be dark for the whole image to be dark
MINIMUM_DARKNESS_FACTOR = 0.50
# at least half the regions must be blurry for the whole image to be blurry
MINIMUM_BLURRYNESS_FACTOR = 0.50
DARK_PIXEL_LUMINANCE_THRESHOLD = 50     # 0-255, strict <
LAPLACIAN_VARIANCE_THRESHOLD = 70       # strict <


class Verdict(str, Enum):
    DARK = "dark"
    BLURRY = "blurry"
    OK = "ok"


class Thresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    darkness_factor: float = Field(MINIMUM_DARKNESS_FACTOR, ge=0.0, le=1.0)
    blurriness_factor: float = Field(MINIMUM_BLURRYNESS_FACTOR, ge=0.0, le=1.0)
    dark_pixel_luminance: int = Field(DARK_PIXEL_LUMINANCE_THRESHOLD, ge=0, le=256)
    laplacian_variance: float = Field(LAPLACIAN_VARIANCE_THRESHOLD, ge=0.0)


DEFAULT_THRESHOLDS = Thresholds()


# -------- geometry ----------------------------------------------------------
class Region(BaseModel):
    """Rectangle in image coordinates, right/bottom exclusive."""
    model_config = ConfigDict(frozen=True)

    left: int = Field(ge=0)
    top: int = Field(ge=0)
    right: int
    bottom: int

    @model_validator(mode="after")
    def _non_empty(self):
        if self.right <= self.left or self.bottom <= self.top:
            raise ValueError(f"empty region {self.box}")
        return self

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def box(self) -> Tuple[int, int, int, int]:
        # PIL crop order
        return (self.left, self.top, self.right, self.bottom)


# -------- result ------------------------------------------------------------
class QualityReport(BaseModel):
    verdict: Verdict
    total_regions: int = 0
    dark_regions: int = 0
    blurry_regions: int = 0

    @property
    def dark_fraction(self) -> float:
        return self.dark_regions / self.total_regions if self.total_regions else 0.0

    @property
    def blurry_fraction(self) -> float:
        return self.blurry_regions / self.total_regions if self.total_regions else 0.0
