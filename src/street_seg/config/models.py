# street_seg/config/models.py
from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False  # also log skipped geometries


class GeometryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    join_tolerance_deg: float = 1e-7
    on_discontinuity: Literal["raise", "keep"] = "raise"

    @field_validator("join_tolerance_deg")
    @classmethod
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v) or v < 0:
            raise ValueError(f"{info.field_name} must be a finite value >= 0")
        return v


# ----------------- STEP GENERATORS ---------------------


class StepGeneratorStreetNameModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["street_name"] = "street_name"
    continue_deg: float = 10.0
    slight_deg: float = 45.0
    hard_deg: float = 120.0
    uturn_deg: float = 170.0

    @model_validator(mode="after")
    def _check_thresholds(self):
        t = (self.continue_deg, self.slight_deg, self.hard_deg, self.uturn_deg)
        if not all(0 <= x <= 180 for x in t):
            raise ValueError("turn thresholds must lie in [0, 180] degrees")
        if list(t) != sorted(t):
            raise ValueError(
                "turn thresholds must be ordered continue <= slight <= hard <= uturn"
            )
        return self


StepGeneratorUnion = Annotated[StepGeneratorStreetNameModel, Field(discriminator="kind")]


# ------------------------------------------------------------------


class SegmentsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "street_seg"
    run_id: str = "local"
    log: LogModel = LogModel()
    geometry: GeometryModel = GeometryModel()
    steps: StepGeneratorUnion = Field(default_factory=StepGeneratorStreetNameModel)
