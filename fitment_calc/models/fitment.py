from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from fitment_calc.core.enums import AlertLevel, BaselineState
from fitment_calc.models.setup import Setup
from fitment_calc.utils.converters import optional_float


class ComparisonResult(BaseModel):
    """Candidate vs baseline deltas. Moves are None when a wheel geometry is missing."""

    model_config = ConfigDict(frozen=True)

    ride_height_delta_mm: float
    inner_move_mm: Optional[float] = None  # + = closer to strut
    outer_move_mm: Optional[float] = None  # + = more poke
    speedometer_error_pct: float  # + = speedo under-reads


class ClearanceThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    inner_min_mm: float = 3.0
    outer_min_mm: float = 3.0


class UserClearances(BaseModel):
    """Clearances the user measured on the baseline. None means not measured."""

    model_config = ConfigDict(frozen=True)

    inner_mm: Optional[float] = None
    outer_mm: Optional[float] = None

    @field_validator("inner_mm", "outer_mm", mode="before")
    @classmethod
    def coerce_number(cls, value: Any) -> Optional[float]:
        return optional_float(value)


class ClearanceVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    resulting_clearance_mm: float
    minimum_required_mm: float
    passed: bool


class ClearanceVerdicts(BaseModel):
    """Per-side verdicts. A None side is "unknown", not a failure."""

    model_config = ConfigDict(frozen=True)

    inner: Optional[ClearanceVerdict] = None
    outer: Optional[ClearanceVerdict] = None


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: AlertLevel
    message: str
    setup_id: Optional[str] = None


class CandidateRow(BaseModel):
    """One line of the comparison table."""

    model_config = ConfigDict(frozen=True)

    setup: Setup
    comparison: Optional[ComparisonResult] = None
    clearances: ClearanceVerdicts = ClearanceVerdicts()


class FitmentReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    baseline_state: BaselineState
    baseline: Optional[Setup] = None
    rows: list[CandidateRow] = []
    selected_id: Optional[str] = None
    scrub_radius_mm: Optional[float] = None
    alerts: list[Alert] = []
