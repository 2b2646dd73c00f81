from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from fitment_calc.models.tire import ParsedSize, TireGeometry
from fitment_calc.models.wheel import WheelGeometry
from fitment_calc.utils.converters import optional_float


class SetupFields(BaseModel):
    """Raw field values for one tire/wheel setup, as typed by the user.

    Numeric fields accept numbers or strings; blanks and garbage become None.
    """

    setup_id: str = "setup"
    tire_size: str = ""
    rim_diameter_in: Optional[float] = None
    rim_width_in: Optional[float] = None
    offset_mm: Optional[float] = None
    spacer_mm: Optional[float] = None  # None means no spacer
    width_correction_pct: Optional[float] = None  # None means no correction

    @field_validator(
        "rim_diameter_in",
        "rim_width_in",
        "offset_mm",
        "spacer_mm",
        "width_correction_pct",
        mode="before",
    )
    @classmethod
    def coerce_number(cls, value: Any) -> Optional[float]:
        return optional_float(value)

    @field_validator("tire_size", mode="before")
    @classmethod
    def coerce_tire_size(cls, value: Any) -> str:
        return "" if value is None else str(value)


class DiameterMismatch(BaseModel):
    """Tire's nominal rim diameter does not match the declared wheel diameter."""

    model_config = ConfigDict(frozen=True)

    tire_rim_in: int
    wheel_rim_in: float

    @property
    def message(self) -> str:
        return (
            f'tire rim {self.tire_rim_in}" does not match '
            f'wheel rim {self.wheel_rim_in:g}".'
        )


class Setup(BaseModel):
    """A resolved setup snapshot. Built fresh on every resolve, never mutated."""

    model_config = ConfigDict(frozen=True)

    setup_id: str
    tire_size: str
    rim_diameter_in: Optional[float] = None
    rim_width_in: Optional[float] = None
    offset_mm: Optional[float] = None
    spacer_mm: float = 0.0
    width_correction_pct: float = 0.0

    parsed: Optional[ParsedSize] = None
    tire: Optional[TireGeometry] = None
    wheel: Optional[WheelGeometry] = None
    diameter_mismatch: Optional[DiameterMismatch] = None

    @property
    def is_valid(self) -> bool:
        """False when the setup carries a diameter mismatch (hard error)."""
        return self.diameter_mismatch is None

    @property
    def is_complete(self) -> bool:
        """Valid and has both tire and wheel geometry."""
        return self.is_valid and self.tire is not None and self.wheel is not None

    @property
    def label(self) -> str:
        return self.tire_size or self.setup_id
