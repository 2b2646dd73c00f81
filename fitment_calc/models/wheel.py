from pydantic import BaseModel, ConfigDict


class WheelGeometry(BaseModel):
    """Wheel position relative to the hub mounting face, all in mm.

    Positive effective offset moves the face toward the vehicle, which
    grows backspacing and shrinks poke.
    """

    model_config = ConfigDict(frozen=True)

    effective_offset_mm: float
    half_width_mm: float
    backspacing_mm: float
    frontspacing_mm: float

    @property
    def poke_mm(self) -> float:
        return self.frontspacing_mm
