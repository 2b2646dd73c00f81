from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class MetricSize(BaseModel):
    """Metric notation, e.g. 225/45R17."""

    model_config = ConfigDict(frozen=True)

    notation: Literal["metric"] = "metric"
    section_width_mm: int
    aspect_ratio_pct: int
    rim_diameter_in: int = Field(gt=0)


class FlotationSize(BaseModel):
    """Flotation notation, e.g. 31X10.5R15 (overall diameter and width in inches)."""

    model_config = ConfigDict(frozen=True)

    notation: Literal["flotation"] = "flotation"
    overall_diameter_in: float
    section_width_in: float
    rim_diameter_in: int = Field(gt=0)


ParsedSize = Annotated[Union[MetricSize, FlotationSize], Field(discriminator="notation")]


class TireGeometry(BaseModel):
    """Physical tire dimensions, all lengths in mm."""

    model_config = ConfigDict(frozen=True)

    rim_diameter_in: float
    section_width_mm: float
    sidewall_mm: float  # can be negative for a degenerate flotation size
    overall_diameter_mm: float
    circumference_mm: float
    revolutions_per_mile: float
