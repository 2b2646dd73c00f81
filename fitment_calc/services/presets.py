"""Built-in baseline presets: common tire sizes with a typical OEM wheel."""

from typing import Any

from fitment_calc.models.setup import SetupFields

# tire size -> rim diameter (in), rim width (in), offset ET (mm), spacer (mm)
PRESETS: dict[str, dict[str, float]] = {
    "225/45R17": {"rim_diameter_in": 17, "rim_width_in": 7.5, "offset_mm": 45, "spacer_mm": 0},
    "205/55R16": {"rim_diameter_in": 16, "rim_width_in": 6.5, "offset_mm": 50, "spacer_mm": 0},
    "265/35R19": {"rim_diameter_in": 19, "rim_width_in": 9, "offset_mm": 35, "spacer_mm": 0},
    "31x10.5R15": {"rim_diameter_in": 15, "rim_width_in": 8, "offset_mm": -19, "spacer_mm": 0},
}


def list_presets() -> list[dict[str, Any]]:
    return [{"tire_size": tire, **wheel} for tire, wheel in PRESETS.items()]


def preset_fields(tire_size: str, setup_id: str = "base") -> SetupFields | None:
    """Fill a setup's fields from a preset, or None for an unknown size."""
    wheel = PRESETS.get(tire_size)
    if wheel is None:
        return None
    return SetupFields(setup_id=setup_id, tire_size=tire_size, **wheel)
