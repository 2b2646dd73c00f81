"""Tire and wheel fitment calculator."""

from .services.fitment_engine import (
    compare_setups,
    estimate_scrub_radius,
    evaluate_clearances,
    resolve_setup,
)
from .services.report import build_report
from .services.tire_math import (
    compute_tire_geometry,
    compute_wheel_geometry,
    parse_tire_size,
)

__all__ = [
    "parse_tire_size",
    "compute_tire_geometry",
    "compute_wheel_geometry",
    "resolve_setup",
    "compare_setups",
    "evaluate_clearances",
    "estimate_scrub_radius",
    "build_report",
]
