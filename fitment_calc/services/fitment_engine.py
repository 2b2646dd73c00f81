"""Setup resolution, baseline comparison, clearance checks and scrub radius.

All functions are pure and never raise on incomplete input: missing data
propagates as None ("no result"), which is distinct from a zero delta.
A setup whose tire rim diameter does not match its wheel is hard-invalid
and is never compared against anything.
"""

import logging
import math
from typing import Any, Mapping

from fitment_calc.core.logging import log_mismatch
from fitment_calc.models.fitment import (
    ClearanceThresholds,
    ClearanceVerdict,
    ClearanceVerdicts,
    ComparisonResult,
    UserClearances,
)
from fitment_calc.models.setup import DiameterMismatch, Setup, SetupFields
from fitment_calc.models.tire import ParsedSize
from fitment_calc.services.tire_math import (
    compute_tire_geometry,
    compute_wheel_geometry,
    parse_tire_size,
)
from fitment_calc.utils.converters import optional_float

logger = logging.getLogger(__name__)

# Allowed slack between the tire's rim size and the typed wheel diameter (inches)
RIM_DIAMETER_TOLERANCE_IN = 0.05


# =============================================================================
# Setup Resolution
# =============================================================================


def check_diameter_mismatch(
    parsed: ParsedSize | None, rim_diameter_in: float | None
) -> DiameterMismatch | None:
    """Flag a tire whose rim size differs from the wheel by more than 0.05"."""
    if parsed is None or rim_diameter_in is None:
        return None
    if abs(parsed.rim_diameter_in - rim_diameter_in) > RIM_DIAMETER_TOLERANCE_IN:
        return DiameterMismatch(
            tire_rim_in=parsed.rim_diameter_in, wheel_rim_in=rim_diameter_in
        )
    return None


def resolve_setup(fields: SetupFields | Mapping[str, Any]) -> Setup:
    """Build a complete Setup snapshot from raw field values.

    Parses the tire size, derives tire geometry (with brand correction and
    rim stretch) and wheel geometry, and checks the rim diameters agree.
    """
    if not isinstance(fields, SetupFields):
        fields = SetupFields.model_validate(fields)

    spacer_mm = fields.spacer_mm or 0.0
    correction_pct = fields.width_correction_pct or 0.0

    parsed = parse_tire_size(fields.tire_size)
    tire = compute_tire_geometry(parsed, correction_pct, fields.rim_width_in)
    wheel = compute_wheel_geometry(fields.rim_width_in, fields.offset_mm, spacer_mm)
    mismatch = check_diameter_mismatch(parsed, fields.rim_diameter_in)

    if mismatch is not None:
        log_mismatch(fields.setup_id, mismatch.tire_rim_in, mismatch.wheel_rim_in)

    return Setup(
        setup_id=fields.setup_id,
        tire_size=fields.tire_size,
        rim_diameter_in=fields.rim_diameter_in,
        rim_width_in=fields.rim_width_in,
        offset_mm=fields.offset_mm,
        spacer_mm=spacer_mm,
        width_correction_pct=correction_pct,
        parsed=parsed,
        tire=tire,
        wheel=wheel,
        diameter_mismatch=mismatch,
    )


# =============================================================================
# Comparison
# =============================================================================


def compare_setups(
    baseline: Setup | None, candidate: Setup | None
) -> ComparisonResult | None:
    """Compute candidate-vs-baseline deltas.

    ride_height_delta = half the overall diameter change
    inner_move        = Δbackspacing  (+ = closer to the strut)
    outer_move        = Δfrontspacing (+ = more poke)
    speedometer_error = (C_candidate / C_baseline - 1) × 100
        + means the speedo (calibrated on the baseline) under-reads

    Returns:
        ComparisonResult, or None when either setup lacks tire geometry or
        carries a diameter mismatch. Inner/outer moves are None when either
        side lacks wheel geometry.
    """
    if baseline is None or candidate is None:
        return None
    if not baseline.is_valid or not candidate.is_valid:
        logger.debug(
            "Skipping comparison %s vs %s: diameter mismatch",
            baseline.setup_id,
            candidate.setup_id,
        )
        return None
    if baseline.tire is None or candidate.tire is None:
        return None
    if baseline.tire.circumference_mm <= 0:
        return None

    base_t, cand_t = baseline.tire, candidate.tire
    base_w, cand_w = baseline.wheel, candidate.wheel

    inner_move_mm = None
    outer_move_mm = None
    if base_w is not None and cand_w is not None:
        inner_move_mm = cand_w.backspacing_mm - base_w.backspacing_mm
        outer_move_mm = cand_w.frontspacing_mm - base_w.frontspacing_mm

    return ComparisonResult(
        ride_height_delta_mm=(cand_t.overall_diameter_mm - base_t.overall_diameter_mm) / 2,
        inner_move_mm=inner_move_mm,
        outer_move_mm=outer_move_mm,
        speedometer_error_pct=(cand_t.circumference_mm / base_t.circumference_mm - 1) * 100,
    )


# =============================================================================
# Clearance
# =============================================================================


def _verdict(
    baseline_clearance_mm: float | None, move_mm: float | None, minimum_mm: float
) -> ClearanceVerdict | None:
    if baseline_clearance_mm is None or move_mm is None:
        return None
    # Movement toward the obstruction consumes clearance
    resulting = baseline_clearance_mm - move_mm
    return ClearanceVerdict(
        resulting_clearance_mm=resulting,
        minimum_required_mm=minimum_mm,
        passed=resulting >= minimum_mm,
    )


def evaluate_clearances(
    baseline: Setup | None,
    candidate: Setup | None,
    clearances: UserClearances | None = None,
    thresholds: ClearanceThresholds | None = None,
) -> ClearanceVerdicts:
    """Apply clearance thresholds to the candidate's inner/outer movement.

    A side without a measured baseline clearance gets no verdict.
    """
    clearances = clearances or UserClearances()
    thresholds = thresholds or ClearanceThresholds()

    comparison = compare_setups(baseline, candidate)
    if comparison is None:
        return ClearanceVerdicts()

    return ClearanceVerdicts(
        inner=_verdict(clearances.inner_mm, comparison.inner_move_mm, thresholds.inner_min_mm),
        outer=_verdict(clearances.outer_mm, comparison.outer_move_mm, thresholds.outer_min_mm),
    )


# =============================================================================
# Scrub Radius
# =============================================================================


def estimate_scrub_radius(
    setup: Setup | None,
    kingpin_inclination_deg: Any,
    hub_offset_mm: Any,
) -> float | None:
    """Coarse single-plane scrub radius estimate, in mm.

    Projects the steering axis from hub height (overall radius) down to the
    ground and compares it with the contact patch center, taken as
    -effective_offset from the hub face.

        axis_run       = (overall_diameter / 2) × tan(KPI)
        axis_at_ground = hub_offset - axis_run
        scrub          = -effective_offset - axis_at_ground

    Positive scrub = contact patch outboard of the steering axis.
    Not a suspension model: camber, caster and tire deflection are ignored.

    Args:
        setup: Resolved setup (needs tire and wheel geometry)
        kingpin_inclination_deg: Steering axis inclination in degrees
        hub_offset_mm: Hub face to steering axis at hub height, + inward

    Returns:
        Scrub radius in mm, or None if any input is missing
    """
    kpi = optional_float(kingpin_inclination_deg)
    hub_offset = optional_float(hub_offset_mm)
    if setup is None or setup.wheel is None or setup.tire is None:
        return None
    if kpi is None or hub_offset is None:
        return None

    axis_run = (setup.tire.overall_diameter_mm / 2) * math.tan(math.radians(kpi))
    axis_at_ground = hub_offset - axis_run
    contact_center = -setup.wheel.effective_offset_mm
    return contact_center - axis_at_ground
