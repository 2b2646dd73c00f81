"""Tire size parsing and tire/wheel geometry.

This module is the single source of truth for all tire/wheel math.
Every function here is pure and total: bad input yields None, never an exception.

## Core Formulas

### Sidewall Height (metric)
    sidewall_mm = section_width_mm × (aspect_ratio / 100)

### Overall Tire Diameter (metric)
    overall_diameter_mm = (rim_diameter_in × 25.4) + (2 × sidewall_mm)

### Sidewall Height (flotation, back-derived)
    sidewall_mm = (overall_diameter_in × 25.4 - rim_diameter_in × 25.4) / 2

### Rim Width Stretch (metric only)
    - Section width changes ~5mm for every 0.5" of rim width
    - Nominal rim width ≈ section width (in) × 0.8

### Wheel Position
    effective_offset = offset - spacer
    backspacing      = (rim_width × 25.4 / 2) + effective_offset
    frontspacing     = (rim_width × 25.4 / 2) - effective_offset
"""

import logging
import math
import re
from typing import Any

from fitment_calc.models.tire import FlotationSize, MetricSize, ParsedSize, TireGeometry
from fitment_calc.models.wheel import WheelGeometry
from fitment_calc.utils.converters import optional_float

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

MM_PER_INCH = 25.4
MM_PER_MILE = 1609.344 * 1000

# Nominal rim width as a fraction of section width (ETRTO 0.7-0.9, midpoint)
NOMINAL_RIM_WIDTH_RATIO = 0.8
STRETCH_STEP_IN = 0.5
STRETCH_MM_PER_STEP = 5

# 225/45R17, 225/45-17
METRIC_PATTERN = re.compile(r"(\d{3})/(\d{2,3})(?:R|-)?(\d{2})")
# 31X10.5R15, 35X12.50-20
FLOTATION_PATTERN = re.compile(r"(\d{2,3}(?:\.\d)?)X(\d{1,2}(?:\.\d{1,2})?)(?:R|-)?(\d{2})")

_WHITESPACE = re.compile(r"\s+")


# =============================================================================
# SIZE PARSING
# =============================================================================


def normalize_tire_size(raw: Any) -> str:
    """Trim, upper-case and drop all whitespace: ' 31x10.5 r15 ' -> '31X10.5R15'."""
    if raw is None:
        return ""
    return _WHITESPACE.sub("", str(raw).strip().upper())


def parse_tire_size(raw: Any) -> ParsedSize | None:
    """Parse a tire size string in metric or flotation notation.

    Args:
        raw: Tire size as typed (e.g. "225/45R17", "31x10.5R15")

    Returns:
        MetricSize or FlotationSize, or None if neither grammar matches

    Examples:
        >>> parse_tire_size("225/45R17")
        MetricSize(notation='metric', section_width_mm=225, aspect_ratio_pct=45, rim_diameter_in=17)
        >>> parse_tire_size("P225-45-R17") is None
        True
    """
    size = normalize_tire_size(raw)
    if not size:
        return None

    m = METRIC_PATTERN.fullmatch(size)
    if m and int(m.group(3)) > 0:
        return MetricSize(
            section_width_mm=int(m.group(1)),
            aspect_ratio_pct=int(m.group(2)),
            rim_diameter_in=int(m.group(3)),
        )

    m = FLOTATION_PATTERN.fullmatch(size)
    if m and int(m.group(3)) > 0:
        return FlotationSize(
            overall_diameter_in=float(m.group(1)),
            section_width_in=float(m.group(2)),
            rim_diameter_in=int(m.group(3)),
        )

    logger.debug("Unparsable tire size: %r", raw)
    return None


# =============================================================================
# TIRE GEOMETRY
# =============================================================================


def _round_half_up(value: float) -> int:
    # Math.round semantics; Python's round() would send 0.5 to 0
    return math.floor(value + 0.5)


def calculate_sidewall_height(section_width_mm: float, aspect_ratio_pct: float) -> float:
    """Calculate tire sidewall height in mm.

    Formula: sidewall_mm = section_width_mm × (aspect_ratio / 100)

    Example:
        >>> calculate_sidewall_height(245, 40)
        98.0
    """
    return section_width_mm * (aspect_ratio_pct / 100)


def calculate_stretch_mm(section_width_mm: float, rim_width_in: float) -> int:
    """Estimate section-width growth from running a rim wider than nominal.

    Very rough empirical rule: ~5mm of section width per 0.5" of rim width
    away from the nominal rim (section width in inches × 0.8).

    Args:
        section_width_mm: Section width after any brand correction
        rim_width_in: Actual rim width in inches

    Returns:
        Millimeters to add to section width (negative for a narrower rim)

    Example:
        >>> calculate_stretch_mm(245, 8.5)  # nominal 7.72", 1.57 steps -> 2
        10
    """
    nominal_rim_in = (section_width_mm / MM_PER_INCH) * NOMINAL_RIM_WIDTH_RATIO
    steps = _round_half_up((rim_width_in - nominal_rim_in) / STRETCH_STEP_IN)
    return steps * STRETCH_MM_PER_STEP


def compute_tire_geometry(
    size: ParsedSize | None,
    width_correction_pct: float = 0,
    rim_width_in: float | None = None,
) -> TireGeometry | None:
    """Derive physical tire dimensions from a parsed size.

    Sidewall and overall diameter always come from the nominal size; the
    brand correction and rim stretch only affect section width.

    Args:
        size: Parsed tire size (None propagates to None)
        width_correction_pct: Brand-to-brand width variance from nominal, in %
        rim_width_in: Rim width in inches; enables the stretch estimate for metric sizes

    Returns:
        TireGeometry, or None if size is None or its overall diameter is not positive

    Example:
        225/45R17 -> sidewall 101.25mm, overall diameter 634.3mm
    """
    if size is None:
        return None

    rim_mm = size.rim_diameter_in * MM_PER_INCH

    if isinstance(size, MetricSize):
        section_width_mm = float(size.section_width_mm)
        sidewall_mm = calculate_sidewall_height(section_width_mm, size.aspect_ratio_pct)
        overall_diameter_mm = rim_mm + 2 * sidewall_mm
    else:
        section_width_mm = size.section_width_in * MM_PER_INCH
        overall_diameter_mm = size.overall_diameter_in * MM_PER_INCH
        # Negative when the stated diameter is below the rim; passed through as-is
        sidewall_mm = (overall_diameter_mm - rim_mm) / 2

    if overall_diameter_mm <= 0:
        # A zero-diameter tire has no circumference to roll on
        return None

    section_width_mm *= 1 + (width_correction_pct or 0) / 100

    if rim_width_in and isinstance(size, MetricSize):
        section_width_mm += calculate_stretch_mm(section_width_mm, rim_width_in)

    circumference_mm = overall_diameter_mm * math.pi

    return TireGeometry(
        rim_diameter_in=size.rim_diameter_in,
        section_width_mm=section_width_mm,
        sidewall_mm=sidewall_mm,
        overall_diameter_mm=overall_diameter_mm,
        circumference_mm=circumference_mm,
        revolutions_per_mile=MM_PER_MILE / circumference_mm,
    )


# =============================================================================
# WHEEL GEOMETRY
# =============================================================================


def compute_wheel_geometry(
    rim_width_in: Any,
    offset_mm: Any,
    spacer_mm: Any = 0,
) -> WheelGeometry | None:
    """Calculate backspacing and poke from width, offset and spacer.

    Formula:
        effective_offset = offset - spacer   (a spacer pushes the wheel out)
        backspacing      = width × 25.4 / 2 + effective_offset
        frontspacing     = width × 25.4 / 2 - effective_offset

    Args:
        rim_width_in: Wheel width in inches
        offset_mm: Wheel offset (ET) in mm
        spacer_mm: Spacer thickness in mm; blank means none

    Returns:
        WheelGeometry, or None if width or offset is missing

    Example:
        >>> compute_wheel_geometry(7.5, 45).backspacing_mm
        140.25
    """
    width = optional_float(rim_width_in)
    offset = optional_float(offset_mm)
    if width is None or offset is None:
        return None

    effective_offset_mm = offset - (optional_float(spacer_mm) or 0.0)
    half_width_mm = width * MM_PER_INCH / 2

    return WheelGeometry(
        effective_offset_mm=effective_offset_mm,
        half_width_mm=half_width_mm,
        backspacing_mm=half_width_mm + effective_offset_mm,
        frontspacing_mm=half_width_mm - effective_offset_mm,
    )
