"""FastAPI route definitions for the fitment calculator API."""

from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from fitment_calc.api.deps import get_app_settings, get_default_thresholds
from fitment_calc.config import Settings
from fitment_calc.core.logging import log_error
from fitment_calc.models.fitment import (
    ClearanceThresholds,
    ClearanceVerdicts,
    ComparisonResult,
    FitmentReport,
    UserClearances,
)
from fitment_calc.models.session import Session
from fitment_calc.models.setup import Setup, SetupFields
from fitment_calc.models.tire import ParsedSize
from fitment_calc.services.fitment_engine import (
    compare_setups,
    estimate_scrub_radius,
    evaluate_clearances,
    resolve_setup,
)
from fitment_calc.services.presets import list_presets
from fitment_calc.services.report import build_report
from fitment_calc.services.session import (
    apply_baseline,
    select_candidate,
    upsert_candidate,
)
from fitment_calc.services.tire_math import parse_tire_size

router = APIRouter()


# ---------------------------------------------------------------------------
# Request / Response Models
# ---------------------------------------------------------------------------


class ParseRequest(BaseModel):
    raw: Optional[str] = None


class ParseResponse(BaseModel):
    raw: Optional[str] = None
    parsed: Optional[ParsedSize] = None


class CompareRequest(BaseModel):
    baseline: SetupFields
    candidate: SetupFields


class CompareResponse(BaseModel):
    baseline: Setup
    candidate: Setup
    comparison: Optional[ComparisonResult] = None  # None = not enough data


class ClearanceRequest(CompareRequest):
    clearances: UserClearances = UserClearances()
    thresholds: Optional[ClearanceThresholds] = None


class ScrubRadiusRequest(BaseModel):
    setup: SetupFields
    kingpin_inclination_deg: Optional[float] = None
    hub_offset_mm: Optional[float] = None


class ScrubRadiusResponse(BaseModel):
    scrub_radius_mm: Optional[float] = None


class ReportRequest(BaseModel):
    baseline: Optional[SetupFields] = None
    candidates: list[SetupFields] = []
    selected_id: Optional[str] = None
    clearances: UserClearances = UserClearances()
    thresholds: Optional[ClearanceThresholds] = None
    kingpin_inclination_deg: Optional[float] = None
    hub_offset_mm: Optional[float] = None
    baseline_speedo_error_pct: float = 0.0


def _require_valid(setup: Setup, role: str) -> None:
    """A diameter mismatch is a blocking error, never a silent null."""
    if setup.diameter_mismatch is not None:
        detail = f'{role} "{setup.label}": {setup.diameter_mismatch.message}'
        log_error("Diameter mismatch", setup_id=setup.setup_id)
        raise HTTPException(status_code=422, detail=detail)


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


@router.post("/tire-size/parse", response_model=ParseResponse)
async def parse_size(req: ParseRequest):
    """Parse a tire size. An unparsable size returns parsed=null, not an error."""
    return ParseResponse(raw=req.raw, parsed=parse_tire_size(req.raw))


@router.post("/setups/resolve", response_model=Setup)
async def resolve(fields: SetupFields):
    """Resolve raw setup fields into tire and wheel geometry."""
    return resolve_setup(fields)


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


@router.post("/compare", response_model=CompareResponse)
async def compare(req: CompareRequest):
    """Compare a candidate setup against the baseline."""
    baseline = resolve_setup(req.baseline)
    candidate = resolve_setup(req.candidate)
    _require_valid(baseline, "Baseline")
    _require_valid(candidate, "Setup")
    return CompareResponse(
        baseline=baseline,
        candidate=candidate,
        comparison=compare_setups(baseline, candidate),
    )


@router.post("/clearances", response_model=ClearanceVerdicts)
async def clearances(
    req: ClearanceRequest,
    default_thresholds: Annotated[ClearanceThresholds, Depends(get_default_thresholds)],
):
    """Inner/outer clearance verdicts for a candidate."""
    baseline = resolve_setup(req.baseline)
    candidate = resolve_setup(req.candidate)
    _require_valid(baseline, "Baseline")
    _require_valid(candidate, "Setup")
    return evaluate_clearances(
        baseline, candidate, req.clearances, req.thresholds or default_thresholds
    )


@router.post("/scrub-radius", response_model=ScrubRadiusResponse)
async def scrub_radius(req: ScrubRadiusRequest):
    """Coarse scrub radius estimate for one setup."""
    setup = resolve_setup(req.setup)
    return ScrubRadiusResponse(
        scrub_radius_mm=estimate_scrub_radius(
            setup, req.kingpin_inclination_deg, req.hub_offset_mm
        )
    )


@router.post("/report", response_model=FitmentReport)
async def report(
    req: ReportRequest,
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Full comparison of all candidates against the baseline, with alerts.

    Mismatched setups do not fail the request; they are reported as alerts.
    Candidates without a setup_id are numbered by position; repeated ids are
    rejected rather than silently merged.
    """
    candidates = [
        fields
        if "setup_id" in fields.model_fields_set
        else fields.model_copy(update={"setup_id": f"candidate-{i + 1}"})
        for i, fields in enumerate(req.candidates)
    ]
    ids = [fields.setup_id for fields in candidates]
    duplicates = sorted({setup_id for setup_id in ids if ids.count(setup_id) > 1})
    if duplicates:
        log_error("Duplicate candidate ids", ids=",".join(duplicates))
        raise HTTPException(
            status_code=422,
            detail=f"Duplicate candidate setup_id: {', '.join(duplicates)}",
        )

    session = Session()
    if req.baseline is not None:
        session = apply_baseline(session, resolve_setup(req.baseline))
    for fields in candidates:
        session = upsert_candidate(session, resolve_setup(fields))
    session = select_candidate(session, req.selected_id)

    return build_report(
        session,
        clearances=req.clearances,
        thresholds=req.thresholds or settings.default_thresholds,
        kingpin_inclination_deg=req.kingpin_inclination_deg,
        hub_offset_mm=req.hub_offset_mm,
        baseline_speedo_error_pct=req.baseline_speedo_error_pct,
        speedo_warn_pct=settings.speedo_warn_pct,
        scrub_warn_mm=settings.scrub_warn_mm,
    )


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


@router.get("/presets")
async def presets() -> list[dict[str, Any]]:
    """Built-in baseline presets."""
    return list_presets()
