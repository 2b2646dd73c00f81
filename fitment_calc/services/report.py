"""Comparison report and user-facing alerts for a session.

Turns engine results (None, mismatches, verdicts) into Alert messages;
formatting and display units are left to the consumer.
"""

from fitment_calc.core.enums import AlertLevel
from fitment_calc.models.fitment import (
    Alert,
    CandidateRow,
    ClearanceThresholds,
    ClearanceVerdict,
    FitmentReport,
    UserClearances,
)
from fitment_calc.models.session import Session
from fitment_calc.models.setup import Setup
from fitment_calc.services.fitment_engine import (
    compare_setups,
    estimate_scrub_radius,
    evaluate_clearances,
)
from fitment_calc.services.session import (
    baseline_state,
    invalid_candidates,
    selected_candidate,
    valid_candidates,
)

DEFAULT_SPEEDO_WARN_PCT = 2.0
DEFAULT_SCRUB_WARN_MM = 10.0


def _clearance_alert(side: str, verdict: ClearanceVerdict, setup_id: str) -> Alert:
    return Alert(
        level=AlertLevel.from_pass(verdict.passed),
        message=(
            f"{side} clearance → {verdict.resulting_clearance_mm:.0f} mm "
            f"(min {verdict.minimum_required_mm:g} mm)"
        ),
        setup_id=setup_id,
    )


def mismatch_alerts(session: Session) -> list[Alert]:
    """Blocking alerts for a rejected baseline and every mismatched candidate."""
    alerts: list[Alert] = []
    rejected = session.rejected_baseline
    if rejected is not None and rejected.diameter_mismatch is not None:
        alerts.append(
            Alert(
                level=AlertLevel.BAD,
                message=f"Baseline invalid: {rejected.diameter_mismatch.message}",
                setup_id=rejected.setup_id,
            )
        )
    for setup in invalid_candidates(session):
        alerts.append(
            Alert(
                level=AlertLevel.BAD,
                message=f'Setup "{setup.label}": {setup.diameter_mismatch.message}',
                setup_id=setup.setup_id,
            )
        )
    return alerts


def candidate_alerts(
    baseline: Setup | None,
    candidate: Setup | None,
    clearances: UserClearances | None = None,
    thresholds: ClearanceThresholds | None = None,
    kingpin_inclination_deg: float | None = None,
    hub_offset_mm: float | None = None,
    baseline_speedo_error_pct: float = 0.0,
    speedo_warn_pct: float = DEFAULT_SPEEDO_WARN_PCT,
    scrub_warn_mm: float = DEFAULT_SCRUB_WARN_MM,
) -> list[Alert]:
    """Speedometer, clearance and scrub radius alerts for one candidate.

    baseline_speedo_error_pct is the error the user already measured on the
    baseline; it is added to the computed change.
    """
    alerts: list[Alert] = []
    if baseline is None or candidate is None:
        return alerts

    comparison = compare_setups(baseline, candidate)
    if comparison is not None:
        corrected = comparison.speedometer_error_pct + (baseline_speedo_error_pct or 0.0)
        alerts.append(
            Alert(
                level=AlertLevel.WARN if abs(corrected) > speedo_warn_pct else AlertLevel.GOOD,
                message=f"Speedometer change vs baseline: {corrected:.2f}%",
                setup_id=candidate.setup_id,
            )
        )

    verdicts = evaluate_clearances(baseline, candidate, clearances, thresholds)
    if verdicts.inner is not None:
        alerts.append(_clearance_alert("Inner", verdicts.inner, candidate.setup_id))
    if verdicts.outer is not None:
        alerts.append(_clearance_alert("Outer", verdicts.outer, candidate.setup_id))

    scrub = estimate_scrub_radius(candidate, kingpin_inclination_deg, hub_offset_mm)
    if scrub is not None:
        alerts.append(
            Alert(
                level=AlertLevel.WARN if abs(scrub) > scrub_warn_mm else AlertLevel.GOOD,
                message=f"Estimated scrub radius: {scrub:.1f} mm",
                setup_id=candidate.setup_id,
            )
        )

    return alerts


def build_report(
    session: Session,
    clearances: UserClearances | None = None,
    thresholds: ClearanceThresholds | None = None,
    kingpin_inclination_deg: float | None = None,
    hub_offset_mm: float | None = None,
    baseline_speedo_error_pct: float = 0.0,
    speedo_warn_pct: float = DEFAULT_SPEEDO_WARN_PCT,
    scrub_warn_mm: float = DEFAULT_SCRUB_WARN_MM,
) -> FitmentReport:
    """Full comparison table, selection and alerts for a session.

    Rows cover only complete candidates; mismatched ones appear as alerts.
    Without a valid baseline the rows carry no comparison.
    """
    baseline = session.baseline
    rows = [
        CandidateRow(
            setup=setup,
            comparison=compare_setups(baseline, setup),
            clearances=evaluate_clearances(baseline, setup, clearances, thresholds),
        )
        for setup in valid_candidates(session)
    ]

    selected = selected_candidate(session)
    alerts = mismatch_alerts(session)
    alerts.extend(
        candidate_alerts(
            baseline,
            selected,
            clearances,
            thresholds,
            kingpin_inclination_deg,
            hub_offset_mm,
            baseline_speedo_error_pct,
            speedo_warn_pct,
            scrub_warn_mm,
        )
    )

    return FitmentReport(
        baseline_state=baseline_state(session),
        baseline=baseline,
        rows=rows,
        selected_id=selected.setup_id if selected else None,
        scrub_radius_mm=estimate_scrub_radius(selected, kingpin_inclination_deg, hub_offset_mm),
        alerts=alerts,
    )
