"""Tests for session orchestration, alerts/report and presets."""

from fitment_calc.core.enums import AlertLevel, BaselineState
from fitment_calc.models.fitment import ClearanceThresholds, UserClearances
from fitment_calc.models.session import Session
from fitment_calc.models.setup import SetupFields
from fitment_calc.services.fitment_engine import resolve_setup
from fitment_calc.services.presets import PRESETS, list_presets, preset_fields
from fitment_calc.services.report import build_report, candidate_alerts, mismatch_alerts
from fitment_calc.services.session import (
    apply_baseline,
    baseline_state,
    invalid_candidates,
    remove_candidate,
    select_candidate,
    selected_candidate,
    upsert_candidate,
    valid_candidates,
)


def _setup(setup_id="base", **overrides):
    fields = {
        "setup_id": setup_id,
        "tire_size": "225/45R17",
        "rim_diameter_in": 17,
        "rim_width_in": 7.5,
        "offset_mm": 45,
    }
    fields.update(overrides)
    return resolve_setup(SetupFields(**fields))


def _upgrade(setup_id="s1", **overrides):
    fields = {
        "tire_size": "245/40R18",
        "rim_diameter_in": 18,
        "rim_width_in": 8.5,
        "offset_mm": 40,
        "spacer_mm": 5,
    }
    fields.update(overrides)
    return _setup(setup_id, **fields)


def _session_with(*candidates, baseline=None):
    session = apply_baseline(Session(), baseline or _setup())
    for candidate in candidates:
        session = upsert_candidate(session, candidate)
    return session


# ---------------------------------------------------------------------------
# Baseline
# ---------------------------------------------------------------------------


class TestBaseline:
    def test_absent_by_default(self):
        assert baseline_state(Session()) == BaselineState.ABSENT

    def test_valid_baseline(self):
        session = apply_baseline(Session(), _setup())
        assert baseline_state(session) == BaselineState.VALID
        assert session.baseline.setup_id == "base"

    def test_mismatch_rejects_baseline(self):
        previous = apply_baseline(Session(), _setup())
        session = apply_baseline(previous, _setup(rim_diameter_in=18))
        assert baseline_state(session) == BaselineState.REJECTED
        assert session.baseline is None
        assert session.rejected_baseline.diameter_mismatch is not None

    def test_valid_baseline_clears_rejection(self):
        rejected = apply_baseline(Session(), _setup(rim_diameter_in=18))
        session = apply_baseline(rejected, _setup())
        assert baseline_state(session) == BaselineState.VALID
        assert session.rejected_baseline is None

    def test_updates_return_new_sessions(self):
        original = Session()
        updated = apply_baseline(original, _setup())
        assert original.baseline is None
        assert updated is not original


# ---------------------------------------------------------------------------
# Candidates & Selection
# ---------------------------------------------------------------------------


class TestCandidates:
    def test_upsert_replaces_by_id(self):
        session = _session_with(_upgrade("s1"), _upgrade("s2"))
        session = upsert_candidate(session, _upgrade("s1", offset_mm=30))
        assert [s.setup_id for s in session.candidates] == ["s1", "s2"]
        assert session.candidates[0].offset_mm == 30

    def test_remove_clears_selection(self):
        session = select_candidate(_session_with(_upgrade("s1"), _upgrade("s2")), "s1")
        session = remove_candidate(session, "s1")
        assert [s.setup_id for s in session.candidates] == ["s2"]
        assert session.selected_id is None

    def test_valid_and_invalid_split(self):
        session = _session_with(
            _upgrade("ok"),
            _upgrade("mismatch", rim_diameter_in=19),
            _upgrade("incomplete", offset_mm=None),
        )
        assert [s.setup_id for s in valid_candidates(session)] == ["ok"]
        assert [s.setup_id for s in invalid_candidates(session)] == ["mismatch"]

    def test_selected_falls_back_to_first_valid(self):
        session = _session_with(_upgrade("mismatch", rim_diameter_in=19), _upgrade("s2"))
        assert selected_candidate(session).setup_id == "s2"
        session = select_candidate(session, "mismatch")
        assert selected_candidate(session).setup_id == "s2"

    def test_explicit_selection(self):
        session = select_candidate(_session_with(_upgrade("s1"), _upgrade("s2")), "s2")
        assert selected_candidate(session).setup_id == "s2"

    def test_no_candidates(self):
        assert selected_candidate(Session()) is None


# ---------------------------------------------------------------------------
# Alerts & Report
# ---------------------------------------------------------------------------


class TestAlerts:
    def test_mismatched_candidate_alert(self):
        session = _session_with(_upgrade("s1", rim_diameter_in=19))
        alerts = mismatch_alerts(session)
        assert len(alerts) == 1
        assert alerts[0].level == AlertLevel.BAD
        assert alerts[0].message == 'Setup "245/40R18": tire rim 18" does not match wheel rim 19".'

    def test_rejected_baseline_alert(self):
        session = apply_baseline(Session(), _setup(rim_diameter_in=18))
        alerts = mismatch_alerts(session)
        assert alerts[0].message.startswith("Baseline invalid:")

    def test_speedometer_warn(self):
        alerts = candidate_alerts(_setup(), _upgrade())
        assert alerts[0].level == AlertLevel.WARN
        assert alerts[0].message == "Speedometer change vs baseline: 2.98%"

    def test_baseline_speedo_error_is_added(self):
        alerts = candidate_alerts(_setup(), _upgrade(), baseline_speedo_error_pct=-1.5)
        assert alerts[0].level == AlertLevel.GOOD
        assert alerts[0].message == "Speedometer change vs baseline: 1.48%"

    def test_clearance_alerts(self):
        alerts = candidate_alerts(
            _setup(),
            _setup("s1", offset_mm=51),
            UserClearances(inner_mm=20, outer_mm=2),
            ClearanceThresholds(),
        )
        messages = {a.message: a.level for a in alerts}
        assert messages["Inner clearance → 14 mm (min 3 mm)"] == AlertLevel.GOOD
        assert messages["Outer clearance → 8 mm (min 3 mm)"] == AlertLevel.GOOD

    def test_failed_clearance_is_bad(self):
        alerts = candidate_alerts(_setup(), _upgrade(), UserClearances(outer_mm=15))
        outer = [a for a in alerts if a.message.startswith("Outer")]
        assert outer[0].level == AlertLevel.BAD

    def test_scrub_alert(self):
        alerts = candidate_alerts(_setup(), _upgrade(), kingpin_inclination_deg=0, hub_offset_mm=0)
        assert alerts[-1].message == "Estimated scrub radius: -35.0 mm"
        assert alerts[-1].level == AlertLevel.WARN

    def test_no_baseline_no_alerts(self):
        assert candidate_alerts(None, _upgrade()) == []


class TestReport:
    def test_full_report(self):
        session = _session_with(
            _upgrade("s1"),
            _upgrade("s2", tire_size="255/35R18"),
            _upgrade("bad", rim_diameter_in=17),
        )
        report = build_report(session, UserClearances(inner_mm=20), kingpin_inclination_deg=12, hub_offset_mm=60)

        assert report.baseline_state == BaselineState.VALID
        assert [row.setup.setup_id for row in report.rows] == ["s1", "s2"]
        assert report.rows[0].comparison is not None
        assert report.rows[0].clearances.inner.passed
        assert report.selected_id == "s1"
        assert report.scrub_radius_mm is not None
        assert report.alerts[0].level == AlertLevel.BAD
        assert report.alerts[0].setup_id == "bad"

    def test_report_without_baseline(self):
        session = upsert_candidate(Session(), _upgrade("s1"))
        report = build_report(session)
        assert report.baseline_state == BaselineState.ABSENT
        assert report.rows[0].comparison is None
        assert report.rows[0].clearances.inner is None
        assert report.alerts == []


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


class TestPresets:
    def test_every_preset_resolves_cleanly(self):
        for tire in PRESETS:
            setup = resolve_setup(preset_fields(tire))
            assert setup.is_complete, tire

    def test_preset_fields(self):
        fields = preset_fields("31x10.5R15", setup_id="s3")
        assert fields.setup_id == "s3"
        assert fields.offset_mm == -19
        assert fields.rim_diameter_in == 15

    def test_unknown_preset(self):
        assert preset_fields("999/99R99") is None

    def test_list_presets(self):
        presets = list_presets()
        assert len(presets) == 4
        assert presets[0]["tire_size"] == "225/45R17"
