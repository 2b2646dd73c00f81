"""Session orchestration: baseline acceptance, candidate list and selection.

A Session is immutable; each function returns an updated copy.
"""

import logging

from fitment_calc.core.enums import BaselineState
from fitment_calc.models.session import Session
from fitment_calc.models.setup import Setup

logger = logging.getLogger(__name__)


def baseline_state(session: Session) -> BaselineState:
    if session.baseline is not None:
        return BaselineState.VALID
    if session.rejected_baseline is not None:
        return BaselineState.REJECTED
    return BaselineState.ABSENT


def apply_baseline(session: Session, setup: Setup) -> Session:
    """Accept setup as the baseline unless it has a diameter mismatch.

    A mismatched setup clears the current baseline and is kept as
    rejected_baseline so the caller can surface the error.
    """
    if not setup.is_valid:
        logger.warning("Baseline %s rejected: diameter mismatch", setup.setup_id)
        return session.model_copy(update={"baseline": None, "rejected_baseline": setup})
    return session.model_copy(update={"baseline": setup, "rejected_baseline": None})


def upsert_candidate(session: Session, setup: Setup) -> Session:
    """Add a candidate, or replace the one with the same setup_id in place."""
    candidates = list(session.candidates)
    for i, existing in enumerate(candidates):
        if existing.setup_id == setup.setup_id:
            candidates[i] = setup
            break
    else:
        candidates.append(setup)
    return session.model_copy(update={"candidates": tuple(candidates)})


def remove_candidate(session: Session, setup_id: str) -> Session:
    candidates = tuple(s for s in session.candidates if s.setup_id != setup_id)
    selected_id = None if session.selected_id == setup_id else session.selected_id
    return session.model_copy(update={"candidates": candidates, "selected_id": selected_id})


def select_candidate(session: Session, setup_id: str | None) -> Session:
    return session.model_copy(update={"selected_id": setup_id})


def valid_candidates(session: Session) -> list[Setup]:
    """Candidates that can be compared: no mismatch, tire and wheel geometry present."""
    return [s for s in session.candidates if s.is_complete]


def invalid_candidates(session: Session) -> list[Setup]:
    """Candidates carrying a diameter mismatch (blocking errors)."""
    return [s for s in session.candidates if not s.is_valid]


def selected_candidate(session: Session) -> Setup | None:
    """The selected candidate, falling back to the first comparable one."""
    comparable = valid_candidates(session)
    for setup in comparable:
        if setup.setup_id == session.selected_id:
            return setup
    return comparable[0] if comparable else None
