from typing import Optional

from pydantic import BaseModel, ConfigDict

from fitment_calc.models.setup import Setup


class Session(BaseModel):
    """Baseline + candidate setups under comparison.

    Immutable: every update in services.session returns a new Session.
    A baseline refused for a diameter mismatch is kept in rejected_baseline
    so the caller can report it; baseline is then None.
    """

    model_config = ConfigDict(frozen=True)

    baseline: Optional[Setup] = None
    rejected_baseline: Optional[Setup] = None
    candidates: tuple[Setup, ...] = ()
    selected_id: Optional[str] = None
