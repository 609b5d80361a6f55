from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Sequence

from .config import ProvisionConfig
from .lib.users import InvokingUser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProvisionCtx:
    cfg: ProvisionConfig
    user: InvokingUser
    dry_run: bool = False


class Step(Protocol):
    """A single idempotent step."""

    step_id: str

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    exe = state.setdefault("execution", {})
    exe.setdefault("current_step", None)
    exe.setdefault("decisions", {})
    exe.setdefault("warnings", [])
    return state


def run_pipeline(
    *,
    ctx: ProvisionCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
) -> PipelineResult:
    """Run steps in order; the first exception stops the pipeline."""

    ran: List[str] = []
    state = ensure_defaults(state)

    for step in steps:
        state["execution"]["current_step"] = step.step_id
        logger.info("--- Running step %s ---", step.step_id)
        state = step.run(ctx, state)
        ran.append(step.step_id)

    state["execution"]["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran)
