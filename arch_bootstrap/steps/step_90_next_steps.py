from __future__ import annotations

import logging
from typing import Any, Dict

from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class NextStepsStep:
    step_id = "90_next_steps"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        notes = ctx.cfg.post_install_notes
        if notes:
            logger.info("Additional steps you may want to take:")
            for i, note in enumerate(notes, start=1):
                logger.info("%d. %s", i, note)
        return state
