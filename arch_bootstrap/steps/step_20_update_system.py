from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pkg import pacman_upgrade
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class UpdateSystemStep:
    step_id = "20_update_system"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("Updating system packages")
        pacman_upgrade(dry_run=ctx.dry_run)
        return state
