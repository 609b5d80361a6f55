from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pkg import pacman_install
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class InstallOfficialStep:
    step_id = "30_install_official"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        packages = ctx.cfg.official_packages
        logger.info("Installing %d official packages with pacman", len(packages))
        pacman_install(packages, dry_run=ctx.dry_run)
        state["execution"]["decisions"]["official_packages"] = packages
        return state
