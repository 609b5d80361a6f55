from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pkg import aur_install
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class InstallAurStep:
    step_id = "50_install_aur"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        packages = ctx.cfg.aur_packages
        decisions = state["execution"]["decisions"]

        if not packages:
            logger.info("No AUR packages to install.")
            decisions["aur_packages"] = []
            return state

        logger.info(
            "Installing %d AUR packages with %s as %s",
            len(packages),
            ctx.cfg.aur_helper,
            ctx.user.name,
        )
        aur_install(ctx.cfg.aur_helper, packages, user=ctx.user, dry_run=ctx.dry_run)
        decisions["aur_packages"] = packages
        return state
