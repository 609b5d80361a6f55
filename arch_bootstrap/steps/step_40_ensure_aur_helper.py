from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pkg import aur_helper_present, bootstrap_aur_helper
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class EnsureAurHelperStep:
    step_id = "40_ensure_aur_helper"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        helper = ctx.cfg.aur_helper
        decisions = state["execution"]["decisions"]

        if aur_helper_present(helper):
            logger.info("%s is already installed. Skipping installation.", helper)
            decisions["aur_helper"] = "present"
            return state

        logger.info("%s is not installed. Installing %s from AUR...", helper, helper)
        bootstrap_aur_helper(
            repo_url=ctx.cfg.aur_helper_repo,
            build_deps=ctx.cfg.aur_helper_build_deps,
            user=ctx.user,
            dry_run=ctx.dry_run,
        )
        if not ctx.dry_run and not aur_helper_present(helper):
            raise RuntimeError(f"{helper} was built but is still not on PATH")

        decisions["aur_helper"] = "bootstrapped"
        return state
