from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.links import ensure_symlink
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class LinkPathsStep:
    step_id = "60_link_paths"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        exe = state["execution"]
        created = exe["decisions"].setdefault("links", [])

        for link in ctx.cfg.links:
            skipped = ensure_symlink(link, user=ctx.user, dry_run=ctx.dry_run)
            if skipped:
                exe["warnings"].append(
                    {"link": {"source": link.source, "target": link.target}, "reason": skipped}
                )
            else:
                created.append(link.target)
        return state
