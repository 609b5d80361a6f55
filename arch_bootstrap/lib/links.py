from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .command import run_cmd
from .users import InvokingUser

logger = logging.getLogger(__name__)

SOURCE_MISSING = "source_missing"
TARGET_NOT_SYMLINK = "target_not_symlink"


@dataclass(frozen=True)
class LinkSpec:
    source: str
    target: str


def ensure_symlink(
    link: LinkSpec,
    *,
    user: Optional[InvokingUser] = None,
    dry_run: bool = False,
) -> Optional[str]:
    """Point link.target at link.source, replacing a stale symlink.

    Returns None when the link is in place, otherwise the reason it was skipped.
    Filesystem changes run as user.
    """

    logger.info("Creating symlink: %s -> %s", link.target, link.source)

    if not os.path.isdir(link.source):
        logger.warning(
            "Source directory '%s' does not exist. Skipping symlink creation.", link.source
        )
        return SOURCE_MISSING

    if os.path.lexists(link.target) and not os.path.islink(link.target):
        logger.warning("'%s' exists and is not a symlink. Leaving it untouched.", link.target)
        return TARGET_NOT_SYMLINK

    parent = os.path.dirname(link.target) or "."
    run_cmd(["mkdir", "-p", parent], user=user, dry_run=dry_run)

    if os.path.islink(link.target):
        run_cmd(["rm", link.target], user=user, dry_run=dry_run)

    run_cmd(["ln", "-s", link.source, link.target], user=user, dry_run=dry_run)
    logger.info("Symlink created successfully.")
    return None
