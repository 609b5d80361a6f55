from __future__ import annotations

import logging
import os
import shutil
import tempfile
from typing import Sequence

from .command import CommandError, run_cmd, which
from .users import InvokingUser

logger = logging.getLogger(__name__)


class PackageManagerError(CommandError):
    pass


def _run_pkg(argv: Sequence[str], **kwargs) -> None:
    try:
        run_cmd(argv, stream=True, **kwargs)
    except CommandError as e:
        raise PackageManagerError(e.result) from e


def pacman_upgrade(*, dry_run: bool = False) -> None:
    _run_pkg(["pacman", "-Syu", "--noconfirm"], dry_run=dry_run)


def pacman_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    _run_pkg(["pacman", "-S", "--noconfirm", "--needed", *packages], dry_run=dry_run)


def aur_helper_present(helper: str) -> bool:
    return which(helper) is not None


def aur_install(
    helper: str,
    packages: Sequence[str],
    *,
    user: InvokingUser,
    dry_run: bool = False,
) -> None:
    """Install AUR packages through the helper, never as root.

    The helper escalates through sudo on its own when it needs to.
    """
    if not packages:
        return
    _run_pkg([helper, "-S", "--noconfirm", "--needed", *packages], user=user, dry_run=dry_run)


def bootstrap_aur_helper(
    *,
    repo_url: str,
    build_deps: Sequence[str],
    user: InvokingUser,
    dry_run: bool = False,
) -> None:
    """Clone the helper's AUR recipe into a temp dir and build/install it.

    makepkg refuses to run as root, so the clone and the build run as the
    invoking user. The temp dir is removed on every exit path.
    """

    pacman_install(build_deps, dry_run=dry_run)

    if dry_run:
        run_cmd(["git", "clone", repo_url, "<tempdir>"], user=user, dry_run=True)
        run_cmd(["makepkg", "-si", "--noconfirm"], user=user, dry_run=True)
        return

    temp_dir = tempfile.mkdtemp(prefix="aur-helper-")
    try:
        os.chown(temp_dir, user.uid, user.gid)
        run_cmd(["git", "clone", repo_url, temp_dir], user=user, stream=True)
        _run_pkg(["makepkg", "-si", "--noconfirm"], cwd=temp_dir, user=user)
    finally:
        try:
            shutil.rmtree(temp_dir)
        except OSError as e:
            logger.warning("Could not remove build directory %s: %s", temp_dir, e)
