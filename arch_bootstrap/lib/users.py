from __future__ import annotations

import logging
import os
import pwd
from dataclasses import dataclass
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class PrivilegeError(PermissionError):
    pass


@dataclass(frozen=True)
class InvokingUser:
    """The human operator behind the elevated session."""

    name: str
    uid: int
    gid: int
    home: str
    groups: Tuple[int, ...] = ()


def is_root() -> bool:
    return os.geteuid() == 0


def require_root() -> None:
    if not is_root():
        raise PrivilegeError("This program must be run as root. Please run it with 'sudo'.")


def _login_name() -> Optional[str]:
    # Same source as logname(1): the user logged in on the controlling terminal.
    try:
        return os.getlogin()
    except OSError:
        return None


def resolve_invoking_user(override: Optional[str] = None) -> InvokingUser:
    """Resolve the non-privileged user who started the elevated session.

    Order: explicit override, SUDO_USER, login name of the controlling terminal.
    """

    name = override or os.environ.get("SUDO_USER") or _login_name()
    if not name:
        raise PrivilegeError(
            "Unable to determine the invoking user. Run through 'sudo' or pass --user."
        )

    try:
        entry = pwd.getpwnam(name)
    except KeyError as e:
        raise PrivilegeError(f"Unknown user: {name}") from e

    if entry.pw_uid == 0:
        raise PrivilegeError(
            f"Invoking user resolved to '{name}' (uid 0). "
            "User-scoped steps must not run as root; pass --user NAME."
        )

    groups = tuple(g for g in os.getgrouplist(entry.pw_name, entry.pw_gid) if g != entry.pw_gid)
    user = InvokingUser(
        name=entry.pw_name,
        uid=entry.pw_uid,
        gid=entry.pw_gid,
        home=entry.pw_dir,
        groups=groups,
    )
    logger.info("Invoking user: %s (uid=%s home=%s)", user.name, user.uid, user.home)
    return user
