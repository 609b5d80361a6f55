from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from .users import InvokingUser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


class CommandError(RuntimeError):
    def __init__(self, result: CmdResult) -> None:
        self.result = result
        msg = f"Command failed ({result.returncode}): {_fmt_argv(result.argv)}"
        if result.stderr:
            msg += f"\n{result.stderr.strip()}"
        super().__init__(msg)

    @property
    def returncode(self) -> int:
        return self.result.returncode


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def _user_env(user: InvokingUser) -> dict[str, str]:
    return {"HOME": user.home, "USER": user.name, "LOGNAME": user.name}


def which(name: str) -> str | None:
    return shutil.which(name)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    dry_run: bool = False,
    user: InvokingUser | None = None,
    stream: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - user drops to that identity (uid, gid, supplementary groups, HOME).
    - stream leaves stdout/stderr attached to the terminal instead of capturing.
    - dry_run logs but does not execute.
    """

    argv_list = list(argv)
    if user is not None:
        logger.info("CMD [as %s] %s", user.name, _fmt_argv(argv_list))
    else:
        logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    full_env = dict(os.environ)
    kwargs = {}
    if user is not None:
        full_env.update(_user_env(user))
        kwargs = {"user": user.uid, "group": user.gid, "extra_groups": list(user.groups)}
    full_env.update(env or {})

    pipe = None if stream else subprocess.PIPE
    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            stdout=pipe,
            stderr=pipe,
            cwd=cwd,
            env=full_env,
            **kwargs,
        )
    except FileNotFoundError as e:
        # Same status a shell reports for "command not found".
        result = CmdResult(argv=argv_list, returncode=127, stdout="", stderr=str(e))
        if check:
            raise CommandError(result) from e
        return result

    stdout = p.stdout or ""
    stderr = p.stderr or ""
    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    result = CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)
    if check and p.returncode != 0:
        raise CommandError(result)

    return result
