from __future__ import annotations

import subprocess
from typing import List, Optional, Sequence, Tuple

import pytest

from arch_bootstrap.lib import links, pkg
from arch_bootstrap.lib.command import CmdResult, CommandError
from arch_bootstrap.lib.users import InvokingUser


class FakeRunner:
    """Records run_cmd calls; optionally executes them for real (without switching user)."""

    def __init__(self) -> None:
        self.calls: List[Tuple[List[str], Optional[InvokingUser]]] = []
        self.failures: List[Tuple[List[str], int]] = []
        self.execute = False

    def fail(self, prefix: Sequence[str], returncode: int) -> None:
        self.failures.append((list(prefix), returncode))

    def argvs(self) -> List[List[str]]:
        return [argv for argv, _ in self.calls]

    def __call__(self, argv, *, check=True, user=None, dry_run=False, **kwargs) -> CmdResult:
        argv = list(argv)
        self.calls.append((argv, user))

        returncode = 0
        for prefix, rc in self.failures:
            if argv[: len(prefix)] == prefix:
                returncode = rc
        if self.execute and not dry_run and returncode == 0:
            returncode = subprocess.run(argv, check=False).returncode

        result = CmdResult(argv=argv, returncode=returncode, stdout="", stderr="")
        if check and returncode != 0:
            raise CommandError(result)
        return result


@pytest.fixture
def runner(monkeypatch) -> FakeRunner:
    fake = FakeRunner()
    monkeypatch.setattr(pkg, "run_cmd", fake)
    monkeypatch.setattr(links, "run_cmd", fake)
    return fake


@pytest.fixture
def user(tmp_path) -> InvokingUser:
    home = tmp_path / "home" / "alice"
    home.mkdir(parents=True)
    return InvokingUser(name="alice", uid=1000, gid=1000, home=str(home), groups=(998,))
