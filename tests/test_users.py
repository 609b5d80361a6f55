from __future__ import annotations

import pwd

import pytest

from arch_bootstrap.lib import users
from arch_bootstrap.lib.users import PrivilegeError, require_root, resolve_invoking_user


def _pwent(name, uid, home):
    return pwd.struct_passwd((name, "x", uid, uid, "", home, "/bin/zsh"))


@pytest.fixture
def accounts(monkeypatch):
    table = {
        "alice": _pwent("alice", 1000, "/home/alice"),
        "root": _pwent("root", 0, "/root"),
    }

    def getpwnam(name):
        return table[name]

    monkeypatch.setattr(users.pwd, "getpwnam", getpwnam)
    monkeypatch.setattr(users.os, "getgrouplist", lambda name, gid: [gid, 998])
    return table


def test_require_root_refuses_regular_user(monkeypatch):
    monkeypatch.setattr(users.os, "geteuid", lambda: 1000)

    with pytest.raises(PrivilegeError, match="sudo"):
        require_root()


def test_require_root_accepts_root(monkeypatch):
    monkeypatch.setattr(users.os, "geteuid", lambda: 0)

    require_root()


def test_privilege_error_is_a_permission_error():
    assert issubclass(PrivilegeError, PermissionError)


def test_resolve_from_sudo_user(monkeypatch, accounts):
    monkeypatch.setenv("SUDO_USER", "alice")

    user = resolve_invoking_user()

    assert user.name == "alice"
    assert user.uid == 1000
    assert user.home == "/home/alice"
    assert user.groups == (998,)


def test_override_wins_over_sudo_user(monkeypatch, accounts):
    monkeypatch.setenv("SUDO_USER", "root")

    assert resolve_invoking_user("alice").name == "alice"


def test_falls_back_to_login_name(monkeypatch, accounts):
    monkeypatch.delenv("SUDO_USER", raising=False)
    monkeypatch.setattr(users.os, "getlogin", lambda: "alice")

    assert resolve_invoking_user().name == "alice"


def test_root_is_never_the_invoking_user(monkeypatch, accounts):
    monkeypatch.setenv("SUDO_USER", "root")

    with pytest.raises(PrivilegeError, match="uid 0"):
        resolve_invoking_user()


def test_unresolvable_user(monkeypatch, accounts):
    monkeypatch.delenv("SUDO_USER", raising=False)

    def no_tty():
        raise OSError("no controlling terminal")

    monkeypatch.setattr(users.os, "getlogin", no_tty)

    with pytest.raises(PrivilegeError, match="--user"):
        resolve_invoking_user()


def test_unknown_user(monkeypatch, accounts):
    with pytest.raises(PrivilegeError, match="Unknown user"):
        resolve_invoking_user("mallory")
