from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from .config import ConfigError, load_config
from .lib.command import CommandError
from .lib.users import PrivilegeError, require_root, resolve_invoking_user
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import ProvisionCtx, run_pipeline
from .steps import (
    EnsureAurHelperStep,
    InstallAurStep,
    InstallOfficialStep,
    LinkPathsStep,
    NextStepsStep,
    UpdateSystemStep,
)

logger = logging.getLogger(__name__)


EXIT_PRIVILEGE = 1
EXIT_CONFIG = 2


def build_steps():
    return [
        UpdateSystemStep(),
        InstallOfficialStep(),
        EnsureAurHelperStep(),
        InstallAurStep(),
        LinkPathsStep(),
        NextStepsStep(),
    ]


def run(
    *,
    config_path: Optional[str] = None,
    log_path: str = DEFAULT_LOG_PATH,
    user_name: Optional[str] = None,
    dry_run: bool = False,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Provision the machine. Raises on the first failing step."""

    # Checked before logging is configured: a refused run must not touch the filesystem.
    require_root()

    actual_log_path = configure_logging(
        log_path=log_path, file_level=logging.DEBUG if verbose else logging.INFO
    )

    logger.info("Starting Arch Linux package installation...")
    logger.info("This will install a mix of official and AUR packages.")
    logger.info("You may be prompted for your password multiple times during the process.")

    user = resolve_invoking_user(user_name)
    cfg = load_config(config_path, home=user.home)
    ctx = ProvisionCtx(cfg=cfg, user=user, dry_run=dry_run)

    state: Dict[str, Any] = {"execution": {"paths": {"log_path_actual": actual_log_path}}}

    result = run_pipeline(ctx=ctx, state=state, steps=build_steps())
    state = result.state
    state["execution"]["ran_steps"] = result.ran_steps
    for w in state["execution"]["warnings"]:
        logger.warning("Skipped: %s", w)
    logger.info("--- Installation complete! ---")
    return state


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="arch-bootstrap",
        description="Install official and AUR packages and link dotfiles. Run with sudo.",
    )
    p.add_argument("--config", default=None, help="YAML manifest (defaults to the bundled one)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the log file")
    p.add_argument("--user", default=None, help="Run user-scoped steps as this user (default: SUDO_USER)")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument("--verbose", action="store_true", help="Write captured command output to the log file")

    args = p.parse_args(argv)

    try:
        run(
            config_path=args.config,
            log_path=args.log,
            user_name=args.user,
            dry_run=bool(args.dry_run),
            verbose=bool(args.verbose),
        )
    except PrivilegeError as e:
        logger.error("%s", e)
        return EXIT_PRIVILEGE
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return EXIT_CONFIG
    except CommandError as e:
        logger.error("%s", e)
        # Negative return codes mean "killed by signal"; report them the way a shell does.
        return e.returncode if e.returncode > 0 else 128 - e.returncode
    except Exception:
        logger.exception("Provisioning failed")
        raise
    return 0
