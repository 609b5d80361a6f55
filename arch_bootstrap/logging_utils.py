from __future__ import annotations

import logging
import os
from pathlib import Path

DEFAULT_LOG_PATH = "/var/log/arch-bootstrap.log"
FALLBACK_LOG_NAME = "arch-bootstrap.log"

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"

_CONFIGURED_ATTR = "_arch_bootstrap_log_path"


def _open_log_file(log_path: str) -> tuple[logging.Handler, str]:
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return logging.FileHandler(fallback), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    file_level: int = logging.INFO,
    console_level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Attach a log file and a console handler to the root logger.

    The file keeps timestamps and logger names and can go down to DEBUG
    (captured command output). The console only shows what the operator
    watching the run needs. If log_path cannot be opened, a file in the
    working directory is used instead.

    Only the first call installs handlers; later calls adjust levels.
    Returns the path of the file actually written.
    """

    root = logging.getLogger()
    root.setLevel(min(file_level, console_level))

    chosen_path = getattr(root, _CONFIGURED_ATTR, None)
    if chosen_path is not None:
        return chosen_path

    file_handler, chosen_path = _open_log_file(log_path)
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setLevel(console_level)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root.addHandler(console)

    setattr(root, _CONFIGURED_ATTR, chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
