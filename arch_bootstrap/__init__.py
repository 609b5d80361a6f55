"""Arch Linux desktop bootstrapper (Python-first, step-driven).

Core design goals:
- Linear pipeline, abort on the first failing command
- Idempotent re-runs (--needed installs, stale links replaced)
- System changes as root, user-scoped changes as the invoking user
- Package lists kept in a YAML manifest
- Centralized logging
"""

__all__ = []
