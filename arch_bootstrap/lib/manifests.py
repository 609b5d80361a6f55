from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

DEFAULT_MANIFEST = "default.yaml"


def _manifests_dir() -> Path:
    # arch_bootstrap/lib/manifests.py -> arch_bootstrap/manifests
    return Path(__file__).resolve().parents[1] / "manifests"


def load_yaml(path: str | Path) -> Dict[str, Any]:
    """Load a YAML mapping from disk."""
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML required to load manifests") from e

    p = Path(path)
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Manifest must be a mapping/dict: {p}")
    return data


def default_manifest_path() -> Path:
    return _manifests_dir() / DEFAULT_MANIFEST


def load_default_manifest() -> Dict[str, Any]:
    return load_yaml(default_manifest_path())
