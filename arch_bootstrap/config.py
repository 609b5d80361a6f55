from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .lib.links import LinkSpec
from .lib.manifests import load_default_manifest, load_yaml

logger = logging.getLogger(__name__)


DEFAULT_AUR_HELPER = "yay"
DEFAULT_AUR_HELPER_REPO = "https://aur.archlinux.org/yay.git"
DEFAULT_BUILD_DEPS = ["base-devel", "git"]


class ConfigError(ValueError):
    pass


def _str_list(raw: Any, where: str) -> List[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigError(f"{where} must be a list")
    if not all(isinstance(p, str) for p in raw):
        raise ConfigError(f"{where} entries must be strings")
    out = [p.strip() for p in raw]
    return [p for p in out if p]


def _dedup(items: List[str]) -> List[str]:
    # De-dup while preserving order
    dedup: List[str] = []
    for item in items:
        if item not in dedup:
            dedup.append(item)
    return dedup


def _expand_home(path: str, home: str) -> str:
    if path == "~":
        return home
    if path.startswith("~/"):
        return os.path.join(home, path[2:])
    return path


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any]
    home: str

    @property
    def official_packages(self) -> List[str]:
        return _dedup(self._package_list("official"))

    @property
    def aur_packages(self) -> List[str]:
        return _dedup(self._package_list("aur"))

    def _package_list(self, kind: str) -> List[str]:
        packages = self.raw.get("packages") or {}
        if not isinstance(packages, dict):
            raise ConfigError("packages must be a mapping")
        return _str_list(packages.get(kind), f"packages.{kind}")

    def _helper_section(self) -> Dict[str, Any]:
        section = self.raw.get("aur_helper") or {}
        if not isinstance(section, dict):
            raise ConfigError("aur_helper must be a mapping")
        return section

    @property
    def aur_helper(self) -> str:
        return str(self._helper_section().get("name") or DEFAULT_AUR_HELPER)

    @property
    def aur_helper_repo(self) -> str:
        return str(self._helper_section().get("repo") or DEFAULT_AUR_HELPER_REPO)

    @property
    def aur_helper_build_deps(self) -> List[str]:
        deps = self._helper_section().get("build_deps")
        if deps is None:
            return list(DEFAULT_BUILD_DEPS)
        return _str_list(deps, "aur_helper.build_deps")

    @property
    def links(self) -> List[LinkSpec]:
        raw_links = self.raw.get("links") or []
        if not isinstance(raw_links, list):
            raise ConfigError("links must be a list")
        out: List[LinkSpec] = []
        for i, entry in enumerate(raw_links):
            if not isinstance(entry, dict) or not entry.get("source") or not entry.get("target"):
                raise ConfigError(f"links[{i}] needs both 'source' and 'target'")
            out.append(
                LinkSpec(
                    source=_expand_home(str(entry["source"]), self.home),
                    target=_expand_home(str(entry["target"]), self.home),
                )
            )
        return out

    @property
    def post_install_notes(self) -> List[str]:
        return _str_list(self.raw.get("post_install_notes"), "post_install_notes")

    def validate(self) -> None:
        for kind in ("official", "aur"):
            listed = self._package_list(kind)
            for pkg in sorted({p for p in listed if listed.count(p) > 1}):
                logger.warning("Duplicate entry %r in packages.%s ignored", pkg, kind)

        overlap = sorted(set(self.official_packages) & set(self.aur_packages))
        if overlap:
            raise ConfigError(
                "Packages listed as both official and AUR: " + ", ".join(overlap)
            )
        # Touch the remaining sections so shape errors surface before any step runs.
        _ = (
            self.aur_helper,
            self.aur_helper_repo,
            self.aur_helper_build_deps,
            self.links,
            self.post_install_notes,
        )


def load_config(path: Optional[str] = None, *, home: str) -> ProvisionConfig:
    """Load the manifest at path, or the packaged default when path is None."""

    try:
        raw = load_yaml(path) if path else load_default_manifest()
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except (OSError, ValueError) as e:
        raise ConfigError(str(e)) from e

    cfg = ProvisionConfig(raw=raw, home=home)
    cfg.validate()
    logger.info(
        "Loaded manifest %s (official=%d aur=%d links=%d)",
        path or "<default>",
        len(cfg.official_packages),
        len(cfg.aur_packages),
        len(cfg.links),
    )
    return cfg
