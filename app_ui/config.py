# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] Config loading (defaults/roaming)
# [NAV-20] Public getters
# [NAV-99] End
# =============================================================================

# === [NAV-00] Imports / constants ============================================
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional

from diagnostics.logging_setup import get_logger
from rintegration.platform import DEFAULT_SUPPORTED_R_VERSIONS

CONFIG_PATH = Path("data/roaming/r_config.json")
_DEFAULT_R_CONFIG = {
    "supported_r_versions": list(DEFAULT_SUPPORTED_R_VERSIONS),
    "extra_install_roots": [],
    "warn_about_no_installations": True,
    "last_r_home": None,
}

LOG = get_logger("config")


def _defaults() -> Dict:
    return json.loads(json.dumps(_DEFAULT_R_CONFIG))


# === [NAV-10] Config loading (defaults/roaming) ===============================
def load_r_config(path: Optional[Path] = None) -> Dict:
    path = path or CONFIG_PATH
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(_DEFAULT_R_CONFIG, indent=2), encoding="utf-8")
        return _defaults()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:
        LOG.warning("unreadable config %s, using defaults: %s", path, exc)
        return _defaults()
    if not isinstance(data, dict):
        return _defaults()
    for key, value in _defaults().items():
        data.setdefault(key, value)
    return data


def save_r_config(data: Dict, path: Optional[Path] = None) -> None:
    path = path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# === [NAV-20] Public getters ==================================================
def get_supported_r_versions(config: Optional[Dict] = None) -> List[str]:
    config = config if config is not None else load_r_config()
    raw = config.get("supported_r_versions")
    if not isinstance(raw, list):
        return list(DEFAULT_SUPPORTED_R_VERSIONS)
    return [str(item) for item in raw if str(item).strip()]


def get_extra_install_roots(config: Optional[Dict] = None) -> List[Path]:
    config = config if config is not None else load_r_config()
    raw = config.get("extra_install_roots")
    if not isinstance(raw, list):
        return []
    return [Path(str(item)) for item in raw if str(item).strip()]


def get_warn_about_no_installations(config: Optional[Dict] = None) -> bool:
    config = config if config is not None else load_r_config()
    return bool(config.get("warn_about_no_installations", True))


def get_last_r_home(config: Optional[Dict] = None) -> Optional[Path]:
    config = config if config is not None else load_r_config()
    value = config.get("last_r_home")
    if not value or not str(value).strip():
        return None
    return Path(str(value))


def remember_r_home(r_home: Optional[Path], path: Optional[Path] = None) -> None:
    config = load_r_config(path)
    config["last_r_home"] = str(r_home) if r_home else None
    save_r_config(config, path)


# === [NAV-99] End =============================================================
__all__ = [
    "CONFIG_PATH",
    "load_r_config",
    "save_r_config",
    "get_supported_r_versions",
    "get_extra_install_roots",
    "get_warn_about_no_installations",
    "get_last_r_home",
    "remember_r_home",
]
