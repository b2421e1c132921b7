from __future__ import annotations

import os
from importlib import metadata
from typing import Dict

APP_NAME = "rhomeselector"
APP_VERSION = "0.3.0"
BUILD_ID_ENV = "RHOMESELECTOR_BUILD_ID"


def get_build_info() -> Dict[str, str]:
    """Installed distribution version (source checkouts report APP_VERSION) and pinned build id."""
    try:
        version = metadata.version(APP_NAME)
    except metadata.PackageNotFoundError:
        version = APP_VERSION
    return {
        "app_name": APP_NAME,
        "app_version": version,
        "build_id": (os.environ.get(BUILD_ID_ENV) or "").strip() or "dev",
    }
