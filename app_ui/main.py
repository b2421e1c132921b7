# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] Startup helpers (config, platform, initial selection)
# [NAV-20] Selector session (dialog + blocked caller)
# [NAV-30] Output
# [NAV-99] main() entrypoint
# =============================================================================

# === [NAV-00] Imports / constants ============================================
# region NAV-00 Imports / constants
from __future__ import annotations

import argparse
import json
import shlex
import sys
import threading
from pathlib import Path
from typing import Dict, List, Optional

from PyQt6 import QtWidgets

from diagnostics.logging_setup import configure_logging, get_logger
from rintegration.installation import LaunchUsing, RInstallation, RLaunchConfiguration
from rintegration.platform import PlatformSpecificRFunctions, get_platform_functions
from rintegration.scanner import RInstallationScanner

from . import config as r_config
from .r_home_dialog import RHomeSelectorDialog
from .versioning import get_build_info

LOG = get_logger("main")
WAITER_JOIN_TIMEOUT_S = 5.0
# endregion


# === [NAV-10] Startup helpers ================================================
# region NAV-10 Startup helpers
def build_platform(config: Dict) -> PlatformSpecificRFunctions:
    return get_platform_functions(
        extra_install_roots=r_config.get_extra_install_roots(config),
        supported_r_versions=r_config.get_supported_r_versions(config),
    )


def resolve_initial_installation(
    platform: PlatformSpecificRFunctions,
    scanner: RInstallationScanner,
    initial: Optional[Path],
) -> Optional[RInstallation]:
    if initial is None:
        return None
    installation = scanner.r_home_directory_to_r_installation(platform, initial)
    if installation is None:
        LOG.info("ignoring initial R home %s: not an R installation", initial)
    return installation
# endregion


# === [NAV-20] Selector session ===============================================
# region NAV-20 Selector session
def run_selector_session(
    platform: PlatformSpecificRFunctions,
    *,
    warn_about_no_installations: bool,
    initial_installation: Optional[RInstallation] = None,
) -> Optional[RLaunchConfiguration]:
    """Show the dialog while a worker thread blocks on the panel's decision."""
    dialog = RHomeSelectorDialog(
        platform,
        warn_about_no_installations=warn_about_no_installations,
        initial_installation=initial_installation,
    )
    outcome: Dict[str, Optional[RLaunchConfiguration]] = {}

    def _wait_for_decision() -> None:
        outcome["config"] = dialog.panel.get_selected_launch_configuration()

    waiter = threading.Thread(target=_wait_for_decision, name="r-home-waiter", daemon=True)
    waiter.start()
    dialog.exec()
    waiter.join(WAITER_JOIN_TIMEOUT_S)
    if waiter.is_alive():
        LOG.error("selector closed without delivering a launch configuration")
        return None
    return outcome.get("config")
# endregion


# === [NAV-30] Output ==========================================================
# region NAV-30 Output
def format_installations(installations: List[RInstallation]) -> List[str]:
    return [f"{inst.r_version or '?':<12} {inst.r_home_directory}" for inst in installations]


def format_environment(
    launch: RLaunchConfiguration,
    platform: PlatformSpecificRFunctions,
) -> List[str]:
    if launch.launch_using is LaunchUsing.ENVIRONMENT:
        return ["# using R_HOME and PATH from the environment"]
    env = launch.build_environment(platform=platform)
    return [f"export {key}={shlex.quote(env[key])}" for key in ("R_HOME", "PATH")]
# endregion


# === [NAV-99] main() entrypoint =============================================
# region NAV-99 main()
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pick the R installation used to launch R.")
    parser.add_argument("--initial", type=Path, default=None, help="R home to preselect")
    parser.add_argument("--no-warn", action="store_true", help="Don't warn when no R is detected")
    parser.add_argument("--list", action="store_true", help="Print detected installations and exit")
    parser.add_argument("--print-env", action="store_true", help="Print shell exports for the choice")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.version:
        info = get_build_info()
        print(f"rhomeselector {info['app_version']} ({info['build_id']})")
        return 0

    log_info = configure_logging()
    LOG.info("starting; log at %s", log_info["log_path"])
    config = r_config.load_r_config()
    platform = build_platform(config)
    scanner = RInstallationScanner()

    if args.list:
        for line in format_installations(scanner.scan_for_r_installations(platform)):
            print(line)
        return 0

    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
    initial = resolve_initial_installation(
        platform,
        scanner,
        args.initial or r_config.get_last_r_home(config),
    )
    warn = r_config.get_warn_about_no_installations(config) and not args.no_warn
    launch = run_selector_session(
        platform,
        warn_about_no_installations=warn,
        initial_installation=initial,
    )
    app.processEvents()

    if launch is None:
        LOG.info("R home selection cancelled")
        return 1
    if launch.installation is not None:
        r_config.remember_r_home(launch.installation.r_home_directory)
    LOG.info("selected launch configuration: %s", launch.to_dict())

    if args.print_env:
        for line in format_environment(launch, platform):
            print(line)
    else:
        print(json.dumps(launch.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
# endregion
