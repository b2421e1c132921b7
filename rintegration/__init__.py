"""R runtime discovery: installations, version policy and launch decisions."""

from .installation import LaunchUsing, RInstallation, RLaunchConfiguration
from .platform import PlatformSpecificRFunctions, get_platform_functions
from .scanner import RInstallationScanner
from .versions import VersionStringComparator

__all__ = [
    "LaunchUsing",
    "RInstallation",
    "RLaunchConfiguration",
    "PlatformSpecificRFunctions",
    "get_platform_functions",
    "RInstallationScanner",
    "VersionStringComparator",
]
