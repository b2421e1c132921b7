from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Mapping, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .platform import PlatformSpecificRFunctions


@dataclass(frozen=True)
class RInstallation:
    """One R runtime found on disk. ``r_version`` is None when it could not be read."""

    r_home_directory: Path
    r_version: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.r_home_directory, Path):
            object.__setattr__(self, "r_home_directory", Path(self.r_home_directory))

    def __str__(self) -> str:
        version = self.r_version or "?"
        return f"R {version} ({self.r_home_directory})"

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "r_home": str(self.r_home_directory),
            "r_version": self.r_version,
        }


class LaunchUsing(Enum):
    SELECTED_INSTALLATION = "selected_installation"
    ENVIRONMENT = "environment"


@dataclass(frozen=True)
class RLaunchConfiguration:
    launch_using: LaunchUsing
    installation: Optional[RInstallation] = None

    def __post_init__(self) -> None:
        if self.launch_using is LaunchUsing.SELECTED_INSTALLATION and self.installation is None:
            raise ValueError("a selected-installation launch needs an installation")
        if self.launch_using is LaunchUsing.ENVIRONMENT and self.installation is not None:
            raise ValueError("an environment launch must not carry an installation")

    def build_environment(
        self,
        base_env: Optional[Mapping[str, str]] = None,
        platform: Optional["PlatformSpecificRFunctions"] = None,
    ) -> Dict[str, str]:
        """
        Return a copy of ``base_env`` (default: ``os.environ``) prepared for
        launching R. Environment launches get the copy untouched.
        """
        env = dict(os.environ if base_env is None else base_env)
        if self.launch_using is LaunchUsing.ENVIRONMENT or self.installation is None:
            return env

        r_home = self.installation.r_home_directory
        if platform is None:
            from .platform import get_platform_functions

            platform = get_platform_functions()
        bin_dir = platform.get_r_binary_directory(r_home)

        env["R_HOME"] = str(r_home)
        current_path = env.get("PATH", "")
        env["PATH"] = str(bin_dir) + (os.pathsep + current_path if current_path else "")
        return env

    def to_dict(self) -> Dict[str, object]:
        return {
            "launch_using": self.launch_using.value,
            "installation": self.installation.to_dict() if self.installation else None,
        }
