from __future__ import annotations

import os
import platform as _platform
import re
import subprocess
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from diagnostics.logging_setup import get_logger

LOG = get_logger("platform")

DEFAULT_SUPPORTED_R_VERSIONS = ["3", "4"]
R_VERSION_TIMEOUT_S = 5.0

_DEFINE_RE = re.compile(r'^\s*#\s*define\s+(R_MAJOR|R_MINOR)\s+"([^"]*)"', re.MULTILINE)
_DIR_VERSION_RE = re.compile(r"^(?:R-)?(\d+(?:\.\d+)+)")
_CLI_VERSION_RE = re.compile(r"R version (\d+(?:\.\d+)+)")


class PlatformSpecificRFunctions:
    """
    Install layout and version policy for R on one operating system.

    Subclasses fill in where installations live and how an R home is laid
    out; version detection is shared.
    """

    name = "generic"
    executable_name = "R"

    def __init__(
        self,
        *,
        extra_install_roots: Optional[Iterable[str | Path]] = None,
        supported_r_versions: Optional[Iterable[str]] = None,
    ) -> None:
        self._extra_install_roots = [Path(root) for root in (extra_install_roots or [])]
        if supported_r_versions is None:
            self._supported = list(DEFAULT_SUPPORTED_R_VERSIONS)
        else:
            self._supported = [str(v).strip() for v in supported_r_versions if str(v).strip()]

    # --- policy --------------------------------------------------------------
    def default_install_roots(self) -> List[Path]:
        return []

    def get_expected_install_roots(self) -> List[Path]:
        roots: List[Path] = []
        for root in self.default_install_roots() + self._extra_install_roots:
            if root not in roots:
                roots.append(root)
        return roots

    def get_supported_r_super_versions(self) -> List[str]:
        return list(self._supported)

    # --- layout --------------------------------------------------------------
    def candidate_r_homes(self, install_root: Path) -> Iterator[Path]:
        yield install_root

    def get_r_binary_directory(self, r_home: Path) -> Path:
        return Path(r_home) / "bin"

    def get_r_executable(self, r_home: Path) -> Path:
        return self.get_r_binary_directory(r_home) / self.executable_name

    def is_r_home(self, directory: Path) -> bool:
        try:
            return Path(directory).is_dir() and self.get_r_executable(directory).is_file()
        except OSError:
            return False

    # --- versions ------------------------------------------------------------
    def detect_r_version(self, r_home: Path) -> Optional[str]:
        r_home = Path(r_home)
        version = self._version_from_header(r_home)
        if version:
            return version
        version = self._version_from_path(r_home)
        if version:
            return version
        return self._version_from_executable(r_home)

    def _version_from_header(self, r_home: Path) -> Optional[str]:
        header = r_home / "include" / "Rversion.h"
        try:
            if not header.is_file():
                return None
            text = header.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            LOG.warning("could not read %s: %s", header, exc)
            return None
        values = dict(_DEFINE_RE.findall(text))
        major = values.get("R_MAJOR", "").strip()
        minor = values.get("R_MINOR", "").strip()
        if not major:
            return None
        return f"{major}.{minor}" if minor else major

    def _version_from_path(self, r_home: Path) -> Optional[str]:
        for part in [r_home, *list(r_home.parents)[:2]]:
            match = _DIR_VERSION_RE.match(part.name)
            if match:
                return match.group(1)
        return None

    def _version_from_executable(self, r_home: Path) -> Optional[str]:
        try:
            executable = self.get_r_executable(r_home)
            if not executable.is_file():
                return None
        except OSError as exc:
            LOG.warning("could not inspect the R executable under %s: %s", r_home, exc)
            return None
        env = dict(os.environ)
        env["R_HOME"] = str(r_home)
        try:
            result = subprocess.run(
                [str(executable), "--version"],
                capture_output=True,
                text=True,
                timeout=R_VERSION_TIMEOUT_S,
                env=env,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            LOG.debug("running %s --version failed: %s", executable, exc)
            return None
        match = _CLI_VERSION_RE.search((result.stdout or "") + (result.stderr or ""))
        return match.group(1) if match else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(roots={self.get_expected_install_roots()!r})"


class WindowsRFunctions(PlatformSpecificRFunctions):
    name = "windows"
    executable_name = "R.exe"

    def default_install_roots(self) -> List[Path]:
        roots = []
        for var, fallback in (
            ("ProgramFiles", r"C:\Program Files"),
            ("ProgramFiles(x86)", r"C:\Program Files (x86)"),
        ):
            roots.append(Path(os.environ.get(var) or fallback) / "R")
        return roots

    def candidate_r_homes(self, install_root: Path) -> Iterator[Path]:
        for child in sorted(install_root.iterdir()):
            if child.is_dir() and child.name.startswith("R-"):
                yield child

    def get_r_binary_directory(self, r_home: Path) -> Path:
        x64 = Path(r_home) / "bin" / "x64"
        if x64.is_dir():
            return x64
        return Path(r_home) / "bin"


class MacRFunctions(PlatformSpecificRFunctions):
    name = "macos"

    def default_install_roots(self) -> List[Path]:
        return [Path("/Library/Frameworks/R.framework/Versions")]

    def candidate_r_homes(self, install_root: Path) -> Iterator[Path]:
        for child in sorted(install_root.iterdir()):
            # "Current" is a symlink to one of the numbered versions
            if child.name == "Current":
                continue
            resources = child / "Resources"
            if resources.is_dir():
                yield resources


class UnixRFunctions(PlatformSpecificRFunctions):
    name = "linux"

    def default_install_roots(self) -> List[Path]:
        return [Path("/usr/lib"), Path("/usr/local/lib"), Path("/opt/R")]

    def candidate_r_homes(self, install_root: Path) -> Iterator[Path]:
        direct = install_root / "R"
        if direct.is_dir():
            yield direct
        for child in sorted(install_root.iterdir()):
            if not child.is_dir() or not _DIR_VERSION_RE.match(child.name):
                continue
            for lib in ("lib", "lib64"):
                nested = child / lib / "R"
                if nested.is_dir():
                    yield nested


def get_platform_functions(
    system: Optional[str] = None,
    *,
    extra_install_roots: Optional[Iterable[str | Path]] = None,
    supported_r_versions: Optional[Iterable[str]] = None,
) -> PlatformSpecificRFunctions:
    system = (system or _platform.system() or "").strip().lower()
    if system.startswith("win"):
        cls = WindowsRFunctions
    elif system in ("darwin", "mac", "macos"):
        cls = MacRFunctions
    else:
        cls = UnixRFunctions
    return cls(
        extra_install_roots=extra_install_roots,
        supported_r_versions=supported_r_versions,
    )
