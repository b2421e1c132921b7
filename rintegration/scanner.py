from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from diagnostics.logging_setup import get_logger

from . import versions
from .installation import RInstallation
from .platform import PlatformSpecificRFunctions

LOG = get_logger("scanner")


def _resolved(path: Path) -> Path:
    try:
        return path.resolve()
    except OSError:
        return path.absolute()


class RInstallationScanner:
    """Finds R installations under a platform's expected install roots."""

    def scan_for_r_installations(self, platform: PlatformSpecificRFunctions) -> List[RInstallation]:
        found: Dict[Path, RInstallation] = {}
        for root in platform.get_expected_install_roots():
            try:
                if not root.is_dir():
                    LOG.debug("install root %s does not exist", root)
                    continue
                candidates = list(platform.candidate_r_homes(root))
            except OSError as exc:
                LOG.warning("could not scan install root %s: %s", root, exc)
                continue
            for candidate in candidates:
                try:
                    key = _resolved(candidate)
                    if key in found:
                        continue
                    installation = self.r_home_directory_to_r_installation(platform, candidate)
                except OSError as exc:
                    LOG.warning("skipping R home candidate %s: %s", candidate, exc)
                    continue
                if installation is not None:
                    found[key] = installation

        installations = list(found.values())
        comparator = versions.get_instance()
        known = [inst for inst in installations if inst.r_version]
        unknown = [inst for inst in installations if not inst.r_version]
        known.sort(key=lambda inst: comparator.sort_key(inst.r_version or ""), reverse=True)
        unknown.sort(key=lambda inst: str(inst.r_home_directory))
        LOG.info("detected %d R installation(s)", len(installations))
        return known + unknown

    def r_home_directory_to_r_installation(
        self,
        platform: PlatformSpecificRFunctions,
        r_home_directory: Path | str,
    ) -> Optional[RInstallation]:
        directory = Path(r_home_directory).absolute()
        if not platform.is_r_home(directory):
            LOG.debug("%s is not an R home", directory)
            return None
        version = platform.detect_r_version(directory)
        if version is None:
            LOG.debug("no R version found for %s", directory)
        return RInstallation(directory, version)
