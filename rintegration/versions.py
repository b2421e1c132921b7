from __future__ import annotations

import re
import threading
from typing import Iterable, List, Optional, Tuple

_SPLIT_RE = re.compile(r"[.\-]")

# (0, n) for numeric parts and (1, text) for the rest, so numbers order first.
_Part = Tuple[int, object]


def _parts(version: str) -> List[_Part]:
    parts: List[_Part] = []
    for raw in _SPLIT_RE.split(str(version).strip()):
        if not raw:
            continue
        if raw.isdigit():
            parts.append((0, int(raw)))
        else:
            parts.append((1, raw.lower()))
    return parts


class VersionStringComparator:
    """Orders dotted version strings such as ``4.3.1`` or ``4.3-arm64``."""

    def sort_key(self, version: str) -> Tuple[_Part, ...]:
        return tuple(_parts(version))

    def compare(self, version_a: str, version_b: str) -> int:
        key_a = self.sort_key(version_a)
        key_b = self.sort_key(version_b)
        if key_a < key_b:
            return -1
        if key_a > key_b:
            return 1
        return 0

    def is_super_version_of(self, super_version: str, version: str) -> bool:
        """
        True if every part of ``super_version`` matches the leading parts of
        ``version``: "2.6" covers "2.6" and "2.6.1" but not "2.60".
        """
        super_parts = _parts(super_version)
        version_parts = _parts(version)
        if not super_parts or len(super_parts) > len(version_parts):
            return False
        return version_parts[: len(super_parts)] == super_parts

    def are_any_super_version_of(self, super_versions: Iterable[str], version: str) -> bool:
        return any(self.is_super_version_of(candidate, version) for candidate in super_versions)


_INSTANCE: Optional[VersionStringComparator] = None
_LOCK = threading.Lock()


def get_instance() -> VersionStringComparator:
    global _INSTANCE
    with _LOCK:
        if _INSTANCE is None:
            _INSTANCE = VersionStringComparator()
        return _INSTANCE
