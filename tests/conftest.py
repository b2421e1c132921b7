from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from rintegration.platform import UnixRFunctions  # noqa: E402


class IsolatedUnixRFunctions(UnixRFunctions):
    """Unix layout that only looks at the roots it is given."""

    def default_install_roots(self) -> List[Path]:
        return []


def write_r_home(r_home: Path, version: Optional[str] = "4.3.1") -> Path:
    (r_home / "bin").mkdir(parents=True, exist_ok=True)
    (r_home / "bin" / "R").write_text("", encoding="utf-8")
    if version is not None:
        major, _, minor = version.partition(".")
        (r_home / "include").mkdir(parents=True, exist_ok=True)
        (r_home / "include" / "Rversion.h").write_text(
            "/* Rversion.h */\n"
            f'#define R_MAJOR  "{major}"\n'
            f'#define R_MINOR  "{minor}"\n'
            '#define R_STATUS ""\n',
            encoding="utf-8",
        )
    return r_home


@pytest.fixture()
def make_r_home() -> Callable[..., Path]:
    return write_r_home


@pytest.fixture()
def make_platform() -> Callable[..., IsolatedUnixRFunctions]:
    def _make(
        roots: Iterable[Path] = (),
        supported: Optional[Iterable[str]] = None,
    ) -> IsolatedUnixRFunctions:
        return IsolatedUnixRFunctions(
            extra_install_roots=list(roots),
            supported_r_versions=supported,
        )

    return _make


class MessageRecorder:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, str, str]] = []

    def __call__(self, _parent, title: str, message: str, level: str) -> None:
        self.calls.append((title, message, level))

    @property
    def titles(self) -> List[str]:
        return [title for title, _message, _level in self.calls]


@pytest.fixture()
def messages() -> MessageRecorder:
    return MessageRecorder()


@pytest.fixture()
def qapp():
    from PyQt6 import QtWidgets

    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app
