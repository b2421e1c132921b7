from pathlib import Path

from rintegration.installation import RInstallation
from rintegration.scanner import RInstallationScanner


def test_scan_orders_newest_first_and_unknown_last(
    tmp_path: Path, make_r_home, make_platform, monkeypatch
) -> None:
    root = tmp_path / "opt"
    make_r_home(root / "4.1.0" / "lib" / "R", "4.1.0")
    make_r_home(root / "4.10.1" / "lib" / "R", "4.10.1")
    make_r_home(root / "4.3.1" / "lib" / "R", "4.3.1")
    (root / "4.0.0" / "lib" / "R").mkdir(parents=True)
    unknown = make_r_home(tmp_path / "other" / "R", None)

    platform = make_platform([root, tmp_path / "other", tmp_path / "missing"])
    monkeypatch.setattr(platform, "_version_from_executable", lambda _home: None)
    found = RInstallationScanner().scan_for_r_installations(platform)

    assert [inst.r_version for inst in found] == ["4.10.1", "4.3.1", "4.1.0", None]
    assert found[-1].r_home_directory == unknown.absolute()


def test_scan_drops_duplicate_roots(tmp_path: Path, make_r_home, make_platform) -> None:
    make_r_home(tmp_path / "R", "4.3.1")
    link_root = tmp_path / "alias"
    link_root.symlink_to(tmp_path, target_is_directory=True)
    found = RInstallationScanner().scan_for_r_installations(make_platform([tmp_path, link_root]))
    assert len(found) == 1


def test_scan_with_no_roots(make_platform) -> None:
    assert RInstallationScanner().scan_for_r_installations(make_platform()) == []


def test_directory_to_installation(tmp_path: Path, make_r_home, make_platform) -> None:
    scanner = RInstallationScanner()
    r_home = make_r_home(tmp_path / "R", "3.6.3")
    assert scanner.r_home_directory_to_r_installation(make_platform(), str(r_home)) == RInstallation(
        r_home, "3.6.3"
    )
    assert scanner.r_home_directory_to_r_installation(make_platform(), tmp_path / "nope") is None


def _raise_for(path_type, name: str, blocked: Path, monkeypatch) -> None:
    original = getattr(path_type, name)

    def guarded(self, *args, **kwargs):
        if self == blocked:
            raise PermissionError(13, "Permission denied", str(self))
        return original(self, *args, **kwargs)

    monkeypatch.setattr(path_type, name, guarded)


def test_unreadable_root_is_skipped(tmp_path: Path, make_r_home, make_platform, monkeypatch, caplog) -> None:
    locked = tmp_path / "locked" / "root"
    open_root = tmp_path / "open"
    make_r_home(open_root / "4.3.1" / "lib" / "R", "4.3.1")
    _raise_for(type(tmp_path), "is_dir", locked, monkeypatch)

    found = RInstallationScanner().scan_for_r_installations(make_platform([locked, open_root]))

    assert [inst.r_version for inst in found] == ["4.3.1"]
    assert any(str(locked) in record.getMessage() for record in caplog.records)


def test_failing_candidate_does_not_abort_scan(
    tmp_path: Path, make_r_home, make_platform, monkeypatch
) -> None:
    root = tmp_path / "opt"
    bad = make_r_home(root / "4.1.0" / "lib" / "R", "4.1.0")
    make_r_home(root / "4.3.1" / "lib" / "R", "4.3.1")
    platform = make_platform([root])
    detect = platform.detect_r_version

    def flaky_detect(r_home):
        if Path(r_home) == bad.absolute():
            raise PermissionError(13, "Permission denied", str(r_home))
        return detect(r_home)

    monkeypatch.setattr(platform, "detect_r_version", flaky_detect)
    found = RInstallationScanner().scan_for_r_installations(platform)
    assert [inst.r_version for inst in found] == ["4.3.1"]
