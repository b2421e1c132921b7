from rintegration import versions
from rintegration.versions import VersionStringComparator


def test_compare_orders_numeric_parts_numerically() -> None:
    comparator = VersionStringComparator()
    assert comparator.compare("4.10.0", "4.9.1") > 0
    assert comparator.compare("3.6.3", "4.0.0") < 0
    assert comparator.compare("4.3.1", "4.3.1") == 0
    assert comparator.compare("4.3", "4.3.0") < 0


def test_sorted_with_sort_key_and_suffixes() -> None:
    comparator = VersionStringComparator()
    ordered = sorted(["4.3-arm64", "4.10", "3.6.3", "4.3"], key=comparator.sort_key)
    assert ordered == ["3.6.3", "4.3", "4.3-arm64", "4.10"]


def test_super_version_matches_whole_parts_only() -> None:
    comparator = VersionStringComparator()
    assert comparator.is_super_version_of("2.6", "2.6.1")
    assert comparator.is_super_version_of("2.6", "2.6")
    assert comparator.is_super_version_of("4", "4.3-arm64")
    assert not comparator.is_super_version_of("2.6", "2.60")
    assert not comparator.is_super_version_of("2.6.1", "2.6")
    assert not comparator.is_super_version_of("", "2.6")


def test_any_super_version() -> None:
    comparator = VersionStringComparator()
    assert comparator.are_any_super_version_of(["3", "4"], "4.3.1")
    assert not comparator.are_any_super_version_of(["4.2", "4.4"], "4.3.1")
    assert not comparator.are_any_super_version_of([], "4.3.1")


def test_get_instance_is_shared() -> None:
    assert versions.get_instance() is versions.get_instance()
