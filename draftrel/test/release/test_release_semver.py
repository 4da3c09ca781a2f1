from __future__ import annotations

import pytest

from draftrel.release.semver import SemVer, parse_tag


def test_parse_tag() -> None:
    assert parse_tag("v1.2.3") == SemVer(1, 2, 3)
    assert parse_tag("v0.0.0") == SemVer(0, 0, 0)
    assert parse_tag("v10.20.30") == SemVer(10, 20, 30)


@pytest.mark.parametrize(
    "tag",
    ["1.2.3", "v1.2", "v1.2.3.4", "v1.2.3-beta.1", "v1.-2.3", "vX.Y.Z", "release-1.2.3", "v01.2.3"],
)
def test_parse_tag_rejects_non_version_tags(tag: str) -> None:
    assert parse_tag(tag) is None


def test_to_tag_roundtrip() -> None:
    assert SemVer(4, 0, 12).to_tag() == "v4.0.12"
    assert str(SemVer(4, 0, 12)) == "v4.0.12"


@pytest.mark.parametrize(
    ("base", "kind", "expected"),
    [
        (SemVer(1, 2, 3), "major", SemVer(2, 0, 0)),
        (SemVer(1, 2, 3), "minor", SemVer(1, 3, 0)),
        (SemVer(1, 2, 3), "patch", SemVer(1, 2, 4)),
        (SemVer(0, 0, 0), "patch", SemVer(0, 0, 1)),
        (SemVer(0, 9, 9), "minor", SemVer(0, 10, 0)),
    ],
)
def test_bump(base: SemVer, kind: str, expected: SemVer) -> None:
    bumped = base.bump(kind)  # type: ignore[arg-type]
    assert bumped == expected
    assert bumped > base


def test_ordering_is_lexicographic() -> None:
    assert SemVer(1, 10, 0) > SemVer(1, 9, 99)
    assert SemVer(2, 0, 0) > SemVer(1, 99, 99)
    assert sorted([SemVer(1, 0, 1), SemVer(0, 9, 0), SemVer(1, 0, 0)]) == [
        SemVer(0, 9, 0),
        SemVer(1, 0, 0),
        SemVer(1, 0, 1),
    ]
