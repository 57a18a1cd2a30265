import pytest

from vfs_platform.services.filesystem import paths


@pytest.mark.parametrize(
    "elem, expected",
    [
        (("a", "b"), "a/b"),
        (("a", "/b"), "a/b"),
        (("/", "a", "b/"), "/a/b"),
        (("a", "", "b"), "a/b"),
        (("a/./b",), "a/b"),
        (("", ""), ""),
        (("/", "/"), "/"),
    ],
)
def test_join(elem, expected):
    assert paths.join(*elem) == expected


def test_split_drops_empty_and_dot_segments():
    assert paths.split("/a//b/./c") == ["a", "b", "c"]
    assert paths.split("/") == []


def test_absolute_under_base():
    assert paths.absolute("/base", "x/y") == "/base/x/y"
    assert paths.absolute("/base", "/x") == "/base/x"
    assert paths.absolute("/", "") == "/"


def test_absolute_rejects_traversal():
    with pytest.raises(ValueError, match="Path traversal"):
        paths.absolute("/base", "a/../../etc")


def test_relative():
    assert paths.relative("/base", "/base/x/y") == "x/y"
    assert paths.relative("/base", "/base") == ""


def test_basename():
    assert paths.basename("/a/b.txt") == "b.txt"
    assert paths.basename("/") == "/"
