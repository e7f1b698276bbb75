import pytest

from pathvalue.io import posix


class TestNormalize:
    """Unit tests for the lexical normalization algorithm."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("", "."),
            (".", "."),
            ("./", "./"),
            ("foo", "foo"),
            ("./relative", "relative"),
            ("./relative/nested", "relative/nested"),
            ("/absolute", "/absolute"),
            ("trailing/slash/", "trailing/slash/"),
            ("foo//bar", "foo/bar"),
            ("foo////bar", "foo/bar"),
            ("foo/bar//", "foo/bar/"),
            ("//absolute////bar", "/absolute/bar"),
            ("/", "/"),
            ("///", "/"),
            ("/..", "/"),
            ("/../../etc", "/etc"),
            ("foo/..", "."),
            ("foo/../", "./"),
            ("foo/bar/..", "foo"),
            ("foo/bar/../", "foo/"),
            ("..", ".."),
            ("../", "../"),
            ("../../foo", "../../foo"),
            ("foo/../../bar", "../bar"),
            ("a/./b/./c", "a/b/c"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert posix.normalize(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "a//b/", "/x/../..", "../a/./b/..", "./", "///a", "a/b/c/../../../.."],
    )
    def test_idempotent(self, raw):
        once = posix.normalize(raw)
        assert posix.normalize(once) == once

    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_separator_runs_collapse(self, count):
        sep = "/" * count
        assert posix.normalize(f"a{sep}b{sep}c") == "a/b/c"
        assert posix.normalize(f"{sep}a{sep}") == "/a/"


class TestJoin:
    def test_join_skips_empty_segments(self):
        assert posix.join("foo", "", "bar") == "foo/bar"
        assert posix.join("") == "."

    def test_join_resolves_across_segments(self):
        assert posix.join("a/b", "..", "../c") == "c"
        assert posix.join("/", "..") == "/"


class TestComponents:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/", "/"),
            ("/a", "/"),
            ("/a/b", "/a"),
            ("dir", "."),
            ("dir/", "."),
            ("a/b/", "a"),
            ("", "."),
        ],
    )
    def test_dirname(self, path, expected):
        assert posix.dirname(path) == expected

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/", ""),
            ("dir", "dir"),
            ("dir/", "dir"),
            ("/a/b.txt", "b.txt"),
        ],
    )
    def test_basename(self, path, expected):
        assert posix.basename(path) == expected

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("foo.txt", ".txt"),
            ("foo.", "."),
            ("foo", ""),
            ("a/b.tar.gz", ".gz"),
            (".bashrc", ""),
            (".config.json", ".json"),
            ("..", ""),
            ("...", "."),
            (".", ""),
        ],
    )
    def test_extname(self, path, expected):
        assert posix.extname(path) == expected
