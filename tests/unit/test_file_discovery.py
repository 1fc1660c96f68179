"""Unit tests for source file discovery."""

import logging
from pathlib import Path

import pytest

from code_ferret.search.discovery import FileDiscovery, is_test_file


@pytest.fixture
def discovery() -> FileDiscovery:
    return FileDiscovery()


@pytest.mark.unit
class TestIsTestFile:
    """Test the unconditional test-file exclusion rule."""

    @pytest.mark.parametrize(
        "path",
        [
            "/work/src/foo.test.ts",
            "/work/src/foo.spec.js",
            "/work/src/Foo.Spec.tsx",
            "/work/src/__tests__/helpers.ts",
        ],
    )
    def test_matches_test_files(self, path: str):
        assert is_test_file(path)

    @pytest.mark.parametrize(
        "path",
        [
            "/work/src/contest.ts",
            "/work/src/testing.py",
            "/work/tests_util/helpers.ts",
            "/work/src/specification.js",
        ],
    )
    def test_keeps_regular_files(self, path: str):
        assert not is_test_file(path)


@pytest.mark.unit
class TestFileDiscovery:
    """Test FileDiscovery.enumerate."""

    def test_returns_absolute_paths_extension_major(self, discovery: FileDiscovery, write_tree, tmp_path: Path):
        """Files are grouped by extension order, then sorted within each extension."""
        write_tree({"b.py": "x", "a.ts": "x", "sub/c.ts": "x", "z.js": "x", "notes.md": "x"})
        root = tmp_path.resolve()

        files = discovery.enumerate(tmp_path)

        assert files == [
            str(root / "a.ts"),
            str(root / "sub" / "c.ts"),
            str(root / "z.js"),
            str(root / "b.py"),
        ]

    def test_explicit_extensions(self, discovery: FileDiscovery, write_tree, tmp_path: Path):
        write_tree({"a.ts": "x", "b.py": "x", "c.go": "x"})

        files = discovery.enumerate(tmp_path, [".go", ".py"])

        assert [Path(file).name for file in files] == ["c.go", "b.py"]

    def test_empty_extensions_use_defaults(self, discovery: FileDiscovery, write_tree, tmp_path: Path):
        write_tree({"a.ts": "x", "c.go": "x"})

        assert [Path(file).name for file in discovery.enumerate(tmp_path, [])] == ["a.ts"]

    def test_duplicate_extensions_do_not_duplicate_files(self, discovery: FileDiscovery, write_tree, tmp_path: Path):
        write_tree({"a.ts": "x"})

        assert len(discovery.enumerate(tmp_path, [".ts", ".ts"])) == 1

    def test_relative_directory(self, discovery: FileDiscovery, write_tree, tmp_path: Path, monkeypatch):
        """A relative directory still yields absolute paths."""
        write_tree({"proj/a.ts": "x"})
        monkeypatch.chdir(tmp_path)

        assert discovery.enumerate("proj") == [str(tmp_path.resolve() / "proj" / "a.ts")]

    def test_excludes_test_files(self, discovery: FileDiscovery, write_tree, tmp_path: Path):
        write_tree(
            {
                "foo.ts": "x",
                "foo.test.ts": "x",
                "bar.spec.js": "x",
                "__tests__/baz.ts": "x",
            }
        )

        assert [Path(file).name for file in discovery.enumerate(tmp_path)] == ["foo.ts"]

    def test_excludes_node_modules_at_any_depth(self, discovery: FileDiscovery, write_tree, tmp_path: Path):
        write_tree(
            {
                "index.js": "x",
                "node_modules/lib/index.js": "x",
                "packages/app/node_modules/dep/main.js": "x",
            }
        )

        assert discovery.enumerate(tmp_path) == [str(tmp_path.resolve() / "index.js")]

    def test_skips_hidden_entries(self, discovery: FileDiscovery, write_tree, tmp_path: Path):
        write_tree({"visible.ts": "x", ".hidden/inner.ts": "x", ".eslintrc.js": "x"})

        assert [Path(file).name for file in discovery.enumerate(tmp_path)] == ["visible.ts"]

    def test_applies_directory_gitignore(self, discovery: FileDiscovery, write_tree, tmp_path: Path):
        write_tree({".gitignore": "build/\n*.gen.ts\n", "app.ts": "x", "build/out.ts": "x", "api.gen.ts": "x"})

        assert [Path(file).name for file in discovery.enumerate(tmp_path)] == ["app.ts"]

    def test_applies_parent_gitignore(self, discovery: FileDiscovery, write_tree, tmp_path: Path):
        """Ignore rules from an ancestor apply to the indexed subdirectory."""
        write_tree({".gitignore": "generated.ts\n", "proj/app.ts": "x", "proj/generated.ts": "x"})

        files = discovery.enumerate(tmp_path / "proj")

        assert files == [str(tmp_path.resolve() / "proj" / "app.ts")]

    def test_nearer_gitignore_overrides_ancestor(self, discovery: FileDiscovery, write_tree, tmp_path: Path):
        """Rules closer to the directory are applied last, so a negation re-includes files."""
        write_tree(
            {
                ".gitignore": "*.js\n",
                "proj/.gitignore": "!keep.js\n",
                "proj/keep.js": "x",
                "proj/drop.js": "x",
            }
        )

        assert [Path(file).name for file in discovery.enumerate(tmp_path / "proj")] == ["keep.js"]

    def test_unreadable_ignore_file_is_skipped(self, discovery: FileDiscovery, write_tree, tmp_path: Path, caplog):
        write_tree({".gitignore": b"\xff\xfe\xfa", "app.ts": "x"})

        with caplog.at_level(logging.WARNING, logger="code_ferret.search.discovery"):
            files = discovery.enumerate(tmp_path)

        assert [Path(file).name for file in files] == ["app.ts"]
        assert "Error reading ignore file" in caplog.text

    def test_custom_ignore_file_name(self, write_tree, tmp_path: Path):
        write_tree({".ferretignore": "vendor/\n", ".gitignore": "app.ts\n", "app.ts": "x", "vendor/lib.ts": "x"})

        files = FileDiscovery(ignore_file_name=".ferretignore").enumerate(tmp_path)

        assert [Path(file).name for file in files] == ["app.ts"]

    def test_repeated_enumeration_is_identical(self, discovery: FileDiscovery, write_tree, tmp_path: Path):
        write_tree({"b.ts": "x", "a.ts": "x", "nested/deep/c.ts": "x", "d.py": "x"})

        assert discovery.enumerate(tmp_path) == discovery.enumerate(tmp_path)

    def test_missing_directory_yields_nothing(self, discovery: FileDiscovery, tmp_path: Path):
        assert discovery.enumerate(tmp_path / "missing") == []
