"""Unit tests for the FileSystemTree walker."""

import os
from pathlib import Path

import pytest

from dir2sheet.exceptions import ConfigurationError
from dir2sheet.exclusion_rules.git_rules import GitIgnoreExclusionRules
from dir2sheet.exclusion_rules.path_list_rules import EXCLUSION_FILE_NAME, PathListExclusionRules
from dir2sheet.extension_filter import ExtensionFilter
from dir2sheet.file_system_tree.file_system_tree import FileSystemTree
from dir2sheet.types import EntryKind, Status

requires_posix_permissions = pytest.mark.skipif(
    os.name == "nt" or os.geteuid() == 0, reason="Requires POSIX permissions as non-root"
)


def paths(tree):
    return [entry.relative_path for entry in tree.get_entries()]


@pytest.fixture
def temp_directory(tmp_path):
    (tmp_path / "dir1").mkdir()
    (tmp_path / "dir1" / "file1.txt").touch()
    (tmp_path / "dir2").mkdir()
    (tmp_path / "dir2" / "file2.py").touch()
    (tmp_path / "dir2" / "nested").mkdir()
    (tmp_path / "dir2" / "nested" / "deep.py").touch()
    return tmp_path


def test_file_system_tree_initialization(temp_directory):
    fs_tree = FileSystemTree(str(temp_directory))
    assert fs_tree.root_path == Path(temp_directory)
    assert fs_tree._tree is None
    assert fs_tree.extension_filter.accepts_all


def test_entries_are_pre_order_with_levels(temp_directory):
    fs_tree = FileSystemTree(temp_directory, sort_children=True)
    rows = [(e.level, e.kind, e.name, e.relative_path) for e in fs_tree.get_entries()]
    assert rows == [
        (0, EntryKind.DIRECTORY, "dir1", "dir1/"),
        (1, EntryKind.FILE, "file1.txt", "dir1/file1.txt"),
        (0, EntryKind.DIRECTORY, "dir2", "dir2/"),
        (1, EntryKind.FILE, "file2.py", "dir2/file2.py"),
        (1, EntryKind.DIRECTORY, "nested", "dir2/nested/"),
        (2, EntryKind.FILE, "deep.py", "dir2/nested/deep.py"),
    ]


def test_parent_always_precedes_children(temp_directory):
    entries = FileSystemTree(temp_directory).get_entries()
    seen_dirs = set()
    for entry in entries:
        parent = entry.relative_path.rstrip("/").rpartition("/")[0]
        if parent:
            assert parent + "/" in seen_dirs
        if entry.is_dir:
            seen_dirs.add(entry.relative_path)


def test_all_entries_start_pending(temp_directory):
    assert all(entry.status is Status.PENDING for entry in FileSystemTree(temp_directory).get_entries())


def test_trailing_slash_only_on_directories(temp_directory):
    for entry in FileSystemTree(temp_directory).get_entries():
        assert entry.relative_path.endswith("/") == entry.is_dir


def test_display_name_is_indented(temp_directory):
    entries = {e.relative_path: e for e in FileSystemTree(temp_directory).get_entries()}
    assert entries["dir2/"].display_name == "dir2"
    assert entries["dir2/nested/deep.py"].display_name == "    deep.py"


def test_order_follows_filesystem_listing(tmp_path):
    (tmp_path / "z").touch()
    (tmp_path / "a").touch()
    (tmp_path / "dir1").mkdir()
    (tmp_path / "m.txt").touch()

    expected = [name + "/" if (tmp_path / name).is_dir() else name for name in os.listdir(tmp_path)]
    assert paths(FileSystemTree(tmp_path)) == expected


def test_sort_children_is_opt_in(tmp_path):
    for name in ["z", "a", "m"]:
        (tmp_path / name).touch()
    assert paths(FileSystemTree(tmp_path, sort_children=True)) == ["a", "m", "z"]


def test_empty_directory_included_without_filter(tmp_path):
    (tmp_path / "empty").mkdir()
    entries = FileSystemTree(tmp_path).get_entries()
    assert [(e.kind, e.relative_path) for e in entries] == [(EntryKind.DIRECTORY, "empty/")]


def test_extension_filter_prunes_directories(tmp_path):
    (tmp_path / "a.ts").touch()
    (tmp_path / "b.js").touch()
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.md").touch()

    fs_tree = FileSystemTree(tmp_path, extension_filter=ExtensionFilter.from_string("ts"))
    entries = fs_tree.get_entries()

    assert [(e.level, e.kind, e.relative_path) for e in entries] == [(0, EntryKind.FILE, "a.ts")]


def test_extension_filter_keeps_directories_with_deep_matches(tmp_path):
    (tmp_path / "src" / "lib" / "util").mkdir(parents=True)
    (tmp_path / "src" / "lib" / "util" / "x.ts").touch()
    (tmp_path / "src" / "lib" / "notes.md").touch()
    (tmp_path / "src" / "other").mkdir()
    (tmp_path / "src" / "other" / "y.js").touch()

    fs_tree = FileSystemTree(tmp_path, extension_filter=ExtensionFilter.from_string("TS"), sort_children=True)
    assert paths(fs_tree) == ["src/", "src/lib/", "src/lib/util/", "src/lib/util/x.ts"]


def test_root_without_matches_yields_nothing(tmp_path):
    (tmp_path / "readme.md").touch()
    fs_tree = FileSystemTree(tmp_path, extension_filter=ExtensionFilter.from_string("ts"))
    assert fs_tree.get_entries() == []
    assert fs_tree.get_tree().children == ()


def test_exclusion_list_file_is_loaded_from_root(tmp_path):
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "output.txt").touch()
    (tmp_path / "builder").mkdir()
    (tmp_path / "builder" / "output.txt").touch()
    (tmp_path / EXCLUSION_FILE_NAME).write_text("build/\n")

    result = paths(FileSystemTree(tmp_path, extension_filter=ExtensionFilter.from_string("txt")))

    assert "build/" not in result
    assert "build/output.txt" not in result
    assert "builder/output.txt" in result
    assert EXCLUSION_FILE_NAME not in result


def test_exclusion_file_never_emitted(tmp_path):
    (tmp_path / EXCLUSION_FILE_NAME).write_text("\n")
    (tmp_path / "kept.txt").touch()
    assert paths(FileSystemTree(tmp_path)) == ["kept.txt"]


def test_exclusion_wins_over_extension_filter(project_tree):
    fs_tree = FileSystemTree(project_tree, extension_filter=ExtensionFilter.from_string("ts"), sort_children=True)
    assert paths(fs_tree) == [
        "builder/",
        "builder/output.ts",
        "src/",
        "src/app.ts",
        "src/lib/",
        "src/lib/index.ts",
    ]


def test_exact_exclusion_of_directory_skips_subtree(tmp_path):
    (tmp_path / "vendor").mkdir()
    (tmp_path / "vendor" / "lib.js").touch()
    rules = PathListExclusionRules(rules=["vendor"])
    assert paths(FileSystemTree(tmp_path, rules)) == []


def test_directory_kept_for_file_that_is_later_excluded(tmp_path):
    # The subtree check only looks at extensions, so "docs/" survives although its
    # only matching file is excluded.
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "secret.md").touch()
    rules = PathListExclusionRules(rules=["docs/secret.md"])

    fs_tree = FileSystemTree(tmp_path, rules, extension_filter=ExtensionFilter.from_string("md"))

    assert paths(fs_tree) == ["docs/"]


def test_only_excluded_items_yield_empty_result(tmp_path):
    (tmp_path / "a.txt").touch()
    (tmp_path / "b").mkdir()
    (tmp_path / EXCLUSION_FILE_NAME).write_text("a.txt\nb/\n")

    fs_tree = FileSystemTree(tmp_path)

    assert fs_tree.get_entries() == []
    assert fs_tree.errors == []


def test_custom_rules_replace_root_exclusion_file(tmp_path):
    (tmp_path / EXCLUSION_FILE_NAME).write_text("a.txt\n")
    (tmp_path / "a.txt").touch()
    (tmp_path / "b.log").touch()
    rules = GitIgnoreExclusionRules()
    rules.add_rule("*.log")

    result = paths(FileSystemTree(tmp_path, rules, sort_children=True))

    assert result == [EXCLUSION_FILE_NAME, "a.txt"]


def test_gitignore_directory_patterns_match_directories(tmp_path):
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "pkg.js").touch()
    (tmp_path / "index.js").touch()
    rules = GitIgnoreExclusionRules()
    rules.add_rule("node_modules/")

    assert paths(FileSystemTree(tmp_path, rules)) == ["index.js"]


def test_counts(temp_directory):
    fs_tree = FileSystemTree(temp_directory)
    assert fs_tree.get_directory_count() == 3
    assert fs_tree.get_file_count() == 3
    assert fs_tree.get_error_count() == 0


def test_get_tree_mirrors_entries(temp_directory):
    fs_tree = FileSystemTree(temp_directory, sort_children=True)
    root = fs_tree.get_tree()

    assert root.name == temp_directory.name
    assert root.is_dir
    assert [child.name for child in root.children] == ["dir1", "dir2"]
    dir2 = root.children[1]
    assert [child.name for child in dir2.children] == ["file2.py", "nested"]
    assert dir2.children[1].entry.relative_path == "dir2/nested/"


def test_refresh(temp_directory):
    fs_tree = FileSystemTree(temp_directory)
    fs_tree.get_entries()
    (temp_directory / "new_file.txt").touch()
    fs_tree.refresh()
    assert "new_file.txt" in paths(fs_tree)


def test_entries_are_cached_until_refresh(temp_directory):
    fs_tree = FileSystemTree(temp_directory)
    before = paths(fs_tree)
    (temp_directory / "late.txt").touch()
    assert paths(fs_tree) == before


def test_non_existent_directory():
    with pytest.raises(ConfigurationError) as exc_info:
        FileSystemTree("/non/existent/directory").get_entries()
    assert exc_info.value.path == str(Path("/non/existent/directory"))


def test_file_as_root():
    with pytest.raises(ConfigurationError, match="not a directory"):
        FileSystemTree(__file__).get_tree()


@requires_posix_permissions
def test_unreadable_root_is_configuration_error(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    root.chmod(0o000)
    try:
        with pytest.raises(ConfigurationError, match="cannot list directory"):
            FileSystemTree(root).get_entries()
    finally:
        root.chmod(0o755)


@requires_posix_permissions
def test_unreadable_subdirectory_is_skipped(tmp_path, caplog):
    (tmp_path / "a_ok").mkdir()
    (tmp_path / "a_ok" / "one.txt").touch()
    (tmp_path / "b_locked").mkdir()
    (tmp_path / "b_locked" / "hidden.txt").touch()
    (tmp_path / "c_ok").mkdir()
    (tmp_path / "c_ok" / "two.txt").touch()
    (tmp_path / "b_locked").chmod(0o000)
    try:
        fs_tree = FileSystemTree(tmp_path, sort_children=True)
        with caplog.at_level("WARNING"):
            result = paths(fs_tree)
        errors = fs_tree.errors
    finally:
        (tmp_path / "b_locked").chmod(0o755)

    assert result == ["a_ok/", "a_ok/one.txt", "b_locked/", "c_ok/", "c_ok/two.txt"]
    assert len(errors) == 1
    assert errors[0].path == str(tmp_path / "b_locked")
    assert "b_locked" in caplog.text


@pytest.fixture
def temp_directory_with_symlinks(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.py").write_text("def main(): pass")
    try:
        os.symlink(tmp_path / "src", tmp_path / "link")
        os.symlink(tmp_path / "missing", tmp_path / "dangling")
    except (OSError, NotImplementedError):
        pytest.skip("Symlink creation not supported on this platform/environment")
    return tmp_path


def test_symlinks_are_followed(temp_directory_with_symlinks):
    result = paths(FileSystemTree(temp_directory_with_symlinks, sort_children=True))
    assert result == ["dangling", "link/", "link/main.py", "src/", "src/main.py"]


def test_symlink_loop_does_not_stop_filtered_walk(tmp_path):
    (tmp_path / "a.ts").write_text("")
    other = tmp_path / "other"
    other.mkdir()
    (other / "c.md").write_text("")
    try:
        os.symlink(other / "loop", other / "loop")
    except (OSError, NotImplementedError):
        pytest.skip("Symlink creation not supported on this platform/environment")

    fs_tree = FileSystemTree(tmp_path, extension_filter=ExtensionFilter.from_string("ts"))
    assert paths(fs_tree) == ["a.ts"]


def test_symlink_loop_is_recorded_as_error(tmp_path, caplog):
    (tmp_path / "a.txt").write_text("")
    try:
        os.symlink(tmp_path / "loop", tmp_path / "loop")
    except (OSError, NotImplementedError):
        pytest.skip("Symlink creation not supported on this platform/environment")

    fs_tree = FileSystemTree(tmp_path)
    with caplog.at_level("WARNING"):
        assert paths(fs_tree) == ["a.txt"]
    assert [error.path for error in fs_tree.errors] == [str(tmp_path / "loop")]


def test_deeply_nested_tree(tmp_path):
    deep = tmp_path
    for _ in range(600):
        deep = deep / "d"
        deep.mkdir()
    (deep / "x.ts").write_text("")

    entries = FileSystemTree(tmp_path).get_entries()

    assert len(entries) == 601
    assert [entry.level for entry in entries] == list(range(601))
    assert entries[-1].kind is EntryKind.FILE
    assert entries[-1].relative_path == "d/" * 600 + "x.ts"


def test_refresh_rereads_exclusion_file(temp_directory):
    fs_tree = FileSystemTree(temp_directory, sort_children=True)
    assert "dir1/" in paths(fs_tree)

    (temp_directory / EXCLUSION_FILE_NAME).write_text("dir1/\n")
    fs_tree.refresh()

    assert paths(fs_tree) == ["dir2/", "dir2/file2.py", "dir2/nested/", "dir2/nested/deep.py"]


def test_refresh_keeps_given_rules(temp_directory):
    rules = GitIgnoreExclusionRules()
    rules.add_rule("dir2/")
    fs_tree = FileSystemTree(temp_directory, exclusion_rules=rules, sort_children=True)
    fs_tree.get_entries()

    (temp_directory / EXCLUSION_FILE_NAME).write_text("dir1/\n")
    fs_tree.refresh()

    assert fs_tree.exclusion_rules is rules
    assert paths(fs_tree) == [EXCLUSION_FILE_NAME, "dir1/", "dir1/file1.txt"]
