"""Test configuration and fixtures for dircontents."""

import os

import pytest


def _make_symlink(target, link):
    try:
        os.symlink(target, link)
    except (OSError, NotImplementedError):
        # On some platforms (like Windows) creating symlinks might require special permissions
        pytest.skip("Symlink creation not supported on this platform/environment")


@pytest.fixture
def make_symlink():
    """Create a symlink or skip the test when the platform does not allow it."""
    return _make_symlink


@pytest.fixture
def plain_tree(tmp_path):
    """A small hierarchy without symlinks.

    project
    ├── docs
    │   └── readme.md
    ├── main.py
    └── src
        ├── app.py
        └── util
            └── helpers.py
    """
    root = tmp_path / "project"
    (root / "docs").mkdir(parents=True)
    (root / "docs" / "readme.md").write_text("# Documentation")
    (root / "main.py").write_text("print('hi')")
    (root / "src" / "util").mkdir(parents=True)
    (root / "src" / "app.py").write_text("def app(): pass")
    (root / "src" / "util" / "helpers.py").write_text("def helper(): pass")
    return root


@pytest.fixture
def symlink_tree(tmp_path):
    """The hierarchy used throughout the documentation.

    test
    ├── A
    │   ├── a
    │   ├── A -> ../A
    │   └── B -> ../B
    ├── B
    │   ├── A -> ../A
    │   └── b
    └── C -> ../C        (tmp_path/C, outside of test)
        └── c
    """
    root = tmp_path / "test"
    (root / "A").mkdir(parents=True)
    (root / "B").mkdir()
    (tmp_path / "C").mkdir()
    (root / "A" / "a").write_text("a")
    (root / "B" / "b").write_text("b")
    (tmp_path / "C" / "c").write_text("c")
    _make_symlink("../A", root / "A" / "A")
    _make_symlink("../B", root / "A" / "B")
    _make_symlink("../A", root / "B" / "A")
    _make_symlink("../C", root / "C")
    return root


SYMLINK_TREE_DRAWING = "\n".join(
    [
        "test",
        "├── A",
        "│   ├── A -> ../A",
        "│   ├── B -> ../B",
        "│   └── a",
        "├── B",
        "│   ├── A -> ../A",
        "│   └── b",
        "└── C -> ../C",
        "    └── c",
    ]
)


@pytest.fixture
def symlink_tree_drawing():
    """Expected drawing of the symlink_tree fixture."""
    return SYMLINK_TREE_DRAWING
