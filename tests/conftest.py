"""Shared fixtures for namesync tests."""

import pytest
from click.testing import CliRunner


def make_tree(root, files):
    """Create *files* ({relative_path: text}) under *root*; return *root*.

    A path ending in "/" creates an empty directory.
    """
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        p = root / rel
        if rel.endswith("/"):
            p.mkdir(parents=True, exist_ok=True)
            continue
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content)
    return root


def listing(root):
    """Return the set of relative file paths under *root* (forward slashes)."""
    return {
        p.relative_to(root).as_posix()
        for p in root.rglob("*")
        if p.is_file()
    }


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def src(tmp_path):
    """An empty source tree root."""
    d = tmp_path / "src"
    d.mkdir()
    return d


@pytest.fixture
def tgt(tmp_path):
    """An empty target tree root."""
    d = tmp_path / "tgt"
    d.mkdir()
    return d
