from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


def test_backend_modules_not_installed_top_level():
    with open(PYPROJECT, "rb") as f:
        config = tomllib.load(f)
    setuptools_cfg = config["tool"]["setuptools"]
    assert setuptools_cfg.get("packages") == []
    assert "py-modules" not in setuptools_cfg
    assert "package-dir" not in setuptools_cfg
