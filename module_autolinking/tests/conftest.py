import json
from pathlib import Path

import pytest


def write_module(
    module_dir: Path,
    name: str,
    version: str = "1.0.0",
    platforms: tuple[str, ...] = ("ios", "android"),
) -> Path:
    """Create a module with unimodule.json and package.json."""
    module_dir.mkdir(parents=True, exist_ok=True)
    (module_dir / "unimodule.json").write_text(json.dumps({"platforms": list(platforms)}))
    (module_dir / "package.json").write_text(json.dumps({"name": name, "version": version}))
    return module_dir


@pytest.fixture
def workspace(tmp_path):
    """A workspace root with a package.json and an empty node_modules."""
    root = tmp_path.resolve()
    (root / "package.json").write_text(json.dumps({"name": "app", "version": "0.0.1"}))
    (root / "node_modules").mkdir()
    return root


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("AUTOLINKING_PLATFORM", "AUTOLINKING_DEBUG"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_module():
    return write_module
