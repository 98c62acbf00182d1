from __future__ import annotations

from pathlib import Path
import textwrap
from typing import Callable, Dict

import pytest

WritePackage = Callable[..., Path]


@pytest.fixture
def module_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A Go module `example.com/demo` that is the working directory."""
    (tmp_path / "go.mod").write_text(
        "module example.com/demo\n\ngo 1.21\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_package(module_root: Path) -> WritePackage:
    """Return a helper that writes Go files into a package directory."""

    def _write(relative: str = "widgets", **files: str) -> Path:
        directory = module_root / relative
        directory.mkdir(parents=True, exist_ok=True)
        contents: Dict[str, str] = dict(files)
        for name, source in contents.items():
            (directory / name).write_text(
                textwrap.dedent(source).lstrip("\n"), encoding="utf-8")
        return directory

    return _write
