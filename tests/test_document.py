from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from godoc2md.document import (
    PackageKind,
    build_import,
    find_module_file,
    group_examples,
    load,
    read_import_override,
    read_module_path,
    select_package,
)
from godoc2md.errors import ManifestError, NotFoundError, ParseError
from godoc2md.goparse import Candidate, Example, SourceFile

WritePackage = Callable[..., Path]


def _candidate(name: str) -> Candidate:
    return Candidate(name, files=[SourceFile(Path(f"{name}.go"), name)])


def test_package_kind_ranks_documentation_first() -> None:
    assert PackageKind.of("documentation") is PackageKind.DOCUMENTATION
    assert PackageKind.of("main") is PackageKind.MAIN
    assert PackageKind.of("widgets") is PackageKind.REGULAR
    assert PackageKind.MAIN.is_command
    assert not PackageKind.REGULAR.is_command


@pytest.mark.parametrize(
    ("names", "expected"),
    [
        (["main", "widgets"], "widgets"),
        (["main", "documentation", "widgets"], "documentation"),
        (["alpha", "beta"], "alpha"),
        (["main"], "main"),
        (["widgets_test", "main"], "main"),
    ],
)
def test_select_package_is_deterministic(names, expected) -> None:
    candidates = [_candidate(name) for name in names]

    selection = select_package(candidates)

    assert selection is not None
    assert selection[0].name == expected
    assert select_package(candidates)[0] is selection[0]


def test_select_package_ignores_test_only_candidates() -> None:
    assert select_package([Candidate("widgets")]) is None
    assert select_package([]) is None


def test_group_examples_by_owner() -> None:
    examples = [Example("Foo", "{}"), Example("Foo_bar", "{}"),
                Example("Missing_x", "{}"), Example("", "{}")]

    groups = group_examples(examples)

    assert [example.name for example in groups["Foo"]] == ["Foo", "Foo_bar"]
    assert [example.name for example in groups["Missing"]] == ["Missing_x"]
    assert [example.name for example in groups[""]] == [""]
    assert groups.get("Bar", []) == []


def test_read_module_path_variants(tmp_path: Path) -> None:
    module_file = tmp_path / "go.mod"
    module_file.write_text("// comment\nmodule \"example.com/quoted\" // x\n",
                           encoding="utf-8")
    assert read_module_path(module_file) == "example.com/quoted"

    module_file.write_text("go 1.21\n", encoding="utf-8")
    with pytest.raises(ManifestError, match="no module directive"):
        read_module_path(module_file)


def test_find_module_file_searches_parents(tmp_path: Path) -> None:
    (tmp_path / "go.mod").write_text("module m\n", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_module_file(nested) == tmp_path / "go.mod"


def test_build_import_joins_module_and_relative_path(
    module_root: Path,
) -> None:
    assert build_import("./pkg/widgets") == (
        "example.com/demo/pkg/widgets", module_root / "pkg" / "widgets")
    assert build_import(".")[0] == "example.com/demo"
    assert build_import(str(module_root / "x"))[0] == "example.com/demo/x"
    assert build_import("../elsewhere")[0] == ""


def test_build_import_without_module_file(tmp_path: Path) -> None:
    with pytest.raises(ManifestError):
        build_import(".", cwd=tmp_path)


def test_read_import_override(tmp_path: Path) -> None:
    assert read_import_override(tmp_path) is None
    (tmp_path / ".godoc2md.import").write_text(
        "\n  github.com/x/widgets  \nignored\n", encoding="utf-8")

    assert read_import_override(tmp_path) == "github.com/x/widgets"


def test_load_library_with_examples(write_package: WritePackage) -> None:
    directory = write_package(
        "pkg/widgets",
        **{
            "widgets.go": """
                // Package widgets makes widgets.
                package widgets

                // Widget is a widget.
                type Widget struct{}

                // New makes a Widget.
                func New() *Widget { return &Widget{} }
                """,
            "widgets_test.go": """
                package widgets

                func ExampleWidget() {}

                func ExampleNew() {}
                """,
            "external_test.go": """
                package widgets_test

                func ExampleNew_second() {}

                func TestIt(t *testing.T) {}
                """,
        },
    )

    document = load("pkg/widgets")

    assert document is not None
    assert document.name == "widgets"
    assert not document.is_command
    assert document.import_path == "example.com/demo/pkg/widgets"
    assert document.abs_path == directory
    assert [example.name for example in document.examples] == [
        "New", "New_second", "Widget"]
    assert set(Path(path).name for path in document.test_files) == {
        "widgets_test.go", "external_test.go"}


def test_load_command_is_named_after_directory(
    write_package: WritePackage,
) -> None:
    write_package(
        "cmd/spin",
        **{
            "main.go": """
                // Spin spins.
                package main

                func main() {}
                """,
        },
    )

    document = load("cmd/spin")

    assert document is not None
    assert document.is_command
    assert document.name == "spin"
    assert document.package.name == "main"


def test_load_accepts_byte_order_mark(write_package: WritePackage) -> None:
    directory = write_package("p", **{"p.go": "package p\n"})
    (directory / "p.go").write_text(
        "\ufeff// Package p.\npackage p\n\nfunc A() {}\n", encoding="utf-8")

    document = load("p")

    assert document is not None
    assert document.package.doc == "Package p.\n"
    assert [func.name for func in document.package.funcs] == ["A"]


def test_load_uses_import_override(write_package: WritePackage) -> None:
    directory = write_package("lib", **{"lib.go": "package lib\n"})
    (directory / ".godoc2md.import").write_text(
        "github.com/x/lib\n", encoding="utf-8")

    document = load("lib")

    assert document is not None
    assert document.import_path == "github.com/x/lib"


def test_load_without_module_file_degrades(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
) -> None:
    (tmp_path / "lib.go").write_text("package lib\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    document = load(".")

    assert document is not None
    assert document.import_path == ""
    with pytest.raises(ManifestError):
        load(".", require_manifest=True)


def test_load_empty_directory_yields_no_document(
    write_package: WritePackage,
) -> None:
    write_package("empty", **{"only_test.go": "package empty\n"})

    assert load("empty") is None


def test_load_errors(write_package: WritePackage) -> None:
    write_package("broken", **{"broken.go": "package broken\n\nx := 1\n"})

    with pytest.raises(NotFoundError):
        load("does/not/exist")
    with pytest.raises(ParseError):
        load("broken")


def test_without_funcs_removes_functions_and_methods(
    write_package: WritePackage,
) -> None:
    write_package(
        "shapes",
        **{
            "shapes.go": """
                package shapes

                type Shape struct{}

                func NewShape() *Shape { return nil }

                func (s *Shape) Area() int { return 0 }

                func (s *Shape) Scale(f int) {}

                func Describe() string { return "" }
                """,
        },
    )
    document = load("shapes")
    assert document is not None

    stripped = document.without_funcs()

    assert stripped.package.funcs == ()
    assert [type_decl.name for type_decl in stripped.package.types] == [
        "Shape"]
    assert stripped.package.types[0].funcs == ()
    assert stripped.package.types[0].methods == ()
    assert len(document.package.types[0].methods) == 2
