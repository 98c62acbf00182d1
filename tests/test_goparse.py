from __future__ import annotations

from pathlib import Path

import pytest

from godoc2md.errors import ParseError
from godoc2md.goparse import (
    COMMENT,
    SEMI,
    build_package,
    comment_text,
    extract_examples,
    is_exported,
    parse_directory,
    parse_file,
    tokenize,
)

LIBRARY = '''\
// Package widgets makes widgets.
//
// Usage
//
// Call New.
package widgets

import (
	"fmt"
	"io"
)

// Answer is the answer.
const Answer = 42

// Colors.
const (
	Red Color = iota // red
	Green
	blue
)

var internal = 1

// Widget is a widget.
type Widget struct {
	// Name names it.
	Name string
	size int
	io.Reader
}

// Color is a color.
type Color int

type hidden struct{}

// New makes a Widget.
func New(name string) *Widget {
	return &Widget{Name: name}
}

// Spin spins the widget.
func (w *Widget) Spin() error { return nil }

func (w *Widget) wobble() {}

// Print prints.
func Print(a ...interface{}) {
	fmt.Println(a...)
}

func helper() {}
'''


def _parse(source: str, name: str = "widgets.go"):
    return parse_file(Path(name), source)


def test_is_exported() -> None:
    assert is_exported("Widget")
    assert not is_exported("widget")
    assert not is_exported("_Widget")
    assert not is_exported("")


def test_tokenize_inserts_semicolons_at_line_ends() -> None:
    tokens = tokenize("x := f(a)\nreturn\n}\n")

    kinds = [(token.kind, token.text) for token in tokens]
    assert kinds == [
        ("IDENT", "x"), ("OP", ":"), ("OP", "="), ("IDENT", "f"),
        ("OP", "("), ("IDENT", "a"), ("OP", ")"), (SEMI, "\n"),
        ("IDENT", "return"), (SEMI, "\n"),
        ("OP", "}"), (SEMI, "\n"),
    ]


def test_tokenize_marks_comments_after_code() -> None:
    tokens = tokenize("// lead\nx := 1 // trailing\n")

    comments = [token for token in tokens if token.kind == COMMENT]
    assert [comment.after_code for comment in comments] == [False, True]


@pytest.mark.parametrize(
    "source",
    ['x := "abc\n', "x := `abc", "/* open", "x := 'a"],
)
def test_tokenize_rejects_unterminated_literals(source: str) -> None:
    with pytest.raises(ParseError, match=r"^t\.go:1:"):
        tokenize(source, "t.go")


def test_comment_text_strips_markers_and_directives() -> None:
    tokens = tokenize("// First line.\n//\n//\n//go:generate stringer\n"
                      "// Second line.  \n")

    comments = [token for token in tokens if token.kind == COMMENT]
    assert comment_text(comments) == "First line.\n\nSecond line.\n"


def test_comment_text_of_block_comment() -> None:
    tokens = tokenize("/*\nBlock text.\n*/\n")

    assert comment_text(tokens) == "Block text.\n"


def test_parse_file_collects_package_doc() -> None:
    source_file = _parse(LIBRARY)

    assert source_file.package == "widgets"
    assert source_file.doc == (
        "Package widgets makes widgets.\n\nUsage\n\nCall New.\n")
    assert not source_file.is_test


def test_parse_file_skips_byte_order_mark() -> None:
    source_file = _parse("\ufeff// Package p.\npackage p\n\nfunc A() {}\n")

    assert source_file.package == "p"
    assert source_file.doc == "Package p.\n"
    assert [func.name for func in source_file.funcs] == ["A"]


def test_parse_file_drops_unexported_specs_and_members() -> None:
    source_file = _parse(LIBRARY)

    assert [value.names for value in source_file.values] == [
        ("Answer",), ("Red", "Green")]
    colors = source_file.values[1]
    assert "blue" not in colors.decl
    assert colors.decl.startswith("const (\n\tRed Color = iota // red")
    widget = source_file.types[0]
    assert widget.decl == (
        "type Widget struct {\n"
        "\t// Name names it.\n"
        "\tName string\n"
        "\tio.Reader\n"
        "\t// contains filtered or unexported fields\n"
        "}")
    assert [type_decl.name for type_decl in source_file.types] == [
        "Widget", "Color"]


def test_parse_file_records_function_signatures() -> None:
    source_file = _parse(LIBRARY)

    funcs = {func.name: func for func in source_file.funcs}
    assert funcs["New"].decl == "func New(name string) *Widget"
    assert funcs["New"].result_types == ("Widget",)
    assert funcs["New"].doc == "New makes a Widget.\n"
    assert funcs["Spin"].receiver == "*Widget"
    assert funcs["Spin"].receiver_type == "Widget"
    assert funcs["Spin"].decl == "func (w *Widget) Spin() error"


def test_parse_file_reports_syntax_errors() -> None:
    with pytest.raises(ParseError, match="expected declaration"):
        _parse("package broken\n\nx := 1\n")
    with pytest.raises(ParseError, match="package"):
        _parse("func main() {}\n")


def test_build_package_associates_with_types() -> None:
    package = build_package("widgets", [_parse(LIBRARY)])

    assert [value.names for value in package.consts] == [("Answer",)]
    assert [func.name for func in package.funcs] == ["Print"]
    assert [type_decl.name for type_decl in package.types] == [
        "Color", "Widget"]
    color, widget = package.types
    assert [value.names for value in color.consts] == [("Red", "Green")]
    assert [func.name for func in widget.funcs] == ["New"]
    assert [func.name for func in widget.methods] == ["Spin"]
    assert package.vars == ()


def test_build_package_joins_file_docs() -> None:
    first = _parse("// First.\npackage p\n", "a.go")
    second = _parse("// Second.\npackage p\n", "b.go")

    assert build_package("p", [first, second]).doc == "First.\n\nSecond.\n"


def test_build_package_sorts_single_values_after_groups() -> None:
    source_file = _parse(
        "package p\n\nconst Zeta = 1\n\nconst (\n\tA = 1\n\tB = 2\n)\n\n"
        "const Alpha = 2\n")

    package = build_package("p", [source_file])

    assert [value.names for value in package.consts] == [
        ("A", "B"), ("Alpha",), ("Zeta",)]


def test_parse_directory_partitions_by_package(tmp_path: Path) -> None:
    (tmp_path / "a.go").write_text("package lib\n", encoding="utf-8")
    (tmp_path / "main.go").write_text("package main\n", encoding="utf-8")
    (tmp_path / "a_test.go").write_text("package lib\n", encoding="utf-8")
    (tmp_path / ".hidden.go").write_text("not go", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not go", encoding="utf-8")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.go").write_text("package sub\n", encoding="utf-8")

    candidates = parse_directory(tmp_path)

    assert [candidate.name for candidate in candidates] == ["lib", "main"]
    lib = candidates[0]
    assert [source.path.name for source in lib.files] == ["a.go"]
    assert [source.path.name for source in lib.test_files] == ["a_test.go"]


def test_extract_examples_with_output() -> None:
    test_file = _parse('''\
package widgets

import "fmt"

func TestNothing(t *testing.T) {}

// Shows how to make one.
func ExampleNew() {
	w := New("spinner")
	fmt.Println(w.Name)
	// Output: spinner
}

func ExampleWidget_Spin_fast() {
	// Unordered output:
	// a
	// b
}

func ExampleHelper(t int) {}
''', "widgets_test.go")

    examples = extract_examples([test_file])

    assert [example.name for example in examples] == [
        "New", "Widget_Spin_fast"]
    new, spin = examples
    assert new.doc == "Shows how to make one.\n"
    assert new.output == "spinner\n"
    assert not new.unordered
    assert "Output" not in new.code
    assert new.code.startswith("{") and new.code.endswith("}")
    assert spin.unordered
    assert spin.output == "a\nb\n"
    assert not new.whole_program


def test_extract_examples_whole_file_program() -> None:
    test_file = _parse('''\
package widgets_test

import "fmt"

type local struct{}

func Example() {
	fmt.Println("hi")
	// Output:
	// hi
}
''', "whole_test.go")

    examples = extract_examples([test_file])

    assert len(examples) == 1
    example = examples[0]
    assert example.name == ""
    assert example.whole_program
    assert example.code.startswith("package widgets_test")
    assert "Output" not in example.code
    assert example.output == "hi\n"
