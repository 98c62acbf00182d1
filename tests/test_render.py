from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from godoc2md.document import Document, load
from godoc2md.goparse import Example, FuncDecl, PackageModel
from godoc2md.render import (
    DEFAULT_STYLE,
    Style,
    append_signature,
    render,
    render_example,
    render_function,
    render_header,
    render_index,
    render_signature,
    render_synopsis,
    render_usage,
)

WritePackage = Callable[..., Path]

SHAPES = """
    // Package shapes draws shapes.
    //
    // Overview
    //
    // Shapes have an area.
    package shapes

    // Unit is the size of one step.
    const Unit = 1

    // Debug enables tracing.
    var Debug = false

    // Shape is a shape.
    type Shape struct {
    \tSides int
    }

    // NewShape makes a Shape.
    func NewShape(sides int) *Shape { return &Shape{Sides: sides} }

    // Area returns the area.
    func (s *Shape) Area() int { return 0 }

    // Scale scales the shape.
    func (s *Shape) Scale(factor int) {}

    // Describe describes everything.
    func Describe() string { return "" }
    """

SHAPES_TEST = """
    package shapes

    import "fmt"

    // Make a triangle.
    func ExampleNewShape() {
    \tfmt.Println(NewShape(3).Sides)
    \t// Output: 3
    }

    func ExampleShape_Area() {
    \tfmt.Println(NewShape(4).Area())
    }
    """


@pytest.fixture
def shapes(write_package: WritePackage) -> Document:
    write_package("shapes", **{"shapes.go": SHAPES,
                               "shapes_test.go": SHAPES_TEST})
    document = load("shapes")
    assert document is not None
    return document


def test_widgets_synopsis_only(write_package: WritePackage) -> None:
    write_package("widgets", **{"widgets.go": """
        // Widgets
        //
        // Provides widgets.
        package widgets
        """})
    document = load("widgets")
    assert document is not None

    assert render(document) == (
        "# widgets\n"
        "--\n"
        "\n"
        "    import \"example.com/demo/widgets\"\n"
        "\n"
        "#### Widgets\n"
        "\n"
        "Provides widgets.\n"
        "\n"
        "#### Index")
    assert render_usage(document) == "#### Index"


def test_header_omits_import_for_commands_and_without_path() -> None:
    document = Document("spin", PackageModel("main"), Path("/x/spin"),
                        is_command=True, import_path="example.com/spin")
    library = Document("lib", PackageModel("lib"), Path("/x/lib"))

    assert render_header(document) == "# spin\n--"
    assert render_header(library) == "# lib\n--"
    assert render_header(
        Document("lib", PackageModel("lib"), Path("/x/lib"),
                 import_path="example.com/lib"),
        Style(include_import=False)) == "# lib\n--"


def test_command_has_no_usage_section() -> None:
    package = PackageModel("main", "Spin spins.\n",
                           funcs=(FuncDecl("Run", decl="func Run()"),))
    document = Document("spin", package, Path("/x/spin"), is_command=True)

    assert render(document) == "# spin\n--\n\nSpin spins."


def test_synopsis_heading_modes() -> None:
    package = PackageModel("p", "Usage\n\nUsage:\nTwo words\n")
    document = Document("p", package, Path("/x/p"))

    assert render_synopsis(document) == (
        "#### Usage\n\nUsage:\nTwo words")
    assert render_synopsis(document, Style.from_flags("Title")) == (
        "#### Usage\n\nUsage:\n#### Two words")
    assert render_synopsis(document, Style.from_flags("-")) == (
        "Usage\n\nUsage:\nTwo words")


def test_index_links_to_anchors(shapes: Document) -> None:
    assert render_index(shapes) == (
        " - [`func Describe() string`](#Describe)\n"
        " - [`type Shape`](#Shape)\n"
        "     - [`func NewShape(sides int) *Shape`](#NewShape)\n"
        "     - [`func (s *Shape) Area() int`](#Shape.Area)\n"
        "     - [`func (s *Shape) Scale(factor int)`](#Shape.Scale)")


def test_usage_sections_in_order(shapes: Document) -> None:
    usage = render_usage(shapes)

    positions = [usage.index(text) for text in (
        "#### Index",
        "```go\nconst Unit = 1\n```",
        "```go\nvar Debug = false\n```",
        "#### <a name='Describe'></a> func [Describe](#Describe)",
        "#### <a name='Shape'></a> type [Shape](#Shape)",
        "#### <a name='NewShape'></a> func [NewShape](#NewShape)",
        "#### <a name='Shape.Area'></a> func (*Shape) [Area](#Shape.Area)",
        "#### <a name='Shape.Scale'></a> func (*Shape) [Scale]"
        "(#Shape.Scale)",
    )]
    assert positions == sorted(positions)
    assert "Unit is the size of one step." in usage


def test_examples_attach_to_constructor_and_type(shapes: Document) -> None:
    usage = render_usage(shapes)

    constructor = usage.index("func [NewShape]")
    method = usage.index("func (*Shape) [Area]")
    assert usage.index("<a name='ExampleNewShape'></a>") > constructor
    type_example = usage.index("<a name='ExampleShape_Area'></a>")
    assert type_example < constructor
    assert "<summary>Example (Area)</summary>" in usage
    assert usage.count("<details>") == 2
    assert method > type_example


def test_render_example_block() -> None:
    example = Example("NewShape", "{\n\tfmt.Println(3)\n}", "3\n",
                      "Make a triangle.\n")

    assert render_example(example) == (
        "<a name='ExampleNewShape'></a><details>"
        "<summary>Example</summary><p>\n"
        "\n"
        "Make a triangle.\n"
        "\n"
        "```go\n"
        "fmt.Println(3)\n"
        "```\n"
        "\n"
        "Output:\n"
        "\n"
        "```\n"
        "3\n"
        "```\n"
        "\n"
        "</p></details>")


def test_render_example_without_output_or_doc() -> None:
    example = Example("Shape_Area", "{\n\tx()\n}", unordered=True)

    assert "Output" not in render_example(example)


def test_render_example_single_line_body() -> None:
    example = Example("Map", "{ fmt.Println(1) }")

    assert "```go\nfmt.Println(1)\n```" in render_example(example)


def test_render_example_plain() -> None:
    example = Example("Shape_Area", "{\n\tx()\n}", "1\n2\n", unordered=True)

    assert render_example(example, Style(plain=True)) == (
        "Example (Area):\n"
        "\n"
        "    x()\n"
        "\n"
        "Unordered output:\n"
        "\n"
        "    1\n"
        "    2")


def test_render_function_plain_has_no_html() -> None:
    func = FuncDecl("Area", "*Shape", "func (s *Shape) Area() int",
                    "Area returns the area.\n")

    assert render_function(func, "####", (), Style(plain=True)) == (
        "#### func (*Shape) Area\n"
        "\n"
        "    func (s *Shape) Area() int\n"
        "\n"
        "Area returns the area.")


def test_no_funcs_drops_function_and_method_headers(
    shapes: Document,
) -> None:
    usage = render_usage(shapes.without_funcs())

    assert "func [" not in usage
    assert "func (" not in usage
    assert "#### <a name='Shape'></a> type [Shape](#Shape)" in usage
    assert "type Shape struct" in usage


def test_plain_never_emits_fences(shapes: Document) -> None:
    plain = render(shapes, Style(plain=True))

    assert "```" not in plain
    assert "<a name" not in plain
    assert "<details>" not in plain
    assert "    const Unit = 1" in plain
    assert "```go" in render(shapes)


def test_signature_is_optional() -> None:
    assert render_signature(DEFAULT_STYLE) == ""
    assert append_signature("# x\n", DEFAULT_STYLE) == "# x"
    signed = Style(include_signature=True)
    assert append_signature("# x", signed) == "# x\n\n--\n**godoc2md**"
