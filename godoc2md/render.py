"""render: Render a Document as Markdown.

The output has up to four parts, separated by blank lines:

1. The header: `# name`, a `--` rule and (for libraries) the import line.
2. The synopsis: the package comment with heading lines promoted.
3. The usage (libraries only): an index followed by the constants,
   variables, functions and types with their examples.
4. An optional signature line, added by *append_signature*.

All layout choices are collected in a frozen *Style*.  The default
output is GitHub flavored Markdown with `<a name>` anchors and
collapsible `<details>` examples.  A `plain` style uses indented code
blocks and no HTML at all.

"""

# <----------------------------- 80 characters -----------------------------> #

from dataclasses import dataclass
import textwrap
from typing import Dict, List, Optional, Pattern, Sequence

from .document import Document, group_examples
from .goparse import Example, FuncDecl, PackageModel, TypeDecl, ValueGroup
from .text import DEFAULT_HEADING_MODE, HEADING_TITLE_CASE_1WORD
from .text import anchor_name, code_span, collapse_space, detect_headings
from .text import drop_invisible_marker, fence_code, fence_text
from .text import example_qualifier, heading_pattern
from .text import strip_placeholder_comment, unwrap_braces


# Style:
@dataclass(frozen=True)
class Style:
    """Style: The formatting knobs of the renderer.

    Attributes:
    * *include_import* (bool): Show the `import "..."` line of libraries.
    * *synopsis_header* (str): The marker of headings in the synopsis.
    * *synopsis_heading* (Optional[Pattern]): The heading detection
      pattern (None disables heading detection.)
    * *usage_header* (str): The title line of the usage section.
    * *function_header* (str): The marker of function headers.
    * *type_header* (str): The marker of type headers.
    * *type_function_header* (str): The marker of constructor and method
      headers.
    * *include_signature* (bool): Append the generator signature.
    * *plain* (bool): Emit plain Markdown (no fences, no HTML.)

    Constructor:
    * Style(include_import, synopsis_header, ...)
    * Style.from_flags(heading, plain, signature)

    """

    include_import: bool = True
    synopsis_header: str = "####"
    synopsis_heading: Optional[Pattern] = HEADING_TITLE_CASE_1WORD
    usage_header: str = "#### Index"
    function_header: str = "####"
    type_header: str = "####"
    type_function_header: str = "####"
    include_signature: bool = False
    plain: bool = False

    # Style.from_flags():
    @classmethod
    def from_flags(cls, heading: str = DEFAULT_HEADING_MODE,
                   plain: bool = False, signature: bool = False) -> "Style":
        """Return the style selected by the command line flags.

        Raises:
        * ValueError: If *heading* is not a known heading mode.

        """
        return cls(synopsis_heading=heading_pattern(heading), plain=plain,
                   include_signature=signature)


DEFAULT_STYLE: Style = Style()


# _join():
def _join(parts: Sequence[str]) -> str:
    """Join the non-empty *parts* with blank lines."""
    return "\n\n".join(part for part in parts if part)


# _doc_text():
def _doc_text(doc: str) -> str:
    return drop_invisible_marker(doc).strip("\n")


# _decl_code():
def _decl_code(decl: str, style: Style) -> str:
    return fence_code(strip_placeholder_comment(decl), style.plain)


# render_header():
def render_header(document: Document, style: Style = DEFAULT_STYLE) -> str:
    """Return the `# name` title, the rule and the import line."""
    lines: List[str] = [f"# {document.name}", "--"]
    if (style.include_import and not document.is_command
            and document.import_path):
        lines.extend(["", f"    import \"{document.import_path}\""])
    return "\n".join(lines)


# render_synopsis():
def render_synopsis(document: Document, style: Style = DEFAULT_STYLE) -> str:
    """Return the package comment with heading lines promoted."""
    synopsis: str = drop_invisible_marker(document.package.doc)
    return detect_headings(synopsis, style.synopsis_heading,
                           style.synopsis_header).strip()


# _index_line():
def _index_line(text: str, anchor: str, nested: bool, style: Style) -> str:
    indent: str = "    " if nested else ""
    if style.plain:
        return f"{indent}* {code_span(text)}"
    return f"{indent} - [{code_span(text)}](#{anchor})"


# render_index():
def render_index(document: Document, style: Style = DEFAULT_STYLE) -> str:
    """Return the index: one list entry per function and type.

    Constructors and methods are nested below their type.  Each entry
    links to the anchor of its section (except in plain style.)

    """
    lines: List[str] = []
    func: FuncDecl
    for func in document.package.funcs:
        lines.append(_index_line(collapse_space(func.decl),
                                 anchor_name(func.name), False, style))
    type_decl: TypeDecl
    for type_decl in document.package.types:
        lines.append(_index_line(f"type {type_decl.name}",
                                 anchor_name(type_decl.name), False, style))
        for func in type_decl.funcs + type_decl.methods:
            lines.append(_index_line(
                collapse_space(func.decl),
                anchor_name(func.name, func.receiver), True, style))
    return "\n".join(lines)


# render_example():
def render_example(example: Example, style: Style = DEFAULT_STYLE) -> str:
    """Return one runnable example.

    The default style wraps the example in a collapsible `<details>`
    block.  The example body arrives as `{ ... }`; the braces are
    removed and the code is dedented.

    """
    qualifier: str = example_qualifier(example.name)
    summary: str = f"Example {qualifier}".rstrip()
    code: str = example.code
    if not example.whole_program:
        code = unwrap_braces(code)
    code = textwrap.dedent(code)

    output: str = ""
    if example.output.strip():
        label: str = "Unordered output:" if example.unordered else "Output:"
        output = _join([label, fence_text(example.output, style.plain)])

    body: str = _join([_doc_text(example.doc),
                       fence_code(code, style.plain), output])
    if style.plain:
        return _join([f"{summary}:", body])
    anchor: str = f"Example{example.name}"
    return (f"<a name='{anchor}'></a><details>"
            f"<summary>{summary}</summary><p>\n\n"
            f"{body}\n\n</p></details>")


# render_value():
def render_value(value: ValueGroup, style: Style = DEFAULT_STYLE) -> str:
    """Return a const or var group: its declaration and doc text."""
    return _join([_decl_code(value.decl, style), _doc_text(value.doc)])


# render_function():
def render_function(func: FuncDecl, header: str,
                    examples: Sequence[Example] = (),
                    style: Style = DEFAULT_STYLE) -> str:
    """Return the section of a function, constructor or method."""
    receiver: str = f"({func.receiver}) " if func.receiver else ""
    title: str
    if style.plain:
        title = f"{header} func {receiver}{func.name}"
    else:
        anchor: str = anchor_name(func.name, func.receiver)
        title = (f"{header} <a name='{anchor}'></a> "
                 f"func {receiver}[{func.name}](#{anchor})")
    return _join([title, _decl_code(func.decl, style), _doc_text(func.doc)]
                 + [render_example(example, style) for example in examples])


# render_type():
def render_type(type_decl: TypeDecl,
                examples: Dict[str, List[Example]],
                style: Style = DEFAULT_STYLE) -> str:
    """Return the section of a type and everything listed with it.

    The type's own examples follow its doc text.  Constructors show
    their examples, methods never do: a method example such as
    `ExampleBuffer_Len` is owned by (and shown with) the type.

    """
    title: str
    if style.plain:
        title = f"{style.type_header} type {type_decl.name}"
    else:
        anchor: str = anchor_name(type_decl.name)
        title = (f"{style.type_header} <a name='{anchor}'></a> "
                 f"type [{type_decl.name}](#{anchor})")
    parts: List[str] = [title, _decl_code(type_decl.decl, style),
                        _doc_text(type_decl.doc)]
    parts.extend(render_example(example, style)
                 for example in examples.get(type_decl.name, ()))
    parts.extend(render_value(value, style)
                 for value in type_decl.consts + type_decl.vars)
    parts.extend(render_function(func, style.type_function_header,
                                 examples.get(func.name, ()), style)
                 for func in type_decl.funcs)
    parts.extend(render_function(func, style.type_function_header, (), style)
                 for func in type_decl.methods)
    return _join(parts)


# render_usage():
def render_usage(document: Document, style: Style = DEFAULT_STYLE) -> str:
    """Return the index and the sections of all documented symbols."""
    examples: Dict[str, List[Example]] = group_examples(document.examples)
    package: PackageModel = document.package
    parts: List[str] = [_join([style.usage_header,
                               render_index(document, style)])]
    parts.extend(render_value(value, style) for value in package.consts)
    parts.extend(render_value(value, style) for value in package.vars)
    parts.extend(render_function(func, style.function_header,
                                 examples.get(func.name, ()), style)
                 for func in package.funcs)
    parts.extend(render_type(type_decl, examples, style)
                 for type_decl in package.types)
    return _join(parts)


# render_signature():
def render_signature(style: Style = DEFAULT_STYLE) -> str:
    """Return the generator signature (`""` unless enabled.)"""
    if not style.include_signature:
        return ""
    return "--\n**godoc2md**"


# append_signature():
def append_signature(text: str, style: Style = DEFAULT_STYLE) -> str:
    """Return *text* followed by the signature (when enabled.)"""
    return _join([text.strip(), render_signature(style)])


# render():
def render(document: Document, style: Style = DEFAULT_STYLE) -> str:
    """Return the whole document (without the signature.)

    Arguments:
    * *document* (Document): The loaded package.
    * *style* (Style): The formatting knobs.

    Returns:
    * (str): The Markdown text, without leading or trailing white space.
      Commands have no usage section.

    """
    parts: List[str] = [render_header(document, style),
                        render_synopsis(document, style)]
    if not document.is_command:
        parts.append(render_usage(document, style))
    return _join([part.strip() for part in parts])
