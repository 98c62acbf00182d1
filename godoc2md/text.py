"""text: String transformations that turn Go doc text into Markdown.

Everything in here is a pure function of its arguments.  The renderer
(`render.py`) and the template context (`template.py`) are the callers.

The heading detection patterns are the interesting part.  A Go package
comment has no markup for headings, so a line is promoted to a Markdown
heading purely by its shape:

* `1Word`: only a single word on the entire line.
* `TitleCase`: every word on the line starts with an upper case letter.
* `Title`: a line without punctuation (e.g. no period at the end.)
* `TitleCase1Word`: the line matches either `TitleCase` or `1Word`.

"""

# <----------------------------- 80 characters -----------------------------> #

import re
import textwrap
from typing import Dict, Optional, Pattern, Tuple


HEADING_1WORD: Pattern = re.compile(r"^([A-Za-z0-9_-]+)$", re.MULTILINE)
HEADING_TITLE_CASE: Pattern = re.compile(
    r"^((?:[A-Z][A-Za-z0-9_-]*)(?:[ \t]+[A-Z][A-Za-z0-9_-]*)*)$",
    re.MULTILINE)
HEADING_TITLE: Pattern = re.compile(
    r"^((?:[A-Za-z0-9_-]+)(?:[ \t]+[A-Za-z0-9_-]+)*)$", re.MULTILINE)
HEADING_TITLE_CASE_1WORD: Pattern = re.compile(
    r"^((?:[A-Za-z0-9_-]+)|"
    r"(?:(?:[A-Z][A-Za-z0-9_-]*)(?:[ \t]+[A-Z][A-Za-z0-9_-]*)*))$",
    re.MULTILINE)

# Heading mode name => pattern.  `""` and `"-"` disable heading detection.
HEADING_PATTERNS: Dict[str, Optional[Pattern]] = {
    "1Word": HEADING_1WORD,
    "TitleCase": HEADING_TITLE_CASE,
    "Title": HEADING_TITLE,
    "TitleCase1Word": HEADING_TITLE_CASE_1WORD,
    "": None,
    "-": None,
}
DEFAULT_HEADING_MODE: str = "TitleCase1Word"

_PLACEHOLDER_RE: Pattern = re.compile(
    r"^[ \t]*// contains filtered or unexported (?:fields|methods)[ \t]*\n?",
    re.MULTILINE)
_INVISIBLE_MARKER_RE: Pattern = re.compile(r"[\t ]*\x7f[\t ]*$", re.MULTILINE)
_INDENT_RE: Pattern = re.compile(r"^(?=[^\n])", re.MULTILINE)
_RECEIVER_NOISE_RE: Pattern = re.compile(r"\[.*\]|[*\s()]")


# heading_pattern():
def heading_pattern(mode: str) -> Optional[Pattern]:
    """Return the heading detection pattern for a heading mode name.

    Arguments:
    * *mode* (str): One of `1Word`, `TitleCase`, `Title`, `TitleCase1Word`
      or `""`/`"-"` to disable heading detection.

    Returns:
    * (Optional[Pattern]): The compiled pattern, or None when disabled.

    Raises:
    * ValueError: If *mode* is not a known heading mode.

    """
    if mode not in HEADING_PATTERNS:
        raise ValueError(f"Unknown heading detection method '{mode}'")
    return HEADING_PATTERNS[mode]


# detect_headings():
def detect_headings(text: str, pattern: Optional[Pattern],
                    marker: str = "####") -> str:
    """Prefix each line that entirely matches *pattern* with *marker*.

    Arguments:
    * *text* (str): The (multi-line) doc text to scan.
    * *pattern* (Optional[Pattern]): A line anchored heading pattern.
      When None, *text* is returned unchanged.
    * *marker* (str): The Markdown heading marker to insert.

    Returns:
    * (str): *text* with every heading line turned into `MARKER line`.

    """
    if pattern is None:
        return text
    return pattern.sub(lambda match: f"{marker} {match.group(0)}", text)


# indent():
def indent(text: str, prefix: str) -> str:
    """Prefix every non-empty line of *text* with *prefix*."""
    return _INDENT_RE.sub(prefix, text)


# unwrap_braces():
def unwrap_braces(source: str) -> str:
    """Remove one pair of braces that encloses all of *source*.

    Example bodies are extracted as a block statement, so they arrive
    as `{ ... }`.  Anything else is returned unchanged.

    """
    if len(source) >= 2 and source[0] == "{" and source[-1] == "}":
        return source[1:-1]
    return source


# fence_code():
def fence_code(source: str, plain: bool = False,
               language: str = "go") -> str:
    """Format *source* as a Markdown code block.

    Arguments:
    * *source* (str): The code to format.
    * *plain* (bool): If True, produce an indented (4 space) code block
      for Markdown renderers that do not know about fences.
    * *language* (str): The language tag of the fenced block.

    Returns:
    * (str): The code block, without a trailing newline.

    In fenced mode, enclosing braces are removed (see *unwrap_braces*),
    the common leading white space is removed and leading/trailing
    blank lines are dropped before the code is wrapped in a
    triple-backtick fence.  An empty body still yields a valid fence.
    Trailing white space is removed from every line in both modes.

    """
    if not plain:
        source = textwrap.dedent(unwrap_braces(source))
    source = "\n".join(line.rstrip() for line in source.split("\n"))
    return fence_text(source, plain=plain, language=language)


# fence_text():
def fence_text(text: str, plain: bool = False, language: str = "") -> str:
    """Format *text* literally as a Markdown code block.

    Unlike *fence_code* nothing but leading/trailing blank lines is
    removed, which is what example output needs.

    """
    body: str = text.strip("\n")
    if plain:
        return indent(body, " " * 4)
    return f"```{language}\n{body}\n```"


# strip_placeholder_comment():
def strip_placeholder_comment(text: str) -> str:
    """Remove `// contains filtered or unexported fields` lines."""
    return _PLACEHOLDER_RE.sub("", text)


# drop_invisible_marker():
def drop_invisible_marker(text: str) -> str:
    """Remove the invisible `\\x7f` marker at the end of lines.

    Go doc tools collapse adjacent comment lines into one paragraph
    unless a DEL (`\\x7f`) character is placed at the end of a line.
    Markdown keeps line structure on its own, so the marker (and the
    white space around it) is removed.

    """
    return _INVISIBLE_MARKER_RE.sub("", text)


# split_example_name():
def split_example_name(name: str) -> Tuple[str, str]:
    """Split an example name into its owner and display qualifier.

    Arguments:
    * *name* (str): An example name like `Foo` or `Foo_bar_baz`.

    Returns:
    * (str): The owning symbol name (`Foo`).
    * (str): The parenthesized qualifier (`(bar baz)`) or `""`.

    """
    owner: str
    rest: str
    owner, _, rest = name.partition("_")
    qualifier: str = f"({rest.replace('_', ' ')})" if rest else ""
    return owner, qualifier


# example_qualifier():
def example_qualifier(name: str) -> str:
    """Return just the display qualifier of an example name."""
    return split_example_name(name)[1]


# collapse_space():
def collapse_space(text: str) -> str:
    """Replace every run of white space (newlines included) by one space."""
    return " ".join(text.split())


# code_span():
def code_span(text: str) -> str:
    """Return *text* as an inline Markdown code span.

    Declarations such as `func (b *Buffer) Grow(n int)` contain `*`,
    `_` and `[`, which Markdown would otherwise take as emphasis or
    link syntax.  A code span protects them, even inside link text.

    """
    fence: str = "``" if "`" in text else "`"
    padding: str = " " if text.startswith("`") or text.endswith("`") else ""
    return f"{fence}{padding}{text}{padding}{fence}"


# anchor_name():
def anchor_name(name: str, receiver: str = "") -> str:
    """Return the in-document anchor of a function, method or type.

    Methods are qualified by their receiver type (`Buffer.Len`) so that
    equally named methods of different types get different anchors.
    Pointer markers and type arguments are dropped from the receiver.

    """
    if not receiver:
        return name
    return f"{_RECEIVER_NOISE_RE.sub('', receiver)}.{name}"
