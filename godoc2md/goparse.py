"""goparse: Extract Go package documentation from Go source files.

This is the part of a Go front end that documentation needs and nothing
more.  A Go file is tokenized (with Go's automatic semicolon insertion),
its comments are collected into comment groups, and the top level
declarations are split out.  Declaration bodies are never parsed beyond
bracket matching.

The result of *parse_file* is a *SourceFile*.  The *SourceFile*s of one
package are combined by *build_package* into a *PackageModel* using the
usual Go documentation rules:

* Only exported (upper case) identifiers are documented.
* A function that returns exactly one of the package's exported types
  is listed with that type as a constructor.
* Methods are listed with their receiver type.
* A const/var group that is (mostly) of one package type is listed with
  that type.

Runnable examples are extracted from `_test.go` files by
*extract_examples*.

"""

# <----------------------------- 80 characters -----------------------------> #

from dataclasses import dataclass, field
from pathlib import Path
import re
import sys
from typing import Dict, FrozenSet, List, Optional, Pattern, Sequence, Set
from typing import Tuple

from .errors import ParseError


IDENT: str = "IDENT"
NUMBER: str = "NUMBER"
STRING: str = "STRING"
CHAR: str = "CHAR"
COMMENT: str = "COMMENT"
OP: str = "OP"
SEMI: str = "SEMI"

KEYWORDS: FrozenSet[str] = frozenset((
    "break", "case", "chan", "const", "continue", "default", "defer",
    "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
    "interface", "map", "package", "range", "return", "select", "struct",
    "switch", "type", "var"))
# Keywords after which a newline still ends the statement:
_TERMINATING_KEYWORDS: FrozenSet[str] = frozenset((
    "break", "continue", "fallthrough", "return"))
_CLOSERS: Dict[str, str] = {"(": ")", "[": "]", "{": "}"}

PLACEHOLDER_FIELDS: str = "// contains filtered or unexported fields"
PLACEHOLDER_METHODS: str = "// contains filtered or unexported methods"

_DIRECTIVE_RE: Pattern = re.compile(
    r"^(?:line |extern |export |[a-z0-9]+:[a-z0-9])")
_OUTPUT_RE: Pattern = re.compile(
    r"^[ \t\n]*(unordered )?output:", re.IGNORECASE)


# Token:
@dataclass
class Token:
    """Token: One lexical token of a Go source file.

    Attributes:
    * *kind* (str): One of IDENT, NUMBER, STRING, CHAR, COMMENT, OP, SEMI.
    * *text* (str): The token text.  An automatically inserted semicolon
      has the text `"\\n"`.
    * *start* (int): Offset of the first character in the source.
    * *end* (int): Offset just past the last character in the source.
    * *line* (int): The line (1 based) the token starts on.
    * *end_line* (int): The line the token ends on.
    * *after_code* (bool): For comments, True when the comment follows
      another token on the same line.

    """

    kind: str
    text: str
    start: int
    end: int
    line: int
    end_line: int
    after_code: bool = False


# CommentGroup:
@dataclass
class CommentGroup:
    """CommentGroup: Adjacent comments with no code in between.

    Attributes:
    * *comments* (List[Token]): The COMMENT tokens of the group.
    * *trailing* (bool): True if the group started after code on the
       same line.  Such a group is never a doc comment.
    * *next_code* (int): Index into the code token list of the first
       token following the group.

    """

    comments: List[Token]
    trailing: bool = False
    next_code: int = -1

    # CommentGroup.start():
    @property
    def start(self) -> int:
        """Return the source offset of the group."""
        return self.comments[0].start

    # CommentGroup.end():
    @property
    def end(self) -> int:
        """Return the source offset just past the group."""
        return self.comments[-1].end

    # CommentGroup.end_line():
    @property
    def end_line(self) -> int:
        """Return the last line of the group."""
        return self.comments[-1].end_line

    # CommentGroup.text():
    @property
    def text(self) -> str:
        """Return the comment text of the group (see *comment_text*.)"""
        return comment_text(self.comments)


# ValueGroup:
@dataclass
class ValueGroup:
    """ValueGroup: A documented `const` or `var` declaration.

    Attributes:
    * *decl* (str): The declaration source (unexported specs removed.)
    * *doc* (str): The doc comment text.
    * *kind* (str): Either `const` or `var`.
    * *names* (Tuple[str, ...]): The declared names (first name per spec.)
    * *spec_types* (Tuple[str, ...]): Per spec, the package local base
      type name it is declared with, or `""`.
    * *order* (int): Declaration order within the package.

    """

    decl: str
    doc: str = ""
    kind: str = field(default="const", repr=False)
    names: Tuple[str, ...] = field(default=(), repr=False)
    spec_types: Tuple[str, ...] = field(default=(), repr=False)
    order: int = field(default=0, repr=False)

    # ValueGroup.sort_name():
    @property
    def sort_name(self) -> str:
        """Return the sorting name: a single spec sorts by its name."""
        return self.names[0] if len(self.names) == 1 else ""

    # ValueGroup.dominant_type():
    def dominant_type(self) -> str:
        """Return the type that most specs are declared with, or `""`.

        A group is associated with a type if no other type is mentioned
        and at least 75% of its specs are of that type.

        """
        name: str = ""
        frequency: int = 0
        spec_type: str
        for spec_type in self.spec_types:
            if spec_type:
                if name and name != spec_type:
                    return ""
                name = spec_type
                frequency += 1
        if name and frequency >= int(len(self.spec_types) * 0.75):
            return name
        return ""


# FuncDecl:
@dataclass
class FuncDecl:
    """FuncDecl: A function or method declaration.

    Attributes:
    * *name* (str): The function name.
    * *receiver* (str): The receiver type (e.g. `*Buffer`) or `""` for a
      plain function.
    * *decl* (str): The declaration source without the body.
    * *doc* (str): The doc comment text.
    * *receiver_type* (str): The base type name of the receiver.
    * *result_types* (Tuple[str, ...]): Per result field, the local base
      type name, or `""` if it is not a local named type.
    * *type_params* (Tuple[str, ...]): The type parameter names.
    * *has_params* (bool): True if the function takes any parameters.
    * *body_start* (int): Source offset of the body `{` (-1 if none.)
    * *body_end* (int): Source offset just past the body `}`.

    """

    name: str
    receiver: str = ""
    decl: str = ""
    doc: str = ""
    receiver_type: str = field(default="", repr=False)
    result_types: Tuple[str, ...] = field(default=(), repr=False)
    type_params: Tuple[str, ...] = field(default=(), repr=False)
    has_params: bool = field(default=False, repr=False)
    body_start: int = field(default=-1, repr=False)
    body_end: int = field(default=-1, repr=False)


# TypeDecl:
@dataclass
class TypeDecl:
    """TypeDecl: A documented type and everything listed with it.

    Attributes:
    * *name* (str): The type name.
    * *decl* (str): The declaration source.
    * *doc* (str): The doc comment text.
    * *consts* (Tuple[ValueGroup, ...]): Constants of this type.
    * *vars* (Tuple[ValueGroup, ...]): Variables of this type.
    * *funcs* (Tuple[FuncDecl, ...]): Constructors of this type.
    * *methods* (Tuple[FuncDecl, ...]): Methods of this type.

    """

    name: str
    decl: str
    doc: str = ""
    consts: Tuple[ValueGroup, ...] = ()
    vars: Tuple[ValueGroup, ...] = ()
    funcs: Tuple[FuncDecl, ...] = ()
    methods: Tuple[FuncDecl, ...] = ()


# PackageModel:
@dataclass
class PackageModel:
    """PackageModel: The documentation of one Go package.

    Attributes:
    * *name* (str): The package name from the package clause.
    * *doc* (str): The package comment text.
    * *consts* (Tuple[ValueGroup, ...]): Package level constants.
    * *vars* (Tuple[ValueGroup, ...]): Package level variables.
    * *funcs* (Tuple[FuncDecl, ...]): Package level functions.
    * *types* (Tuple[TypeDecl, ...]): Types sorted by name.

    """

    name: str
    doc: str = ""
    consts: Tuple[ValueGroup, ...] = ()
    vars: Tuple[ValueGroup, ...] = ()
    funcs: Tuple[FuncDecl, ...] = ()
    types: Tuple[TypeDecl, ...] = ()


# Example:
@dataclass
class Example:
    """Example: A runnable example from a `_test.go` file.

    Attributes:
    * *name* (str): `Symbol` or `Symbol_description` (`Example` removed.)
    * *code* (str): The example body (braces included) or, for a whole
      program example, the entire file.
    * *output* (str): The expected output (`""` if none is given.)
    * *doc* (str): The doc comment of the example function.
    * *whole_program* (bool): True if *code* is a complete file.
    * *unordered* (bool): True for `// Unordered output:`.

    """

    name: str
    code: str
    output: str = ""
    doc: str = ""
    whole_program: bool = False
    unordered: bool = False


# SourceFile:
@dataclass
class SourceFile:
    """SourceFile: The declarations of one parsed Go file.

    Attributes:
    * *path* (Path): The file path.
    * *package* (str): The package name from the package clause.
    * *doc* (str): The package comment text of this file.
    * *source* (str): The file contents.
    * *values* (List[ValueGroup]): Exported const/var declarations.
    * *types* (List[TypeDecl]): Exported type declarations.
    * *funcs* (List[FuncDecl]): All function and method declarations.
    * *groups* (List[CommentGroup]): All comment groups.
    * *decl_count* (int): Number of non-import declarations plus plain
      (receiver-less) functions.

    """

    path: Path
    package: str
    doc: str = ""
    source: str = field(default="", repr=False)
    values: List[ValueGroup] = field(default_factory=list, repr=False)
    types: List[TypeDecl] = field(default_factory=list, repr=False)
    funcs: List[FuncDecl] = field(default_factory=list, repr=False)
    groups: List[CommentGroup] = field(default_factory=list, repr=False)
    decl_count: int = field(default=0, repr=False)

    # SourceFile.is_test():
    @property
    def is_test(self) -> bool:
        """Return True for a `_test.go` file."""
        return self.path.name.endswith("_test.go")


# Candidate:
@dataclass
class Candidate:
    """Candidate: The files of one package name found in a directory.

    Attributes:
    * *name* (str): The package name.
    * *files* (List[SourceFile]): The non-test files.
    * *test_files* (List[SourceFile]): The `_test.go` files.

    """

    name: str
    files: List[SourceFile] = field(default_factory=list)
    test_files: List[SourceFile] = field(default_factory=list)


# is_exported():
def is_exported(name: str) -> bool:
    """Return True if *name* is an exported Go identifier."""
    return bool(name) and name[0].isupper()


# comment_text():
def comment_text(comments: Sequence[Token]) -> str:
    """Return the text of a comment group.

    Comment markers are removed (`//` together with one following space,
    `/*` and `*/`), tool directives such as `//go:generate` are dropped,
    trailing white space is removed, leading and trailing blank lines are
    removed and runs of blank lines are collapsed into one.  Non-empty
    text ends with a newline.

    """
    lines: List[str] = []
    comment: Token
    for comment in comments:
        text: str = comment.text
        if text.startswith("//"):
            text = text[2:]
            if text.startswith(" "):
                text = text[1:]
            elif _DIRECTIVE_RE.match(text):
                continue
        else:
            text = text[2:-2]
        lines.extend(line.rstrip() for line in text.split("\n"))

    result: List[str] = []
    line: str
    for line in lines:
        if line or (result and result[-1]):
            result.append(line)
    while result and not result[-1]:
        result.pop()
    return "\n".join(result) + "\n" if result else ""


# tokenize():
def tokenize(source: str, path: str = "") -> List[Token]:
    """Split Go *source* into tokens.

    Arguments:
    * *source* (str): The Go source code.
    * *path* (str): The file name used in error messages.

    Returns:
    * (List[Token]): The tokens, comments included.  A SEMI token is
      inserted wherever Go would insert an automatic semicolon.

    Raises:
    * ParseError: For unterminated comments and literals.

    """
    tokens: List[Token] = []
    length: int = len(source)
    index: int = 1 if source.startswith("\ufeff") else 0  # Byte order mark.
    line: int = 1
    last: Optional[Token] = None  # Last non-comment token.

    def needs_semicolon() -> bool:
        if last is None:
            return False
        if last.kind == IDENT:
            return (last.text not in KEYWORDS
                    or last.text in _TERMINATING_KEYWORDS)
        if last.kind in (NUMBER, STRING, CHAR):
            return True
        return last.kind == OP and last.text in (")", "]", "}", "++", "--")

    def error(message: str, at_line: int) -> ParseError:
        return ParseError(f"{path}:{at_line}: {message}")

    while index < length:
        char: str = source[index]
        start: int = index
        start_line: int = line
        kind: str = ""

        if char == "\n":
            if needs_semicolon():
                last = Token(SEMI, "\n", index, index, line, line)
                tokens.append(last)
            index += 1
            line += 1
            continue
        elif char in " \t\r\f":
            index += 1
            continue
        elif source.startswith("//", index):
            newline: int = source.find("\n", index)
            index = length if newline < 0 else newline
            kind = COMMENT
        elif source.startswith("/*", index):
            close: int = source.find("*/", index + 2)
            if close < 0:
                raise error("comment not terminated", line)
            index = close + 2
            line += source.count("\n", start, index)
            kind = COMMENT
            if line != start_line and needs_semicolon():
                last = Token(SEMI, "\n", start, start, start_line, start_line)
                tokens.append(last)
        elif char == "`":
            close = source.find("`", index + 1)
            if close < 0:
                raise error("raw string literal not terminated", line)
            index = close + 1
            line += source.count("\n", start, index)
            kind = STRING
        elif char in "\"'":
            index += 1
            while index < length and source[index] != char:
                if source[index] == "\n":
                    break
                index += 2 if source[index] == "\\" else 1
            if index >= length or source[index] != char:
                what: str = "string" if char == '"' else "rune"
                raise error(f"{what} literal not terminated", line)
            index += 1
            kind = STRING if char == '"' else CHAR
        elif char.isdigit() or (char == "." and index + 1 < length
                                and source[index + 1].isdigit()):
            is_hex: bool = source[index:index + 2].lower() == "0x"
            index += 1
            while index < length:
                next_char: str = source[index]
                previous: str = source[index - 1]
                if next_char.isalnum() or next_char in "_.":
                    index += 1
                elif next_char in "+-" and (
                        previous in "pP" or (previous in "eE" and not is_hex)):
                    index += 1
                else:
                    break
            kind = NUMBER
        elif char.isalpha() or char == "_":
            index += 1
            while index < length and (source[index].isalnum()
                                      or source[index] == "_"):
                index += 1
            kind = IDENT
        else:
            two: str = source[index:index + 2]
            index += 2 if two in ("++", "--") else 1
            kind = SEMI if char == ";" else OP

        token: Token = Token(kind, source[start:index], start, index,
                             start_line, line)
        if kind == COMMENT:
            token.after_code = (last is not None and last.text != "\n"
                                and last.end_line == start_line)
        else:
            last = token
        tokens.append(token)

    if needs_semicolon():
        tokens.append(Token(SEMI, "\n", length, length, line, line))
    return tokens


# _group_comments():
def _group_comments(tokens: Sequence[Token]) -> List[CommentGroup]:
    """Collect the COMMENT tokens of *tokens* into comment groups."""
    groups: List[CommentGroup] = []
    pending: List[CommentGroup] = []
    current: Optional[CommentGroup] = None
    code_index: int = 0
    token: Token
    for token in tokens:
        if token.kind != COMMENT:
            if not (token.kind == SEMI and token.text == "\n"):
                group: CommentGroup
                for group in pending:
                    group.next_code = code_index
                pending = []
                current = None
            code_index += 1
        elif (current is not None and not current.trailing
              and not token.after_code
              and token.line <= current.end_line + 1):
            current.comments.append(token)
        else:
            current = CommentGroup([token], trailing=token.after_code)
            groups.append(current)
            pending.append(current)
    for group in pending:
        group.next_code = code_index
    return groups


# _FileParser:
class _FileParser:
    """_FileParser: Parse the top level declarations of one Go file."""

    # _FileParser.__init__():
    def __init__(self, path: Path, source: str) -> None:
        """Tokenize *source* and prepare for parsing."""
        self.path: Path = path
        self.source: str = source
        self.tokens: List[Token] = tokenize(source, str(path))
        self.comments: List[Token] = [
            token for token in self.tokens if token.kind == COMMENT]
        self.code: List[Token] = [
            token for token in self.tokens if token.kind != COMMENT]
        self.groups: List[CommentGroup] = _group_comments(self.tokens)
        self.leads: Dict[int, CommentGroup] = {}
        group: CommentGroup
        for group in self.groups:
            if (not group.trailing and group.next_code < len(self.code)
                    and group.end_line + 1
                    == self.code[group.next_code].line):
                self.leads[group.next_code] = group
        self.lines: List[str] = source.split("\n")
        self.order: int = 0

    # _FileParser.error():
    def error(self, index: int, message: str) -> ParseError:
        """Return a ParseError located at code token *index*."""
        line: int = (self.code[index].line if index < len(self.code)
                     else len(self.lines))
        return ParseError(f"{self.path}:{line}: {message}")

    # _FileParser.text():
    def text(self, index: int) -> str:
        """Return the text of code token *index* (`""` past the end.)"""
        return self.code[index].text if index < len(self.code) else ""

    # _FileParser.is_semi():
    def is_semi(self, index: int) -> bool:
        """Return True at a statement end (or past the last token.)"""
        return index >= len(self.code) or self.code[index].kind == SEMI

    # _FileParser.doc():
    def doc(self, index: int) -> str:
        """Return the doc comment text of code token *index*."""
        group: Optional[CommentGroup] = self.leads.get(index)
        return group.text if group is not None else ""

    # _FileParser.match():
    def match(self, index: int) -> int:
        """Return the index of the bracket closing the one at *index*."""
        stack: List[str] = []
        position: int
        for position in range(index, len(self.code)):
            token: Token = self.code[position]
            if token.kind != OP:
                continue
            if token.text in _CLOSERS:
                stack.append(_CLOSERS[token.text])
            elif token.text in ")]}":
                if not stack or stack.pop() != token.text:
                    raise self.error(position, f"unexpected '{token.text}'")
                if not stack:
                    return position
        raise self.error(index, f"'{self.code[index].text}' is not closed")

    # _FileParser.skip_to_semi():
    def skip_to_semi(self, index: int) -> int:
        """Return the index of the statement end at or after *index*."""
        while not self.is_semi(index):
            if self.text(index) in _CLOSERS:
                index = self.match(index)
            index += 1
        return index

    # _FileParser.split():
    def split(self, start: int, end: int,
              separator: str) -> List[Tuple[int, int]]:
        """Split code tokens [*start*, *end*) at top level *separator*s.

        Returns:
        * (List[Tuple[int, int]]): The non-empty (start, end) ranges.

        """
        ranges: List[Tuple[int, int]] = []
        piece_start: int = start
        index: int = start
        while index < end:
            token: Token = self.code[index]
            if token.text in _CLOSERS and token.kind == OP:
                index = self.match(index) + 1
                continue
            if (token.kind == SEMI if separator == ";"
                    else token.text == separator):
                if index > piece_start:
                    ranges.append((piece_start, index))
                piece_start = index + 1
            index += 1
        if end > piece_start:
            ranges.append((piece_start, end))
        return ranges

    # _FileParser.line_indent():
    def line_indent(self, offset: int) -> str:
        """Return the leading white space of the line holding *offset*."""
        line_start: int = self.source.rfind("\n", 0, offset) + 1
        line: str = self.source[line_start:offset]
        return line[:len(line) - len(line.lstrip(" \t"))]

    # _FileParser.span_end():
    def span_end(self, index: int) -> int:
        """Return the end offset of code token *index* plus line comment."""
        token: Token = self.code[index]
        end: int = token.end
        comment: Token
        for comment in self.comments:
            if comment.start >= end and comment.line == token.end_line:
                end = comment.end
                break
        return end

    # _FileParser.span_start():
    def span_start(self, index: int) -> int:
        """Return the start offset of code token *index* or its doc."""
        group: Optional[CommentGroup] = self.leads.get(index)
        return group.start if group is not None else self.code[index].start

    # _FileParser.base_type_name():
    def base_type_name(self, start: int, end: int) -> Tuple[str, bool]:
        """Return the base type name of a type expression.

        Returns:
        * (str): The name, `""` if the expression is not a named type.
        * (bool): True if the name is qualified by an imported package.

        """
        index: int = start
        while index < end and self.text(index) in ("*", "("):
            index += 1
        if index >= end or self.code[index].kind != IDENT:
            return "", False
        name: str = self.code[index].text
        if name in KEYWORDS:
            return "", False
        if index + 2 < end and self.text(index + 1) == ".":
            return self.text(index + 2), True
        return name, False

    # _FileParser.is_named_field():
    def is_named_field(self, start: int, end: int) -> bool:
        """Return True if tokens [start, end) are `name Type`."""
        if end - start < 2 or self.code[start].kind != IDENT or \
           self.code[start].text in KEYWORDS:
            return False
        second: str = self.text(start + 1)
        if second == ".":
            return False
        if second == "[":
            after: int = self.match(start + 1) + 1
            return after < end and self.code[after].kind != STRING
        return self.code[start + 1].kind != STRING

    # _FileParser.field_names():
    def field_names(self, start: int, end: int) -> List[str]:
        """Return the leading `a, b, c` identifiers of tokens [start, end)."""
        names: List[str] = []
        index: int = start
        while index < end and self.code[index].kind == IDENT:
            names.append(self.code[index].text)
            index += 1
            if self.text(index) != ",":
                break
            index += 1
        return names

    # _FileParser.parse():
    def parse(self) -> SourceFile:
        """Parse the file and return its SourceFile."""
        index: int = 0
        if self.text(index) != "package" or (
                index + 1 >= len(self.code)
                or self.code[index + 1].kind != IDENT):
            raise self.error(index, "expected 'package' clause")
        source_file: SourceFile = SourceFile(
            self.path, self.code[index + 1].text, doc=self.doc(index),
            source=self.source, groups=self.groups)
        index = self.skip_to_semi(index + 2)

        while index < len(self.code):
            keyword: str = self.text(index)
            if self.code[index].kind == SEMI:
                index += 1
                continue
            elif keyword == "import":
                index = self.skip_to_semi(index + 1)
            elif keyword in ("const", "var"):
                source_file.decl_count += 1
                value: Optional[ValueGroup]
                value, index = self.parse_value_decl(index)
                if value is not None:
                    source_file.values.append(value)
            elif keyword == "type":
                source_file.decl_count += 1
                types: List[TypeDecl]
                types, index = self.parse_type_decl(index)
                source_file.types.extend(types)
            elif keyword == "func":
                func: FuncDecl
                func, index = self.parse_func_decl(index)
                if not func.receiver:
                    source_file.decl_count += 1
                source_file.funcs.append(func)
            else:
                raise self.error(
                    index, f"expected declaration, found '{keyword}'")
        return source_file

    # _FileParser.parse_value_spec():
    def parse_value_spec(self, start: int, end: int,
                         is_const: bool, previous: str) -> Tuple[
                             List[str], str, str]:
        """Parse one const/var spec in tokens [start, end).

        Returns:
        * (List[str]): The declared names.
        * (str): The package local base type of the spec (or `""`.)
        * (str): The type to carry forward to the next const spec.

        """
        names: List[str] = self.field_names(start, end)
        index: int = start + max(0, 2 * len(names) - 1)
        type_end: int = index
        while type_end < end and self.text(type_end) != "=":
            if self.text(type_end) in _CLOSERS:
                type_end = self.match(type_end)
            type_end += 1
        has_values: bool = type_end < end
        spec_type: str = ""
        if type_end > index:
            name: str
            imported: bool
            name, imported = self.base_type_name(index, type_end)
            if not imported:
                spec_type = name
        elif is_const and not has_values:
            spec_type = previous
        return names, spec_type, spec_type

    # _FileParser.parse_value_decl():
    def parse_value_decl(self, index: int) -> Tuple[
            Optional[ValueGroup], int]:
        """Parse a `const` or `var` declaration starting at *index*.

        Returns:
        * (Optional[ValueGroup]): The declaration with unexported specs
          removed, or None if nothing exported remains.
        * (int): The index of the statement end.

        """
        keyword: Token = self.code[index]
        is_const: bool = keyword.text == "const"
        doc: str = self.doc(index)
        specs: List[Tuple[int, int]]
        end: int
        if self.text(index + 1) == "(":
            close: int = self.match(index + 1)
            specs = self.split(index + 2, close, ";")
            end = self.skip_to_semi(close + 1)
            last: int = close
        else:
            end = self.skip_to_semi(index + 1)
            specs = [(index + 1, end)]
            last = end - 1

        previous: str = ""
        kept_names: List[str] = []
        spec_types: List[str] = []
        removed_lines: Set[int] = set()
        kept_lines: Set[int] = set()
        spec_start: int
        spec_end: int
        for spec_start, spec_end in specs:
            names: List[str]
            spec_type: str
            names, spec_type, previous = self.parse_value_spec(
                spec_start, spec_end, is_const, previous)
            lead: Optional[CommentGroup] = self.leads.get(spec_start)
            first_line: int = (lead.comments[0].line if lead is not None
                               else self.code[spec_start].line)
            last_line: int = self.code[spec_end - 1].end_line
            lines: range = range(first_line, last_line + 1)
            if any(is_exported(name) for name in names):
                kept_names.append(names[0])
                spec_types.append(spec_type)
                kept_lines.update(lines)
            else:
                removed_lines.update(lines)
        if not kept_names:
            return None, end

        self.order += 1
        decl_end: int = self.span_end(last)
        decl_lines: List[str] = self.source[keyword.start:decl_end].split("\n")
        removed_lines -= kept_lines
        decl: str = "\n".join(
            text for number, text in enumerate(decl_lines, keyword.line)
            if number not in removed_lines)
        return ValueGroup(decl, doc, kind=keyword.text,
                          names=tuple(kept_names),
                          spec_types=tuple(spec_types),
                          order=self.order), end

    # _FileParser.parse_type_decl():
    def parse_type_decl(self, index: int) -> Tuple[List[TypeDecl], int]:
        """Parse a `type` declaration (or group) starting at *index*."""
        doc: str = self.doc(index)
        specs: List[Tuple[int, int]]
        end: int
        grouped: bool = self.text(index + 1) == "("
        if grouped:
            close: int = self.match(index + 1)
            specs = self.split(index + 2, close, ";")
            end = self.skip_to_semi(close + 1)
        else:
            end = self.skip_to_semi(index + 1)
            specs = [(index + 1, end)]

        types: List[TypeDecl] = []
        spec_start: int
        spec_end: int
        for spec_start, spec_end in specs:
            name: str = self.text(spec_start)
            if not is_exported(name):
                continue
            spec_text: str = self.type_spec_text(spec_start, spec_end)
            if grouped:
                base_indent: str = self.line_indent(
                    self.code[spec_start].start)
                lines: List[str] = spec_text.split("\n")
                spec_text = "\n".join(
                    [lines[0]] + [line[len(base_indent):]
                                  if line.startswith(base_indent) else line
                                  for line in lines[1:]])
                spec_doc: str = self.doc(spec_start) or doc
            else:
                spec_doc = doc
            types.append(TypeDecl(name, f"type {spec_text}", spec_doc))
        return types, end

    # _FileParser.type_spec_text():
    def type_spec_text(self, start: int, end: int) -> str:
        """Return the source of a type spec, unexported members removed."""
        spec_end_offset: int = self.span_end(end - 1)
        index: int = start + 1
        if self.text(index) == "[" and self.match(index) - index > 2:
            index = self.match(index) + 1  # Type parameters.
        if self.text(index) == "=":
            index += 1
        keyword: str = self.text(index)
        if keyword not in ("struct", "interface") or \
           self.text(index + 1) != "{":
            return self.source[self.code[start].start:spec_end_offset]

        open_brace: int = index + 1
        close_brace: int = self.match(open_brace)
        members: List[Tuple[int, int]] = self.split(
            open_brace + 1, close_brace, ";")
        kept: List[Tuple[int, int]] = []
        member_start: int
        member_end: int
        for member_start, member_end in members:
            if self.is_exported_member(keyword, member_start, member_end):
                kept.append((member_start, member_end))
        if len(kept) == len(members):
            return self.source[self.code[start].start:spec_end_offset]

        close_token: Token = self.code[close_brace]
        close_indent: str = self.line_indent(close_token.start)
        if self.source[self.source.rfind("\n", 0, close_token.start) + 1:
                       close_token.start].strip():
            close_indent = self.line_indent(self.code[start].start)
        member_indent: str = (
            self.line_indent(self.code[members[0][0]].start)
            if members and self.code[members[0][0]].line
            != self.code[open_brace].line else close_indent + "\t")
        body: List[str] = [
            member_indent + self.source[self.span_start(member_start):
                                        self.span_end(member_end - 1)]
            for member_start, member_end in kept]
        placeholder: str = (PLACEHOLDER_FIELDS if keyword == "struct"
                            else PLACEHOLDER_METHODS)
        body.append(member_indent + placeholder)
        return (self.source[self.code[start].start:
                            self.code[open_brace].end]
                + "\n" + "\n".join(body) + "\n" + close_indent + "}"
                + self.source[close_token.end:spec_end_offset])

    # _FileParser.is_exported_member():
    def is_exported_member(self, keyword: str, start: int, end: int) -> bool:
        """Return True if a struct field or interface element is kept."""
        first: Token = self.code[start]
        if keyword == "interface":
            if first.kind == IDENT and self.text(start + 1) == "(":
                return is_exported(first.text)
            if any(self.text(index) in ("~", "|")
                   for index in range(start, end)):
                return True  # Type constraint.
        elif self.is_named_field(start, end):
            return any(is_exported(name)
                       for name in self.field_names(start, end))
        name: str
        name, _ = self.base_type_name(start, end)
        return is_exported(name)

    # _FileParser.parse_func_decl():
    def parse_func_decl(self, index: int) -> Tuple[FuncDecl, int]:
        """Parse a `func` declaration starting at *index*."""
        func_token: Token = self.code[index]
        doc: str = self.doc(index)
        index += 1
        receiver: str = ""
        receiver_type: str = ""
        if self.text(index) == "(":
            close: int = self.match(index)
            type_start: int = index + 1
            if (close - type_start >= 2
                    and self.code[type_start].kind == IDENT
                    and self.text(type_start + 1) not in (".", "[")):
                type_start += 1
            if close > type_start:
                receiver = self.source[self.code[type_start].start:
                                       self.code[close - 1].end]
                receiver_type, _ = self.base_type_name(type_start, close)
            index = close + 1

        if index >= len(self.code) or self.code[index].kind != IDENT:
            raise self.error(index, "expected function name")
        name: str = self.code[index].text
        index += 1

        type_params: List[str] = []
        if self.text(index) == "[":
            close = self.match(index)
            piece_start: int
            for piece_start, _ in self.split(index + 1, close, ","):
                if self.code[piece_start].kind == IDENT:
                    type_params.append(self.code[piece_start].text)
            index = close + 1

        if self.text(index) != "(":
            raise self.error(index, "expected '(' after function name")
        params_close: int = self.match(index)
        has_params: bool = params_close > index + 1
        index = params_close + 1
        last_signature: int = params_close

        result_ranges: List[Tuple[int, int]] = []
        if self.text(index) == "(":
            close = self.match(index)
            result_ranges = self.result_fields(index + 1, close)
            last_signature = close
            index = close + 1
        else:
            result_start: int = index
            while not self.is_semi(index) and self.text(index) != "{":
                if self.text(index) in ("struct", "interface") and \
                   self.text(index + 1) == "{":
                    index = self.match(index + 1) + 1
                elif self.text(index) in ("(", "["):
                    index = self.match(index) + 1
                else:
                    index += 1
            if index > result_start:
                result_ranges = [(result_start, index)]
                last_signature = index - 1

        result_types: List[str] = []
        result_start_index: int
        result_end: int
        for result_start_index, result_end in result_ranges:
            if self.text(result_start_index) == "[":
                result_start_index = self.match(result_start_index) + 1
            result_name: str
            imported: bool
            result_name, imported = self.base_type_name(
                result_start_index, result_end)
            result_types.append(
                "" if imported or result_name in type_params
                else result_name)

        body_start: int = -1
        body_end: int = -1
        if self.text(index) == "{":
            close = self.match(index)
            body_start = self.code[index].start
            body_end = self.code[close].end
            index = close + 1
        if not self.is_semi(index):
            raise self.error(index, f"unexpected '{self.text(index)}'")

        decl: str = self.source[func_token.start:
                                self.code[last_signature].end]
        return FuncDecl(name, receiver, decl, doc,
                        receiver_type=receiver_type,
                        result_types=tuple(result_types),
                        type_params=tuple(type_params),
                        has_params=has_params,
                        body_start=body_start, body_end=body_end), index

    # _FileParser.result_fields():
    def result_fields(self, start: int, end: int) -> List[Tuple[int, int]]:
        """Return the type token ranges of a parenthesized result list."""
        pieces: List[Tuple[int, int]] = self.split(start, end, ",")
        named: bool = any(self.is_named_field(piece_start, piece_end)
                          for piece_start, piece_end in pieces)
        if not named:
            return pieces
        return [(piece_start + 1, piece_end)
                for piece_start, piece_end in pieces
                if self.is_named_field(piece_start, piece_end)]


# parse_file():
def parse_file(path: Path, source: Optional[str] = None) -> SourceFile:
    """Parse the Go file at *path*.

    Arguments:
    * *path* (Path): The file to parse.
    * *source* (Optional[str]): The file contents.  If None, the file is
      read from *path*.

    Returns:
    * (SourceFile): The declarations of the file.

    Raises:
    * ParseError: If the file can not be read or parsed.

    """
    if source is None:
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as read_error:
            raise ParseError(f"{path}: {read_error}")
    return _FileParser(path, source).parse()


# parse_directory():
def parse_directory(directory: Path, tracing: str = "") -> List[Candidate]:
    """Parse the Go files of *directory* (no recursion.)

    Arguments:
    * *directory* (Path): The directory to scan.  Hidden files and files
      that do not end in `.go` are ignored.

    Returns:
    * (List[Candidate]): One candidate per package name, in the order
      the names are first seen in file name order.

    Raises:
    * ParseError: If any file fails to parse.

    """
    if tracing:
        print(f"{tracing}=>parse_directory({directory})", file=sys.stderr)
    candidates: Dict[str, Candidate] = {}
    try:
        paths: List[Path] = sorted(
            path for path in directory.iterdir()
            if path.name.endswith(".go") and not path.name.startswith(".")
            and path.is_file())
    except OSError as os_error:
        raise ParseError(f"Could not read \"{directory}\": {os_error}")

    path: Path
    for path in paths:
        source_file: SourceFile = parse_file(path)
        if tracing:
            print(f"{tracing} {path.name}: package {source_file.package}",
                  file=sys.stderr)
        candidate: Candidate = candidates.setdefault(
            source_file.package, Candidate(source_file.package))
        if source_file.is_test:
            candidate.test_files.append(source_file)
        else:
            candidate.files.append(source_file)

    if tracing:
        print(f"{tracing}<=parse_directory({directory})=>"
              f"{list(candidates)}", file=sys.stderr)
    return list(candidates.values())


# _sorted_values():
def _sorted_values(values: Sequence[ValueGroup]) -> Tuple[ValueGroup, ...]:
    """Sort groups first, then single specs by name."""
    return tuple(sorted(values, key=lambda value: (value.sort_name,
                                                   value.order)))


# _sorted_funcs():
def _sorted_funcs(funcs: Sequence[FuncDecl]) -> Tuple[FuncDecl, ...]:
    return tuple(sorted(funcs, key=lambda func: func.name))


# build_package():
def build_package(name: str,
                  files: Sequence[SourceFile]) -> PackageModel:
    """Combine the (non-test) files of a package into a PackageModel.

    Arguments:
    * *name* (str): The package name.
    * *files* (Sequence[SourceFile]): The parsed files in file order.

    Returns:
    * (PackageModel): The package documentation.

    """
    docs: List[str] = [
        source_file.doc for source_file in files if source_file.doc]
    type_decls: Dict[str, TypeDecl] = {}
    type_values: Dict[str, List[ValueGroup]] = {}
    type_funcs: Dict[str, List[FuncDecl]] = {}
    type_methods: Dict[str, List[FuncDecl]] = {}
    source_file: SourceFile
    for source_file in files:
        type_decl: TypeDecl
        for type_decl in source_file.types:
            if type_decl.name not in type_decls:
                type_decls[type_decl.name] = type_decl
                type_values[type_decl.name] = []
                type_funcs[type_decl.name] = []
                type_methods[type_decl.name] = []

    values: List[ValueGroup] = []
    funcs: List[FuncDecl] = []
    order: int = 0
    for source_file in files:
        value: ValueGroup
        for value in source_file.values:
            order += 1
            value.order = order
            owner: str = value.dominant_type()
            if is_exported(owner) and owner in type_decls:
                type_values[owner].append(value)
            else:
                values.append(value)

        func: FuncDecl
        for func in source_file.funcs:
            if not is_exported(func.name):
                continue
            if func.receiver:
                if func.receiver_type in type_methods:
                    type_methods[func.receiver_type].append(func)
                continue
            results: List[str] = [
                result for result in func.result_types
                if is_exported(result) and result in type_decls]
            if len(results) == 1:
                type_funcs[results[0]].append(func)
            else:
                funcs.append(func)

    types: List[TypeDecl] = []
    type_name: str
    for type_name in sorted(type_decls):
        type_decl = type_decls[type_name]
        type_value_list: List[ValueGroup] = type_values[type_name]
        types.append(TypeDecl(
            type_decl.name, type_decl.decl, type_decl.doc,
            consts=_sorted_values(
                [value for value in type_value_list if value.kind == "const"]),
            vars=_sorted_values(
                [value for value in type_value_list if value.kind == "var"]),
            funcs=_sorted_funcs(type_funcs[type_name]),
            methods=_sorted_funcs(type_methods[type_name])))

    return PackageModel(
        name, "\n".join(docs),
        consts=_sorted_values(
            [value for value in values if value.kind == "const"]),
        vars=_sorted_values(
            [value for value in values if value.kind == "var"]),
        funcs=_sorted_funcs(funcs),
        types=tuple(types))


# _is_test_name():
def _is_test_name(name: str, prefix: str) -> bool:
    """Return True if *name* is *prefix* or *prefix* + `NotLowerCase...`."""
    if not name.startswith(prefix):
        return False
    return len(name) == len(prefix) or not name[len(prefix)].islower()


# _cut_lines():
def _cut_lines(text: str, start: int, end: int) -> str:
    """Remove text[start:end] together with the lines it sits on alone."""
    line_start: int = text.rfind("\n", 0, start) + 1
    if not text[line_start:start].strip():
        start = line_start
        line_end: int = text.find("\n", end)
        if line_end >= 0 and not text[end:line_end].strip():
            end = line_end + 1
    return text[:start] + text[end:]


# extract_examples():
def extract_examples(files: Sequence[SourceFile]) -> List[Example]:
    """Return the runnable examples found in the test *files*.

    An example is a function named `Example...` without parameters,
    results or type parameters.  The expected output is taken from the
    last comment of the body when it starts with `Output:` (or
    `Unordered output:`); that comment is removed from the code.

    """
    examples: List[Example] = []
    source_file: SourceFile
    for source_file in files:
        has_tests: bool = False
        found: List[Tuple[FuncDecl, Example, Optional[CommentGroup]]] = []
        func: FuncDecl
        for func in source_file.funcs:
            if func.receiver:
                continue
            if (_is_test_name(func.name, "Test")
                    or _is_test_name(func.name, "Benchmark")
                    or _is_test_name(func.name, "Fuzz")):
                has_tests = True
                continue
            if (not _is_test_name(func.name, "Example") or func.has_params
                    or func.result_types or func.type_params
                    or func.body_start < 0):
                continue

            output_group: Optional[CommentGroup] = None
            group: CommentGroup
            for group in source_file.groups:
                if func.body_start < group.start and \
                   group.end < func.body_end:
                    output_group = group
            output: str = ""
            unordered: bool = False
            if output_group is not None:
                match: Optional[re.Match] = _OUTPUT_RE.match(output_group.text)
                if match is None:
                    output_group = None
                else:
                    unordered = match.group(1) is not None
                    output = output_group.text[match.end():].lstrip(" ")
                    if output.startswith("\n"):
                        output = output[1:]

            code: str = source_file.source[func.body_start:func.body_end]
            if output_group is not None:
                code = _cut_lines(code, output_group.start - func.body_start,
                                  output_group.end - func.body_start)
            example: Example = Example(
                func.name[len("Example"):], code, output, func.doc,
                unordered=unordered)
            found.append((func, example, output_group))

        if len(found) == 1 and not has_tests and source_file.decl_count > 1:
            example = found[0][1]
            output_group = found[0][2]
            code = source_file.source
            if output_group is not None:
                code = _cut_lines(code, output_group.start, output_group.end)
            example.code = code.strip("\n")
            example.whole_program = True
        examples.extend(example for _, example, _ in found)
    return examples
