"""document: Load the documentation of the Go package in a directory.

*load* turns a directory path into a *Document*: the package that is
chosen from the files in the directory, its runnable examples, its
import path and whether it is a command.

When the files of a directory declare more than one package, one of
them is picked by rank:

1. `package documentation`: the directory is a command and the package
   exists only to carry its documentation.
2. Any other package name: a regular library.
3. `package main`: the directory is a command.

Among packages of equal rank the first one (in file name order) wins.
External test packages (`package foo_test`) are never picked; their
examples are added to the examples of the picked package.

"""

# <----------------------------- 80 characters -----------------------------> #

from dataclasses import dataclass, field, replace
import enum
import os
from pathlib import Path
import posixpath
import re
import sys
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

from .errors import ManifestError, NotFoundError
from .goparse import Candidate, Example, PackageModel, SourceFile
from .goparse import build_package, extract_examples, parse_directory
from .text import split_example_name


MODULE_FILE: str = "go.mod"
IMPORT_OVERRIDE_FILE: str = ".godoc2md.import"

_MODULE_RE: Pattern = re.compile(r"^module\s+(\S+)$")


# PackageKind:
class PackageKind(enum.Enum):
    """PackageKind: The rank of a package candidate (lower value wins.)"""

    DOCUMENTATION = 0
    REGULAR = 1
    MAIN = 2

    # PackageKind.of():
    @classmethod
    def of(cls, package_name: str) -> "PackageKind":
        """Return the kind of a package name."""
        if package_name == "documentation":
            return cls.DOCUMENTATION
        if package_name == "main":
            return cls.MAIN
        return cls.REGULAR

    # PackageKind.is_command():
    @property
    def is_command(self) -> bool:
        """Return True for `main` and `documentation` packages."""
        return self is not PackageKind.REGULAR


# Document:
@dataclass
class Document:
    """Document: Everything that is rendered for one package.

    Attributes:
    * *name* (str): The display name: the package name, or the directory
      name for a command.
    * *package* (PackageModel): The documentation of the package.
    * *abs_path* (Path): The absolute path of the package directory.
    * *is_command* (bool): True for a `main` or `documentation` package.
    * *import_path* (str): The import path (`""` if it is unknown.)
    * *examples* (Tuple[Example, ...]): The examples, sorted by name.
    * *test_files* (Dict[str, SourceFile]): The test files the examples
      were taken from, keyed by path.

    Constructor:
    * Document(name, package, abs_path, is_command, import_path,
      examples, test_files)

    """

    name: str
    package: PackageModel
    abs_path: Path
    is_command: bool = False
    import_path: str = ""
    examples: Tuple[Example, ...] = ()
    test_files: Dict[str, SourceFile] = field(default_factory=dict,
                                              repr=False)

    # Document.without_funcs():
    def without_funcs(self) -> "Document":
        """Return a copy with all functions and methods removed."""
        package: PackageModel = self.package
        return replace(self, package=replace(
            package,
            funcs=(),
            types=tuple(replace(type_decl, funcs=(), methods=())
                        for type_decl in package.types)))


# group_examples():
def group_examples(examples: Sequence[Example]) -> Dict[str, List[Example]]:
    """Group *examples* by the symbol that owns them.

    The owner is the part of the example name before the first `_`.
    Owners need not be declared symbols.

    """
    groups: Dict[str, List[Example]] = {}
    example: Example
    for example in examples:
        owner: str = split_example_name(example.name)[0]
        groups.setdefault(owner, []).append(example)
    return groups


# find_module_file():
def find_module_file(start: Path) -> Optional[Path]:
    """Return the `go.mod` file in *start* or its closest parent."""
    directory: Path
    for directory in (start,) + tuple(start.parents):
        module_file: Path = directory / MODULE_FILE
        if module_file.is_file():
            return module_file
    return None


# read_module_path():
def read_module_path(module_file: Path) -> str:
    """Return the module path declared by a `go.mod` file.

    Raises:
    * ManifestError: If the file can not be read or has no `module`
      directive.

    """
    try:
        text: str = module_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as read_error:
        raise ManifestError(f"Could not read \"{module_file}\": {read_error}")
    line: str
    for line in text.split("\n"):
        line = line.split("//", 1)[0].strip()
        match: Optional[re.Match] = _MODULE_RE.match(line)
        if match:
            return match.group(1).strip("\"`")
    raise ManifestError(f"\"{module_file}\" has no module directive")


# build_import():
def build_import(target: str, cwd: Optional[Path] = None) -> Tuple[str, Path]:
    """Compute the import path and absolute path of *target*.

    Arguments:
    * *target* (str): The package directory (absolute or relative to
      *cwd*.)
    * *cwd* (Optional[Path]): The working directory (default: the
      process working directory.)

    Returns:
    * (str): The module path joined with the location of *target* within
      the module, always with forward slashes.  `""` when *target* lies
      outside of the module.
    * (Path): The absolute path of *target*.

    Raises:
    * ManifestError: If no readable `go.mod` is found in *cwd* or above.

    """
    if cwd is None:
        cwd = Path.cwd()
    abs_path: Path = Path(os.path.normpath(os.path.join(cwd, target)))
    module_file: Optional[Path] = find_module_file(cwd)
    if module_file is None:
        raise ManifestError(
            f"Could not find {MODULE_FILE} in \"{cwd}\" or its parents")
    module_path: str = read_module_path(module_file)

    relative: str = os.path.relpath(abs_path, module_file.parent)
    relative = relative.replace(os.sep, "/")
    if relative == ".":
        return module_path, abs_path
    if relative == ".." or relative.startswith("../"):
        return "", abs_path
    return posixpath.join(module_path, relative), abs_path


# read_import_override():
def read_import_override(directory: Path) -> Optional[str]:
    """Return the first non-blank line of `.godoc2md.import` (if any.)"""
    try:
        text: str = (directory / IMPORT_OVERRIDE_FILE).read_text(
            encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    line: str
    for line in text.split("\n"):
        if line.strip():
            return line.strip()
    return None


# select_package():
def select_package(candidates: Sequence[Candidate]) -> Optional[
        Tuple[Candidate, PackageKind]]:
    """Pick the package to document among *candidates*.

    Returns:
    * (Optional[Tuple[Candidate, PackageKind]]): The best ranked
      candidate (first one on ties) and its kind, or None if there is
      no candidate with non-test files.

    """
    best: Optional[Tuple[Candidate, PackageKind]] = None
    candidate: Candidate
    for candidate in candidates:
        if candidate.name.endswith("_test") or not candidate.files:
            continue
        kind: PackageKind = PackageKind.of(candidate.name)
        if best is None or kind.value < best[1].value:
            best = (candidate, kind)
    return best


# load():
def load(target: str, tracing: str = "",
         require_manifest: bool = False) -> Optional[Document]:
    """Load the documentation of the package in directory *target*.

    Arguments:
    * *target* (str): The package directory.
    * *tracing* (str): Print tracing lines to stderr when non-empty.
    * *require_manifest* (bool): If True, a missing or unreadable
      `go.mod` is an error.  Otherwise the import path is left empty.

    Returns:
    * (Optional[Document]): The document, or None when the directory has
      no documentable package.

    Raises:
    * NotFoundError: If *target* is not a directory.
    * ParseError: If a Go file does not parse.
    * ManifestError: Only with *require_manifest*.

    """
    next_tracing: str = tracing + " " if tracing else ""
    if tracing:
        print(f"{tracing}=>load('{target}')", file=sys.stderr)

    import_path: str
    abs_path: Path
    try:
        import_path, abs_path = build_import(target)
    except ManifestError as manifest_error:
        if require_manifest:
            raise
        if tracing:
            print(f"{tracing}{manifest_error}", file=sys.stderr)
        import_path = ""
        abs_path = Path(os.path.normpath(os.path.join(Path.cwd(), target)))
    if not abs_path.is_dir():
        raise NotFoundError(f"\"{abs_path}\" is not a directory")

    candidates: List[Candidate] = parse_directory(
        abs_path, tracing=next_tracing)
    override: Optional[str] = read_import_override(abs_path)
    if override is not None:
        import_path = override

    selection: Optional[Tuple[Candidate, PackageKind]] = select_package(
        candidates)
    document: Optional[Document] = None
    if selection is not None:
        chosen: Candidate
        kind: PackageKind
        chosen, kind = selection
        test_files: List[SourceFile] = list(chosen.test_files)
        candidate: Candidate
        for candidate in candidates:
            if candidate.name == f"{chosen.name}_test":
                test_files.extend(candidate.test_files)
        examples: List[Example] = extract_examples(test_files)
        examples.sort(key=lambda example: example.name)
        document = Document(
            abs_path.name if kind.is_command else chosen.name,
            build_package(chosen.name, chosen.files),
            abs_path,
            is_command=kind.is_command,
            import_path=import_path,
            examples=tuple(examples),
            test_files={str(source_file.path): source_file
                        for source_file in test_files})

    if tracing:
        name: Optional[str] = document.name if document is not None else None
        print(f"{tracing}<=load('{target}')=>{name}", file=sys.stderr)
    return document
