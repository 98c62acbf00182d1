#!/usr/bin/env python3
"""godoc2md: Generate Markdown documentation for a Go package.

Usage:

     godoc2md [flags] [directory]

The package in *directory* (default: the current directory) is written
as Markdown to standard output (or to the `-o` file.)  Exit codes:

* 0: Success (also for `-h`/`-help`.)
* 1: The package could not be found or the template/output failed.
* 2: Bad command line flags, or no package in the current directory
  when no directory was given.

"""

# <----------------------------- 80 characters -----------------------------> #

from dataclasses import dataclass, field
import os
import sys
from typing import Dict, List, Optional, Sequence, Tuple

import jinja2

from .document import Document, load
from .errors import Godoc2mdError, OutputWriteError
from .render import Style, append_signature, render
from .template import TemplateContext, execute_template, load_template
from .text import DEFAULT_HEADING_MODE, HEADING_PATTERNS

USAGE: str = """Usage: godoc2md [flags] [directory]

  -heading string
        Heading detection method: 1Word, TitleCase, Title,
        TitleCase1Word, "" or - (default "TitleCase1Word")
  -no-funcs
        Omit functions and methods
  -no-template
        Disable template processing
  -o string
        Write output to a file instead of stdout
  -output string
        Write output to a file instead of stdout
  -plain
        Emit plain Markdown (indented code blocks, no HTML)
  -signature
        Add a signature line at the end of the output
  -template string
        The template file to use
  -trace
        Print tracing information to stderr
"""

# Flag name => Arguments attribute:
_STRING_FLAGS: Dict[str, str] = {
    "heading": "heading",
    "o": "output",
    "output": "output",
    "template": "template",
}
_BOOL_FLAGS: Dict[str, str] = {
    "h": "help",
    "help": "help",
    "no-funcs": "no_funcs",
    "no-template": "no_template",
    "plain": "plain",
    "signature": "signature",
    "trace": "trace",
}
_TRUE_VALUES: Tuple[str, ...] = ("1", "t", "T", "true", "TRUE", "True")
_FALSE_VALUES: Tuple[str, ...] = ("0", "f", "F", "false", "FALSE", "False")


# usage():
def usage() -> None:
    """Print the usage text to stderr."""
    print(USAGE, end="", file=sys.stderr)


# write_documentation():
def write_documentation(documentation: str, output: str = "") -> None:
    """Write *documentation* (plus a final newline) to *output*.

    Arguments:
    * *documentation* (str): The Markdown text.
    * *output* (str): The output file; `""` or `-` for stdout.

    Raises:
    * OutputWriteError: If the output file can not be written.

    """
    if output in ("", "-"):
        sys.stdout.write(documentation + "\n")
        return
    try:
        with open(output, "w", encoding="utf-8") as output_file:
            output_file.write(documentation + "\n")
    except OSError as write_error:
        raise OutputWriteError(f"Unable to write to {output}: {write_error}")


# main():
def main(arguments: Optional[Sequence[str]] = None, tracing: str = "") -> int:
    """Generate Markdown for the Go package named on the command line.

    Arguments:
    * *arguments* (Optional[Sequence[str]]): The command line arguments
      (default: `sys.argv[1:]`.)
    * *tracing* (str): Print tracing lines to stderr when non-empty.

    Returns:
    * (int): The process exit code.

    """
    command_line_arguments: Tuple[str, ...] = tuple(
        sys.argv[1:] if arguments is None else arguments)
    parsed: Arguments = Arguments(command_line_arguments, tracing=tracing)
    if parsed.trace and not tracing:
        tracing = " "
    next_tracing: str = tracing + " " if tracing else ""
    if tracing:
        print(f"{tracing}=>main({command_line_arguments})", file=sys.stderr)

    return_code: int = 0
    if parsed.help:
        usage()
    elif parsed.errors:
        error: str
        for error in parsed.errors:
            print(error, file=sys.stderr)
        usage()
        return_code = 2
    else:
        return_code = generate(parsed, tracing=next_tracing)

    if tracing:
        print(f"{tracing}<=main({command_line_arguments})=>{return_code}",
              file=sys.stderr)
    return return_code


# generate():
def generate(arguments: "Arguments", tracing: str = "") -> int:
    """Load, render and write the package selected by *arguments*."""
    style: Style = Style.from_flags(arguments.heading, plain=arguments.plain,
                                    signature=arguments.signature)
    target: str = arguments.target or "."

    document: Optional[Document] = None
    try:
        document = load(target, tracing=tracing)
    except Godoc2mdError as load_error:
        print(load_error, file=sys.stderr)
    if document is None:
        if not arguments.target:
            usage()
            return 2
        print(f"Could not find package: {target}", file=sys.stderr)
        return 1
    if arguments.no_funcs:
        document = document.without_funcs()

    try:
        template: Optional[jinja2.Template] = load_template(
            document, arguments.template, arguments.no_template,
            tracing=tracing)
        body: str
        if template is None:
            body = render(document, style)
        else:
            body = execute_template(template, TemplateContext(document, style))
        write_documentation(append_signature(body, style), arguments.output)
    except Godoc2mdError as generate_error:
        print(generate_error, file=sys.stderr)
        return 1
    return 0


# Arguments:
@dataclass
class Arguments:
    """Arguments: Command line arguments scanner.

    Flags follow the Go `flag` conventions: `-flag`, `--flag`,
    `-flag=value` and `-flag value` are accepted, boolean flags also
    take `-flag=false`.  Flags may appear anywhere; `--` ends flag
    processing.

    Attributes:
    * *arguments* (Sequence[str]): The command line arguments to process.
    * *tracing* (str): If non-empty, tracing occurs.
    * *target* (str): The package directory (`""` if none given.)
    * *output* (str): The `-o`/`-output` file (`""` for stdout.)
    * *template* (str): The `-template` file.
    * *heading* (str): The `-heading` detection mode.
    * *no_template* (bool): True if `-no-template` is present.
    * *no_funcs* (bool): True if `-no-funcs` is present.
    * *plain* (bool): True if `-plain` is present.
    * *signature* (bool): True if `-signature` is present.
    * *trace* (bool): True if `-trace` is present.
    * *help* (bool): True if `-h` or `-help` is present.
    * *errors* (List[str]): The errors collected while scanning.

    Constructor:
    * Arguments(command_line_arguments, tracing)

    """

    arguments: Sequence[str]
    tracing: str = ""
    target: str = field(init=False, default="")
    output: str = field(init=False, default="")
    template: str = field(init=False, default="")
    heading: str = field(init=False, default=DEFAULT_HEADING_MODE)
    no_template: bool = field(init=False, default=False)
    no_funcs: bool = field(init=False, default=False)
    plain: bool = field(init=False, default=False)
    signature: bool = field(init=False, default=False)
    trace: bool = field(init=False, default=False)
    help: bool = field(init=False, default=False)
    errors: List[str] = field(init=False, default_factory=list)

    # Arguments.__post_init__():
    def __post_init__(self) -> None:
        """Perform Arguments post initialization."""
        self.arguments = tuple(self.arguments)  # Ensure no more changes occur
        self.process_further(tracing=self.tracing)

    # Arguments.process_further():
    def process_further(self, tracing: str = "") -> None:
        """Scan the arguments and validate the result."""
        next_tracing: str = tracing + " " if tracing else ""
        if tracing:
            print(f"{tracing}=>Arguments.process_further()", file=sys.stderr)

        arguments: Sequence[str] = self.arguments
        index: int = 0
        while index < len(arguments):
            argument: str = arguments[index]
            if tracing:
                print(f"{tracing}Argument[{index}]: {argument}",
                      file=sys.stderr)
            if argument == "--":
                for argument in arguments[index + 1:]:
                    self.match_target(argument, tracing=next_tracing)
                break
            if self.match_bool_flag(argument, tracing=next_tracing):
                pass
            elif self.match_string_flag(argument, tracing=next_tracing):
                if "=" not in argument:
                    if index + 1 < len(arguments):
                        index += 1
                        self.set_string_flag(argument, arguments[index])
                    else:
                        self.errors.append(
                            f"flag needs an argument: {argument}")
            elif argument.startswith("-") and argument != "-":
                self.errors.append(
                    f"flag provided but not defined: {argument.split('=')[0]}")
            else:
                self.match_target(argument, tracing=next_tracing)
            index += 1

        if self.heading not in HEADING_PATTERNS:
            self.errors.append(
                f"Unknown heading detection method '{self.heading}'")
        if (self.output not in ("", "-")
                and not self.check_file_writable(self.output)):
            self.errors.append(f"Unable to write to {self.output}")

        if tracing:
            print(f"{tracing}<=Arguments.process_further()=>{self.errors}",
                  file=sys.stderr)

    # Arguments.split_flag():
    @staticmethod
    def split_flag(argument: str) -> Optional[Tuple[str, Optional[str]]]:
        """Split `-name=value` into its name and value.

        Returns:
        * (Optional[Tuple[str, Optional[str]]]): The flag name and value
          (None without `=`), or None if *argument* is not a flag.

        """
        if not argument.startswith("-") or argument in ("-", "--"):
            return None
        name: str = argument[2:] if argument.startswith("--") else argument[1:]
        if not name or name.startswith("-"):
            return None
        value: Optional[str] = None
        if "=" in name:
            name, value = name.split("=", 1)
        return name, value

    # Arguments.match_bool_flag():
    def match_bool_flag(self, argument: str, tracing: str = "") -> bool:
        """Match a boolean flag such as `-plain` or `-plain=false`.

        Returns:
            True if a match is found and False otherwise.

        """
        flag: Optional[Tuple[str, Optional[str]]] = self.split_flag(argument)
        match: bool = flag is not None and flag[0] in _BOOL_FLAGS
        if match:
            name: str
            value: Optional[str]
            name, value = flag
            if value is None or value in _TRUE_VALUES:
                setattr(self, _BOOL_FLAGS[name], True)
            elif value in _FALSE_VALUES:
                setattr(self, _BOOL_FLAGS[name], False)
            else:
                self.errors.append(
                    f"invalid boolean value \"{value}\" for -{name}")
        if tracing:
            print(f"{tracing}Arguments.match_bool_flag('{argument}')=>{match}",
                  file=sys.stderr)
        return match

    # Arguments.match_string_flag():
    def match_string_flag(self, argument: str, tracing: str = "") -> bool:
        """Match a flag with a value such as `-o=README.md` or `-o`.

        A flag without `=value` takes the next argument as its value;
        the caller supplies it with *set_string_flag*.

        Returns:
            True if a match is found and False otherwise.

        """
        flag: Optional[Tuple[str, Optional[str]]] = self.split_flag(argument)
        match: bool = flag is not None and flag[0] in _STRING_FLAGS
        if match:
            name: str
            value: Optional[str]
            name, value = flag
            if value is not None:
                setattr(self, _STRING_FLAGS[name], value)
        if tracing:
            print(f"{tracing}Arguments.match_string_flag('{argument}')"
                  f"=>{match}", file=sys.stderr)
        return match

    # Arguments.set_string_flag():
    def set_string_flag(self, argument: str, value: str) -> None:
        """Set the value of the string flag *argument* to *value*."""
        flag: Optional[Tuple[str, Optional[str]]] = self.split_flag(argument)
        assert flag is not None, f"'{argument}' is not a flag"
        setattr(self, _STRING_FLAGS[flag[0]], value)

    # Arguments.match_target():
    def match_target(self, argument: str, tracing: str = "") -> None:
        """Record the package directory argument."""
        if tracing:
            print(f"{tracing}Arguments.match_target('{argument}')",
                  file=sys.stderr)
        if self.target:
            self.errors.append(
                f"Only one directory can be documented: '{argument}'")
        else:
            self.target = argument

    # Arguments.check_file_writable():
    @staticmethod
    def check_file_writable(file_name: str) -> bool:
        """Check if a file is writable.

        Arguments:
            file_name (str): The file name to check for writable.

        Returns:
            True if writable and False otherwise.

        """
        if os.path.exists(file_name):
            # Also works when file is a link and the target is writable:
            if os.path.isfile(file_name):
                return os.access(file_name, os.W_OK)
            return False  # A directory can not be written as a file.

        # A new file is creatable if its parent directory is writable:
        parent_directory: str = os.path.dirname(file_name) or "."
        return os.access(parent_directory, os.W_OK)


if __name__ == "__main__":
    sys.exit(main())
