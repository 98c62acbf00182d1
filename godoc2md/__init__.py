"""godoc2md: Go package DOCumentation TO MarkDown.

<!---------------------------------------- 100 characters ----------------------------------------->

## Table of Contents:

* [Introduction](#introduction)
* [Installation](#installation)
* [Command Line Flags](#command-line-flags)
* [Package Selection](#package-selection)
* [Heading Detection](#heading-detection)
* [Examples](#examples)
* [Templates](#templates)
* [Miscellaneous](#miscellaneous)
* [License](#license)

## Introduction

`godoc2md` reads the documentation of a [Go](https://go.dev/) package (the package comment and the
doc comments of its exported constants, variables, functions, types and methods, plus the runnable
examples in its `_test.go` files) and writes it out as a single Markdown document.  The result is
typically committed as the `README.md` of the package so that repository sites such as GitHub show
the package documentation on the front page.

The generated document has a header (package name and import line), a synopsis (the package comment)
and, for libraries, a usage section: an index that links to every function and type followed by the
declarations and their doc text.  Examples are shown below the function or type they belong to as
collapsible `<details>` blocks.

## Installation

The program needs Python 3.8 or newer and the [Jinja2](https://jinja.palletsprojects.com/)
template library.  From a checkout of this repository:

     ```
     pip install .
     ```

This installs the `godoc2md` command.  It is executed by:

     ```
     cd .../directory_containing_go_module
     godoc2md ./some/package > some/package/README.md
     ```

The import path shown in the header is computed from the `go.mod` file in the current directory
(or a parent of it), so run the program from within the module.

## Command Line Flags

The command line summary is:

     ```
     godoc2md [-heading=MODE] [-no-funcs] [-no-template] [-o FILE] [-plain] [-signature]
              [-template=FILE] [-trace] [DIRECTORY]
     ```

where:

* `[DIRECTORY]`: is the package directory.  The current directory is used when it is missing.
* `[-heading=MODE]`: selects the heading detection method for the synopsis (see
  [Heading Detection](#heading-detection).)  The default is `TitleCase1Word`.
* `[-no-funcs]`: leaves out all functions, constructors and methods.
* `[-no-template]`: ignores any template file in the package directory.
* `[-o FILE]` or `[-output FILE]`: writes the output to `FILE` instead of standard output.
* `[-plain]`: emits plain Markdown: indented code blocks instead of fenced ones and no raw HTML
  (no anchors, no `<details>`.)
* `[-signature]`: appends a line naming the generator.
* `[-template=FILE]`: renders through `FILE` instead of the built-in layout.
* `[-trace]`: prints tracing information to standard error.

Flags take one or two dashes and values are given as `-flag=value` or `-flag value`.
Exit codes are 0 on success, 1 when the package can not be found or the template/output fails
and 2 for command line errors.

## Package Selection

A directory can hold files of more than one package.  The package that is documented is chosen by
rank: a `documentation` package first, then any library package, then `main`.  A `documentation` or
`main` package makes the directory a *command*: it is named after the directory and it has no usage
section and no import line.

The import path can be forced by putting it on the first line of a `.godoc2md.import` file in the
package directory.

## Heading Detection

Go package comments have no markup for headings.  A line of the package comment is turned into a
`####` heading when all of it matches the selected method:

* `1Word`: a single word.
* `TitleCase`: every word starts with an upper case letter.
* `Title`: words without any punctuation.
* `TitleCase1Word`: either `TitleCase` or `1Word`.
* `""` or `-`: no heading detection at all.

Thus, with the default method `Usage` becomes a heading but `Usage:` does not.

## Examples

Examples are the usual Go testable examples: `func ExampleFoo()` belongs to `Foo` and
`func ExampleFoo_bar_baz()` is shown as "Example (bar baz)" below `Foo`.  Method examples (e.g.
`ExampleBuffer_Len`) are shown with their type.  The `// Output:` comment becomes a separate
output block.

## Templates

When the package directory has one of the files `.godoc2md.markdown`, `.godoc2md.md`,
`.godoc2md.template` or `.godoc2md.tmpl` (the first one found wins), it is used as a
[Jinja2](https://jinja.palletsprojects.com/) template.  The template can use:

* `emit()`, `emit_header()`, `emit_synopsis()`, `emit_usage()`, `emit_signature()`: The output of
  the built-in layout (all of it or one part.)
* `name`, `import_path`, `import_line`, `is_command`, `synopsis`: Plain values.
* `to_code(text)`: `text` as a code block.
* `badge()`: a Markdown "docs generated" badge image.

For example:

     ```
     {{ emit_header() }}

     Some words that only belong in the README.

     {{ emit_synopsis() }}

     {% if not is_command %}{{ emit_usage() }}{% endif %}
     ```

## Miscellaneous

1. The test suite is run using:

     ```
     pip install .[test]
     pytest
     ```

## License

This code is released under the [MIT license](https://mit-license.org/).

"""

__version__ = "0.1.0"
