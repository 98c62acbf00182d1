"""errors: The exceptions raised by godoc2md.

Every failure the command line program reports is one of these.  The
library functions raise them and only `main()` turns them into an error
message and an exit code.

"""


# Godoc2mdError:
class Godoc2mdError(RuntimeError):
    """Godoc2mdError: Base class of every godoc2md failure."""


# ManifestError:
class ManifestError(Godoc2mdError):
    """ManifestError: The `go.mod` file is missing or unreadable."""


# ParseError:
class ParseError(Godoc2mdError):
    """ParseError: A Go source file could not be parsed."""


# NotFoundError:
class NotFoundError(Godoc2mdError):
    """NotFoundError: The target does not hold a documentable package."""


# TemplateParseError:
class TemplateParseError(Godoc2mdError):
    """TemplateParseError: A template file could not be read or parsed."""


# TemplateExecError:
class TemplateExecError(Godoc2mdError):
    """TemplateExecError: A template failed while it was being rendered."""


# OutputWriteError:
class OutputWriteError(Godoc2mdError):
    """OutputWriteError: The generated Markdown could not be written."""
