"""template: Render a Document through a user supplied Jinja2 template.

A package directory may carry its own template.  The first of these
files that exists is used:

* `.godoc2md.markdown`
* `.godoc2md.md`
* `.godoc2md.template`
* `.godoc2md.tmpl`

A template sees a *TemplateContext*, never the Document itself:

    {{ emit_header() }}

    {{ emit_synopsis() }}

    {% if not is_command %}{{ emit_usage() }}{% endif %}

"""

# <----------------------------- 80 characters -----------------------------> #

from pathlib import Path
import sys
from typing import Any, Dict, Optional, Tuple

import jinja2

from .document import Document
from .errors import TemplateExecError, TemplateParseError
from .render import DEFAULT_STYLE, Style, render, render_header
from .render import render_signature, render_synopsis, render_usage
from .text import fence_code

TEMPLATE_NAMES: Tuple[str, ...] = (
    ".godoc2md.markdown",
    ".godoc2md.md",
    ".godoc2md.template",
    ".godoc2md.tmpl",
)

BADGE: str = ("![godoc2md]"
              "(https://img.shields.io/badge/docs-generated-blue.svg)")


# TemplateContext:
class TemplateContext:
    """TemplateContext: The names a template can use.

    Attributes:
    * *name* (str): The display name of the package or command.
    * *import_path* (str): The import path (may be empty.)
    * *is_command* (bool): True for a command.
    * *import_line* (str): `import "path"`, or `""` without import path.
    * *synopsis* (str): The synopsis with headings detected.

    Constructor:
    * TemplateContext(document, style)

    """

    # TemplateContext.__init__():
    def __init__(self, document: Document,
                 style: Style = DEFAULT_STYLE) -> None:
        self._document: Document = document
        self._style: Style = style

    # TemplateContext.name():
    @property
    def name(self) -> str:
        return self._document.name

    # TemplateContext.import_path():
    @property
    def import_path(self) -> str:
        return self._document.import_path

    # TemplateContext.is_command():
    @property
    def is_command(self) -> bool:
        return self._document.is_command

    # TemplateContext.import_line():
    @property
    def import_line(self) -> str:
        if not self._document.import_path:
            return ""
        return f"import \"{self._document.import_path}\""

    # TemplateContext.synopsis():
    @property
    def synopsis(self) -> str:
        return render_synopsis(self._document, self._style)

    # TemplateContext.emit():
    def emit(self) -> str:
        """Return the whole document as the built-in renderer has it."""
        return render(self._document, self._style)

    # TemplateContext.emit_header():
    def emit_header(self) -> str:
        return render_header(self._document, self._style)

    # TemplateContext.emit_synopsis():
    def emit_synopsis(self) -> str:
        return render_synopsis(self._document, self._style)

    # TemplateContext.emit_usage():
    def emit_usage(self) -> str:
        return render_usage(self._document, self._style)

    # TemplateContext.emit_signature():
    def emit_signature(self) -> str:
        return render_signature(self._style)

    # TemplateContext.to_code():
    def to_code(self, code: str) -> str:
        """Return *code* as a code block in the current style."""
        return fence_code(code, self._style.plain)

    # TemplateContext.badge():
    def badge(self) -> str:
        """Return a Markdown "docs generated" badge image."""
        return BADGE

    # TemplateContext.namespace():
    def namespace(self) -> Dict[str, Any]:
        """Return the variables handed to the template."""
        return {
            "document": self,
            "name": self.name,
            "import_path": self.import_path,
            "is_command": self.is_command,
            "import_line": self.import_line,
            "synopsis": self.synopsis,
            "emit": self.emit,
            "emit_header": self.emit_header,
            "emit_synopsis": self.emit_synopsis,
            "emit_usage": self.emit_usage,
            "emit_signature": self.emit_signature,
            "to_code": self.to_code,
            "badge": self.badge,
        }


# find_template():
def find_template(directory: Path) -> Optional[Path]:
    """Return the first conventionally named template in *directory*."""
    name: str
    for name in TEMPLATE_NAMES:
        template_path: Path = directory / name
        if template_path.is_file():
            return template_path
    return None


# load_template():
def load_template(document: Document, template_path: str = "",
                  no_template: bool = False,
                  tracing: str = "") -> Optional[jinja2.Template]:
    """Return the template to render *document* with.

    Arguments:
    * *document* (Document): The loaded package.
    * *template_path* (str): An explicit template file.  When empty the
      package directory is searched (see *TEMPLATE_NAMES*.)
    * *no_template* (bool): If True, never use a template.
    * *tracing* (str): Print tracing lines to stderr when non-empty.

    Returns:
    * (Optional[jinja2.Template]): The parsed template or None when no
      template is to be used.

    Raises:
    * TemplateParseError: If the template can not be read or parsed.

    """
    if no_template:
        return None
    path: Optional[Path] = (Path(template_path) if template_path
                            else find_template(document.abs_path))
    if path is None:
        return None
    if tracing:
        print(f"{tracing}load_template('{path}')", file=sys.stderr)

    environment: jinja2.Environment = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(path.parent)),
        undefined=jinja2.StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True)
    try:
        return environment.get_template(path.name)
    except jinja2.TemplateSyntaxError as syntax_error:
        raise TemplateParseError(
            f"Error parsing template \"{path}\" "
            f"(line {syntax_error.lineno}): {syntax_error.message}")
    except jinja2.TemplateNotFound:
        raise TemplateParseError(f"Could not read template \"{path}\"")
    except (OSError, UnicodeDecodeError) as read_error:
        raise TemplateParseError(
            f"Could not read template \"{path}\": {read_error}")


# execute_template():
def execute_template(template: jinja2.Template,
                     context: TemplateContext) -> str:
    """Return the output of *template* for *context*.

    Raises:
    * TemplateExecError: If the template fails while rendering.

    """
    try:
        return template.render(**context.namespace())
    except (jinja2.TemplateError, TypeError, ValueError) as render_error:
        raise TemplateExecError(
            f"Error executing template \"{template.name}\": {render_error}")
