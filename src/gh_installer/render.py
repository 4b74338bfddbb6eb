"""Script rendering with Jinja2 templates.

Each response format has a template under ``gh_installer/templates``.
Templates see every Query field by name plus ``timestamp``, ``assets``
and ``m1_asset``. Values that reach a shell or Ruby string go through the
``shquote``/``rbquote`` filters.

Failures here are defects of the installer, not of the request, and are
raised as RenderError so they stay distinct from upstream errors.
"""

import re
import shlex

from jinja2 import (
    Environment,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)

from gh_installer.domain.types import Result
from gh_installer.exceptions import RenderError

_WORD_RE = re.compile(r"[A-Za-z0-9]+")


def shquote(value: object) -> str:
    """Quote a value for use as a single POSIX shell word."""
    return shlex.quote(str(value))


def rbquote(value: object) -> str:
    """Quote a value as a Ruby double-quoted string literal."""
    text = str(value)
    text = text.replace("\\", "\\\\").replace('"', '\\"').replace("#", "\\#")
    text = text.replace("\n", "\\n").replace("\r", "\\r")
    return f'"{text}"'


def formula_class(value: object) -> str:
    """Return the Homebrew formula class name for a program name.

    ``my-tool_cli`` becomes ``MyToolCli``; names starting with a digit are
    prefixed so the result is a valid Ruby constant.
    """
    name = "".join(w[:1].upper() + w[1:] for w in _WORD_RE.findall(str(value)))
    if not name or not name[0].isalpha():
        name = "Formula" + name
    return name


def create_environment() -> Environment:
    """Create the template environment.

    Autoescaping is off since the outputs are scripts, not HTML.
    """
    env = Environment(
        loader=PackageLoader("gh_installer", "templates"),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["shquote"] = shquote
    env.filters["rbquote"] = rbquote
    env.filters["formula_class"] = formula_class
    return env


class ScriptRenderer:
    """Render Results into install scripts."""

    def __init__(self, env: Environment | None = None) -> None:
        self.env = env or create_environment()

    def render(self, template_name: str, result: Result) -> bytes:
        """Render a template against a Result.

        Args:
            template_name: Template filename (e.g. "install.sh.j2")
            result: Resolved release

        Returns:
            Rendered script as UTF-8 bytes

        Raises:
            RenderError: If the template cannot be loaded or executed

        """
        try:
            template = self.env.get_template(template_name)
        except (TemplateNotFound, TemplateSyntaxError) as e:
            raise RenderError(f"installer BUG: {e}") from e

        try:
            text = template.render(result.template_context())
        except (TemplateError, TypeError, ValueError, AttributeError) as e:
            raise RenderError(f"Template error: {e}") from e
        return text.encode("utf-8")
