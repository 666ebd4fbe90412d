"""Jinja2 template renderer for email templates.

Provides safe template rendering with HTML escaping and error handling.
"""

from jinja2 import StrictUndefined, TemplateSyntaxError, UndefinedError
from jinja2.sandbox import SandboxedEnvironment

from tasknest.core.logging import get_logger

logger = get_logger(__name__)


class TemplateRenderer:
    """Jinja2 template renderer with security features.

    Uses sandboxed environments to prevent code execution in templates.
    HTML bodies are autoescaped; plain-text bodies are not.
    """

    def __init__(self) -> None:
        self.html_env = SandboxedEnvironment(
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.text_env = SandboxedEnvironment(
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def render(self, template_string: str, variables: dict[str, object], html: bool = True) -> str:
        """Render a template string with variables.

        Raises:
            TemplateSyntaxError: If template syntax is invalid.
            UndefinedError: If required variable is missing.
        """
        env = self.html_env if html else self.text_env
        try:
            return env.from_string(template_string).render(**variables)
        except TemplateSyntaxError as e:
            logger.error("Template syntax error", error=str(e), line=e.lineno)
            raise
        except UndefinedError as e:
            logger.error("Undefined variable in template", error=str(e))
            raise


# Global template renderer instance
_template_renderer: TemplateRenderer | None = None


def get_template_renderer() -> TemplateRenderer:
    """Get the global template renderer instance."""
    global _template_renderer
    if _template_renderer is None:
        _template_renderer = TemplateRenderer()
    return _template_renderer
