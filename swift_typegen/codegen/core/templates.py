"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with the filters generated source needs.
"""

from typing import Dict, Any

from jinja2 import DictLoader, Environment, TemplateNotFound
from jinja2 import TemplateError as JinjaTemplateError


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for a Jinja2 environment over in-memory templates."""

    def __init__(self):
        self._loader = DictLoader({})

        # Generated source is not markup, so nothing is escaped
        self._env = Environment(
            loader=self._loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self._env.filters["comment"] = self._comment_filter
        self._env.filters["quote"] = self._quote_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template
            context: Variables to pass to template

        Returns:
            Rendered template content

        Raises:
            TemplateError: If the template is missing or fails to render
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def add_template(self, name: str, content: str):
        """Add or replace an in-memory template."""
        self._loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template can be loaded."""
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False

    # Template filters for code generation

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line, dropping leading whitespace."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line.lstrip()}".rstrip() for line in lines)

    def _quote_filter(self, value: str) -> str:
        """Render a double-quoted string literal with C-style escapes."""
        escaped = (
            str(value)
            .replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
            .replace("\r", "\\r")
            .replace("\t", "\\t")
        )
        return f'"{escaped}"'


def create_template_engine() -> TemplateEngine:
    """Create a template engine with no templates registered."""
    return TemplateEngine()
