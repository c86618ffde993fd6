from __future__ import annotations

from typing import Any, Mapping

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from ..core.exceptions import ValidationError


class CertificateRenderer:
    """Renders stored template HTML in a sandbox; unknown placeholders are errors, not blanks."""

    def __init__(self) -> None:
        self._env = SandboxedEnvironment(undefined=StrictUndefined, autoescape=True)

    def check(self, template_html: str) -> None:
        try:
            self._env.parse(template_html)
        except TemplateError as e:
            raise ValidationError(f"Invalid certificate template: {e}")

    def render(self, template_html: str, context: Mapping[str, Any]) -> str:
        """Raises jinja2.TemplateError when the template cannot be rendered with context."""

        return self._env.from_string(template_html).render(**context)
