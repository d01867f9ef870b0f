"""
Template engine for markup snippets inserted by the language toggle
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from ..utils.logger import get_logger

logger = get_logger("templates.engine")


@dataclass(frozen=True)
class Notification:
    """A transient acknowledgement shown after a locale change."""

    code: str
    markup: str
    duration_ms: int


class SnippetRenderer:
    """
    Renders HTML snippets from Jinja2 templates
    """

    def __init__(self, template_dir: Optional[str | Path] = None):
        """
        Initialize the renderer

        Args:
            template_dir: Path to templates directory
        """
        if template_dir is None:
            template_dir = Path(__file__).parent / "templates"

        self.template_dir = Path(template_dir)

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(enabled_extensions=('html', 'j2')),
            trim_blocks=True,
            lstrip_blocks=True,
        )

        logger.debug(f"Snippet renderer initialized with directory: {self.template_dir}")

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a snippet template

        Args:
            template_name: File name under the template directory
            context: Template context variables

        Returns:
            Rendered markup, empty when the template is missing
        """
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound:
            logger.error(f"Template not found: {template_name}")
            return ''
        return template.render(**context)

    def feedback(self, code: str, feedback_config) -> Notification:
        """Build the acknowledgement for a switch to the locale token ``code``."""
        markup = self.render('feedback.html.j2', {
            'code': code,
            'name': feedback_config.names.get(code, code),
            'flag': feedback_config.flags.get(code, ''),
            'duration_ms': feedback_config.duration_ms,
        })
        return Notification(code=code, markup=markup.strip(), duration_ms=feedback_config.duration_ms)
