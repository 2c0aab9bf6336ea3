"""
Fragment Renderer
Jinja2 rendering of the record list and error fragments
"""

import os
import logging
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from shared.schemas.record import Record
from render_service.utils.config import get_render_config

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Sorry, the records could not be loaded right now."


class FragmentRenderer:
    """Renders HTML fragments from file-based Jinja2 templates"""

    def __init__(self, templates_dir: Optional[str] = None):
        self.templates_dir = templates_dir or get_render_config().templates_dir or os.path.join(
            os.path.dirname(__file__), "..", "templates"
        )

        self.jinja_env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=select_autoescape(['html', 'xml']),
            trim_blocks=True,
            lstrip_blocks=True
        )

    def render_record_list(self, records: Sequence[Record]) -> str:
        """One <li> per record, in the order given"""
        template = self.jinja_env.get_template("record_list.html")
        return template.render(records=records)

    def render_error(self, message: str = DEFAULT_ERROR_MESSAGE) -> str:
        template = self.jinja_env.get_template("error.html")
        return template.render(message=message)


_renderer: Optional[FragmentRenderer] = None


def get_fragment_renderer() -> FragmentRenderer:
    """Get fragment renderer instance"""
    global _renderer
    if _renderer is None:
        _renderer = FragmentRenderer()
    return _renderer
