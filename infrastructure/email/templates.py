"""Jinja2 rendering of transactional e-mails, shared by every provider."""

import os

from jinja2 import Environment, FileSystemLoader, select_autoescape

DEFAULT_TEMPLATE_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(__file__))),
    "templates",
    "emails",
)

ACTIVATION_SUBJECT = "Welcome to Code Spaces!"
ACTIVATION_TEMPLATE = "activation"
CODE_SPACE_INVITATION_SUBJECT = "You've been invited to collaborate on a code space!"
CODE_SPACE_INVITATION_TEMPLATE = "code_space_invitation"


class EmailRenderer:
    def __init__(self, template_dir: str = DEFAULT_TEMPLATE_DIR) -> None:
        self._jinja = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def render(self, template_name: str, **context) -> tuple[str, str]:
        """Return ``(text_body, html_body)`` for *template_name*."""
        text = self._jinja.get_template(f"{template_name}.txt").render(**context)
        html = self._jinja.get_template(f"{template_name}.html").render(**context)
        return text, html
