"""Console implementation of EmailProvider.

Renders the real templates and logs them instead of sending, for local
development and tests.
"""

from typing import Optional

from infrastructure.email.templates import (
    ACTIVATION_SUBJECT,
    ACTIVATION_TEMPLATE,
    CODE_SPACE_INVITATION_SUBJECT,
    CODE_SPACE_INVITATION_TEMPLATE,
    EmailRenderer,
)
from shared.logging import get_logger

log = get_logger(__name__)


class ConsoleEmailProvider:
    def __init__(self, renderer: Optional[EmailRenderer] = None) -> None:
        self._renderer = renderer or EmailRenderer()
        self.outbox: list[dict] = []

    def _send(self, to_email: str, subject: str, text_body: str) -> bool:
        self.outbox.append({"to": to_email, "subject": subject, "body": text_body})
        log.info("email_printed", to_email=to_email, subject=subject, body=text_body)
        return True

    async def send_activation_email(self, email: str, activation_url: str) -> bool:
        text_body, _ = self._renderer.render(
            ACTIVATION_TEMPLATE, recipient_email=email, activation_url=activation_url
        )
        return self._send(email, ACTIVATION_SUBJECT, text_body)

    async def send_code_space_invitation_email(
        self, email: str, code_space_name: str, invitation_url: str
    ) -> bool:
        text_body, _ = self._renderer.render(
            CODE_SPACE_INVITATION_TEMPLATE,
            code_space_name=code_space_name,
            invitation_url=invitation_url,
        )
        return self._send(email, CODE_SPACE_INVITATION_SUBJECT, text_body)
