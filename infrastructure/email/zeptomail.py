"""ZeptoMail implementation of EmailProvider.

Sends through the ZeptoMail HTTP API using the shared HttpClient; bodies
come from the Jinja2 templates in templates/emails/.
"""

from typing import Optional

from config import EmailSettings
from infrastructure.email.templates import (
    ACTIVATION_SUBJECT,
    ACTIVATION_TEMPLATE,
    CODE_SPACE_INVITATION_SUBJECT,
    CODE_SPACE_INVITATION_TEMPLATE,
    EmailRenderer,
)
from infrastructure.http_client import HttpClient
from shared.logging import get_logger

log = get_logger(__name__)

_ZEPTO_API_URL = "https://api.zeptomail.in/v1.1/email"


class ZeptoMailProvider:
    def __init__(
        self,
        settings: EmailSettings,
        http_client: HttpClient,
        renderer: Optional[EmailRenderer] = None,
    ) -> None:
        self._settings = settings
        self._http = http_client
        self._renderer = renderer or EmailRenderer()

    async def _send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: Optional[str] = None,
    ) -> bool:
        if not self._settings.zepto_api_token:
            log.error("zepto_mail_send_failed", reason="token_not_configured")
            return False

        payload: dict = {
            "from": {
                "address": self._settings.zepto_from_email,
                "name": self._settings.zepto_from_name,
            },
            "to": [{"email_address": {"address": to_email, "name": to_email}}],
            "subject": subject,
            "htmlbody": html_body,
        }
        if text_body:
            payload["textbody"] = text_body

        token = self._settings.zepto_api_token
        if not token.startswith("Zoho-enczapikey "):
            token = f"Zoho-enczapikey {token}"

        headers = {"Authorization": token, "Content-Type": "application/json"}

        try:
            response = await self._http.post(
                _ZEPTO_API_URL, json=payload, headers=headers
            )
            if response.status_code in (200, 201, 202):
                log.info("email_sent_success", to_email=to_email, subject=subject)
                return True
            log.error(
                "email_sent_failed",
                to_email=to_email,
                subject=subject,
                status_code=response.status_code,
                response=response.text[:200],
            )
            return False
        except Exception as e:
            log.error(
                "email_send_error",
                to_email=to_email,
                subject=subject,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    async def send_activation_email(self, email: str, activation_url: str) -> bool:
        text_body, html_body = self._renderer.render(
            ACTIVATION_TEMPLATE, recipient_email=email, activation_url=activation_url
        )
        return await self._send(email, ACTIVATION_SUBJECT, html_body, text_body)

    async def send_code_space_invitation_email(
        self, email: str, code_space_name: str, invitation_url: str
    ) -> bool:
        text_body, html_body = self._renderer.render(
            CODE_SPACE_INVITATION_TEMPLATE,
            code_space_name=code_space_name,
            invitation_url=invitation_url,
        )
        return await self._send(email, CODE_SPACE_INVITATION_SUBJECT, html_body, text_body)
