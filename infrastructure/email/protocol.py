"""EmailProvider protocol — services depend on this, not the concrete implementation."""

from typing import Protocol


class EmailProvider(Protocol):
    async def send_activation_email(self, email: str, activation_url: str) -> bool: ...

    async def send_code_space_invitation_email(
        self, email: str, code_space_name: str, invitation_url: str
    ) -> bool: ...
