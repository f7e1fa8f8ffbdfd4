"""Resend email API adapter."""

from dataclasses import dataclass

import httpx

from facefind_lifecycle.services.notifications import EmailSender

RESEND_BASE_URL = "https://api.resend.com"


@dataclass
class HttpxResendEmailSender(EmailSender):
    """Email sender implemented with httpx against the Resend API."""

    api_key: str
    from_address: str
    http_client: httpx.AsyncClient
    base_url: str = RESEND_BASE_URL

    @classmethod
    def create(cls, api_key: str, from_address: str) -> "HttpxResendEmailSender":
        """Create a sender with a managed httpx session."""
        return cls(
            api_key=api_key,
            from_address=from_address,
            http_client=httpx.AsyncClient(),
        )

    async def send(
        self, to_address: str, subject: str, html_body: str, text_body: str
    ) -> None:
        """Send a single email."""
        payload: dict[str, object] = {
            "from": self.from_address,
            "to": [to_address],
            "subject": subject,
            "html": html_body,
            "text": text_body,
        }
        response = await self.http_client.post(
            f"{self.base_url}/emails",
            json=payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=10,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
