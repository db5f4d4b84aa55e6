from __future__ import annotations

from typing import Any, List, Sequence

from gym_dashboard.api.client import ApiClient

TEMPLATES = ("payment_reminder", "birthday_wishes", "membership_expiry", "welcome_message")
LANGUAGES = (("en", "English"), ("hi", "Hindi"), ("en_US", "English (US)"))


def split_parameters(parameters: str | Sequence[str] | None) -> List[str]:
    """`"Ravi, 500"` → `["Ravi", "500"]`; blanks dropped."""
    if not parameters:
        return []
    if isinstance(parameters, str):
        parameters = parameters.split(",")
    return [p.strip() for p in parameters if p and p.strip()]


class WhatsAppService:
    """Template messages are delivered by the server through the WhatsApp Cloud API."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def send_message(
        self,
        to: str,
        template_name: str,
        language: str = "en",
        parameters: str | Sequence[str] | None = None,
    ) -> Any:
        body = {
            "to": to.strip(),
            "templateName": template_name,
            "language": language,
            "parameters": split_parameters(parameters),
        }
        return self._api.post("/whatsapp/send", json=body)
