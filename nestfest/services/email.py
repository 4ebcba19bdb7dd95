# -*- coding: utf-8 -*-
"""Transactional email through the SendGrid v3 API.

Email is never on a request's critical path: ``send`` reports failure by
returning False and logging, and never raises.
"""

from functools import lru_cache

import requests

from nestfest.core.config import get_settings
from nestfest.core.logging import get_logger

logger = get_logger(__name__)

SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"


class EmailService:
    """Sends HTML email with SendGrid."""

    def __init__(self, session: requests.Session | None = None):
        settings = get_settings()
        self._api_key = settings.sendgrid_api_key
        self._from_email = settings.sendgrid_from_email
        self._from_name = settings.app_name
        self._timeout = settings.email_timeout_seconds
        self._session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._from_email)

    def send(self, to: str, subject: str, html: str) -> bool:
        """Send one email.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body

        Returns:
            True if SendGrid accepted the message.
        """
        if not self.configured:
            logger.warning("Email not configured, skipping send", to=to, subject=subject)
            return False

        payload = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self._from_email, "name": self._from_name},
            "subject": subject,
            "content": [{"type": "text/html", "value": html}],
        }

        try:
            response = self._session.post(
                SENDGRID_SEND_URL,
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error("Email send failed", to=to, subject=subject, error=str(e))
            return False

        if response.status_code >= 300:
            logger.error(
                "Email rejected by SendGrid",
                to=to,
                subject=subject,
                status_code=response.status_code,
                body=response.text[:500],
            )
            return False

        logger.info("Email sent", to=to, subject=subject)
        return True


@lru_cache
def get_email_service() -> EmailService:
    """Get cached EmailService instance."""
    return EmailService()
