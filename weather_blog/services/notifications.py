"""Best-effort email notification for published posts."""

from __future__ import annotations

import logging

import httpx

from weather_blog.core.config import Settings
from weather_blog.services.errors import NotificationError

logger = logging.getLogger(__name__)


class EmailNotifier:
    """Send a "post published" email through the Resend API.

    Failures are logged and dropped; a published post is never reported as failed
    because its email did not go out.
    """

    def __init__(self, client: httpx.Client, config: Settings) -> None:
        self.client = client
        self.config = config

    def notify(self, slug: str) -> bool:
        """Return True when the email was accepted by the provider."""

        if not self.config.resend_api_key:
            logger.warning("RESEND_API_KEY not set. Skipping email notification.")
            return False
        try:
            self._send(self.config.post_url(slug))
        except NotificationError as exc:
            logger.warning("Resend email failed: %s", exc)
            return False
        except Exception:
            logger.warning("Resend email failed unexpectedly", exc_info=True)
            return False
        logger.info("Notification sent to %s for %s", self.config.notification_recipient, slug)
        return True

    def _send(self, post_url: str) -> None:
        payload = {
            "from": self.config.notification_sender,
            "to": [self.config.notification_recipient],
            "subject": self.config.notification_subject,
            "html": (
                "<p>Your automatic weather blog post has been published.</p>"
                f'<p>View it here: <a href="{post_url}">{post_url}</a></p>'
            ),
        }
        headers = {"Authorization": f"Bearer {self.config.resend_api_key}"}
        try:
            response = self.client.post(
                self.config.resend_api_url,
                json=payload,
                headers=headers,
                timeout=self.config.resend_timeout,
            )
        except httpx.HTTPError as exc:
            raise NotificationError(str(exc)) from exc
        if not response.is_success:
            raise NotificationError(f"{response.status_code} {response.text[:500]}")


__all__ = ["EmailNotifier"]
