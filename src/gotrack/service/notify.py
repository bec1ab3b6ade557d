# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import requests

from gotrack.configuration import Configuration
from gotrack.errors import NotificationError

logger = logging.getLogger(__name__)


class WebhookNotifier:
    """POSTs `{"hours": <threshold>}` to a webhook."""

    def __init__(self, url: str, timeout_seconds: float = 10.0) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds

    def notify(self, threshold: float) -> None:
        try:
            response = requests.post(
                self.url,
                json={"hours": threshold},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error("Reminder webhook unreachable: %s", e)
            raise NotificationError(f"Webhook request failed: {e}") from e

        if not response.ok:
            logger.error(
                "Reminder webhook returned %s: %s", response.status_code, response.text
            )
            raise NotificationError(response.text)

        logger.info("Reminder for %s hours sent", threshold)


def build_notifier(config: Configuration) -> Optional[WebhookNotifier]:
    if not config["webhook_url"]:
        return None
    return WebhookNotifier(config["webhook_url"], config["webhook_timeout_seconds"])
