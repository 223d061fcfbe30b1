"""Web push delivery to subscribed loyalty-card users."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Iterable, List, Optional

from pywebpush import WebPushException, webpush
from requests.exceptions import RequestException

from core import get_logger, PushDefaults
from core.exceptions import DeliveryError
from database.models import User
from services.vapid import VapidKeys
from utils.performance import record_push_delivery

logger = get_logger(__name__)


@dataclass(frozen=True)
class PushReport:
    sent: int
    failed: int

    @property
    def total(self) -> int:
        return self.sent + self.failed


class PushService:
    """Sends one personalised web push message per recipient.

    Each delivery is independent: a failing subscription is logged and
    counted, the others are still attempted. Nothing is retried.
    """

    def __init__(
        self,
        vapid: VapidKeys,
        subject: str,
        ttl: int = PushDefaults.TTL,
        greeting: str = PushDefaults.GREETING,
        batch_size: int = 20,
    ) -> None:
        """Initialize push service.

        Args:
            vapid: Key pair used to sign requests
            subject: VAPID ``sub`` claim, a mailto: or https: URL
            ttl: Seconds the push service keeps an undelivered message
            greeting: Prefix of every message body
            batch_size: Number of deliveries in flight at once
        """
        self.vapid = vapid
        self.subject = subject
        self.ttl = ttl
        self.greeting = greeting
        self.batch_size = max(1, batch_size)

    @property
    def public_key(self) -> str:
        return self.vapid.public_key

    def build_payload(self, user: User, title: str, message: str, icon: Optional[str] = None) -> str:
        body = {"title": title, "message": f"{self.greeting}: {user.name} {message}"}
        if icon:
            body["icon"] = icon
        return json.dumps(body, ensure_ascii=False)

    def _send(self, user: User, payload: str) -> None:
        """Blocking delivery of one message.

        Raises:
            DeliveryError: if the push service rejects the message or
                cannot be reached
        """
        try:
            webpush(
                subscription_info=user.subscription,
                data=payload,
                vapid_private_key=self.vapid.private_key_path,
                # webpush fills in aud/exp on the dict it is given
                vapid_claims={"sub": self.subject},
                ttl=self.ttl,
                content_encoding=PushDefaults.CONTENT_ENCODING,
            )
        except WebPushException as e:
            status = getattr(e.response, "status_code", None)
            raise DeliveryError(user.id, f"{status or 'no response'}: {e}") from e
        except RequestException as e:
            raise DeliveryError(user.id, f"network error: {e}") from e
        except (TypeError, ValueError) as e:
            # Malformed subscription keys
            raise DeliveryError(user.id, str(e)) from e

    async def _deliver(self, user: User, payload: str) -> bool:
        try:
            await asyncio.to_thread(self._send, user, payload)
        except DeliveryError as e:
            logger.warning(e.message)
            record_push_delivery(sent=False)
            return False
        record_push_delivery(sent=True)
        return True

    async def send_to_users(
        self,
        users: Iterable[User],
        title: str,
        message: str,
        icon: Optional[str] = None,
    ) -> PushReport:
        """Deliver a message to every user with a subscription."""
        recipients: List[User] = [user for user in users if user.is_active]
        sent = 0
        for start in range(0, len(recipients), self.batch_size):
            batch = recipients[start : start + self.batch_size]
            results = await asyncio.gather(
                *(self._deliver(user, self.build_payload(user, title, message, icon)) for user in batch),
                return_exceptions=True,
            )
            for user, result in zip(batch, results):
                if isinstance(result, BaseException):
                    logger.error(f"Unexpected push failure for {user.id}: {result}")
                elif result:
                    sent += 1

        report = PushReport(sent=sent, failed=len(recipients) - sent)
        logger.info(f"Push broadcast finished: {report.sent} sent, {report.failed} failed")
        return report
