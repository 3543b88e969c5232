from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, Union

from ..core.constants import DEFAULT_NOTIFY_ATTEMPTS, DEFAULT_NOTIFY_BACKOFF_SECONDS, DEFAULT_NOTIFY_WORKERS
from .model import AttendanceNotification, PasswordResetNotification
from .sender import MailSender

logger = logging.getLogger(__name__)

Notification = Union[AttendanceNotification, PasswordResetNotification]


class NotificationDispatcher:
    """Fire-and-forget email delivery on a background worker pool.

    Each job is attempted up to `attempts` times, sleeping
    `backoff_seconds * 2 ** (attempt - 1)` between tries. A job that still
    fails is logged and dropped; callers never see delivery errors.
    Backoff waits end early once `shutdown(cancel_pending=True)` is called.
    """

    def __init__(
        self,
        sender: MailSender,
        *,
        attempts: int = DEFAULT_NOTIFY_ATTEMPTS,
        backoff_seconds: float = DEFAULT_NOTIFY_BACKOFF_SECONDS,
        max_workers: int = DEFAULT_NOTIFY_WORKERS,
        sleep: Optional[Callable[[float], object]] = None,
    ):
        if attempts < 1:
            raise ValueError("attempts must be >= 1")
        self._sender = sender
        self._attempts = int(attempts)
        self._backoff = float(backoff_seconds)
        self._stopping = threading.Event()
        self._sleep = sleep or self._stopping.wait
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="notify")

    def dispatch(self, notification: Notification) -> Future:
        """Queue a notification. Raises RuntimeError once the dispatcher is shut down."""
        return self._executor.submit(self._deliver, notification)

    def backoff_for(self, attempt: int) -> float:
        return self._backoff * (2 ** (attempt - 1))

    def _deliver(self, notification: Notification) -> bool:
        email = notification.to_email()
        for attempt in range(1, self._attempts + 1):
            try:
                self._sender.send(email)
                return True
            except Exception as e:
                if attempt == self._attempts:
                    logger.error(
                        "Failed to send %r to %s after %d attempts: %s",
                        email.subject, email.to_email, attempt, e,
                    )
                    return False
                delay = self.backoff_for(attempt)
                logger.warning(
                    "Sending %r to %s failed (attempt %d/%d), retrying in %.1fs: %s",
                    email.subject, email.to_email, attempt, self._attempts, delay, e,
                )
                self._sleep(delay)
                if self._stopping.is_set():
                    logger.warning("Dispatcher stopping; dropped %r to %s", email.subject, email.to_email)
                    return False
        return False

    def shutdown(self, *, wait: bool = True, cancel_pending: bool = False) -> None:
        """Stop accepting work. With `cancel_pending`, queued jobs are dropped and retries abandoned."""
        if cancel_pending:
            self._stopping.set()
        self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)
