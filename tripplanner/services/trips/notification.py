"""
Boundary between the trip core and the e-mail collaborator.

Services never talk to a mail client directly. After a mutation has been
committed they hand a ``ConfirmationRequest`` to a ``NotificationDispatcher``,
which makes one best-effort delivery attempt through a
``ConfirmationNotifier``. A failed delivery is logged and reported as
``False``; it never undoes the committed trip or participant, so a
participant may exist without ever having received their e-mail.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from fastapi import BackgroundTasks
from starlette.concurrency import run_in_threadpool

from tripplanner.core.errors import DependencyFailureError
from tripplanner.core.logger import logger


@dataclass(frozen=True)
class ConfirmationContext:
    destination: str
    starts_on: str
    ends_on: str
    confirmation_link: str
    is_owner: bool = False


@dataclass(frozen=True)
class ConfirmationRequest:
    recipient_name: str
    recipient_email: str
    subject: str
    context: ConfirmationContext


@dataclass(frozen=True)
class DeliveryResult:
    recipient_email: str
    subject: str


class ConfirmationNotifier(Protocol):
    def send_confirmation(
        self,
        recipient_name: str,
        recipient_email: str,
        subject: str,
        context: ConfirmationContext,
    ) -> DeliveryResult:
        """Deliver one confirmation message, raising DependencyFailureError on failure."""
        ...


class NotificationDispatcher:
    def __init__(self, notifier: ConfirmationNotifier):
        self.notifier = notifier

    async def deliver(self, request: ConfirmationRequest) -> Optional[DeliveryResult]:
        """Single delivery attempt. Returns None when the notifier failed."""
        try:
            result = await run_in_threadpool(
                self.notifier.send_confirmation,
                request.recipient_name,
                request.recipient_email,
                request.subject,
                request.context,
            )
        except DependencyFailureError as e:
            logger.error(f"Confirmation email to {request.recipient_email} failed: {e.message}")
            return None
        except Exception:
            logger.exception(f"Confirmation email to {request.recipient_email} failed unexpectedly")
            return None

        logger.info(f"Confirmation email sent to {request.recipient_email}")
        return result

    async def dispatch(self, request: ConfirmationRequest) -> bool:
        """Called once the mutation has committed."""
        return await self.deliver(request) is not None


class BackgroundNotificationDispatcher(NotificationDispatcher):
    """Defers delivery until after the HTTP response has been sent."""

    def __init__(self, notifier: ConfirmationNotifier, background_tasks: BackgroundTasks):
        super().__init__(notifier)
        self.background_tasks = background_tasks

    async def dispatch(self, request: ConfirmationRequest) -> bool:
        self.background_tasks.add_task(self.deliver, request)
        logger.info(f"Confirmation email to {request.recipient_email} scheduled")
        return True
