"""Best-effort organizer notifications for lifecycle transitions."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from facefind_lifecycle.domain.events import EventRecord, retention_end
from facefind_lifecycle.domain.models import OrganizerRecord

logger = logging.getLogger(__name__)


class OrganizerRepository(Protocol):
    """Lookup interface for organizer contact details."""

    def get_organizer(self, organizer_id: str) -> OrganizerRecord | None:
        """Return the organizer, if present."""


class EmailSender(Protocol):
    """Interface for outbound transactional email."""

    async def send(
        self, to_address: str, subject: str, html_body: str, text_body: str
    ) -> None:
        """Send a single email."""


@dataclass(frozen=True)
class EmailMessage:
    """A rendered email."""

    subject: str
    html_body: str
    text_body: str


@dataclass
class NullEmailSender:
    """Sender used when no email provider is configured."""

    async def send(
        self, to_address: str, subject: str, html_body: str, text_body: str
    ) -> None:
        logger.info("Email delivery disabled, dropping message: %s", subject)


@dataclass
class OrganizerNotifier:
    """Sends lifecycle emails to event organizers, never raising."""

    organizers: OrganizerRepository
    sender: EmailSender
    app_url: str

    async def grace_period_ended(self, event: EventRecord) -> bool:
        """Tell the organizer attendee scanning has closed."""
        message = render_grace_period_ended(event, self.app_url)
        return await self._notify(event, message)

    async def event_archived(self, event: EventRecord) -> bool:
        """Tell the organizer the event's photos were permanently deleted."""
        message = render_event_archived(event)
        return await self._notify(event, message)

    async def _notify(self, event: EventRecord, message: EmailMessage) -> bool:
        if not event.organizer_id:
            logger.info("Event has no organizer", extra={"event_id": event.id})
            return True
        try:
            organizer = self.organizers.get_organizer(event.organizer_id)
            if organizer is None or not organizer.email:
                logger.info(
                    "No organizer email on file", extra={"event_id": event.id}
                )
                return True
            await self.sender.send(
                to_address=organizer.email,
                subject=message.subject,
                html_body=_greet_html(organizer) + message.html_body,
                text_body=_greet_text(organizer) + message.text_body,
            )
        except Exception:
            logger.exception(
                "Failed to notify organizer", extra={"event_id": event.id}
            )
            return False
        return True


def render_grace_period_ended(event: EventRecord, app_url: str) -> EmailMessage:
    """Render the grace-period-ended email."""
    deadline = _format_date(retention_end(event))
    link = f"{app_url.rstrip('/')}/organizer/events/{event.id}"
    return EmailMessage(
        subject=f"Grace period ended: {event.name}",
        html_body=(
            "<p>The grace period for <strong>"
            f"{event.name}</strong> has ended and attendee face scanning is now "
            "closed.</p>"
            f"<p>You can still download all photos until <strong>{deadline}"
            "</strong>. After that date they will be permanently deleted.</p>"
            f'<p><a href="{link}">Download your photos</a></p>'
            "<p>Best regards,<br>The FaceFind Team</p>"
        ),
        text_body=(
            f"The grace period for {event.name} has ended and attendee face "
            "scanning is now closed.\n\n"
            f"You can still download all photos until {deadline}. After that "
            "date they will be permanently deleted.\n\n"
            f"Download your photos: {link}\n"
        ),
    )


def render_event_archived(event: EventRecord) -> EmailMessage:
    """Render the event-archived email."""
    return EmailMessage(
        subject=f"Event archived: {event.name}",
        html_body=(
            f"<p>The retention period for <strong>{event.name}</strong> has "
            "ended. All photos and face data for this event have been "
            "permanently deleted.</p>"
            "<p>Best regards,<br>The FaceFind Team</p>"
        ),
        text_body=(
            f"The retention period for {event.name} has ended. All photos and "
            "face data for this event have been permanently deleted.\n"
        ),
    )


def _greet_html(organizer: OrganizerRecord) -> str:
    return f"<p>Hi {organizer.first_name or 'there'},</p>"


def _greet_text(organizer: OrganizerRecord) -> str:
    return f"Hi {organizer.first_name or 'there'},\n\n"


def _format_date(value: datetime) -> str:
    return value.strftime("%d %b %Y, %H:%M UTC")
