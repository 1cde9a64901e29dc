import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from html import escape
from typing import Protocol

from fastapi import BackgroundTasks

from studio_api.config import settings
from studio_api.models.application import Application
from studio_api.models.contact import ContactLead
from studio_api.models.job import JobPosting

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutboundEmail:
    to: str
    subject: str
    html: str


class MailTransport(Protocol):
    def send(self, to: str, subject: str, html: str) -> None: ...


class SmtpTransport:
    def __init__(self, host: str, port: int, user: str = "", password: str = "", sender: str = ""):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender or user

    def send(self, to: str, subject: str, html: str) -> None:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content("This message requires an HTML-capable mail client.")
        msg.add_alternative(html, subtype="html")

        with smtplib.SMTP(self.host, self.port, timeout=30) as server:
            server.starttls()
            if self.user and self.password:
                server.login(self.user, self.password)
            server.send_message(msg)


class LoggingTransport:
    """Used when no SMTP host is configured."""

    def send(self, to: str, subject: str, html: str) -> None:
        logger.info("Mail transport disabled, would send to %s | subject=%s", to, subject)


def _wrap(body: str, heading: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f'<h2 style="color: #333;">{heading}</h2>{body}'
        f"<p>Best regards,<br>{escape(settings.studio_name)} Team</p></div>"
    )


_STATUS_MESSAGES = {
    "shortlisted": (
        "Application Update - {title}",
        "<p>Great news! Your application for the <strong>{title}</strong> position "
        "has been shortlisted.</p><p>Our team will contact you soon to discuss the "
        "next steps in the hiring process.</p>",
    ),
    "rejected": (
        "Application Update - {title}",
        "<p>Thank you for your interest in the <strong>{title}</strong> position.</p>"
        "<p>After careful consideration, we have decided to move forward with other "
        "candidates at this time.</p><p>We encourage you to apply for future "
        "opportunities that match your skills and experience.</p>",
    ),
    "hired": (
        "Congratulations - {title}",
        "<p>Congratulations! We are pleased to offer you the <strong>{title}</strong> "
        "position.</p><p>Our HR team will contact you shortly with the next steps "
        "and offer details.</p>",
    ),
}


class Notifier:
    def __init__(self, transport: MailTransport, operator_email: str = ""):
        self.transport = transport
        self.operator_email = operator_email

    def dispatch(self, tasks: BackgroundTasks, messages: list[OutboundEmail]):
        """Queue each message as its own detached task: at most one attempt, no retry."""
        for message in messages:
            tasks.add_task(self.deliver, message)

    def deliver(self, message: OutboundEmail) -> bool:
        try:
            self.transport.send(message.to, message.subject, message.html)
        except Exception:
            logger.exception("Email delivery failed: to=%s subject=%s", message.to, message.subject)
            return False
        logger.info("Email sent to %s | subject=%s", message.to, message.subject)
        return True

    def _operator_copy(self, subject: str, html: str) -> list[OutboundEmail]:
        if not self.operator_email:
            logger.warning("No operator email configured, skipping: %s", subject)
            return []
        return [OutboundEmail(self.operator_email, subject, html)]

    def application_received(self, application: Application, job: JobPosting) -> list[OutboundEmail]:
        title = escape(job.title)
        confirmation = _wrap(
            f"<p>Dear {escape(application.name)},</p>"
            f"<p>We have received your application for the <strong>{title}</strong> "
            f"position in our {escape(job.department)} department.</p>"
            "<p>Our team will review your application and get back to you within "
            "5-7 business days.</p>"
            f"<p><strong>Location:</strong> {escape(job.location)}<br>"
            f"<strong>Application ID:</strong> {application.id}</p>",
            "Thank you for your application!",
        )
        alert = _wrap(
            f"<p><strong>Position:</strong> {title}</p>"
            f"<p><strong>Applicant:</strong> {escape(application.name)}</p>"
            f"<p><strong>Email:</strong> {escape(application.email)}</p>"
            f"<p><strong>Phone:</strong> {escape(application.phone or 'Not provided')}</p>"
            f"<p><strong>Experience:</strong> {escape(application.experience or 'Not specified')}</p>"
            f'<p><strong>Resume:</strong> <a href="{escape(application.resume)}">View Resume</a></p>'
            "<p><strong>Cover Letter:</strong></p>"
            f"<p>{escape(application.cover_letter).replace(chr(10), '<br>')}</p>",
            "New Job Application Received",
        )
        return [
            OutboundEmail(application.email, f"Application Received - {job.title}", confirmation),
            *self._operator_copy(f"New Job Application - {job.title}", alert),
        ]

    def application_status_changed(self, application: Application, job: JobPosting, status: str) -> list[OutboundEmail]:
        subject, body = _STATUS_MESSAGES[status]
        html = _wrap(
            f"<p>Dear {escape(application.name)},</p>" + body.format(title=escape(job.title)),
            "Application Status Update",
        )
        return [OutboundEmail(application.email, subject.format(title=job.title), html)]

    def contact_received(self, contact: ContactLead) -> list[OutboundEmail]:
        services = "".join(f"<li>{escape(s)}</li>" for s in contact.services)
        confirmation = _wrap(
            f"<p>Dear {escape(contact.name)},</p>"
            "<p>Thank you for reaching out. We have received your enquiry and will get "
            "back to you within 24-48 hours.</p>"
            f"<p><strong>Services requested:</strong></p><ul>{services}</ul>",
            "Thank you for contacting us!",
        )
        website = ""
        if contact.website:
            website = f'<p><strong>Website:</strong> <a href="{escape(contact.website)}">{escape(contact.website)}</a></p>'
        alert = _wrap(
            f"<p><strong>Name:</strong> {escape(contact.name)}</p>"
            f"<p><strong>Organization:</strong> {escape(contact.organization)}</p>"
            f"<p><strong>Email:</strong> {escape(contact.email)}</p>"
            f"<p><strong>Phone:</strong> {escape(contact.number)}</p>"
            f"{website}<p><strong>Services:</strong></p><ul>{services}</ul>",
            "New Contact Form Submission",
        )
        return [
            OutboundEmail(contact.email, f"Thank you for contacting {settings.studio_name}", confirmation),
            *self._operator_copy(f"New Contact Form Submission - {contact.organization}", alert),
        ]


def build_transport() -> MailTransport:
    if not settings.smtp_host:
        return LoggingTransport()
    return SmtpTransport(
        settings.smtp_host,
        settings.smtp_port,
        settings.smtp_user,
        settings.smtp_password,
        settings.mail_from,
    )


notifier = Notifier(build_transport(), settings.operator_email)
