"""
Best-effort transactional email.

Messages are handed to FastAPI BackgroundTasks by the routes, so they are sent
after the response is produced. A failed send is logged and dropped; nothing
is retried and nothing is reported back to the caller.
"""
import logging
import smtplib
from email.message import EmailMessage
from html import escape

from skillsync.config import settings
from skillsync.models.enums import ApplicationStatus

logger = logging.getLogger(__name__)


def send_email(to: str, subject: str, html: str) -> bool:
    if not settings.smtp_host:
        logger.info("Email disabled, not sending %r to %s", subject, to)
        return False

    try:
        sender = settings.smtp_user or f"no-reply@{settings.smtp_host}"
        msg = EmailMessage()
        msg["From"] = f'"{settings.mail_from_name}" <{sender}>'
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(html, subtype="html")

        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30) as smtp:
            if settings.smtp_use_tls:
                smtp.starttls()
            if settings.smtp_user and settings.smtp_password:
                smtp.login(settings.smtp_user, settings.smtp_password)
            smtp.send_message(msg)
    except Exception:
        logger.exception("Email %r to %s failed", subject, to)
        return False

    logger.info("Sent email %r to %s", subject, to)
    return True


def registration_email(name: str, email: str) -> tuple[str, str, str]:
    subject = "Welcome to SkillSync"
    html = (
        f"<h1>Welcome, {escape(name)}!</h1>"
        "<p>Your account is ready. Add your skills to your profile to get better job matches.</p>"
    )
    return email, subject, html


def status_email(email: str, job_title: str, company: str, status: ApplicationStatus) -> tuple[str, str, str] | None:
    """Message for a decided application, or None for statuses that send nothing."""
    title = escape(job_title)
    if status is ApplicationStatus.ACCEPTED:
        subject = f"Offer: {job_title} at {company}"
        html = (
            '<h1 style="color: green;">Congratulations!</h1>'
            f"<p>You have been accepted for <strong>{title}</strong>.</p>"
        )
    elif status is ApplicationStatus.REJECTED:
        subject = f"Update: {job_title}"
        html = (
            f"<p>Thank you for your interest in <strong>{title}</strong>. "
            "We have moved forward with other candidates.</p>"
        )
    else:
        return None
    return email, subject, html
