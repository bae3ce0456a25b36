"""APScheduler configuration for background welcome-email jobs."""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
import logging

from leadgen.config import settings

logger = logging.getLogger(__name__)

# Create scheduler instance
scheduler = AsyncIOScheduler()

WELCOME_SUBJECT = "Welcome, {{company}}"
WELCOME_BODY = """Hi {{firstName}},

Thanks for reaching out. We will be in touch shortly with ideas tailored to {{company}}.

The LeadGen team"""


def backoff_delay(attempt: int) -> float:
    """Exponential backoff: base, 2*base, 4*base, ... seconds after attempt 1, 2, 3."""
    return settings.EMAIL_JOB_BACKOFF_SECONDS * (2 ** (attempt - 1))


def enqueue_welcome_email(lead_data: Dict[str, Any], attempt: int = 1, delay: float = 0.0):
    """
    Schedule a one-shot welcome email job for a lead.

    Args:
        lead_data: Stored lead as a dict (needs "email")
        attempt: Attempt number of this job (1-based)
        delay: Seconds before the job runs
    """
    if not lead_data.get("email"):
        logger.info(f"Lead {lead_data.get('id')} has no email; welcome email skipped")
        return None

    run_date = datetime.now(timezone.utc) + timedelta(seconds=delay)
    return scheduler.add_job(
        send_welcome_email,
        trigger="date",
        run_date=run_date,
        args=[lead_data, attempt],
        id=f"welcome-email-{lead_data.get('id')}-{attempt}",
        replace_existing=True,
    )


async def send_welcome_email(lead_data: Dict[str, Any], attempt: int = 1):
    """
    Job body: send the welcome email, rescheduling with backoff on failure.
    """
    # Import here to avoid circular imports
    from leadgen.services.email_service import get_email_service

    email = lead_data.get("email")
    logger.info(f"Processing welcome email for {email} (attempt {attempt})...")

    try:
        service = get_email_service()
        result = await service.send_personalized_emails(
            subject=WELCOME_SUBJECT,
            body_template=WELCOME_BODY,
            leads=[{
                "email": email,
                "business_name": lead_data.get("profile_name"),
                "first_name": "",
                "last_name": "",
            }],
        )
        if result["errors"]:
            raise RuntimeError(str(result["errors"][0]["error"]))

        logger.info(f"✅ Welcome email sent to {email}")

    except Exception as e:
        if attempt >= settings.EMAIL_JOB_ATTEMPTS:
            logger.error(f"❌ Welcome email for {email} failed after {attempt} attempts: {e}")
            return

        delay = backoff_delay(attempt)
        logger.warning(f"Welcome email for {email} failed ({e}); retrying in {delay:.0f}s")
        enqueue_welcome_email(lead_data, attempt=attempt + 1, delay=delay)


def start_scheduler():
    """Start the background scheduler."""
    if not scheduler.running:
        scheduler.start()
        logger.info("✅ Scheduler started (welcome email jobs)")


def shutdown_scheduler():
    """Stop the background scheduler."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
