"""Brevo transactional email integration (API v3)."""

import re
import httpx
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from leadgen.config import settings

logger = logging.getLogger(__name__)


PLACEHOLDER_PATTERNS = {
    "company": re.compile(r"{{\s*company\s*}}", re.IGNORECASE),
    "first_name": re.compile(r"{{\s*firstName\s*}}", re.IGNORECASE),
    "last_name": re.compile(r"{{\s*lastName\s*}}", re.IGNORECASE),
}


def render_template(template: str, values: Dict[str, str]) -> str:
    """Replace {{company}}, {{firstName}} and {{lastName}} tokens present in `values`."""
    rendered = template
    for key, pattern in PLACEHOLDER_PATTERNS.items():
        if key in values:
            replacement = values[key]
            rendered = pattern.sub(lambda _match: replacement, rendered)
    return rendered


def to_html(body: str) -> str:
    lines = [line.strip() for line in body.split("\n")]
    return f"<html><body>{'<br/>'.join(lines)}</body></html>"


def _error_detail(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class BrevoEmailService:
    """Send personalized emails and read SMTP statistics through Brevo."""

    BASE_URL = "https://api.brevo.com/v3"

    def __init__(self, api_key: str, sender_email: str, sender_name: str = "LeadGen AI"):
        self.api_key = api_key
        self.sender_email = sender_email
        self.sender_name = sender_name
        self.headers = {
            "api-key": api_key,
            "Content-Type": "application/json",
            "accept": "application/json",
        }

    def build_payload(self, subject: str, body_template: str, lead: Dict[str, Any]) -> Dict[str, Any]:
        """Personalized Brevo payload for one recipient."""
        email = (lead.get("email") or "").strip()
        company = lead.get("business_name") or "your company"
        first_name = lead.get("first_name") or ""
        last_name = lead.get("last_name") or ""

        body = render_template(
            body_template,
            {"company": company, "first_name": first_name, "last_name": last_name}
        )

        return {
            "sender": {"email": self.sender_email, "name": self.sender_name},
            "to": [{"email": email, "name": f"{first_name} {last_name}".strip() or company}],
            "subject": render_template(subject, {"company": company}),
            "htmlContent": to_html(body),
        }

    async def send_personalized_emails(
        self,
        subject: str,
        body_template: str,
        leads: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Send one personalized message per lead.

        Args:
            subject: Subject template, may contain {{company}}
            body_template: Body template with {{company}}, {{firstName}}, {{lastName}}
            leads: [{"email", "business_name", "first_name", "last_name"}, ...]

        Returns:
            {"sent": int, "skipped": int, "errors": [{"email", "error"}]}
        """
        if not subject or not body_template or not isinstance(leads, list):
            raise ValueError("subject, body_template and leads are required")

        sent = 0
        skipped = 0
        errors = []

        async with httpx.AsyncClient() as client:
            for lead in leads:
                email = (lead.get("email") or "").strip()
                if not email:
                    skipped += 1
                    continue

                payload = self.build_payload(subject, body_template, lead)

                try:
                    response = await client.post(
                        f"{self.BASE_URL}/smtp/email",
                        headers=self.headers,
                        json=payload,
                        timeout=15.0
                    )
                    response.raise_for_status()
                    sent += 1
                except httpx.HTTPStatusError as e:
                    detail = _error_detail(e.response)
                    logger.error(f"Brevo send error for {email}: {e.response.status_code} {detail}")
                    errors.append({"email": email, "error": detail})
                except httpx.HTTPError as e:
                    logger.error(f"Brevo send error for {email}: {str(e)}")
                    errors.append({"email": email, "error": str(e)})

        logger.info(f"Brevo campaign '{subject}': {sent} sent, {skipped} skipped, {len(errors)} failed")
        return {"sent": sent, "skipped": skipped, "errors": errors}

    async def fetch_aggregated_stats(self, days: int = 1) -> Dict[str, Any]:
        """
        Aggregated SMTP stats for the last `days` days, shaped like the
        Brevo dashboard: events, delivered, opens, clicks, bounced.
        """
        now = datetime.now(timezone.utc)
        start_date = (now - timedelta(days=days)).strftime("%Y-%m-%d")
        end_date = now.strftime("%Y-%m-%d")

        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.BASE_URL}/smtp/statistics/aggregatedReport",
                headers=self.headers,
                params={"startDate": start_date, "endDate": end_date},
                timeout=10.0
            )
            response.raise_for_status()
            data = response.json() or {}

        def first(*keys):
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            return 0

        soft_bounces = first("softBounces")
        hard_bounces = first("hardBounces")

        return {
            "range": data.get("range") or {"from": start_date, "to": end_date},
            "events": first("requests"),
            "delivered": first("delivered"),
            "opens": first("uniqueOpens", "opens"),
            "clicks": first("uniqueClicks", "clicks"),
            "bounced": soft_bounces + hard_bounces,
            "softBounces": soft_bounces,
            "hardBounces": hard_bounces,
            "raw": data,
        }


def get_email_service(
    api_key: Optional[str] = None,
    sender_email: Optional[str] = None
) -> BrevoEmailService:
    """
    Get Brevo email service instance.

    Args:
        api_key: Brevo API key (defaults to BREVO_API_KEY)
        sender_email: From address (defaults to BREVO_SENDER_EMAIL)
    """
    key = api_key or settings.BREVO_API_KEY
    sender = sender_email or settings.BREVO_SENDER_EMAIL
    if not key or not sender:
        raise ValueError("BREVO_API_KEY and BREVO_SENDER_EMAIL must be set in .env")
    return BrevoEmailService(key, sender, settings.BREVO_SENDER_NAME)
