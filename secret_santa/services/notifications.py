from __future__ import annotations

import asyncio
import html
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

import aiohttp
from loguru import logger

from secret_santa.services.matching import Pairing

DEFAULT_SUBJECT = "Group Secret Santa Assignment"
DEFAULT_BASE_URL = "https://api.resend.com"
# Resend free tier allows 2 requests per second.
DEFAULT_DELAY_SECONDS = 0.6
DEFAULT_TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "templates" / "email.html"

_BODY_RE = re.compile(r"<body[^>]*>(.*?)</body>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_NBSP = "&nbsp;"


class NotificationConfigError(RuntimeError):
    pass


class EmailDeliveryError(RuntimeError):
    pass


@dataclass(frozen=True)
class EmailMessage:
    sender: str
    to: str
    subject: str
    html: str
    text: str


@dataclass(frozen=True)
class DeliveryResult:
    giver: str
    email: str
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class DeliverySummary:
    sent: int
    failed: int
    total: int


def load_template(path: Union[str, Path, None] = None) -> str:
    template_path = Path(path) if path else DEFAULT_TEMPLATE_PATH
    try:
        return template_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise NotificationConfigError(f"Error reading email template {template_path}: {exc}") from exc


def render_email(template: str, santa_name: str, receiver_name: str) -> str:
    return template.replace("{{SANTA_NAME}}", html.escape(santa_name)).replace(
        "{{RECEIVER_NAME}}", html.escape(receiver_name)
    )


def html_to_text(document: str) -> str:
    """Plain-text fallback for an HTML email: the body with tags stripped."""
    match = _BODY_RE.search(document)
    if not match:
        return ""

    text = _TAG_RE.sub("", match.group(1))
    text = html.unescape(text.replace(_NBSP, " "))

    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n\s*", "\n", text)
    text = re.sub(r"\n\n+", "\n\n", text)
    return text.strip()


def build_message(
    pairing: Pairing,
    sender: str,
    template: str,
    subject: str = DEFAULT_SUBJECT,
) -> EmailMessage:
    body = render_email(template, pairing.giver.name, pairing.receiver.name)
    return EmailMessage(
        sender=sender,
        to=pairing.giver.email,
        subject=subject,
        html=body,
        text=html_to_text(body),
    )


class ResendClient:
    def __init__(
        self,
        api_key: str,
        session: aiohttp.ClientSession,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        if not api_key:
            raise NotificationConfigError("RESEND_API_KEY is required to send emails.")
        self.api_key = api_key
        self.session = session
        self.base_url = base_url.rstrip("/")

    async def send(self, message: EmailMessage) -> Optional[str]:
        payload = {
            "from": message.sender,
            "to": message.to,
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            async with self.session.post(
                f"{self.base_url}/emails", json=payload, headers=headers
            ) as response:
                status = response.status
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise EmailDeliveryError(str(exc)) from exc

        if status >= 400:
            detail = data.get("message") if isinstance(data, dict) else None
            raise EmailDeliveryError(detail or f"Resend returned HTTP {status}")
        return data.get("id") if isinstance(data, dict) else None


async def send_assignment_email(
    client: ResendClient,
    pairing: Pairing,
    sender: str,
    template: str,
    subject: str = DEFAULT_SUBJECT,
) -> DeliveryResult:
    giver = pairing.giver
    try:
        message_id = await client.send(build_message(pairing, sender, template, subject))
    except EmailDeliveryError as exc:
        return DeliveryResult(giver.name, giver.email, False, error=str(exc))
    return DeliveryResult(giver.name, giver.email, True, message_id=message_id)


def summarize(results: Sequence[DeliveryResult]) -> DeliverySummary:
    sent = sum(1 for result in results if result.success)
    return DeliverySummary(sent=sent, failed=len(results) - sent, total=len(results))


async def send_all_emails(
    pairings: Sequence[Pairing],
    client: ResendClient,
    sender: str,
    template: str,
    delay_seconds: float = DEFAULT_DELAY_SECONDS,
    subject: str = DEFAULT_SUBJECT,
) -> List[DeliveryResult]:
    if not sender:
        raise NotificationConfigError("FROM_EMAIL is required to send emails.")

    logger.info("Sending Secret Santa emails...")
    results: List[DeliveryResult] = []
    for pairing in pairings:
        result = await send_assignment_email(client, pairing, sender, template, subject)
        results.append(result)

        log = logger.bind(giver=result.giver, email=result.email)
        if result.success:
            log.info("Sent to {giver} ({email})", giver=result.giver, email=result.email)
        else:
            log.error(
                "Failed to send to {giver} ({email}): {error}",
                giver=result.giver,
                email=result.email,
                error=result.error,
            )

        await asyncio.sleep(delay_seconds)

    summary = summarize(results)
    logger.info("Email summary: sent {sent}/{total}", sent=summary.sent, total=summary.total)
    if summary.failed:
        logger.warning(
            "Email summary: failed {failed}/{total}", failed=summary.failed, total=summary.total
        )
    return results
