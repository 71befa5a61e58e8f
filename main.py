from __future__ import annotations

import asyncio
import sys
from typing import Sequence

import aiohttp
from loguru import logger

from secret_santa.core.config import Settings, load_settings
from secret_santa.core.logging import setup_logging
from secret_santa.services import MatchingError, Pairing, generate_matching
from secret_santa.services.notifications import (
    NotificationConfigError,
    ResendClient,
    load_template,
    send_all_emails,
)
from secret_santa.storage import (
    ParticipantSourceError,
    ResultStorageError,
    read_participants,
    write_pairings,
)


def email_skip_reason(settings: Settings) -> str | None:
    if not settings.send_emails:
        return "Email sending disabled (SEND_EMAILS=false)"
    if not settings.from_email:
        return "FROM_EMAIL not configured; set FROM_EMAIL and RESEND_API_KEY to enable emails"
    if not settings.resend_api_key:
        return "RESEND_API_KEY not configured; set RESEND_API_KEY to enable emails"
    return None


async def dispatch_emails(settings: Settings, pairings: Sequence[Pairing]) -> None:
    template = load_template(settings.email_template_path)
    async with aiohttp.ClientSession() as session:
        client = ResendClient(settings.resend_api_key, session, settings.resend_base_url)
        await send_all_emails(
            pairings,
            client,
            settings.from_email,
            template,
            delay_seconds=settings.email_delay_seconds,
            subject=settings.email_subject,
        )


async def main() -> int:
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_path)

    logger.info("Secret Santa matcher")

    try:
        participants = read_participants(settings.names_path)
    except ParticipantSourceError as exc:
        logger.error("{error}", error=str(exc))
        return 1

    if not participants:
        logger.error("No valid participants found in {path}", path=settings.names_path)
        return 1

    logger.info("Found {count} participants", count=len(participants))
    for participant in participants:
        logger.info("   - {name} ({email})", name=participant.name, email=participant.email)

    try:
        pairings = generate_matching(participants)
        write_pairings(pairings, settings.output_path)
    except (MatchingError, ResultStorageError) as exc:
        logger.error("{error}", error=str(exc))
        return 1

    logger.info("Each person has been assigned a unique receiver.")

    reason = email_skip_reason(settings)
    if reason:
        logger.warning("{reason}. Skipping email sending.", reason=reason)
        return 0

    try:
        await dispatch_emails(settings, pairings)
    except NotificationConfigError as exc:
        logger.error("Error sending emails: {error}", error=str(exc))
        logger.info("Pairings have been saved to {path}", path=settings.output_path)
        return 0

    logger.info("All Secret Santa emails have been processed.")
    return 0


if __name__ == "__main__":
    if not getattr(asyncio, "debug", False):
        import uvloop

        uvloop.install()

    sys.exit(asyncio.run(main()))
