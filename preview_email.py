from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from secret_santa.core.config import load_settings
from secret_santa.core.logging import setup_logging
from secret_santa.services.notifications import (
    NotificationConfigError,
    html_to_text,
    load_template,
    render_email,
)

SAMPLE_SANTA = "Dundee"
SAMPLE_RECEIVER = "John"


def write_preview(template: str, path: str) -> str:
    document = render_email(template, SAMPLE_SANTA, SAMPLE_RECEIVER)
    Path(path).write_text(document, encoding="utf-8")
    return document


def main() -> int:
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_path)

    logger.info("Generating Secret Santa email preview")
    try:
        template = load_template(settings.email_template_path)
        document = write_preview(template, settings.preview_path)
    except (NotificationConfigError, OSError) as exc:
        logger.error("{error}", error=str(exc))
        return 1

    logger.info("Email preview saved to {path}; open it in a browser", path=settings.preview_path)
    logger.info("Text version of email:\n{text}", text=html_to_text(document))
    return 0


if __name__ == "__main__":
    sys.exit(main())
