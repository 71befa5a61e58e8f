import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    names_path: str
    output_path: str
    send_emails: bool
    from_email: Optional[str]
    resend_api_key: Optional[str]
    resend_base_url: str
    email_subject: str
    email_template_path: Optional[str]
    email_delay_seconds: float
    preview_path: str
    log_level: str
    log_path: str


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}.") from exc
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}.")
    return value


def load_settings() -> Settings:
    return Settings(
        names_path=os.getenv("NAMES_PATH", "names.txt"),
        output_path=os.getenv("OUTPUT_PATH", "output.txt"),
        send_emails=os.getenv("SEND_EMAILS", "true").strip().lower() != "false",
        from_email=os.getenv("FROM_EMAIL") or None,
        resend_api_key=os.getenv("RESEND_API_KEY") or None,
        resend_base_url=os.getenv("RESEND_BASE_URL", "https://api.resend.com"),
        email_subject=os.getenv("EMAIL_SUBJECT", "Group Secret Santa Assignment"),
        email_template_path=os.getenv("EMAIL_TEMPLATE_PATH") or None,
        email_delay_seconds=_get_float("EMAIL_DELAY_SECONDS", 0.6),
        preview_path=os.getenv("PREVIEW_PATH", "email-preview.html"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_path=os.getenv("LOG_PATH", "logs/secret_santa.log"),
    )
