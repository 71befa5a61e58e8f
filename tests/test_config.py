import pytest

from secret_santa.core.config import load_settings

ENV_VARS = [
    "NAMES_PATH",
    "OUTPUT_PATH",
    "SEND_EMAILS",
    "FROM_EMAIL",
    "RESEND_API_KEY",
    "RESEND_BASE_URL",
    "EMAIL_SUBJECT",
    "EMAIL_TEMPLATE_PATH",
    "EMAIL_DELAY_SECONDS",
    "PREVIEW_PATH",
    "LOG_LEVEL",
    "LOG_PATH",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_settings_defaults(clean_env):
    settings = load_settings()
    assert settings.names_path == "names.txt"
    assert settings.output_path == "output.txt"
    assert settings.send_emails is True
    assert settings.from_email is None
    assert settings.resend_api_key is None
    assert settings.email_delay_seconds == 0.6
    assert settings.log_level == "INFO"


def test_settings_send_emails_disabled_only_by_false(clean_env):
    clean_env.setenv("SEND_EMAILS", "FALSE")
    assert load_settings().send_emails is False
    clean_env.setenv("SEND_EMAILS", "no")
    assert load_settings().send_emails is True


def test_settings_reads_email_configuration(clean_env):
    clean_env.setenv("FROM_EMAIL", "santa@example.com")
    clean_env.setenv("RESEND_API_KEY", "re_key")
    clean_env.setenv("EMAIL_DELAY_SECONDS", "1.5")
    settings = load_settings()
    assert settings.from_email == "santa@example.com"
    assert settings.resend_api_key == "re_key"
    assert settings.email_delay_seconds == 1.5


@pytest.mark.parametrize("value", ["soon", "-1"])
def test_settings_rejects_bad_delay(clean_env, value):
    clean_env.setenv("EMAIL_DELAY_SECONDS", value)
    with pytest.raises(ValueError, match="EMAIL_DELAY_SECONDS"):
        load_settings()
