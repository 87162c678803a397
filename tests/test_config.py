import pytest

from loan_payoff.config import DEFAULT_MAX_DAYS, DEFAULT_MAX_SNAPSHOTS, load_settings


def test_defaults():
    settings = load_settings({})
    assert settings.max_days == DEFAULT_MAX_DAYS
    assert settings.max_snapshots == DEFAULT_MAX_SNAPSHOTS
    assert settings.log_level == "WARNING"
    assert settings.currency == "USD"


def test_overrides():
    settings = load_settings(
        {
            "FLASK_SECRET_KEY": "s3cret",
            "LOAN_PAYOFF_MAX_DAYS": "3650",
            "LOAN_PAYOFF_MAX_SNAPSHOTS": "5",
            "LOAN_PAYOFF_LOG_LEVEL": "debug",
            "LOAN_PAYOFF_CURRENCY": "eur",
        }
    )
    assert settings.secret_key == "s3cret"
    assert settings.max_days == 3650
    assert settings.max_snapshots == 5
    assert settings.log_level == "DEBUG"
    assert settings.currency == "EUR"


def test_malformed_integer():
    with pytest.raises(ValueError, match="LOAN_PAYOFF_MAX_DAYS"):
        load_settings({"LOAN_PAYOFF_MAX_DAYS": "lots"})
