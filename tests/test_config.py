"""Settings tests."""

import pytest
from pydantic import ValidationError

from pocketbook.config import Settings


def test_development_defaults():
    settings = Settings(environment="development")

    assert settings.is_development
    assert not settings.is_production
    assert settings.access_token_max_age == 3600
    assert settings.refresh_token_max_age == 7 * 24 * 3600


def test_production_rejects_default_secret():
    with pytest.raises(ValidationError):
        Settings(environment="production", database_url="postgresql://db/pocketbook")


def test_production_rejects_sqlite():
    with pytest.raises(ValidationError):
        Settings(environment="production", jwt_secret="s3cret", database_url="sqlite:///./x.db")


def test_production_settings():
    settings = Settings(
        environment="production",
        jwt_secret="s3cret",
        database_url="postgresql://db/pocketbook",
    )

    assert settings.is_production
    assert not settings.is_development
