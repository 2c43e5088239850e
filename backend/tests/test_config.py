import pytest

from bloglist.config import Settings

CONFIG_VARS = ("ENV", "DATABASE_URL", "TEST_DATABASE_URL", "JWT_SECRET", "JWT_ALGORITHM", "JWT_EXPIRE_SECONDS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)


def test_dev_defaults():
    s = Settings()
    assert s.ENV == "dev"
    assert s.DATABASE_URL.startswith("sqlite:///")
    assert s.DATABASE_URL.endswith("bloglist.db")
    assert s.JWT_ALGORITHM == "HS256"
    assert s.JWT_EXPIRE_SECONDS == 3600
    assert not s.is_test


def test_test_env_uses_test_database(monkeypatch):
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("DATABASE_URL", "postgresql://prod/blogs")
    assert Settings().DATABASE_URL == "sqlite://"
    monkeypatch.setenv("TEST_DATABASE_URL", "sqlite:///tmp/test.db")
    s = Settings()
    assert s.DATABASE_URL == "sqlite:///tmp/test.db"
    assert s.is_test


def test_production_requires_database_url(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("JWT_SECRET", "a-real-secret-value")
    with pytest.raises(RuntimeError, match="DATABASE_URL"):
        Settings()


def test_production_requires_secret(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("DATABASE_URL", "postgresql://db/blogs")
    with pytest.raises(RuntimeError, match="JWT_SECRET"):
        Settings()


def test_production_rejects_default_secret(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("DATABASE_URL", "postgresql://db/blogs")
    monkeypatch.setenv("JWT_SECRET", "change_me_for_prod")
    with pytest.raises(RuntimeError, match="non-default"):
        Settings()


def test_production_with_everything_set(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("DATABASE_URL", "postgresql://db/blogs")
    monkeypatch.setenv("JWT_SECRET", "a-real-secret-value")
    monkeypatch.setenv("JWT_EXPIRE_SECONDS", "600")
    s = Settings()
    assert s.DATABASE_URL == "postgresql://db/blogs"
    assert s.JWT_EXPIRE_SECONDS == 600


def test_ttl_must_be_positive(monkeypatch):
    monkeypatch.setenv("JWT_EXPIRE_SECONDS", "0")
    with pytest.raises(RuntimeError, match="JWT_EXPIRE_SECONDS"):
        Settings()
