import pytest

from polysql.config import CompilerSettings, parse_bool, parse_int
from polysql.errors import ConfigurationError


def test_defaults():
    settings = CompilerSettings()
    assert settings.insert_chunk_size == 1000
    assert settings.slow_query_ms == 100.0
    assert settings.deleted_at_column == "deleted_at"
    assert settings.redact_query_log is True


def test_from_env_reads_prefixed_values():
    settings = CompilerSettings.from_env(
        environ={
            "POLYSQL_INSERT_CHUNK_SIZE": "250",
            "POLYSQL_SLOW_QUERY_MS": "12.5",
            "POLYSQL_DELETED_AT_COLUMN": "removed_at",
            "POLYSQL_REDACT_QUERY_LOG": "off",
        }
    )
    assert settings.insert_chunk_size == 250
    assert settings.slow_query_ms == 12.5
    assert settings.deleted_at_column == "removed_at"
    assert settings.redact_query_log is False


def test_from_env_uses_os_environ(monkeypatch):
    monkeypatch.setenv("APP_INSERT_CHUNK_SIZE", "10")
    assert CompilerSettings.from_env(prefix="APP_").insert_chunk_size == 10


@pytest.mark.parametrize(
    "environ",
    [
        {"POLYSQL_INSERT_CHUNK_SIZE": "zero"},
        {"POLYSQL_INSERT_CHUNK_SIZE": "0"},
        {"POLYSQL_SLOW_QUERY_MS": "fast"},
        {"POLYSQL_REDACT_QUERY_LOG": "maybe"},
        {"POLYSQL_DELETED_AT_COLUMN": "deleted at"},
    ],
)
def test_invalid_environment_values(environ):
    with pytest.raises(ConfigurationError):
        CompilerSettings.from_env(environ=environ)


def test_with_overrides():
    settings = CompilerSettings().with_overrides(insert_chunk_size=5)
    assert settings.insert_chunk_size == 5
    with pytest.raises(ConfigurationError):
        CompilerSettings().with_overrides(chunk=5)
    with pytest.raises(ConfigurationError):
        CompilerSettings(insert_chunk_size=0)


def test_deleted_at_column_rejects_trailing_newline():
    with pytest.raises(ConfigurationError):
        CompilerSettings(deleted_at_column="deleted_at\n")


def test_parsers():
    assert parse_bool(" Yes ", key="flag") is True
    assert parse_int("3", key="n", minimum=1) == 3
    with pytest.raises(ConfigurationError):
        parse_int("0", key="n", minimum=1)
