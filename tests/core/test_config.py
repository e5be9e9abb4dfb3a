"""Settings and user .env handling.

Tests cover:
    - defaults match the documented provisioning rules
    - ACCTSMITH_ environment variables override defaults
    - write_user_env_vars creates and merges the user .env
    - policies translate from settings
"""

from pathlib import Path

from core.config import DEFAULT_BANNED_WORDS, AppSettings, get_user_env_file, write_user_env_vars
from core.domain.models import IdentifierPolicy, PassphraseOptions, PasswordPolicy


def test_defaults():
    settings = AppSettings(_env_file=None)
    assert settings.identifier_prefix == "ex-"
    assert settings.identifier_max_length == 11
    assert settings.password_min_length == 14
    assert settings.password_max_length == 20
    assert settings.resolve_max_attempts == 9999
    assert tuple(settings.banned_words) == DEFAULT_BANNED_WORDS


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ACCTSMITH_PASSPHRASE_MIN_LENGTH", "32")
    monkeypatch.setenv("ACCTSMITH_WORD_LIST_PATH", "/tmp/words.txt")
    settings = AppSettings(_env_file=None)
    assert settings.passphrase_min_length == 32
    assert settings.word_list_path == Path("/tmp/words.txt")


def test_write_user_env_vars_merges(tmp_path):
    path = write_user_env_vars({"ACCTSMITH_WORD_LIST_PATH": "/a.txt"})
    assert path == get_user_env_file()
    assert path.is_relative_to(tmp_path)
    write_user_env_vars({"ACCTSMITH_DIRECTORY_BASE_URL": "https://dir", "ACCTSMITH_WORD_LIST_PATH": None})
    text = path.read_text(encoding="utf-8")
    assert "ACCTSMITH_WORD_LIST_PATH=/a.txt" in text
    assert "ACCTSMITH_DIRECTORY_BASE_URL=https://dir" in text


def test_policies_from_settings():
    settings = AppSettings(
        _env_file=None,
        password_min_length=16,
        password_max_length=18,
        passphrase_min_length=25,
        surname_chars=6,
    )
    assert PasswordPolicy.from_settings(settings).min_length == 16
    assert IdentifierPolicy.from_settings(settings).surname_chars == 6
    options = PassphraseOptions.from_settings(settings, complex=True, iterations=None)
    assert options.min_length == 25
    assert options.complex is True
    assert options.iterations == settings.passphrase_iterations
