"""Existence-check adapters — memory, snapshot files and HTTP (MockTransport).

Tests cover:
    - InMemoryDirectory is case-insensitive and records lookups
    - snapshots load from JSON and plain text; bad JSON is a ValidationError
    - HttpDirectoryCheck maps 200/404 and raises on anything else (redirects too)
    - transport errors become DirectoryLookupError
    - bearer token and base URL come from settings
"""

import json

import httpx
import pytest

from adapters.directory import HttpDirectoryCheck, InMemoryDirectory, load_directory_snapshot
from core.config import AppSettings
from core.errors import DirectoryLookupError, ValidationError
from core.services.identifier import resolve_identifier


def _settings(**kwargs):
    return AppSettings(_env_file=None, **kwargs)


# ─── InMemoryDirectory ───────────────────────────────────────────

def test_memory_directory_is_case_insensitive():
    directory = InMemoryDirectory(["EX-JDOE", "  "])
    assert directory("ex-jdoe")
    assert not directory("ex-jdoe1")
    assert len(directory) == 1
    assert directory.lookups == ["ex-jdoe", "ex-jdoe1"]


def test_memory_directory_add():
    directory = InMemoryDirectory()
    directory.add("ex-new")
    assert directory("ex-new")


# ─── snapshots ───────────────────────────────────────────────────

def test_snapshot_from_json(tmp_path):
    path = tmp_path / "dir.json"
    path.write_text(json.dumps({"identifiers": ["ex-jdoe", "ex-jdoe1"]}), encoding="utf-8")
    directory = load_directory_snapshot(path)
    assert resolve_identifier("ex-jdoe", directory).final == "ex-jdoe2"


def test_snapshot_from_text(tmp_path):
    path = tmp_path / "dir.txt"
    path.write_text("# exported\nex-jdoe\n\nex-asmith\n", encoding="utf-8")
    directory = load_directory_snapshot(path)
    assert len(directory) == 2
    assert directory("ex-asmith")


def test_snapshot_invalid_json_shape(tmp_path):
    path = tmp_path / "dir.json"
    path.write_text(json.dumps({"identifiers": "ex-jdoe"}), encoding="utf-8")
    with pytest.raises(ValidationError) as excinfo:
        load_directory_snapshot(path)
    assert excinfo.value.field == "snapshot"


def test_snapshot_malformed_json(tmp_path):
    path = tmp_path / "dir.json"
    path.write_text('{"identifiers": ["ex-jdoe",', encoding="utf-8")
    with pytest.raises(ValidationError) as excinfo:
        load_directory_snapshot(path)
    assert excinfo.value.code == "VALIDATION_ERROR"
    assert excinfo.value.field == "snapshot"


# ─── HttpDirectoryCheck ──────────────────────────────────────────

def _transport(taken, seen=None, status=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if status is not None:
            return httpx.Response(status)
        name = request.url.path.rsplit("/", 1)[-1]
        return httpx.Response(200 if name in taken else 404)

    return httpx.MockTransport(handler)


def test_http_check_maps_status_codes():
    settings = _settings(directory_base_url="https://dir.example/users")
    with HttpDirectoryCheck(settings, transport=_transport({"ex-jdoe"})) as check:
        assert check("ex-jdoe") is True
        assert check("ex-jdoe1") is False


def test_http_check_drives_resolver():
    seen = []
    settings = _settings(directory_base_url="https://dir.example/users/")
    with HttpDirectoryCheck(settings, transport=_transport({"ex-jdoe", "ex-jdoe1"}, seen)) as check:
        result = resolve_identifier("ex-jdoe", check)
    assert result.final == "ex-jdoe2"
    assert [r.url.path for r in seen] == [
        "/users/ex-jdoe",
        "/users/ex-jdoe1",
        "/users/ex-jdoe2",
    ]


def test_http_check_sends_token_and_user_agent():
    seen = []
    settings = _settings(directory_base_url="https://dir.example", directory_token="t0k")
    with HttpDirectoryCheck(settings, transport=_transport(set(), seen)) as check:
        check("ex-jdoe")
    assert seen[0].headers["Authorization"] == "Bearer t0k"
    assert seen[0].headers["User-Agent"].startswith("acctsmith/")


def test_http_check_unexpected_status_raises():
    settings = _settings(directory_base_url="https://dir.example")
    with HttpDirectoryCheck(settings, transport=_transport(set(), status=500)) as check:
        with pytest.raises(DirectoryLookupError) as excinfo:
            check("ex-jdoe")
    assert excinfo.value.candidate == "ex-jdoe"


def test_http_check_does_not_follow_redirects():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(302, headers={"Location": "https://login.example/"})

    settings = _settings(directory_base_url="https://dir.example")
    with HttpDirectoryCheck(settings, transport=httpx.MockTransport(handler)) as check:
        with pytest.raises(DirectoryLookupError) as excinfo:
            check("ex-jdoe")
    assert "redirect" in excinfo.value.detail
    assert len(seen) == 1


def test_http_check_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    settings = _settings(directory_base_url="https://dir.example")
    with HttpDirectoryCheck(settings, transport=httpx.MockTransport(handler)) as check:
        with pytest.raises(DirectoryLookupError):
            check("ex-jdoe")


def test_http_check_requires_base_url():
    with pytest.raises(ValidationError):
        HttpDirectoryCheck(_settings())


def test_explicit_base_url_overrides_settings():
    seen = []
    settings = _settings(directory_base_url="https://ignored.example")
    with HttpDirectoryCheck(
        settings,
        base_url="https://dir.example/api",
        transport=_transport(set(), seen),
    ) as check:
        check("ex-jdoe")
    assert seen[0].url.host == "dir.example"
    assert seen[0].url.path == "/api/ex-jdoe"
