"""Word-list discovery and caching.

Tests cover:
    - configured path wins when it exists
    - fallback discovery by pattern (recursive and flat)
    - MissingWordList when nothing is found
    - WordListCache reads once, invalidate/reload re-read
    - decoding errors propagate unchanged
"""

import pytest

from core.errors import MissingWordList
from core.resources_loader import (
    WordListCache,
    find_word_list,
    read_word_list,
    resolve_word_list_path,
)


def test_configured_path_is_used_when_present(tmp_path):
    configured = tmp_path / "mine.txt"
    configured.write_text("one\n", encoding="utf-8")
    assert resolve_word_list_path(configured, search_root=tmp_path) == configured


def test_missing_configured_path_falls_back_to_discovery(tmp_path):
    nested = tmp_path / "data" / "eff_wordlist.txt"
    nested.parent.mkdir()
    nested.write_text("one\n", encoding="utf-8")
    found = resolve_word_list_path(tmp_path / "absent.txt", search_root=tmp_path)
    assert found == nested


def test_discovery_prefers_shallow_matches(tmp_path):
    deep = tmp_path / "a" / "b" / "wordlist.txt"
    deep.parent.mkdir(parents=True)
    deep.write_text("deep\n", encoding="utf-8")
    shallow = tmp_path / "z_wordlist.txt"
    shallow.write_text("shallow\n", encoding="utf-8")
    assert find_word_list(search_root=tmp_path) == shallow


def test_flat_discovery_ignores_subdirectories(tmp_path):
    nested = tmp_path / "sub" / "wordlist.txt"
    nested.parent.mkdir()
    nested.write_text("one\n", encoding="utf-8")
    assert find_word_list(search_root=tmp_path, recursive=False) is None
    assert find_word_list(search_root=tmp_path, recursive=True) == nested


def test_missing_word_list_raises(tmp_path):
    with pytest.raises(MissingWordList) as excinfo:
        resolve_word_list_path(None, search_root=tmp_path)
    assert excinfo.value.searched


def test_default_search_root_is_cwd(word_list):
    assert resolve_word_list_path(None) == word_list


def test_read_word_list_skips_blank_lines(tmp_path):
    path = tmp_path / "wordlist.txt"
    path.write_text("alpha\n\n  bravo  \n\ncharlie", encoding="utf-8")
    assert read_word_list(path) == ("alpha", "bravo", "charlie")


def test_read_word_list_propagates_decode_errors(tmp_path):
    path = tmp_path / "wordlist.txt"
    path.write_bytes(b"\xff\xfe\xfa broken")
    with pytest.raises(UnicodeDecodeError):
        read_word_list(path, encoding="utf-8")


# ─── WordListCache ───────────────────────────────────────────────

def test_cache_reads_file_once(word_list):
    cache = WordListCache()
    first = cache.load(word_list)
    word_list.write_text("changed\n", encoding="utf-8")
    assert cache.load(word_list) == first == ("alpha", "bravo", "charlie")
    assert word_list in cache
    assert len(cache) == 1


def test_cache_reload_rereads_file(word_list):
    cache = WordListCache()
    cache.load(word_list)
    word_list.write_text("changed\n", encoding="utf-8")
    assert cache.reload(word_list) == ("changed",)


def test_cache_invalidate_all(word_list):
    cache = WordListCache()
    cache.load(word_list)
    cache.invalidate()
    assert len(cache) == 0
    assert word_list not in cache


def test_cache_missing_file_raises_os_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        WordListCache().load(tmp_path / "nope.txt")
