"""Tests for the CLI address history module."""

import pytest

from cli.history import History, clear_history, load_history, record_address, save_history


@pytest.fixture
def temp_history_dir(tmp_path, monkeypatch):
    """Override the config directory to use a temporary path."""
    cli_dir = tmp_path / ".scraperex_cli"
    monkeypatch.setattr("cli.history.settings.cli_config_dir", cli_dir)
    return cli_dir


def test_load_default_history(temp_history_dir):
    """Should return an empty history when no file exists."""
    assert load_history().addresses == []


def test_save_and_load_roundtrip(temp_history_dir):
    save_history(History(addresses=["a.com", "b.com"]))
    assert load_history().addresses == ["a.com", "b.com"]


def test_corrupt_file_loads_empty(temp_history_dir):
    temp_history_dir.mkdir(parents=True)
    (temp_history_dir / "history.json").write_text("{not json", encoding="utf-8")
    assert load_history().addresses == []


def test_most_recent_first(temp_history_dir):
    record_address("one.com")
    record_address("two.com")
    assert load_history().addresses == ["two.com", "one.com"]


def test_duplicate_leaves_order_unchanged(temp_history_dir):
    record_address("one.com")
    record_address("two.com")
    record_address(" one.com ")
    assert load_history().addresses == ["two.com", "one.com"]


def test_capped_at_limit(temp_history_dir, monkeypatch):
    monkeypatch.setattr("cli.history.settings.history_limit", 10)
    for i in range(12):
        record_address(f"site{i}.com")
    addresses = load_history().addresses
    assert len(addresses) == 10
    assert addresses[0] == "site11.com"
    assert addresses[-1] == "site2.com"


def test_clear_history(temp_history_dir):
    record_address("one.com")
    clear_history()
    assert load_history().addresses == []


def test_blank_address_ignored():
    history = History()
    assert history.record("   ", limit=10) is False
    assert history.addresses == []
