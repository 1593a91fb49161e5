import logging

import numpy as np

from rubik_twophase import persistence
from rubik_twophase.config import PRUNING_TABLE_FILES
from rubik_twophase.persistence import load_or_generate, load_pruning_tables, save_pruning_tables, table_paths


def _assert_same_tables(a, b):
    for name, table in a.items():
        assert np.array_equal(table, getattr(b, name)), name


def test_save_then_load_round_trip(pruning, tmp_path):
    assert save_pruning_tables(pruning, tmp_path)
    for name, path in table_paths(tmp_path).items():
        assert path.name == PRUNING_TABLE_FILES[name]
        assert path.stat().st_size == getattr(pruning, name).size
    _assert_same_tables(pruning, load_pruning_tables(tmp_path))


def test_missing_file_loads_nothing(pruning, tmp_path):
    save_pruning_tables(pruning, tmp_path)
    (tmp_path / PRUNING_TABLE_FILES["phase2_edge"]).unlink()
    assert load_pruning_tables(tmp_path) is None


def test_wrong_size_loads_nothing(pruning, tmp_path, caplog):
    save_pruning_tables(pruning, tmp_path)
    (tmp_path / PRUNING_TABLE_FILES["phase1_edge"]).write_bytes(b"\x00" * 100)
    with caplog.at_level(logging.WARNING):
        assert load_pruning_tables(tmp_path) is None
    assert "Error loading pruning tables" in caplog.text


def test_write_failure_returns_false(pruning, tmp_path, caplog):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    with caplog.at_level(logging.ERROR):
        assert save_pruning_tables(pruning, blocker) is False
    assert "Error saving pruning tables" in caplog.text


def test_load_or_generate_prefers_files(pruning, transitions, tables_dir, monkeypatch):
    def fail(_):
        raise AssertionError("tables should have been loaded")

    monkeypatch.setattr(persistence, "generate_pruning_tables", fail)
    _assert_same_tables(pruning, load_or_generate(transitions, tables_dir))


def test_load_or_generate_regenerates_and_saves(pruning, transitions, tmp_path, monkeypatch):
    calls = []

    def fake_generate(t):
        calls.append(t)
        return pruning

    monkeypatch.setattr(persistence, "generate_pruning_tables", fake_generate)
    _assert_same_tables(pruning, load_or_generate(transitions, tmp_path))
    assert calls == [transitions]
    assert load_pruning_tables(tmp_path) is not None
