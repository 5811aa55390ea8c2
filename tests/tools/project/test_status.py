#!/usr/bin/env python3
"""
Unit тесты для status.py
"""

import pytest

from gjp_mcp.models.project import Phase
from gjp_mcp.tools.project.status import InMemoryPhaseStore, MarkerFilePhaseStore


def _markers(root):
    return sorted(path.name for path in root.iterdir() if path.name in (".gathering", ".dry_running"))


class TestMarkerFilePhaseStore:
    """Тесты для MarkerFilePhaseStore"""

    @pytest.fixture
    def store(self, tmp_path):
        return MarkerFilePhaseStore(tmp_path)

    def test_no_marker_means_no_phase(self, store):
        assert store.read() == Phase.NONE

    def test_write_creates_marker(self, store, tmp_path):
        store.write(Phase.GATHERING)

        assert store.read() == Phase.GATHERING
        assert _markers(tmp_path) == [".gathering"]

    def test_write_replaces_other_marker(self, store, tmp_path):
        """Тест: одновременно существует не более одного маркера"""
        store.write(Phase.GATHERING)
        store.write(Phase.DRY_RUNNING)

        assert store.read() == Phase.DRY_RUNNING
        assert _markers(tmp_path) == [".dry_running"]

    def test_write_repairs_stray_markers(self, store, tmp_path):
        (tmp_path / ".gathering").touch()
        (tmp_path / ".dry_running").touch()

        store.write(Phase.GATHERING)

        assert _markers(tmp_path) == [".gathering"]

    def test_clear_removes_all_markers(self, store, tmp_path):
        store.write(Phase.DRY_RUNNING)
        store.clear()

        assert store.read() == Phase.NONE
        assert _markers(tmp_path) == []


class TestInMemoryPhaseStore:
    """Тесты для InMemoryPhaseStore"""

    def test_round_trip(self):
        store = InMemoryPhaseStore()
        assert store.read() == Phase.NONE

        store.write(Phase.DRY_RUNNING)
        assert store.read() == Phase.DRY_RUNNING

        store.clear()
        assert store.read() == Phase.NONE
