"""
Integration tests for ReconcileCommand, the entry point used by host applications.
"""
from datkeeper import ReconcileCommand, ReconcileParams
from datkeeper.core.models import DupeType


class TestReconcileCommand:
    """Test command orchestration logic."""

    def test_execute_returns_index_and_stats(self, mixed_catalog):
        command = ReconcileCommand()
        index, stats = command.execute(mixed_catalog, ReconcileParams())

        assert list(index.keys()) == ["empty", "game1", "game2", "game3"]
        assert stats.dupe_counts[DupeType.EXTERNAL_ALL] == 3
        assert "merge" in stats.stage_stats

    def test_default_params(self, mixed_catalog):
        index, _ = ReconcileCommand().execute(mixed_catalog)
        assert sum(len(items) for items in index.values()) == 6

    def test_execute_invokes_progress_callback(self, mixed_catalog):
        calls = []
        ReconcileCommand().execute(
            mixed_catalog,
            progress_callback=lambda stage, current, total: calls.append((stage, current, total)))

        assert calls
        assert all(current <= total for _, current, total in calls)

    def test_get_index_returns_copies(self, mixed_catalog):
        command = ReconcileCommand()
        command.execute(mixed_catalog)

        first = command.get_index()
        first["game1"].clear()

        assert len(command.get_index()["game1"]) == 1

    def test_get_index_before_execute(self):
        assert ReconcileCommand().get_index() == {}

    def test_fingerprint_tracks_last_run(self, mixed_catalog):
        command = ReconcileCommand()
        command.execute(mixed_catalog)
        merged = command.fingerprint()

        command.execute(mixed_catalog, ReconcileParams(merge=False))
        unmerged = command.fingerprint()

        assert len(merged) == 16
        assert merged != unmerged
