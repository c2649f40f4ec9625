"""
Tests unitaires pour ProgressRegistry.
"""

import threading

from src.services.progress import ProgressRegistry


class TestProgressRegistry:
    """Tests du registre de progression."""

    def test_register_returns_unique_ids(self) -> None:
        registry = ProgressRegistry()
        ids = {registry.register(f"f{i}") for i in range(5)}
        assert len(ids) == 5
        assert len(registry) == 5

    def test_update_and_snapshot(self) -> None:
        registry = ProgressRegistry()
        upload_id = registry.register("clip.mp4", 1000)
        registry.update(upload_id, 250, 1000)

        [state] = registry.snapshot()
        assert state.name == "clip.mp4"
        assert state.transferred == 250
        assert state.ratio == 0.25

    def test_snapshot_is_a_copy(self) -> None:
        """Modifier une copie ne change pas le registre."""
        registry = ProgressRegistry()
        upload_id = registry.register("clip.mp4", 1000)
        registry.snapshot()[0].transferred = 999
        assert registry.snapshot()[0].transferred == 0
        registry.remove(upload_id)

    def test_negative_total_keeps_previous(self) -> None:
        registry = ProgressRegistry()
        upload_id = registry.register("clip.mp4", 1000)
        registry.update(upload_id, 10, -1)
        assert registry.snapshot()[0].total == 1000

    def test_update_unknown_id_is_ignored(self) -> None:
        registry = ProgressRegistry()
        registry.update(42, 10, 100)
        assert registry.snapshot() == []

    def test_remove(self) -> None:
        registry = ProgressRegistry()
        first = registry.register("a")
        second = registry.register("b")
        registry.remove(first)
        registry.remove(first)
        assert [s.upload_id for s in registry.snapshot()] == [second]

    def test_concurrent_updates(self) -> None:
        """Mises a jour depuis plusieurs threads sans perte d'entree."""
        registry = ProgressRegistry()
        ids = [registry.register(f"f{i}", 1000) for i in range(8)]

        def _worker(upload_id: int) -> None:
            for transferred in range(0, 1001, 10):
                registry.update(upload_id, transferred, 1000)

        threads = [threading.Thread(target=_worker, args=(i,)) for i in ids]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(state.finished for state in registry.snapshot())
        assert len(registry) == 8
