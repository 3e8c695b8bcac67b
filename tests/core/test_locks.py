# tests/core/test_locks.py
"""Tests for per-path lock registry."""

import threading
from pathlib import Path

from flowline.core.locks import PathLockRegistry, default_path_locks, lock_key


class TestPathLockRegistry:
    """One lock per normalized path."""

    def test_same_path_same_lock(self, tmp_path: Path) -> None:
        registry = PathLockRegistry()

        assert registry.lock_for(tmp_path / "a.txt") is registry.lock_for(str(tmp_path / "a.txt"))

    def test_equivalent_spellings_share_lock(self, tmp_path: Path) -> None:
        registry = PathLockRegistry()

        direct = registry.lock_for(tmp_path / "a.txt")
        roundabout = registry.lock_for(f"{tmp_path}/sub/../a.txt")

        assert direct is roundabout

    def test_different_paths_different_locks(self, tmp_path: Path) -> None:
        registry = PathLockRegistry()

        assert registry.lock_for(tmp_path / "a.txt") is not registry.lock_for(tmp_path / "b.txt")
        assert len(registry) == 2

    def test_reset_all(self, tmp_path: Path) -> None:
        registry = PathLockRegistry()
        registry.lock_for(tmp_path / "a.txt")

        registry.reset_all()

        assert len(registry) == 0

    def test_lock_key_is_absolute(self) -> None:
        assert Path(lock_key("relative.txt")).is_absolute()

    def test_concurrent_lookup_yields_single_lock(self, tmp_path: Path) -> None:
        registry = PathLockRegistry()
        seen: list[threading.Lock] = []
        guard = threading.Lock()

        def grab() -> None:
            lock = registry.lock_for(tmp_path / "shared.txt")
            with guard:
                seen.append(lock)

        threads = [threading.Thread(target=grab) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len({id(lock) for lock in seen}) == 1

    def test_default_registry_exists(self) -> None:
        assert isinstance(default_path_locks, PathLockRegistry)
