# Shared fixtures for LinkBoard tests.
# Created: 2026-03-03

import pytest

from linkboard.config import Settings
from linkboard.directory import DirectoryStore, StoreConfig
from linkboard.kv import KVStoreError, MemoryKVStore


class FlakyKVStore(MemoryKVStore):
    """Memory store whose reads and writes can be told to fail."""

    def __init__(self, initial=None, put_failures=0, fail_gets=False):
        super().__init__(initial)
        self.put_failures = put_failures  # fail this many puts, then succeed
        self.fail_gets = fail_gets
        self.put_calls = 0
        self.get_calls = 0

    async def get(self, key):
        self.get_calls += 1
        if self.fail_gets:
            raise KVStoreError("namespace unavailable", key=key)
        return await super().get(key)

    async def put(self, key, value):
        self.put_calls += 1
        if self.put_failures > 0:
            self.put_failures -= 1
            raise KVStoreError(f"put #{self.put_calls} rejected", key=key)
        await super().put(key, value)


FAST_CONFIG = StoreConfig(retry_base_delay=0)


@pytest.fixture
def kv():
    return MemoryKVStore()


@pytest.fixture
def store(kv):
    return DirectoryStore(kv, FAST_CONFIG)


@pytest.fixture
def make_flaky_kv():
    return FlakyKVStore


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        _env_file=None,
        kv_backend="memory",
        kv_file_path=tmp_path / "kv.json",
        retry_base_delay=0,
        admin_password=None,
    )
