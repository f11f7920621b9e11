"""
tests/core/test_core_locks.py - core/locks.py 테스트
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from core.locks import NamedLockRegistry, scope_key


class TestScopeKey:
    """scope_key 테스트"""

    def test_joins_kind_and_parents(self):
        assert scope_key("private_dns_permitted_network", "inst1", "zone1") == "private_dns_permitted_network/inst1/zone1"

    def test_deterministic(self):
        assert scope_key("kind", "a", "b") == scope_key("kind", "a", "b")
        assert scope_key("kind", "a", "b") != scope_key("kind", "a", "c")


class TestNamedLockRegistry:
    """NamedLockRegistry 테스트"""

    def test_same_key_same_lock(self):
        registry = NamedLockRegistry()
        assert registry.lock_for("k") is registry.lock_for("k")
        assert len(registry) == 1
        assert "k" in registry

    def test_lazy_creation(self):
        registry = NamedLockRegistry()
        assert "k" not in registry
        assert len(registry) == 0

    def test_released_on_exception(self):
        """예외로 빠져나가도 잠금 해제"""
        registry = NamedLockRegistry()
        with pytest.raises(RuntimeError):
            with registry.hold("k"):
                assert registry.lock_for("k").locked()
                raise RuntimeError("boom")
        assert not registry.lock_for("k").locked()

    def test_run_returns_result(self):
        registry = NamedLockRegistry()
        assert registry.run("k", lambda a, b=0: a + b, 1, b=2) == 3

    def test_same_key_never_overlaps(self):
        """같은 키는 동시에 잠금을 잡지 않음"""
        registry = NamedLockRegistry()
        state = {"active": 0, "max": 0}
        counter_lock = threading.Lock()

        def work():
            with registry.hold("zone"):
                with counter_lock:
                    state["active"] += 1
                    state["max"] = max(state["max"], state["active"])
                time.sleep(0.01)
                with counter_lock:
                    state["active"] -= 1

        with ThreadPoolExecutor(max_workers=8) as executor:
            for future in [executor.submit(work) for _ in range(16)]:
                future.result()

        assert state["max"] == 1

    def test_different_keys_may_overlap(self):
        """다른 키는 동시에 실행될 수 있음"""
        registry = NamedLockRegistry()
        barrier = threading.Barrier(2)

        def work(key):
            with registry.hold(key):
                # 두 스레드가 모두 잠금 안에 있어야 통과
                barrier.wait(timeout=5)

        with ThreadPoolExecutor(max_workers=2) as executor:
            futures = [executor.submit(work, "zone-a"), executor.submit(work, "zone-b")]
            for future in futures:
                future.result()

        assert len(registry) == 2
