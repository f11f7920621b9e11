"""
core/locks.py - 이름 기반 뮤텍스 레지스트리

같은 부모 범위(예: 동일 DNS 인스턴스 + 존)에 속한 리소스의 생성/삭제를
오케스트레이터 워커 스레드 간에 직렬화합니다. 벤더 API는 같은 범위에 대한
동시 변경 요청을 거부하거나 상태를 깨뜨릴 수 있습니다.

특징:
- 키별 threading.Lock을 최초 사용 시 생성 (append-only, 제거하지 않음)
- 레지스트리는 세션 객체가 소유하며 각 작업에 주입됨 (전역 상태 없음)
- 모든 종료 경로(예외 포함)에서 잠금 해제 보장

Example:
    registry = NamedLockRegistry()
    key = scope_key("private_dns_permitted_network", instance_id, zone_id)

    with registry.hold(key):
        dns.create_permitted_network(...)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def scope_key(kind: str, *parents: str) -> str:
    """리소스 종류와 부모 식별자로 잠금 키 생성

    Args:
        kind: 리소스 종류 (예: "private_dns_permitted_network")
        *parents: 부모 식별자 (예: 인스턴스 ID, 존 ID)

    Returns:
        "kind/parent1/parent2" 형식의 결정적 키
    """
    return "/".join((kind, *parents))


class NamedLockRegistry:
    """스레드 세이프 이름 기반 잠금 레지스트리"""

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def lock_for(self, key: str) -> threading.Lock:
        """키에 해당하는 잠금 반환 (없으면 생성)"""
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """키 잠금을 획득한 상태로 블록 실행"""
        lock = self.lock_for(key)
        logger.debug(f"잠금 대기: {key}")
        with lock:
            logger.debug(f"잠금 획득: {key}")
            yield
        logger.debug(f"잠금 해제: {key}")

    def run(self, key: str, func: Callable[..., T], *args, **kwargs) -> T:
        """키 잠금 안에서 함수 실행 후 결과 반환"""
        with self.hold(key):
            return func(*args, **kwargs)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def __contains__(self, key: object) -> bool:
        with self._guard:
            return key in self._locks
