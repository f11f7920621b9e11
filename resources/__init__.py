"""
resources - 프로바이더가 제공하는 리소스 및 데이터 소스 레지스트리

Usage:
    from resources import get_resource

    resource = get_resource("is_security_group")
"""

from __future__ import annotations

from core.lifecycle import DataSource, Resource

from .dns_permitted_network import permitted_network
from .pi_key import pi_key
from .security_group import security_group

RESOURCES: dict[str, Resource] = {r.name: r for r in (security_group, permitted_network)}

DATA_SOURCES: dict[str, DataSource] = {d.name: d for d in (pi_key,)}


def get_resource(name: str) -> Resource:
    """이름으로 리소스 정의 조회

    Raises:
        KeyError: 등록되지 않은 리소스
    """
    try:
        return RESOURCES[name]
    except KeyError:
        raise KeyError(f"알 수 없는 리소스: {name} (사용 가능: {', '.join(sorted(RESOURCES))})") from None


def get_data_source(name: str) -> DataSource:
    """이름으로 데이터 소스 정의 조회

    Raises:
        KeyError: 등록되지 않은 데이터 소스
    """
    try:
        return DATA_SOURCES[name]
    except KeyError:
        raise KeyError(f"알 수 없는 데이터 소스: {name} (사용 가능: {', '.join(sorted(DATA_SOURCES))})") from None


__all__: list[str] = [
    "RESOURCES",
    "DATA_SOURCES",
    "get_resource",
    "get_data_source",
]
