"""
core/identity.py - 복합 식별자 인코딩

벤더가 단일 평면 식별자를 제공하지 않는 리소스(예: DNS permitted network)는
부모/자식 식별자를 "/"로 이어 오케스트레이터에 전달합니다.
이후 Read/Update/Delete/Exists 호출마다 다시 분해해야 합니다.

Example:
    >>> build_composite_id("inst1", "zone1", "net1")
    'inst1/zone1/net1'
    >>> parse_composite_id("inst1/zone1/net1", 3)
    ('inst1', 'zone1', 'net1')
"""

from __future__ import annotations

from core.exceptions import ValidationError

SEPARATOR = "/"


def build_composite_id(*parts: str) -> str:
    """식별자 조각을 복합 식별자로 결합

    Raises:
        ValidationError: 조각이 비어 있거나 구분자를 포함하는 경우
    """
    for part in parts:
        if not part or SEPARATOR in part:
            raise ValidationError("id", part, f"'{SEPARATOR}'를 포함하지 않는 비어있지 않은 문자열")
    return SEPARATOR.join(parts)


def parse_composite_id(identity: str, expected_parts: int) -> tuple[str, ...]:
    """복합 식별자를 조각으로 분해

    Args:
        identity: "a/b/c" 형식 식별자
        expected_parts: 기대하는 조각 수 (2 또는 3)

    Returns:
        조각 튜플

    Raises:
        ValidationError: 조각 수가 다르거나 빈 조각이 있는 경우
    """
    parts = tuple(identity.split(SEPARATOR)) if identity else ()
    if len(parts) != expected_parts or not all(parts):
        expected = SEPARATOR.join(f"<part{i + 1}>" for i in range(expected_parts))
        raise ValidationError("id", identity, expected)
    return parts
