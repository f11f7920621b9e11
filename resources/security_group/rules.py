"""
resources/security_group/rules.py - 보안 그룹 규칙 디코더

보안 그룹 조회 응답에 포함된 규칙 목록을 평탄화된 레코드로 변환합니다.
응답 본문에는 규칙 형태를 나타내는 태그가 없으므로, 필드 존재 여부로
변형(variant)을 판별해 명시적인 태그를 붙입니다.

판별 규칙:
    code/type 존재            → ICMP
    port_min/port_max 존재    → TCP_UDP
    둘 다 없음                → protocol 값으로 결정 (없으면 ALL)
    둘 다 존재 / protocol 충돌 / 알 수 없는 protocol → UnknownRuleVariantError

remote 하위 객체는 id → address → cidr_block 순으로 처음 발견된 값을 사용합니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from core.exceptions import UnknownRuleVariantError

logger = logging.getLogger(__name__)

# remote 하위 키 우선순위 (여러 개가 함께 오면 첫 번째만 사용)
REMOTE_KEY_PRIORITY = ("id", "address", "cidr_block")

_ICMP_FIELDS = ("code", "type")
_PORT_FIELDS = ("port_min", "port_max")


class RuleVariant(Enum):
    """보안 그룹 규칙 형태"""

    ICMP = "icmp"
    ALL = "all"
    TCP_UDP = "tcp_udp"


# protocol 값 → 규칙 형태
_PROTOCOL_VARIANTS = {
    "icmp": RuleVariant.ICMP,
    "all": RuleVariant.ALL,
    "tcp": RuleVariant.TCP_UDP,
    "udp": RuleVariant.TCP_UDP,
}


@dataclass(frozen=True)
class SecurityGroupRule:
    """평탄화된 보안 그룹 규칙

    direction, ip_version은 항상 존재합니다.
    나머지 필드는 응답에 있을 때만 채워집니다.
    """

    variant: RuleVariant
    direction: str
    ip_version: str
    protocol: str | None = None
    remote: str | None = None
    code: int | None = None
    type: int | None = None
    port_min: int | None = None
    port_max: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """스키마 rules 원소 형태로 변환 (없는 필드는 생략)"""
        record: dict[str, Any] = {
            "direction": self.direction,
            "ip_version": self.ip_version,
        }
        optional = {
            "protocol": self.protocol,
            "remote": self.remote,
            "code": self.code,
            "type": self.type,
            "port_min": self.port_min,
            "port_max": self.port_max,
        }
        record.update({k: v for k, v in optional.items() if v is not None})
        return record


def decode_remote(remote: Any) -> str | None:
    """remote 하위 객체에서 대상 문자열 추출

    Args:
        remote: {"id": ...} / {"address": ...} / {"cidr_block": ...} 형태 dict

    Returns:
        우선순위상 첫 번째로 존재하는 값, 알려진 키가 없으면 None
    """
    if not remote:
        return None
    if not isinstance(remote, dict):
        raise UnknownRuleVariantError({"remote": remote}, f"remote 형식 오류: {type(remote).__name__}")

    for key in REMOTE_KEY_PRIORITY:
        value = remote.get(key)
        if value:
            return str(value)
    return None


def _present(rule: dict[str, Any], fields: tuple[str, ...]) -> bool:
    return any(rule.get(name) is not None for name in fields)


def _classify(rule: dict[str, Any]) -> RuleVariant:
    has_icmp = _present(rule, _ICMP_FIELDS)
    has_ports = _present(rule, _PORT_FIELDS)
    protocol = rule.get("protocol")

    if has_icmp and has_ports:
        raise UnknownRuleVariantError(rule, "ICMP 필드와 포트 필드가 함께 존재")

    if protocol is not None and (not isinstance(protocol, str) or protocol not in _PROTOCOL_VARIANTS):
        raise UnknownRuleVariantError(rule, f"알 수 없는 protocol: {protocol!r}")
    by_protocol = _PROTOCOL_VARIANTS.get(protocol) if protocol is not None else None

    if has_icmp:
        variant = RuleVariant.ICMP
    elif has_ports:
        variant = RuleVariant.TCP_UDP
    else:
        return by_protocol or RuleVariant.ALL

    if by_protocol is not None and by_protocol is not variant:
        raise UnknownRuleVariantError(rule, f"protocol {protocol!r}과(와) 필드 구성이 맞지 않음")
    return variant


def _integer_fields(rule: dict[str, Any], names: tuple[str, ...]) -> dict[str, int]:
    fields = {}
    for name in names:
        value = rule.get(name)
        if value is None:
            continue
        if isinstance(value, bool):
            raise UnknownRuleVariantError(rule, f"{name}은(는) 정수여야 함: {value!r}")
        try:
            fields[name] = int(value)
        except (TypeError, ValueError) as e:
            raise UnknownRuleVariantError(rule, f"{name}은(는) 정수여야 함: {value!r}") from e
    return fields


def decode_rule(rule: Any) -> SecurityGroupRule:
    """규칙 1건 디코딩

    Raises:
        UnknownRuleVariantError: 형태를 판별할 수 없거나 필수 필드가 없는 경우
    """
    if not isinstance(rule, dict):
        raise UnknownRuleVariantError(rule, f"dict가 아닌 규칙: {type(rule).__name__}")

    direction = rule.get("direction")
    ip_version = rule.get("ip_version")
    if not direction or not ip_version:
        raise UnknownRuleVariantError(rule, "direction/ip_version 누락")

    variant = _classify(rule)
    fields: dict[str, Any] = {}
    if variant is RuleVariant.ICMP:
        fields = _integer_fields(rule, _ICMP_FIELDS)
    elif variant is RuleVariant.TCP_UDP:
        fields = _integer_fields(rule, _PORT_FIELDS)

    return SecurityGroupRule(
        variant=variant,
        direction=direction,
        ip_version=ip_version,
        protocol=rule.get("protocol"),
        remote=decode_remote(rule.get("remote")),
        **fields,
    )


def decode_rules(rules: Iterable[Any] | None) -> list[dict[str, Any]]:
    """규칙 목록을 순서대로 평탄화

    하나라도 판별에 실패하면 전체가 실패합니다.
    """
    records = []
    for rule in rules or []:
        decoded = decode_rule(rule)
        logger.debug(f"규칙 디코딩: {decoded.variant.value} [{rule.get('id', '-')}]")
        records.append(decoded.to_dict())
    return records
