"""
core/schema.py - 리소스 스키마 및 리소스 데이터

오케스트레이터의 스키마 계약(속성 이름 → 메타데이터)과
리소스 한 건의 식별자/원하는 상태/관측 상태를 표현합니다.
diff/plan 엔진은 오케스트레이터 쪽에 있으며, 여기서는 읽고 쓰기만 합니다.

주요 구성 요소:
- AttrType, Attribute, Schema: 속성 메타데이터
- validate_is_name, validate_allowed_string_value, validate_no_zero_value: 검증 함수
- validate_desired, apply_defaults: 원하는 상태 검증/기본값 적용
- ResourceData: 리소스 디스크립터 (id, desired, observed)
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from core.exceptions import ValidationError

# =============================================================================
# 속성 메타데이터
# =============================================================================


class AttrType(Enum):
    """속성 값 타입"""

    STRING = "string"
    INT = "int"
    BOOL = "bool"
    LIST = "list"

    def accepts(self, value: Any) -> bool:
        if self is AttrType.STRING:
            return isinstance(value, str)
        if self is AttrType.INT:
            return isinstance(value, int) and not isinstance(value, bool)
        if self is AttrType.BOOL:
            return isinstance(value, bool)
        return isinstance(value, list)


Validator = Callable[[Any, str], None]


@dataclass(frozen=True)
class Attribute:
    """스키마 속성 정의

    Attributes:
        type: 값 타입
        required: 사용자가 반드시 지정해야 함
        optional: 사용자가 지정할 수 있음
        computed: 벤더가 값을 채움
        force_new: 변경 시 교체(replace) 필요 - update 불가
        default: 미지정 시 기본값
        validate: 검증 함수 (value, name) -> None, 실패 시 ValidationError
        description: 설명
        elem: LIST 타입의 원소 스키마
    """

    type: AttrType = AttrType.STRING
    required: bool = False
    optional: bool = False
    computed: bool = False
    force_new: bool = False
    default: Any = None
    validate: Validator | None = None
    description: str = ""
    elem: dict[str, Attribute] | None = None

    @property
    def user_settable(self) -> bool:
        return self.required or self.optional

    def flags(self) -> list[str]:
        """표시용 플래그 목록"""
        result = []
        if self.required:
            result.append("Required")
        if self.optional:
            result.append("Optional")
        if self.computed:
            result.append("Computed")
        if self.force_new:
            result.append("ForceNew")
        return result


Schema = dict[str, Attribute]


# =============================================================================
# 검증 함수
# =============================================================================

_IS_NAME_PATTERN = re.compile(r"^([a-z]|[a-z][-a-z0-9]*[a-z0-9])$")
_IS_NAME_MAX_LENGTH = 63


def validate_is_name(value: Any, name: str) -> None:
    """VPC 리소스 이름 검증 (소문자 시작, 소문자/숫자/하이픈, 최대 63자)"""
    if not isinstance(value, str) or len(value) > _IS_NAME_MAX_LENGTH or not _IS_NAME_PATTERN.match(value):
        raise ValidationError(name, value, f"{_IS_NAME_PATTERN.pattern} (최대 {_IS_NAME_MAX_LENGTH}자)")


def validate_allowed_string_value(allowed: Iterable[str]) -> Validator:
    """허용 값 목록 검증 함수 생성"""
    allowed_values = tuple(allowed)

    def _validate(value: Any, name: str) -> None:
        if value not in allowed_values:
            raise ValidationError(name, value, " | ".join(allowed_values))

    return _validate


def validate_no_zero_value(value: Any, name: str) -> None:
    """빈 값/0 거부"""
    if _is_zero(value):
        raise ValidationError(name, value, "비어있지 않은 값")


def apply_defaults(schema: Schema, desired: dict[str, Any]) -> dict[str, Any]:
    """지정되지 않은 선택 속성에 기본값 적용 (새 dict 반환)"""
    result = dict(desired)
    for name, attr in schema.items():
        if name not in result and attr.user_settable and attr.default is not None:
            result[name] = attr.default
    return result


def validate_desired(schema: Schema, desired: dict[str, Any]) -> None:
    """원하는 상태를 스키마에 대해 검증

    Raises:
        ValidationError: 알 수 없는 속성, computed 전용 속성 지정, 필수 누락,
            타입 불일치, 검증 함수 실패
    """
    for name, value in desired.items():
        attr = schema.get(name)
        if attr is None:
            raise ValidationError(name, value, "스키마에 정의된 속성")
        if not attr.user_settable:
            raise ValidationError(name, value, "computed 속성은 지정할 수 없음")
        if not attr.type.accepts(value):
            raise ValidationError(name, value, attr.type.value)
        if attr.validate is not None:
            attr.validate(value, name)

    for name, attr in schema.items():
        if attr.required and name not in desired:
            raise ValidationError(name, None, "필수 속성")


# =============================================================================
# 리소스 데이터
# =============================================================================


def _is_zero(value: Any) -> bool:
    """타입별 0 값 여부 (None, False, 0, 빈 문자열/리스트/딕셔너리)"""
    if value is None:
        return True
    if isinstance(value, (bool, int, float)):
        return not value
    if isinstance(value, (str, list, dict)):
        return len(value) == 0
    return False


@dataclass
class ResourceData:
    """리소스 디스크립터

    식별자는 생성 성공 후에만 부여됩니다. 그 전에는 주소 지정이 불가능합니다.

    Attributes:
        schema: 리소스 스키마
        desired: 사용자가 선언한 값 (name -> value)
        observed: 마지막 Read로 관측한 값 (name -> value)
        id: 불투명 식별자 (없으면 "")
    """

    schema: Schema
    desired: dict[str, Any] = field(default_factory=dict)
    observed: dict[str, Any] = field(default_factory=dict)
    id: str = ""

    def is_new(self) -> bool:
        return not self.id

    def set_id(self, identity: str) -> None:
        self.id = identity

    def clear_id(self) -> None:
        """존재하지 않음으로 표시"""
        self.id = ""

    def get(self, name: str) -> Any:
        """원하는 값 → 관측 값 → 스키마 기본값 순으로 조회"""
        if name in self.desired:
            return self.desired[name]
        if name in self.observed:
            return self.observed[name]
        attr = self.schema.get(name)
        return attr.default if attr else None

    def get_ok(self, name: str) -> tuple[Any, bool]:
        """사용자가 0이 아닌 값을 명시했는지 여부와 함께 반환"""
        value = self.desired.get(name)
        return value, name in self.desired and not _is_zero(value)

    def has_change(self, name: str) -> bool:
        """원하는 값이 관측 값과 다른지"""
        if name not in self.desired:
            return False
        return self.desired[name] != self.observed.get(name)

    def changed_fields(self, names: Iterable[str] | None = None) -> list[str]:
        """변경된 속성 목록 (스키마 순서)"""
        candidates = set(names) if names is not None else None
        return [
            name
            for name in self.schema
            if (candidates is None or name in candidates) and self.has_change(name)
        ]

    def set(self, name: str, value: Any) -> None:
        """관측 상태에 값 기록"""
        self.observed[name] = value

    def state(self) -> dict[str, Any]:
        """오케스트레이터로 반환할 상태 (id 포함)"""
        return {"id": self.id, **self.observed}
