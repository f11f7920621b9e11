"""
core/session/types.py - 세션 모듈의 핵심 타입 정의

포함 항목:
    - Generation: VPC API 세대 열거형 (CLASSIC, CURRENT)
    - ServiceKind: 세션이 제공하는 벤더 서브 서비스 열거형
    - UserDetails: 세대 선택에 사용되는 계정/세션 메타데이터
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from core.exceptions import ConfigError


class Generation(Enum):
    """VPC API 세대

    세션 수명 동안 고정되며, 한 작업 안에서 섞이지 않습니다.

    - CLASSIC: 레거시 1세대 API
    - CURRENT: 2세대 API
    """

    CLASSIC = 1
    CURRENT = 2

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def from_value(cls, value: int) -> Generation:
        """정수 세대 값을 Generation으로 변환

        Raises:
            ConfigError: 1, 2 이외의 값
        """
        try:
            return cls(int(value))
        except (TypeError, ValueError) as e:
            raise ConfigError("generation", f"지원하지 않는 세대입니다: {value!r}", cause=e) from e


class ServiceKind(Enum):
    """세션이 클라이언트를 제공하는 벤더 서비스"""

    VPC = "vpc"
    DNS = "dns"
    RESOURCE_MANAGER = "resource_manager"
    POWER = "power"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UserDetails:
    """세션 메타데이터

    Attributes:
        account_id: IBM Cloud 계정 ID
        region: 대상 리전
        generation: VPC API 세대 (1 또는 2)
    """

    account_id: str
    region: str
    generation: int
