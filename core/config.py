"""
core/config.py - 중앙 설정 관리

프로바이더 전체에서 사용하는 상수와 인증/리전/세대 설정을 한 곳에서 관리합니다.

우선순위 (높음 → 낮음):
    1. load_provider_config()에 직접 전달된 인자
    2. 환경 변수 (IC_* 또는 IBMCLOUD_*)
    3. Settings 기본값

Usage:
    from core.config import settings, load_provider_config

    config = load_provider_config(region="eu-de")
    print(config.generation)  # 2
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from core.exceptions import ConfigError

logger = logging.getLogger(__name__)


# =============================================================================
# 전역 상수
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """프로세스 전역 설정 (불변)"""

    DEFAULT_REGION: str = "us-south"
    DEFAULT_GENERATION: int = 2
    DEFAULT_VISIBILITY: str = "public"

    # 벤더 API
    API_TIMEOUT: int = 60  # 초
    IAM_URL: str = "https://iam.cloud.ibm.com"
    VPC_ENDPOINT: str = "https://{region}.iaas.cloud.ibm.com/v1"
    VPC_PRIVATE_ENDPOINT: str = "https://{region}.private.iaas.cloud.ibm.com/v1"
    DNS_SERVICES_ENDPOINT: str = "https://api.dns-svcs.cloud.ibm.com/v1"
    DNS_SERVICES_PRIVATE_ENDPOINT: str = "https://api.private.dns-svcs.cloud.ibm.com/v1"
    RESOURCE_MANAGER_ENDPOINT: str = "https://resource-controller.cloud.ibm.com"
    RESOURCE_MANAGER_PRIVATE_ENDPOINT: str = "https://private.resource-controller.cloud.ibm.com"
    CONSOLE_URL: str = "https://cloud.ibm.com"

    # 오케스트레이터에 전달되는 기본 타임아웃 (분)
    DEFAULT_CREATE_TIMEOUT_MINUTES: int = 10
    DEFAULT_DELETE_TIMEOUT_MINUTES: int = 10

    # 환경 변수 이름 (앞쪽이 우선)
    ENV_API_KEY: tuple[str, ...] = ("IC_API_KEY", "IBMCLOUD_API_KEY")
    ENV_REGION: tuple[str, ...] = ("IC_REGION", "IBMCLOUD_REGION")
    ENV_GENERATION: tuple[str, ...] = ("IC_GENERATION", "IBMCLOUD_GENERATION")
    ENV_VISIBILITY: tuple[str, ...] = ("IC_VISIBILITY", "IBMCLOUD_VISIBILITY")
    ENV_ACCOUNT_ID: tuple[str, ...] = ("IC_ACCOUNT_ID", "IBMCLOUD_ACCOUNT_ID")
    ENV_LOG_LEVEL: str = "IC_LOG_LEVEL"
    ENV_API_TIMEOUT: str = "IC_API_TIMEOUT"
    ENV_DEBUG: str = "IC_DEBUG"

    VALID_GENERATIONS: tuple[int, ...] = (1, 2)
    VALID_VISIBILITIES: tuple[str, ...] = ("public", "private")


settings = Settings()


# =============================================================================
# 환경 변수 헬퍼
# =============================================================================


def _first_env(names: tuple[str, ...]) -> str | None:
    """여러 환경 변수 이름 중 처음으로 값이 있는 것을 반환"""
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경 변수를 bool로 읽기

    Args:
        name: 환경 변수 이름
        default: 값이 없거나 해석할 수 없을 때의 기본값

    Returns:
        "1", "true", "yes", "on" 이면 True, "0", "false", "no", "off" 이면 False
    """
    value = os.environ.get(name)
    if value is None or value == "":
        return default

    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False

    logger.warning("환경 변수 %s 값을 bool로 해석할 수 없습니다: '%s'", name, value)
    return default


def get_env_int(name: str, default: int = 0) -> int:
    """환경 변수를 int로 읽기 (실패 시 기본값)"""
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("환경 변수 %s 값을 정수로 해석할 수 없습니다: '%s'", name, value)
        return default


# =============================================================================
# 프로바이더 설정
# =============================================================================


@dataclass(frozen=True)
class ProviderConfig:
    """프로바이더 인증 및 대상 설정

    Attributes:
        api_key: IBM Cloud API 키 (IAM 인증용)
        region: 대상 리전 (예: "us-south")
        generation: VPC API 세대 (1=Classic, 2=Current)
        account_id: 계정 ID (선택, 세션 메타데이터용)
        resource_group: 기본 리소스 그룹 ID (선택)
        visibility: 엔드포인트 가시성 ("public" 또는 "private")
    """

    api_key: str = field(default="", repr=False)
    region: str = settings.DEFAULT_REGION
    generation: int = settings.DEFAULT_GENERATION
    account_id: str = ""
    resource_group: str | None = None
    visibility: str = settings.DEFAULT_VISIBILITY

    def __post_init__(self) -> None:
        if self.generation not in settings.VALID_GENERATIONS:
            raise ConfigError("generation", f"1 또는 2만 허용됩니다 (입력값: {self.generation})")
        if self.visibility not in settings.VALID_VISIBILITIES:
            raise ConfigError("visibility", f"public 또는 private만 허용됩니다 (입력값: {self.visibility})")

    @property
    def is_private(self) -> bool:
        return self.visibility == "private"


def load_provider_config(
    api_key: str | None = None,
    region: str | None = None,
    generation: int | None = None,
    account_id: str | None = None,
    resource_group: str | None = None,
    visibility: str | None = None,
) -> ProviderConfig:
    """인자 → 환경 변수 → 기본값 순으로 ProviderConfig 생성

    Raises:
        ConfigError: 세대 값이 정수가 아니거나 허용 범위를 벗어난 경우
    """
    if generation is None:
        raw_generation = _first_env(settings.ENV_GENERATION)
        if raw_generation is None:
            generation = settings.DEFAULT_GENERATION
        else:
            try:
                generation = int(raw_generation)
            except ValueError as e:
                raise ConfigError("generation", f"정수가 아닙니다: '{raw_generation}'", cause=e) from e

    return ProviderConfig(
        api_key=api_key if api_key is not None else (_first_env(settings.ENV_API_KEY) or ""),
        region=region or _first_env(settings.ENV_REGION) or settings.DEFAULT_REGION,
        generation=generation,
        account_id=account_id or _first_env(settings.ENV_ACCOUNT_ID) or "",
        resource_group=resource_group,
        visibility=(visibility or _first_env(settings.ENV_VISIBILITY) or settings.DEFAULT_VISIBILITY).lower(),
    )


def get_base_controller(config: ProviderConfig | None = None) -> str:
    """콘솔(대시보드) 기본 URL

    가시성과 무관하게 퍼블릭 콘솔 주소를 사용합니다.
    """
    return settings.CONSOLE_URL


# =============================================================================
# 로그 설정
# =============================================================================


@dataclass(frozen=True)
class LogConfig:
    """로그 레벨 및 포맷 설정"""

    level: str = "WARNING"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> LogConfig:
        level = os.environ.get(settings.ENV_LOG_LEVEL, "WARNING").upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            logger.warning("알 수 없는 로그 레벨 '%s', WARNING 사용", level)
            level = "WARNING"
        return cls(level=level)


# =============================================================================
# 프로젝트 정보
# =============================================================================


def get_project_root() -> Path:
    """프로젝트 루트 디렉토리"""
    return Path(__file__).resolve().parent.parent


def get_version() -> str:
    """version.txt에서 버전 문자열 읽기 (없으면 0.0.0)"""
    version_file = get_project_root() / "version.txt"
    try:
        return version_file.read_text(encoding="utf-8").strip() or "0.0.0"
    except FileNotFoundError:
        return "0.0.0"
