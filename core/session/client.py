"""
core/session/client.py - IBM Cloud SDK 클라이언트 생성 헬퍼

IAM 인증 + 리전/가시성별 엔드포인트 + 타임아웃이 설정된
벤더 SDK 클라이언트를 생성하고, SDK 호출 결과를 프로바이더 예외로 변환합니다.

주요 구성 요소:
- get_vpc_client: 세대가 고정된 VPC 클라이언트 생성
- get_dns_client: Private DNS 클라이언트 생성
- get_resource_manager_client: 리소스 그룹 조회용 클라이언트 생성
- call_api: SDK 메서드 1회 호출 + ApiException 변환 (재시도 없음)

Example:
    from core.session.client import call_api, get_vpc_client

    vpc = get_vpc_client(config, Generation.CURRENT)
    group = call_api("vpc", "get_security_group", vpc.get_security_group, identity=sg_id, id=sg_id)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ibm_cloud_sdk_core import ApiException

from core.config import get_env_int, settings
from core.exceptions import NotFoundError, RemoteRejectedError, SessionUnavailableError, get_status_code

from .types import Generation

if TYPE_CHECKING:
    from core.config import ProviderConfig

logger = logging.getLogger(__name__)


def _authenticator(config: ProviderConfig, service: str) -> Any:
    """API 키 기반 IAMAuthenticator 생성"""
    from ibm_cloud_sdk_core.authenticators import IAMAuthenticator

    if not config.api_key:
        raise SessionUnavailableError(service, "API 키가 설정되지 않았습니다 (IC_API_KEY)")
    try:
        return IAMAuthenticator(config.api_key, url=settings.IAM_URL)
    except ValueError as e:
        raise SessionUnavailableError(service, "IAM 인증 설정이 잘못되었습니다", cause=e) from e


def _configure(client: Any, service_url: str) -> Any:
    """서비스 URL과 HTTP 타임아웃 설정"""
    client.set_service_url(service_url)
    client.set_http_config({"timeout": get_env_int(settings.ENV_API_TIMEOUT, settings.API_TIMEOUT)})
    return client


def vpc_service_url(config: ProviderConfig) -> str:
    """리전/가시성에 맞는 VPC 엔드포인트"""
    template = settings.VPC_PRIVATE_ENDPOINT if config.is_private else settings.VPC_ENDPOINT
    return template.format(region=config.region)


def get_vpc_client(config: ProviderConfig, generation: Generation) -> Any:
    """세대가 고정된 VPC 클라이언트 생성

    두 세대는 같은 엔드포인트를 쓰고 요청의 generation 파라미터로 구분됩니다.

    Args:
        config: 프로바이더 설정
        generation: 대상 API 세대

    Returns:
        ibm_vpc.VpcV1 인스턴스
    """
    from ibm_vpc import VpcV1

    authenticator = _authenticator(config, "vpc")
    client = VpcV1(authenticator=authenticator)
    client.generation = generation.value
    logger.debug(f"VPC 클라이언트 생성 (region={config.region}, generation={generation})")
    return _configure(client, vpc_service_url(config))


def get_dns_client(config: ProviderConfig) -> Any:
    """Private DNS 서비스 클라이언트 생성"""
    from ibm_cloud_networking_services import DnsSvcsV1

    authenticator = _authenticator(config, "dns")
    client = DnsSvcsV1(authenticator=authenticator)
    url = settings.DNS_SERVICES_PRIVATE_ENDPOINT if config.is_private else settings.DNS_SERVICES_ENDPOINT
    return _configure(client, url)


def get_resource_manager_client(config: ProviderConfig) -> Any:
    """리소스 그룹 조회용 Resource Manager 클라이언트 생성"""
    from ibm_platform_services import ResourceManagerV2

    authenticator = _authenticator(config, "resource_manager")
    client = ResourceManagerV2(authenticator=authenticator)
    url = settings.RESOURCE_MANAGER_PRIVATE_ENDPOINT if config.is_private else settings.RESOURCE_MANAGER_ENDPOINT
    return _configure(client, url)


def call_api(
    service: str,
    operation: str,
    func: Callable[..., Any],
    identity: str = "",
    translate_not_found: bool = True,
    **kwargs: Any,
) -> Any:
    """SDK 메서드를 1회 호출하고 결과 본문을 반환

    재시도하지 않습니다. 재시도 정책은 오케스트레이터 또는 전송 계층의 몫입니다.

    Args:
        service: 서비스 이름 (로깅/에러 메시지용)
        operation: SDK 메서드 이름
        func: 호출할 SDK 메서드
        identity: 대상 리소스 식별자 (로깅/NotFoundError용)
        translate_not_found: True면 404를 NotFoundError로 변환, False면 RemoteRejectedError
        **kwargs: SDK 메서드 인자

    Returns:
        DetailedResponse.get_result() 값 (본문이 없으면 None)

    Raises:
        NotFoundError: 404 응답 (translate_not_found=True)
        RemoteRejectedError: 그 밖의 비정상 응답
    """
    logger.info(f"{service}.{operation} 호출 [{identity or '-'}]")
    try:
        response = func(**kwargs)
    except ApiException as e:
        if translate_not_found and get_status_code(e) == 404:
            raise NotFoundError(service, operation, identity, cause=e) from e
        logger.debug(f"{service}.{operation} 실패: {e}")
        raise RemoteRejectedError.from_api_exception(service, operation, e) from e

    if response is None:
        return None
    return response.get_result()
