"""
core/session/session.py - 프로세스 전역 클라이언트 세션

오케스트레이터가 모든 CRUD 작업에 전달하는 세션 객체입니다.
세대/서비스별 벤더 클라이언트를 지연 생성하여 캐시하고,
이름 기반 잠금 레지스트리를 소유합니다.

주요 구성 요소:
- ClientSession: 세션 메타데이터 + 클라이언트 캐시 + 잠금 레지스트리
- select_generation: 세션 메타데이터로 API 세대 결정
- build_session: 환경 변수/인자로부터 세션 생성
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from core.config import ProviderConfig, load_provider_config
from core.exceptions import ProviderError, SessionUnavailableError
from core.locks import NamedLockRegistry

from .client import get_dns_client, get_resource_manager_client, get_vpc_client
from .types import Generation, ServiceKind, UserDetails

logger = logging.getLogger(__name__)

# (config, generation) -> SDK 클라이언트
ClientFactory = Callable[[ProviderConfig, Generation | None], Any]


def _default_factories() -> dict[ServiceKind, ClientFactory]:
    return {
        ServiceKind.VPC: lambda config, generation: get_vpc_client(config, generation or Generation.CURRENT),
        ServiceKind.DNS: lambda config, generation: get_dns_client(config),
        ServiceKind.RESOURCE_MANAGER: lambda config, generation: get_resource_manager_client(config),
    }


class ClientSession:
    """인증된 벤더 클라이언트 제공자

    Power Virtual Server 클라이언트는 SDK가 없으므로 factories로 주입해야 합니다.

    Example:
        session = build_session(region="us-south")
        generation = select_generation(session)
        vpc = session.vpc_client(generation)
    """

    def __init__(
        self,
        config: ProviderConfig,
        user_details_loader: Callable[[], UserDetails] | None = None,
        factories: dict[ServiceKind, ClientFactory] | None = None,
        locks: NamedLockRegistry | None = None,
    ):
        self.config = config
        self.locks = locks or NamedLockRegistry()
        self._user_details_loader = user_details_loader or self._details_from_config
        self._user_details: UserDetails | None = None
        self._factories = _default_factories()
        if factories:
            self._factories.update(factories)
        self._clients: dict[tuple[ServiceKind, Generation | None], Any] = {}
        self._lock = threading.Lock()

    def _details_from_config(self) -> UserDetails:
        return UserDetails(
            account_id=self.config.account_id,
            region=self.config.region,
            generation=self.config.generation,
        )

    def user_details(self) -> UserDetails:
        """세션 메타데이터 (최초 1회 로드 후 고정)

        Raises:
            SessionUnavailableError: 메타데이터를 얻지 못한 경우
        """
        with self._lock:
            if self._user_details is None:
                try:
                    self._user_details = self._user_details_loader()
                except ProviderError:
                    raise
                except Exception as e:
                    raise SessionUnavailableError("session", "세션 메타데이터를 가져올 수 없습니다", cause=e) from e
            return self._user_details

    def client(self, service: ServiceKind, generation: Generation | None = None) -> Any:
        """서비스/세대별 클라이언트 반환 (없으면 생성 후 캐시)

        Raises:
            SessionUnavailableError: 팩토리가 없거나 생성에 실패한 경우
        """
        key = (service, generation)
        with self._lock:
            cached = self._clients.get(key)
            if cached is not None:
                return cached

            factory = self._factories.get(service)
            if factory is None:
                raise SessionUnavailableError(str(service), "클라이언트 팩토리가 등록되지 않았습니다")
            try:
                client = factory(self.config, generation)
            except ProviderError:
                raise
            except Exception as e:
                raise SessionUnavailableError(str(service), "클라이언트 생성 실패", cause=e) from e

            self._clients[key] = client
            return client

    def vpc_client(self, generation: Generation) -> Any:
        return self.client(ServiceKind.VPC, generation)

    def dns_client(self) -> Any:
        return self.client(ServiceKind.DNS)

    def resource_manager_client(self) -> Any:
        return self.client(ServiceKind.RESOURCE_MANAGER)

    def power_client(self) -> Any:
        return self.client(ServiceKind.POWER)


def select_generation(session: ClientSession) -> Generation:
    """세션 메타데이터로 대상 API 세대 결정

    부작용이 없으며, 같은 세션에서는 항상 같은 값을 반환합니다.
    CRUD 진입점마다 한 번 호출되고 결과는 작업 끝까지 전달됩니다.
    """
    generation = Generation.from_value(session.user_details().generation)
    logger.debug(f"API 세대 선택: {generation}")
    return generation


def build_session(
    config: ProviderConfig | None = None,
    factories: dict[ServiceKind, ClientFactory] | None = None,
    **overrides: Any,
) -> ClientSession:
    """설정(없으면 환경 변수)으로 ClientSession 생성

    Args:
        config: 프로바이더 설정 (None이면 load_provider_config(**overrides))
        factories: 추가/대체 클라이언트 팩토리
        **overrides: load_provider_config 인자
    """
    return ClientSession(config or load_provider_config(**overrides), factories=factories)
