"""
tests/conftest.py - pytest 공통 픽스처

벤더 SDK 클라이언트 모킹과 테스트 헬퍼를 제공합니다.
네트워크에 접근하지 않도록 모든 클라이언트는 세션 팩토리로 주입됩니다.

Usage:
    def test_something(make_session, mock_vpc_client, make_response):
        session = make_session(generation=2)
        mock_vpc_client.get_security_group.return_value = make_response({...})
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from ibm_cloud_sdk_core import ApiException

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.config import ProviderConfig  # noqa: E402
from core.session import ClientSession, ServiceKind  # noqa: E402

# =============================================================================
# 환경 설정
# =============================================================================

_PROVIDER_ENV_VARS = (
    "IC_API_KEY",
    "IBMCLOUD_API_KEY",
    "IC_REGION",
    "IBMCLOUD_REGION",
    "IC_GENERATION",
    "IBMCLOUD_GENERATION",
    "IC_VISIBILITY",
    "IBMCLOUD_VISIBILITY",
    "IC_ACCOUNT_ID",
    "IBMCLOUD_ACCOUNT_ID",
    "IC_LOG_LEVEL",
    "IC_API_TIMEOUT",
    "IC_DEBUG",
)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """테스트 환경 설정 (실행 환경의 IBM Cloud 변수 제거)"""
    for name in _PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


# =============================================================================
# SDK 응답 헬퍼
# =============================================================================


@pytest.fixture
def make_response():
    """DetailedResponse 모킹 팩토리"""

    def _make(result):
        response = MagicMock()
        response.get_result.return_value = result
        return response

    return _make


@pytest.fixture
def make_api_exception():
    """ApiException 팩토리 (body가 있으면 http_response.text로 설정)"""

    def _make(code: int, message: str = "error", body: str | None = None) -> ApiException:
        http_response = None
        if body is not None:
            http_response = MagicMock()
            http_response.text = body
            http_response.headers = {}
        return ApiException(code, message=message, http_response=http_response)

    return _make


# =============================================================================
# 벤더 클라이언트 모킹 픽스처
# =============================================================================


@pytest.fixture
def mock_vpc_client():
    """VPC 클라이언트 모킹"""
    return MagicMock()


@pytest.fixture
def mock_dns_client():
    """DNS Services 클라이언트 모킹"""
    return MagicMock()


@pytest.fixture
def mock_resource_manager_client():
    """Resource Manager 클라이언트 모킹"""
    return MagicMock()


@pytest.fixture
def mock_power_client():
    """Power Virtual Server 클라이언트 모킹"""
    return MagicMock()


@pytest.fixture
def vpc_factory(mock_vpc_client):
    """VPC 클라이언트 팩토리 (요청 세대 확인용)"""
    return MagicMock(return_value=mock_vpc_client)


# =============================================================================
# 세션 픽스처
# =============================================================================


@pytest.fixture
def provider_config():
    """테스트용 ProviderConfig (Current 세대)"""
    return ProviderConfig(api_key="test-api-key", region="us-south", generation=2, account_id="acc-123")


@pytest.fixture
def make_session(vpc_factory, mock_dns_client, mock_resource_manager_client, mock_power_client):
    """세대별 ClientSession 팩토리 (모든 클라이언트 모킹)"""

    def _make(generation: int = 2, with_power: bool = True) -> ClientSession:
        config = ProviderConfig(api_key="test-api-key", region="us-south", generation=generation, account_id="acc-123")
        factories = {
            ServiceKind.VPC: vpc_factory,
            ServiceKind.DNS: lambda cfg, gen: mock_dns_client,
            ServiceKind.RESOURCE_MANAGER: lambda cfg, gen: mock_resource_manager_client,
        }
        if with_power:
            factories[ServiceKind.POWER] = lambda cfg, gen: mock_power_client
        return ClientSession(config, factories=factories)

    return _make


@pytest.fixture
def current_session(make_session):
    """Current(2세대) 세션"""
    return make_session(generation=2)


@pytest.fixture
def classic_session(make_session):
    """Classic(1세대) 세션"""
    return make_session(generation=1)
