"""
tests/core/test_core_config.py - core/config.py 테스트
"""

import pytest

from core.config import (
    LogConfig,
    ProviderConfig,
    get_base_controller,
    get_env_bool,
    get_env_int,
    get_project_root,
    get_version,
    load_provider_config,
    settings,
)
from core.exceptions import ConfigError


class TestSettings:
    """Settings 데이터클래스 테스트"""

    def test_settings_is_frozen(self):
        """설정이 불변인지 확인"""
        with pytest.raises(Exception):  # FrozenInstanceError
            settings.DEFAULT_REGION = "eu-de"

    def test_default_values(self):
        """기본값 확인"""
        assert settings.DEFAULT_REGION == "us-south"
        assert settings.DEFAULT_GENERATION == 2
        assert settings.CONSOLE_URL == "https://cloud.ibm.com"
        assert settings.DEFAULT_CREATE_TIMEOUT_MINUTES == 10
        assert settings.DEFAULT_DELETE_TIMEOUT_MINUTES == 10

    def test_endpoint_templates(self):
        """엔드포인트 템플릿"""
        assert settings.VPC_ENDPOINT.format(region="eu-de") == "https://eu-de.iaas.cloud.ibm.com/v1"
        assert ".private." in settings.VPC_PRIVATE_ENDPOINT


class TestEnvHelpers:
    """환경 변수 헬퍼 테스트"""

    @pytest.mark.parametrize("value", ["1", "true", "YES", "on"])
    def test_get_env_bool_true(self, monkeypatch, value):
        monkeypatch.setenv("IC_TEST_FLAG", value)
        assert get_env_bool("IC_TEST_FLAG") is True

    @pytest.mark.parametrize("value", ["0", "false", "No", "off"])
    def test_get_env_bool_false(self, monkeypatch, value):
        monkeypatch.setenv("IC_TEST_FLAG", value)
        assert get_env_bool("IC_TEST_FLAG", default=True) is False

    def test_get_env_bool_invalid_uses_default(self, monkeypatch):
        """해석할 수 없는 값은 기본값"""
        monkeypatch.setenv("IC_TEST_FLAG", "maybe")
        assert get_env_bool("IC_TEST_FLAG", default=True) is True

    def test_get_env_bool_missing(self, monkeypatch):
        monkeypatch.delenv("IC_TEST_FLAG", raising=False)
        assert get_env_bool("IC_TEST_FLAG") is False

    def test_get_env_int(self, monkeypatch):
        monkeypatch.setenv("IC_TEST_INT", "42")
        assert get_env_int("IC_TEST_INT") == 42

    def test_get_env_int_invalid_uses_default(self, monkeypatch):
        monkeypatch.setenv("IC_TEST_INT", "forty")
        assert get_env_int("IC_TEST_INT", default=7) == 7


class TestLoadProviderConfig:
    """load_provider_config 테스트"""

    def test_defaults(self):
        """환경 변수가 없으면 기본값"""
        config = load_provider_config()
        assert config.region == "us-south"
        assert config.generation == 2
        assert config.visibility == "public"
        assert config.api_key == ""

    def test_environment_overrides_defaults(self, monkeypatch):
        monkeypatch.setenv("IC_API_KEY", "env-key")
        monkeypatch.setenv("IC_REGION", "eu-de")
        monkeypatch.setenv("IC_GENERATION", "1")
        config = load_provider_config()
        assert config.api_key == "env-key"
        assert config.region == "eu-de"
        assert config.generation == 1

    def test_legacy_environment_names(self, monkeypatch):
        """IBMCLOUD_* 변수도 인식"""
        monkeypatch.setenv("IBMCLOUD_API_KEY", "legacy-key")
        monkeypatch.setenv("IBMCLOUD_REGION", "jp-tok")
        config = load_provider_config()
        assert config.api_key == "legacy-key"
        assert config.region == "jp-tok"

    def test_arguments_override_environment(self, monkeypatch):
        monkeypatch.setenv("IC_REGION", "eu-de")
        monkeypatch.setenv("IC_GENERATION", "1")
        config = load_provider_config(region="us-east", generation=2)
        assert config.region == "us-east"
        assert config.generation == 2

    def test_invalid_generation_in_environment(self, monkeypatch):
        monkeypatch.setenv("IC_GENERATION", "two")
        with pytest.raises(ConfigError):
            load_provider_config()

    def test_unsupported_generation(self):
        with pytest.raises(ConfigError):
            load_provider_config(generation=3)

    def test_visibility_is_normalized(self):
        config = load_provider_config(visibility="PRIVATE")
        assert config.visibility == "private"
        assert config.is_private is True

    def test_invalid_visibility(self):
        with pytest.raises(ConfigError):
            load_provider_config(visibility="internal")

    def test_api_key_hidden_from_repr(self):
        config = ProviderConfig(api_key="secret-value")
        assert "secret-value" not in repr(config)


class TestBaseController:
    """콘솔 URL 테스트"""

    def test_private_visibility_uses_public_console(self):
        config = ProviderConfig(visibility="private")
        assert get_base_controller(config) == "https://cloud.ibm.com"

    def test_without_config(self):
        assert get_base_controller() == settings.CONSOLE_URL


class TestLogConfig:
    """LogConfig 테스트"""

    def test_default_level(self):
        assert LogConfig.from_env().level == "WARNING"

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("IC_LOG_LEVEL", "debug")
        assert LogConfig.from_env().level == "DEBUG"

    def test_unknown_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("IC_LOG_LEVEL", "verbose")
        assert LogConfig.from_env().level == "WARNING"


class TestProjectInfo:
    """프로젝트 정보 테스트"""

    def test_version_matches_file(self):
        expected = (get_project_root() / "version.txt").read_text(encoding="utf-8").strip()
        assert get_version() == expected
