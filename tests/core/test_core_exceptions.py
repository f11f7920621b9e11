"""
tests/core/test_core_exceptions.py - core/exceptions.py 테스트
"""

from core.exceptions import (
    ConfigError,
    NotFoundError,
    ProviderError,
    RemoteRejectedError,
    SessionUnavailableError,
    UnknownRuleVariantError,
    ValidationError,
    format_error_for_user,
    get_status_code,
    is_not_found,
)


class _LegacyError(Exception):
    """code 속성만 가진 이전 SDK 예외"""

    code = 404


class TestProviderError:
    """ProviderError 테스트"""

    def test_str_without_cause(self):
        assert str(ProviderError("실패")) == "실패"

    def test_str_with_cause(self):
        error = ProviderError("실패", cause=ValueError("원인"))
        assert str(error) == "실패: 원인"

    def test_to_dict(self):
        error = ConfigError("generation", "잘못된 값")
        result = error.to_dict()
        assert result["error_type"] == "ConfigError"
        assert result["details"]["config_key"] == "generation"

    def test_hierarchy(self):
        for cls in (SessionUnavailableError, RemoteRejectedError, NotFoundError, UnknownRuleVariantError):
            assert issubclass(cls, ProviderError)


class TestRemoteRejectedError:
    """RemoteRejectedError 테스트"""

    def test_from_api_exception_keeps_vendor_text(self, make_api_exception):
        exc = make_api_exception(500, message="internal failure", body='{"errors":[{"code":"internal"}]}')

        error = RemoteRejectedError.from_api_exception("vpc", "get_security_group", exc)

        assert error.status_code == 500
        assert error.error_message == "internal failure"
        assert error.body == '{"errors":[{"code":"internal"}]}'
        assert error.cause is exc
        assert error.message == "vpc.get_security_group 실패 (500): internal failure"
        assert str(error).endswith('{"errors":[{"code":"internal"}]}')

    def test_from_api_exception_without_response(self, make_api_exception):
        error = RemoteRejectedError.from_api_exception("dns", "create_permitted_network", make_api_exception(409, "conflict"))
        assert error.body is None
        assert str(error) == "dns.create_permitted_network 실패 (409): conflict"


class TestUnknownRuleVariantError:
    """UnknownRuleVariantError 테스트"""

    def test_rule_id_in_details(self):
        error = UnknownRuleVariantError({"id": "r-1", "code": 1, "port_min": 2}, "충돌")
        assert error.details["rule_id"] == "r-1"
        assert "r-1" in str(error)

    def test_non_dict_rule(self):
        error = UnknownRuleVariantError("garbage", "dict 아님")
        assert error.details["rule_id"] is None


class TestStatusHelpers:
    """상태 코드 헬퍼 테스트"""

    def test_get_status_code_api_exception(self, make_api_exception):
        assert get_status_code(make_api_exception(404)) == 404

    def test_get_status_code_legacy_attribute(self):
        assert get_status_code(_LegacyError()) == 404

    def test_get_status_code_plain_exception(self):
        assert get_status_code(ValueError("x")) is None

    def test_is_not_found(self, make_api_exception):
        assert is_not_found(NotFoundError("vpc", "get_security_group", "sg-1")) is True
        assert is_not_found(make_api_exception(404)) is True
        assert is_not_found(RemoteRejectedError("vpc", "get", status_code=404)) is True
        assert is_not_found(RemoteRejectedError("vpc", "get", status_code=500)) is False
        assert is_not_found(ValueError("x")) is False


class TestFormatErrorForUser:
    """사용자 메시지 포맷 테스트"""

    def test_provider_error_as_is(self):
        error = ValidationError("name", "Bad", "소문자")
        assert format_error_for_user(error) == str(error)

    def test_friendly_forbidden(self, make_api_exception):
        assert "권한" in format_error_for_user(make_api_exception(403, "Forbidden"))

    def test_unknown_status(self, make_api_exception):
        assert format_error_for_user(make_api_exception(418, "teapot")) == "418: teapot"

    def test_plain_exception(self):
        assert format_error_for_user(RuntimeError("boom")) == "boom"
