"""
core/exceptions.py - 통합 예외 계층 구조

프로바이더 전체에서 사용되는 예외 클래스들을 정의합니다.
오케스트레이터에 일관된 에러 메시지를 전달하기 위해 모든 예외는
ProviderError를 상속합니다.

예외 계층 구조:
    ProviderError (베이스)
    ├── SessionUnavailableError (인증된 클라이언트 생성 실패)
    ├── RemoteRejectedError (벤더 API 비정상 응답, 404 제외)
    ├── NotFoundError (404 계열 - Read/Delete/Exists에서는 상태 변경으로 처리)
    ├── UnknownRuleVariantError (보안 그룹 규칙 디코딩 실패)
    ├── ConfigError (설정 관련)
    └── ValidationError (스키마/입력 검증)

Usage:
    from core.exceptions import RemoteRejectedError, is_not_found

    try:
        result = vpc.get_security_group(id=sg_id).get_result()
    except ApiException as e:
        if is_not_found(e):
            ...
        raise RemoteRejectedError.from_api_exception("vpc", "get_security_group", e)
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# 베이스 예외
# =============================================================================


class ProviderError(Exception):
    """프로바이더 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 세션 / 벤더 API 관련 예외
# =============================================================================


class SessionUnavailableError(ProviderError):
    """인증된 벤더 클라이언트 또는 세션 메타데이터를 얻지 못한 경우"""

    def __init__(
        self,
        service: str,
        message: str,
        cause: Exception | None = None,
    ):
        super().__init__(f"세션 오류 [{service}]: {message}", cause)
        self.service = service
        self.details["service"] = service


class RemoteRejectedError(ProviderError):
    """벤더 API가 2xx/404 이외의 응답을 반환한 경우

    벤더 에러 메시지는 가공하지 않고 그대로 보존합니다.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        status_code: int | None = None,
        error_message: str | None = None,
        body: str | None = None,
        cause: Exception | None = None,
    ):
        message = f"{service}.{operation}"
        if status_code is not None:
            message = f"{message} 실패 ({status_code})"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message)
        self.cause = cause
        self.service = service
        self.operation = operation
        self.status_code = status_code
        self.error_message = error_message
        self.body = body
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "status_code": status_code,
                "body": body,
            }
        )

    def __str__(self) -> str:
        if self.body:
            return f"{self.message}\n{self.body}"
        return self.message

    @classmethod
    def from_api_exception(
        cls,
        service: str,
        operation: str,
        api_exception: Exception,
    ) -> RemoteRejectedError:
        """ibm_cloud_sdk_core.ApiException으로부터 생성

        Args:
            service: 벤더 서비스 이름 (vpc, dns, resource_manager 등)
            operation: SDK 메서드 이름
            api_exception: ApiException 예외

        Returns:
            RemoteRejectedError 인스턴스
        """
        http_response = getattr(api_exception, "http_response", None)
        body = getattr(http_response, "text", None) if http_response is not None else None

        return cls(
            service=service,
            operation=operation,
            status_code=get_status_code(api_exception),
            error_message=getattr(api_exception, "message", None) or str(api_exception),
            body=body,
            cause=api_exception,
        )


class NotFoundError(ProviderError):
    """벤더가 404 계열 응답을 반환한 경우

    Read/Delete/Exists에서는 에러가 아니라 상태 변경(식별자 제거)으로 처리됩니다.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        identity: str,
        cause: Exception | None = None,
    ):
        super().__init__(f"{service}.{operation}: 리소스를 찾을 수 없습니다 [{identity}]", cause)
        self.service = service
        self.operation = operation
        self.identity = identity
        self.details.update({"service": service, "operation": operation, "identity": identity})


class UnknownRuleVariantError(ProviderError):
    """알 수 없는 형태의 보안 그룹 규칙

    규칙을 조용히 버리지 않고 Read 전체를 실패시킵니다.
    """

    def __init__(self, rule: Any, reason: str):
        rule_id = rule.get("id") if isinstance(rule, dict) else None
        super().__init__(f"알 수 없는 보안 그룹 규칙 형태 [{rule_id or '-'}]: {reason}")
        self.rule = rule
        self.reason = reason
        self.details.update({"rule_id": rule_id, "reason": reason})


# =============================================================================
# 설정 / 검증 관련 예외
# =============================================================================


class ConfigError(ProviderError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Exception | None = None,
    ):
        super().__init__(f"설정 오류 [{key}]: {message}", cause)
        self.config_key = key
        self.details["config_key"] = key


class ValidationError(ProviderError):
    """입력 검증 오류"""

    def __init__(
        self,
        field: str,
        value: Any,
        expected: str,
        cause: Exception | None = None,
    ):
        message = f"검증 오류 [{field}]: 예상값 '{expected}', 실제값 '{value}'"
        super().__init__(message, cause)
        self.field = field
        self.value = value
        self.expected = expected
        self.details.update(
            {
                "field": field,
                "value": str(value),
                "expected": expected,
            }
        )


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def get_status_code(error: Exception) -> int | None:
    """ApiException에서 HTTP 상태 코드 추출

    ibm-cloud-sdk-core 최신 버전은 status_code, 이전 버전은 code 속성을 사용합니다.
    """
    status = getattr(error, "status_code", None)
    if status is None:
        status = getattr(error, "code", None)
    return status if isinstance(status, int) else None


def is_not_found(error: Exception) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        NotFoundError이거나 404 응답이면 True
    """
    if isinstance(error, NotFoundError):
        return True
    if isinstance(error, RemoteRejectedError):
        return error.status_code == 404
    return get_status_code(error) == 404


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, ProviderError):
        return str(error)

    status = get_status_code(error)
    if status is not None:
        friendly_messages = {
            401: "인증에 실패했습니다. API 키를 확인하세요.",
            403: "권한이 없습니다. IAM 액세스 정책을 확인하세요.",
            429: "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
        }
        message = getattr(error, "message", None) or str(error)
        return friendly_messages.get(status, f"{status}: {message}")

    return str(error)
