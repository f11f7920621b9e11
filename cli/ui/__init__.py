# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 모듈

CLI 전용 출력 유틸리티 (메시지, 테이블, JSON)
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_WARNING,
    console,
    enable_debug_logging,
    get_console,
    get_logger,
    print_error,
    print_results_json,
    print_table,
    print_warning,
)

__all__ = [
    "SYMBOL_ERROR",
    "SYMBOL_WARNING",
    "console",
    "enable_debug_logging",
    "get_console",
    "get_logger",
    "print_error",
    "print_results_json",
    "print_table",
    "print_warning",
]
