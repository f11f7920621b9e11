"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들
"""

import json
import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

# SDK HTTP 노이즈 로그 제한
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("ibm_cloud_sdk_core").setLevel(logging.WARNING)


def get_console() -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        color_system="auto",
        highlight=True,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()

# 로그 전용 콘솔 (JSON 결과와 섞이지 않도록 stderr)
log_console = Console(stderr=True, soft_wrap=True)


def get_logger(name: str = "icp") -> logging.Logger:
    """Rich 핸들러가 설정된 logger를 반환합니다.

    Args:
        name: logger 이름 (기본값: "icp")

    Returns:
        logging.Logger: 설정된 logger 인스턴스
    """
    logger = logging.getLogger(name)

    # 이미 핸들러가 설정되어 있으면 반환
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    handler = RichHandler(console=log_console, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    return logger


def enable_debug_logging(names: tuple[str, ...] = ("core", "resources", "cli")) -> None:
    """프로바이더 로거를 DEBUG로 낮추고 Rich 핸들러로 출력 (--debug)"""
    for name in names:
        logger = get_logger(name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False


# =============================================================================
# 표준 출력 스타일
# =============================================================================

SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)"""
    console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


def print_table(
    title: str,
    columns: list[str],
    rows: list[list],
) -> None:
    """테이블 형식으로 데이터를 출력합니다.

    Args:
        title: 테이블 제목
        columns: 컬럼 헤더 리스트
        rows: 행 데이터 리스트
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")

    for column in columns:
        table.add_column(column)

    for row in rows:
        table.add_row(*[str(cell) for cell in row])

    console.print(table)


def print_results_json(data: dict | list, pretty: bool = True) -> None:
    """JSON 형식으로 데이터 출력 (Rich syntax highlighting)

    Args:
        data: 출력할 데이터
        pretty: 들여쓰기 여부 (기본: True)
    """
    json_str = json.dumps(data, ensure_ascii=False, indent=2 if pretty else None, default=str)
    console.print_json(json_str)
