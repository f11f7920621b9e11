"""
tests/cli/test_cli_ui.py - 콘솔 출력 유틸리티 테스트
"""

import importlib
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from cli.ui import enable_debug_logging, get_logger, print_error, print_results_json, print_warning


@pytest.fixture
def recorded(monkeypatch):
    """출력을 기록하는 콘솔로 교체"""
    recording = Console(record=True, width=200, color_system=None)
    console_module = importlib.import_module("cli.ui.console")
    monkeypatch.setattr(console_module, "console", recording)
    return recording


@pytest.fixture
def clean_logger():
    """테스트용 logger의 핸들러를 정리"""
    names = []

    def _make(name):
        names.append(name)
        return name

    yield _make

    for name in names:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True


class TestMessages:
    """메시지 출력 테스트"""

    def test_error_keeps_brackets(self, recorded):
        """에러 메시지 속 [id]는 Rich 마크업으로 해석되지 않음"""
        print_error("security group [sg-1] in use")
        assert "✗ security group [sg-1] in use" in recorded.export_text()

    def test_warning(self, recorded):
        print_warning("원격에 존재하지 않습니다")
        assert "! 원격에 존재하지 않습니다" in recorded.export_text()

    def test_results_json(self, recorded):
        print_results_json({"id": "sg-abc", "exists": True})
        text = recorded.export_text()
        assert '"id": "sg-abc"' in text
        assert '"exists": true' in text


class TestLogging:
    """logger 설정 테스트"""

    def test_get_logger_adds_single_handler(self, clean_logger):
        name = clean_logger("icp.test.single")

        logger = get_logger(name)
        again = get_logger(name)

        assert logger is again
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.level == logging.INFO

    def test_enable_debug_logging(self, clean_logger):
        names = (clean_logger("icp.test.core"), clean_logger("icp.test.resources"))

        enable_debug_logging(names)

        for name in names:
            logger = logging.getLogger(name)
            assert logger.level == logging.DEBUG
            assert logger.propagate is False
            assert len(logger.handlers) == 1
