"""
core/logging.py 테스트
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest

from core.constants import Paths
from core.logging import NOISY_LOGGERS, get_log_file_path, setup_logging


@pytest.fixture
def restore_root_logger():
    """테스트 후 루트 로거 핸들러/레벨 복원"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    """setup_logging 테스트"""

    def test_creates_log_file(self, temp_dir: Path, restore_root_logger) -> None:
        """로그 디렉토리와 파일 핸들러 생성"""
        log_dir = temp_dir / "logs"

        root = setup_logging("staking", log_dir=log_dir)
        root.warning("hello")

        assert log_dir.exists()
        assert (log_dir / "staking.log").exists()

    def test_handlers_replaced(self, temp_dir: Path, restore_root_logger) -> None:
        """반복 호출해도 핸들러가 중복되지 않음"""
        setup_logging("staking", log_dir=temp_dir)
        root = setup_logging("staking", log_dir=temp_dir)

        assert len(root.handlers) == 2
        assert any(isinstance(h, TimedRotatingFileHandler) for h in root.handlers)

    def test_console_level(self, temp_dir: Path, restore_root_logger) -> None:
        root = setup_logging("staking", console_level=logging.WARNING, log_dir=temp_dir)

        console = [h for h in root.handlers if not isinstance(h, TimedRotatingFileHandler)]
        assert console[0].level == logging.WARNING

    def test_noisy_loggers_quieted(self, temp_dir: Path, restore_root_logger) -> None:
        setup_logging("staking", log_dir=temp_dir)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING


class TestGetLogFilePath:
    def test_default_path(self) -> None:
        assert get_log_file_path("staking") == Paths.LOGS_DIR / "staking" / "staking.log"
