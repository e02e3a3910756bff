"""Тесты настройки structlog."""

import json
import logging

import structlog

from datemath import resolve
from datemath.utils import setup_logger


class TestSetupLogger:
    """Тесты setup_logger"""

    def teardown_method(self) -> None:
        structlog.reset_defaults()
        # закрывает FileHandler, установленный тестом
        logging.basicConfig(level=logging.WARNING, handlers=[logging.NullHandler()], force=True)

    def test_returns_bound_logger(self, tmp_path) -> None:
        """setup_logger возвращает логгер с методами уровней"""
        logger = setup_logger("datemath.test", level="DEBUG", log_file=str(tmp_path / "logs" / "datemath.log"))
        assert callable(logger.debug)
        assert callable(logger.warning)
        assert (tmp_path / "logs").is_dir()

    def test_invalid_expression_does_not_raise_with_logging(self) -> None:
        """Логирование невалидного выражения не влияет на результат"""
        setup_logger("datemath", level="DEBUG")
        assert resolve("now-1x") is None

    def test_library_records_reach_log_file(self, tmp_path) -> None:
        """Debug запись о невалидном выражении попадает в файл в JSON формате"""
        log_file = tmp_path / "datemath.log"
        setup_logger("datemath", level="DEBUG", log_file=str(log_file), json_format=True)

        assert resolve("now-1x") is None

        records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        rejected = [record for record in records if record["event"] == "invalid_math_expression"]
        assert len(rejected) == 1
        assert rejected[0]["math_string"] == "-1x"
        assert rejected[0]["level"] == "debug"
        assert rejected[0]["logger"] == "datemath.evaluator.math_evaluator"

    def test_level_filters_file_records(self, tmp_path) -> None:
        """INFO уровень отбрасывает debug записи"""
        log_file = tmp_path / "datemath.log"
        setup_logger("datemath", level="INFO", log_file=str(log_file), json_format=True)

        assert resolve("now-1x") is None

        assert log_file.read_text(encoding="utf-8") == ""
