"""Tests for logging setup."""

import logging

from te_gene_db.logging_config import ColoredFormatter, LogTimer, get_logger, setup_logging


class TestLogging:
    """Test cases for logging configuration."""

    def test_get_logger_namespace(self):
        assert get_logger('search_engine').name == 'te_gene_db.search_engine'

    def test_setup_console_only(self):
        logger = setup_logging(log_level='INFO')

        assert logger.name == 'te_gene_db'
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.INFO

    def test_setup_replaces_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_quiet_console(self):
        logger = setup_logging(log_level='DEBUG', quiet=True)
        assert logger.handlers[0].level == logging.ERROR

    def test_log_file(self, temp_dir):
        logger = setup_logging(log_level='INFO', log_dir=str(temp_dir / "logs"), console=False)
        get_logger('record_store').info("Database loaded: 3 entries")
        for handler in logger.handlers:
            handler.flush()

        log_files = list((temp_dir / "logs").glob("te_gene_db_*.log"))
        assert len(log_files) == 1
        assert "Database loaded: 3 entries" in log_files[0].read_text()

        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    def test_colored_formatter_without_tty(self):
        formatter = ColoredFormatter('%(levelname)s - %(message)s', use_colors=True)
        record = logging.LogRecord('x', logging.WARNING, __file__, 1, "careful", None, None)

        formatter.use_colors = False
        assert formatter.format(record) == "WARNING - careful"

    def test_log_timer(self):
        with LogTimer("search") as timer:
            pass
        assert timer.elapsed is not None
        assert timer.elapsed >= 0
