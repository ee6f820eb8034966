import logging

from logging_setup import IgnorePathsFilter, get_app_logger, setup_logging


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, message, None, None)


def test_ignore_paths_filter():
    f = IgnorePathsFilter(["/favicon.ico"])
    assert f.filter(_record('"GET /favicon.ico HTTP/1.1" 404')) is False
    assert f.filter(_record('"GET /sitemap.xml HTTP/1.1" 200')) is True


def test_setup_logging_writes_rotating_file(tmp_path):
    setup_logging(log_level="DEBUG", log_dir=tmp_path / "logs", log_file_name="test.log")
    logger = get_app_logger("sitemap.test")
    logger.info("hello from the sitemap writer")
    for handler in logging.getLogger("sitemap").handlers:
        handler.flush()

    text = (tmp_path / "logs" / "test.log").read_text(encoding="utf-8")
    assert "hello from the sitemap writer" in text
    assert "sitemap.test" in text
