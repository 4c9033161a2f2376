import json
import logging
import sys

import pytest

from jobcatalog.application.services import DepartmentService
from jobcatalog.core.config import LoggingSettings
from jobcatalog.core.logging import ContextFilter, JSONFormatter, get_logger, setup_logging
from jobcatalog.schemas import DepartmentRequest


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def make_record(message="Job created", **extra):
    record = logging.LogRecord(
        name="jobcatalog.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_fields():
    payload = json.loads(JSONFormatter().format(make_record()))

    assert payload["message"] == "Job created"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "jobcatalog.test"
    assert payload["source"].endswith(":10")
    assert "hostname" in payload
    assert "exception" not in payload


def test_json_formatter_merges_extra_fields():
    record = make_record(extra_fields={"job_code": "JOB-01"})

    payload = json.loads(JSONFormatter().format(record))

    assert payload["job_code"] == "JOB-01"


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = make_record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JSONFormatter().format(record))

    assert "RuntimeError: boom" in payload["exception"]


def test_context_filter_stamps_records():
    record = make_record(context={"service": "JobService"})

    assert ContextFilter({"operation": "create_job"}).filter(record)
    assert record.context == {"service": "JobService", "operation": "create_job"}

    payload = json.loads(JSONFormatter().format(record))
    assert payload["context"] == {"service": "JobService", "operation": "create_job"}


def test_get_logger_replaces_previous_context():
    name = "jobcatalog.test.context"
    get_logger(name, {"service": "JobService"})
    logger = get_logger(name, {"service": "LocationService"})
    try:
        filters = [f for f in logger.filters if isinstance(f, ContextFilter)]
        assert len(filters) == 1
        assert filters[0].context == {"service": "LocationService"}
    finally:
        logger.filters.clear()


async def test_service_operations_are_logged_with_fields(uow, caplog):
    caplog.set_level(logging.INFO, logger="jobcatalog.services")

    await DepartmentService(uow).create_department(DepartmentRequest(title="Legal"))

    record = next(r for r in caplog.records if r.getMessage().startswith("Service operation"))
    assert record.extra_fields == {"operation": "create_department", "title": "Legal"}
    assert record.context == {"service": "DepartmentService"}


def test_setup_logging_plain(restore_root_logger):
    setup_logging(LoggingSettings(level="DEBUG", json_format=False))

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    assert not isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
    assert logging.getLogger("aiosqlite").level == logging.WARNING


def test_setup_logging_json_with_file(restore_root_logger, tmp_path):
    log_file = tmp_path / "logs" / "jobcatalog.log"

    setup_logging(LoggingSettings(json_format=True, file=str(log_file)))
    logging.getLogger("jobcatalog.test").info("written to file")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert len(restore_root_logger.handlers) == 2
    line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
    assert json.loads(line)["message"] == "written to file"
