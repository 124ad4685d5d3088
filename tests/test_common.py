from __future__ import annotations

import io
import json
import logging

import pytest

from carolus.backend.common.errors import TaskError
from carolus.backend.common.logging import (
    JsonFormatter,
    init_logging,
    level_from_verbosity,
)
from carolus.backend.common.tasks import TaskRunner, TaskSpec


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root.removeHandler(handler)
    root.setLevel(level)


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("carolus.test", logging.WARNING, __file__, 1, "movie_parse_failed", (), None)
    record.path = "/m/(2000).mp4"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "carolus.test"
    assert payload["msg"] == "movie_parse_failed"
    assert payload["path"] == "/m/(2000).mp4"


def test_init_logging_is_idempotent(restore_root_logger):
    stream = io.StringIO()
    init_logging("debug", stream=stream)
    init_logging("debug", stream=stream)

    logging.getLogger("carolus.test").debug("hello", extra={"answer": 42})

    assert len(restore_root_logger.handlers) == 1
    (line,) = stream.getvalue().splitlines()
    assert json.loads(line)["answer"] == 42


@pytest.mark.parametrize("count, level", [(0, "WARNING"), (1, "INFO"), (2, "DEBUG"), (5, "DEBUG")])
def test_level_from_verbosity(count, level):
    assert level_from_verbosity(count) == level


def test_task_runner_runs_and_closes():
    with TaskRunner(max_workers=2, context="test") as runner:
        futures = [runner.submit(TaskSpec(fn=pow, args=(n, 2), name=f"square_{n}")) for n in range(5)]
        assert [f.result() for f in futures] == [0, 1, 4, 9, 16]

    with pytest.raises(TaskError):
        runner.submit(TaskSpec(fn=print))


def test_backend_lazy_exports():
    import carolus.backend as backend
    from carolus.backend.library.resolver import CatalogResolver

    assert backend.CatalogResolver is CatalogResolver
    with pytest.raises(AttributeError):
        backend.DoesNotExist
