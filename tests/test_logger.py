"""Tests for loguru setup."""

import io
import json
import sys

import pytest
from loguru import logger

from esjob.config.logger import setup_logging
from conftest import create_app_settings


@pytest.fixture(autouse=True)
def _restore_default_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_json_format_serializes_records():
    sink = io.StringIO()
    setup_logging(create_app_settings(ESJOB_LOG_FORMAT="json"), sink=sink)

    logger.bind(job_name="job1").info("Elasticsearch I/O enabled for job")

    record = json.loads(sink.getvalue().strip().splitlines()[-1])
    assert record["record"]["message"] == "Elasticsearch I/O enabled for job"
    assert record["record"]["extra"] == {"job_name": "job1"}


@pytest.mark.unit
def test_text_format_shows_extras_only_when_present():
    sink = io.StringIO()
    setup_logging(create_app_settings(ESJOB_LOG_FORMAT="text"), sink=sink)

    logger.info("plain message")
    logger.bind(job_name="job1").info("bound message")

    lines = sink.getvalue().splitlines()
    plain = next(line for line in lines if "plain message" in line)
    bound = next(line for line in lines if "bound message" in line)
    assert "{" not in plain
    assert "'job_name': 'job1'" in bound


@pytest.mark.unit
def test_level_filters_lower_records():
    sink = io.StringIO()
    setup_logging(create_app_settings(ESJOB_LOG_LEVEL="warning"), sink=sink)

    logger.info("hidden")
    logger.warning("shown")

    output = sink.getvalue()
    assert "hidden" not in output
    assert "shown" in output
