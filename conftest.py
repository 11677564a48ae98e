"""Pytest configuration and fixtures.

Provides a stand-in Hadoop invocation to wrap, isolated Elasticsearch
default settings, and a loguru sink that tests can inspect.

IMPORTANT: ES_* variables from the developer's shell would leak into
IndexStoreSettings() and change which jobconf parameters are emitted, so
they are removed before any test runs.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest
from loguru import logger
from pydantic_settings import SettingsConfigDict

# Clear ES_* variables BEFORE any esjob code gets imported
for _name in [name for name in os.environ if name.startswith("ES_")]:
    del os.environ[_name]

from esjob.config.settings import AppSettings, IndexStoreSettings  # noqa: E402


DEFAULT_INPUT_FORMAT = "org.apache.hadoop.mapred.TextInputFormat"
DEFAULT_OUTPUT_FORMAT = "org.apache.hadoop.mapred.TextOutputFormat"
DEFAULT_JOBCONF = ["mapred.reduce.tasks=3", "stream.num.map.output.key.fields=1"]


@dataclass
class StubInvocation:
    """Hadoop invocation that answers with fixed HDFS defaults."""

    settings: Mapping[str, Any] = field(default_factory=dict)
    job_name: str = "job1"
    calls: list[str] = field(default_factory=list)

    def input_format(self) -> str:
        self.calls.append("input_format")
        return DEFAULT_INPUT_FORMAT

    def output_format(self) -> str:
        self.calls.append("output_format")
        return DEFAULT_OUTPUT_FORMAT

    def input_paths(self) -> str:
        self.calls.append("input_paths")
        return self.settings.get("input") or ""

    def output_path(self) -> str:
        self.calls.append("output_path")
        return self.settings.get("output") or ""

    def hadoop_jobconf_options(self) -> list[str]:
        self.calls.append("hadoop_jobconf_options")
        return list(DEFAULT_JOBCONF)


class _IsolatedIndexStoreSettings(IndexStoreSettings):
    """Test-only subclass that disables environment loading."""

    model_config = SettingsConfigDict(
        env_file=None,
        env_prefix="",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """Only use init_settings source (constructor args), ignore all env sources."""
        return (init_settings,)


def create_index_store_settings(**kwargs) -> IndexStoreSettings:
    """Create IndexStoreSettings without env loading.

    Pass ALIAS names (e.g., ES_TMP_DIR), not field names.
    """
    kwargs.setdefault("ES_TMP_DIR", "/tmp/stage")
    return _IsolatedIndexStoreSettings(**kwargs)


class _IsolatedAppSettings(AppSettings):
    """Test-only subclass that disables environment loading."""

    model_config = SettingsConfigDict(
        env_file=None,
        env_prefix="",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (init_settings,)


def create_app_settings(**kwargs) -> AppSettings:
    """Create AppSettings without env loading.

    Note: When using validation_alias in Pydantic Settings, you must pass
    the ALIAS names (e.g., ESJOB_LOG_LEVEL) not the field names (e.g., log_level).
    """
    kwargs.setdefault("index_store", create_index_store_settings())
    return _IsolatedAppSettings(**kwargs)


@pytest.fixture
def stub_invocation():
    """Factory for StubInvocation with the given settings."""

    def _make(job_name: str = "job1", **settings) -> StubInvocation:
        return StubInvocation(settings=settings, job_name=job_name)

    return _make


@pytest.fixture
def index_store_defaults():
    """Isolated IndexStoreSettings with tmp_dir=/tmp/stage and nothing else set."""
    return create_index_store_settings()


@pytest.fixture
def log_records():
    """Collect loguru records emitted during the test."""
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
