"""Elasticsearch override for a Hadoop streaming invocation.

Wraps an existing invocation and changes its answers only when the job's
`input` or `output` setting is an `es://` location:

- input/output format become the Wonderdog streaming formats
- input paths/output path become a temporary HDFS staging path
- jobconf parameters gain `es.config` plus the read and/or write parameters

Otherwise every call is forwarded to the wrapped invocation unchanged.

Usage:
    job = wrap_invocation(streaming_invocation)
    job.input_format()          # Wonderdog input format if input is es://
    job.execution_parameters()  # base jobconf + Elasticsearch parameters
"""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from esjob.config.settings import IndexStoreSettings, merge_job_settings
from esjob.features.index_store import jobconf
from esjob.features.index_store.index_locator import IndexLocator, is_index_store_uri
from esjob.features.index_store.interfaces import HadoopInvocation
from esjob.features.index_store.staging_path import staging_path

# Input format when reading from Elasticsearch (Java side of Wonderdog)
STREAMING_INPUT_FORMAT = "com.infochimps.elasticsearch.ElasticSearchStreamingInputFormat"

# Output format when writing to Elasticsearch (Java side of Wonderdog)
STREAMING_OUTPUT_FORMAT = "com.infochimps.elasticsearch.ElasticSearchStreamingOutputFormat"


class ElasticsearchInvocationOverride:
    """Decorates a HadoopInvocation with Elasticsearch input/output support.

    Parsed index locators and staging paths are computed on first use and
    cached for the lifetime of this instance (one job launch).
    """

    def __init__(self, base: HadoopInvocation, settings: Mapping[str, Any] | None = None):
        """
        Args:
            base: Invocation to forward to when Elasticsearch is not involved
            settings: Settings view to read from (defaults to base.settings)
        """
        self.base = base
        self.settings: Mapping[str, Any] = base.settings if settings is None else settings
        self._input_index: IndexLocator | None = None
        self._output_index: IndexLocator | None = None
        self._input_staging_path: str | None = None
        self._output_staging_path: str | None = None

    @property
    def job_name(self) -> str:
        return self.base.job_name

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def reads_from_elasticsearch(self) -> bool:
        """Does this job read from Elasticsearch?"""
        return is_index_store_uri(self.settings.get("input"))

    def input_format(self) -> str:
        if self.reads_from_elasticsearch():
            return STREAMING_INPUT_FORMAT
        return self.base.input_format()

    def input_index(self) -> IndexLocator:
        """Index and type named by the `input` setting (parsed once)."""
        if self._input_index is None:
            self._input_index = IndexLocator.parse(self.settings.get("input") or "")
        return self._input_index

    def input_paths(self) -> str:
        """Staging path when reading from Elasticsearch, else the base input paths."""
        if not self.reads_from_elasticsearch():
            return self.base.input_paths()
        if self._input_staging_path is None:
            self._input_staging_path = self._staging_path(self.input_index())
            logger.bind(job_name=self.job_name).debug(
                f"Reading {self.input_index()} via {self._input_staging_path}"
            )
        return self._input_staging_path

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def writes_to_elasticsearch(self) -> bool:
        """Does this job write to Elasticsearch?"""
        return is_index_store_uri(self.settings.get("output"))

    def output_format(self) -> str:
        if self.writes_to_elasticsearch():
            return STREAMING_OUTPUT_FORMAT
        return self.base.output_format()

    def output_index(self) -> IndexLocator:
        """Index and type named by the `output` setting (parsed once)."""
        if self._output_index is None:
            self._output_index = IndexLocator.parse(self.settings.get("output") or "")
        return self._output_index

    def output_path(self) -> str:
        """Staging path when writing to Elasticsearch, else the base output path."""
        if not self.writes_to_elasticsearch():
            return self.base.output_path()
        if self._output_staging_path is None:
            self._output_staging_path = self._staging_path(self.output_index())
            logger.bind(job_name=self.job_name).debug(
                f"Writing {self.output_index()} via {self._output_staging_path}"
            )
        return self._output_staging_path

    # Names used by callers that do not care which store is behind the scheme
    reads_from_index_store = reads_from_elasticsearch
    writes_to_index_store = writes_to_elasticsearch

    # ------------------------------------------------------------------
    # Jobconf
    # ------------------------------------------------------------------

    def execution_parameters(self) -> list[str]:
        """Base jobconf parameters plus those the Wonderdog formats need.

        Order: base parameters, `es.config`, read parameters, write parameters.
        Parameters whose setting is unset are left out.
        """
        reads = self.reads_from_elasticsearch()
        writes = self.writes_to_elasticsearch()
        options: list[str | None] = []

        if reads or writes:
            options.append(jobconf.jobconf_option(jobconf.ES_CONFIG, self.settings.get("config")))

        if reads:
            index = self.input_index()
            options += [
                jobconf.jobconf_option(jobconf.INPUT_INDEX, index.index),
                jobconf.jobconf_option(jobconf.INPUT_TYPE, index.type),
                jobconf.jobconf_option(jobconf.INPUT_SPLITS, self.settings.get("input_splits")),
                jobconf.jobconf_option(jobconf.INPUT_QUERY, self.settings.get("query")),
                jobconf.jobconf_option(jobconf.INPUT_REQUEST_SIZE, self.settings.get("request_size")),
                jobconf.jobconf_option(
                    jobconf.INPUT_SCROLL_TIMEOUT, self.settings.get("scroll_timeout")
                ),
            ]

        if writes:
            index = self.output_index()
            options += [
                jobconf.jobconf_option(jobconf.OUTPUT_INDEX, index.index),
                jobconf.jobconf_option(jobconf.OUTPUT_TYPE, index.type),
                jobconf.jobconf_option(jobconf.OUTPUT_INDEX_FIELD, self.settings.get("index_field")),
                jobconf.jobconf_option(jobconf.OUTPUT_TYPE_FIELD, self.settings.get("type_field")),
                jobconf.jobconf_option(jobconf.OUTPUT_ID_FIELD, self.settings.get("id_field")),
                jobconf.jobconf_option(jobconf.OUTPUT_BULK_SIZE, self.settings.get("bulk_size")),
            ]

        return list(self.base.hadoop_jobconf_options()) + jobconf.compact_options(options)

    def hadoop_jobconf_options(self) -> list[str]:
        """Same as execution_parameters(), under the base invocation's name."""
        return self.execution_parameters()

    def _staging_path(self, locator: IndexLocator) -> str:
        return staging_path(locator, self.settings.get("tmp_dir") or "", self.job_name)


def wrap_invocation(
    base: HadoopInvocation, defaults: IndexStoreSettings | None = None
) -> ElasticsearchInvocationOverride:
    """Wrap an invocation so it can read from and write to Elasticsearch.

    The job's own settings take precedence over `defaults`; the base
    invocation's settings are not modified.

    Args:
        base: Invocation to wrap
        defaults: Default Elasticsearch settings (loaded from the environment if omitted)

    Returns:
        ElasticsearchInvocationOverride for this job launch
    """
    defaults = defaults or IndexStoreSettings()
    merged = merge_job_settings(base.settings, defaults.job_defaults())
    override = ElasticsearchInvocationOverride(base, settings=merged)

    if override.reads_from_elasticsearch() or override.writes_to_elasticsearch():
        logger.bind(
            job_name=base.job_name, input=merged.get("input"), output=merged.get("output")
        ).info("Elasticsearch I/O enabled for job")
    return override
