"""Temporary HDFS paths for jobs that read from or write to Elasticsearch.

Hadoop streaming always needs an input and output path, even when the real
source or destination is an index. Data is staged under:

    {tmp_dir}/{index}[/{type}]/{job_name}/{YYYY-MM-DD-HH-MM-SS}

Two launches of the same job within the same second get the same path.
Launches of one job are expected to be serialized by whatever schedules them.
"""

import re
from datetime import datetime

from esjob.common.datetime_utils import format_path_timestamp, utcnow
from esjob.features.index_store.index_locator import IndexLocator

# Anything other than ASCII word characters, '/', '.', '-' and '+'
_UNSAFE_PATH_CHARS = re.compile(r"[^\w/.\-+]+", re.ASCII)


def sanitize_path_component(value: str) -> str:
    """Strip characters that are unsafe in an HDFS path segment."""
    return _UNSAFE_PATH_CHARS.sub("", value)


def staging_timestamp(now: datetime | None = None) -> str:
    """Timestamp segment for a staging path, second resolution."""
    return format_path_timestamp(now or utcnow())


def staging_path(
    locator: IndexLocator,
    tmp_dir: str,
    job_name: str,
    now: datetime | None = None,
) -> str:
    """Build the staging path for one direction of a job.

    Args:
        locator: Index (and type) being read or written
        tmp_dir: Root staging directory on HDFS
        job_name: Name of the running job
        now: Time to stamp the path with (defaults to current UTC time)

    Returns:
        Staging path string. Nothing is created on HDFS.

    Raises:
        ValueError: If tmp_dir is empty
    """
    if not tmp_dir:
        raise ValueError("A temporary directory is required to stage Elasticsearch data")

    segments = [sanitize_path_component(part) for part in locator.parts()]
    segments += [job_name, staging_timestamp(now)]

    root = tmp_dir.rstrip("/") if tmp_dir != "/" else ""
    return "/".join([root] + [segment.strip("/") for segment in segments if segment.strip("/")])
