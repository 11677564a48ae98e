"""
Settings using Pydantic Settings v2.

Environment variables are loaded from .env file and can be overridden
by actual environment variables.

IndexStoreSettings supplies the defaults for the Elasticsearch-related
job settings (tmp_dir, config, input_splits, ...). A job's own settings
always win over these defaults.
"""

import getpass
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def find_env_file() -> str:
    """
    Find .env file in current directory or parent directory.

    Returns:
        Path to .env file (current dir, parent dir, or default ".env")
    """
    current = Path.cwd() / ".env"
    parent = Path.cwd().parent / ".env"

    if current.exists():
        return str(current)
    elif parent.exists():
        return str(parent)
    else:
        # Fallback to default (will use environment variables only)
        return ".env"


def default_tmp_dir() -> str:
    """HDFS directory used to stage data read from or written to Elasticsearch."""
    return f"/user/{getpass.getuser()}/wukong"


class IndexStoreSettings(BaseSettings):
    """Defaults for jobs that read from or write to Elasticsearch.

    Keys mirror the job settings consumed by the invocation override.
    Only tmp_dir has a default; every other value stays None unless set,
    so the matching jobconf parameter is omitted.
    """

    tmp_dir: Annotated[
        str,
        Field(
            default_factory=default_tmp_dir,
            description="Temporary HDFS directory for job data staged to/from Elasticsearch",
            validation_alias="ES_TMP_DIR",
        ),
    ]
    config: Annotated[
        str | None,
        Field(
            default=None,
            description="Path to the elasticsearch.yml used to join the cluster",
            validation_alias="ES_CONFIG",
        ),
    ]

    # Reading
    input_splits: Annotated[
        int | None,
        Field(
            default=None,
            ge=1,
            description="Number of input splits when reading from Elasticsearch",
            validation_alias="ES_INPUT_SPLITS",
        ),
    ]
    query: Annotated[
        str | None,
        Field(
            default=None,
            description="Query used to select documents when reading",
            validation_alias="ES_QUERY",
        ),
    ]
    request_size: Annotated[
        int | None,
        Field(
            default=None,
            ge=1,
            description="Number of documents fetched per scroll request",
            validation_alias="ES_REQUEST_SIZE",
        ),
    ]
    scroll_timeout: Annotated[
        str | None,
        Field(
            default=None,
            description="Scroll session timeout (e.g. 5m)",
            validation_alias="ES_SCROLL_TIMEOUT",
        ),
    ]

    # Writing
    index_field: Annotated[
        str | None,
        Field(
            default=None,
            description="Record field naming the index each document is written to",
            validation_alias="ES_INDEX_FIELD",
        ),
    ]
    type_field: Annotated[
        str | None,
        Field(
            default=None,
            description="Record field naming the type each document is written to",
            validation_alias="ES_TYPE_FIELD",
        ),
    ]
    id_field: Annotated[
        str | None,
        Field(
            default=None,
            description="Record field used as the document id",
            validation_alias="ES_ID_FIELD",
        ),
    ]
    bulk_size: Annotated[
        int | None,
        Field(
            default=None,
            ge=1,
            description="Number of documents per bulk write request",
            validation_alias="ES_BULK_SIZE",
        ),
    ]

    @field_validator("tmp_dir")
    @classmethod
    def validate_tmp_dir(cls, v: str) -> str:
        """Reject an empty staging directory and drop trailing slashes."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("ES_TMP_DIR must not be empty")
        return stripped.rstrip("/") or "/"

    def job_defaults(self) -> dict[str, Any]:
        """Settings that carry a value, keyed the way job settings are."""
        return {key: value for key, value in self.model_dump().items() if value is not None}

    model_config = SettingsConfigDict(
        env_file=find_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )


class AppSettings(BaseSettings):
    """Main settings"""

    # Logging
    log_level: Annotated[
        str,
        Field(
            default="info",
            description="Log level: debug, info, warning, error",
            validation_alias="ESJOB_LOG_LEVEL",
        ),
    ]
    log_format: Annotated[
        str,
        Field(
            default="text",
            description="Log format: json, text",
            validation_alias="ESJOB_LOG_FORMAT",
        ),
    ]

    # Nested settings
    index_store: Annotated[
        IndexStoreSettings,
        Field(default_factory=IndexStoreSettings, description="Elasticsearch job defaults"),
    ]

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise log level and accept 'warn' as an alias for 'warning'."""
        level = str(v).strip().lower()
        if level == "warn":
            level = "warning"
        if level not in {"trace", "debug", "info", "success", "warning", "error", "critical"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_format", mode="before")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        log_format = str(v).strip().lower()
        if log_format not in {"json", "text"}:
            raise ValueError(f"Log format must be 'json' or 'text', got: {v}")
        return log_format

    model_config = SettingsConfigDict(
        env_file=find_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )


def merge_job_settings(
    settings: Mapping[str, Any], defaults: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Overlay a job's settings on top of defaults.

    A key the job sets to None is treated as unset and falls back to the default.

    Args:
        settings: The job's own settings
        defaults: Default values, usually IndexStoreSettings.job_defaults()

    Returns:
        A new dict; neither input is modified.
    """
    merged = dict(defaults or {})
    for key, value in settings.items():
        if value is None and key in merged:
            continue
        merged[key] = value
    return merged


# Global settings instance (singleton, loaded once at import)
settings = AppSettings()
