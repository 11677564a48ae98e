"""Jobconf parameters read by the Wonderdog streaming formats.

Parameters are `name=value` strings. A parameter whose value is unset is
never emitted, so the Java side falls back to its own defaults.
"""

from collections.abc import Iterable

# Shared by both directions
ES_CONFIG = "es.config"

# Reading, in emission order
INPUT_INDEX = "elasticsearch.input.index"
INPUT_TYPE = "elasticsearch.input.type"
INPUT_SPLITS = "elasticsearch.input.splits"
INPUT_QUERY = "elasticsearch.input.query"
INPUT_REQUEST_SIZE = "elasticsearch.input.request_size"
INPUT_SCROLL_TIMEOUT = "elasticsearch.input.scroll_timeout"

# Writing, in emission order
OUTPUT_INDEX = "elasticsearch.output.index"
OUTPUT_TYPE = "elasticsearch.output.type"
OUTPUT_INDEX_FIELD = "elasticsearch.output.index.field"
OUTPUT_TYPE_FIELD = "elasticsearch.output.type.field"
OUTPUT_ID_FIELD = "elasticsearch.output.id.field"
OUTPUT_BULK_SIZE = "elasticsearch.output.bulk_size"


def jobconf_option(name: str, value: object) -> str | None:
    """Format one jobconf parameter.

    Args:
        name: Jobconf property name
        value: Property value; stringified, booleans as 'true'/'false'

    Returns:
        'name=value', or None when value is None or an empty string
    """
    if value is None:
        return None
    if isinstance(value, bool):
        value = "true" if value else "false"
    text = str(value)
    if text == "":
        return None
    return f"{name}={text}"


def compact_options(options: Iterable[str | None]) -> list[str]:
    """Drop unset parameters, keeping order."""
    return [option for option in options if option]


def jobconf_arguments(options: Iterable[str]) -> list[str]:
    """Expand parameters into Hadoop streaming command-line arguments.

    Example:
        >>> jobconf_arguments(["es.config=/etc/es.yml"])
        ['-D', 'es.config=/etc/es.yml']

    Entries already written as '-D name=value' or '-Dname=value' are accepted.
    The result is an argv list, so values are not shell-quoted.
    """
    arguments: list[str] = []
    for option in options:
        option = option.strip()
        if option.startswith("-D"):
            option = option[2:].lstrip()
        if not option:
            continue
        arguments += ["-D", option]
    return arguments
