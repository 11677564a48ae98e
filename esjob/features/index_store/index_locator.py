"""Recognise and parse `es://index/type` locations.

A job names Elasticsearch as its input or output with a URI such as:
    es://logs/events    -> index "logs", type "events"
    es://logs           -> index "logs", no type

Parsing is permissive: no character or reachability checks are made, and a
location with nothing after the scheme produces an empty index name rather
than an error. Whatever reads the index name later reports the failure.
"""

from dataclasses import dataclass

from loguru import logger

ES_SCHEME = "es://"


def is_index_store_uri(location: str | None) -> bool:
    """Whether a configured input/output location points at Elasticsearch.

    Literal, case-sensitive prefix match. Unset locations are not index
    store locations.
    """
    if not location or not isinstance(location, str):
        return False
    return location.startswith(ES_SCHEME)


@dataclass(frozen=True)
class IndexLocator:
    """An Elasticsearch index and optional document type."""

    index: str
    type: str | None = None

    @classmethod
    def parse(cls, location: str) -> "IndexLocator":
        """Parse an `es://index[/type]` location.

        The remainder after the scheme is split on the first '/'. Anything
        after that slash, further slashes included, is the type.

        Args:
            location: Location string, normally one accepted by is_index_store_uri()

        Returns:
            IndexLocator. An empty type segment ('es://logs/') yields type None.
        """
        remainder = location[len(ES_SCHEME) :] if location.startswith(ES_SCHEME) else location
        index, _sep, type_name = remainder.partition("/")

        if not index:
            logger.warning(f"No index name in Elasticsearch location: {location!r}")

        return cls(index=index, type=type_name or None)

    def parts(self) -> list[str]:
        """Non-empty components in order: [index] or [index, type]."""
        return [part for part in (self.index, self.type) if part]

    def __str__(self) -> str:
        return ES_SCHEME + "/".join(self.parts())
