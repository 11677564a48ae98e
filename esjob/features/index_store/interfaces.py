"""Contract for the Hadoop invocation being overridden.

Structural typing: any object exposing these attributes and methods can be
wrapped, whether it builds a real streaming command or is a test double.
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HadoopInvocation(Protocol):
    """What a Hadoop streaming job exposes about its I/O and jobconf."""

    settings: Mapping[str, Any]
    job_name: str

    def input_format(self) -> str:
        """Java class name of the streaming input format."""
        ...

    def output_format(self) -> str:
        """Java class name of the streaming output format."""
        ...

    def input_paths(self) -> str:
        """Comma-separated input paths passed to `-input`."""
        ...

    def output_path(self) -> str:
        """Output path passed to `-output`."""
        ...

    def hadoop_jobconf_options(self) -> list[str]:
        """Jobconf parameters as `name=value` strings."""
        ...
