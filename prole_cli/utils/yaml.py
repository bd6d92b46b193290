"""Contains utility functions for writing YAML documents."""

import io
from typing import Any

from ruamel.yaml import YAML


def create_yaml_dumper() -> YAML:
    """Creates a YAML object configured for GitHub configuration files."""
    yaml_dumper = YAML()
    yaml_dumper.default_flow_style = False
    yaml_dumper.indent(mapping=2, sequence=4, offset=2)  # type: ignore[attr-defined]
    yaml_dumper.width = 4096  # Prevent line wrapping for long lines
    return yaml_dumper


def dump_yaml_to_string(data: Any) -> str:
    """Dumps data to a YAML string."""
    yaml_dumper = create_yaml_dumper()
    stream = io.StringIO()
    yaml_dumper.dump(data, stream)  # type: ignore[misc]
    return stream.getvalue()
