from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Dict

from protoc_inspect.errors import GenerationError

DUMP_FORMATS = ("json", "text")
TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class PluginOptions:
    dump_format: str = "json"
    verbose: bool = False


def parse_parameter(parameter: str) -> Dict[str, str]:
    """Split a protoc parameter string into a dict.

    protoc joins every ``--<name>_opt`` with commas, so
    ``dump_format=text,verbose`` becomes ``{"dump_format": "text", "verbose": ""}``.
    Only the first ``=`` separates key from value.
    """
    result: Dict[str, str] = {}
    for part in parameter.split(","):
        part = part.strip()
        if not part:
            continue
        key, _, value = part.partition("=")
        result[key.strip()] = value.strip()
    return result


def load_options(parameter: str) -> PluginOptions:
    """Build PluginOptions from the request parameter.

    Raises GenerationError on an unsupported option value. Unknown keys are
    reported on stderr and ignored.
    """
    params = parse_parameter(parameter)

    dump_format = params.pop("dump_format", "json").lower() or "json"
    if dump_format not in DUMP_FORMATS:
        raise GenerationError(
            f"unsupported dump_format '{dump_format}' "
            f"(expected one of: {', '.join(DUMP_FORMATS)})"
        )

    verbose = False
    if "verbose" in params:
        # A bare "verbose" flag counts as on.
        value = params.pop("verbose").lower()
        verbose = value == "" or value in TRUE_VALUES

    for key in params:
        print(f"Warning: ignoring unknown parameter '{key}'", file=sys.stderr)

    return PluginOptions(dump_format=dump_format, verbose=verbose)
