from __future__ import annotations

import sys
from typing import BinaryIO

from protoc_inspect.codec import read_request, write_response
from protoc_inspect.errors import GenerationError
from protoc_inspect.generator.dump_generator import generate_dump
from protoc_inspect.generator.graph_generator import generate_graph
from protoc_inspect.generator.stats_generator import generate_stats
from protoc_inspect.models import Request, Response
from protoc_inspect.options import load_options


def process_request(request: Request) -> Response:
    """Run the dump, stats and graph generators and assemble the response.

    A GenerationError is reported through ``Response.error`` with no files
    attached, so protoc can surface it without the plugin crashing.
    """
    response = Response()
    try:
        options = load_options(request.parameter)
        # Order is part of the output contract: dump, stats, graph.
        response.files.append(generate_dump(request, options))
        response.files.append(generate_stats(request))
        response.files.append(generate_graph(request))
    except GenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return Response(error=str(e))

    if options.verbose:
        print(f"Inspected {len(request.files)} proto file(s)", file=sys.stderr)
        for f in response.files:
            print(f"  Generated: {f.name}", file=sys.stderr)
    return response


def run(source: BinaryIO, sink: BinaryIO) -> None:
    """Read one request from ``source`` and write one response to ``sink``.

    TransportError and EncodingError propagate to the caller; nothing is
    written to ``sink`` in that case.
    """
    request = read_request(source)
    response = process_request(request)
    write_response(sink, response)
