from __future__ import annotations

import argparse
import sys
from io import BytesIO
from pathlib import Path

from protoc_inspect.errors import EncodingError, TransportError
from protoc_inspect.plugin import run

USAGE = """\
protoc-gen-inspect is a protoc plugin; it is not intended for direct use.

Usage:
  protoc --plugin=protoc-gen-inspect=$(which protoc-gen-inspect) \\
         --inspect_out=./out \\
         [--inspect_opt=dump_format=text,verbose] \\
         your_file.proto
"""


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="protoc-gen-inspect",
        description="protoc plugin that dumps the request, reports stats and draws an entity graph",
    )
    parser.add_argument(
        "--input",
        required=False,
        help="Replay a serialized CodeGeneratorRequest from this file instead of stdin",
    )
    parser.add_argument(
        "--output",
        required=False,
        help="Write the serialized CodeGeneratorResponse to this file instead of stdout",
    )
    args = parser.parse_args(argv)

    if args.input is None and sys.stdin.isatty():
        print(USAGE, file=sys.stderr)
        return 1

    if args.input is not None:
        source = BytesIO(Path(args.input).read_bytes())
    else:
        source = sys.stdin.buffer

    # Buffer the response so a fatal error leaves the destination untouched.
    sink = BytesIO()
    try:
        run(source, sink)
    except (TransportError, EncodingError) as e:
        print(f"FATAL: {e}", file=sys.stderr)
        return 1

    if args.output is not None:
        Path(args.output).write_bytes(sink.getvalue())
    else:
        sys.stdout.buffer.write(sink.getvalue())
        sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
