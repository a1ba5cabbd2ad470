from __future__ import annotations

from google.protobuf import json_format, text_format
from google.protobuf.compiler import plugin_pb2

from protoc_inspect.codec import parse_raw_request
from protoc_inspect.errors import GenerationError, TransportError
from protoc_inspect.models import GeneratedFile, Request
from protoc_inspect.options import PluginOptions

DUMP_EXTENSIONS = {
    "json": "json",
    "text": "txtpb",
}


def dump_file_name(dump_format: str) -> str:
    return f"request_dump.{DUMP_EXTENSIONS[dump_format]}"


def _source_request(request: Request) -> plugin_pb2.CodeGeneratorRequest:
    """Parse ``request.raw`` and check it describes the same request as the model.

    Raises GenerationError when the bytes are missing, malformed, or disagree
    with the model on files, files to generate or parameter.
    """
    try:
        req = parse_raw_request(request.raw)
    except TransportError as e:
        raise GenerationError(f"request dump: {e}") from e

    raw_files = [f.name for f in req.proto_file]
    model_files = [f.name for f in request.files]
    if (
        raw_files != model_files
        or list(req.file_to_generate) != list(request.files_to_generate)
        or req.parameter != request.parameter
    ):
        raise GenerationError(
            "request dump: raw request bytes do not match the decoded request "
            f"(raw files: {raw_files}, model files: {model_files})"
        )
    return req


def generate_dump(request: Request, options: PluginOptions) -> GeneratedFile:
    """Render the complete request in a canonical, re-parseable text form.

    The raw request bytes are parsed again rather than rebuilt from the
    model, so descriptor parts the model does not carry survive the dump.
    Unknown fields (custom options sent as extensions) are not rendered.
    """
    req = _source_request(request)
    if options.dump_format == "text":
        content = text_format.MessageToString(req)
    else:
        content = json_format.MessageToJson(req, indent=2)
    return GeneratedFile(name=dump_file_name(options.dump_format), content=content)
