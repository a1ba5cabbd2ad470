from __future__ import annotations

from typing import BinaryIO

from google.protobuf import descriptor_pb2 as d2
from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError, EncodeError

from protoc_inspect.errors import EncodingError, TransportError
from protoc_inspect.models import (
    FieldDescriptor,
    FileDescriptor,
    MessageDescriptor,
    MethodDescriptor,
    Request,
    Response,
    ServiceDescriptor,
)


def _build_message(desc: d2.DescriptorProto) -> MessageDescriptor:
    fields = tuple(
        FieldDescriptor(
            name=f.name,
            number=f.number,
            type=f.type,
            type_name=f.type_name,
            label=f.label,
        )
        for f in desc.field
    )
    nested = tuple(_build_message(n) for n in desc.nested_type)
    return MessageDescriptor(name=desc.name, fields=fields, nested=nested)


def _build_service(desc: d2.ServiceDescriptorProto) -> ServiceDescriptor:
    methods = tuple(
        MethodDescriptor(
            name=m.name,
            input_type=m.input_type,
            output_type=m.output_type,
            client_streaming=m.client_streaming,
            server_streaming=m.server_streaming,
        )
        for m in desc.method
    )
    return ServiceDescriptor(name=desc.name, methods=methods)


def _build_file(desc: d2.FileDescriptorProto) -> FileDescriptor:
    return FileDescriptor(
        name=desc.name,
        package=desc.package,
        messages=tuple(_build_message(m) for m in desc.message_type),
        services=tuple(_build_service(s) for s in desc.service),
    )


def parse_raw_request(data: bytes) -> plugin_pb2.CodeGeneratorRequest:
    """Parse bytes into the protobuf request type, mapping failures to TransportError."""
    req = plugin_pb2.CodeGeneratorRequest()
    try:
        req.ParseFromString(data)
    except DecodeError as e:
        raise TransportError(f"cannot decode CodeGeneratorRequest: {e}") from e
    return req


def decode(data: bytes) -> Request:
    """Decode one serialized CodeGeneratorRequest into the read-only model."""
    req = parse_raw_request(data)
    return Request(
        files=tuple(_build_file(f) for f in req.proto_file),
        files_to_generate=tuple(req.file_to_generate),
        parameter=req.parameter,
        raw=bytes(data),
    )


def to_proto(response: Response) -> plugin_pb2.CodeGeneratorResponse:
    resp = plugin_pb2.CodeGeneratorResponse(
        supported_features=response.supported_features,
    )
    if response.error:
        resp.error = response.error
    for f in response.files:
        resp.file.add(name=f.name, content=f.content)
    return resp


def encode(response: Response) -> bytes:
    """Serialize a Response as one CodeGeneratorResponse message."""
    try:
        return to_proto(response).SerializeToString()
    except (EncodeError, TypeError, ValueError) as e:
        raise EncodingError(f"cannot encode CodeGeneratorResponse: {e}") from e


def read_request(stream: BinaryIO) -> Request:
    # The whole stream is exactly one message; there is no framing.
    return decode(stream.read())


def write_response(stream: BinaryIO, response: Response) -> None:
    stream.write(encode(response))
    stream.flush()
