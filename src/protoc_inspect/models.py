from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

FieldType = descriptor_pb2.FieldDescriptorProto

FEATURE_PROTO3_OPTIONAL = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    number: int
    type: int
    type_name: str = ""
    label: int = FieldType.LABEL_OPTIONAL

    @property
    def is_message(self) -> bool:
        return self.type == FieldType.TYPE_MESSAGE

    @property
    def is_enum(self) -> bool:
        return self.type == FieldType.TYPE_ENUM


@dataclass(frozen=True)
class MessageDescriptor:
    name: str
    fields: Tuple[FieldDescriptor, ...] = ()
    nested: Tuple[MessageDescriptor, ...] = ()


@dataclass(frozen=True)
class MethodDescriptor:
    name: str
    input_type: str
    output_type: str
    client_streaming: bool = False
    server_streaming: bool = False


@dataclass(frozen=True)
class ServiceDescriptor:
    name: str
    methods: Tuple[MethodDescriptor, ...] = ()


@dataclass(frozen=True)
class FileDescriptor:
    name: str
    package: str = ""
    messages: Tuple[MessageDescriptor, ...] = ()
    services: Tuple[ServiceDescriptor, ...] = ()


@dataclass(frozen=True)
class Request:
    """Read-only view of a CodeGeneratorRequest.

    ``raw`` keeps the exact bytes the host sent so the dump can project parts
    of the request this model does not carry (options, source info, compiler
    version).
    """

    files: Tuple[FileDescriptor, ...] = ()
    files_to_generate: Tuple[str, ...] = ()
    parameter: str = ""
    raw: bytes = b""


@dataclass(frozen=True)
class GeneratedFile:
    name: str
    content: str


@dataclass
class Response:
    files: List[GeneratedFile] = field(default_factory=list)
    supported_features: int = FEATURE_PROTO3_OPTIONAL
    error: str = ""


@dataclass(frozen=True)
class Stats:
    files: int = 0
    services: int = 0
    methods: int = 0
    messages: int = 0
    fields: int = 0
