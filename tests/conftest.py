import pytest
from google.protobuf import descriptor_pb2 as d2
from google.protobuf.compiler import plugin_pb2

from protoc_inspect.codec import decode

FDP = d2.FieldDescriptorProto


def _scalar(name, number, optional=False, oneof_index=None):
    f = FDP(name=name, number=number, type=FDP.TYPE_STRING, label=FDP.LABEL_OPTIONAL)
    if optional:
        f.proto3_optional = True
        f.oneof_index = oneof_index
    return f


def _message_field(name, number, type_name, repeated=False):
    return FDP(
        name=name,
        number=number,
        type=FDP.TYPE_MESSAGE,
        type_name=type_name,
        label=FDP.LABEL_REPEATED if repeated else FDP.LABEL_OPTIONAL,
    )


def _person_file() -> d2.FileDescriptorProto:
    """Descriptor protoc produces for testdata/person.proto."""
    person = d2.DescriptorProto(
        name="Person",
        field=[
            _scalar("name", 1),
            _message_field("address", 2, ".testdata.AddressInfo"),
            _scalar("nickname", 4, optional=True, oneof_index=0),
        ],
        oneof_decl=[d2.OneofDescriptorProto(name="_nickname")],
    )
    zip_code = d2.DescriptorProto(
        name="ZipCode",
        field=[
            _scalar("zip", 1),
            _scalar("plus_code", 2, optional=True, oneof_index=0),
        ],
        oneof_decl=[d2.OneofDescriptorProto(name="_plus_code")],
    )
    address = d2.DescriptorProto(
        name="AddressInfo",
        field=[
            _scalar("city", 1),
            _scalar("state", 2),
            _scalar("country", 3),
            _scalar("planet", 4),
            _message_field("zip_code", 5, ".testdata.AddressInfo.ZipCode"),
        ],
        nested_type=[zip_code],
    )
    get_req = d2.DescriptorProto(name="GetPersonRequest", field=[_scalar("name", 1)])
    list_req = d2.DescriptorProto(
        name="ListPersonsRequest",
        field=[
            _scalar("name_prefix", 1, optional=True, oneof_index=0),
            _scalar("has_nickname", 2, optional=True, oneof_index=1),
        ],
        oneof_decl=[
            d2.OneofDescriptorProto(name="_name_prefix"),
            d2.OneofDescriptorProto(name="_has_nickname"),
        ],
    )
    person_list = d2.DescriptorProto(
        name="PersonList",
        field=[_message_field("persons", 1, ".testdata.Person", repeated=True)],
    )
    service = d2.ServiceDescriptorProto(
        name="PersonService",
        method=[
            d2.MethodDescriptorProto(
                name="GetPerson",
                input_type=".testdata.GetPersonRequest",
                output_type=".testdata.Person",
            ),
            d2.MethodDescriptorProto(
                name="ListPersons",
                input_type=".testdata.ListPersonsRequest",
                output_type=".testdata.PersonList",
            ),
        ],
    )
    return d2.FileDescriptorProto(
        name="testdata/person.proto",
        package="testdata",
        syntax="proto3",
        message_type=[person, address, get_req, list_req, person_list],
        service=[service],
        options=d2.FileOptions(go_package="testdata/"),
    )


def _serialize(*files, parameter="", to_generate=None) -> bytes:
    req = plugin_pb2.CodeGeneratorRequest(
        proto_file=list(files),
        file_to_generate=to_generate if to_generate is not None else [f.name for f in files],
        compiler_version=plugin_pb2.Version(major=4, minor=25, patch=1),
    )
    if parameter:
        req.parameter = parameter
    return req.SerializeToString()


@pytest.fixture
def person_file():
    return _person_file()


@pytest.fixture
def request_bytes():
    """Factory: serialize FileDescriptorProtos into a CodeGeneratorRequest."""
    return _serialize


@pytest.fixture
def person_bytes(person_file):
    return _serialize(person_file)


@pytest.fixture
def person_request(person_bytes):
    return decode(person_bytes)
