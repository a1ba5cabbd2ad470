from __future__ import annotations

import json
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from protoc_inspect.models import FileDescriptor, GeneratedFile, MessageDescriptor, Request
from protoc_inspect.naming import qualified_name, walk_messages

GRAPH_FILE_NAME = "entity_graph.dot"
GRAPH_NAME = "entities"

SERVICE_SHAPE = "diamond"
METHOD_SHAPE = "circle"
MESSAGE_SHAPE = "square"

INPUT_EDGE_COLOR = "red"
OUTPUT_EDGE_COLOR = "blue"


def dot_quote(identifier: str) -> str:
    """Quote an identifier as a DOT string, escaping quotes and backslashes."""
    return json.dumps(identifier, ensure_ascii=False)


class GraphSink:
    """Accumulates DOT lines for one graph.

    Node declarations and edges go to separate buffers so every node can be
    declared ahead of the edges regardless of discovery order.
    """

    def __init__(self) -> None:
        self.nodes: List[str] = []
        self.edges: List[str] = []

    def node(self, name: str, shape: str) -> None:
        self.nodes.append(f"{dot_quote(name)} [shape={shape}]\n")

    def edge(self, src: str, dst: str, *attrs: str) -> None:
        line = f"{dot_quote(src)} -> {dot_quote(dst)}"
        if attrs:
            line += f" [{', '.join(attrs)}]"
        self.edges.append(line + "\n")


def _get_template_env() -> Environment:
    template_dir = Path(__file__).parent.parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
    )


def _emit_services(f: FileDescriptor, sink: GraphSink) -> None:
    for svc in f.services:
        q_service = qualified_name(f.package, svc.name)
        sink.node(q_service, SERVICE_SHAPE)
        for meth in svc.methods:
            q_method = qualified_name(f.package, svc.name, meth.name)
            sink.node(q_method, METHOD_SHAPE)
            sink.edge(q_service, q_method, "style=dashed")
            sink.edge(q_method, meth.input_type, "style=dashed", f"color={INPUT_EDGE_COLOR}")
            sink.edge(q_method, meth.output_type, "style=dashed", f"color={OUTPUT_EDGE_COLOR}")


def _emit_message(q_name: str, msg: MessageDescriptor, sink: GraphSink) -> None:
    sink.node(q_name, MESSAGE_SHAPE)
    for fld in msg.fields:
        # Enum and scalar fields are leaves; only message references become edges.
        if fld.is_message and fld.type_name:
            sink.edge(q_name, fld.type_name)


def build_graph(request: Request) -> GraphSink:
    """Walk every file and collect node and edge lines in request order."""
    sink = GraphSink()
    for f in request.files:
        _emit_services(f, sink)
        for q_name, msg in walk_messages(f.package, f.messages):
            _emit_message(q_name, msg, sink)
    return sink


def generate_graph(request: Request) -> GeneratedFile:
    """Produce a Graphviz DOT description of services, methods and messages."""
    sink = build_graph(request)
    env = _get_template_env()
    template = env.get_template("entity_graph.dot.j2")
    content = template.render(
        graph_name=GRAPH_NAME,
        nodes="".join(sink.nodes),
        edges="".join(sink.edges),
    )
    return GeneratedFile(name=GRAPH_FILE_NAME, content=content)
