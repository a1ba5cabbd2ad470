from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from protoc_inspect.models import GeneratedFile, Request, Stats

STATS_FILE_NAME = "request_stats.txt"


def _get_template_env() -> Environment:
    template_dir = Path(__file__).parent.parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
    )


def collect_stats(request: Request) -> Stats:
    """Count files, services, methods, messages and fields in one pass.

    Messages and fields are counted for top-level messages only; nested
    messages are not descended into.
    """
    num_files = num_services = num_methods = num_messages = num_fields = 0
    for f in request.files:
        num_files += 1
        for svc in f.services:
            num_services += 1
            num_methods += len(svc.methods)
        # note: nested messages are not attributed here
        for msg in f.messages:
            num_messages += 1
            num_fields += len(msg.fields)

    return Stats(
        files=num_files,
        services=num_services,
        methods=num_methods,
        messages=num_messages,
        fields=num_fields,
    )


def generate_stats(request: Request) -> GeneratedFile:
    env = _get_template_env()
    template = env.get_template("request_stats.txt.j2")
    return GeneratedFile(
        name=STATS_FILE_NAME,
        content=template.render(stats=collect_stats(request)),
    )
