from __future__ import annotations

from typing import Iterable, Iterator, Tuple

from protoc_inspect.models import MessageDescriptor


def qualified_name(package: str, *names: str) -> str:
    """Build the canonical dotted name ``.<package>.<outer>.<inner>``.

    An empty package is dropped, so a file without one yields ``.Person``
    exactly as protoc spells type references. Names themselves are joined
    literally, even when empty.
    """
    if package:
        return ".".join(("", package) + names)
    return ".".join(("",) + names)


def walk_messages(
    package: str,
    messages: Iterable[MessageDescriptor],
    enclosing: Tuple[str, ...] = (),
) -> Iterator[Tuple[str, MessageDescriptor]]:
    """Yield (qualified name, message) depth-first, in declared order.

    Only the nesting tree is descended; field type references are never
    followed, so reference cycles cannot loop.
    """
    for message in messages:
        path = enclosing + (message.name,)
        yield qualified_name(package, *path), message
        yield from walk_messages(package, message.nested, path)
