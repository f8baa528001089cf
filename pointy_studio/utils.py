import re
import time
import uuid
import typing

from .constants import EVENT_ID_PREFIX, IDENTIFIER_PATTERN

_identifier_re = re.compile(IDENTIFIER_PATTERN)


def is_pointy_identifier(name: str) -> bool:
    """Check whether a name can be used as an event block name in pointy text."""
    return bool(name) and _identifier_re.fullmatch(name) is not None


def generate_event_id() -> str:
    """
    Generate unique identity for events created in the editor
    :return: string
    """
    return f"{EVENT_ID_PREFIX}{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def event_id_from_name(name: str) -> str:
    return f"{EVENT_ID_PREFIX}{name}"


def generate_connection_id(
    source: str, target: str, existing: typing.Iterable[str] = ()
) -> str:
    """
    Build a readable connection id from its endpoints. Parallel connections
    between the same pair get a numeric suffix.
    """
    taken = set(existing)
    pk = f"{source}-{target}"
    counter = 1
    while pk in taken:
        pk = f"{source}-{target}-{counter}"
        counter += 1
    return pk
