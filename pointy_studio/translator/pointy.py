import typing
import logging
from io import StringIO

from pointy_studio.constants import POINTY_COMMENT
from pointy_studio.models import PipelineDocument
from pointy_studio.utils import is_pointy_identifier

__all__ = ["compile_pointy"]

logger = logging.getLogger(__name__)

EVENT_END = "}"


def resolve_event_names(document: PipelineDocument) -> typing.Dict[str, str]:
    """Map event ids to event names; the first node with a given id wins."""
    names = {}
    for node in document.nodes:
        names.setdefault(node.id, node.event.name)
    return names


def unreadable_code_lines(code: str) -> typing.List[int]:
    """
    1-based numbers of the code lines a pointy parser will not give back:
    a line that is only ``}`` ends the block early and a ``//`` line is
    dropped as a comment.
    """
    lines = []
    for lineno, line in enumerate(code.split("\n"), start=1):
        trimmed_line = line.strip()
        if trimmed_line == EVENT_END or trimmed_line.startswith(POINTY_COMMENT):
            lines.append(lineno)
    return lines


def compile_pointy(document: PipelineDocument) -> str:
    """
    Write a pipeline document as pointy text: one block per event, in node
    order, followed by one ``source -> target`` line per connection, in edge
    order. Event code is written verbatim. Connections with an endpoint that
    is not an event of the document are left out.
    """
    f = StringIO()

    for node in document.nodes:
        event = node.event
        if not is_pointy_identifier(event.name):
            logger.warning(
                f"Event name '{event.name}' is not a pointy identifier "
                f"and will not be read back from pointy text"
            )
        unreadable = unreadable_code_lines(event.code)
        if unreadable:
            logger.warning(
                f"Code of event '{event.name}' has lines {unreadable} that pointy "
                f"text cannot carry, they will be lost when read back"
            )
        f.write(f"{event.name} {{\n{event.code}\n}}\n\n")

    names = resolve_event_names(document)
    for edge in document.edges:
        source_name = names.get(edge.source)
        target_name = names.get(edge.target)
        if source_name is None or target_name is None:
            logger.debug(
                f"Dropping connection '{edge.id}' ({edge.source} -> {edge.target}), "
                f"an endpoint is not an event of the pipeline"
            )
            continue
        f.write(f"{source_name} -> {target_name}\n")

    return f.getvalue()
