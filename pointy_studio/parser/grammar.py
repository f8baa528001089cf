import typing
import logging
from dataclasses import dataclass, field

from pointy_studio.constants import POINTY_COMMENT
from pointy_studio.models import (
    Connection,
    EventNode,
    PipelineDocument,
    PipelineEvent,
)
from pointy_studio.utils import event_id_from_name
from .diagnostics import Diagnostic
from .layout import GridLayout
from .lexer import PointyLexer

__all__ = ["PointyParser", "ParseResult", "parse_pointy"]

logger = logging.getLogger(__name__)

EVENT_HEADER = ("IDENTIFIER", "LCURLY_BRACKET")

CONNECTION = ("IDENTIFIER", "POINTER", "IDENTIFIER")

EVENT_END = "}"

pointy_lexer = PointyLexer()


@dataclass
class ParseResult:
    document: PipelineDocument
    diagnostics: typing.List[Diagnostic] = field(default_factory=list)


@dataclass
class _OpenEvent:
    name: str
    lineno: int
    lines: typing.List[str] = field(default_factory=list)

    @property
    def code(self) -> str:
        return "".join(self.lines).strip()


class PointyParser:
    """
    Best-effort, line oriented reader for pointy text.

    Event blocks open with ``name {`` and close with a line holding only
    ``}``; everything in between is the event's code. Outside a block,
    ``a -> b`` declares a connection. Nothing raises: lines that are not
    understood are skipped and reported as diagnostics.

    Events are keyed by name. When two blocks share a name the later one
    replaces the code of the earlier one, unless ``strict`` is set, in which
    case the first block wins and the duplicate is reported.
    """

    def __init__(
        self,
        strict: bool = False,
        layout: typing.Optional[GridLayout] = None,
        lexer: typing.Optional[PointyLexer] = None,
    ):
        self.strict = strict
        self.layout = layout if layout is not None else GridLayout()
        self.lexer = lexer if lexer is not None else pointy_lexer

    def parse(self, text: str) -> ParseResult:
        diagnostics: typing.List[Diagnostic] = []
        event_map: typing.Dict[str, str] = {}
        declared_connections: typing.List[typing.Tuple[int, str, str]] = []
        current: typing.Optional[_OpenEvent] = None

        lines = text.replace("\r\n", "\n").split("\n")
        for lineno, line in enumerate(lines, start=1):
            trimmed_line = line.strip()

            if current is not None:
                if trimmed_line == EVENT_END:
                    self._close_event(current, event_map, diagnostics)
                    current = None
                elif not trimmed_line.startswith(POINTY_COMMENT):
                    current.lines.append(line + "\n")
                continue

            if not trimmed_line or trimmed_line.startswith(POINTY_COMMENT):
                continue

            tokens = self.lexer.tokenize(trimmed_line)
            token_types = tuple(tok.type for tok in tokens)

            if token_types[:2] == EVENT_HEADER:
                current = _OpenEvent(name=tokens[0].value, lineno=lineno)
            elif token_types == CONNECTION:
                declared_connections.append(
                    (lineno, tokens[0].value, tokens[2].value)
                )
            else:
                logger.debug(f"Ignoring unrecognized pointy line {lineno}: {line!r}")
                diagnostics.append(
                    Diagnostic("Unrecognized line ignored", line=lineno)
                )

        if current is not None:
            logger.debug(f"Discarding unterminated event '{current.name}'")
            diagnostics.append(
                Diagnostic(
                    f"Unterminated event '{current.name}' discarded",
                    line=current.lineno,
                )
            )

        nodes = []
        for (name, code), position in zip(event_map.items(), self.layout.positions()):
            event = PipelineEvent(id=event_id_from_name(name), name=name, code=code)
            nodes.append(EventNode.for_event(event, position))

        edges = []
        for lineno, source, target in declared_connections:
            for endpoint in dict.fromkeys((source, target)):
                if endpoint not in event_map:
                    diagnostics.append(
                        Diagnostic(
                            f"Connection refers to undeclared event '{endpoint}'",
                            line=lineno,
                        )
                    )
            edges.append(
                Connection(
                    id=f"{source}-{target}",
                    source=event_id_from_name(source),
                    target=event_id_from_name(target),
                )
            )

        diagnostics.sort(key=lambda d: d.line or 0)
        return ParseResult(
            document=PipelineDocument(config=None, nodes=nodes, edges=edges),
            diagnostics=diagnostics,
        )

    def _close_event(
        self,
        event: _OpenEvent,
        event_map: typing.Dict[str, str],
        diagnostics: typing.List[Diagnostic],
    ):
        if event.name in event_map:
            if self.strict:
                diagnostics.append(
                    Diagnostic(
                        f"Duplicate event '{event.name}' ignored, "
                        f"the first definition is kept",
                        line=event.lineno,
                    )
                )
                return
            logger.debug(f"Event '{event.name}' redefined, keeping the last block")
        # re-assigning keeps the name's first position
        event_map[event.name] = event.code


def parse_pointy(text: str, strict: bool = False) -> PipelineDocument:
    """
    Read pointy text into a pipeline document. The result carries no config:
    pointy text has none.
    """
    return PointyParser(strict=strict).parse(text).document
