import json
import typing

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import EVENT_NODE_TYPE
from .exceptions import InvalidPipelineDocument
from .fields import PipelineField

__all__ = [
    "PipelineConfig",
    "PipelineEvent",
    "Position",
    "EventNode",
    "Connection",
    "PipelineDocument",
]


class PipelineConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    fields: typing.List[PipelineField] = Field(default_factory=list)

    @property
    def is_configured(self) -> bool:
        return bool(self.name)


class PipelineEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    code: str = ""


class Position(BaseModel):
    model_config = ConfigDict(extra="ignore")

    x: float = 0
    y: float = 0


class EventNodeData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    event: PipelineEvent


class EventNode(BaseModel):
    """A graph node as laid out on the canvas, wrapping one event."""

    model_config = ConfigDict(extra="ignore")

    id: str
    type: str = EVENT_NODE_TYPE
    position: Position = Field(default_factory=Position)
    data: EventNodeData

    @classmethod
    def for_event(
        cls, event: PipelineEvent, position: typing.Optional[Position] = None
    ) -> "EventNode":
        return cls(
            id=event.id,
            position=position if position is not None else Position(),
            data=EventNodeData(event=event),
        )

    @property
    def event(self) -> PipelineEvent:
        return self.data.event


class Connection(BaseModel):
    """Directed edge between two event ids."""

    model_config = ConfigDict(extra="ignore")

    id: str
    source: str
    target: str


class PipelineDocument(BaseModel):
    """
    The whole pipeline: its config, the event nodes and the connections
    between them. This is the unit of storage and transfer.

    ``config`` is ``None`` only on documents recovered from pointy text,
    which carries no config.
    """

    model_config = ConfigDict(extra="ignore")

    config: typing.Optional[PipelineConfig] = None
    nodes: typing.List[EventNode] = Field(default_factory=list)
    edges: typing.List[Connection] = Field(default_factory=list)

    @property
    def events(self) -> typing.List[PipelineEvent]:
        return [node.event for node in self.nodes]

    @property
    def connections(self) -> typing.List[Connection]:
        return self.edges

    def get_node(self, event_id: str) -> typing.Optional[EventNode]:
        for node in self.nodes:
            if node.id == event_id:
                return node
        return None

    def get_event(self, event_id: str) -> typing.Optional[PipelineEvent]:
        for event in self.events:
            if event.id == event_id:
                return event
        return None

    def get_connection(self, connection_id: str) -> typing.Optional[Connection]:
        for edge in self.edges:
            if edge.id == connection_id:
                return edge
        return None

    def with_config(self, config: typing.Optional[PipelineConfig]) -> "PipelineDocument":
        if config is not None:
            config = config.model_copy(deep=True)
        return self.model_copy(update={"config": config}, deep=True)

    def to_dict(self) -> typing.Dict[str, typing.Any]:
        return self.model_dump(mode="json")

    def as_json(self, indent: typing.Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: typing.Dict[str, typing.Any]) -> "PipelineDocument":
        if not isinstance(data, dict):
            raise InvalidPipelineDocument(
                f"Pipeline document must be an object, not {type(data).__name__}",
                code="invalid_document",
            )
        data = dict(data)
        if data.get("config") is None:
            data["config"] = PipelineConfig()
        for key in ("nodes", "edges"):
            if data.get(key) is None:
                data[key] = []
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidPipelineDocument(
                f"Invalid pipeline document: {e}",
                code="invalid_document",
                exception=e,
            ) from e

    @classmethod
    def from_json(cls, text: typing.Union[str, bytes]) -> "PipelineDocument":
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise InvalidPipelineDocument(
                f"Pipeline document is not valid JSON: {e}",
                code="invalid_json",
                exception=e,
            ) from e
        return cls.from_dict(data)
