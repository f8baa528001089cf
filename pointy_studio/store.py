import typing
import logging
import threading

from .conf import ConfigLoader
from .constants import STORAGE_KEY, DEFAULT_EVENT_NAME, DEFAULT_EVENT_CODE
from .exceptions import (
    ConnectionDoesNotExist,
    EventDoesNotExist,
    ImproperlyConfigured,
    InvalidPipelineDocument,
    PipelineNotConfigured,
)
from .import_utils import import_string
from .models import (
    Connection,
    EventNode,
    PipelineConfig,
    PipelineDocument,
    PipelineEvent,
    Position,
)
from .parser import parse_pointy, validate_code
from .translator import compile_pointy
from .utils import generate_connection_id, generate_event_id, is_pointy_identifier
from .backends.store import DocumentStoreBackendBase

__all__ = ["PipelineStore"]

logger = logging.getLogger(__name__)

conf = ConfigLoader.get_lazily_loaded_config()


class PipelineStore:
    """
    Holds the live pipeline document and keeps it persisted.

    The whole document is the unit of storage: every mutation writes the
    complete document to the backend slot named by ``storage_key``. Mutations
    are serialized, so concurrent callers always persist a coherent snapshot.
    """

    def __init__(
        self,
        backend: DocumentStoreBackendBase,
        storage_key: typing.Optional[str] = None,
    ):
        self.backend = backend
        self.storage_key = storage_key or conf.get("STORAGE_KEY", default=STORAGE_KEY)
        self._lock = threading.RLock()
        self._document = self._empty_document()

    @classmethod
    def from_config(cls, storage_key: typing.Optional[str] = None) -> "PipelineStore":
        """Build a store using the backend named in PIPELINE_STORE_CONFIG."""
        backend_config = conf.get("PIPELINE_STORE_CONFIG")
        try:
            backend_klass = import_string(backend_config["ENGINE"])
        except (ImportError, KeyError) as e:
            logger.error(f"Error importing store backend {backend_config}: {e}")
            raise ImproperlyConfigured(
                f"Error importing store backend {backend_config}: {e}"
            ) from e
        backend = backend_klass(**backend_config.get("OPTIONS", {}))
        store = cls(backend, storage_key=storage_key)
        store.load()
        return store

    @staticmethod
    def _empty_document(
        config: typing.Optional[PipelineConfig] = None,
    ) -> PipelineDocument:
        return PipelineDocument(config=config or PipelineConfig())

    @property
    def document(self) -> PipelineDocument:
        return self._document

    @property
    def config(self) -> PipelineConfig:
        return self._document.config

    def load(self) -> PipelineDocument:
        """
        Read the document from the backend. An empty slot yields an empty
        document with the default config.
        """
        with self._lock:
            payload = self.backend.read(self.storage_key)
            if payload is None:
                self._document = self._empty_document()
            else:
                self._document = PipelineDocument.from_json(payload)
            return self._document

    def save(self, document: typing.Optional[PipelineDocument] = None):
        """
        Persist ``document`` (or the current document) and make it current.
        The in-memory document only changes once the backend write succeeds.
        """
        with self._lock:
            if document is None:
                document = self._document
            self.backend.write(self.storage_key, document.as_json(indent=None))
            self._document = document

    def replace(self, document: PipelineDocument):
        """Swap the whole document for ``document`` and persist it."""
        if document.config is None:
            document = document.with_config(PipelineConfig())
        self.save(document)

    def new_pipeline(self, config: PipelineConfig) -> PipelineDocument:
        self.replace(self._empty_document(config))
        return self._document

    def _draft(self) -> PipelineDocument:
        return self._document.model_copy(deep=True)

    def _ensure_configured(self):
        if not self.config.is_configured:
            raise PipelineNotConfigured(
                "Please create a new pipeline first", code="not_configured"
            )

    @staticmethod
    def _get_node(document: PipelineDocument, event_id: str) -> EventNode:
        node = document.get_node(event_id)
        if node is None:
            raise EventDoesNotExist(
                f"Event '{event_id}' does not exist", params={"event_id": event_id}
            )
        return node

    @staticmethod
    def _check_name(name: str):
        if not is_pointy_identifier(name):
            logger.warning(
                f"Event name '{name}' is not a pointy identifier, "
                f"it will not survive a pointy export"
            )

    def add_event(
        self,
        name: typing.Optional[str] = None,
        code: typing.Optional[str] = None,
        position: typing.Optional[Position] = None,
    ) -> PipelineEvent:
        with self._lock:
            self._ensure_configured()
            if name is None:
                name = conf.get("DEFAULT_EVENT_NAME", default=DEFAULT_EVENT_NAME)
            if code is None:
                code = conf.get("DEFAULT_EVENT_CODE", default=DEFAULT_EVENT_CODE)
            event = PipelineEvent(id=generate_event_id(), name=name, code=code)
            self._check_name(event.name)
            if position is None:
                position = Position(x=100, y=100)
            document = self._draft()
            document.nodes.append(EventNode.for_event(event, position))
            self.save(document)
            return event

    def rename_event(self, event_id: str, name: str) -> PipelineEvent:
        with self._lock:
            document = self._draft()
            node = self._get_node(document, event_id)
            self._check_name(name)
            node.event.name = name
            self.save(document)
            return node.event

    def update_event_code(self, event_id: str, code: str) -> typing.List[str]:
        """
        Store new code for an event. The code is validated first; warnings
        are logged and returned but never prevent saving.
        """
        with self._lock:
            document = self._draft()
            node = self._get_node(document, event_id)
            warnings = validate_code(code)
            if warnings:
                logger.warning(
                    f"Python code validation errors for event '{node.event.name}': "
                    f"{warnings}"
                )
            node.event.code = code
            self.save(document)
            return warnings

    def move_event(self, event_id: str, position: Position):
        with self._lock:
            document = self._draft()
            self._get_node(document, event_id).position = position
            self.save(document)

    def remove_events(self, *event_ids: str):
        """Remove events together with every connection touching them."""
        with self._lock:
            removed = set(event_ids)
            document = self._draft()
            document.nodes = [node for node in document.nodes if node.id not in removed]
            document.edges = [
                edge
                for edge in document.edges
                if edge.source not in removed and edge.target not in removed
            ]
            self.save(document)

    def connect(self, source: str, target: str) -> Connection:
        with self._lock:
            document = self._draft()
            self._get_node(document, source)
            self._get_node(document, target)
            connection = Connection(
                id=generate_connection_id(
                    source, target, (edge.id for edge in document.edges)
                ),
                source=source,
                target=target,
            )
            document.edges.append(connection)
            self.save(document)
            return connection

    def disconnect(self, connection_id: str):
        with self._lock:
            if self._document.get_connection(connection_id) is None:
                raise ConnectionDoesNotExist(
                    f"Connection '{connection_id}' does not exist",
                    params={"connection_id": connection_id},
                )
            document = self._draft()
            document.edges = [edge for edge in document.edges if edge.id != connection_id]
            self.save(document)

    def export_json(self, indent: typing.Optional[int] = 2) -> str:
        with self._lock:
            return self._document.as_json(indent=indent)

    def import_json(self, text: typing.Union[str, bytes]) -> PipelineDocument:
        """
        Replace the document with one read from interchange JSON. On failure
        the current document is left as it was.
        """
        try:
            document = PipelineDocument.from_json(text)
        except InvalidPipelineDocument as e:
            logger.error(f"Failed to import pipeline: {e}")
            raise
        self.replace(document)
        return self._document

    def export_pointy(self) -> str:
        with self._lock:
            return compile_pointy(self._document)

    def import_pointy(self, text: str, strict: bool = False) -> PipelineDocument:
        """Replace events and connections from pointy text, keeping the config."""
        with self._lock:
            document = parse_pointy(text, strict=strict)
            self.replace(document.with_config(self.config))
            return self._document

    def export_filename(self, extension: str = "json") -> str:
        return f"{self.config.name or 'pipeline'}.{extension}"

    def close(self):
        self.backend.close()
