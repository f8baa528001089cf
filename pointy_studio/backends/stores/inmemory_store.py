import typing
import threading

from pointy_studio.exceptions import ObjectDoesNotExist
from pointy_studio.backends.store import DocumentStoreBackendBase


class InMemoryDocumentStoreBackend(DocumentStoreBackendBase):

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        self._cursor: typing.Dict[str, str] = {}
        self._lock = threading.Lock()

    def exists(self, key: str) -> bool:
        return key in self._cursor

    def read(self, key: str) -> typing.Optional[str]:
        return self._cursor.get(key)

    def write(self, key: str, payload: str):
        with self._lock:
            self._cursor[key] = payload

    def delete(self, key: str):
        with self._lock:
            try:
                del self._cursor[key]
            except KeyError:
                raise ObjectDoesNotExist(
                    "Record '{}' does not exist in store".format(key)
                )

    def close(self):
        self._cursor.clear()
