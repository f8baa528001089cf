import os
import typing
import logging
import tempfile

from pointy_studio.exceptions import ObjectDoesNotExist, ImproperlyConfigured
from pointy_studio.backends.store import DocumentStoreBackendBase

logger = logging.getLogger(__name__)


class JSONFileStoreBackend(DocumentStoreBackendBase):
    """Keeps every slot in ``<directory>/<key>.json``."""

    def __init__(self, directory: typing.Union[str, os.PathLike] = ".", **kwargs):
        super().__init__(directory=directory, **kwargs)
        self.directory = os.fspath(directory)
        if os.path.exists(self.directory) and not os.path.isdir(self.directory):
            raise ImproperlyConfigured(
                f"Store directory '{self.directory}' is not a directory"
            )

    def get_path(self, key: str) -> str:
        if not key or os.sep in key or (os.altsep and os.altsep in key):
            raise ValueError(f"Invalid store key '{key}'")
        return os.path.join(self.directory, f"{key}.json")

    def exists(self, key: str) -> bool:
        return os.path.isfile(self.get_path(key))

    def read(self, key: str) -> typing.Optional[str]:
        path = self.get_path(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def write(self, key: str, payload: str):
        path = self.get_path(key)
        os.makedirs(self.directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.directory, prefix=f".{key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, path)
        except OSError:
            logger.error(f"Writing store record '{key}' to {path} failed")
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def delete(self, key: str):
        try:
            os.unlink(self.get_path(key))
        except FileNotFoundError:
            raise ObjectDoesNotExist(
                "Record '{}' does not exist in store".format(key)
            )
