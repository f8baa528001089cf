import abc
import typing


class DocumentStoreBackendBase(abc.ABC):
    """
    Named slots holding serialized pipeline documents. A slot holds the whole
    document; there are no partial updates.
    """

    def __init__(self, **options):
        self.options = options

    def close(self):
        pass

    @abc.abstractmethod
    def read(self, key: str) -> typing.Optional[str]:
        raise NotImplementedError

    @abc.abstractmethod
    def write(self, key: str, payload: str):
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, key: str):
        raise NotImplementedError

    def exists(self, key: str) -> bool:
        return self.read(key) is not None
