import typing
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, PositiveInt


class DataType(StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


class PipelineField(BaseModel):
    """
    An entry of the input mapping available to every event's code as
    ``data[name]``. Purely descriptive: values are never checked against it.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    required: bool = False
    data_type: DataType = DataType.STRING
    default: typing.Any = None
    batch_processor: typing.Optional[bool] = None
    batch_size: typing.Optional[PositiveInt] = None

    @property
    def accessor(self) -> str:
        return f"data['{self.name}']"

    @property
    def has_batch_operation(self) -> bool:
        return bool(self.batch_processor)

    def describe(self) -> str:
        parts = [self.data_type.value]
        if self.required:
            parts.append("required")
        if self.has_batch_operation:
            parts.append(f"batch[{self.batch_size}]")
        return f"({', '.join(parts)})"
