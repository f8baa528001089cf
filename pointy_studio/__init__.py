__version__ = "0.1.0"

from .fields import DataType, PipelineField
from .models import (
    Connection,
    EventNode,
    PipelineConfig,
    PipelineDocument,
    PipelineEvent,
    Position,
)
from .parser import validate_code, lint_code, parse_pointy, PointyParser
from .translator import compile_pointy
from .store import PipelineStore
