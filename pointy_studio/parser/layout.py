import typing

from pointy_studio.conf import ConfigLoader
from pointy_studio.constants import (
    LAYOUT_ORIGIN_X,
    LAYOUT_ORIGIN_Y,
    LAYOUT_COLUMN_SPACING,
    LAYOUT_ROW_SPACING,
    LAYOUT_MAX_X,
)
from pointy_studio.models import Position

conf = ConfigLoader.get_lazily_loaded_config()


class GridLayout:
    """
    Row-major grid used to place events recovered from pointy text. A row
    wraps once the next column would start past ``max_x``.
    """

    def __init__(
        self,
        origin_x: float = None,
        origin_y: float = None,
        column_spacing: float = None,
        row_spacing: float = None,
        max_x: float = None,
    ):
        self.origin_x = (
            origin_x
            if origin_x is not None
            else conf.get("LAYOUT_ORIGIN_X", default=LAYOUT_ORIGIN_X)
        )
        self.origin_y = (
            origin_y
            if origin_y is not None
            else conf.get("LAYOUT_ORIGIN_Y", default=LAYOUT_ORIGIN_Y)
        )
        self.column_spacing = (
            column_spacing
            if column_spacing is not None
            else conf.get("LAYOUT_COLUMN_SPACING", default=LAYOUT_COLUMN_SPACING)
        )
        self.row_spacing = (
            row_spacing
            if row_spacing is not None
            else conf.get("LAYOUT_ROW_SPACING", default=LAYOUT_ROW_SPACING)
        )
        self.max_x = (
            max_x if max_x is not None else conf.get("LAYOUT_MAX_X", default=LAYOUT_MAX_X)
        )

    def positions(self) -> typing.Iterator[Position]:
        x, y = self.origin_x, self.origin_y
        while True:
            yield Position(x=x, y=y)
            x += self.column_spacing
            if x > self.max_x:
                x = self.origin_x
                y += self.row_spacing
