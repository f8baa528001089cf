from .pointy import compile_pointy
from .dot import generate_dot_from_document, draw_graphviz_image
