import os
import typing
import logging
from io import StringIO

try:
    import graphviz
except ImportError:
    graphviz = None

from pointy_studio.models import PipelineDocument
from .pointy import resolve_event_names

__all__ = ["generate_dot_from_document", "draw_graphviz_image"]

logger = logging.getLogger(__name__)


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def generate_dot_from_document(document: PipelineDocument) -> str:
    nodes = []
    edges = []

    f = StringIO()
    f.write("digraph G {\n")
    f.write('\tnode [fontname="Helvetica", fontsize=11]\n')
    f.write('\tedge [fontname="Helvetica", fontsize=10]\n')

    names = resolve_event_names(document)
    for node_id, name in names.items():
        text = f'\t"{_escape(node_id)}" [label="{_escape(name)}"]\n'
        if text not in nodes:
            nodes.append(text)

    for edge in document.edges:
        if edge.source not in names or edge.target not in names:
            continue
        text = f'\t"{_escape(edge.source)}" -> "{_escape(edge.target)}"\n'
        if text not in edges:
            edges.append(text)

    for n in nodes:
        f.write(n)

    for edge in edges:
        f.write(edge)

    f.write("}")
    return f.getvalue()


def draw_graphviz_image(
    document: PipelineDocument,
    directory: str = "pipeline-graphs",
    filename: typing.Optional[str] = None,
) -> typing.Optional[str]:
    """
    Render the document's graph to a PNG image with Graphviz.

    Args:
        document: The pipeline document to draw.
        directory (str): Where the image is written. Defaults to "pipeline-graphs".
        filename (str): Image file name. Defaults to the pipeline name.

    Returns:
        The path of the rendered file, or None when the graphviz package is
        not installed.
    """
    if graphviz is None:
        logger.info("graphviz is not installed, skipping image rendering")
        return None
    if filename is None:
        name = document.config.name if document.config else ""
        filename = f"{name or 'pipeline'}.png"
    src = graphviz.Source(generate_dot_from_document(document), directory=directory)
    return src.render(format="png", outfile=os.path.join(directory, filename))
