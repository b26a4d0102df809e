"""
Layer tree model.

This module defines the node model the extractor works on, independent of
the parser that produced it. A document is a closed set of node variants:

- :py:class:`Root`: the document itself, holding top-level children.
- :py:class:`Group`: a named folder holding children.
- :py:class:`Layer`: a named raster layer with a visibility flag, a
  bounding box and a :py:class:`RasterHandle` to obtain its pixels.

Traversal is depth-first pre-order; siblings keep the order of the source
tree. Each visited node is paired with its path, the tuple of ancestor group
names from the root down to (and excluding) the node itself::

    from psd_layer_extractor.tree import walk

    for node, path in walk(root):
        print("/".join(path + (node.name,)))
"""

import logging
from typing import Callable, Iterator, Optional, Protocol, Union

from attrs import define, field
from PIL import Image

logger = logging.getLogger(__name__)

Path = tuple[str, ...]


class RasterHandle(Protocol):
    """
    Access to the pixels of a single layer.

    Handles may additionally provide ``encode_fallback(surface) -> bytes``,
    which is tried once when :py:meth:`encode` fails.
    """

    def surface(self) -> Optional[Image.Image]:
        """Return the raster surface, or `None` if the layer has no pixels."""
        ...

    def encode(self, surface: Image.Image) -> bytes:
        """Encode the surface to image bytes. Raises on failure."""
        ...


@define(frozen=True)
class Layer:
    """Raster layer."""

    name: str
    visible: bool = True
    bbox: tuple[int, int, int, int] = (0, 0, 0, 0)
    handle: Optional[RasterHandle] = field(default=None, eq=False, repr=False)

    kind = "layer"

    @property
    def width(self) -> int:
        return self.bbox[2] - self.bbox[0]

    @property
    def height(self) -> int:
        return self.bbox[3] - self.bbox[1]


@define(frozen=True)
class Group:
    """Named folder of layers and groups."""

    name: str
    children: tuple["Node", ...] = field(default=(), converter=tuple)

    kind = "group"


@define(frozen=True)
class Root:
    """
    Document root.

    :param children: top-level nodes in document order.
    :param size: optional (width, height) of the document.
    :param color_mode: optional color mode name of the document.
    """

    children: tuple["Node", ...] = field(default=(), converter=tuple)
    size: Optional[tuple[int, int]] = None
    color_mode: Optional[str] = None

    kind = "root"


Node = Union[Root, Group, Layer]


@define(frozen=True)
class ExportableUnit:
    """A visible layer together with the names of its ancestor groups."""

    layer: Layer
    path: Path = ()

    @property
    def name(self) -> str:
        return self.layer.name


def walk(root: Root) -> Iterator[tuple[Union[Group, Layer], Path]]:
    """
    Return a generator over every group and layer below `root`.

    Groups are yielded before their children. The generator is not
    restartable; call :py:func:`walk` again for another pass.
    """
    yield from _walk_children(root.children, ())


def _walk_children(
    children: tuple[Node, ...], path: Path
) -> Iterator[tuple[Union[Group, Layer], Path]]:
    for child in children:
        if isinstance(child, Group):
            yield child, path
            yield from _walk_children(child.children, path + (child.name,))
        elif isinstance(child, Layer):
            yield child, path
        else:
            raise TypeError("Unexpected node in layer tree: %r" % (child,))


def is_exportable(node: Node) -> bool:
    """
    Return True if the node may be exported.

    Only visible layers are exportable. Visibility of ancestor groups is not
    taken into account.
    """
    return isinstance(node, Layer) and node.visible


def iter_units(
    root: Root, on_skip: Optional[Callable[[Layer, Path], None]] = None
) -> Iterator[ExportableUnit]:
    """
    Return a generator of exportable units in traversal order.

    :param on_skip: called with ``(layer, path)`` for every hidden layer.
    """
    for node, path in walk(root):
        if not isinstance(node, Layer):
            logger.debug(
                "group %r at %r (%d children)", node.name, path, len(node.children)
            )
            continue
        logger.debug(
            "layer %r visible=%s offset=(%d, %d) size=%dx%d",
            node.name,
            node.visible,
            node.bbox[0],
            node.bbox[1],
            node.width,
            node.height,
        )
        if is_exportable(node):
            yield ExportableUnit(node, path)
        elif on_skip is not None:
            on_skip(node, path)


def count_layers(root: Root) -> int:
    """Number of layers in the tree, hidden ones included."""
    return sum(1 for node, _ in walk(root) if isinstance(node, Layer))
