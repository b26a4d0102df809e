"""
Document source backed by psd-tools.

Opens PSD/PSB documents with :py:class:`psd_tools.PSDImage` and converts the
reconstructed layer tree into :py:mod:`psd_layer_extractor.tree` nodes. Pixel
access is deferred to :py:class:`PSDLayerHandle`, so a document is only
rasterized layer by layer as the extractor asks for it.

Example::

    from psd_layer_extractor.source import load_document

    root = load_document('example.psd')
"""

import io
import logging
import os
from typing import Any, BinaryIO, Iterable, Optional, Union

from PIL import Image
from psd_tools import PSDImage

from psd_layer_extractor.exporter import EncodeError
from psd_layer_extractor.tree import Group, Layer, Node, Root

logger = logging.getLogger(__name__)


class SourceUnavailableError(Exception):
    """Raised when a document cannot be opened or parsed."""


class PSDLayerHandle:
    """
    Raster handle for a psd-tools layer.

    :param layer: :py:class:`psd_tools.api.layers.Layer` object.
    :param apply_icc: Whether to apply ICC profile conversion to sRGB.
    """

    def __init__(self, layer: Any, apply_icc: bool = True):
        self._layer = layer
        self._apply_icc = apply_icc

    def surface(self) -> Optional[Image.Image]:
        return self._layer.topil(apply_icc=self._apply_icc)

    def encode(self, surface: Image.Image) -> bytes:
        return _save_png(surface)

    def encode_fallback(self, surface: Image.Image) -> bytes:
        """Encode after converting to RGBA, for modes PNG cannot hold."""
        try:
            converted = surface.convert("RGBA")
        except (OSError, ValueError) as e:
            raise EncodeError(
                "Cannot convert %s image to RGBA: %s" % (surface.mode, e)
            ) from e
        return _save_png(converted)

    def __repr__(self) -> str:
        return "%s(%r)" % (self.__class__.__name__, self._layer)


def _save_png(image: Image.Image) -> bytes:
    with io.BytesIO() as f:
        try:
            image.save(f, format="PNG")
        except (OSError, ValueError, KeyError) as e:
            raise EncodeError(
                "Cannot encode %s image as PNG: %s" % (image.mode, e)
            ) from e
        return f.getvalue()


def load_document(
    fp: Union[BinaryIO, bytes, str, os.PathLike],
    encoding: str = "macroman",
    **kwargs: Any,
) -> Root:
    """
    Open a PSD document and return its layer tree.

    :param fp: filename, raw document bytes, or file-like object.
    :param encoding: charset encoding of the pascal strings within the file.
    :param apply_icc: passed to every :py:class:`PSDLayerHandle`.
    :raises SourceUnavailableError: if the document cannot be loaded.
    :return: :py:class:`~psd_layer_extractor.tree.Root`
    """
    if isinstance(fp, (bytes, bytearray, memoryview)):
        fp = io.BytesIO(fp)
    try:
        psdimage = PSDImage.open(fp, encoding=encoding)
    except Exception as e:
        raise SourceUnavailableError("Cannot load document: %s" % (e,)) from e
    logger.debug("opened %r", psdimage)
    return build_tree(psdimage, **kwargs)


def build_tree(psdimage: Any, apply_icc: bool = True) -> Root:
    """
    Convert a psd-tools layer tree into a :py:class:`Root`.

    :param psdimage: :py:class:`psd_tools.PSDImage`, or any iterable of
        psd-tools-like layers.
    """
    size = getattr(psdimage, "size", None)
    color_mode = getattr(psdimage, "color_mode", None)
    return Root(
        _convert(psdimage, apply_icc),
        size=tuple(size) if size is not None else None,
        color_mode=getattr(color_mode, "name", color_mode),
    )


def _convert(layers: Iterable[Any], apply_icc: bool) -> list[Node]:
    nodes: list[Node] = []
    for layer in layers:
        if layer.is_group():
            nodes.append(Group(layer.name, _convert(layer, apply_icc)))
        else:
            nodes.append(
                Layer(
                    layer.name,
                    visible=bool(layer.visible),
                    bbox=tuple(layer.bbox),
                    handle=PSDLayerHandle(layer, apply_icc=apply_icc),
                )
            )
    return nodes
