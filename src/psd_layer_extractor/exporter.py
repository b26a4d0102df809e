"""
Per-layer export.

:py:func:`export_unit` turns one :py:class:`~psd_layer_extractor.tree.ExportableUnit`
into exactly one outcome:

- :py:class:`Exported`: encoded image bytes under the resolved name.
- :py:class:`Skipped`: nothing to export (no pixels, or empty encoding).
- :py:class:`Failed`: retrieval or encoding raised on every available path.

Problems with one layer never propagate out of :py:func:`export_unit`.
"""

import logging
from typing import Union

from attrs import define

from psd_layer_extractor.tree import ExportableUnit

logger = logging.getLogger(__name__)


class EncodeError(Exception):
    """Raised by raster handles when a surface cannot be encoded."""


@define(frozen=True)
class Exported:
    name: str
    data: bytes

    @property
    def size(self) -> int:
        """Length of the encoded data in bytes."""
        return len(self.data)

    def __repr__(self) -> str:
        return "%s(name=%r size=%d)" % (self.__class__.__name__, self.name, self.size)


@define(frozen=True)
class Skipped:
    name: str
    reason: str


@define(frozen=True)
class Failed:
    name: str
    error: str


ExportResult = Union[Exported, Skipped, Failed]


def _describe(error: BaseException) -> str:
    message = str(error)
    if not message:
        return error.__class__.__name__
    return message


def export_unit(unit: ExportableUnit, name: str) -> ExportResult:
    """
    Export a single layer.

    :param unit: the layer to export.
    :param name: the resolved output name, used to label the outcome.
    :return: :py:class:`Exported`, :py:class:`Skipped` or :py:class:`Failed`.
    """
    handle = unit.layer.handle
    if handle is None:
        return Skipped(name, "no raster data")

    try:
        surface = handle.surface()
    except Exception as e:
        logger.debug("Failed to get surface of %r", unit.name, exc_info=True)
        return Failed(name, _describe(e))
    if surface is None:
        return Skipped(name, "no raster data")

    try:
        data = bytes(handle.encode(surface))
    except Exception as e:
        fallback = getattr(handle, "encode_fallback", None)
        if fallback is None:
            return Failed(name, _describe(e))
        logger.warning("Encoding %r failed: %s. Trying fallback.", unit.name, e)
        try:
            data = bytes(fallback(surface))
        except Exception as alt:
            return Failed(name, "%s (fallback: %s)" % (_describe(e), _describe(alt)))

    if not data:
        return Skipped(name, "empty image data")
    return Exported(name, data)
