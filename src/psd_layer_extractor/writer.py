"""
Writing exported layers to disk.
"""

import logging
import os
import zipfile
from typing import Iterable, Union

from psd_layer_extractor.exporter import Exported

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_NAME = "psd-layers.zip"

_UNITS = ("Bytes", "KB", "MB", "GB")


def format_size(size: int) -> str:
    """
    Human readable byte size.

    Example::

        >>> format_size(1536)
        '1.5 KB'
    """
    if size <= 0:
        return "0 Bytes"
    exponent = 0
    while exponent < len(_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = round(size / 1024**exponent, 2)
    return "%s %s" % ("%g" % value, _UNITS[exponent])


def filename(layer: Exported) -> str:
    return "%s.png" % layer.name


def write_layers(
    layers: Iterable[Exported], output_dir: Union[str, os.PathLike]
) -> int:
    """
    Write each layer to ``<output_dir>/<name>.png``.

    Files with the same name overwrite each other. A failing write is logged
    and does not stop the remaining ones.

    :return: number of files written.
    """
    os.makedirs(output_dir, exist_ok=True)
    saved = 0
    for layer in layers:
        path = os.path.join(output_dir, filename(layer))
        try:
            with open(path, "wb") as f:
                f.write(layer.data)
        except (OSError, ValueError) as e:
            logger.error("Failed to save %s: %s", layer.name, e)
            continue
        saved += 1
        logger.info("Saved %s (%s)", path, format_size(layer.size))
    return saved


def write_archive(
    layers: Iterable[Exported], path: Union[str, os.PathLike] = DEFAULT_ARCHIVE_NAME
) -> int:
    """
    Bundle the layers as ``<name>.png`` entries of a ZIP archive.

    Layers with the same name keep only the last one, as with
    :py:func:`write_layers`.

    :return: number of entries written.
    """
    entries: dict[str, bytes] = {}
    for layer in layers:
        entries[filename(layer)] = layer.data
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    logger.info("Wrote %s with %d layers", path, len(entries))
    return len(entries)
