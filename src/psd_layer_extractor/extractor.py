"""
Layer extraction pipeline.

:py:class:`LayerExtractor` walks a document tree, exports every visible
layer one at a time, and collects the outcomes into a :py:class:`RunSummary`.
Hidden layers, layers without pixels and layers that fail to encode are
reported through logging and the optional callbacks; they never abort the
run. Only a document that cannot be loaded is fatal.

Example::

    from psd_layer_extractor import LayerExtractor

    def progress(current, total):
        print('%d/%d' % (current, total))

    extractor = LayerExtractor(progress_callback=progress)
    with open('example.psd', 'rb') as f:
        summary = extractor.extract_bytes(f.read())

    for layer in summary.exported:
        print(layer.name, layer.size)
"""

import logging
import os
from typing import Any, BinaryIO, Callable, Optional, Union

from attrs import define, field

from psd_layer_extractor.exporter import (
    ExportResult,
    Exported,
    Failed,
    Skipped,
    export_unit,
)
from psd_layer_extractor.naming import resolve_name
from psd_layer_extractor.source import load_document
from psd_layer_extractor.tree import Layer, Path, Root, count_layers, iter_units

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
LogCallback = Callable[[str], None]


@define
class RunSummary:
    """
    Outcome of one extraction run.

    .. py:attribute:: exported

        Successful exports in traversal order.

    .. py:attribute:: failed

        Layers that could not be encoded.

    .. py:attribute:: skipped

        Visible layers that had nothing to export.

    .. py:attribute:: attempted

        Number of visible layers processed.
    """

    exported: list[Exported] = field(factory=list)
    failed: list[Failed] = field(factory=list)
    skipped: list[Skipped] = field(factory=list)
    attempted: int = 0
    _results: list[Union[Exported, Failed]] = field(factory=list, repr=False)

    @property
    def success_count(self) -> int:
        return len(self.exported)

    @property
    def results(self) -> list[Union[Exported, Failed]]:
        """Successes and failures in traversal order."""
        return list(self._results)

    def add(self, result: ExportResult) -> None:
        self.attempted += 1
        if isinstance(result, Exported):
            self.exported.append(result)
            self._results.append(result)
        elif isinstance(result, Failed):
            self.failed.append(result)
            self._results.append(result)
        else:
            self.skipped.append(result)


class LayerExtractor:
    """
    Extract visible layers of a document as PNG images.

    :param progress_callback: called with ``(current, total)`` after each
        visible layer has been processed.
    :param log_callback: called with every human-readable log message, in
        addition to :py:mod:`logging`.
    """

    def __init__(
        self,
        progress_callback: Optional[ProgressCallback] = None,
        log_callback: Optional[LogCallback] = None,
    ):
        self.progress_callback = progress_callback
        self.log_callback = log_callback

    def log(self, message: str, level: int = logging.INFO) -> None:
        logger.log(level, message)
        if self.log_callback is not None:
            self.log_callback(message)

    def _update_progress(self, current: int, total: int) -> None:
        if self.progress_callback is not None:
            self.progress_callback(current, total)

    def _skip_hidden(self, layer: Layer, path: Path) -> None:
        self.log('Skipping hidden layer "%s"' % "/".join(path + (layer.name,)))

    def extract_bytes(
        self, fp: Union[BinaryIO, bytes, str, os.PathLike], **kwargs: Any
    ) -> RunSummary:
        """
        Load a document and extract its layers.

        :param fp: raw document bytes, filename, or file-like object.
        :param kwargs: passed to :py:func:`~psd_layer_extractor.source.load_document`.
        :raises SourceUnavailableError: if the document cannot be loaded.
        """
        self.log("Loading document...")
        try:
            root = load_document(fp, **kwargs)
        except Exception as e:
            self.log("Failed to load document: %s" % e, logging.ERROR)
            raise
        return self.extract(root)

    def extract(self, root: Root) -> RunSummary:
        """
        Extract every visible layer of `root`.

        :return: :py:class:`RunSummary`
        """
        if root.size is not None:
            self.log(
                "Document size: %dx%d px, color mode: %s"
                % (root.size[0], root.size[1], root.color_mode)
            )
        units = list(iter_units(root, on_skip=self._skip_hidden))
        total = len(units)
        if count_layers(root) == 0:
            self.log("No layers found")
        self.log("Found %d visible layers" % total)

        summary = RunSummary()
        for index, unit in enumerate(units, 1):
            name = resolve_name(unit.path, unit.name, default="Layer_%d" % index)
            self.log('Processing layer "%s"...' % name, logging.DEBUG)
            result = export_unit(unit, name)
            summary.add(result)
            if isinstance(result, Exported):
                self.log('Converted layer "%s" (%d bytes)' % (name, result.size))
            elif isinstance(result, Skipped):
                self.log('Skipping layer "%s": %s' % (name, result.reason))
            else:
                self.log(
                    'Failed to convert layer "%s": %s' % (name, result.error),
                    logging.WARNING,
                )
            self._update_progress(index, total)

        self.log(
            "Done: extracted %d of %d layers"
            % (summary.success_count, summary.attempted)
        )
        return summary


def extract_layers(
    fp: Union[BinaryIO, bytes, str, os.PathLike], **kwargs: Any
) -> list[Exported]:
    """
    Return the successfully exported layers of a document.

    Shortcut for :py:meth:`LayerExtractor.extract_bytes` without callbacks.
    """
    return LayerExtractor().extract_bytes(fp, **kwargs).exported
