"""
psd-layer-extractor: export the layers of a Photoshop document as PNG files.

Every visible layer of a PSD/PSB file becomes a standalone PNG image, named
after its position in the group hierarchy. Layers inside group ``UI`` named
``Button`` are written as ``UI_Button.png``.

Basic usage::

    from psd_layer_extractor import LayerExtractor
    from psd_layer_extractor.writer import write_layers

    summary = LayerExtractor().extract_bytes('example.psd')
    write_layers(summary.exported, './output')

Architecture:

- :py:mod:`psd_layer_extractor.tree`: Node model and depth-first traversal
- :py:mod:`psd_layer_extractor.naming`: Output file naming
- :py:mod:`psd_layer_extractor.exporter`: Per-layer encoding with failure isolation
- :py:mod:`psd_layer_extractor.extractor`: The extraction pipeline
- :py:mod:`psd_layer_extractor.source`: psd-tools document source
- :py:mod:`psd_layer_extractor.writer`: Writing PNG files and ZIP archives
"""

from psd_layer_extractor.extractor import LayerExtractor, RunSummary, extract_layers
from psd_layer_extractor.version import __version__

__all__ = ["LayerExtractor", "RunSummary", "extract_layers", "__version__"]
