import argparse
import logging
import os
from typing import Optional

from psd_layer_extractor.extractor import LayerExtractor
from psd_layer_extractor.naming import resolve_name
from psd_layer_extractor.source import SourceUnavailableError, load_document
from psd_layer_extractor.tree import Group, Root, walk
from psd_layer_extractor.version import __version__
from psd_layer_extractor.writer import DEFAULT_ARCHIVE_NAME, write_archive, write_layers

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "./output"


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Extract the layers of a PSD file as PNG images."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--encoding",
        default="macroman",
        help="Text encoding of layer names [default: macroman].",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser(
        "export", help="Export every visible layer as PNG"
    )
    export_parser.add_argument("input_file", help="Input PSD file")
    export_parser.add_argument(
        "output_dir",
        nargs="?",
        default=DEFAULT_OUTPUT_DIR,
        help="Output directory [default: %s]" % DEFAULT_OUTPUT_DIR,
    )
    export_parser.add_argument(
        "--zip",
        nargs="?",
        const=DEFAULT_ARCHIVE_NAME,
        metavar="ARCHIVE",
        help="Also bundle the layers into a ZIP archive in the output directory "
        "[default name: %s]" % DEFAULT_ARCHIVE_NAME,
    )

    show_parser = subparsers.add_parser("show", help="Show the layer tree")
    show_parser.add_argument("input_file", help="Input PSD file")

    return parser.parse_args(argv)


def _progress(current: int, total: int) -> None:
    logger.info("[%d/%d] done", current, total)


def show(root: Root) -> None:
    print("Root(size=%s color_mode=%s)" % (root.size, root.color_mode))
    for node, path in walk(root):
        indent = "  " * (len(path) + 1)
        if isinstance(node, Group):
            print("%s%s/" % (indent, node.name))
        else:
            print(
                "%s%s%s -> %s.png"
                % (
                    indent,
                    node.name,
                    "" if node.visible else " (hidden)",
                    resolve_name(path, node.name),
                )
            )


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    package_logger = logging.getLogger("psd_layer_extractor")
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)

    try:
        if args.command == "export":
            extractor = LayerExtractor(progress_callback=_progress)
            summary = extractor.extract_bytes(args.input_file, encoding=args.encoding)
            saved = write_layers(summary.exported, args.output_dir)
            if args.zip:
                write_archive(summary.exported, os.path.join(args.output_dir, args.zip))
            logger.info(
                "Saved %d of %d layers to %s", saved, summary.attempted, args.output_dir
            )

        elif args.command == "show":
            show(load_document(args.input_file, encoding=args.encoding))

    except SourceUnavailableError as e:
        logger.error(str(e))
        return 1

    return None

