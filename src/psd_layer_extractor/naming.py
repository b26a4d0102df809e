"""
Output file naming.
"""

import re
from typing import Iterable, Optional

_INVALID_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE = re.compile(r"\s+")
_UNDERSCORES = re.compile(r"_{2,}")

SEPARATOR = "_"


def sanitize_filename(name: str) -> str:
    """
    Make `name` safe to use as a file name.

    Characters reserved on common filesystems and runs of whitespace become
    ``_``, runs of ``_`` are collapsed, and a leading or trailing ``_`` is
    trimmed. The function is idempotent.

    Example::

        >>> sanitize_filename("a/b:c")
        'a_b_c'
        >>> sanitize_filename("  Hi  There  ")
        'Hi_There'
    """
    name = _INVALID_CHARS.sub("_", name)
    name = _WHITESPACE.sub("_", name)
    name = _UNDERSCORES.sub("_", name)
    return name.strip("_")


def resolve_name(
    path: Iterable[str], name: str, default: Optional[str] = None
) -> str:
    """
    Derive the output identifier of a layer from its ancestor groups.

    :param path: ancestor group names, outermost first.
    :param name: the layer name.
    :param default: returned when nothing is left after sanitization.
    :return: `str`, e.g. ``UI_Buttons_OK`` for layer ``OK`` in group
        ``Buttons`` in group ``UI``.
    """
    segments = [sanitize_filename(segment) for segment in (*path, name)]
    resolved = sanitize_filename(SEPARATOR.join(s for s in segments if s))
    if not resolved and default is not None:
        return default
    return resolved
