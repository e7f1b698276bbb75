"""
Lexical POSIX path algorithms.

Pure string functions, they never touch the filesystem:

- normalize: collapse separators, resolve `.` and `..`, keep leading/trailing separators
- join: concatenate segments and normalize the result
- dirname / basename / extname: derived components of a path string
"""

from typing import List

from ..constants import SEP, CURRENT_DIR, PARENT_DIR, EXT_MARK


def normalize(path: str) -> str:
    """
    Return the canonical form of ``path``.

    Runs of separators collapse into one, ``.`` segments are dropped and
    ``..`` pops the previous segment. An absolute path absorbs ``..`` at the
    root, a relative path keeps leading ``..`` it cannot resolve. A trailing
    separator on the input is kept. The empty path is ``.``.
    """
    if not path:
        return CURRENT_DIR

    is_absolute = path.startswith(SEP)
    trailing = path.endswith(SEP)

    segments: List[str] = []
    for segment in path.split(SEP):
        if not segment or segment == CURRENT_DIR:
            continue
        if segment == PARENT_DIR:
            if segments and segments[-1] != PARENT_DIR:
                segments.pop()
            elif not is_absolute:
                segments.append(PARENT_DIR)
            continue
        segments.append(segment)

    body = SEP.join(segments)
    if not body:
        if is_absolute:
            return SEP
        return CURRENT_DIR + SEP if trailing else CURRENT_DIR
    if trailing:
        body += SEP
    return SEP + body if is_absolute else body


def join(*segments: str) -> str:
    """Join non-empty segments with the separator and normalize the result."""
    return normalize(SEP.join(s for s in segments if s))


def dirname(path: str) -> str:
    """Strip the final segment. Root stays root, a bare segment yields ``.``."""
    if not path:
        return CURRENT_DIR
    has_root = path.startswith(SEP)
    stripped = path.rstrip(SEP)
    index = stripped.rfind(SEP)
    if index == -1:
        return SEP if has_root else CURRENT_DIR
    if index == 0:
        return SEP
    return stripped[:index]


def basename(path: str) -> str:
    """Return the final segment, ignoring trailing separators. Root yields ``""``."""
    stripped = path.rstrip(SEP)
    return stripped[stripped.rfind(SEP) + 1:]


def extname(path: str) -> str:
    """
    Return the extension of the final segment, including the dot.

    A leading dot does not start an extension (``.bashrc`` has none) and
    ``..`` has none either. A name ending in a dot has the extension ``.``.
    """
    name = basename(path)
    index = name.rfind(EXT_MARK)
    if index <= 0 or name == PARENT_DIR:
        return ""
    return name[index:]


def is_absolute(path: str) -> bool:
    return path.startswith(SEP)
