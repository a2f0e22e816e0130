"""
Input resolution for the checksum commands: literal paths or glob patterns in,
existing regular files out.

Directories and other non-regular files (FIFOs, sockets, device nodes) are skipped
rather than reported. An entry that resolves to nothing, including a symlink whose
target is gone, is recorded as a PathNotFoundError and the remaining entries are
still resolved.
"""
import glob
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, List, Sequence, Union

from services.errors import FileReadError, PathNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class PathResolution:
    """
    Attributes:
        files (List[str]): Existing regular files, in first-seen order, no duplicates.
        missing (List[PathNotFoundError]): One error per entry that matched nothing.
        entries (List[Union[str, PathNotFoundError]]): Files and errors interleaved in
            the order the input entries produced them.
    """
    files: List[str] = field(default_factory=list)
    missing: List[PathNotFoundError] = field(default_factory=list)
    entries: List[Union[str, PathNotFoundError]] = field(default_factory=list)


def _expand(entry: str, literal: bool) -> List[str]:
    if literal:
        return [entry] if os.path.exists(entry) else []

    pattern = os.path.expanduser(entry)
    if not glob.has_magic(pattern):
        return [pattern] if os.path.exists(pattern) else []
    # glob lists dangling symlinks too
    return [match for match in sorted(glob.glob(pattern, recursive=True)) if os.path.exists(match)]


def resolve_paths(paths: Sequence[str], literal: bool = False) -> PathResolution:
    """
    Resolve path specifications to concrete files.

    Args:
        paths (Sequence[str]): Literal paths or glob patterns (`*`, `?`, `[...]`, `**`).
        literal (bool): When True every entry is used verbatim and must exist.

    Returns:
        PathResolution: Resolved files plus a PathNotFoundError per unmatched entry.
    """
    resolution = PathResolution()
    seen = set()

    for entry in paths:
        matches = _expand(entry, literal)
        if not matches:
            logger.warning(f"No file or pattern match for: {entry}")
            missing = PathNotFoundError(entry)
            resolution.missing.append(missing)
            resolution.entries.append(missing)
            continue

        for match in matches:
            if os.path.isdir(match):
                logger.debug(f"Skipping directory: {match}")
                continue
            if not os.path.isfile(match):
                logger.debug(f"Skipping non-regular file: {match}")
                continue
            if match in seen:
                logger.debug(f"Skipping duplicate path: {match}")
                continue
            seen.add(match)
            resolution.files.append(match)
            resolution.entries.append(match)

    logger.info(f"Resolved {len(resolution.files)} file(s) from {len(paths)} path argument(s)")
    return resolution


@contextmanager
def open_for_hashing(path: str) -> Iterator[BinaryIO]:
    """
    Open a resolved file for reading and guarantee it is closed on every exit path.

    Raises:
        FileReadError: If the file cannot be opened, including when it was removed
            after resolution.
    """
    try:
        stream = open(path, "rb")
    except OSError as e:
        raise FileReadError(path, e) from e
    try:
        yield stream
    finally:
        stream.close()
        logger.debug(f"Closed {path}")
