"""
Suffix array files have the following layout, all little-endian:

    u64 count                 number of entries
    u8  width                 bytes per entry, 4 or 8
    count * width bytes       the entries, as signed integers
"""

import logging
import os
import struct
from typing import Optional

import numpy as np

from .datatypes import IndexWidth, Pathlike, SuffixArray
from .errors import FormatError

_logger = logging.getLogger(__name__)

_HEADER = struct.Struct("<QB")
HEADER_SIZE = _HEADER.size  # 9


def write_suffix_array(
    path: Pathlike,
    suffix_array: SuffixArray,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Save a suffix array to ``path``, overwriting it if it exists."""
    logger = logger or _logger
    width = suffix_array.width
    indices = np.ascontiguousarray(suffix_array.indices, dtype=width.dtype)

    with open(path, "wb") as f:
        f.write(_HEADER.pack(indices.size, width.value))
        f.write(indices.tobytes())

    logger.info(
        f"wrote {indices.size} entries of {width.value} bytes to {path}"
    )


def read_suffix_array(path: Pathlike) -> SuffixArray:
    """Load a suffix array saved by :func:`write_suffix_array`.

    Raises:
      FormatError if the header is truncated, the width is neither 4 nor 8,
      or the size of the payload does not match the header.
    """
    file_size = os.path.getsize(path)
    with open(path, "rb") as f:
        header = f.read(HEADER_SIZE)
        if len(header) != HEADER_SIZE:
            raise FormatError(
                f"{path}: expected a {HEADER_SIZE}-byte header, "
                f"but the file has only {file_size} bytes"
            )
        count, width_in_bytes = _HEADER.unpack(header)
        try:
            width = IndexWidth(width_in_bytes)
        except ValueError:
            raise FormatError(
                f"{path}: invalid element width {width_in_bytes}, "
                "expected 4 or 8"
            ) from None

        payload_size = file_size - HEADER_SIZE
        if payload_size != count * width.value:
            raise FormatError(
                f"{path}: header declares {count} entries of {width.value} "
                f"bytes, but {payload_size} bytes follow"
            )
        indices = np.frombuffer(f.read(payload_size), dtype=width.dtype)

    return SuffixArray(indices=indices)
