"""
Readers for the three supported input encodings:

  - dna: FASTA or FASTQ (optionally gzip compressed). Only the first
    record is used.
  - text: any file; its bytes are used verbatim.
  - integer: a binary file of integer tokens with the layout

        u64 n            (little-endian)
        u64 max_token    (little-endian)
        n tokens         (little-endian int32, or int64 if n or max_token
                          is >= 2**31 - 1)
"""

import gzip
import io
import logging
import os
from typing import IO, Optional, Tuple, Union

import numpy as np
from Bio import SeqIO

from .datatypes import InputKind, IntegerSequence, Pathlike, Sequence
from .errors import FormatError
from .width import select_width

_logger = logging.getLogger(__name__)

# n and max_token
INTEGER_HEADER_SIZE = 16

_GZIP_MAGIC = b"\x1f\x8b"

# Every byte maps to one character, so decoding never fails and
# re-encoding gives back the bytes of the file.
_RECORD_ENCODING = "latin-1"


def _is_gzipped(path: Pathlike) -> bool:
    with open(path, "rb") as f:
        return f.read(2) == _GZIP_MAGIC


def _open_text(path: Pathlike) -> IO[str]:
    if _is_gzipped(path):
        return gzip.open(path, "rt", encoding=_RECORD_ENCODING)
    return open(path, "rt", encoding=_RECORD_ENCODING)


def _detect_record_format(path: Pathlike) -> str:
    """Return "fastq" if the first non-blank line starts with '@',
    else "fasta"."""
    with _open_text(path) as f:
        for line in f:
            line = line.strip()
            if line:
                return "fastq" if line.startswith("@") else "fasta"
    return "fasta"


def _split_first_record(f: IO[str], fmt: str) -> Tuple[str, bool]:
    """Read the lines of the first record.

    Reading stops at the first line of the next record, which is not
    parsed.

    Returns:
      Return a tuple (text, has_more). ``text`` contains the lines of the
      first record and ``has_more`` is True if another record follows.
    """
    lines = []
    if fmt == "fasta":
        num_headers = 0
        for line in f:
            if line.startswith(">"):
                num_headers += 1
                if num_headers == 2:
                    return "".join(lines), True
            lines.append(line)
        return "".join(lines), False

    assert fmt == "fastq", fmt
    # A FASTQ record may span several lines; it ends once the quality
    # string is as long as the sequence.
    state = "header"
    seq_len = qual_len = 0
    for line in f:
        stripped = line.strip()
        if state == "header":
            if stripped.startswith("@"):
                state = "seq"
        elif state == "seq":
            if stripped.startswith("+"):
                state = "qual"
            else:
                seq_len += len(stripped)
        elif state == "qual":
            qual_len += len(stripped)
            if qual_len >= seq_len:
                state = "done"
        elif stripped:
            return "".join(lines), True
        lines.append(line)
    return "".join(lines), False


def load_dna(
    path: Pathlike, logger: Optional[logging.Logger] = None
) -> Sequence:
    """Load the sequence of the first record of a FASTA/FASTQ file.

    Generalized suffix arrays are not supported, so if the file contains
    more than one record, the remaining records are neither parsed nor
    used and a warning is logged.

    Args:
      path:
        Path to the FASTA/FASTQ file. It may be gzip compressed.
      logger:
        Where to send diagnostics. Defaults to the module logger.
    Returns:
      Return the letters of the first record as a byte sequence.
    Raises:
      FormatError if the file does not start with a well-formed record.
    """
    logger = logger or _logger
    fmt = _detect_record_format(path)

    with _open_text(path) as f:
        text, has_more = _split_first_record(f, fmt)

    try:
        first = SeqIO.read(io.StringIO(text), fmt)
    except ValueError as e:
        raise FormatError(f"No well-formed {fmt} record in {path}: {e}") from e

    if has_more:
        logger.warning(
            f"{path} contains more than one record; only the first one "
            f"({first.id}) is used, the others are ignored."
        )

    seq = Sequence.from_bytes(str(first.seq).encode(_RECORD_ENCODING))
    logger.info(f"genome size is : {len(seq)}")
    return seq


def load_text(
    path: Pathlike, logger: Optional[logging.Logger] = None
) -> Sequence:
    """Load the whole content of a file as a byte sequence."""
    logger = logger or _logger
    seq = Sequence(data=np.fromfile(path, dtype=np.uint8))
    logger.info(f"text size is : {len(seq)}")
    return seq


def load_integer(
    path: Pathlike, logger: Optional[logging.Logger] = None
) -> IntegerSequence:
    """Load an integer token file. See the module docstring for the layout.

    Raises:
      FormatError if the header is truncated, if the number of tokens in
      the header does not match the size of the file, or if a token is
      outside of ``[0, max_token]``.
    """
    logger = logger or _logger
    file_size = os.path.getsize(path)

    with open(path, "rb") as f:
        header = f.read(INTEGER_HEADER_SIZE)
        if len(header) != INTEGER_HEADER_SIZE:
            raise FormatError(
                f"{path}: expected a {INTEGER_HEADER_SIZE}-byte header, "
                f"but the file has only {file_size} bytes"
            )
        n, max_token = (int(v) for v in np.frombuffer(header, dtype="<u8"))

        # Width of the tokens on disk. It follows the same rule as the
        # index width but is a property of the file format.
        width = select_width(n, max_token)

        payload_size = file_size - INTEGER_HEADER_SIZE
        if payload_size != n * width.value:
            raise FormatError(
                f"{path}: header declares {n} tokens of {width.value} bytes "
                f"({n * width.value} bytes), but {payload_size} bytes follow"
            )
        tokens = np.frombuffer(f.read(payload_size), dtype=width.dtype)

    if n > 0:
        lo, hi = int(tokens.min()), int(tokens.max())
        if lo < 0 or hi > max_token:
            raise FormatError(
                f"{path}: tokens must lie in [0, {max_token}], "
                f"found values in [{lo}, {hi}]"
            )

    logger.info(
        f"integer sequence size is : {n}, max token: {max_token}, "
        f"token width on disk: {width.value} bytes"
    )
    return IntegerSequence(tokens=tokens, max_token=max_token)


def load_input(
    path: Pathlike,
    kind: InputKind,
    logger: Optional[logging.Logger] = None,
) -> Union[Sequence, IntegerSequence]:
    if kind == InputKind.DNA:
        return load_dna(path, logger=logger)
    elif kind == InputKind.TEXT:
        return load_text(path, logger=logger)
    else:
        assert kind == InputKind.INTEGER, kind
        return load_integer(path, logger=logger)


def write_integer_file(
    path: Pathlike, tokens: np.ndarray, max_token: Optional[int] = None
) -> None:
    """Save tokens in the format read by :func:`load_integer`.

    Args:
      path:
        The file to write.
      tokens:
        A 1-D array of non-negative integers.
      max_token:
        Value saved in the header. If None, ``tokens.max()`` is used
        (0 for an empty array).
    """
    tokens = np.asarray(tokens)
    assert tokens.ndim == 1, tokens.ndim
    if max_token is None:
        max_token = int(tokens.max()) if tokens.size else 0

    width = select_width(tokens.size, max_token)
    header = np.array([tokens.size, max_token], dtype="<u8")
    with open(path, "wb") as f:
        f.write(header.tobytes())
        f.write(np.ascontiguousarray(tokens, dtype=width.dtype).tobytes())
