import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np

Pathlike = Union[str, Path]


class InputKind(enum.Enum):
    DNA = "dna"
    TEXT = "text"
    INTEGER = "integer"

    @staticmethod
    def from_str(s: str) -> "InputKind":
        """Case-insensitive lookup, e.g. ``"DNA"``, ``"text"``."""
        try:
            return InputKind(s.lower())
        except ValueError:
            choices = ", ".join(k.value for k in InputKind)
            raise ValueError(
                f"Unknown input type '{s}', expected one of: {choices}"
            ) from None


class IndexWidth(enum.Enum):
    """
    Width of the integers used for suffix array entries and, for integer
    alphabets, for the tokens. The value is the number of bytes per element.
    """

    NARROW = 4
    WIDE = 8

    @property
    def bits(self) -> int:
        return self.value * 8

    @property
    def dtype(self) -> np.dtype:
        # Always little-endian so that files are portable between hosts.
        return np.dtype(f"<i{self.value}")

    @staticmethod
    def from_dtype(dtype) -> "IndexWidth":
        dtype = np.dtype(dtype)
        if dtype.kind != "i" or dtype.itemsize not in (4, 8):
            raise ValueError(f"Unsupported index dtype: {dtype}")
        return IndexWidth(dtype.itemsize)


def _read_only(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


@dataclass
class Sequence:
    """
    A byte sequence, i.e., the genome of a DNA record or the raw
    contents of a text file.
    """

    # A 1-D np.uint8 array. It is made read-only on construction.
    data: np.ndarray

    def __post_init__(self):
        assert self.data.ndim == 1, self.data.ndim
        assert self.data.dtype == np.uint8, self.data.dtype
        _read_only(self.data)

    def __len__(self) -> int:
        return self.data.size

    @staticmethod
    def from_bytes(b: bytes) -> "Sequence":
        return Sequence(data=np.frombuffer(b, dtype=np.uint8))


@dataclass
class IntegerSequence:
    """
    A sequence of non-negative integer tokens. The alphabet is expected to
    be compact already, i.e., tokens lie in ``[0, max_token]``.
    """

    # A 1-D np.int32 or np.int64 array. It is made read-only on construction.
    tokens: np.ndarray

    # The largest token value. It is taken from the input file header
    # and is not recomputed from ``tokens``.
    max_token: int

    def __post_init__(self):
        assert self.tokens.ndim == 1, self.tokens.ndim
        assert self.tokens.dtype.kind == "i", self.tokens.dtype
        assert self.max_token >= 0, self.max_token
        _read_only(self.tokens)

    def __len__(self) -> int:
        return self.tokens.size


@dataclass
class SuffixArray:
    """
    A permutation of ``0 .. n - 1`` ordering the suffixes of a sequence
    lexicographically.
    """

    # A 1-D np.int32 or np.int64 array.
    indices: np.ndarray

    @property
    def width(self) -> IndexWidth:
        return IndexWidth.from_dtype(self.indices.dtype)

    def __len__(self) -> int:
        return self.indices.size


@dataclass
class PipelineConfig:
    """Everything needed for one run of :func:`sadriver.pipeline.run`."""

    input_kind: InputKind
    input_path: Pathlike
    output_path: Pathlike
    threads: int = 4

    def __post_init__(self):
        if isinstance(self.input_kind, str):
            self.input_kind = InputKind.from_str(self.input_kind)
        if self.threads < 1:
            raise ValueError(f"threads must be >= 1, given {self.threads}")
