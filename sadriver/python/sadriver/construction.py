# Copyright      2023   Xiaomi Corp.       (author: Wei Kang)
#
# See ../../../LICENSE for clarification regarding multiple authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Low level suffix array construction routines.

They follow the calling convention of libsais: the caller allocates the
output array ``sa`` (of length at least ``n + fs``), the functions fill
``sa[:n]`` and return

  -  0 on success,
  - -1 if the arguments are invalid,
  - -2 if memory could not be allocated.

All of them are backed by pydivsufsort. Functions ending in ``_omp`` take
the number of threads to use; pydivsufsort has no such parameter, so they
run the same routine and return the same result as their single-threaded
counterparts.
"""

from typing import Optional

import numpy as np
import pydivsufsort

OK = 0
INVALID_ARGUMENT = -1
OUT_OF_MEMORY = -2

# Renumbered tokens with at most this many distinct values are sorted as
# bytes.
_MAX_BYTE_ALPHABET = 256


def _check_output(sa: np.ndarray, n: int, fs: int) -> bool:
    if n < 0 or fs < 0 or sa.ndim != 1 or sa.size < n + fs:
        return False
    # Every position must be representable in the output type.
    return sa.dtype.kind == "i" and n <= np.iinfo(sa.dtype).max


def _check_text(text: np.ndarray, n: int) -> bool:
    return text.ndim == 1 and text.dtype == np.uint8 and text.size >= n


def _check_tokens(tokens: np.ndarray, sa: np.ndarray, n: int, k: int) -> bool:
    if tokens.ndim != 1 or tokens.size < n:
        return False
    # Positions and symbols share one integer type.
    if tokens.dtype.kind != "i" or tokens.dtype.itemsize != sa.dtype.itemsize:
        return False
    if k < 0 or k > np.iinfo(sa.dtype).max:
        return False
    if n == 0:
        return True
    return int(tokens[:n].min()) >= 0 and int(tokens[:n].max()) <= k


def _fill_freq(text: np.ndarray, freq: Optional[np.ndarray]) -> None:
    if freq is not None:
        freq[:256] = np.bincount(text, minlength=256)


def _renumbering(tokens: np.ndarray) -> np.ndarray:
    """Renumber tokens such that the returned array contains entries
    ranging from 0 to M - 1, where M equals to the number of unique
    tokens. If tokens[i] < tokens[j], then ans[i] < ans[j].

    The returned array uses the smallest of np.uint8, np.int32 and np.int64
    that can hold M - 1.
    """
    uniqued, inverse = np.unique(tokens, return_inverse=True)
    inverse = inverse.reshape(-1)
    if uniqued.size <= _MAX_BYTE_ALPHABET:
        return inverse.astype(np.uint8)
    if uniqued.size <= np.iinfo(np.int32).max:
        return inverse.astype(np.int32)
    return inverse.astype(np.int64)


def _divsufsort(text, sa: np.ndarray, n: int) -> int:
    if n == 0:
        return OK
    try:
        sa[:n] = pydivsufsort.divsufsort(text)
    except MemoryError:
        return OUT_OF_MEMORY
    return OK


def sais(
    text: np.ndarray,
    sa: np.ndarray,
    n: int,
    fs: int = 0,
    freq: Optional[np.ndarray] = None,
) -> int:
    """Suffix array of a byte string, single-threaded.

    Args:
      text:
        A 1-D np.uint8 array; ``text[:n]`` is sorted.
      sa:
        The output array, np.int32 or np.int64, of size >= n + fs.
      n:
        Length of the input.
      fs:
        Extra space available at the end of ``sa``.
      freq:
        If not None, an array of size >= 256 receiving the symbol counts.
    """
    if not (_check_text(text, n) and _check_output(sa, n, fs)):
        return INVALID_ARGUMENT
    text = text[:n]
    _fill_freq(text, freq)
    return _divsufsort(text.tobytes(), sa, n)


def sais_omp(
    text: np.ndarray,
    sa: np.ndarray,
    n: int,
    fs: int,
    freq: Optional[np.ndarray],
    threads: int,
) -> int:
    """Multi-threaded version of :func:`sais`."""
    if threads < 1:
        return INVALID_ARGUMENT
    return sais(text, sa, n, fs, freq)


def sais_int(
    tokens: np.ndarray, sa: np.ndarray, n: int, k: int, fs: int = 0
) -> int:
    """Suffix array of an integer string, single-threaded.

    Args:
      tokens:
        A 1-D array with the same dtype as ``sa``; every entry of
        ``tokens[:n]`` lies in ``[0, k]``.
      sa:
        The output array, np.int32 or np.int64, of size >= n + fs.
      n:
        Length of the input.
      k:
        The largest symbol value.
      fs:
        Extra space available at the end of ``sa``.
    """
    if not (_check_output(sa, n, fs) and _check_tokens(tokens, sa, n, k)):
        return INVALID_ARGUMENT
    if n == 0:
        return OK
    try:
        ranks = _renumbering(tokens[:n])
    except MemoryError:
        return OUT_OF_MEMORY
    if ranks.dtype == np.uint8:
        ranks = ranks.tobytes()
    return _divsufsort(ranks, sa, n)


def sais_int_omp(
    tokens: np.ndarray, sa: np.ndarray, n: int, k: int, fs: int, threads: int
) -> int:
    """Multi-threaded version of :func:`sais_int`."""
    if threads < 1:
        return INVALID_ARGUMENT
    return sais_int(tokens, sa, n, k, fs)
