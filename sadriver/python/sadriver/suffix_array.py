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

import logging
from typing import Optional, Union

import numpy as np

from . import construction
from .datatypes import IndexWidth, IntegerSequence, Sequence, SuffixArray
from .errors import ConstructionError
from .width import select_width

_logger = logging.getLogger(__name__)


def _check_return_code(ret: int, logger: logging.Logger) -> None:
    logger.info(f"ret : {ret}")
    if ret != 0:
        logger.error(f"error: suffix array construction return code {ret}")
        raise ConstructionError(ret)


def _check_threads(threads: int) -> None:
    if threads < 1:
        raise ValueError(f"threads must be >= 1, given {threads}")


def build_text_sa(
    sequence: Sequence,
    width: IndexWidth,
    threads: int,
    logger: Optional[logging.Logger] = None,
) -> SuffixArray:
    """Create the suffix array of a byte sequence.

    Args:
      sequence:
        The input sequence.
      width:
        Width of the entries of the returned suffix array. It must be
        large enough to address every position of ``sequence``,
        see :func:`sadriver.select_width`.
      threads:
        Number of threads; 1 selects the single-threaded construction.
      logger:
        Where to send diagnostics. Defaults to the module logger.
    Returns:
      Return the suffix array, of dtype ``width.dtype`` and of the same
      length as ``sequence``.
    Raises:
      ConstructionError if the construction returns a non-zero code.
    """
    logger = logger or _logger
    _check_threads(threads)
    logger.info(f"using {width.bits}-bit ({width.dtype.name}) indices")

    n = len(sequence)
    sa = np.zeros(n, dtype=width.dtype)
    if threads == 1:
        ret = construction.sais(sequence.data, sa, n, 0, None)
    else:
        ret = construction.sais_omp(sequence.data, sa, n, 0, None, threads)

    _check_return_code(ret, logger)
    return SuffixArray(indices=sa)


def build_int_sa(
    sequence: IntegerSequence,
    width: IndexWidth,
    threads: int,
    logger: Optional[logging.Logger] = None,
) -> SuffixArray:
    """Create the suffix array of an integer sequence.

    The tokens are converted to ``width.dtype`` before the construction,
    so ``width`` must be able to hold both the length of the sequence and
    ``sequence.max_token``.

    Args:
      sequence:
        The input sequence.
      width:
        Width of the tokens and of the entries of the returned suffix array.
      threads:
        Number of threads; 1 selects the single-threaded construction.
      logger:
        Where to send diagnostics. Defaults to the module logger.
    Raises:
      ConstructionError if the construction returns a non-zero code.
    """
    logger = logger or _logger
    _check_threads(threads)
    logger.info(
        f"int alphabet using {width.bits}-bit ({width.dtype.name}) indices"
    )

    n = len(sequence)
    k = sequence.max_token
    sa = np.zeros(n, dtype=width.dtype)

    if k > np.iinfo(width.dtype).max:
        # Tokens would not survive the conversion below.
        ret = construction.INVALID_ARGUMENT
    else:
        tokens = np.ascontiguousarray(sequence.tokens, dtype=width.dtype)
        if threads == 1:
            ret = construction.sais_int(tokens, sa, n, k, 0)
        else:
            ret = construction.sais_int_omp(tokens, sa, n, k, 0, threads)

    _check_return_code(ret, logger)
    return SuffixArray(indices=sa)


def create_suffix_array(
    data: Union[bytes, str, np.ndarray],
    threads: int = 1,
    logger: Optional[logging.Logger] = None,
) -> SuffixArray:
    """Create a suffix array, choosing the index width automatically.

    Args:
      data:
        Either a ``bytes``/``str`` object (a ``str`` is utf-8 encoded),
        a 1-D np.uint8 array, or a 1-D array of non-negative integers
        which is treated as an integer alphabet whose largest symbol is
        ``data.max()``.
      threads:
        Number of threads to use.
    Returns:
      Return the suffix array.
    Raises:
      ValueError if an integer token is 2**63 or larger.

    **Usage examples**:

        >>> create_suffix_array("banana").indices
        array([5, 3, 1, 0, 4, 2], dtype=int32)
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    if isinstance(data, (bytes, bytearray)):
        data = np.frombuffer(bytes(data), dtype=np.uint8)

    assert data.ndim == 1, data.ndim
    if data.dtype == np.uint8:
        sequence = Sequence(data=data.view())
        width = select_width(len(sequence))
        return build_text_sa(sequence, width, threads, logger=logger)

    assert data.dtype.kind in "iu", data.dtype
    max_token = int(data.max()) if data.size else 0
    if max_token > np.iinfo(np.int64).max:
        raise ValueError(
            f"Tokens must be < 2**63, but the largest one is {max_token}"
        )
    sequence = IntegerSequence(
        tokens=np.ascontiguousarray(data, dtype=np.int64).view(),
        max_token=max_token,
    )
    width = select_width(len(sequence), max_token)
    return build_int_sa(sequence, width, threads, logger=logger)


def is_suffix_array(array: np.ndarray, suffix_array: np.ndarray) -> bool:
    """Check that ``suffix_array`` is the suffix array of ``array``.

    It compares every pair of adjacent suffixes, so it is meant for
    small inputs, e.g., in tests.
    """
    n = array.size
    if suffix_array.size != n:
        return False
    if not np.array_equal(np.sort(suffix_array), np.arange(n)):
        return False
    s = array.tolist()
    sa = suffix_array.tolist()
    return all(s[i:] <= s[j:] for i, j in zip(sa[:-1], sa[1:]))
