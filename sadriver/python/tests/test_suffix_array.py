#!/usr/bin/env python3
#
# Copyright      2023  Xiaomi Corp.       (authors: Wei Kang)
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
import unittest
from unittest import mock

import numpy as np

from sadriver import ConstructionError
from sadriver import IndexWidth
from sadriver import IntegerSequence
from sadriver import Sequence
from sadriver import build_int_sa
from sadriver import build_text_sa
from sadriver import create_suffix_array
from sadriver import is_suffix_array


class TestSuffixArray(unittest.TestCase):
    def test_banana(self):
        for threads in [1, 4]:
            seq = Sequence.from_bytes(b"banana")
            suffix_array = build_text_sa(seq, IndexWidth.NARROW, threads)
            expected_array = np.array([5, 3, 1, 0, 4, 2], dtype=np.int32)
            np.testing.assert_equal(suffix_array.indices, expected_array)
            assert suffix_array.width == IndexWidth.NARROW
            assert suffix_array.indices.dtype == np.int32

    def test_wide_indices(self):
        seq = Sequence.from_bytes(b"mississippi")
        suffix_array = build_text_sa(seq, IndexWidth.WIDE, 1)
        assert suffix_array.indices.dtype == np.int64
        np.testing.assert_equal(
            suffix_array.indices, [10, 7, 4, 1, 0, 9, 8, 6, 3, 5, 2]
        )

    def test_integer_alphabet(self):
        seq = IntegerSequence(
            tokens=np.array([2, 0, 1, 0, 2], dtype=np.int32), max_token=2
        )
        for threads in [1, 4]:
            suffix_array = build_int_sa(seq, IndexWidth.NARROW, threads)
            assert suffix_array.indices.dtype == np.int32
            np.testing.assert_equal(suffix_array.indices, [1, 3, 2, 4, 0])

    def test_integer_alphabet_large_tokens(self):
        tokens = np.array([2**40, 3, 2**40, 0], dtype=np.int64)
        seq = IntegerSequence(tokens=tokens, max_token=2**40)
        suffix_array = build_int_sa(seq, IndexWidth.WIDE, 1)
        np.testing.assert_equal(suffix_array.indices, [3, 1, 2, 0])

    def test_empty(self):
        for threads in [1, 2]:
            suffix_array = build_text_sa(
                Sequence.from_bytes(b""), IndexWidth.NARROW, threads
            )
            assert len(suffix_array) == 0, len(suffix_array)

            seq = IntegerSequence(tokens=np.array([], np.int32), max_token=0)
            suffix_array = build_int_sa(seq, IndexWidth.NARROW, threads)
            assert len(suffix_array) == 0, len(suffix_array)

    def test_random_text(self):
        rng = np.random.default_rng(20231019)
        for n in [1, 2, 17, 100, 500]:
            for alphabet in [1, 2, 4, 256]:
                data = rng.integers(0, alphabet, size=n, dtype=np.uint8)
                for threads in [1, 3]:
                    suffix_array = build_text_sa(
                        Sequence(data=data.copy()), IndexWidth.NARROW, threads
                    )
                    assert is_suffix_array(data, suffix_array.indices)

    def test_random_integer(self):
        rng = np.random.default_rng(7)
        for n in [1, 3, 64, 300]:
            for max_token in [0, 1, 10, 100000]:
                tokens = rng.integers(0, max_token + 1, size=n)
                seq = IntegerSequence(tokens=tokens, max_token=max_token)
                for threads in [1, 2]:
                    suffix_array = build_int_sa(seq, IndexWidth.NARROW, threads)
                    assert is_suffix_array(tokens, suffix_array.indices)

    def test_threads_are_deterministic(self):
        rng = np.random.default_rng(1)
        data = np.frombuffer(b"ACGT", dtype=np.uint8)[
            rng.integers(0, 4, size=300000)
        ]
        seq = Sequence(data=data)
        sa1 = build_text_sa(seq, IndexWidth.NARROW, 1)
        sa4 = build_text_sa(seq, IndexWidth.NARROW, 4)
        np.testing.assert_equal(sa1.indices, sa4.indices)

    def test_construction_error(self):
        logger = logging.getLogger("sadriver.test_suffix_array")
        seq = Sequence.from_bytes(b"banana")
        with mock.patch("sadriver.construction.sais", return_value=-2):
            with self.assertLogs(logger, level="ERROR") as cm:
                with self.assertRaises(ConstructionError) as e:
                    build_text_sa(seq, IndexWidth.NARROW, 1, logger=logger)
        assert e.exception.code == -2, e.exception.code
        assert "-2" in cm.output[0], cm.output

    def test_invalid_integer_input(self):
        # A token larger than max_token is rejected by the construction.
        seq = IntegerSequence(
            tokens=np.array([0, 5, 1], dtype=np.int32), max_token=2
        )
        with self.assertRaises(ConstructionError) as e:
            build_int_sa(seq, IndexWidth.NARROW, 1)
        assert e.exception.code == -1, e.exception.code

        # max_token does not fit into 32 bits.
        seq = IntegerSequence(
            tokens=np.array([0, 1], dtype=np.int64), max_token=2**32
        )
        with self.assertRaises(ConstructionError):
            build_int_sa(seq, IndexWidth.NARROW, 1)

    def test_invalid_threads(self):
        with self.assertRaises(ValueError):
            build_text_sa(Sequence.from_bytes(b"ab"), IndexWidth.NARROW, 0)

    def test_create_suffix_array(self):
        suffix_array = create_suffix_array("banana")
        np.testing.assert_equal(suffix_array.indices, [5, 3, 1, 0, 4, 2])
        assert suffix_array.width == IndexWidth.NARROW

        for dtype in [np.int8, np.uint16, np.int32, np.int64]:
            array = np.array([3, 2, 1], dtype=dtype)
            suffix_array = create_suffix_array(array)
            np.testing.assert_equal(suffix_array.indices, [2, 1, 0])
            assert suffix_array.indices.dtype == np.int32

        suffix_array = create_suffix_array(np.array([2**31, 1]))
        assert suffix_array.width == IndexWidth.WIDE
        np.testing.assert_equal(suffix_array.indices, [1, 0])

    def test_create_suffix_array_uint64_overflow(self):
        array = np.array([1, 2**63, 0], dtype=np.uint64)
        with self.assertRaises(ValueError):
            create_suffix_array(array)

        array = np.array([1, 2**63 - 1, 0], dtype=np.uint64)
        suffix_array = create_suffix_array(array)
        assert suffix_array.width == IndexWidth.WIDE
        np.testing.assert_equal(suffix_array.indices, [2, 0, 1])


if __name__ == "__main__":
    unittest.main()
