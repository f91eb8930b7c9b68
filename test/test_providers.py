# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from unittest import TestCase, main

import torch

from ndaccess import *

#
# provider tests: construction checks, ownership variants and
# materialization
#


def arange_provider(*extents) -> UniqueProvider:
    shape = make_shape(*extents)
    return UniqueProvider(shape, Buffer.from_values(range(shape.size())))


class TestConstruction(TestCase):
    def test_matching_sizes(self):
        for extents in [(6,), (2, 3), (3, 2), (1, 2, 3)]:
            shape = make_shape(*extents)
            self.assertEqual(SharedProvider(shape, Buffer(6)).shape(), shape)
            self.assertEqual(UniqueProvider(shape, Buffer(6)).shape(), shape)

    def test_shape_mismatch(self):
        with self.assertRaises(ShapeMismatchError):
            SharedProvider(make_shape(2, 3), Buffer(5))
        with self.assertRaises(ShapeMismatchError):
            UniqueProvider(make_shape(2, 3), Buffer(7))
        with self.assertRaises(LogicError):
            UniqueProvider(make_shape(0), Buffer(1))

    def test_make_providers(self):
        p = make_shared_provider(2, 3)
        self.assertEqual(p.shape(), make_shape(2, 3))
        self.assertEqual(p.size(), 6)
        self.assertEqual(p.rank, 2)
        self.assertEqual(p.dtype, torch.float64)
        self.assertEqual(p.tolist(), [0.0] * 6)
        q = make_unique_provider(make_shape(4), dtype=torch.long)
        self.assertEqual(q.dtype, torch.long)
        self.assertEqual(q.tolist(), [0, 0, 0, 0])

    def test_unique_takes_buffer(self):
        b = Buffer.from_values([1, 2, 3, 4])
        p = UniqueProvider(make_shape(2, 2), b)
        self.assertTrue(b.empty())
        self.assertEqual(p.tolist(), [1, 2, 3, 4])

    def test_strides(self):
        self.assertEqual(make_shared_provider(2, 3, 4).strides, MemoryStrides(12, 4, 1))


class TestIndexProvider(TestCase):
    def test_identity(self):
        p = make_index_provider(3, 4)
        self.assertEqual(p(make_index(2, 1)), make_index(2, 1))
        self.assertEqual(p(0, 3), make_index(0, 3))
        self.assertEqual(p.shape(), make_shape(3, 4))
        self.assertEqual(p.size(), 12)
        self.assertIs(p.dtype, object)

    def test_returns_copies(self):
        i = make_index(1, 1)
        j = make_index_provider(2, 2)(i)
        j[0] = 0
        self.assertEqual(i, make_index(1, 1))


class TestUniqueProvider(TestCase):
    def test_read_write(self):
        p = make_unique_provider(2, 3)
        p[1, 2] = 5
        p[make_index(0, 1)] = 3
        self.assertEqual(p(1, 2), 5)
        self.assertEqual(p(make_index(0, 1)), 3)
        self.assertEqual(p[1, 2], 5)
        self.assertEqual(p.tolist(), [0, 3, 0, 0, 0, 5])

    def test_rank_one_subscript(self):
        p = make_unique_provider(3, dtype=int)
        p[2] = 9
        self.assertEqual(p(2), 9)

    def test_shared_copies(self):
        p = arange_provider(2, 2)
        s = p.shared()
        p[0, 0] = 100
        self.assertEqual(s(0, 0), 0)
        self.assertEqual(p(0, 0), 100)

    def test_into_shared_moves(self):
        p = arange_provider(2, 2)
        s = p.into_shared()
        self.assertIsInstance(s, SharedProvider)
        self.assertEqual(s.tolist(), [0, 1, 2, 3])
        self.assertEqual(p.tolist(), [])


class TestSharedProvider(TestCase):
    def test_read_only(self):
        p = arange_provider(2, 2).shared()
        self.assertFalse(hasattr(SharedProvider, "__setitem__"))
        with self.assertRaises(TypeError):
            p[0, 0] = 1
        self.assertEqual(p(1, 0), 2)

    def test_object_values_are_copies(self):
        s = evaluate_as_shared(make_index_provider(2, 2))
        s(1, 1)[0] = 0
        self.assertEqual(s(1, 1), make_index(1, 1))
        s.tolist()[3][1] = 0
        self.assertEqual(s(1, 1), make_index(1, 1))

    def test_shared_buffer(self):
        b = Buffer.from_values([1, 2, 3, 4, 5, 6])
        p = SharedProvider(make_shape(2, 3), b)
        q = SharedProvider(make_shape(3, 2), b)
        self.assertTrue(p.shares_buffer_with(q))
        self.assertFalse(p.shares_buffer_with(p.shape()))
        self.assertEqual(p(1, 0), 4)
        self.assertEqual(q(1, 0), 3)


class TestZippedProvider(TestCase):
    def test_tuples(self):
        a = make_array(make_index_provider(2, 2))
        b = make_array(arange_provider(2, 2))
        p = ZippedProvider(make_shape(2, 2), (a, b))
        self.assertEqual(p(1, 0), (make_index(1, 0), 2))
        self.assertEqual(p.shape(), make_shape(2, 2))
        self.assertEqual(len(p.arrays), 2)
        self.assertIs(p.dtype, object)


class TestEvaluate(TestCase):
    def test_identity(self):
        p = arange_provider(2, 3)
        u = evaluate_as_unique(p)
        self.assertIsInstance(u, UniqueProvider)
        self.assertEqual(u.shape(), make_shape(2, 3))
        self.assertEqual(u.tolist(), p.tolist())
        self.assertEqual(u.dtype, torch.long)

    def test_decoupled_storage(self):
        p = arange_provider(3)
        u = evaluate_as_unique(p)
        u[0] = 42
        self.assertEqual(p(0), 0)

    def test_strided_slice(self):
        p = arange_provider(10)
        accessor = make_access_pattern(10).with_start(1).with_jumps(3)
        u = evaluate_as_unique(p, accessor)
        self.assertEqual(u.shape(), make_shape(3))
        self.assertEqual(u.tolist(), [1, 4, 7])

    def test_strided_block(self):
        p = arange_provider(3, 4)
        accessor = make_access_pattern(3, 4).with_start(1, 1).with_jumps(1, 2)
        u = evaluate_as_unique(p, accessor)
        self.assertEqual(u.shape(), make_shape(2, 2))
        self.assertEqual(u.tolist(), [5, 7, 9, 11])

    def test_idempotent(self):
        p = arange_provider(3, 3)
        accessor = make_access_pattern(3, 3).with_start(0, 1)
        once = evaluate_as_unique(p, accessor)
        twice = evaluate_as_unique(once)
        self.assertEqual(twice.tolist(), once.tolist())
        self.assertEqual(twice.shape(), once.shape())

    def test_index_provider(self):
        u = evaluate_as_unique(make_index_provider(2, 2))
        self.assertIs(u.dtype, object)
        self.assertEqual(u(1, 1), make_index(1, 1))
        self.assertEqual(u.tolist()[1], make_index(0, 1))

    def test_empty(self):
        u = evaluate_as_unique(arange_provider(4), make_access_pattern(0))
        self.assertEqual(u.size(), 0)
        self.assertEqual(u.tolist(), [])

    def test_start_off_jump_grid(self):
        # the derived shape (2,) is shorter than the 3 visited positions
        accessor = make_access_pattern(10).with_start(1).with_jumps(4)
        self.assertEqual(accessor.shape(), make_shape(2))
        with self.assertRaises(UnequalLengthError):
            evaluate_as_unique(arange_provider(10), accessor)
        with self.assertRaises(UnequalLengthError):
            make_array(arange_provider(10), accessor).unique()

    def test_as_shared(self):
        s = evaluate_as_shared(arange_provider(2, 2))
        self.assertIsInstance(s, SharedProvider)
        self.assertEqual(s.tolist(), [0, 1, 2, 3])


if __name__ == "__main__":
    main()
