# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from dataclasses import dataclass
import operator

from .shape import *

#
# MemoryStrides - per-axis multipliers taking an Index to a linear
# offset into a buffer. Unlike Jumps, these describe memory layout.
#


@dataclass
class MemoryStrides:
    seq: FixedSequence

    def __init__(self, *strides: int):
        self.seq = FixedSequence(strides, kind=unsigned)

    @staticmethod
    def from_range(rng: Iterable, rank: Optional[int] = None) -> "MemoryStrides":
        return MemoryStrides(*FixedSequence(rng, rank, unsigned))

    def __repr__(self) -> str:
        return f"MemoryStrides{tuple(self.seq)}"

    def __len__(self) -> int:
        return len(self.seq)

    def __getitem__(self, i: int) -> int:
        return self.seq[i]

    def __setitem__(self, i: int, n: int):
        self.seq[i] = n

    def __iter__(self) -> Iterator[int]:
        return iter(self.seq)

    @property
    def rank(self) -> int:
        return self.seq.rank

    def size(self) -> int:
        return self.seq.size()

    def copy(self) -> "MemoryStrides":
        return MemoryStrides(*self.seq)

    def compute_offset(self, *args) -> int:
        index = as_index(args)
        products = zip_ranges(index, self) | (lambda t: t[0] * t[1])
        return accumulate(products, 0, operator.add)

    def __eq__(self, x) -> bool:
        return isinstance(x, MemoryStrides) and self.seq == x.seq

    def __ne__(self, x) -> bool:
        return not isinstance(x, MemoryStrides) or self.seq != x.seq


# last axis contiguous, e.g. Shape(2, 3, 4) -> MemoryStrides(12, 4, 1)
def make_strides_row_major(shape: Shape) -> MemoryStrides:
    strides = [1] * len(shape)
    for n in range(len(shape) - 2, -1, -1):
        strides[n] = strides[n + 1] * shape[n + 1]
    return MemoryStrides(*strides)
