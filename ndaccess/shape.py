# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from dataclasses import dataclass

from .sequence import *

#
# Shape, Index, Jumps
#
# Each is a FixedSequence with its own identity: a Shape never
# equals an Index with the same entries. Shape and Index hold
# non-negative values; Jumps are signed step multipliers used by
# access patterns (and have nothing to do with memory layout).
#


@dataclass
class Shape:
    seq: FixedSequence

    def __init__(self, *extents: int):
        self.seq = FixedSequence(extents, kind=unsigned)

    @staticmethod
    def from_range(rng: Iterable, rank: Optional[int] = None) -> "Shape":
        return Shape(*FixedSequence(rng, rank, unsigned))

    @staticmethod
    def uniform(rank: int, extent: int) -> "Shape":
        return Shape(*FixedSequence.uniform(rank, extent, unsigned))

    def __repr__(self) -> str:
        return f"Shape{tuple(self.seq)}"

    def __str__(self) -> str:
        return str(tuple(self.seq))

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

    # number of elements spanned
    def size(self) -> int:
        return self.seq.size()

    def copy(self) -> "Shape":
        return Shape(*self.seq)

    def contains(self, *args) -> bool:
        index = as_index(args)
        return len(index) == len(self) and all_of(
            zip_ranges(index, self), lambda t: t[0] < t[1]
        )

    def __eq__(self, x) -> bool:
        return isinstance(x, Shape) and self.seq == x.seq

    def __ne__(self, x) -> bool:
        return not isinstance(x, Shape) or self.seq != x.seq


@dataclass
class Index:
    seq: FixedSequence

    def __init__(self, *positions: int):
        self.seq = FixedSequence(positions, kind=unsigned)

    @staticmethod
    def from_range(rng: Iterable, rank: Optional[int] = None) -> "Index":
        return Index(*FixedSequence(rng, rank, unsigned))

    @staticmethod
    def uniform(rank: int, position: int) -> "Index":
        return Index(*FixedSequence.uniform(rank, position, unsigned))

    def __repr__(self) -> str:
        return f"Index{tuple(self.seq)}"

    def __str__(self) -> str:
        return str(tuple(self.seq))

    def __len__(self) -> int:
        return len(self.seq)

    def __getitem__(self, i: int) -> int:
        return self.seq[i]

    # note: no range check here - access patterns step indexes
    # in place, and transiently past their final bound
    def __setitem__(self, i: int, n: int):
        self.seq[i] = n

    def __iter__(self) -> Iterator[int]:
        return iter(self.seq)

    @property
    def rank(self) -> int:
        return self.seq.rank

    def size(self) -> int:
        return self.seq.size()

    def copy(self) -> "Index":
        return Index(*self.seq)

    def totuple(self) -> Tuple[int, ...]:
        return tuple(self.seq)

    def __eq__(self, x) -> bool:
        return isinstance(x, Index) and self.seq == x.seq

    def __ne__(self, x) -> bool:
        return not isinstance(x, Index) or self.seq != x.seq


@dataclass
class Jumps:
    seq: FixedSequence

    def __init__(self, *steps: int):
        self.seq = FixedSequence(steps)

    @staticmethod
    def from_range(rng: Iterable, rank: Optional[int] = None) -> "Jumps":
        return Jumps(*FixedSequence(rng, rank))

    @staticmethod
    def uniform(rank: int, step: int) -> "Jumps":
        return Jumps(*FixedSequence.uniform(rank, step))

    def __repr__(self) -> str:
        return f"Jumps{tuple(self.seq)}"

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

    def copy(self) -> "Jumps":
        return Jumps(*self.seq)

    def __eq__(self, x) -> bool:
        return isinstance(x, Jumps) and self.seq == x.seq

    def __ne__(self, x) -> bool:
        return not isinstance(x, Jumps) or self.seq != x.seq


#
# builders
#


def make_shape(*extents: int) -> Shape:
    return Shape(*extents)


def make_index(*positions: int) -> Index:
    return Index(*positions)


def make_jumps(*steps: int) -> Jumps:
    return Jumps(*steps)


def make_uniform_shape(rank: int, extent: int) -> Shape:
    return Shape.uniform(rank, extent)


def make_uniform_index(rank: int, position: int) -> Index:
    return Index.uniform(rank, position)


def make_uniform_jumps(rank: int, step: int) -> Jumps:
    return Jumps.uniform(rank, step)


#
# promote call arguments to an Index: either a single Index, or
# ints giving its positions. Used by everything that accepts both
# `x(index)` and `x(i, j, ...)`.
#
def as_index(args: Sequence[Any]) -> Index:
    if len(args) == 1 and isinstance(args[0], Index):
        return args[0]
    return Index(*args)


# same for subscripts: x[index], x[i, j] or x[i]
def key_index(key: Any) -> Index:
    if isinstance(key, Index):
        return key
    if isinstance(key, tuple):
        return Index(*key)
    return Index(key)
