# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from dataclasses import dataclass

from .strides import *

#
# AccessPattern
#
# A strided, half-open region of an index space: on each axis the
# positions start, start + jump, ... below final. A pattern is both
# a sequence of Indexes (visited in row-major order, last axis
# fastest) and an index transform: map_index() takes an index
# relative to the pattern to the space the pattern overlays.
#
# Shape is derived from the bounds rather than stored:
#
#   shape[a] = final[a] // jumps[a] - start[a] // jumps[a]
#
# which counts the visited positions whenever start is a multiple
# of the jump. Other starts keep this exact formula.
#


@dataclass
class AccessPattern:
    start: Index
    final: Index
    jumps: Jumps

    def __post_init__(self):
        # patterns never alias the caller's sequences
        self.start = self.start.copy()
        self.final = self.final.copy()
        self.jumps = self.jumps.copy()
        ranks = (len(self.start), len(self.final), len(self.jumps))
        if len(set(ranks)) != 1:
            msg = f"start, final and jumps must have equal rank, got {ranks}"
            raise WrongLengthError(msg)
        if any_of(self.jumps, lambda j: j <= 0):
            raise ValueError(f"jumps must be positive, got {self.jumps}")

    def __repr__(self) -> str:
        return f"AccessPattern(start={self.start}, final={self.final}, jumps={tuple(self.jumps)})"

    @property
    def rank(self) -> int:
        return len(self.start)

    def with_start(self, *args) -> "AccessPattern":
        return AccessPattern(as_index(args), self.final, self.jumps)

    def with_final(self, *args) -> "AccessPattern":
        return AccessPattern(self.start, as_index(args), self.jumps)

    def with_jumps(self, *args) -> "AccessPattern":
        return AccessPattern(self.start, self.final, as_jumps(args))

    def shape(self) -> Shape:
        triples = zip_ranges(self.start, self.final, self.jumps)
        # start past final would go negative; such patterns are empty
        extents = triples | (lambda t: max(t[1] // t[2] - t[0] // t[2], 0))
        return Shape.from_range(extents, self.rank)

    def size(self) -> int:
        return self.shape().size()

    def empty(self) -> bool:
        return any_of(self.shape(), lambda n: n == 0)

    def map_index(self, *args) -> Index:
        index = as_index(args)
        if len(index) != self.rank:
            raise WrongLengthError(f"index {index} has rank {len(index)}, pattern has rank {self.rank}")
        mapped = zip_ranges(self.start, self.jumps, index) | (lambda t: t[0] + t[1] * t[2])
        return Index.from_range(mapped, self.rank)

    def contains(self, *args) -> bool:
        return self.shape().contains(*args)

    #
    # odometer step: bump the last axis by its jump, carrying toward
    # axis 0 whenever an axis reaches its final bound (the carried-out
    # axis restarts at its start). Past the last position the index
    # is set to final and False is returned. Updates index in place.
    #
    def advance(self, index: Index) -> bool:
        n = self.rank - 1
        if n < 0:
            return False
        index[n] += self.jumps[n]
        while index[n] >= self.final[n]:
            if n == 0:
                for a, f in enumerated(self.final):
                    index[a] = f
                return False
            index[n] = self.start[n]
            n -= 1
            index[n] += self.jumps[n]
        return True

    def __iter__(self) -> Iterator[Index]:
        if self.empty():
            return
        current = self.start.copy()
        while True:
            yield current.copy()
            if not self.advance(current):
                return


# promote call arguments to Jumps, as as_index() does for Index
def as_jumps(args: Sequence[Any]) -> Jumps:
    if len(args) == 1 and isinstance(args[0], Jumps):
        return args[0]
    return Jumps(*args)


#
# identity pattern over [0, shape) with unit jumps, given either a
# Shape or the extents themselves
#
def make_access_pattern(*args) -> AccessPattern:
    if len(args) == 1 and isinstance(args[0], Shape):
        final = Index.from_range(args[0])
    else:
        final = make_index(*args)
    rank = len(final)
    return AccessPattern(make_uniform_index(rank, 0), final, make_uniform_jumps(rank, 1))
