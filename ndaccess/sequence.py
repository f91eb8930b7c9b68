# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from dataclasses import dataclass
import operator

from .ranges import *

#
# FixedSequence - a short, rank-sized run of scalars
#
# This is the common representation under Shape, Index, Jumps and
# MemoryStrides. Those types wrap a FixedSequence rather than derive
# from it, each adding its own narrow contract on top.
#
# The rank of a FixedSequence is fixed when it's built: elements
# can be reassigned in place but never added or removed. Copies are
# independent values.
#


# element converter for sequences of unsigned quantities
def unsigned(x: Any) -> int:
    n = int(x)
    if n < 0:
        raise ValueError(f"expected a non-negative value, got {x}")
    return n


@dataclass
class FixedSequence:
    items: List[int]

    def __init__(
        self,
        items: Iterable = (),
        rank: Optional[int] = None,
        kind: Callable[[Any], int] = int,
    ):
        values = [kind(x) for x in items]
        if rank is not None and len(values) != rank:
            msg = f"sequence constructed from range of wrong size (expected {rank}, got {len(values)})"
            raise WrongLengthError(msg)
        self.items = values
        self.kind = kind

    @staticmethod
    def uniform(rank: int, value: Any, kind: Callable[[Any], int] = int) -> "FixedSequence":
        return FixedSequence(irange(rank) | (lambda _: value), rank, kind)

    def __repr__(self) -> str:
        return f"FixedSequence{tuple(self.items)}"

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, i: int) -> int:
        return self.items[i]

    def __setitem__(self, i: int, x: int):
        self.items[i] = x

    def __iter__(self) -> Iterator[int]:
        return iter(self.items)

    @property
    def rank(self) -> int:
        return len(self.items)

    def size(self) -> int:
        return accumulate(self, 1, operator.mul)

    def copy(self) -> "FixedSequence":
        return FixedSequence(self.items, kind=self.kind)

    def __eq__(self, x) -> bool:
        return (
            isinstance(x, FixedSequence)
            and len(self) == len(x)
            and all_of(zip_ranges(self, x), lambda t: t[0] == t[1])
        )

    def __ne__(self, x) -> bool:
        return (
            not isinstance(x, FixedSequence)
            or len(self) != len(x)
            or any_of(zip_ranges(self, x), lambda t: t[0] != t[1])
        )
