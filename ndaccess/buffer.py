# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
import copy
import logging

import torch

from .config import StorageDtype, parse_dtype
from .pattern import *

logger = logging.getLogger(__name__)

#
# Buffer
#
# An owned, contiguous, linear store of `count` elements. Numeric
# dtypes live in a 1-D torch.Tensor; dtype `object` lives in a list,
# for elements torch can't hold (indexes, tuples of values).
#
# Ownership is explicit: copy() duplicates the storage, move() hands
# the storage to a new Buffer and leaves this one empty. Element
# access through [] is unchecked, at()/set_at() check the offset.
#

BufferData = Union[torch.Tensor, List[Any]]


def _empty_data(dtype: StorageDtype) -> BufferData:
    if dtype is object:
        return []
    return torch.empty(0, dtype=dtype)


class Buffer:
    def __init__(self, count: int = 0, value: Any = None, dtype: Any = None):
        self.dtype = parse_dtype(dtype)
        if self.dtype is object:
            self.data: BufferData = [copy.deepcopy(value) for _ in range(count)]
        elif value is None:
            self.data = torch.zeros(count, dtype=self.dtype)
        else:
            self.data = torch.full((count,), value, dtype=self.dtype)

    @staticmethod
    def from_values(values: Iterable, dtype: Any = None) -> "Buffer":
        vals = list(values)
        buf = Buffer(dtype=_infer_dtype(vals) if dtype is None else dtype)
        if buf.dtype is object:
            buf.data = vals
        else:
            buf.data = torch.tensor(vals, dtype=buf.dtype)
        return buf

    def __repr__(self) -> str:
        return f"Buffer({self.tolist()}, dtype={self.dtype})"

    def __len__(self) -> int:
        return len(self.data)

    def size(self) -> int:
        return len(self.data)

    def empty(self) -> bool:
        return len(self.data) == 0

    # unchecked
    def __getitem__(self, offset: int) -> Any:
        if isinstance(self.data, torch.Tensor):
            return self.data[offset].item()
        return self.data[offset]

    # unchecked
    def __setitem__(self, offset: int, value: Any):
        self.data[offset] = value

    def check_offset(self, offset: int):
        if offset < 0 or offset >= len(self.data):
            raise OutOfRangeError(offset, len(self.data))

    def at(self, offset: int) -> Any:
        self.check_offset(offset)
        return self[offset]

    def set_at(self, offset: int, value: Any):
        self.check_offset(offset)
        self[offset] = value

    def __iter__(self) -> Iterator:
        return iter(self.tolist())

    def tolist(self) -> List:
        if isinstance(self.data, torch.Tensor):
            return self.data.tolist()
        return list(self.data)

    def copy(self) -> "Buffer":
        buf = Buffer(dtype=self.dtype)
        if isinstance(self.data, torch.Tensor):
            buf.data = self.data.clone()
        else:
            buf.data = copy.deepcopy(self.data)
        return buf

    def __copy__(self) -> "Buffer":
        return self.copy()

    def __deepcopy__(self, memo) -> "Buffer":
        return self.copy()

    def move(self) -> "Buffer":
        logger.debug("moving buffer of %d elements", len(self.data))
        buf = Buffer(dtype=self.dtype)
        buf.data = self.data
        self.data = _empty_data(self.dtype)
        return buf

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Buffer)
            and len(self) == len(other)
            and all_of(zip_ranges(self, other), lambda t: t[0] == t[1])
        )

    def __ne__(self, other) -> bool:
        return not self == other


#
# dtype for a list of values when none is given: bools and ints keep
# their torch counterparts, other numbers take the configured default
# and anything else is stored as objects
#
def _infer_dtype(vals: List[Any]) -> StorageDtype:
    if len(vals) > 0 and all(isinstance(v, bool) for v in vals):
        return torch.bool
    if len(vals) > 0 and all(isinstance(v, int) and not isinstance(v, bool) for v in vals):
        return torch.long
    if all(isinstance(v, (int, float)) for v in vals):
        return parse_dtype(None)
    return object
