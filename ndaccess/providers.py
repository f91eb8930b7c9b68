# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
import copy
import logging

from .buffer import *

logger = logging.getLogger(__name__)

#
# Providers
#
# A provider maps an Index within its shape to a value. All of them
# answer shape(), size(), rank and dtype and are called as
# `p(index)` or `p(i, j, ...)`. They differ in where values come
# from:
#
# - IndexProvider: no storage, the value is the index itself
# - SharedProvider: read-only over a Buffer other providers may share
# - UniqueProvider: read/write over a Buffer it owns outright
# - ZippedProvider: tuples of the values of several arrays
#
# Only UniqueProvider supports item assignment (`p[index] = value`);
# the shared one has no mutating path at all.
#


def check_buffer_size(shape: Shape, buffer: Buffer):
    if shape.size() != buffer.size():
        msg = f"shape and buffer sizes do not match: shape {shape} has {shape.size()} elements, buffer has {buffer.size()}"
        raise ShapeMismatchError(msg)


class IndexProvider:
    def __init__(self, shape: Shape):
        self._shape = shape

    def __repr__(self) -> str:
        return f"IndexProvider({self._shape})"

    def __call__(self, *args) -> Index:
        return as_index(args).copy()

    def shape(self) -> Shape:
        return self._shape.copy()

    def size(self) -> int:
        return self._shape.size()

    @property
    def rank(self) -> int:
        return len(self._shape)

    @property
    def dtype(self) -> StorageDtype:
        return object


class SharedProvider:
    def __init__(self, shape: Shape, buffer: Buffer):
        check_buffer_size(shape, buffer)
        self._shape = shape.copy()
        self._strides = make_strides_row_major(shape)
        self._buffer = buffer

    def __repr__(self) -> str:
        return f"SharedProvider({self._shape}, dtype={self.dtype})"

    def __call__(self, *args) -> Any:
        value = self._buffer[self._strides.compute_offset(*args)]
        # object elements may be mutable; hand out copies
        return copy.deepcopy(value) if self.dtype is object else value

    def shape(self) -> Shape:
        return self._shape.copy()

    def size(self) -> int:
        return self._shape.size()

    @property
    def rank(self) -> int:
        return len(self._shape)

    @property
    def dtype(self) -> StorageDtype:
        return self._buffer.dtype

    @property
    def strides(self) -> MemoryStrides:
        return self._strides.copy()

    def shares_buffer_with(self, other: "SharedProvider") -> bool:
        return isinstance(other, SharedProvider) and self._buffer is other._buffer

    def tolist(self) -> List:
        return copy.deepcopy(self._buffer.tolist())


class UniqueProvider:
    def __init__(self, shape: Shape, buffer: Buffer):
        check_buffer_size(shape, buffer)
        self._shape = shape.copy()
        self._strides = make_strides_row_major(shape)
        self._buffer = buffer.move()

    def __repr__(self) -> str:
        return f"UniqueProvider({self._shape}, dtype={self.dtype})"

    def __call__(self, *args) -> Any:
        return self._buffer[self._strides.compute_offset(*args)]

    def __getitem__(self, key: Any) -> Any:
        return self._buffer[self._strides.compute_offset(key_index(key))]

    def __setitem__(self, key: Any, value: Any):
        self._buffer[self._strides.compute_offset(key_index(key))] = value

    def shape(self) -> Shape:
        return self._shape.copy()

    def size(self) -> int:
        return self._shape.size()

    @property
    def rank(self) -> int:
        return len(self._shape)

    @property
    def dtype(self) -> StorageDtype:
        return self._buffer.dtype

    @property
    def strides(self) -> MemoryStrides:
        return self._strides.copy()

    def tolist(self) -> List:
        return self._buffer.tolist()

    # shared provider over a copy of our buffer; we keep ours
    def shared(self) -> SharedProvider:
        return SharedProvider(self._shape, self._buffer.copy())

    # shared provider taking over our buffer without a copy. This
    # provider is left empty and shouldn't be used afterwards.
    def into_shared(self) -> SharedProvider:
        logger.debug("converting %s to shared without copy", self)
        return SharedProvider(self._shape, self._buffer.move())


#
# ZippedProvider holds arrays rather than bare providers, so each
# constituent keeps its own access pattern. Constituents are fixed
# at construction.
#
class ZippedProvider:
    def __init__(self, shape: Shape, arrays: Tuple[Any, ...]):
        self._shape = shape.copy()
        self._arrays = tuple(arrays)

    def __repr__(self) -> str:
        return f"ZippedProvider({self._shape}, {len(self._arrays)} arrays)"

    def __call__(self, *args) -> Tuple:
        index = as_index(args)
        return tuple(a(index) for a in self._arrays)

    def shape(self) -> Shape:
        return self._shape.copy()

    def size(self) -> int:
        return self._shape.size()

    @property
    def rank(self) -> int:
        return len(self._shape)

    @property
    def dtype(self) -> StorageDtype:
        return object

    @property
    def arrays(self) -> Tuple[Any, ...]:
        return self._arrays


Provider = Union[IndexProvider, SharedProvider, UniqueProvider, ZippedProvider]


#
# builders - each takes either a Shape or the extents themselves
#


def as_shape(args: Sequence[Any]) -> Shape:
    if len(args) == 1 and isinstance(args[0], Shape):
        return args[0]
    return Shape(*args)


def make_index_provider(*args) -> IndexProvider:
    return IndexProvider(as_shape(args))


def make_shared_provider(*args, dtype: Any = None) -> SharedProvider:
    shape = as_shape(args)
    return SharedProvider(shape, Buffer(shape.size(), dtype=dtype))


def make_unique_provider(*args, dtype: Any = None) -> UniqueProvider:
    shape = as_shape(args)
    return UniqueProvider(shape, Buffer(shape.size(), dtype=dtype))


#
# materialization
#
# Copy the values a provider produces over an access pattern into a
# fresh UniqueProvider shaped like the pattern. Target and source
# patterns are walked in lockstep: one read and one write per element
# and no allocation besides the target buffer.
#
def evaluate_as_unique(
    provider: Provider, accessor: Optional[AccessPattern] = None
) -> UniqueProvider:
    if accessor is None:
        accessor = make_access_pattern(provider.shape())
    target_shape = accessor.shape()
    target_accessor = make_access_pattern(target_shape)
    target = make_unique_provider(target_shape, dtype=provider.dtype)
    logger.debug("materializing %s over %s into shape %s", provider, accessor, target_shape)
    for target_index, source_index in zip_ranges(target_accessor, accessor):
        target[target_index] = provider(source_index)
    return target


def evaluate_as_shared(
    provider: Provider, accessor: Optional[AccessPattern] = None
) -> SharedProvider:
    return evaluate_as_unique(provider, accessor).into_shared()
