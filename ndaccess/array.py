# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
import logging

from .config import config
from .providers import *

logger = logging.getLogger(__name__)

#
# Array
#
# An Array pairs a provider with an access pattern. Every element
# access goes logical index -> accessor.map_index() -> provider, so
# the same provider can be viewed through any strided sub-region
# without touching its storage. unique() and shared() force the
# pair into fresh concrete storage.
#


class Array:
    def __init__(self, provider: Provider, accessor: AccessPattern):
        self._provider = provider
        self._accessor = accessor

    def __repr__(self) -> str:
        return f"Array({self._provider!r}, {self._accessor!r})"

    def __call__(self, *args) -> Any:
        return self._provider(self._accessor.map_index(*args))

    def __getitem__(self, key: Any) -> Any:
        return self._provider(self._accessor.map_index(key_index(key)))

    # only for writable providers - a SharedProvider raises TypeError
    def __setitem__(self, key: Any, value: Any):
        self._provider[self._accessor.map_index(key_index(key))] = value

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def accessor(self) -> AccessPattern:
        return self._accessor

    @property
    def rank(self) -> int:
        return self._accessor.rank

    @property
    def dtype(self) -> StorageDtype:
        return self._provider.dtype

    # note: shape and size are the provider's, not the accessor's
    def shape(self) -> Shape:
        return self._provider.shape()

    def size(self) -> int:
        return self._provider.size()

    # values in accessor order
    def __iter__(self) -> Iterator:
        for index in self._accessor:
            yield self._provider(index)

    def tolist(self) -> List:
        return list(self)

    def unique(self) -> "Array":
        return make_array(evaluate_as_unique(self._provider, self._accessor))

    def shared(self) -> "Array":
        return make_array(evaluate_as_shared(self._provider, self._accessor))

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Array)
            and self._accessor.shape() == other._accessor.shape()
            and self.tolist() == other.tolist()
        )

    def __ne__(self, other) -> bool:
        return not self == other


#
# builders
#


def make_array(provider: Provider, accessor: Optional[AccessPattern] = None) -> Array:
    if accessor is None:
        accessor = make_access_pattern(provider.shape())
    return Array(provider, accessor)


#
# zip arrays of one shape into a provider of value tuples,
# e.g. zip_arrays(a, b)(i, j) == (a(i, j), b(i, j))
#
def zip_arrays(*arrays: Array) -> ZippedProvider:
    if len(arrays) == 0:
        raise ValueError("zip_arrays needs at least one array")
    shape = arrays[0].shape()
    if config.get("zipped.check_shapes"):
        for n, a in enumerate(arrays[1:], 1):
            if a.shape() != shape:
                msg = f"zipped arrays must share one shape: array 0 has shape {shape}, array {n} has shape {a.shape()}"
                raise ShapeMismatchError(msg)
    logger.debug("zipping %d arrays of shape %s", len(arrays), shape)
    return ZippedProvider(shape, arrays)
