# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from functools import reduce
from typing import (
    Any,
    Callable,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from .config import config
from .errors import *

#
# Range algorithms - lazy, restartable sequence combinators with
# no array knowledge. Sequences, shapes, patterns and buffers are
# all built on top of these rather than on per-rank loops.
#
# Every container here can be iterated any number of times, and
# `c | fn` produces a lazily mapped container.
#


class Range:
    def __init__(self, count: int):
        self.count = count

    def __repr__(self) -> str:
        return f"Range({self.count})"

    def __len__(self) -> int:
        return max(self.count, 0)

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.count))

    def __or__(self, fn: Callable) -> "Transformed":
        return Transformed(self, fn)


#
# Zipped advances all its containers in lockstep and ends only when
# every one of them ends on the same step. Containers that end early
# are an error in strict mode (the default, see config `zip.strict`),
# otherwise iteration stops with the shortest one.
#

_END = object()


class Zipped:
    def __init__(self, *containers: Iterable, strict: Optional[bool] = None):
        self.containers = containers
        self.strict = strict

    def __repr__(self) -> str:
        return f"Zipped{self.containers}"

    def __iter__(self) -> Iterator[Tuple]:
        strict = config.get("zip.strict") if self.strict is None else self.strict
        cursors = [iter(c) for c in self.containers]
        if len(cursors) == 0:
            return
        while True:
            items = tuple(next(c, _END) for c in cursors)
            ended = [i for i, x in enumerate(items) if x is _END]
            if len(ended) == len(items):
                return
            if len(ended) > 0:
                if strict:
                    msg = f"zipped sequence(s) at position(s) {ended} ended before the others"
                    raise UnequalLengthError(msg)
                return
            yield items

    def __or__(self, fn: Callable) -> "Transformed":
        return Transformed(self, fn)


class Transformed:
    def __init__(self, container: Iterable, fn: Callable):
        self.container = container
        self.fn = fn

    def __len__(self) -> int:
        return len(self.container)  # type: ignore

    def __iter__(self) -> Iterator:
        for x in self.container:
            yield self.fn(x)

    def __or__(self, fn: Callable) -> "Transformed":
        return Transformed(self, fn)


#
# builders and folds
#


def irange(count: int) -> Range:
    return Range(count)


def zip_ranges(*containers: Iterable, strict: Optional[bool] = None) -> Zipped:
    return Zipped(*containers, strict=strict)


def distance(container: Iterable) -> int:
    try:
        return len(container)  # type: ignore
    except TypeError:
        return sum(1 for _ in container)


# e.g. list(enumerated("ab")) == [(0, "a"), (1, "b")]
def enumerated(container: Iterable) -> Zipped:
    # one-shot iterables would be used up by distance()
    if not hasattr(container, "__len__"):
        container = list(container)
    return zip_ranges(irange(distance(container)), container)


def accumulate(container: Iterable, seed: Any, fn: Callable[[Any, Any], Any]) -> Any:
    return reduce(fn, container, seed)


def all_of(container: Iterable, pred: Callable[[Any], bool]) -> bool:
    return all(pred(x) for x in container)


def any_of(container: Iterable, pred: Callable[[Any], bool]) -> bool:
    return any(pred(x) for x in container)
