# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

#
# Errors raised by ndaccess. All of them signal programmer errors
# and are raised at the point of violation - nothing here is meant
# to be caught and retried.
#


class NdAccessError(ValueError):
    pass


class LogicError(NdAccessError):
    pass


# provider shape disagrees with its buffer, or zipped arrays disagree
class ShapeMismatchError(LogicError):
    pass


# fixed-length sequence built from a range of the wrong length
class WrongLengthError(LogicError):
    pass


# strict lockstep zip over sequences of different length
class UnequalLengthError(LogicError):
    pass


class OutOfRangeError(NdAccessError, IndexError):
    def __init__(self, offset: int, count: int):
        super().__init__(f"buffer index out of range on index {offset} / {count}")
        self.offset = offset
        self.count = count
