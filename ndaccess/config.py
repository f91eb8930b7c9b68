# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from typing import Any, Union

import torch
from donfig import Config

config = Config(
    "ndaccess",
    defaults=[
        {
            "buffer": {"dtype": "float64"},
            "zip": {"strict": True},
            "zipped": {"check_shapes": True},
        }
    ],
)

# storage dtype: a torch dtype for tensor-backed buffers, or `object`
# for buffers of arbitrary Python values (indexes, tuples)
StorageDtype = Union[torch.dtype, type]

_PY_DTYPES = {int: torch.long, float: torch.float64, bool: torch.bool}


def parse_dtype(data: Any) -> StorageDtype:
    if data is None:
        data = config.get("buffer.dtype")
    if data is object or data == "object":
        return object
    if isinstance(data, torch.dtype):
        return data
    if isinstance(data, type) and data in _PY_DTYPES:
        return _PY_DTYPES[data]
    if isinstance(data, str):
        dtype = getattr(torch, data, None)
        if isinstance(dtype, torch.dtype):
            return dtype
    msg = f"Expected a torch dtype, dtype name or object, got {data!r} instead."
    raise ValueError(msg)
