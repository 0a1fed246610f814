"""Binary persistence of computed dynamic programs.

Layout (gzip compressed, little-endian)::

    u64 time_limit
    u64 variant_count              multi programs only
    f64 table[t][variant][x][y]    variant axis for multi programs only
    f64 field_probabilities[x][y]  or u64 field_types[x][y]

Kernels are not stored, loaded programs carry placeholder kernels.
"""
import gzip
import logging
import math
import struct
import zlib
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

from random_walk_dp.dp.base import DynamicProgramType, field_probabilities_from_types
from random_walk_dp.errors import DynamicProgramStoreError

logger = logging.getLogger(__name__)

HEADER_FMT = "<Q"
F64 = np.dtype("<f8")
U64 = np.dtype("<u8")


@dataclass
class StoredDynamicProgram:
    time_limit: int
    variants: Optional[int]
    table: np.ndarray
    trailer: np.ndarray


def save_dp(dp, path, field_types: bool = False) -> None:
    """Write ``dp`` to ``path``.

    Args:
        dp: Simple or multi dynamic program
        path: Target file
        field_types: Write the integer field type grid instead of the field probabilities
    """
    if field_types:
        trailer = dp.field_types()
        if trailer is None:
            raise ValueError("Dynamic program has no field types to store")
        if (trailer < 0).any():
            raise ValueError("Negative field type ids cannot be stored")
        mapped = field_probabilities_from_types(trailer, dp.type_probabilities or {}, dp.type_default)
        if not np.array_equal(mapped, dp.field_probabilities()):
            # barriers added on top of the types would be lost
            raise ValueError("Field types do not reproduce the field probabilities, "
                             "save with field_types=False instead")
        trailer = trailer.astype(U64)
    else:
        trailer = dp.field_probabilities().astype(F64)

    header = struct.pack(HEADER_FMT, dp.time_limit)
    if dp.kind == DynamicProgramType.MULTI:
        header += struct.pack(HEADER_FMT, dp.variants())

    try:
        with gzip.open(path, "wb") as f:
            f.write(header)
            f.write(np.ascontiguousarray(dp.table, dtype=F64).tobytes())
            f.write(np.ascontiguousarray(trailer).tobytes())
    except OSError as e:
        logger.error(f"Failed to save dynamic program to {path}: {e}")
        raise DynamicProgramStoreError(f"Could not write dynamic program to {path}: {e}") from e

    logger.info(f"Saved {dp!r} to {path}")


def _read(path) -> bytes:
    try:
        with gzip.open(path, "rb") as f:
            return f.read()
    except (OSError, EOFError, zlib.error) as e:
        logger.error(f"Failed to read dynamic program from {path}: {e}")
        raise DynamicProgramStoreError(f"Could not read dynamic program from {path}: {e}") from e


def load_dp(path, multi: bool, typed: bool = False) -> StoredDynamicProgram:
    """Read a file written by ``save_dp`` and check its size against its header.

    Args:
        path: File to read
        multi: Whether the file holds a multi program (with a variant count)
        typed: Whether the trailer holds field type ids instead of probabilities
    """
    raw = _read(path)
    header_size = struct.calcsize(HEADER_FMT) * (2 if multi else 1)
    if len(raw) < header_size:
        raise DynamicProgramStoreError(
            f"{path}: truncated header, expected {header_size} bytes, got {len(raw)}")

    time_limit, = struct.unpack_from(HEADER_FMT, raw, 0)
    variants = struct.unpack_from(HEADER_FMT, raw, 8)[0] if multi else None
    n = 2 * time_limit + 1
    shape = (time_limit + 1, variants, n, n) if multi else (time_limit + 1, n, n)

    table_count = math.prod(shape)
    expected = header_size + (table_count + n * n) * 8
    if len(raw) != expected:
        raise DynamicProgramStoreError(
            f"{path}: expected {expected} bytes for time limit {time_limit}"
            f"{f' and {variants} variants' if multi else ''}, got {len(raw)}")

    table = np.frombuffer(raw, dtype=F64, count=table_count, offset=header_size)
    trailer = np.frombuffer(raw, dtype=U64 if typed else F64, count=n * n,
                            offset=header_size + table_count * 8)

    logger.info(f"Loaded dynamic program with time limit {time_limit} from {path}")
    return StoredDynamicProgram(
        time_limit=time_limit,
        variants=variants,
        table=table.reshape(shape).astype(np.float64),
        trailer=trailer.reshape(n, n),
    )


def field_mask(data: StoredDynamicProgram, type_probabilities: Optional[Dict[int, float]],
               default: float = 1.0) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """Field probabilities and field types of a loaded program."""
    if type_probabilities is None:
        return data.trailer.astype(np.float64), None

    field_types = data.trailer.astype(np.int64)
    return field_probabilities_from_types(field_types, type_probabilities, default), field_types
