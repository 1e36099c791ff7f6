"""
Morton (Z-order) code of 3D integer coordinates.

Voxels of the linear octree are stored in pre-order, which spatially is the
Z-order (Morton order) space-filling path. The code of a coordinate vector
interleaves the bits of its components:

    x = xxxx, y = yyyy, z = zzzz  ->  zyxzyxzyxzyx

The relative order of the axes inside the interleave fixes the traversal
order of the octree and is hardcoded in ``Axis``. A 64-bit code holds 21 bits
per component.
"""

from typing import NamedTuple, Optional, Sequence, Tuple

import torch

from .config import COORD_LIMIT, MortonRangeError, get_config
from .interleave_lut import AXIS_TABLES, Axis, get_interleave_lut

UINT64_MASK = (1 << 64) - 1

# (shift, mask) stages collapsing every third bit into a contiguous value
COMPACT_STAGES = (
    (0, 0x9249249249249249),
    (2, 0x30C30C30C30C30C3),
    (4, 0xF00F00F00F00F00F),
    (8, 0x00FF0000FF0000FF),
    (16, 0xFFFF00000000FFFF),
    (32, 0x00000000FFFFFFFF),
)


class UVec3(NamedTuple):
    x: int
    y: int
    z: int


def check_range(x: int, y: int, z: int) -> None:
    if not get_config().check_range:
        return
    for name, value in zip("xyz", (x, y, z)):
        if not 0 <= value < COORD_LIMIT:
            raise MortonRangeError(
                f"Component {name}={value} is outside [0, {COORD_LIMIT})"
            )


def spread(value: int, axis: Axis = Axis.X) -> int:
    """Interleave one component, placed on the bit stream of ``axis``."""
    table = AXIS_TABLES[axis]
    value = int(value)
    low = value & 0xFF
    middle = value >> 8 & 0xFF
    high = value >> 16 & 0xFF
    return (table[high] << 48 | table[middle] << 24 | table[low]) & UINT64_MASK


def encode(x: int, y: int, z: int) -> int:
    check_range(x, y, z)
    return spread(x, Axis.X) | spread(y, Axis.Y) | spread(z, Axis.Z)


def encode_vec(coordinates: Sequence[int]) -> int:
    x, y, z = coordinates
    return encode(x, y, z)


def compact(code: int, axis: Axis = Axis.X) -> int:
    """Unpack the component of ``axis`` from a code; the result fits in 32 bits."""
    # numpy integers do not shift by an IntEnum, work on plain ints
    code = (int(code) & UINT64_MASK) >> int(axis)
    for shift, mask in COMPACT_STAGES:
        code = (code | code >> shift) & mask
    return code


def decode(code: int) -> UVec3:
    return UVec3(
        compact(code, Axis.X),
        compact(code, Axis.Y),
        compact(code, Axis.Z),
    )


# --- batched tensor version ---


def _as_int64(value: int) -> int:
    """Reinterpret an unsigned 64-bit constant as the signed int64 bit pattern."""
    return value - (1 << 64) if value >= 1 << 63 else value


def _check_range_tensor(*components: torch.Tensor) -> None:
    if not get_config().check_range:
        return
    for name, value in zip("xyz", components):
        bad = (value < 0) | (value >= COORD_LIMIT)
        if bool(bad.any()):
            raise MortonRangeError(
                f"{int(bad.sum())} {name} component(s) outside [0, {COORD_LIMIT})"
            )


def xyz2key(x: torch.Tensor, y: torch.Tensor, z: torch.Tensor) -> torch.Tensor:
    """Morton codes of the coordinates, as int64 bit patterns of the 64-bit codes."""
    EX, EY, EZ = get_interleave_lut().encode_lut(x.device)
    x, y, z = x.long(), y.long(), z.long()
    _check_range_tensor(x, y, z)

    key = EX[x & 255] | EY[y & 255] | EZ[z & 255]
    key16 = EX[(x >> 8) & 255] | EY[(y >> 8) & 255] | EZ[(z >> 8) & 255]
    key24 = EX[(x >> 16) & 255] | EY[(y >> 16) & 255] | EZ[(z >> 16) & 255]
    # bits pushed past position 63 are dropped, as in a 64-bit register
    return (key24 & 0xFFFF) << 48 | key16 << 24 | key


def _compact_tensor(key: torch.Tensor, axis: Axis) -> torch.Tensor:
    # int64 ">>" is arithmetic, the first mask turns it into a logical shift
    _, first_mask = COMPACT_STAGES[0]
    key = (key >> int(axis)) & _as_int64(first_mask & (UINT64_MASK >> axis))
    for shift, mask in COMPACT_STAGES[1:]:
        key = (key | key >> shift) & _as_int64(mask)
    return key


def key2xyz(
    key: torch.Tensor, axes: Optional[Sequence[Axis]] = None
) -> Tuple[torch.Tensor, ...]:
    key = key.long()
    if axes is None:
        axes = tuple(Axis)
    return tuple(_compact_tensor(key, axis) for axis in axes)
