from .config import (
    COORD_BITS,
    COORD_LIMIT,
    MortonRangeError,
    SerializationConfig,
    get_config,
    set_config,
)
from .interleave_lut import (
    AXIS_TABLES,
    INTERLEAVE_TABLE,
    Axis,
    InterleaveLUT,
    build_table,
    interleave,
)
from .z_order import (
    UVec3,
    compact,
    decode,
    encode,
    encode_vec,
    key2xyz,
    spread,
    xyz2key,
)
from .default import serialize
