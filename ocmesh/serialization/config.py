"""Serialization configuration: optional checks around Morton encoding."""

import dataclasses
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# 21 bits per component * 3 components = 63 bits of a 64-bit code
COORD_BITS = 21
COORD_LIMIT = 1 << COORD_BITS


class MortonRangeError(ValueError):
    """A coordinate component lies outside [0, 2^21)."""


@dataclass
class SerializationConfig:
    # raise MortonRangeError instead of silently aliasing out-of-range input
    check_range: bool = False


_config = SerializationConfig()


def get_config() -> SerializationConfig:
    return _config


def set_config(**options) -> SerializationConfig:
    """Update the process-wide configuration in place and return it."""
    known = {f.name for f in dataclasses.fields(SerializationConfig)}
    unknown = set(options) - known
    if unknown:
        raise TypeError(f"Unknown serialization option(s): {sorted(unknown)}")
    for name, value in options.items():
        setattr(_config, name, value)
    logger.debug("Serialization config updated: %s", _config)
    return _config
