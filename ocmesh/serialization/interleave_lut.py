#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
# @FileName      : interleave_lut
# @description   : byte -> 3-way bit spread lookup tables, scalar and per-device tensor
"""
import enum
import logging
import threading
from typing import Dict, Tuple

import torch

logger = logging.getLogger(__name__)


class Axis(enum.IntEnum):
    """Bit offset of each coordinate stream inside a code (z y x z y x ... x)."""

    X = 0
    Y = 1
    Z = 2


# masks[level] keeps the bits of the target pattern after the shift by 1 << level
INTERLEAVE_MASKS = (
    0,
    0x49249249,
    0xC30C30C3,
    0x0F00F00F,
    0xFF0000FF,
)


def interleave(value: int, level: int = 4) -> int:
    """
    Spread the 8 bits of ``value`` to positions 0, 3, 6, ..., 21.

    Butterfly over shifts 16, 8, 4, 2:

        x = (x | x << 16) & 0xFF0000FF
        x = (x | x <<  8) & 0x0F00F00F
        x = (x | x <<  4) & 0xC30C30C3
        x = (x | x <<  2) & 0x49249249
    """
    value &= 0xFF
    while level > 0:
        value = (value | value << (1 << level)) & INTERLEAVE_MASKS[level]
        level -= 1
    return value


def build_table(shift: int = 0) -> Tuple[int, ...]:
    """Spread pattern of every byte value, pre-shifted by ``shift`` bits."""
    return tuple(interleave(b) << shift for b in range(256))


# Built once at import time and never mutated afterwards.
INTERLEAVE_TABLE = build_table()
AXIS_TABLES = tuple(build_table(int(axis)) for axis in Axis)


class InterleaveLUT:
    def __init__(self):
        """Tensor copies of the per-axis tables, the CPU entry is built eagerly."""
        self._lock = threading.Lock()
        cpu = torch.device("cpu")
        self._encode: Dict[torch.device, Tuple[torch.Tensor, ...]] = {
            cpu: self.compute_lut(cpu)
        }

    @staticmethod
    def compute_lut(device: torch.device) -> Tuple[torch.Tensor, ...]:
        return tuple(
            torch.tensor(table, dtype=torch.int64, device=device)
            for table in AXIS_TABLES
        )

    def encode_lut(self, device=torch.device("cpu")) -> Tuple[torch.Tensor, ...]:
        """(EX, EY, EZ) on ``device``, building them on first use."""
        device = torch.device(device)
        lut = self._encode.get(device)
        if lut is not None:
            return lut

        with self._lock:
            # another thread may have finished the build while we waited
            lut = self._encode.get(device)
            if lut is None:
                lut = self.compute_lut(device)
                self._encode[device] = lut
                logger.debug("Built interleave LUT on %s", device)
        return lut

    @property
    def devices(self):
        return tuple(self._encode.keys())


_interleave_lut = InterleaveLUT()


def get_interleave_lut() -> InterleaveLUT:
    return _interleave_lut
