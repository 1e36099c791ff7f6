#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
# @FileName      : naive_order
# @description   : bit-by-bit Morton code, reference for the table-driven codec
"""
import numpy as np

from .config import COORD_BITS


def morton_naive(x, y, z, depth=COORD_BITS):
    """Morton code of a single point, one bit per iteration."""
    result = 0
    for i in range(depth):
        result |= ((x >> i) & 1) << (3 * i)
        result |= ((y >> i) & 1) << (3 * i + 1)
        result |= ((z >> i) & 1) << (3 * i + 2)
    return result


def unmorton_naive(code, depth=COORD_BITS):
    x = y = z = 0
    for i in range(depth):
        x |= ((code >> (3 * i)) & 1) << i
        y |= ((code >> (3 * i + 1)) & 1) << i
        z |= ((code >> (3 * i + 2)) & 1) << i
    return x, y, z


def space_filling_encode_naive(coords, depth=COORD_BITS):
    """Batch Morton codes of (N, 3) coordinates, naive method."""
    if hasattr(coords, "numpy"):
        coords = coords.numpy()
    return np.array(
        [morton_naive(int(x), int(y), int(z), depth) for x, y, z in coords],
        dtype=np.uint64,
    )
