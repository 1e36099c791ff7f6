import numpy as np
import torch

from .z_order import xyz2key as z_order_encode_
from .z_order import key2xyz as z_order_decode_


def _as_tensor(data, dtype=np.int64):
    """Tensors pass through; arrays, lists and ints become int64 tensors."""
    if isinstance(data, torch.Tensor):
        return data
    if not isinstance(data, np.ndarray):
        data = np.asarray(data, dtype=dtype)
    # uint64 codes keep their bit pattern in int64
    return torch.from_numpy(data.astype(np.int64, copy=False))


@torch.inference_mode()
def encode(grid_coord):
    """
    Morton codes of an (N, 3) integer grid, shape (N,).

    ``grid_coord`` may be a tensor, a numpy array or a nested list.
    """
    grid_coord = _as_tensor(grid_coord)
    assert grid_coord.dim() == 2 and grid_coord.shape[-1] == 3, (
        f"grid_coord must have shape (N, 3), got {tuple(grid_coord.shape)}"
    )
    return z_order_encode(grid_coord)


@torch.inference_mode()
def decode(code):
    """(N, 3) coordinates of int64 or uint64 codes; lists and ints are read as uint64."""
    code = _as_tensor(code, dtype=np.uint64)
    return z_order_decode(code)


@torch.inference_mode()
def serialize(grid_coord):
    """
    Morton order of a coordinate batch.

    Returns (code, order, inverse): ``code[order]`` is ascending and
    ``order[inverse]`` is ``arange(N)``.
    """
    code = encode(grid_coord)
    order = torch.argsort(code)
    inverse = torch.zeros_like(order).scatter_(
        dim=0,
        index=order,
        src=torch.arange(0, code.shape[0], device=order.device),
    )
    return code, order, inverse


def z_order_encode(grid_coord: torch.Tensor):
    x, y, z = grid_coord[:, 0].long(), grid_coord[:, 1].long(), grid_coord[:, 2].long()
    code = z_order_encode_(x, y, z)
    return code


def z_order_decode(code: torch.Tensor):
    x, y, z = z_order_decode_(code)
    grid_coord = torch.stack([x, y, z], dim=-1)  # (N,  3)
    return grid_coord
