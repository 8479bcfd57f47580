"""Enumeration of bound-extreme actuator force combinations.

Combination k selects F_u[i] for every set bit of k and F_l[i] otherwise,
with the most significant bit assigned to actuator 0. The count is 2^m, so
callers bound m through PolytopeConfig.max_actuators.
"""

import logging
from typing import Iterator

import numpy as np

from .actuation import ActuationModel
from .errors import TractabilityError

logger = logging.getLogger(__name__)


def check_tractable(n_actuators: int, max_actuators: int) -> None:
    """Raise TractabilityError if 2^n_actuators points would be too many."""
    if n_actuators > max_actuators:
        raise TractabilityError(
            f"{n_actuators} actuators give 2^{n_actuators} combinations; "
            f"limit is {max_actuators} actuators"
        )


def combination_bits(indices: np.ndarray, n_actuators: int) -> np.ndarray:
    """Binary selection matrix for the given combination indices.

    Args:
        indices: Combination indices (N,).
        n_actuators: Number of actuators m.

    Returns:
        Array (N, m) of 0/1, column 0 holding the most significant bit.
    """
    shifts = np.arange(n_actuators - 1, -1, -1, dtype=np.int64)
    return (np.asarray(indices, dtype=np.int64)[:, None] >> shifts) & 1


def force_combinations(
    model: ActuationModel,
    start: int = 0,
    stop: int | None = None,
) -> np.ndarray:
    """Bound-extreme force vectors for combinations start..stop-1.

    Returns:
        Force matrix (stop - start, m).
    """
    m = model.n_actuators
    if stop is None:
        stop = 2 ** m
    beta = combination_bits(np.arange(start, stop), m)
    return np.where(beta == 1, model.F_u, model.F_l)


def iter_force_combinations(
    model: ActuationModel,
    chunk_size: int = 4096,
) -> Iterator[np.ndarray]:
    """Lazily yield force combinations in chunks of at most chunk_size rows."""
    n_points = 2 ** model.n_actuators
    for start in range(0, n_points, chunk_size):
        yield force_combinations(
            model, start, min(start + chunk_size, n_points),
        )


def enumerate_wrench_vertices(
    model: ActuationModel,
    max_actuators: int = 20,
    chunk_size: int = 4096,
) -> np.ndarray:
    """Map every force combination through the model.

    Args:
        model: Actuation model.
        max_actuators: Tractability bound on m.
        chunk_size: Rows generated per enumeration chunk.

    Returns:
        Wrench vertex cloud (2^m, n), row k from combination k.
    """
    check_tractable(model.n_actuators, max_actuators)
    logger.debug(
        "Enumerating %d force combinations (m=%d, n=%d)",
        2 ** model.n_actuators, model.n_actuators, model.n_dofs,
    )
    chunks = [
        model.wrench(F)
        for F in iter_force_combinations(model, chunk_size)
    ]
    return np.vstack(chunks)
