"""Shared pytest fixtures."""

import numpy as np
import pytest

from wrench_set import ActuationModel, WrenchPolytope


@pytest.fixture
def identity_model():
    """Two independent actuators acting along x and y, |f| <= 1."""
    return ActuationModel(
        As=np.eye(2),
        F_u=np.array([1.0, 1.0]),
        F_l=np.array([-1.0, -1.0]),
    )


@pytest.fixture
def cube_model():
    """Three independent actuators in 3-D, wrench set is [-1, 1]^3."""
    return ActuationModel(
        As=np.eye(3),
        F_u=np.ones(3),
        F_l=-np.ones(3),
    )


@pytest.fixture
def redundant_planar_model():
    """Four unilateral actuators (cable-like) spanning the plane."""
    return ActuationModel(
        As=np.array([
            [1.0, 0.0, -1.0, 0.5],
            [0.0, 1.0, 0.5, -1.0],
        ]),
        F_u=np.array([2.0, 2.0, 2.0, 2.0]),
        F_l=np.array([0.1, 0.1, 0.1, 0.1]),
    )


@pytest.fixture
def random_spatial_model():
    """Random 3-DoF model with 5 actuators."""
    rng = np.random.default_rng(42)
    return ActuationModel(
        As=rng.uniform(-1.0, 1.0, (3, 5)),
        F_u=rng.uniform(0.5, 2.0, 5),
        F_l=-rng.uniform(0.5, 2.0, 5),
        offset=rng.uniform(-0.2, 0.2, 3),
    )


@pytest.fixture
def square_polytope():
    """2 x 2 square centred at the origin: |w1| <= 1, |w2| <= 1."""
    return WrenchPolytope.from_halfspaces(
        A=np.array([
            [1.0, 0.0],
            [-1.0, 0.0],
            [0.0, 1.0],
            [0.0, -1.0],
        ]),
        b=np.ones(4),
    )


@pytest.fixture
def rectangle_polytope():
    """4 x 2 rectangle centred at the origin: |w1| <= 2, |w2| <= 1."""
    return WrenchPolytope.from_halfspaces(
        A=np.array([
            [1.0, 0.0],
            [-1.0, 0.0],
            [0.0, 1.0],
            [0.0, -1.0],
        ]),
        b=np.array([2.0, 2.0, 1.0, 1.0]),
    )
