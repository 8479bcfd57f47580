"""Wrench polytope construction from actuator force bounds.

Algorithm:
1. Enumerate all 2^m bound-extreme force combinations
2. Map each through w = As @ f + offset
3. Compute the convex hull of the resulting wrench vertex cloud
4. Convert every hull facet to an outward half-space a . w <= b via the
   null space of its edge vectors, skipping facets whose edges do not
   define a unique hyperplane
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.linalg import null_space

from .actuation import ActuationModel
from .enumeration import enumerate_wrench_vertices
from .errors import DimensionMismatchError, InvalidHalfspaceError
from .hull import HullBackend, QhullBackend

logger = logging.getLogger(__name__)


@dataclass
class PolytopeConfig:
    """Configuration for wrench polytope construction.

    Attributes:
        orientation_tol: Minimum distance of a vertex from a candidate
            hyperplane for it to decide the half-space orientation.
        null_space_rcond: Relative singular value cutoff passed to
            scipy.linalg.null_space. None uses the scipy default.
        max_actuators: Largest actuator count accepted for enumeration.
        merge_duplicate_facets: Collapse triangulated facets that share a
            supporting hyperplane into a single half-space.
        merge_tol: Tolerance on (a, b) when merging duplicate half-spaces.
        qhull_options: Extra Qhull options for the default backend.
        chunk_size: Rows generated per enumeration chunk.
    """

    orientation_tol: float = 1e-6
    null_space_rcond: Optional[float] = None
    max_actuators: int = 20
    merge_duplicate_facets: bool = False
    merge_tol: float = 1e-9
    qhull_options: Optional[str] = None
    chunk_size: int = 4096


def _readonly(a: np.ndarray) -> np.ndarray:
    a = np.array(a, copy=True)
    a.setflags(write=False)
    return a


@dataclass(frozen=True, eq=False)
class WrenchPolytope:
    """H-representation A @ w <= b of the achievable wrench set.

    Attributes:
        n_faces: Number of hull facets before degeneracy filtering.
        A: Outward half-space normals (k, n), one per retained facet.
        b: Half-space offsets (k,).
        volume: Hull volume (area for n=2).
        wrench_combinations: Enumerated wrench vertices (2^m, n).
        convex_hull_indices: Facet-to-vertex index table from the hull.
    """

    n_faces: int
    A: np.ndarray
    b: np.ndarray
    volume: float
    wrench_combinations: np.ndarray
    convex_hull_indices: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "A", _readonly(np.atleast_2d(self.A)))
        object.__setattr__(self, "b", _readonly(np.ravel(self.b)))
        object.__setattr__(
            self, "wrench_combinations", _readonly(self.wrench_combinations),
        )
        object.__setattr__(
            self, "convex_hull_indices", _readonly(self.convex_hull_indices),
        )

    @classmethod
    def empty(cls, n_dofs: int = 0) -> "WrenchPolytope":
        """Zero-state polytope returned when no hull could be built."""
        return cls(
            n_faces=0,
            A=np.zeros((0, n_dofs)),
            b=np.zeros(0),
            volume=0.0,
            wrench_combinations=np.zeros((0, n_dofs)),
            convex_hull_indices=np.zeros((0, n_dofs), dtype=np.int64),
        )

    @classmethod
    def from_halfspaces(cls, A: np.ndarray, b: np.ndarray) -> "WrenchPolytope":
        """Wrap a known H-representation, one facet per row.

        Raises:
            DimensionMismatchError: A and b have different row counts.
            InvalidHalfspaceError: A row of A is all zero, or A or b holds a
                non-finite entry.
        """
        A = np.atleast_2d(np.asarray(A, dtype=np.float64))
        b = np.asarray(b, dtype=np.float64).ravel()
        if A.shape[0] != b.shape[0]:
            raise DimensionMismatchError(
                f"A has {A.shape[0]} rows but b has {b.shape[0]} entries"
            )
        if not (np.all(np.isfinite(A)) and np.all(np.isfinite(b))):
            raise InvalidHalfspaceError("A and b must be finite")
        zero_rows = np.flatnonzero(np.linalg.norm(A, axis=1) == 0.0)
        if zero_rows.size:
            raise InvalidHalfspaceError(
                f"rows {zero_rows.tolist()} of A have a zero normal"
            )
        return cls(
            n_faces=len(b),
            A=A,
            b=b,
            volume=float("nan"),
            wrench_combinations=np.zeros((0, A.shape[1])),
            convex_hull_indices=np.zeros((0, A.shape[1]), dtype=np.int64),
        )

    @property
    def n_dofs(self) -> int:
        return self.A.shape[1]

    @property
    def n_halfspaces(self) -> int:
        return self.A.shape[0]

    @property
    def is_empty(self) -> bool:
        """True when the polytope carries no usable half-space."""
        return self.n_faces == 0 or self.n_halfspaces == 0

    def slack(self, w: np.ndarray) -> np.ndarray:
        """Per-row slack b - A @ w. Negative entries are violated rows."""
        return self.b - self.A @ np.asarray(w, dtype=np.float64)

    def contains(self, w: np.ndarray, tol: float = 1e-9) -> bool:
        """Whether wrench w satisfies every half-space within tol."""
        if self.is_empty:
            return False
        return bool(np.all(self.slack(w) >= -tol))


@dataclass(frozen=True, eq=False)
class PolytopeBuildResult:
    """Outcome of a polytope build.

    Attributes:
        ok: True if at least one half-space was produced.
        polytope: Built polytope, or the zero state when the hull failed.
        reason: Diagnostic message when ok is False.
    """

    ok: bool
    polytope: WrenchPolytope
    reason: str = ""


def facet_halfspace(
    W: np.ndarray,
    facet: np.ndarray,
    orientation_tol: float = 1e-6,
    rcond: Optional[float] = None,
) -> Optional[tuple[np.ndarray, float]]:
    """Outward half-space supported by one hull facet.

    Args:
        W: Wrench vertex cloud (N, n).
        facet: Indices of the facet vertices (n,).
        orientation_tol: Distance above which an off-facet vertex decides
            the orientation.
        rcond: Cutoff for scipy.linalg.null_space.

    Returns:
        (a, b) with every vertex satisfying a @ w <= b, or None if the
        facet edges leave more than one normal direction.
    """
    first = W[facet[0]]
    Wi = W[facet[1:]] - first
    Ti = null_space(Wi, rcond=rcond).T
    if Ti.shape[0] != 1:
        return None

    a = Ti[0]
    b = float(a @ first)

    residual = W @ a - b
    off_facet = np.ones(len(W), dtype=bool)
    off_facet[facet] = False
    deciding = np.flatnonzero(off_facet & (np.abs(residual) > orientation_tol))
    if deciding.size and residual[deciding[0]] > 0:
        a, b = -a, -b

    return a, b


def merge_duplicate_halfspaces(
    A: np.ndarray,
    b: np.ndarray,
    tol: float = 1e-9,
) -> tuple[np.ndarray, np.ndarray]:
    """Drop rows whose (a, b) repeat an earlier row within tol."""
    keep: list[int] = []
    for i in range(len(b)):
        row = np.append(A[i], b[i])
        if not any(
            np.allclose(row, np.append(A[j], b[j]), rtol=0.0, atol=tol)
            for j in keep
        ):
            keep.append(i)
    return A[keep], b[keep]


def halfspaces_from_hull(
    W: np.ndarray,
    simplices: np.ndarray,
    config: PolytopeConfig,
) -> tuple[np.ndarray, np.ndarray]:
    """Convert a hull facet table to stacked half-spaces (A, b)."""
    n = W.shape[1]
    rows: list[np.ndarray] = []
    offsets: list[float] = []

    for i, facet in enumerate(simplices):
        hs = facet_halfspace(
            W, facet, config.orientation_tol, config.null_space_rcond,
        )
        if hs is None:
            logger.debug("Skipping degenerate facet %d: %s", i, facet.tolist())
            continue
        rows.append(hs[0])
        offsets.append(hs[1])

    A = np.array(rows).reshape(-1, n)
    b = np.array(offsets, dtype=np.float64)

    if config.merge_duplicate_facets and len(b):
        A, b = merge_duplicate_halfspaces(A, b, config.merge_tol)

    return A, b


class PolytopeBuilder:
    """Builds WrenchPolytope objects from actuation models.

    Usage:
        builder = PolytopeBuilder()
        polytope = builder.build(As, F_u, F_l)
        if polytope.is_empty:
            ...
    """

    def __init__(
        self,
        config: Optional[PolytopeConfig] = None,
        hull_backend: Optional[HullBackend] = None,
    ):
        """Initialize builder.

        Args:
            config: Construction configuration.
            hull_backend: Hull computation backend. Defaults to Qhull.
        """
        self.config = config if config is not None else PolytopeConfig()
        self.hull_backend = (
            hull_backend if hull_backend is not None
            else QhullBackend(self.config.qhull_options)
        )

    def build(
        self,
        As: np.ndarray,
        F_u: np.ndarray,
        F_l: np.ndarray,
        offset: Optional[np.ndarray] = None,
    ) -> WrenchPolytope:
        """Build the polytope, returning the zero state if the hull fails.

        Raises:
            DimensionMismatchError: Inconsistent input shapes.
            InvalidBoundsError: Some F_l[i] > F_u[i].
            TractabilityError: Too many actuators to enumerate.
        """
        model = ActuationModel(As=As, F_u=F_u, F_l=F_l, offset=offset)
        return self.build_model(model).polytope

    def build_model(self, model: ActuationModel) -> PolytopeBuildResult:
        """Build the polytope for a validated model with an explicit outcome."""
        W = enumerate_wrench_vertices(
            model, self.config.max_actuators, self.config.chunk_size,
        )

        try:
            hull = self.hull_backend.compute(W)
        except (RuntimeError, ValueError) as e:
            logger.warning("Wrench set hull failed, polytope is empty: %s", e)
            return PolytopeBuildResult(
                ok=False,
                polytope=WrenchPolytope.empty(model.n_dofs),
                reason=str(e),
            )

        A, b = halfspaces_from_hull(W, hull.simplices, self.config)

        polytope = WrenchPolytope(
            n_faces=hull.n_facets,
            A=A,
            b=b,
            volume=hull.volume,
            wrench_combinations=W,
            convex_hull_indices=hull.simplices,
        )

        logger.info(
            "Wrench set: %d vertices, %d facets, %d half-spaces, volume %.6g",
            len(W), hull.n_facets, len(b), hull.volume,
        )

        if len(b) == 0:
            return PolytopeBuildResult(
                ok=False,
                polytope=polytope,
                reason=f"all {hull.n_facets} hull facets are degenerate",
            )
        return PolytopeBuildResult(ok=True, polytope=polytope)


def build_wrench_polytope(
    model: ActuationModel,
    config: Optional[PolytopeConfig] = None,
    hull_backend: Optional[HullBackend] = None,
) -> PolytopeBuildResult:
    """Build the wrench polytope of model. See PolytopeBuilder.build_model."""
    return PolytopeBuilder(config, hull_backend).build_model(model)
