#!/usr/bin/env python3
"""Build a wrench polytope and report its sphere approximations.

The structure matrix is given row by row on the command line.

Usage:
    python3 analyze_wrench_set.py --row 1 0 --row 0 1 \
        --f-upper 1 1 --f-lower -1 -1 [--center 0 0] [--x-ref 0.2 0]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import numpy as np


def main(argv: Optional[list[str]] = None) -> int:
    """Run wrench set analysis."""
    parser = argparse.ArgumentParser(
        description="Compute the wrench polytope of a linear actuation model",
    )
    parser.add_argument(
        "--row", type=float, nargs="+", action="append", required=True,
        help="One row of the structure matrix As (repeat for each row)",
    )
    parser.add_argument(
        "--f-upper", type=float, nargs="+", required=True,
        help="Upper actuator force bounds",
    )
    parser.add_argument(
        "--f-lower", type=float, nargs="+", required=True,
        help="Lower actuator force bounds",
    )
    parser.add_argument(
        "--offset", type=float, nargs="+", default=None,
        help="Additive wrench offset (default: zeros)",
    )
    parser.add_argument(
        "--center", type=float, nargs="+", default=None,
        help="Reference wrench G for the capacity margin (default: zeros)",
    )
    parser.add_argument(
        "--x-ref", type=float, nargs="+", default=None,
        help="Point the max-radius sphere must contain (default: skip)",
    )
    parser.add_argument(
        "--buffer", type=float, default=0.0,
        help="Containment buffer for the max-radius sphere (default: 0.0)",
    )
    parser.add_argument(
        "--max-actuators", type=int, default=20,
        help="Largest actuator count to enumerate (default: 20)",
    )
    parser.add_argument(
        "--merge-duplicates", action="store_true",
        help="Merge triangulated facets sharing a hyperplane",
    )
    parser.add_argument(
        "--output", type=str, default=None,
        help="Output JSON path (default: no file)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
    )
    logger = logging.getLogger(__name__)

    from wrench_set import (
        ActuationModel,
        ApproximationFailedError,
        PolytopeConfig,
        SphereApproximator,
        build_wrench_polytope,
    )

    model = ActuationModel(
        As=np.array(args.row),
        F_u=np.array(args.f_upper),
        F_l=np.array(args.f_lower),
        offset=np.array(args.offset) if args.offset is not None else None,
    )

    logger.info("=" * 60)
    logger.info("Wrench Set Analysis")
    logger.info("=" * 60)
    logger.info(f"  Wrench dimension: {model.n_dofs}")
    logger.info(f"  Actuators: {model.n_actuators}")
    logger.info(f"  Combinations: {2 ** model.n_actuators}")
    logger.info("")

    config = PolytopeConfig(
        max_actuators=args.max_actuators,
        merge_duplicate_facets=args.merge_duplicates,
    )
    result = build_wrench_polytope(model, config)
    polytope = result.polytope

    if not result.ok:
        logger.info(f"No feasible wrench set: {result.reason}")
        return 1

    logger.info(f"  Hull facets: {polytope.n_faces}")
    logger.info(f"  Half-spaces: {polytope.n_halfspaces}")
    logger.info(f"  Volume: {polytope.volume:.6g}")
    logger.info("")

    approximator = SphereApproximator(polytope)
    G = np.array(args.center) if args.center is not None else np.zeros(model.n_dofs)

    spheres = {}
    spheres["capacity"] = approximator.capacity(G)
    try:
        spheres["chebyshev"] = approximator.chebyshev()
    except ApproximationFailedError as e:
        logger.info(f"  Chebyshev centre failed: {e}")
    if args.x_ref is not None:
        try:
            spheres["max_radius"] = approximator.max_radius(
                np.array(args.x_ref), args.buffer,
            )
        except ApproximationFailedError as e:
            logger.info(f"  Max-radius sphere failed: {e}")

    logger.info("Spheres:")
    for name, sphere in spheres.items():
        logger.info(
            f"  {name:<10}: center={np.round(sphere.center, 6).tolist()} "
            f"radius={sphere.radius:.6g}",
        )

    if args.output is not None:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_data = {
            "n_faces": polytope.n_faces,
            "A": polytope.A.tolist(),
            "b": polytope.b.tolist(),
            "volume": polytope.volume,
            "spheres": {
                name: {
                    "center": sphere.center.tolist(),
                    "radius": sphere.radius,
                }
                for name, sphere in spheres.items()
            },
        }
        with open(output_path, "w") as f:
            json.dump(output_data, f, indent=2)
        logger.info("")
        logger.info(f"Saved to {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
