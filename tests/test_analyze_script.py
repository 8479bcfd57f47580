"""Tests for the analyze_wrench_set command-line driver."""

import importlib.util
import json
from pathlib import Path

import numpy as np
import pytest

from wrench_set import ApproximationFailedError, BoundingSphere, SphereApproximator

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "analyze_wrench_set.py"

SQUARE_ARGS = [
    "--row", "1", "0",
    "--row", "0", "1",
    "--f-upper", "1", "1",
    "--f-lower", "-1", "-1",
    "--x-ref", "0.25", "0",
]


@pytest.fixture
def script():
    spec = importlib.util.spec_from_file_location("analyze_wrench_set", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _fail(*args, **kwargs):
    raise ApproximationFailedError("simulated failure")


def _fixed_sphere(self, x_ref, buffer=0.0):
    return BoundingSphere(center=np.zeros(2), radius=1.0)


def _run(script, tmp_path):
    output = tmp_path / "out.json"
    assert script.main(SQUARE_ARGS + ["--output", str(output)]) == 0
    with open(output) as f:
        return json.load(f)["spheres"]


# ============================================================
# TestSphereReport
# ============================================================

class TestSphereReport:
    """Each approximation fails independently of the others."""

    def test_all_spheres(self, script, tmp_path, monkeypatch):
        monkeypatch.setattr(SphereApproximator, "max_radius", _fixed_sphere)
        spheres = _run(script, tmp_path)
        assert set(spheres) == {"capacity", "chebyshev", "max_radius"}
        assert spheres["chebyshev"]["radius"] == pytest.approx(1.0)

    def test_chebyshev_failure_keeps_max_radius(
        self, script, tmp_path, monkeypatch,
    ):
        monkeypatch.setattr(SphereApproximator, "chebyshev", _fail)
        monkeypatch.setattr(SphereApproximator, "max_radius", _fixed_sphere)
        spheres = _run(script, tmp_path)
        assert set(spheres) == {"capacity", "max_radius"}
        assert spheres["max_radius"]["radius"] == 1.0

    def test_max_radius_failure_keeps_chebyshev(
        self, script, tmp_path, monkeypatch,
    ):
        monkeypatch.setattr(SphereApproximator, "max_radius", _fail)
        spheres = _run(script, tmp_path)
        assert set(spheres) == {"capacity", "chebyshev"}
        assert spheres["capacity"]["radius"] == pytest.approx(1.0)
