#!/usr/bin/env python3
"""
Tests for pyPerfToolbox nodal module (outflow / OPR curves).
Run with: python3 -m pytest pyperftoolbox/tests/ -v
"""

import sys
import os
import math
import importlib

# Ensure project parent is on path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.dirname(project_root))

from pyperftoolbox.classes import CurvePoint, SolveResult
from pyperftoolbox.constants import Z_MAX_ITER
from pyperftoolbox.shared_fns import CorrelationDomainError
from pyperftoolbox.friction import fanning
from pyperftoolbox.gas import gas_tc_pc
from pyperftoolbox.spacing import CurveSpacing
from pyperftoolbox.inflow import inflow_model, ipr_curve
from pyperftoolbox.nodal import Conduit, OilFluid, GasFluid, oil_fbhp, gas_fbhp, outflow_curve

gas_module = importlib.import_module("pyperftoolbox.gas.gas")

TUBING = Conduit(length=8000, tid=2.441, theta=90, rough=0.0006)
OIL = OilFluid(rho=53, uo=2)
GAS = GasFluid(sg=0.65, tht=80, bht=180)


# ============================================================================
#  Conduit & fluids
# ============================================================================

def test_conduit_roughness_and_geometry():
    assert TUBING.rel_rough == 0.0006
    assert abs(Conduit(8000, 3.0, rough=0.05).rel_rough - 0.2) < 1e-12
    assert abs(TUBING.sin_theta - 1.0) < 1e-12
    assert Conduit(8000, 2.441, theta=0).sin_theta == 0


def test_conduit_validation():
    for args in ((0, 2.441), (8000, 0), (8000, -1)):
        try:
            Conduit(*args)
            assert False, f"Should have raised ValueError for {args}"
        except ValueError:
            pass


def test_fluid_validation():
    try:
        OilFluid(rho=0, uo=2)
        assert False, "Should have raised ValueError"
    except ValueError:
        pass
    try:
        GasFluid(sg=0.5, tht=80, bht=180)
        assert False, "Should have raised CorrelationDomainError"
    except CorrelationDomainError:
        pass


# ============================================================================
#  Oil
# ============================================================================

def test_oil_static_column():
    assert abs(oil_fbhp(200, 0, TUBING, OIL) - (200 + 0.433 * 53 / 62.4 * 8000)) < 1e-9


def test_oil_horizontal_has_no_hydrostatic_term():
    flat = Conduit(length=2000, tid=2.441, theta=0)
    assert oil_fbhp(200, 0, flat, OIL) == 200


def test_oil_laminar_friction():
    viscous = OilFluid(rho=53, uo=50)
    q = 50
    re = 1.4777 * 53 * q / (2.441 * 50)
    assert re < 2100
    expected = 200 + 0.433 * 53 / 62.4 * 8000 + 7.35e-7 * (16 / re) * 53 * q * q * 8000 / 2.441**5
    assert abs(oil_fbhp(200, q, TUBING, viscous) - expected) < 1e-9


def test_oil_friction_model_selection():
    q = 3000
    re = 1.4777 * 53 * q / (2.441 * 2)
    for model in ('CHEN', 'SWAMEE_JAIN', 'Colebrook-White (1939)'):
        f = fanning(re, 0.0006, model)
        expected = 200 + 0.433 * 53 / 62.4 * 8000 + 7.35e-7 * f * 53 * q * q * 8000 / 2.441**5
        assert abs(oil_fbhp(200, q, TUBING, OIL, model) - expected) < 1e-9


def test_oil_default_span_targets_re_1e5():
    pts = outflow_curve(200, TUBING, OIL)
    span = 1e5 * 2.441 * 2 / (1.4777 * 53) * 1.2
    assert len(pts) == 25
    assert pts[0].rate == 0
    assert abs(pts[-1].rate - span) < 1e-6
    assert all(pts[i + 1].pressure >= pts[i].pressure for i in range(len(pts) - 1))


def test_oil_span_from_hint_and_clamps():
    assert abs(outflow_curve(200, TUBING, OIL, q_hint=1000)[-1].rate - 1250) < 1e-9
    assert abs(outflow_curve(200, TUBING, OIL, q_hint=100)[-1].rate - 300) < 1e-9
    assert abs(outflow_curve(200, TUBING, OilFluid(rho=53, uo=1000))[-1].rate - 20000) < 1e-9


def test_oil_delta_q_spacing():
    pts = outflow_curve(200, TUBING, OIL, CurveSpacing('Delta Flowrate', 250), q_hint=800)
    assert [p.rate for p in pts] == [0, 250, 500, 750, 1000]


def test_hint_from_inflow_curve():
    ipr = ipr_curve(inflow_model('LIQUID', 'PSEUDOSTEADY', k=50, h=20, bo=1.2, uo=2, pavg=3000, re=1000, rw=0.3))
    opr = outflow_curve(200, TUBING, OIL, q_hint=ipr[-1].rate)
    assert abs(opr[-1].rate - 1.25 * ipr[-1].rate) < 1e-9


# ============================================================================
#  Gas
# ============================================================================

def test_gas_static_column():
    p = gas_fbhp(500, 0, TUBING, GAS)
    assert 500 < p < 700, f"Static gas column bhp {p}"


def test_gas_horizontal_no_flow_is_surface_pressure():
    flat = Conduit(length=2000, tid=2.441, theta=0)
    assert abs(gas_fbhp(500, 0, flat, GAS) - 500) < 1e-9


def test_gas_bhp_non_decreasing_in_rate():
    pts = outflow_curve(500, TUBING, GAS, CurveSpacing('NPOINTS', 11))
    assert len(pts) == 11
    assert abs(pts[-1].rate - 5000) < 1e-9
    assert all(pts[i + 1].pressure >= pts[i].pressure for i in range(len(pts) - 1))
    assert pts[-1].pressure > pts[0].pressure + 50


def test_gas_span_from_hint():
    pts = outflow_curve(500, TUBING, GAS, CurveSpacing('DELTA_Q', 500), q_hint=2000)
    assert [p.rate for p in pts] == [0, 500, 1000, 1500, 2000, 2500]


def test_gas_z_and_viscosity_methods_selectable():
    base = gas_fbhp(500, 3000, TUBING, GAS)
    for zmethod, ugmethod in (('DPR', 'LGE1'), ('HY', 'LGEM'), ('DAK', 'CARR')):
        alt = gas_fbhp(500, 3000, TUBING, GasFluid(0.65, 80, 180, zmethod, ugmethod))
        assert abs(alt - base) / base < 0.02, f"{zmethod}/{ugmethod}: {alt} vs {base}"


def test_gas_out_of_domain_propagates():
    cold = GasFluid(sg=0.65, tht=-100, bht=-90)
    try:
        outflow_curve(500, TUBING, cold)
        assert False, "Should have raised CorrelationDomainError"
    except CorrelationDomainError:
        pass


def _dak_failing_above(ppr_max):
    dak = gas_module._Z_DIC["DAK"]

    def wrapped(ppr, tpr):
        if ppr > ppr_max:
            return SolveResult(None, Z_MAX_ITER)
        return dak(ppr, tpr)
    return dak, wrapped


def test_gas_curve_empty_when_every_rate_fails_to_converge():
    ppc = gas_tc_pc(0.65)[1]
    # The static column below 1800 psia passes 3 x Ppc before reaching bottom
    assert 1800 < 3.0 * ppc < gas_fbhp(1800, 0, TUBING, GAS)
    dak, wrapped = _dak_failing_above(3.0)
    gas_module._Z_DIC["DAK"] = wrapped
    try:
        assert gas_fbhp(1800, 0, TUBING, GAS) is None
        assert outflow_curve(1800, TUBING, GAS) == []
    finally:
        gas_module._Z_DIC["DAK"] = dak


def test_gas_curve_drops_only_non_converged_rates():
    spacing = CurveSpacing('NPOINTS', 11)
    full = outflow_curve(500, TUBING, GAS, spacing)
    assert len(full) == 11
    ppc = gas_tc_pc(0.65)[1]
    p_cut = full[5].pressure + 1.0
    dak, wrapped = _dak_failing_above(p_cut / ppc)
    gas_module._Z_DIC["DAK"] = wrapped
    try:
        pts = outflow_curve(500, TUBING, GAS, spacing)
    finally:
        gas_module._Z_DIC["DAK"] = dak
    assert 6 <= len(pts) < len(full), f"Kept {len(pts)} of {len(full)} points"
    assert pts == full[:len(pts)]
    for pt in pts:
        assert pt.pressure is not None and math.isfinite(pt.pressure) and pt.pressure <= p_cut
        assert math.isfinite(pt.rate)


# ============================================================================
#  Curve level checks
# ============================================================================

def test_delta_p_spacing_rejected():
    try:
        outflow_curve(200, TUBING, OIL, CurveSpacing('DELTA_P', 100))
        assert False, "Should have raised ValueError"
    except ValueError:
        pass


def test_unknown_fluid_rejected():
    try:
        outflow_curve(200, TUBING, object())
        assert False, "Should have raised TypeError"
    except TypeError:
        pass


def test_points_are_curve_points():
    pts = outflow_curve(200, TUBING, OIL, CurveSpacing('NPOINTS', 3))
    assert all(isinstance(p, CurvePoint) for p in pts)
