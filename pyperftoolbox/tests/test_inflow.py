#!/usr/bin/env python3
"""
Tests for pyPerfToolbox inflow (IPR) module.
Run with: python3 -m pytest pyperftoolbox/tests/ -v
"""

import sys
import os
import math
import inspect
import importlib

# Ensure project parent is on path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.dirname(project_root))

from pyperftoolbox.classes import phase, regime, CurvePoint, SolveResult
from pyperftoolbox.constants import Z_MAX_ITER
from pyperftoolbox.shared_fns import CorrelationDomainError, curve_dataframe
from pyperftoolbox.gas import gas_state, gas_tc_pc
from pyperftoolbox.spacing import CurveSpacing
from pyperftoolbox.inflow import (LiquidTransient, LiquidPseudosteady, LiquidSteady, GasTransient, GasPseudosteady,
                                  GasSteady, TwoPhasePseudosteady, inflow_model, ipr_curve)

gas_module = importlib.import_module("pyperftoolbox.gas.gas")

LIQ = dict(k=50, h=20, bo=1.2, uo=2)
GAS = dict(k=5, h=30, sg=0.65, degf=180)


def _pss(**kw):
    fields = dict(LIQ, pavg=3000, re=1000, rw=0.3)
    fields.update(kw)
    return inflow_model('LIQUID', 'PSEUDOSTEADY', **fields)


# ============================================================================
#  Liquid
# ============================================================================

def test_liquid_pss_two_point_curve():
    pts = ipr_curve(_pss(), CurveSpacing('Number of Points', 2))
    j = (50 * 20) / (141.2 * 1.2 * 2) / (math.log(1000 / 0.3) - 0.75)
    assert len(pts) == 2
    assert pts[0] == CurvePoint(3000, 0)
    assert pts[1].pressure == 0
    assert abs(pts[1].rate - j * 3000) < 1e-9


def test_liquid_pss_delta_p_curve():
    pts = ipr_curve(_pss(), CurveSpacing('DELTA_P', 700))
    assert [p.pressure for p in pts] == [3000, 2300, 1600, 900, 200, 0.0]
    assert all(pts[i + 1].rate > pts[i].rate for i in range(len(pts) - 1))


def test_liquid_pss_delta_q_curve_inverts_rate():
    model = _pss()
    pts = ipr_curve(model, CurveSpacing('DELTA_Q', 100))
    assert len(pts) == int(model.max_rate // 100) + 1
    assert pts[0].pressure == 3000
    for pt in pts:
        assert abs(pt.pressure - (3000 - pt.rate / model.productivity_index)) < 1e-9


def test_liquid_npoints_reaches_max_rate():
    model = _pss()
    pts = ipr_curve(model, CurveSpacing('NPOINTS', 11))
    assert len(pts) == 11
    assert abs(pts[-1].rate - model.max_rate) < 1e-9


def test_liquid_transient_uses_log10():
    model = LiquidTransient(pi=3000, t=24, phi=0.2, ct=1e-5, rw=0.3, S=2, **LIQ)
    d = math.log10(24) + math.log10(50 / (0.2 * 2 * 1e-5 * 0.3**2)) - 3.23 + 0.87 * 2
    assert abs(model.denominator - d) < 1e-12
    assert abs(model.rate(2000) - 50 * 20 * 1000 / (162.6 * 1.2 * 2 * d)) < 1e-9
    assert abs(model.pwf(model.rate(2000)) - 2000) < 1e-9


def test_liquid_steady_vs_pss():
    ss = LiquidSteady(pe=3000, re=1000, rw=0.3, **LIQ)
    pss = LiquidPseudosteady(pavg=3000, re=1000, rw=0.3, **LIQ)
    assert abs(ss.denominator - math.log(1000 / 0.3)) < 1e-12
    assert ss.productivity_index < pss.productivity_index


def test_skin_lowers_productivity():
    assert _pss(S=5).productivity_index < _pss().productivity_index < _pss(S=-2).productivity_index


def test_degenerate_denominator_returns_empty_curve():
    model = _pss(S=-8)
    assert model.denominator <= 0
    assert ipr_curve(model) == []


def test_porosity_must_be_fraction():
    try:
        LiquidTransient(pi=3000, t=24, phi=20, ct=1e-5, rw=0.3, **LIQ)
        assert False, "Should have raised ValueError"
    except ValueError:
        pass


def test_radii_validation():
    for re, rw in ((0.3, 0.3), (100, 0), (100, -1)):
        try:
            _pss(re=re, rw=rw)
            assert False, f"Should have raised ValueError for re={re}, rw={rw}"
        except ValueError:
            pass


# ============================================================================
#  Two phase
# ============================================================================

def test_saturated_max_rate_exact():
    model = TwoPhasePseudosteady(pavg=2000, pb=2500, re=1000, rw=0.3, a=0.8, **LIQ)
    assert model.saturated
    assert model.rate(0) == model.productivity_index * model.pavg / (1 + model.a)
    pts = ipr_curve(model, CurveSpacing('NPOINTS', 5))
    assert pts[-1] == CurvePoint(0.0, model.productivity_index * 2000 / (1 + model.a))


def test_saturated_inverse_round_trip():
    model = TwoPhasePseudosteady(pavg=2000, pb=2500, re=1000, rw=0.3, **LIQ)
    for p in (0, 250, 1000, 1500, 1999):
        assert abs(model.pwf(model.rate(p)) - p) < 1e-6, f"pwf={p}"


def test_undersaturated_inverse_round_trip_both_branches():
    model = TwoPhasePseudosteady(pavg=3000, pb=2000, re=1000, rw=0.3, **LIQ)
    assert not model.saturated
    for p in (3000, 2500, 2000, 1500, 500, 0):
        assert abs(model.pwf(model.rate(p)) - p) < 1e-6, f"pwf={p}"


def test_undersaturated_continuous_at_bubble_point():
    model = TwoPhasePseudosteady(pavg=3000, pb=2000, re=1000, rw=0.3, **LIQ)
    assert abs(model.rate(2000 + 1e-6) - model.rate(2000 - 1e-6)) < 1e-3
    assert abs(model.rate(2000) - model.bubble_point_rate) < 1e-9
    assert abs(model.bubble_point_rate - model.productivity_index * 1000) < 1e-9


def test_zero_bowedness_is_straight_line():
    model = TwoPhasePseudosteady(pavg=2000, pb=2500, re=1000, rw=0.3, a=0, **LIQ)
    j = model.productivity_index
    assert abs(model.rate(500) - j * 1500) < 1e-9
    assert abs(model.pwf(j * 1500) - 500) < 1e-9


def test_two_phase_rate_paced_curve():
    model = TwoPhasePseudosteady(pavg=3000, pb=2000, re=1000, rw=0.3, **LIQ)
    pts = ipr_curve(model, CurveSpacing('Delta Flowrate', 50))
    assert pts[0].pressure == 3000
    assert all(pts[i + 1].pressure < pts[i].pressure for i in range(len(pts) - 1))
    assert pts[-1].rate <= model.max_rate


def test_two_phase_rate_beyond_max_has_no_pressure():
    model = TwoPhasePseudosteady(pavg=2000, pb=2500, re=1000, rw=0.3, **LIQ)
    assert model.pwf(model.max_rate * 1.1) is None
    assert model.pwf(-1) is None


def test_bowedness_range():
    for a in (-0.1, 1.2):
        try:
            TwoPhasePseudosteady(pavg=2000, pb=2500, re=1000, rw=0.3, a=a, **LIQ)
            assert False, f"Should have raised ValueError for a={a}"
        except ValueError:
            pass


# ============================================================================
#  Gas
# ============================================================================

def test_gas_pss_curve():
    model = inflow_model('GAS', 'Pseudosteady-State', pavg=2500, re=1500, rw=0.3, **GAS)
    pts = ipr_curve(model, CurveSpacing('NPOINTS', 10))
    assert len(pts) == 10
    assert pts[0] == CurvePoint(2500, 0)
    assert all(pts[i + 1].rate > pts[i].rate for i in range(len(pts) - 1))
    assert 1000 < pts[-1].rate < 100000, f"Unexpected AOF {pts[-1].rate} Mscf/d"


def test_gas_rate_uses_mean_pressure_properties():
    model = GasSteady(pe=2500, re=1500, rw=0.3, S=1, **GAS)
    st = gas_state(2000, 0.65, 180)
    expected = 5 * 30 * (2500**2 - 1500**2) / (1422 * 639.67 * st.ug * st.z * (math.log(1500 / 0.3) + 1))
    assert abs(model.rate(1500) - expected) / expected < 1e-12


def test_gas_transient_uses_1638_and_viscosity_in_log_term():
    model = GasTransient(pi=2500, t=72, phi=0.15, ct=2e-4, rw=0.3, **GAS)
    st = gas_state(2250, 0.65, 180)
    d = math.log10(72) + math.log10(5 / (0.15 * st.ug * 2e-4 * 0.09)) - 3.23
    expected = 5 * 30 * (2500**2 - 2000**2) / (1638 * 639.67 * st.ug * st.z * d)
    assert abs(model.rate(2000) - expected) / expected < 1e-12
    assert len(ipr_curve(model)) == 25


def test_gas_cannot_be_rate_paced():
    model = GasPseudosteady(pavg=2500, re=1500, rw=0.3, **GAS)
    try:
        ipr_curve(model, CurveSpacing('DELTA_Q', 100))
        assert False, "Should have raised ValueError"
    except ValueError:
        pass


def test_gas_low_gravity_rejected_at_construction():
    try:
        GasPseudosteady(pavg=2500, re=1500, rw=0.3, k=5, h=30, sg=0.5, degf=180)
        assert False, "Should have raised CorrelationDomainError"
    except CorrelationDomainError:
        pass


def test_gas_out_of_domain_propagates():
    # Reservoir temperature below the pseudo-critical temperature
    model = GasPseudosteady(pavg=2500, re=1500, rw=0.3, k=5, h=30, sg=0.65, degf=-100)
    try:
        ipr_curve(model)
        assert False, "Should have raised CorrelationDomainError"
    except CorrelationDomainError:
        pass


def test_gas_curve_drops_non_converged_points():
    ppc = gas_tc_pc(0.65)[1]
    model = GasPseudosteady(pavg=4000, re=1500, rw=0.3, **GAS)
    spacing = CurveSpacing('NPOINTS', 5)
    full = ipr_curve(model, spacing)
    assert [p.pressure for p in full] == [4000, 3000, 2000, 1000, 0]

    # Mean pressures 4000, 3500, 3000, 2500, 2000 psia. Only the last two stay below Ppr 4
    assert 2500 / ppc < 4.0 < 3000 / ppc
    dak = gas_module._Z_DIC["DAK"]

    def dak_failing_above_ppr_4(ppr, tpr):
        if ppr > 4.0:
            return SolveResult(None, Z_MAX_ITER)
        return dak(ppr, tpr)

    gas_module._Z_DIC["DAK"] = dak_failing_above_ppr_4
    try:
        assert model.rate(3000) is None
        pts = ipr_curve(model, spacing)
    finally:
        gas_module._Z_DIC["DAK"] = dak
    assert [p.pressure for p in pts] == [1000, 0], f"Unexpected pressures {pts}"
    assert pts == full[3:]
    assert all(p.rate is not None and math.isfinite(p.rate) and p.rate > 0 for p in pts)


# ============================================================================
#  Factory
# ============================================================================

def test_factory_covers_every_supported_combination():
    expected = {
        ('LIQUID', 'TRANSIENT'): LiquidTransient,
        ('LIQUID', 'PSEUDOSTEADY'): LiquidPseudosteady,
        ('LIQUID', 'STEADY'): LiquidSteady,
        ('GAS', 'TRANSIENT'): GasTransient,
        ('GAS', 'PSEUDOSTEADY'): GasPseudosteady,
        ('GAS', 'STEADY'): GasSteady,
        ('TWOPHASE', 'PSEUDOSTEADY'): TwoPhasePseudosteady,
    }
    fields = dict(k=50, h=20, bo=1.2, uo=2, pi=3000, pavg=3000, pe=3000, pb=2000, t=24, phi=0.2, ct=1e-5,
                  re=1000, rw=0.3, sg=0.65, degf=180)
    for (ph, rg), cls in expected.items():
        names = [n for n in inspect.signature(cls.__init__).parameters if n != 'self']
        model = inflow_model(ph, rg, **{n: fields[n] for n in names if n in fields})
        assert isinstance(model, cls)
        assert model.phase is phase[ph] and model.regime is regime[rg]


def test_factory_rejects_unsupported_combinations():
    for rg in ('TRANSIENT', 'STEADY'):
        try:
            inflow_model('Two-phase', rg, pavg=3000, pb=2000, re=1000, rw=0.3, **LIQ)
            assert False, f"Should have raised ValueError for two-phase {rg}"
        except ValueError:
            pass


def test_factory_missing_fields_named():
    try:
        inflow_model('LIQUID', 'PSEUDOSTEADY', k=50, h=20, bo=1.2, uo=2, pavg=3000)
        assert False, "Should have raised ValueError"
    except ValueError as e:
        assert 're' in str(e) and 'rw' in str(e)


def test_factory_unknown_fields_rejected():
    try:
        _pss(pwf_min=100)
        assert False, "Should have raised ValueError"
    except ValueError as e:
        assert 'pwf_min' in str(e)


def test_curve_dataframe():
    pts = ipr_curve(_pss(), CurveSpacing('NPOINTS', 6))
    df = curve_dataframe(pts)
    assert list(df.columns) == ['pressure', 'rate']
    assert len(df) == 6
    assert df['pressure'].iloc[0] == 3000
