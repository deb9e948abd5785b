#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pyPerfToolbox - Well performance (IPR / OPR) curve utilities
              Copyright (C) 2022, Mark Burgoyne

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.

          Contact author at mark.w.burgoyne@gmail.com
"""

import math
import inspect
import logging
from typing import List, Optional

from pyperftoolbox.classes import phase, regime, z_method, ug_method, CurvePoint
from pyperftoolbox.validate import validate_methods
from pyperftoolbox.shared_fns import is_valid_point
from pyperftoolbox.constants import degF2R
from pyperftoolbox.gas import gas_tc_pc, gas_state
from pyperftoolbox.spacing import CurveSpacing

logger = logging.getLogger(__name__)


def _check_positive(**kwargs):
    for name, val in kwargs.items():
        if val is None or not math.isfinite(val) or val <= 0:
            raise ValueError(f"{name} must be a positive number, got {val}")

def _check_radii(re, rw):
    if re <= rw:
        raise ValueError(f"Drainage radius re ({re}) must exceed wellbore radius rw ({rw})")

def _floor_pressure(p, p_ref):
    # Absorb round-off at the zero pressure end of an inverted curve
    if -1e-9 * max(1.0, p_ref) < p < 0:
        return 0.0
    return p


class _InflowModel:
    """ Common interface of the single well inflow models """
    phase = None
    regime = None
    invertible = True

    @property
    def reference_pressure(self) -> float:
        raise NotImplementedError

    @property
    def denominator(self) -> float:
        raise NotImplementedError

    def rate(self, pwf: float) -> Optional[float]:
        raise NotImplementedError

    def pwf(self, rate: float) -> Optional[float]:
        raise NotImplementedError

    @property
    def max_rate(self) -> Optional[float]:
        """ Rate at zero bottomhole flowing pressure """
        return self.rate(0.0)

    def __repr__(self):
        return f"{type(self).__name__}({self.phase.name}, {self.regime.name}, pref={self.reference_pressure})"


# ============================================================================
#  Single phase liquid, q = J (pref - pwf) STB/d
# ============================================================================

class _LiquidInflow(_InflowModel):
    phase = phase.LIQUID
    coefficient = 141.2

    def __init__(self, k, h, bo, uo, S=0):
        _check_positive(k=k, h=h, bo=bo, uo=uo)
        self.k, self.h, self.bo, self.uo, self.S = k, h, bo, uo, S

    @property
    def productivity_index(self) -> float:
        """ Productivity index J (STB/d/psi) """
        return self.k * self.h / (self.coefficient * self.bo * self.uo * self.denominator)

    def rate(self, pwf):
        return self.productivity_index * (self.reference_pressure - pwf)

    def pwf(self, rate):
        return _floor_pressure(self.reference_pressure - rate / self.productivity_index, self.reference_pressure)


class LiquidTransient(_LiquidInflow):
    """ Infinite acting liquid inflow
        k: Permeability (mD), h: Net thickness (ft), bo: Oil FVF (rb/stb), uo: Oil viscosity (cP)
        pi: Initial reservoir pressure (psia), t: Flowing time (hrs), phi: Porosity (fraction)
        ct: Total compressibility (1/psi), rw: Wellbore radius (ft), S: Skin
    """
    regime = regime.TRANSIENT
    coefficient = 162.6

    def __init__(self, k, h, bo, uo, pi, t, phi, ct, rw, S=0):
        super().__init__(k, h, bo, uo, S)
        _check_positive(pi=pi, t=t, phi=phi, ct=ct, rw=rw)
        if phi > 1:
            raise ValueError(f"Porosity must be a fraction, got {phi}")
        self.pi, self.t, self.phi, self.ct, self.rw = pi, t, phi, ct, rw

    @property
    def reference_pressure(self):
        return self.pi

    @property
    def denominator(self):
        return (math.log10(self.t) + math.log10(self.k / (self.phi * self.uo * self.ct * self.rw**2))
                - 3.23 + 0.87 * self.S)


class LiquidPseudosteady(_LiquidInflow):
    """ Bounded liquid inflow at pseudosteady-state
        k: Permeability (mD), h: Net thickness (ft), bo: Oil FVF (rb/stb), uo: Oil viscosity (cP)
        pavg: Average reservoir pressure (psia), re: Drainage radius (ft), rw: Wellbore radius (ft), S: Skin
    """
    regime = regime.PSEUDOSTEADY

    def __init__(self, k, h, bo, uo, pavg, re, rw, S=0):
        super().__init__(k, h, bo, uo, S)
        _check_positive(pavg=pavg, re=re, rw=rw)
        _check_radii(re, rw)
        self.pavg, self.re, self.rw = pavg, re, rw

    @property
    def reference_pressure(self):
        return self.pavg

    @property
    def denominator(self):
        return math.log(self.re / self.rw) - 0.75 + self.S


class LiquidSteady(_LiquidInflow):
    """ Liquid inflow with constant pressure outer boundary
        pe: Boundary pressure (psia). Other arguments as LiquidPseudosteady
    """
    regime = regime.STEADY

    def __init__(self, k, h, bo, uo, pe, re, rw, S=0):
        super().__init__(k, h, bo, uo, S)
        _check_positive(pe=pe, re=re, rw=rw)
        _check_radii(re, rw)
        self.pe, self.re, self.rw = pe, re, rw

    @property
    def reference_pressure(self):
        return self.pe

    @property
    def denominator(self):
        return math.log(self.re / self.rw) + self.S


# ============================================================================
#  Single phase gas, q = k h (pref² - pwf²) / (C T ug z D) Mscf/d
#  Z-Factor and viscosity evaluated at the mean of pref & pwf
# ============================================================================

class _GasInflow(_InflowModel):
    phase = phase.GAS
    invertible = False
    coefficient = 1422

    def __init__(self, k, h, sg, degf, S=0, zmethod=z_method.DAK, ugmethod=ug_method.LGE, n2=0, co2=0, h2s=0):
        _check_positive(k=k, h=h, sg=sg)
        gas_tc_pc(sg)  # Rejects gas gravities below the correlation limit
        self.k, self.h, self.sg, self.degf, self.S = k, h, sg, degf, S
        self.zmethod, self.ugmethod = validate_methods(["zmethod", "ugmethod"], [zmethod, ugmethod])
        self.n2, self.co2, self.h2s = n2, co2, h2s

    def _state(self, p):
        return gas_state(p, self.sg, self.degf, self.zmethod, self.ugmethod, self.n2, self.co2, self.h2s)

    def _denominator(self, ug):
        return self.denominator

    def rate(self, pwf):
        pref = self.reference_pressure
        pm = (pref + pwf) / 2
        state = self._state(pm)
        if state is None:
            logger.debug("Skipping gas inflow at pwf=%.4g psia, Z-Factor did not converge", pwf)
            return None
        dd = self._denominator(state.ug)
        if dd <= 0:
            return None
        return (self.k * self.h * (pref**2 - pwf**2)
                / (self.coefficient * (self.degf + degF2R) * state.ug * state.z * dd))

    def pwf(self, rate):
        raise ValueError("Gas inflow cannot be inverted from rate to pressure, use pressure spacing")


class GasTransient(_GasInflow):
    """ Infinite acting gas inflow (Mscf/d)
        k: Permeability (mD), h: Net thickness (ft), pi: Initial reservoir pressure (psia), t: Flowing time (hrs)
        phi: Porosity (fraction), ct: Total compressibility (1/psi), rw: Wellbore radius (ft)
        sg: Gas SG relative to air, degf: Reservoir temperature (deg F), S: Skin
        zmethod, ugmethod: Z-Factor and viscosity methods. n2, co2, h2s: Molar fractions
    """
    regime = regime.TRANSIENT
    coefficient = 1638

    def __init__(self, k, h, pi, t, phi, ct, rw, sg, degf, S=0, zmethod=z_method.DAK, ugmethod=ug_method.LGE,
                 n2=0, co2=0, h2s=0):
        super().__init__(k, h, sg, degf, S, zmethod, ugmethod, n2, co2, h2s)
        _check_positive(pi=pi, t=t, phi=phi, ct=ct, rw=rw)
        if phi > 1:
            raise ValueError(f"Porosity must be a fraction, got {phi}")
        self.pi, self.t, self.phi, self.ct, self.rw = pi, t, phi, ct, rw

    @property
    def reference_pressure(self):
        return self.pi

    def _denominator(self, ug):
        return (math.log10(self.t) + math.log10(self.k / (self.phi * ug * self.ct * self.rw**2))
                - 3.23 + 0.87 * self.S)

    @property
    def denominator(self):
        # Viscosity dependent, evaluated at initial pressure
        state = self._state(self.pi)
        if state is None:
            return math.nan
        return self._denominator(state.ug)


class GasPseudosteady(_GasInflow):
    """ Bounded gas inflow at pseudosteady-state (Mscf/d)
        pavg: Average reservoir pressure (psia), re: Drainage radius (ft), rw: Wellbore radius (ft)
        Other arguments as GasTransient
    """
    regime = regime.PSEUDOSTEADY

    def __init__(self, k, h, pavg, re, rw, sg, degf, S=0, zmethod=z_method.DAK, ugmethod=ug_method.LGE,
                 n2=0, co2=0, h2s=0):
        super().__init__(k, h, sg, degf, S, zmethod, ugmethod, n2, co2, h2s)
        _check_positive(pavg=pavg, re=re, rw=rw)
        _check_radii(re, rw)
        self.pavg, self.re, self.rw = pavg, re, rw

    @property
    def reference_pressure(self):
        return self.pavg

    @property
    def denominator(self):
        return math.log(self.re / self.rw) - 0.75 + self.S


class GasSteady(_GasInflow):
    """ Gas inflow with constant pressure outer boundary (Mscf/d)
        pe: Boundary pressure (psia). Other arguments as GasPseudosteady
    """
    regime = regime.STEADY

    def __init__(self, k, h, pe, re, rw, sg, degf, S=0, zmethod=z_method.DAK, ugmethod=ug_method.LGE,
                 n2=0, co2=0, h2s=0):
        super().__init__(k, h, sg, degf, S, zmethod, ugmethod, n2, co2, h2s)
        _check_positive(pe=pe, re=re, rw=rw)
        _check_radii(re, rw)
        self.pe, self.re, self.rw = pe, re, rw

    @property
    def reference_pressure(self):
        return self.pe

    @property
    def denominator(self):
        return math.log(self.re / self.rw) + self.S


# ============================================================================
#  Two phase, Vogel type relationship below bubble point
# ============================================================================

class TwoPhasePseudosteady(_InflowModel):
    """ Pseudosteady-state oil inflow with a Vogel type (Fetkovich generalised) curve below bubble point.
        Above bubble point the straight line productivity index applies, with the two joined at pb.

        k: Permeability (mD), h: Net thickness (ft), bo: Oil FVF (rb/stb), uo: Oil viscosity (cP)
        pavg: Average reservoir pressure (psia), pb: Bubble point pressure (psia)
        re: Drainage radius (ft), rw: Wellbore radius (ft), S: Skin
        a: Curve bowedness, 0 (straight line) to 1. Vogel's value is 0.8
    """
    phase = phase.TWOPHASE
    regime = regime.PSEUDOSTEADY

    def __init__(self, k, h, bo, uo, pavg, pb, re, rw, S=0, a=0.8):
        _check_positive(k=k, h=h, bo=bo, uo=uo, pavg=pavg, pb=pb, re=re, rw=rw)
        _check_radii(re, rw)
        if not 0 <= a <= 1:
            raise ValueError(f"Bowedness a must lie between 0 and 1, got {a}")
        self.k, self.h, self.bo, self.uo, self.S = k, h, bo, uo, S
        self.pavg, self.pb, self.re, self.rw, self.a = pavg, pb, re, rw, a

    @property
    def reference_pressure(self):
        return self.pavg

    @property
    def denominator(self):
        return math.log(self.re / self.rw) - 0.75 + self.S

    @property
    def productivity_index(self) -> float:
        return self.k * self.h / (141.2 * self.bo * self.uo * self.denominator)

    @property
    def saturated(self) -> bool:
        return self.pavg <= self.pb

    @property
    def bubble_point_rate(self) -> float:
        """ Rate at which pwf reaches bubble point. Zero for a saturated reservoir """
        if self.saturated:
            return 0.0
        return self.productivity_index * (self.pavg - self.pb)

    def _vogel(self, x):
        return 1 - (1 - self.a) * x - self.a * x * x

    def rate(self, pwf):
        j = self.productivity_index
        if self.saturated:
            qmax = j * self.pavg / (1 + self.a)
            return qmax * self._vogel(pwf / self.pavg)
        if pwf >= self.pb:
            return j * (self.pavg - pwf)
        return self.bubble_point_rate + j * self.pb / (1 + self.a) * self._vogel(pwf / self.pb)

    def _root(self, c):
        # Physical root x in [0, 1] of a x² + (1 - a) x - c = 0, the larger if both qualify
        a = self.a
        if a == 0:
            roots = [c]
        else:
            disc = (1 - a) ** 2 + 4 * a * c
            if disc < 0:
                return None
            sq = math.sqrt(disc)
            roots = [(-(1 - a) + sq) / (2 * a), (-(1 - a) - sq) / (2 * a)]
        valid = [min(max(x, 0.0), 1.0) for x in roots if -1e-12 <= x <= 1 + 1e-12]
        return max(valid) if valid else None

    def pwf(self, rate):
        if rate < 0:
            return None
        j = self.productivity_index
        qb = self.bubble_point_rate
        if self.saturated:
            pnorm = self.pavg
        elif rate <= qb:
            return self.pavg - rate / j
        else:
            pnorm = self.pb
        c = 1 - (rate - qb) * (1 + self.a) / (j * pnorm)
        x = self._root(c)
        return None if x is None else x * pnorm


# Every phase / regime combination. None marks unsupported combinations
_MODEL_TABLE = {
    (phase.LIQUID, regime.TRANSIENT): LiquidTransient,
    (phase.LIQUID, regime.PSEUDOSTEADY): LiquidPseudosteady,
    (phase.LIQUID, regime.STEADY): LiquidSteady,
    (phase.GAS, regime.TRANSIENT): GasTransient,
    (phase.GAS, regime.PSEUDOSTEADY): GasPseudosteady,
    (phase.GAS, regime.STEADY): GasSteady,
    (phase.TWOPHASE, regime.TRANSIENT): None,
    (phase.TWOPHASE, regime.PSEUDOSTEADY): TwoPhasePseudosteady,
    (phase.TWOPHASE, regime.STEADY): None,
}

def inflow_model(phase, regime, **fields):
    """ Returns the inflow model for a phase & flow regime, built from keyword fields.
        phase: 'LIQUID', 'GAS' or 'TWOPHASE' (enum, name, integer code or label)
        regime: 'TRANSIENT', 'PSEUDOSTEADY' or 'STEADY'
        fields: Constructor arguments of the selected model. Missing or unknown fields raise ValueError
    """
    phase, regime = validate_methods(["phase", "regime"], [phase, regime])
    cls = _MODEL_TABLE[(phase, regime)]
    if cls is None:
        raise ValueError(f"{phase.name} inflow is not supported for the {regime.name} regime")
    params = inspect.signature(cls.__init__).parameters
    names = [n for n in params if n != "self"]
    required = [n for n in names if params[n].default is inspect.Parameter.empty]
    missing = [n for n in required if n not in fields]
    if missing:
        raise ValueError(f"{cls.__name__} is missing required fields: {', '.join(missing)}")
    unknown = [n for n in fields if n not in names]
    if unknown:
        raise ValueError(f"{cls.__name__} does not accept fields: {', '.join(unknown)}")
    return cls(**fields)

def ipr_curve(model, spacing: CurveSpacing = None) -> List[CurvePoint]:
    """ Returns list of CurvePoint (pwf psia, rate) from reference pressure down to zero pwf.
        Points that are non-finite, negative, or whose properties did not converge are skipped.
        An empty list is returned if the model's flow denominator is not positive.

        model: An inflow model, e.g. from inflow_model()
        spacing: CurveSpacing. Defaults to 25 evenly spaced pressures.
                 'DELTA_Q' spacing inverts rate to pressure, and raises ValueError for gas models
    """
    if spacing is None:
        spacing = CurveSpacing()
    dd = model.denominator
    if not math.isfinite(dd) or dd <= 0:
        logger.warning("%s flow denominator is %.4g, returning an empty curve", type(model).__name__, dd)
        return []

    if spacing.paced_by_rate:
        if not model.invertible:
            raise ValueError(f"{type(model).__name__} cannot be paced by rate, use pressure spacing")
        samples = [(model.pwf(q), q) for q in spacing.rate_samples(model.max_rate)]
    else:
        samples = [(p, model.rate(p)) for p in spacing.pressure_samples(model.reference_pressure)]

    points = []
    for p, q in samples:
        if is_valid_point(p, q):
            points.append(CurvePoint(p, q))
        else:
            logger.debug("Skipping inflow point pwf=%s, rate=%s", p, q)
    return points
