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
import logging
from typing import List, Optional

from pyperftoolbox.classes import z_method, ug_method, friction_model, CurvePoint
from pyperftoolbox.validate import validate_methods
from pyperftoolbox.shared_fns import is_valid_point
from pyperftoolbox.constants import (psc, tscr, degF2R, WDEN, GC, OPR_QSPAN_MIN, OPR_QSPAN_MAX, OPR_RE_TARGET,
                                     OPR_HINT_FACTOR, GAS_QSPAN_DEFAULT, GAS_NSEG, GAS_SEG_PASSES)
from pyperftoolbox.friction import fanning, relative_roughness
from pyperftoolbox.gas import gas_tc_pc, gas_state
from pyperftoolbox.spacing import CurveSpacing

logger = logging.getLogger(__name__)


class Conduit:
    """ Flow conduit (tubing or casing) from bottomhole to surface

        length: Measured length (ft)
        tid: Internal diameter (inches)
        theta: Inclination from horizontal (degrees). Defaults to 90 (vertical)
        rough: Roughness. Values <= 0.01 are taken as relative (eps/D), larger values as absolute (ft).
               Defaults to 0.0006
    """
    def __init__(self, length, tid, theta=90, rough=0.0006):
        if length <= 0:
            raise ValueError(f"Conduit length must be positive, got {length}")
        if tid <= 0:
            raise ValueError(f"Conduit internal diameter must be positive, got {tid}")
        if rough < 0:
            raise ValueError(f"Roughness cannot be negative, got {rough}")
        self.length = length
        self.tid = tid
        self.theta = theta
        self.rough = rough

    @property
    def rel_rough(self):
        """ Relative roughness (eps/D) """
        return relative_roughness(self.rough, self.tid)

    @property
    def sin_theta(self):
        return math.sin(math.radians(self.theta))

    @property
    def area(self):
        """ Flow area (ft²) """
        return math.pi * (self.tid / 12.0) ** 2 / 4.0


class OilFluid:
    """ Single phase oil. rho: Density (lbm/ft³), uo: Viscosity (cP) """
    def __init__(self, rho, uo):
        if rho <= 0 or uo <= 0:
            raise ValueError(f"Oil density and viscosity must be positive, got rho={rho}, uo={uo}")
        self.rho = rho
        self.uo = uo


class GasFluid:
    """ Single phase gas

        sg: Gas SG relative to air
        tht: Surface (wellhead) temperature (deg F)
        bht: Bottomhole temperature (deg F)
        zmethod: Z-Factor method. Defaults to 'DAK'
        ugmethod: Viscosity method. Defaults to 'LGE'
    """
    def __init__(self, sg, tht, bht, zmethod=z_method.DAK, ugmethod=ug_method.LGE):
        gas_tc_pc(sg)  # Rejects gas gravities below the correlation limit
        self.sg = sg
        self.tht = tht
        self.bht = bht
        self.zmethod, self.ugmethod = validate_methods(["zmethod", "ugmethod"], [zmethod, ugmethod])


# ============================================================================
#  Single phase oil, closed form hydrostatic plus friction
# ============================================================================

def _oil_re(q, conduit, fluid):
    return max(1.0, 1.4777 * fluid.rho * q / (conduit.tid * fluid.uo))

def oil_fbhp(thp: float, q: float, conduit: Conduit, fluid: OilFluid,
             friction: friction_model = friction_model.CHEN) -> float:
    """ Returns flowing bottomhole pressure (psia) for single phase oil
        thp: Tubing head pressure (psia)
        q: Oil rate (STB/d)
        conduit: Conduit, fluid: OilFluid
        friction: Friction factor model. Defaults to 'CHEN'
    """
    dp_grav = 0.433 * (fluid.rho / WDEN) * conduit.length * conduit.sin_theta
    f = fanning(_oil_re(q, conduit, fluid), conduit.rel_rough, friction)
    dp_fric = 7.35e-7 * f * fluid.rho * q * q * conduit.length / conduit.tid**5
    return thp + dp_grav + dp_fric

def _oil_rate_span(conduit, fluid, q_hint):
    if q_hint is not None and math.isfinite(q_hint) and q_hint > 0:
        span = OPR_HINT_FACTOR * q_hint
    else:
        span = OPR_RE_TARGET * conduit.tid * fluid.uo / (1.4777 * fluid.rho) * 1.2
    return min(max(span, OPR_QSPAN_MIN), OPR_QSPAN_MAX)


# ============================================================================
#  Single phase gas, segment by segment marching from surface
# ============================================================================

def gas_fbhp(thp: float, q: float, conduit: Conduit, fluid: GasFluid,
             friction: friction_model = friction_model.CHEN) -> Optional[float]:
    """ Returns flowing bottomhole pressure (psia) for single phase gas, or None if the Z-Factor failed
        to converge in any segment. Correlation domain violations raise CorrelationDomainError

        thp: Tubing head pressure (psia)
        q: Gas rate (Mscf/d)
        conduit: Conduit, fluid: GasFluid
        friction: Friction factor model. Defaults to 'CHEN'
    """
    d_len = conduit.length / GAS_NSEG
    d_ft = conduit.tid / 12.0
    rel = conduit.rel_rough
    q_scf_s = q * 1000.0 / 86400.0

    p = thp
    for i in range(GAS_NSEG):
        frac = (i + 0.5) / GAS_NSEG
        temp_f = fluid.tht + (fluid.bht - fluid.tht) * frac
        temp_r = temp_f + degF2R
        p_est = p
        for _pass in range(GAS_SEG_PASSES):
            p_mid = max((p + p_est) / 2.0, psc)
            state = gas_state(p_mid, fluid.sg, temp_f, fluid.zmethod, fluid.ugmethod)
            if state is None:
                logger.debug("Z-Factor did not converge in segment %d at %.4g psia, %.4g degF", i, p_mid, temp_f)
                return None
            re = max(1.0, 20.09 * fluid.sg * q / (conduit.tid * state.ug))
            f = fanning(re, rel, friction)
            vel = q_scf_s * (psc / p_mid) * (temp_r / tscr) * state.z / conduit.area
            dp_fric = 2.0 * f * state.den * vel * vel * d_len / (GC * d_ft) / 144.0
            dp_grav = state.den * conduit.sin_theta * d_len / 144.0
            p_est = p + dp_fric + dp_grav
        p = p_est
    return p

def _gas_rate_span(q_hint):
    if q_hint is not None and math.isfinite(q_hint) and q_hint > 0:
        return OPR_HINT_FACTOR * q_hint
    return GAS_QSPAN_DEFAULT


def outflow_curve(
    thp: float,
    conduit: Conduit,
    fluid,
    spacing: CurveSpacing = None,
    friction: friction_model = friction_model.CHEN,
    q_hint: float = None,
) -> List[CurvePoint]:
    """ Returns list of CurvePoint (pwf psia, rate) of required bottomhole pressure against rate, from zero rate up.
        Oil rates are STB/d, gas rates Mscf/d. Rates where the Z-Factor did not converge are skipped.

        thp: Tubing head pressure (psia)
        conduit: Conduit
        fluid: OilFluid or GasFluid
        spacing: CurveSpacing, 'NPOINTS' or 'DELTA_Q'. Defaults to 25 evenly spaced rates
        friction: Friction factor model. Defaults to 'CHEN'
        q_hint: Optional rate to scale the curve span, e.g. the inflow maximum rate.
                Span is 1.25 x hint. Without a hint, oil targets Re = 1e5 (clamped to 300 - 20,000 STB/d)
                and gas uses 5,000 Mscf/d
    """
    if spacing is None:
        spacing = CurveSpacing()
    if spacing.paced_by_pressure:
        raise ValueError("Outflow curves are paced by rate, 'DELTA_P' spacing is not supported")
    if thp < 0:
        raise ValueError(f"Tubing head pressure cannot be negative, got {thp}")
    friction = validate_methods(["friction"], [friction])

    if isinstance(fluid, OilFluid):
        rates = spacing.rate_samples(_oil_rate_span(conduit, fluid, q_hint))
        samples = [(oil_fbhp(thp, q, conduit, fluid, friction), q) for q in rates]
    elif isinstance(fluid, GasFluid):
        rates = spacing.rate_samples(_gas_rate_span(q_hint))
        samples = [(gas_fbhp(thp, q, conduit, fluid, friction), q) for q in rates]
    else:
        raise TypeError(f"Unsupported outflow fluid: {type(fluid).__name__}")

    points = []
    for p, q in samples:
        if is_valid_point(p, q):
            points.append(CurvePoint(p, q))
        else:
            logger.debug("Skipping outflow point rate=%s, pwf=%s", q, p)
    return points
