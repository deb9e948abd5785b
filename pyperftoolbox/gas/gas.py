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
from functools import lru_cache
from importlib import resources
from typing import NamedTuple, Optional, Tuple

import numpy as np
import numpy.typing as npt
import pandas as pd
from scipy.interpolate import interp1d

from pyperftoolbox.classes import z_method, ug_method, SolveResult
from pyperftoolbox.shared_fns import CorrelationDomainError, ConvergenceError, convert_to_numpy, process_output
from pyperftoolbox.validate import validate_methods
from pyperftoolbox.constants import R, degF2R, MW_AIR, LBCUFT_TO_GCC, SG_MIN, Z_MAX_ITER, Z_TOL, RK_TOL

logger = logging.getLogger(__name__)


class GasState(NamedTuple):
    """ Real gas properties at a single pressure & temperature """
    z: float
    den: float  # lbm/ft³
    ug: float  # cP


def gas_tc_pc(sg: float, n2: float = 0, co2: float = 0, h2s: float = 0) -> Tuple:
    """ Returns a Tuple of pseudo-critical temperature (deg R) and pressure (psia) for a sweet dry gas
        Tpc = 168 + 325 * sg, Ppc = 677 - 15 * sg
        sg: Specific gravity of gas (relative to air). Must be >= 0.56
        n2, co2, h2s: Molar fractions. Accepted for completeness, no contaminant correction is applied
    """
    if sg < SG_MIN:
        raise CorrelationDomainError(f"Gas SG of {sg} is below the correlation limit of {SG_MIN}")
    tpc = 168 + 325 * sg
    ppc = 677 - 15 * sg
    return (tpc, ppc)

def gas_tr(degf: float, tpc: float) -> float:
    """ Returns pseudo-reduced temperature. degf: Temperature (deg F), tpc: Pseudo-critical temperature (deg R) """
    return (degf + degF2R) / tpc

def gas_pr(p: npt.ArrayLike, ppc: float):
    """ Returns pseudo-reduced pressure. p: Pressure (psia), ppc: Pseudo-critical pressure (psia) """
    p, is_list = convert_to_numpy(p)
    return process_output(p / ppc, is_list)


# ============================================================================
#  Z-Factor correlations. Each takes (ppr, tpr) and returns a SolveResult
# ============================================================================

def _check_domain(name, ppr, tpr, ppr_lo, ppr_hi, tpr_lo, tpr_hi, ppr_inclusive=False):
    ppr_ok = (ppr >= ppr_lo) if ppr_inclusive else (ppr > ppr_lo)
    if not (ppr_ok and ppr < ppr_hi and tpr_lo < tpr <= tpr_hi):
        raise CorrelationDomainError(
            f"{name}: Ppr={ppr:.4g}, Tpr={tpr:.4g} outside correlation limits "
            f"({ppr_lo} {'<=' if ppr_inclusive else '<'} Ppr < {ppr_hi}, {tpr_lo} < Tpr <= {tpr_hi})"
        )

def z_dak(ppr: float, tpr: float) -> SolveResult:
    # Dranchuk & Abou-Kassem (1975), successive substitution on reduced density
    _check_domain("DAK", ppr, tpr, 0, 30, 1, 3)
    a = [0, 0.3265, -1.07, -0.5339, 0.01569, -0.05165, 0.5475, -0.7361, 0.1844, 0.1056, 0.6134, 0.7210]
    c1 = a[1] + a[2] / tpr + a[3] / tpr**3 + a[4] / tpr**4 + a[5] / tpr**5
    c2 = a[6] + a[7] / tpr + a[8] / tpr**2
    c3 = a[9] * (a[7] / tpr + a[8] / tpr**2)

    rhor = 0.27 * ppr / tpr  # Z = 1 first guess
    for niter in range(1, Z_MAX_ITER + 1):
        rhor2 = rhor * rhor
        z = (1 + c1 * rhor + c2 * rhor2 - c3 * rhor2 * rhor2 * rhor
             + a[10] * (1 + a[11] * rhor2) * rhor2 / tpr**3 * math.exp(-a[11] * rhor2))
        rhor_new = 0.27 * ppr / (z * tpr)
        if abs(rhor_new - rhor) < Z_TOL:
            return SolveResult(z, niter)
        rhor = rhor_new
    return SolveResult(None, Z_MAX_ITER)

def z_dpr(ppr: float, tpr: float) -> SolveResult:
    # Dranchuk, Purvis & Robinson (1974), same scheme as DAK with 8 coefficients
    _check_domain("DPR", ppr, tpr, 0, 15, 1, 3)
    a = [0, 0.31506237, -1.0467099, -0.57832729, 0.53530771, -0.61232032, -0.10488813, 0.68157001, 0.68446549]
    b1 = a[1] + a[2] / tpr + a[3] / tpr**3
    b2 = a[4] + a[5] / tpr
    b3 = a[5] * a[6] / tpr
    b4 = a[7] / tpr**3

    rhor = 0.27 * ppr / tpr
    for niter in range(1, Z_MAX_ITER + 1):
        b5 = a[8] * rhor * rhor
        z = 1 + b1 * rhor + b2 * rhor**2 + b3 * rhor**5 + b4 * rhor**2 * (1 + b5) * math.exp(-b5)
        rhor_new = 0.27 * ppr / (z * tpr)
        if abs(rhor_new - rhor) < Z_TOL:
            return SolveResult(z, niter)
        rhor = rhor_new
    return SolveResult(None, Z_MAX_ITER)

def z_hy(ppr: float, tpr: float) -> SolveResult:
    # Hall & Yarborough (1973), Newton-Raphson on reduced density y
    _check_domain("HY", ppr, tpr, 0, 30, 1, 3)
    t = 1 / tpr
    t2 = t**2
    a = 0.06125 * t * math.exp(-1.2 * (1 - t) ** 2)
    b = t * (14.76 - 9.76 * t + 4.58 * t2)
    c = t * (90.7 - 242.2 * t + 42.4 * t2)
    d = 2.18 + 2.82 * t

    def f(y):
        return ((y + y**2 + y**3 - y**4) / ((1 - y) ** 3)) - a * ppr - b * y**2 + c * y**d

    def df(y):
        return ((1 + 4 * y + 4 * y**2 - 4 * y**3 + y**4) / ((1 - y) ** 4)) - 2 * b * y + c * d * y ** (d - 1)

    y = a * ppr  # Z = 1 first guess
    for niter in range(1, Z_MAX_ITER + 1):
        y_new = y - f(y) / df(y)
        if y_new >= 1:  # Keep within the packing fraction limit
            y_new = (y + 1) / 2
        elif y_new <= 0:
            y_new = y / 2
        if abs(y_new - y) < Z_TOL:
            return SolveResult(a * ppr / y_new, niter)
        y = y_new
    return SolveResult(None, Z_MAX_ITER)

def z_rk(ppr: float, tpr: float) -> SolveResult:
    # Redlich-Kwong (1949) cubic in Z, Newton-Raphson directly on Z from Z = 1
    _check_domain("RK", ppr, tpr, 0, 15, 1, 3, ppr_inclusive=True)
    u = 2 ** (1 / 3) - 1
    a = ppr / (9 * u * tpr**2.5)
    b = ppr * u / (3 * tpr)
    ab = ppr**2 / (27 * tpr**3.5)

    z = 1.0
    for niter in range(1, Z_MAX_ITER + 1):
        fz = z**3 - z**2 - (b * b + b - a) * z - ab
        dfz = 3 * z**2 - 2 * z - (b * b + b - a)
        z_new = z - fz / dfz
        if abs(z_new - z) < RK_TOL:
            return SolveResult(z_new, niter)
        z = z_new
    return SolveResult(None, Z_MAX_ITER)

def z_bb(ppr: float, tpr: float) -> SolveResult:
    # Brill & Beggs (1974), explicit
    _check_domain("BB", ppr, tpr, 0, 15, 1.15, 2.4, ppr_inclusive=True)
    a = 1.39 * math.sqrt(tpr - 0.92) - 0.36 * tpr - 0.101
    b = ((0.62 - 0.23 * tpr) * ppr + (0.066 / (tpr - 0.86) - 0.037) * ppr**2
         + 0.32 * ppr**6 / 10 ** (9 * (tpr - 1)))
    c = 0.132 - 0.32 * math.log10(tpr)
    d = 10 ** (0.3106 - 0.49 * tpr + 0.1824 * tpr**2)
    return SolveResult(a + (1 - a) / math.exp(b) + c * ppr**d, 0)

@lru_cache(maxsize=1)
def _z_chart():
    # Standing-Katz chart values, one column per Tpr. Columns may stop short of the last Ppr row
    with resources.files(__package__).joinpath("z_chart.csv").open("r") as f:
        df = pd.read_csv(f)
    tprs = np.array([float(col) for col in df.columns[1:]])
    columns = []
    for col in df.columns[1:]:
        valid = df[col].notna()
        pprs = df.loc[valid, "ppr"].to_numpy(dtype=float)
        columns.append((pprs[-1], interp1d(pprs, df.loc[valid, col].to_numpy(dtype=float))))
    return tprs, columns

def z_table(ppr: float, tpr: float) -> SolveResult:
    # Bilinear interpolation of the Standing-Katz chart
    tprs, columns = _z_chart()
    if not (tprs[0] <= tpr <= tprs[-1]) or ppr < 0:
        raise CorrelationDomainError(
            f"TABLE: Ppr={ppr:.4g}, Tpr={tpr:.4g} outside chart limits ({tprs[0]} <= Tpr <= {tprs[-1]}, Ppr >= 0)"
        )
    j = min(int(np.searchsorted(tprs, tpr, side="right")) - 1, len(tprs) - 2)
    zs = []
    for ppr_max, column in columns[j:j + 2]:
        if ppr > ppr_max:
            raise CorrelationDomainError(f"TABLE: Ppr={ppr:.4g} beyond chart data (max {ppr_max}) near Tpr={tpr:.4g}")
        zs.append(float(column(ppr)))
    xt = (tpr - tprs[j]) / (tprs[j + 1] - tprs[j])
    return SolveResult(zs[0] + xt * (zs[1] - zs[0]), 0)

_Z_DIC = {"DAK": z_dak, "DPR": z_dpr, "HY": z_hy, "RK": z_rk, "BB": z_bb, "TABLE": z_table}

def z_factor(ppr: float, tpr: float, zmethod: z_method = z_method.DAK) -> SolveResult:
    """ Returns real-gas deviation factor (Z) as a SolveResult from pseudo-reduced pressure & temperature.
        Result value is None if an iterative method did not converge.
        Raises CorrelationDomainError if (ppr, tpr) is outside the method's validated range.
        zmethod: Method for calculating Z-Factor, as enum, name or integer code
                 0 'DAK' Dranchuk & Abou-Kassem (1975). 0 < Ppr < 30, 1 < Tpr <= 3
                 1 'DPR' Dranchuk, Purvis & Robinson (1974). 0 < Ppr < 15, 1 < Tpr <= 3
                 2 'HY' Hall & Yarborough (1973). 0 < Ppr < 30, 1 < Tpr <= 3
                 3 'RK' Redlich-Kwong (1949) EOS. 0 <= Ppr < 15, 1 < Tpr <= 3
                 4 'BB' Brill & Beggs (1974). 0 <= Ppr < 15, 1.15 < Tpr <= 2.4
                 5 'TABLE' Standing-Katz chart interpolation. 1.05 <= Tpr <= 3
    """
    zmethod = validate_methods(["zmethod"], [zmethod])
    result = _Z_DIC[zmethod.name](ppr, tpr)
    if not result.converged:
        logger.debug("%s Z-Factor did not converge in %d iterations at Ppr=%.4g, Tpr=%.4g",
                     zmethod.name, result.iterations, ppr, tpr)
    return result

def gas_z(
    p: npt.ArrayLike,
    sg: float,
    degf: float,
    zmethod: z_method = z_method.DAK,
) -> np.ndarray:
    """ Returns real-gas deviation factor (Z). Returning either single float, or numpy array depending upon
        whether single pressure of list/array or pressures has been specified.
        Raises ConvergenceError if any pressure fails to converge
        p: Gas pressure (psia). Takes a single float, 1D list or 1D Numpy array
        sg: Gas SG relative to air. Single float only
        degf: Gas Temperature (deg F). Single float only
        zmethod: Method for calculating Z-Factor. See z_factor()
    """
    p, is_list = convert_to_numpy(p)
    tpc, ppc = gas_tc_pc(sg)
    tr = gas_tr(degf, tpc)
    zout = []
    for psia in p:
        result = z_factor(psia / ppc, tr, zmethod)
        if not result.converged:
            raise ConvergenceError(f"Z-Factor did not converge at {psia} psia, {degf} degF")
        zout.append(result.value)
    return process_output(zout, is_list)

def gas_den(p: npt.ArrayLike, sg: float, degf: float, zee: npt.ArrayLike) -> np.ndarray:
    """ Returns gas density (lbm/ft³)
        p: Gas pressure (psia)
        sg: Gas SG relative to air
        degf: Gas Temperature (deg F)
        zee: Gas Z-Factor
    """
    p, is_list = convert_to_numpy(p)
    zee, _ = convert_to_numpy(zee)
    return process_output(p * MW_AIR * sg / (zee * R * (degf + degF2R)), is_list)


# ============================================================================
#  Gas viscosity
# ============================================================================

def _ug_patm(degf, sg):
    # Carr, Kobayashi & Burrows (1954) viscosity at atmospheric pressure (cP)
    return (1.709e-5 - 2.062e-6 * sg) * degf + 8.188e-3 - 6.15e-3 * math.log10(sg)

def _ug_sour(sg, n2=0, co2=0, h2s=0):
    # Additive N2, CO2 & H2S corrections to atmospheric viscosity (cP)
    log_sg = math.log10(sg)
    return (n2 * (8.48e-3 * log_sg + 9.59e-3)
            + co2 * (9.08e-3 * log_sg + 6.24e-3)
            + h2s * (8.49e-3 * log_sg + 3.73e-3))

def _ug_ratio(ppr, tpr):
    # Dempsey (1965) fit of the Carr et al. ug/ug1 chart
    lnr = -2.4621182 + 2.970547414 * ppr - 0.286264054 * ppr**2 + 0.00805420522 * ppr**3
    lnr += tpr * (2.80860949 - 3.49803305 * ppr + 0.36037302 * ppr**2 - 0.01044324 * ppr**3)
    lnr += tpr**2 * (-0.793385648 + 1.39643306 * ppr - 0.149144925 * ppr**2 + 0.00441015512 * ppr**3)
    lnr += tpr**3 * (0.0839387178 - 0.186408848 * ppr + 0.0203367881 * ppr**2 - 0.000609579263 * ppr**3)
    return np.exp(lnr) / tpr

# Lee, Gonzalez & Eakin parameter sets: (k1, k2, k3, k4, x1, x2, x3, y1, y2)
_LGE_PARAMS = {
    "LGE": (7.77, 0.0063, 122.4, 12.9, 2.57, 1914.5, 0.0095, 1.11, 0.04),
    "LGE1": (9.4, 0.02, 209.0, 19.0, 3.5, 986.0, 0.01, 2.4, -0.2),
    "LGEM": (9.379, 0.01607, 209.2, 19.26, 3.448, 986.4, 0.01009, 2.447, -0.2224),
}

def gas_ug(
    p: npt.ArrayLike,
    sg: float,
    degf: float,
    zee: npt.ArrayLike,
    ugmethod: ug_method = ug_method.LGE,
    n2: float = 0,
    co2: float = 0,
    h2s: float = 0,
) -> np.ndarray:
    """ Returns Gas Viscosity (cP)
        Density-based forms need the Z-Factor, so it is passed in (Z -> density -> viscosity)

          p: Gas pressure (psia)
          sg: Gas SG relative to air
          degf: Gas Temperature (deg F)
          zee: Gas Z-Factor at p & degf
          ugmethod: Method for calculating gas viscosity, as enum, name or integer code
                    0 'LGE' Lee, Gonzalez & Eakin (1966), original constants
                    1 'LGE1' Lee, Gonzalez & Eakin (1966), common constants
                    2 'LGEM' Lee, Gonzalez & Eakin, modified constants
                    3 'CARR' Carr, Kobayashi & Burrows (1954) with Dempsey ratio and sour gas corrections
          n2, co2, h2s: Molar fractions, used only by the 'CARR' sour gas correction
    """
    p, is_list = convert_to_numpy(p)
    zee, _ = convert_to_numpy(zee)
    ugmethod = validate_methods(["ugmethod"], [ugmethod])

    if ugmethod.name == "CARR":
        tpc, ppc = gas_tc_pc(sg, n2, co2, h2s)
        ug1 = _ug_patm(degf, sg) + _ug_sour(sg, n2, co2, h2s)
        return process_output(ug1 * _ug_ratio(p / ppc, gas_tr(degf, tpc)), is_list)

    k1, k2, k3, k4, x1, x2, x3, y1, y2 = _LGE_PARAMS[ugmethod.name]
    t = degf + degF2R
    mw = MW_AIR * sg
    rho = gas_den(p, sg, degf, zee) * LBCUFT_TO_GCC  # g/cm³
    k = (k1 + k2 * mw) * t**1.5 / (k3 + k4 * mw + t)
    x = x1 + x2 / t + x3 * mw
    y = y1 + y2 * x
    return process_output(k * 1e-4 * np.exp(x * np.power(rho, y)), is_list)

def gas_state(
    p: float,
    sg: float,
    degf: float,
    zmethod: z_method = z_method.DAK,
    ugmethod: ug_method = ug_method.LGE,
    n2: float = 0,
    co2: float = 0,
    h2s: float = 0,
) -> Optional[GasState]:
    """ Returns GasState (Z, density lbm/ft³, viscosity cP) at a single pressure (psia) & temperature (deg F),
        or None if the Z-Factor did not converge. Out of range inputs raise CorrelationDomainError
    """
    tpc, ppc = gas_tc_pc(sg, n2, co2, h2s)
    result = z_factor(p / ppc, gas_tr(degf, tpc), zmethod)
    if not result.converged:
        return None
    zee = result.value
    den = gas_den(p, sg, degf, zee)
    ug = gas_ug(p, sg, degf, zee, ugmethod, n2, co2, h2s)
    return GasState(zee, den, ug)
