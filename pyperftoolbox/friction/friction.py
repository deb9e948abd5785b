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

from pyperftoolbox.classes import friction_model
from pyperftoolbox.validate import validate_methods
from pyperftoolbox.constants import RE_LAMINAR, CW_ITER, CW_SEED


def relative_roughness(eps: float, tid: float) -> float:
    """ Returns relative roughness (eps/D).
        eps: Roughness. Values <= 0.01 are taken as already relative, larger values as absolute (ft)
        tid: Internal diameter (inches)
    """
    if eps <= 0.01:
        return eps
    return eps / (tid / 12.0)

def _chen(re, rel):
    a = -2.0 * math.log10(
        rel / 3.7065
        - (5.0452 / re) * math.log10(rel ** 1.1098 / 2.8257 + (7.149 / re) ** 0.8981)
    )
    return 1.0 / (a * a)

def _swamee_jain(re, rel):
    return 0.25 / math.log10(rel / 3.7 + 5.74 / re ** 0.9) ** 2

def _colebrook_white(re, rel):
    # Fixed iteration count, no convergence test
    f = CW_SEED
    for _ in range(CW_ITER):
        rhs = -2.0 * math.log10(rel / 3.7 + 2.51 / (re * math.sqrt(f)))
        f = 1.0 / (rhs * rhs)
    return f

def _haaland(re, rel):
    inv_sqrt = -1.8 * math.log10((rel / 3.7) ** 1.11 + 6.9 / re)
    return 1.0 / (inv_sqrt * inv_sqrt)

def _churchill(re, rel):
    a = (2.457 * math.log(1.0 / ((7.0 / re) ** 0.9 + 0.27 * rel))) ** 16
    b = (37530.0 / re) ** 16
    return 8.0 * ((8.0 / re) ** 12 + 1.0 / (a + b) ** 1.5) ** (1.0 / 12.0)

_DARCY_DIC = {
    "CHEN": _chen,
    "SWAMEE_JAIN": _swamee_jain,
    "COLEBROOK_WHITE": _colebrook_white,
    "HAALAND": _haaland,
    "CHURCHILL": _churchill,
    "LAMINAR": _chen,  # Laminar (auto) only differs below the laminar limit, where all models agree
}

def fanning(re: float, rel: float, model: friction_model = friction_model.CHEN) -> float:
    """ Returns Fanning friction factor (Darcy / 4)
        re: Reynolds number
        rel: Relative roughness (eps/D)
        model: Friction correlation
               'CHEN' Chen (1979), default
               'SWAMEE_JAIN' Swamee & Jain (1976)
               'COLEBROOK_WHITE' Colebrook & White (1939), 25 fixed-point iterations
               'HAALAND' Haaland (1983)
               'CHURCHILL' Churchill (1977)
               'LAMINAR' Laminar (auto), uses Chen above the laminar limit
               Display labels such as 'Chen (1979)' are also accepted
        Below Re = 2100 all models return the laminar value 16/Re
    """
    if re <= 0:
        raise ValueError(f"Reynolds number must be positive, got {re}")
    model = validate_methods(["friction"], [model])
    if re < RE_LAMINAR:
        return 16.0 / re
    return _DARCY_DIC[model.name](re, rel) / 4.0

def darcy(re: float, rel: float, model: friction_model = friction_model.CHEN) -> float:
    """ Returns Darcy (Moody) friction factor, 4x the Fanning value """
    return 4.0 * fanning(re, rel, model)
