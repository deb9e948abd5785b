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

from typing import List

import numpy as np

from pyperftoolbox.classes import spacing_method
from pyperftoolbox.validate import validate_methods
from pyperftoolbox.constants import DEFAULT_NPOINTS, DEFAULT_DELTA_P, DEFAULT_DELTA_Q

_DEFAULTS = {
    "NPOINTS": DEFAULT_NPOINTS,
    "DELTA_P": DEFAULT_DELTA_P,
    "DELTA_Q": DEFAULT_DELTA_Q,
}


def fractions(n: int) -> List[float]:
    """ Returns n evenly spaced fractions from 0 to 1 inclusive. A single point returns [0.0] """
    n = int(n)
    if n < 1:
        raise ValueError(f"Number of points must be at least 1, got {n}")
    if n == 1:
        return [0.0]
    return [float(frac) for frac in np.linspace(0.0, 1.0, n)]


class CurveSpacing:
    """ How the sample points of an IPR or OPR curve are chosen

        method: Spacing method, as enum, name or label
                'NPOINTS' ("Number of Points"): fixed number of evenly spaced points
                'DELTA_P' ("Delta Pressure"): fixed pressure step (psi) down from the reference pressure
                'DELTA_Q' ("Delta Flowrate"): fixed rate step up from zero
        value: Number of points, or step size. Non-positive values take the default
               (25 points, 100 psi, 50 STB/d or Mscf/d)
    """
    def __init__(self, method=spacing_method.NPOINTS, value=0):
        self.method = validate_methods(["spacing"], [method])
        if value is None or value <= 0:
            value = _DEFAULTS[self.method.name]
        if self.method is spacing_method.NPOINTS:
            value = max(1, int(round(value)))
        self.value = value

    def __repr__(self):
        return f"CurveSpacing({self.method.name}, {self.value})"

    @property
    def paced_by_pressure(self):
        return self.method is spacing_method.DELTA_P

    @property
    def paced_by_rate(self):
        return self.method is spacing_method.DELTA_Q

    def pressure_samples(self, p_ref: float) -> List[float]:
        """ Returns bottomhole pressures from p_ref down to zero.
            p_ref: Reference (average, initial or boundary) reservoir pressure (psia)
        """
        if self.paced_by_rate:
            raise ValueError("Pressure samples are not defined for rate-paced spacing")
        if self.method is spacing_method.NPOINTS:
            return [p_ref * (1.0 - frac) for frac in fractions(self.value)]

        # Steps are taken from p_ref each time so rounding does not accumulate
        tol = 1e-9 * max(1.0, abs(p_ref))
        pressures = []
        i = 0
        while True:
            p = p_ref - i * self.value
            if p <= tol:
                pressures.append(0.0)
                break
            pressures.append(p)
            i += 1
        return pressures

    def rate_samples(self, q_max: float) -> List[float]:
        """ Returns rates from zero up to q_max.
            q_max: Largest rate to sample (STB/d or Mscf/d)
        """
        if self.paced_by_pressure:
            raise ValueError("Rate samples are not defined for pressure-paced spacing")
        if self.method is spacing_method.NPOINTS:
            return [q_max * frac for frac in fractions(self.value)]

        rates = []
        i = 0
        while i * self.value <= q_max + 1e-9:
            rates.append(i * self.value)
            i += 1
        return rates
