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
from typing import List, Tuple

import numpy as np
import numpy.typing as npt
import pandas as pd

from pyperftoolbox.classes import CurvePoint


class CorrelationDomainError(ValueError):
    """ Input lies outside the validated range of a correlation """


class ConvergenceError(ArithmeticError):
    """ Iterative solver reached its iteration cap without converging """


def convert_to_numpy(input_data: npt.ArrayLike) -> Tuple[np.ndarray, bool]:
    # Returns input as a 1D numpy array, and whether it was supplied as a list/array
    is_list = isinstance(input_data, (list, tuple, np.ndarray))
    return np.atleast_1d(np.asarray(input_data, dtype=float)), is_list

def process_output(output_data, is_list: bool):
    # Return a float for single scalar inputs, else a numpy array
    output_data = np.asarray(output_data, dtype=float)
    if not is_list and output_data.size == 1:
        return float(output_data.item())
    return output_data

def is_valid_point(pressure: float, rate: float) -> bool:
    """ True if a curve point is finite and non-negative in both coordinates """
    if pressure is None or rate is None:
        return False
    if not (math.isfinite(pressure) and math.isfinite(rate)):
        return False
    return pressure >= 0 and rate >= 0

def curve_dataframe(points: List[CurvePoint]) -> pd.DataFrame:
    """ Returns curve points as a DataFrame with 'pressure' and 'rate' columns, in generation order """
    return pd.DataFrame(points, columns=list(CurvePoint._fields))
