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

from enum import Enum
from typing import NamedTuple, Optional

class z_method(Enum):  # Gas Z-Factor calculation model
    DAK = 0
    DPR = 1
    HY = 2
    RK = 3
    BB = 4
    TABLE = 5

class ug_method(Enum):  # Gas viscosity calculation model
    LGE = 0
    LGE1 = 1
    LGEM = 2
    CARR = 3

class friction_model(Enum):  # Pipe friction factor correlation
    CHEN = 0
    SWAMEE_JAIN = 1
    COLEBROOK_WHITE = 2
    HAALAND = 3
    CHURCHILL = 4
    LAMINAR = 5

class phase(Enum):  # Reservoir fluid phase for inflow
    LIQUID = 0
    GAS = 1
    TWOPHASE = 2

class regime(Enum):  # Reservoir flow regime for inflow
    TRANSIENT = 0
    PSEUDOSTEADY = 1
    STEADY = 2

class spacing_method(Enum):  # How curve evaluation points are chosen
    NPOINTS = "Number of Points"
    DELTA_P = "Delta Pressure"
    DELTA_Q = "Delta Flowrate"

class rs_method(Enum):  # Oil solution gas calculation method
    STAN = 0
    LAS = 1
    VASBG = 2
    GLASO = 3
    PF = 4
    VELAR = 5

class bo_method(Enum):  # Saturated oil FVF calculation method
    STAN = 0
    VASBG = 1
    GLASO = 2
    PF = 3

class co_method(Enum):  # Undersaturated oil compressibility calculation method
    VASBG = 0

class uod_method(Enum):  # Dead oil viscosity calculation method
    BEAL = 0
    GLASO = 1
    BR = 2
    BRM = 3
    BERG = 4
    BS = 5
    ASTM = 6

class uol_method(Enum):  # Live (saturated) oil viscosity correction
    BR = 0
    CC = 1

class uou_method(Enum):  # Undersaturated oil viscosity correction
    BEAL = 0
    VASBG = 1

class_dic = {
    "zmethod": z_method,
    "ugmethod": ug_method,
    "friction": friction_model,
    "phase": phase,
    "regime": regime,
    "spacing": spacing_method,
    "rsmethod": rs_method,
    "bomethod": bo_method,
    "comethod": co_method,
    "uodmethod": uod_method,
    "uolmethod": uol_method,
    "uoumethod": uou_method,
}

# Display labels used by input forms, mapped onto enum members
label_dic = {
    "friction": {
        "CHEN (1979)": friction_model.CHEN,
        "SWAMEE-JAIN (1976)": friction_model.SWAMEE_JAIN,
        "SWAMEE-JAIN": friction_model.SWAMEE_JAIN,
        "COLEBROOK-WHITE (1939)": friction_model.COLEBROOK_WHITE,
        "COLEBROOK-WHITE": friction_model.COLEBROOK_WHITE,
        "HAALAND (1983)": friction_model.HAALAND,
        "CHURCHILL (1977)": friction_model.CHURCHILL,
        "LAMINAR (AUTO)": friction_model.LAMINAR,
    },
    "zmethod": {
        "DRANCHUK & ABOU-KASSEM - 1975": z_method.DAK,
        "DRANCHUK, PURVIS & ROBINSON - 1974": z_method.DPR,
        "HALL & YARBOROUGH - 1974": z_method.HY,
        "REDLICH KWONG - 1949": z_method.RK,
        "BRILL & BEGGS - 1974": z_method.BB,
        "CHART INTERPOLATION": z_method.TABLE,
    },
    "ugmethod": {
        "LEE, GONZALES AND EAKIN-0": ug_method.LGE,
        "LEE, GONZALES AND EAKIN-1": ug_method.LGE1,
        "LEE, GONZALES AND EAKIN - MODIFIED": ug_method.LGEM,
        "CARR ET AL. 1954": ug_method.CARR,
    },
    "phase": {
        "TWO-PHASE": phase.TWOPHASE,
    },
    "regime": {
        "PSEUDOSTEADY-STATE": regime.PSEUDOSTEADY,
        "STEADY-STATE": regime.STEADY,
    },
    "spacing": {
        "NUMPOINTS": spacing_method.NPOINTS,
        "DELTAP": spacing_method.DELTA_P,
        "DELTAQ": spacing_method.DELTA_Q,
    },
    "rsmethod": {
        "STANDING": rs_method.STAN,
        "LASATER": rs_method.LAS,
        "VAZQUEZ & BEGGS": rs_method.VASBG,
        "GLASO": rs_method.GLASO,
        "PETROSKY & FARSHAD": rs_method.PF,
        "VELARDE, BLASINGAME & MCCAIN": rs_method.VELAR,
    },
    "bomethod": {
        "STANDING": bo_method.STAN,
        "VAZQUEZ & BEGGS": bo_method.VASBG,
        "GLASO": bo_method.GLASO,
        "PETROSKY & FARSHAD": bo_method.PF,
    },
    "uodmethod": {
        "BEGGS & ROBINSON": uod_method.BR,
        "BEGGS & ROBINSON MODIFIED": uod_method.BRM,
        "BERGMAN": uod_method.BERG,
        "BERGMAN & SUTTON": uod_method.BS,
    },
    "uolmethod": {
        "BEGGS & ROBINSON": uol_method.BR,
        "CHEW & CONNALLY": uol_method.CC,
    },
    "uoumethod": {
        "VAZQUEZ & BEGGS": uou_method.VASBG,
    },
}


class CurvePoint(NamedTuple):
    """ Single (bottomhole pressure, rate) point of an IPR or OPR curve """
    pressure: float
    rate: float


class SolveResult(NamedTuple):
    """ Outcome of an iterative solve. value is None if the iteration cap was reached """
    value: Optional[float]
    iterations: int = 0

    @property
    def converged(self) -> bool:
        return self.value is not None
