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


# Constants
R = 10.731  # Universal gas constant, ft³·psia/°R·lb.mol
psc = 14.696  # Standard conditions pressure (psia)
tsc = 60  # Standard conditions temperature (deg F)
degF2R = 459.67  # Offset to convert degrees F to degrees Rankine
tscr = tsc + degF2R  # Standard conditions temperature (deg R)
MW_AIR = 28.97  # MW of Air
CUFTperBBL = 5.61458
WDEN = 62.4 # Water Density lb/cuft
GC = 32.174  # lbm*ft/(lbf*s^2)
LBCUFT_TO_GCC = 453.59237 / 28316.8466  # lbm/ft³ -> g/cm³

RE_LAMINAR = 2100  # Laminar / turbulent switch for Fanning friction factor
SG_MIN = 0.56  # Lower gas SG limit of the pseudo-critical correlation

# Curve spacing defaults, used when a non-positive spacing value is supplied
DEFAULT_NPOINTS = 25
DEFAULT_DELTA_P = 100.0  # psi
DEFAULT_DELTA_Q = 50.0  # STB/d or Mscf/d

# Iterative solver limits
Z_MAX_ITER = 100
Z_TOL = 1e-6
RK_TOL = 1e-5
CW_ITER = 25  # Fixed Colebrook-White iteration count
CW_SEED = 0.02  # Colebrook-White starting Darcy friction factor

# Outflow curve controls
OPR_QSPAN_MIN = 300.0
OPR_QSPAN_MAX = 20000.0
OPR_RE_TARGET = 1e5
OPR_HINT_FACTOR = 1.25
GAS_QSPAN_DEFAULT = 5000.0  # Mscf/d
GAS_NSEG = 40  # Number of marching segments for gas outflow
GAS_SEG_PASSES = 3  # Mid-pressure passes per segment

# Oil correlations
WDEN_GCC = 0.999012  # Water density at 60 deg F (g/cm³)
VB_PSEP_REF = 114.7  # Vazquez & Beggs reference separator pressure (psia)
