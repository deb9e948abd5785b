"""
pyperftoolbox
===================================

-----------------------------------------------
Well Performance (IPR / OPR) Curve Utilities
-----------------------------------------------

Functions and classes to build the curves used in nodal analysis of a single well, each returned as a list of
(bottomhole pressure, rate) points in oilfield units.

Includes;

- Inflow (IPR) for single phase liquid, single phase gas and two phase reservoirs,
  in transient, pseudosteady-state and steady-state flow
- Outflow (OPR) for single phase oil and single phase gas conduits
- Fanning friction factor correlations
- Gas pseudo-critical properties, Z-Factor, density and viscosity correlations
- Black oil solution GOR, FVF, compressibility, density, viscosity and interfacial tension correlations
- Curve sample spacing by number of points, pressure step or rate step

Sub-modules are imported on first use, e.g. pyperftoolbox.inflow.ipr_curve(...)

"""

import logging

submodules = [
    'classes',
    'constants',
    'friction',
    'gas',
    'inflow',
    'nodal',
    'oil',
    'shared_fns',
    'spacing',
    'validate'
]

__all__ = submodules 

import importlib

logging.getLogger(__name__).addHandler(logging.NullHandler())

def __dir__():
    return __all__


def __getattr__(name):
    if name in submodules:
        return importlib.import_module(f'pyperftoolbox.{name}')
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(
                f"Module 'pyperftoolbox' has no attribute '{name}'"
            )
