from .nodal import Conduit, OilFluid, GasFluid, oil_fbhp, gas_fbhp, outflow_curve
