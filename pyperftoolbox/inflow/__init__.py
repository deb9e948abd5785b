from .inflow import (LiquidTransient, LiquidPseudosteady, LiquidSteady, GasTransient, GasPseudosteady,
                     GasSteady, TwoPhasePseudosteady, inflow_model, ipr_curve)
