from .spacing import CurveSpacing, fractions
