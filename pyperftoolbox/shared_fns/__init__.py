from .shared_fns import (CorrelationDomainError, ConvergenceError, convert_to_numpy,
                         process_output, is_valid_point, curve_dataframe)
