from .classes import (z_method, ug_method, friction_model, phase, regime, spacing_method, rs_method, bo_method,
                      co_method, uod_method, uol_method, uou_method, class_dic, label_dic, CurvePoint, SolveResult)
