from .gas import (GasState, gas_tc_pc, gas_tr, gas_pr, z_factor, z_dak, z_dpr, z_hy, z_rk, z_bb, z_table,
                  gas_z, gas_den, gas_ug, gas_state)
