from .oil import (oil_sg, oil_api, gas_sg100, oil_rs, oil_co, oil_bo, oil_deno, oil_viso_dead, oil_viso_live,
                  oil_viso_under, oil_viso, oil_ift)
