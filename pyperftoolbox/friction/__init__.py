from .friction import fanning, darcy, relative_roughness
