from .cmac_constant import CMACConstant

__all__ = ["CMACConstant"]
