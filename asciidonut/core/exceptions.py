from __future__ import annotations


class DonutError(Exception):
    pass


class ParamsError(DonutError, ValueError):
    pass


class SurfaceError(DonutError):
    pass
