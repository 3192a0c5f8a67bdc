import functools
import inspect

import numpy as np
from ..util import as_axis_tuple


def check_args(func=None, allow_nan=True):
    # called with keyword arguments only: return the real decorator
    if func is None:
        return lambda f: check_args(f, allow_nan)

    sig = inspect.signature(func)
    params = sig.parameters

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        bound_args = sig.bind(*args, **kwargs)
        bound_args.apply_defaults()
        source = np.asarray(bound_args.arguments.get("source"))
        if source.ndim == 0:
            raise ValueError("source must have at least one dimension")
        if source.dtype.kind not in "biuf":
            raise TypeError(f"Unsupported source dtype {source.dtype}")
        if not allow_nan and source.dtype.kind == "f" and np.isnan(source).any():
            raise ValueError("source contains NaN")
        bound_args.arguments["source"] = source
        dest = bound_args.arguments.get("dest")
        if dest is None:
            dest = np.empty(source.shape, dtype=np.float64)
        elif not isinstance(dest, np.ndarray):
            raise TypeError("dest must be a numpy array")
        if dest.shape != source.shape:
            raise ValueError(f"Shape mismatch: source {source.shape}, dest {dest.shape}")
        if dest.dtype.kind not in "iuf":
            raise TypeError(f"Unsupported dest dtype {dest.dtype}")
        bound_args.arguments["dest"] = dest
        for name in ("pitch", "sigma"):
            if name in params:
                bound_args.arguments[name] = as_axis_tuple(
                    bound_args.arguments.get(name), source.ndim, name=name
                )
        return func(*bound_args.args, **bound_args.kwargs)

    return wrapper
