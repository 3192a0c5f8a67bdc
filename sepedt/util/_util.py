import logging
import os
from contextlib import contextmanager

import numba as nb
import numpy as np

logger = logging.getLogger(__name__)


@contextmanager
def nb_threads(n_workers=None):
    """
    Temporarily set the number of numba threads.

    Parameters
    ----------
    n_workers : int, optional
        Number of threads inside the block. None keeps the current count,
        negative values count back from the numba thread pool size (-1 means all).
    """
    initial_threads = nb.get_num_threads()
    if n_workers is None:
        n_workers = initial_threads
    elif n_workers < 0:
        n_workers = nb.config.NUMBA_NUM_THREADS + n_workers + 1
    nb.set_num_threads(n_workers)
    try:
        yield
    finally:
        nb.set_num_threads(initial_threads)


def set_num_threads(num_threads, numba=True, mkl=True, openmp=True):
    num_threads = round(num_threads)
    if num_threads < 0:
        num_threads = nb.config.NUMBA_NUM_THREADS + num_threads + 1
    if numba:
        nb.set_num_threads(num_threads)
    if mkl:
        os.environ["MKL_NUM_THREADS"] = str(num_threads)
    if openmp:
        os.environ["OMP_NUM_THREADS"] = str(num_threads)


def as_axis_tuple(values, ndim, name="pitch", default=1.0):
    """
    Normalise a scalar or per-axis sequence to a tuple of ``ndim`` positive floats.

    Parameters
    ----------
    values : None, float or sequence of float
        None gives ``default`` on every axis, a scalar is broadcast.
    ndim : int
        Rank of the array the values belong to.
    name : str
        Argument name used in error messages.

    Returns
    -------
    tuple of float
    """
    if values is None:
        return (float(default),) * ndim
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim == 0:
        arr = np.full(ndim, arr)
    arr = np.reshape(arr, -1)
    if arr.size != ndim:
        raise ValueError(
            f"{name} has {arr.size} entries but the array has {ndim} dimensions"
        )
    if not np.all(np.isfinite(arr)) or np.any(arr <= 0):
        raise ValueError(f"{name} must be finite and positive, got {tuple(arr)}")
    return tuple(float(v) for v in arr)


def saturate_cast(values, dtype):
    """
    Round a real array and cast it into an integer ``dtype`` without wrapping.

    Values outside the representable range are clamped to ``iinfo(dtype).min``
    and ``iinfo(dtype).max``.
    """
    info = np.iinfo(dtype)
    rounded = np.rint(values)
    above = rounded >= info.max
    below = rounded <= info.min
    n_clipped = np.count_nonzero(rounded > info.max) + np.count_nonzero(
        rounded < info.min
    )
    if n_clipped:
        logger.warning(
            f"{n_clipped} values out of range for {np.dtype(dtype).name} were saturated"
        )
    rounded[above | below] = 0
    res = rounded.astype(dtype)
    res[above] = info.max
    res[below] = info.min
    return res
