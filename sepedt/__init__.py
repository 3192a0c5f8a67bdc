"""
Separable Euclidean distance transform of N-dimensional masks, built on numba.
"""

__version__ = "0.1.0"
import os

os.environ["NUMBA_OPT"] = "max"
os.environ["NUMBA_SLP_VECTORIZE"] = "1"
os.environ["NUMBA_FUNCTION_CACHE_SIZE"] = "1024"
os.environ["NUMBA_THREADING_LAYER_PRIORITY"] = "tbb omp workqueue"
import numba as _nb

_nb.config.reload_config()

from .transform import (
    squared_distance_transform,
    distance_transform,
    parabolic_erosion,
    parabolic_dilation,
)
from .util import nb_threads, set_num_threads

__all__ = [
    "__version__",
    "squared_distance_transform",
    "distance_transform",
    "parabolic_erosion",
    "parabolic_dilation",
    "nb_threads",
    "set_num_threads",
    "transform",
    "util",
    "decorator",
]


def __dir__():
    return __all__.copy()
