from ._transform import (
    squared_distance_transform,
    distance_transform,
    parabolic_erosion,
    parabolic_dilation,
    separable_envelope,
)
from ._transform_numba import (
    nb_parabola_stack,
    nb_evaluate_stack,
    nb_distance_parabola,
    nb_envelope_lines,
)

__all__ = [
    "squared_distance_transform",
    "distance_transform",
    "parabolic_erosion",
    "parabolic_dilation",
    "separable_envelope",
    "nb_parabola_stack",
    "nb_evaluate_stack",
    "nb_distance_parabola",
    "nb_envelope_lines",
]
