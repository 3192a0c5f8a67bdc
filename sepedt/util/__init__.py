from ._util import (
    nb_threads,
    set_num_threads,
    as_axis_tuple,
    saturate_cast,
)

__all__ = ["nb_threads", "set_num_threads", "as_axis_tuple", "saturate_cast"]
