from ._decorator import check_args

__all__ = ["check_args"]
