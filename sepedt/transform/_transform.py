import logging

import numpy as np

from ._transform_numba import nb_envelope_lines
from ..decorator import check_args
from ..util import nb_threads, saturate_cast

logger = logging.getLogger(__name__)


def _axis_lines(arr, axis):
    moved = np.moveaxis(arr, axis, -1)
    return moved, moved.reshape(-1, moved.shape[-1])


def separable_envelope(source, dest, sigmas, invert=False):
    """
    Run the 1D parabola envelope along every axis of ``source``.

    The last axis reads ``source`` and writes ``dest``; the remaining axes are
    processed in place on ``dest`` from the second to last down to the first.
    Each axis pass completes before the next one starts.

    Parameters
    ----------
    source : ndarray
        Seed values (0 at seeds, a large finite value elsewhere) or any real
        field for morphology.
    dest : ndarray
        Output of the same shape, may be ``source`` itself.
    sigmas : sequence of float
        Spread per axis, the pixel pitch for distance transforms.
    invert : bool
        Use downward opening parabolas (upper envelope).
    """
    ndim = source.ndim
    if source.size == 0:
        return dest
    for axis in range(ndim - 1, -1, -1):
        src = source if axis == ndim - 1 else dest
        _, src_lines = _axis_lines(src, axis)
        dst_moved, dst_lines = _axis_lines(dest, axis)
        nb_envelope_lines(src_lines, dst_lines, float(sigmas[axis]), bool(invert))
        if not np.may_share_memory(dst_lines, dest):
            # reshape had to copy, write the pass back
            dst_moved[...] = dst_lines.reshape(dst_moved.shape)
    return dest


def _seed(source, background, inf, out):
    if background:
        seeds = source == 0
    else:
        seeds = source != 0
    out[...] = np.where(seeds, 0, inf)
    return out


@check_args
def squared_distance_transform(
    source, dest=None, background: bool = False, pitch=None, n_workers=None
):
    """
    Squared Euclidean distance transform of an N-dimensional mask.

    Parameters
    ----------
    source : array_like
        Mask, zero marks background and nonzero marks foreground.
    dest : ndarray, optional
        Integer or floating array of ``source.shape`` receiving the result.
        A float64 array is allocated when omitted.
    background : bool
        If True, distances are measured to the nearest background (zero)
        position, otherwise to the nearest foreground (nonzero) position.
    pitch : float or sequence of float, optional
        Physical pixel spacing per axis, 1.0 by default.
    n_workers : int, optional
        Number of numba threads, see ``sepedt.util.nb_threads``.

    Returns
    -------
    dest : ndarray
        Squared distances. Integer destinations too narrow for the result, or
        used with a non-integer pitch, are computed in float64 and rounded and
        saturated into the destination range.
    """
    shape = source.shape
    inf = 1.0
    pitch_is_real = False
    for p, s in zip(pitch, shape):
        if int(p) != p:
            pitch_is_real = True
        inf += (p * s) ** 2

    promote = dest.dtype.kind in "iu" and (
        pitch_is_real or inf > np.iinfo(dest.dtype).max
    )
    with nb_threads(n_workers):
        # numba kernels have no float16 arithmetic
        if promote or dest.dtype == np.float16:
            logger.debug(
                f"Promoting {dest.dtype.name} destination to float64 (inf={inf}, pitch={pitch})"
            )
            tmp = _seed(source, background, inf, np.empty(shape, dtype=np.float64))
            separable_envelope(tmp, tmp, pitch)
            if promote:
                dest[...] = saturate_cast(tmp, dest.dtype)
            else:
                dest[...] = tmp
        else:
            logger.debug(f"Working in {dest.dtype.name} destination (inf={inf})")
            _seed(source, background, inf, dest)
            separable_envelope(dest, dest, pitch)
    return dest


@check_args
def distance_transform(
    source, dest=None, background: bool = False, pitch=None, n_workers=None
):
    """
    Euclidean distance transform, the square root of ``squared_distance_transform``.

    Takes the same arguments. Integer destinations receive the truncated root.
    """
    squared_distance_transform(source, dest, background, pitch, n_workers)
    dest[...] = np.sqrt(dest)
    return dest


def _parabolic_morphology(source, sigma, dest, invert, n_workers):
    tmp = source.astype(np.float64)
    with nb_threads(n_workers):
        separable_envelope(tmp, tmp, sigma, invert=invert)
    if dest.dtype.kind in "iu":
        dest[...] = saturate_cast(tmp, dest.dtype)
    else:
        dest[...] = tmp
    return dest


@check_args(allow_nan=False)
def parabolic_erosion(source, sigma=1.0, dest=None, n_workers=None):
    """
    Grayscale erosion with the parabolic structuring function ``(sigma * x)**2``.

    ``dest[x] = min_q source[q] + sum_a (sigma[a] * (x[a] - q[a]))**2``.
    The squared distance transform is the erosion of the seed image.
    """
    return _parabolic_morphology(source, sigma, dest, False, n_workers)


@check_args(allow_nan=False)
def parabolic_dilation(source, sigma=1.0, dest=None, n_workers=None):
    """
    Grayscale dilation with the parabolic structuring function ``-(sigma * x)**2``.

    ``dest[x] = max_q source[q] - sum_a (sigma[a] * (x[a] - q[a]))**2``.
    """
    return _parabolic_morphology(source, sigma, dest, True, n_workers)
