import numba as nb
import numpy as np


@nb.njit(parallel=False, cache=True, nogil=True, error_model="numpy")
def nb_parabola_stack(line, sigma2, left, center, right, apex):
    """
    Build the lower envelope of the parabolas ``sigma2 * (x - k)**2 + line[k]``.

    The stack is stored as four arrays of length ``line.size``; entry ``i``
    dominates ``[left[i], right[i])``, has its apex at ``center[i]`` and apex
    value ``apex[i]``. Returns the number of entries on the stack.

    Samples equal to ``inf`` (``-inf`` when ``sigma2 < 0``) never reach the
    envelope and are not pushed; a line made only of them gives an empty stack.
    """
    w = line.shape[0]
    sigma22 = 2.0 * sigma2
    absent = np.inf if sigma2 > 0 else -np.inf
    first = 0
    while first < w and float(line[first]) == absent:
        first += 1
    if first == w:
        return 0
    left[0] = 0.0
    center[0] = float(first)
    right[0] = w
    apex[0] = line[first]
    top = 0
    for k in range(first + 1, w):
        current = float(k)
        value = float(line[k])
        if value == absent:
            continue
        intersection = 0.0
        while True:
            diff = current - center[top]
            intersection = current + (value - apex[top] - sigma2 * diff * diff) / (
                sigma22 * diff
            )
            if intersection < left[top]:
                # top parabola is dominated on its whole interval
                top -= 1
                if top >= 0:
                    continue
                intersection = 0.0
            elif intersection < right[top]:
                right[top] = intersection
            break
        top += 1
        left[top] = intersection
        center[top] = current
        right[top] = w
        apex[top] = value
    return top + 1


@nb.njit(parallel=False, cache=True, nogil=True, error_model="numpy")
def nb_evaluate_stack(out, sigma2, center, right, apex):
    w = out.shape[0]
    i = 0
    for k in range(w):
        current = float(k)
        while current >= right[i]:
            i += 1
        diff = current - center[i]
        out[k] = sigma2 * diff * diff + apex[i]


@nb.njit(parallel=False, cache=True, nogil=True, error_model="numpy")
def nb_distance_parabola(line_in, line_out, sigma, invert):
    """
    Lower envelope of one line, written to ``line_out``.

    ``invert`` flips the parabolas to open downwards, which turns the lower
    envelope into the upper one (dilation). ``line_in`` and ``line_out`` may
    be the same array.
    """
    w = line_in.shape[0]
    if w <= 0:
        return
    sigma2 = sigma * sigma
    if invert:
        sigma2 = -sigma2
    left = np.empty(w, dtype=np.float64)
    center = np.empty(w, dtype=np.float64)
    right = np.empty(w, dtype=np.float64)
    apex = np.empty(w, dtype=np.float64)
    size = nb_parabola_stack(line_in, sigma2, left, center, right, apex)
    if size == 0:
        fill = np.inf if sigma2 > 0 else -np.inf
        for k in range(w):
            line_out[k] = fill
        return
    nb_evaluate_stack(line_out, sigma2, center, right, apex)


@nb.njit(parallel=True, cache=True, nogil=True, error_model="numpy")
def nb_envelope_lines(src, dst, sigma, invert):
    # rows of src/dst are the lines of one axis pass, independent of each other
    for i in nb.prange(src.shape[0]):
        nb_distance_parabola(src[i], dst[i], sigma, invert)
