import unittest

import numpy as np
import numpy.testing as npt

from sepedt import (
    parabolic_erosion,
    parabolic_dilation,
    squared_distance_transform,
)


def brute_morphology(image, sigma, dilation=False):
    coords = np.indices(image.shape).reshape(image.ndim, -1).T
    diff = (coords[:, None, :] - coords[None, :, :]) * np.asarray(sigma)
    penalty = (diff**2).sum(axis=-1)
    values = image.reshape(-1)[None, :]
    if dilation:
        res = (values - penalty).max(axis=1)
    else:
        res = (values + penalty).min(axis=1)
    return res.reshape(image.shape)


class TestParabolicMorphology(unittest.TestCase):
    def test_erosion_matches_brute_force(self):
        rng = np.random.default_rng(30)
        image = rng.random((8, 11)) * 10.0
        res = parabolic_erosion(image, sigma=(1.0, 0.5))
        npt.assert_allclose(res, brute_morphology(image, (1.0, 0.5)), atol=1e-9)

    def test_dilation_matches_brute_force(self):
        rng = np.random.default_rng(31)
        image = rng.random((6, 5, 4)) * 10.0
        res = parabolic_dilation(image, sigma=0.8)
        npt.assert_allclose(
            res, brute_morphology(image, (0.8,) * 3, dilation=True), atol=1e-9
        )

    def test_dilation_is_dual_of_erosion(self):
        rng = np.random.default_rng(32)
        image = rng.random((9, 7)) * 5.0
        npt.assert_allclose(
            parabolic_dilation(image, sigma=1.2),
            -parabolic_erosion(-image, sigma=1.2),
            atol=1e-12,
        )

    def test_erosion_of_seed_image_is_squared_distance(self):
        rng = np.random.default_rng(33)
        mask = rng.random((10, 12)) > 0.85
        mask[0, 0] = True
        seeds = np.where(mask, 0.0, 1e6)
        npt.assert_array_equal(
            parabolic_erosion(seeds, sigma=(2.0, 1.0)),
            squared_distance_transform(mask, pitch=(2.0, 1.0)),
        )

    def test_integer_dest(self):
        image = np.array([[0, 250, 0]], dtype=np.uint8)
        dest = np.empty_like(image)
        parabolic_dilation(image, sigma=3.0, dest=dest)
        npt.assert_array_equal(dest, [[241, 250, 241]])
        parabolic_erosion(image, sigma=20.0, dest=dest)
        npt.assert_array_equal(dest, [[0, 250, 0]])

    def test_source_is_not_modified(self):
        image = np.arange(12, dtype=np.float64).reshape(3, 4)
        original = image.copy()
        parabolic_erosion(image)
        parabolic_dilation(image)
        npt.assert_array_equal(image, original)

    def test_infinite_samples_are_skipped(self):
        npt.assert_array_equal(
            parabolic_erosion(np.array([0.0, np.inf, np.inf, 5.0])), [0, 1, 4, 5]
        )
        npt.assert_array_equal(
            parabolic_dilation(np.array([0.0, -np.inf, -np.inf, 5.0])), [0, 1, 4, 5]
        )
        npt.assert_array_equal(
            parabolic_erosion(np.array([np.inf, np.inf, 2.0, np.inf])), [6, 3, 2, 3]
        )

    def test_all_infinite_line(self):
        res = parabolic_erosion(np.full(4, np.inf))
        npt.assert_array_equal(res, np.inf)
        res = parabolic_dilation(np.full(4, -np.inf))
        npt.assert_array_equal(res, -np.inf)

    def test_infinite_image_matches_brute_force(self):
        rng = np.random.default_rng(34)
        image = rng.random((7, 9)) * 10.0
        image[rng.random(image.shape) < 0.4] = np.inf
        image[2, :] = np.inf
        npt.assert_allclose(
            parabolic_erosion(image, sigma=(1.0, 0.5)),
            brute_morphology(image, (1.0, 0.5)),
            atol=1e-9,
        )
        npt.assert_allclose(
            parabolic_dilation(-image, sigma=(1.0, 0.5)),
            brute_morphology(-image, (1.0, 0.5), dilation=True),
            atol=1e-9,
        )

    def test_negative_infinity_dominates_erosion(self):
        res = parabolic_erosion(np.array([3.0, -np.inf, 1.0, 2.0]))
        npt.assert_array_equal(res, -np.inf)

    def test_nan_source_is_rejected(self):
        with self.assertRaises(ValueError):
            parabolic_erosion(np.array([0.0, np.nan, 1.0]))
        with self.assertRaises(ValueError):
            parabolic_dilation(np.array([[np.nan]]))

    def test_sigma_length_mismatch(self):
        with self.assertRaises(ValueError):
            parabolic_erosion(np.zeros((3, 3)), sigma=(1.0, 1.0, 1.0))


if __name__ == "__main__":
    unittest.main()
