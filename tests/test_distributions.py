import numpy as np
from scipy.stats import norm

from optgreeks import normal_cdf, normal_pdf


def test_known_values():
    assert abs(normal_pdf(0.0) - 0.3989422804014327) < 1e-15
    assert normal_cdf(0.0) == 0.5
    assert abs(normal_cdf(1.96) - 0.9750021048517795) < 1e-12


def test_symmetry():
    x = np.linspace(-6, 6, 25)
    np.testing.assert_allclose(normal_cdf(x) + normal_cdf(-x), 1.0, atol=1e-15)
    np.testing.assert_allclose(normal_pdf(x), normal_pdf(-x))


def test_matches_scipy():
    x = np.linspace(-8, 8, 101)
    np.testing.assert_allclose(normal_cdf(x), norm.cdf(x), rtol=1e-12)
    np.testing.assert_allclose(normal_pdf(x), norm.pdf(x), rtol=1e-12)


def test_left_tail_keeps_precision():
    # 1 - N(x) would round to 0 here
    assert normal_cdf(-30.0) > 0.0
    assert abs(normal_cdf(-30.0) / norm.cdf(-30.0) - 1.0) < 1e-10
