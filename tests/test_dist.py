import numpy as np
import pytest

import wastesim.dist as dist


def test_uniform_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        dist.make_uniform(2, 1)

    with pytest.raises(ValueError):
        dist.uniform(0.5, 0.1)


def test_zero_width_uniform_is_constant():
    band = dist.make_uniform(0.2, 0.2)

    assert band.sample() == 0.2
    assert band.total(4) == pytest.approx(0.8)
    assert band.mean() == 0.2
    assert band.std() == 0


def test_samples_stay_inside_the_band():
    band = dist.make_uniform(0.10, 0.35)
    draws = band.samples(500, np.random.default_rng(1))

    assert draws.shape == (500,)
    assert draws.min() >= 0.10
    assert draws.max() <= 0.35


def test_seeded_draws_are_reproducible():
    band = dist.make_uniform(24, 30)

    first = band.total(12, np.random.default_rng(5))
    second = band.total(12, np.random.default_rng(5))

    assert first == second
    assert 12 * 24 <= first <= 12 * 30


def test_total_of_no_draws_is_zero():
    band = dist.make_uniform(0.1, 0.15)

    assert band.total(0) == 0.0
    with pytest.raises(ValueError):
        band.total(-1)


def test_exponential_validates_and_samples():
    with pytest.raises(ValueError):
        dist.make_expon(0)

    speed = dist.make_expon(80)
    assert isinstance(speed, dist.expon)
    assert speed.mean() == pytest.approx(80)
    rng = np.random.default_rng(2)
    assert all(speed.sample(rng) > 0 for _ in range(50))


def test_string_representation():
    assert str(dist.make_uniform(4, 5)) == "dist.uniform(4, 5)"
    assert str(dist.make_expon(80)) == "dist.expon(80)"


def test_percentiles():
    band = dist.make_uniform(0, 4)
    assert band.percentile(25) == pytest.approx(1)
    assert band.percentile(100) == pytest.approx(4)
    assert dist.make_uniform(0.2, 0.2).percentile(90) == 0.2

    speed = dist.make_expon(80)
    assert speed.percentile(50) == pytest.approx(80 * np.log(2))
