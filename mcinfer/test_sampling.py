import random

from mcinfer.inference.sampling import sample


class FixedRandom(object):
    '''
    Random source that always returns the same value.
    '''

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def test_sample_all_zero():
    for seed in range(10):
        assert sample([0, 0, 0], random.Random(seed)) == -1


def test_sample_point_mass():
    rng = random.Random(0)
    for _ in range(100):
        assert sample([1, 0, 0], rng) == 0


def test_sample_controlled_draw():
    # u = .625 * 4 = 2.5, cumulative sums are 1, 2, 3, 4
    assert sample([1, 1, 1, 1], FixedRandom(.625)) == 2
    assert sample([1, 1, 1, 1], FixedRandom(.625), 4) == 2


def test_sample_zero_draw_skips_zero_weights():
    assert sample([0, 0, 2, 1], FixedRandom(0.)) == 2


def test_sample_nonpositive_total():
    assert sample([1, 1], random.Random(0), 0) == -1
    assert sample([], random.Random(0)) == -1


def test_sample_iterable():
    rng = random.Random(1)
    for _ in range(20):
        assert sample((w for w in [0., 3., 0.]), rng) == 1


def test_sample_frequencies():
    rng = random.Random(42)
    n = 10000
    hits = sum(1 for _ in range(n) if sample([1., 3.], rng) == 1)
    assert abs(hits / n - .75) < .03


def main():
    test_sample_all_zero()
    test_sample_point_mass()
    test_sample_controlled_draw()
    test_sample_zero_draw_skips_zero_weights()
    test_sample_nonpositive_total()
    test_sample_iterable()
    test_sample_frequencies()


if __name__ == '__main__':
    main()
