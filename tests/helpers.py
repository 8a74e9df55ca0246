"""Shared test doubles."""


class StubRng:
    """Deterministic stand-in for numpy.random.Generator.

    random() always returns `value`, uniform() returns the interval midpoint
    and permutation() keeps the natural order.
    """

    def __init__(self, value: float = 0.5):
        self.value = value
        self.random_calls = 0

    def random(self):
        self.random_calls += 1
        return self.value

    def uniform(self, low, high):
        return (low + high) / 2.0

    def permutation(self, n):
        return list(range(n))
