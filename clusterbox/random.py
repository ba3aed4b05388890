import numpy as np


# A source of randomness that can be handed to the clustering code so
# that every draw is reproducible. Any object providing these two
# methods can be used in its place.
#
#   integer(n)    -> int uniformly distributed in [0, n)
#   uniform(high) -> float uniformly distributed in [0, high)
#
class NumpySource:
    def __init__(self, seed=None):
        self.seed = seed
        self.generator = np.random.default_rng(seed)

    def __repr__(self):
        return f"{type(self).__name__}(seed={self.seed!r})"

    def integer(self, n):
        assert (n > 0), f"Expected a positive range for 'integer', received {n}."
        return int(self.generator.integers(0, n))

    def uniform(self, high):
        value = float(self.generator.uniform(0.0, high))
        # Guard the half-open interval against rounding up to 'high'.
        if (value >= high): value = float(np.nextafter(high, 0.0))
        return value


# A source that replays fixed sequences of draws, used to pin down the
# exact choices made during seeding. Raises an error when a sequence
# is exhausted instead of silently wrapping around.
class ReplaySource:
    class Exhausted(Exception): pass

    def __init__(self, integers=(), uniforms=()):
        self.integers = list(integers)
        self.uniforms = list(uniforms)
        self._integer_index = 0
        self._uniform_index = 0

    def integer(self, n):
        if (self._integer_index >= len(self.integers)):
            raise(ReplaySource.Exhausted(f"No integer draws left after {self._integer_index}."))
        value = int(self.integers[self._integer_index])
        self._integer_index += 1
        assert (0 <= value < n), f"Replayed integer {value} is outside of [0, {n})."
        return value

    # Replayed uniform values are fractions of the range, so that a
    # sequence does not need to know the total weights ahead of time.
    def uniform(self, high):
        if (self._uniform_index >= len(self.uniforms)):
            raise(ReplaySource.Exhausted(f"No uniform draws left after {self._uniform_index}."))
        fraction = float(self.uniforms[self._uniform_index])
        self._uniform_index += 1
        assert (0.0 <= fraction < 1.0), f"Replayed uniform fraction {fraction} is outside of [0, 1)."
        return fraction * high


# Draw a single value from a normal distribution with the given mean
# and standard deviation (Box-Muller transform over the source).
def gaussian(mean=0.0, standard_deviation=1.0, source=None):
    if source is None: source = NumpySource()
    # Avoid log(0) by shifting the first draw into (0, 1].
    u1 = 1.0 - source.uniform(1.0)
    u2 = source.uniform(1.0)
    z = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
    return mean + standard_deviation * float(z)


# Generate "num_points" random points in "dimension" that have uniform
# probability density over the unit ball scaled by "radius" (length of
# points are in range [0, "radius"]).
def ball(num_points, dimension, inside=True, radius=1.0, seed=None):
    random = np.random.default_rng(seed)
    # First generate random directions by normalizing the length of a
    # vector of random-normal values (these distribute evenly on ball).
    random_directions = random.normal(size=(dimension, num_points))
    random_directions /= np.linalg.norm(random_directions, axis=0)
    # If inside, then generate a random radius with probability
    #  proportional to the surface area of a ball with a given radius.
    if (inside): random_directions *= random.random(num_points) ** (1/dimension)
    # Return the list of random (direction & length) points.
    return radius * random_directions.T


# Random points within a [0,1] box.
def box(num_points, dimension, seed=None):
    return np.random.default_rng(seed).uniform(size=(num_points, dimension))


# Generate groups of points, each group inside a small ball around a
# center drawn from the [0,"spread"] box. Returns the points and the
# index of the group each point was generated from.
def blobs(num_points, dimension, num_groups, radius=0.1, spread=10.0, seed=None):
    assert (num_groups >= 1), f"Expected at least one group, received {num_groups}."
    random = np.random.default_rng(seed)
    centers = spread * random.uniform(size=(num_groups, dimension))
    groups = np.arange(num_points) % num_groups
    offsets = ball(num_points, dimension, radius=radius, seed=random.integers(0, 2**31))
    return centers[groups] + offsets, groups
