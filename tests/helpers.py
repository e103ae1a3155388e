"""Test doubles for RandomSource."""

from collections import deque

from blaster.generators.source import RandomSource


class ScriptedSource(RandomSource):
    """Source that replays fixed randrange values and never reorders."""

    def __init__(self, values=()):
        super().__init__(seed=0)
        self.values = deque(values)
        self.shuffles = 0

    def randrange(self, stop):
        value = self.values.popleft()
        assert 0 <= value < stop
        return value

    def shuffle(self, items):
        self.shuffles += 1


class CountingSource(RandomSource):
    """Seeded source that counts every draw."""

    def __init__(self, seed=1):
        super().__init__(seed=seed)
        self.draws = 0

    def randrange(self, stop):
        self.draws += 1
        return super().randrange(stop)

    def random(self):
        self.draws += 1
        return super().random()

    def choice(self, seq):
        self.draws += 1
        return super().choice(seq)

    def shuffle(self, items):
        self.draws += 1
        super().shuffle(items)

    def read_bytes(self, n):
        self.draws += 1
        return super().read_bytes(n)


class BrokenEntropySource(RandomSource):
    def read_bytes(self, n):
        raise OSError("entropy source unavailable")

