import time


class Deadline(object):
    """
    Absolute point in time shared by every blocking step of a run.

    Created once at process start, then handed to the dial and the call so
    that both draw from the same budget.
    """

    def __init__(self, timeout: float, clock=time.monotonic):
        self.timeout = timeout
        self._clock = clock
        self.started_at = clock()
        self.expires_at = self.started_at + timeout

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self._clock())

    def elapsed(self) -> float:
        return self._clock() - self.started_at

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0

    def __repr__(self):
        return f'Deadline(timeout={self.timeout}, remaining={self.remaining():.3f})'
