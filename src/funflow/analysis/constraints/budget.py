"""Optional resource budget for a drain.

The propagator has no iteration cap of its own: with non-monotone or
unbounded dynamic rules a drain runs forever. A Budget lets a host bound it
by step count, wall clock time, or resident memory of the solving process,
and turns an overrun into NonTermination. Every limit is off by default.
"""

import logging
import os
import time

import psutil

from funflow.application.errors import NonTermination
from funflow.util.io.formatting import elapsedTime, memorySize

__all__ = ["Budget"]

LOG = logging.getLogger(__name__)

# Memory is sampled every this many steps; reading rss is a syscall.
RSS_SAMPLE_INTERVAL = 256


class Budget(object):
    """
    Step, time and memory limits checked once per dequeued entry.

    Attributes:
        maxSteps: Maximum number of worklist steps, or None.
        timeout: Maximum wall clock seconds since start(), or None.
        rssLimitMb: Maximum resident set size in MB, or None.
    """

    def __init__(self, maxSteps=None, timeout=None, rssLimitMb=None):
        self.maxSteps = maxSteps
        self.timeout = timeout
        self.rssLimitMb = rssLimitMb
        self._started = None
        self._process = None

    @property
    def unlimited(self):
        return self.maxSteps is None and self.timeout is None and self.rssLimitMb is None

    def start(self):
        self._started = time.time()
        if self.rssLimitMb is not None:
            self._process = psutil.Process(os.getpid())

    def elapsed(self):
        if self._started is None:
            return 0.0
        return time.time() - self._started

    def check(self, steps):
        """
        Raise NonTermination if any limit is exceeded.

        Args:
            steps: Number of worklist steps performed so far.
        """
        if self.maxSteps is not None and steps > self.maxSteps:
            raise NonTermination(
                "Drain exceeded %d steps without reaching a fixpoint." % self.maxSteps,
                steps,
            )

        if self.timeout is not None and self._started is not None:
            elapsed = self.elapsed()
            if elapsed > self.timeout:
                raise NonTermination(
                    "Drain exceeded its timeout after %s (%d steps)."
                    % (elapsedTime(elapsed).strip(), steps),
                    steps,
                )

        if self._process is not None and steps % RSS_SAMPLE_INTERVAL == 0:
            rss = self._process.memory_info().rss
            if rss / 1024 / 1024 > self.rssLimitMb:
                raise NonTermination(
                    "Drain exceeded the memory limit of %d MB (rss: %s)."
                    % (self.rssLimitMb, memorySize(rss).strip()),
                    steps,
                )

    def __repr__(self):
        return "Budget(maxSteps=%r, timeout=%r, rssLimitMb=%r)" % (
            self.maxSteps,
            self.timeout,
            self.rssLimitMb,
        )
