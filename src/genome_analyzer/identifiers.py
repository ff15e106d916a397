"""Identifier generation for genome records.

Record ids only need to be unique within a session. The default
:class:`TimestampIdGenerator` combines the creation time in milliseconds
with a short random base36 suffix; two records created in the same
millisecond that draw the same suffix get the same id.
:class:`SequentialIdGenerator` gives strictly unique ids within a process.
"""

import itertools
import random
import string
import threading
import time
from typing import Callable, Optional

BASE36_ALPHABET = string.digits + string.ascii_lowercase


class TimestampIdGenerator:
    """Generates ``"{epoch_millis}_{suffix}"`` identifiers."""

    def __init__(self,
                 clock: Callable[[], float] = time.time,
                 rng: Optional[random.Random] = None,
                 suffix_length: int = 5):
        self.clock = clock
        self.rng = rng or random.Random()
        self.suffix_length = suffix_length

    def next_id(self) -> str:
        millis = int(self.clock() * 1000)
        suffix = ''.join(self.rng.choice(BASE36_ALPHABET) for _ in range(self.suffix_length))
        return f"{millis}_{suffix}"


class SequentialIdGenerator:
    """Generates ``"{prefix}_{n}"`` identifiers from a monotonic counter."""

    def __init__(self, prefix: str = "genome", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            value = next(self._counter)
        return f"{self.prefix}_{value}"


def create_id_generator(scheme: str = "timestamp"):
    """Build an id generator from a config scheme name."""
    if scheme == "timestamp":
        return TimestampIdGenerator()
    if scheme == "sequential":
        return SequentialIdGenerator()
    raise ValueError(f"Unsupported id scheme: {scheme}")
