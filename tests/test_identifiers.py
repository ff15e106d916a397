"""Tests for record identifier generation."""

import random
import re

import pytest

from genome_analyzer.identifiers import (
    SequentialIdGenerator, TimestampIdGenerator, create_id_generator
)


class TestTimestampIdGenerator:
    """Test cases for timestamp-based ids."""

    def test_format(self):
        generator = TimestampIdGenerator(clock=lambda: 1700000000.1234)

        assert re.fullmatch(r"1700000000123_[0-9a-z]{5}", generator.next_id())

    def test_seeded_random_is_reproducible(self):
        first = TimestampIdGenerator(clock=lambda: 1.0, rng=random.Random(42))
        second = TimestampIdGenerator(clock=lambda: 1.0, rng=random.Random(42))

        assert [first.next_id() for _ in range(3)] == [second.next_id() for _ in range(3)]

    def test_suffix_length(self):
        generator = TimestampIdGenerator(clock=lambda: 0.0, suffix_length=8)

        assert len(generator.next_id().split('_')[1]) == 8


class TestSequentialIdGenerator:
    """Test cases for counter-based ids."""

    def test_monotonic(self):
        generator = SequentialIdGenerator()

        assert [generator.next_id() for _ in range(3)] == ["genome_1", "genome_2", "genome_3"]

    def test_prefix_and_start(self):
        generator = SequentialIdGenerator(prefix="run7", start=10)

        assert generator.next_id() == "run7_10"


class TestCreateIdGenerator:
    """Test cases for id scheme selection."""

    def test_known_schemes(self):
        assert isinstance(create_id_generator("timestamp"), TimestampIdGenerator)
        assert isinstance(create_id_generator("sequential"), SequentialIdGenerator)

    def test_unknown_scheme(self):
        with pytest.raises(ValueError):
            create_id_generator("uuid7")
