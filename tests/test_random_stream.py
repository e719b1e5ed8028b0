"""Tests for seeded random streams."""

import pytest

from src.planet_generation.random_stream import (
    SeededRandomStream,
    create_stream,
    sub_seed,
)


def test_same_seed_same_sequence():
    a = SeededRandomStream("Terra-1000")
    b = SeededRandomStream("Terra-1000")
    assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]


def test_different_seeds_differ():
    a = SeededRandomStream("Terra-1000")
    b = SeededRandomStream("Terra-1001")
    assert [a.next() for _ in range(5)] != [b.next() for _ in range(5)]


def test_values_in_unit_interval():
    rng = SeededRandomStream("bounds")
    for _ in range(1000):
        value = rng.next()
        assert 0.0 <= value < 1.0


def test_empty_seed_is_valid():
    """The empty string is a low-entropy but usable seed."""
    assert SeededRandomStream("").next() == SeededRandomStream("").next()


def test_sub_seed_joins_with_dashes():
    assert sub_seed("Terra", "events", 12) == "Terra-events-12"
    assert sub_seed("Terra", 5) == "Terra-5"
    assert sub_seed("Terra") == "Terra"


def test_derive_ignores_parent_position():
    """A child stream depends on the parent seed, never on how far it was read."""
    parent = create_stream("Terra")
    fresh_child = parent.derive("events", 3).next()
    for _ in range(10):
        parent.next()
    assert parent.derive("events", 3).next() == fresh_child
    assert create_stream("Terra", "events", 3).next() == fresh_child


def test_sibling_streams_are_independent():
    """Reading one facet's stream never shifts another facet's values."""
    expected = create_stream("Terra", "satellites", 1, 0).next()
    events = create_stream("Terra", "events", 1)
    for _ in range(50):
        events.next()
    assert create_stream("Terra", "satellites", 1, 0).next() == expected


@pytest.mark.parametrize("length", [1, 2, 3, 7])
def test_index_in_range(length):
    rng = create_stream("index", length)
    for _ in range(200):
        assert 0 <= rng.index(length) < length


def test_choice_and_uniform():
    rng = create_stream("choice")
    items = ["a", "b", "c"]
    for _ in range(50):
        assert rng.choice(items) in items
        assert 2.0 <= rng.uniform(2.0, 4.0) < 4.0


def test_chance_extremes():
    rng = create_stream("chance")
    assert not any(rng.chance(0.0) for _ in range(100))
    assert all(rng.chance(1.0) for _ in range(100))
