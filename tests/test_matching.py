import random

import pytest

from secret_santa.services.matching import (
    MAX_ATTEMPTS,
    ExhaustedAttempts,
    Participant,
    TooFewParticipants,
    generate_matching,
    is_valid_matching,
)


class FrozenRandom(random.Random):
    def shuffle(self, x):
        pass


def make_participants(*names):
    return [Participant(name=name, email=f"{name.lower()}@example.com") for name in names]


def as_names(pairings):
    return [(pairing.giver.name, pairing.receiver.name) for pairing in pairings]


def test_matching_basic_bijection():
    participants = make_participants("A", "B", "C", "D", "E")
    pairings = generate_matching(participants, seed=42)
    givers = [pairing.giver for pairing in pairings]
    receivers = [pairing.receiver for pairing in pairings]
    assert givers == participants
    assert sorted(receivers, key=lambda p: p.name) == participants
    assert len(set(receivers)) == len(participants)


@pytest.mark.parametrize("size", range(3, 16))
def test_matching_has_no_self_gifts_or_mutual_pairs(size):
    participants = make_participants(*[f"P{index}" for index in range(size)])
    for seed in range(25):
        mapping = dict(as_names(generate_matching(participants, seed=seed)))
        assert set(mapping) == set(mapping.values()) == {p.name for p in participants}
        for giver, receiver in mapping.items():
            assert giver != receiver
            assert mapping[receiver] != giver


def test_matching_three_people_is_a_three_cycle():
    participants = make_participants("A", "B", "C")
    allowed = [
        [("A", "B"), ("B", "C"), ("C", "A")],
        [("A", "C"), ("B", "A"), ("C", "B")],
    ]
    seen = set()
    for seed in range(50):
        names = as_names(generate_matching(participants, seed=seed))
        assert names in allowed
        seen.add(tuple(names))
    assert len(seen) == 2


def test_matching_deterministic_seed():
    participants = make_participants("A", "B", "C", "D", "E", "F")
    assert generate_matching(participants, seed=123) == generate_matching(participants, seed=123)


def test_matching_accepts_explicit_rng():
    participants = make_participants("A", "B", "C", "D")
    first = generate_matching(participants, rng=random.Random(7))
    second = generate_matching(participants, rng=random.Random(7))
    assert first == second


def test_matching_does_not_reorder_input():
    participants = make_participants("A", "B", "C", "D")
    snapshot = list(participants)
    generate_matching(participants, seed=3)
    assert participants == snapshot


@pytest.mark.parametrize("size", [0, 1, 2])
def test_matching_fails_for_too_few_participants(size):
    participants = make_participants(*["A", "B"][:size])
    with pytest.raises(TooFewParticipants) as excinfo:
        generate_matching(participants, seed=1)
    assert excinfo.value.count == size


def test_matching_gives_up_after_max_attempts():
    participants = make_participants("A", "B", "C")
    with pytest.raises(ExhaustedAttempts) as excinfo:
        generate_matching(participants, rng=FrozenRandom())
    assert excinfo.value.attempts == MAX_ATTEMPTS


def test_matching_respects_custom_max_attempts():
    participants = make_participants("A", "B", "C")
    with pytest.raises(ExhaustedAttempts) as excinfo:
        generate_matching(participants, rng=FrozenRandom(), max_attempts=5)
    assert excinfo.value.attempts == 5


def test_is_valid_matching_accepts_cycle():
    assert is_valid_matching(["A", "B", "C"], ["B", "C", "A"])


def test_is_valid_matching_rejects_self_gift():
    assert not is_valid_matching(["A", "B", "C"], ["A", "C", "B"])


def test_is_valid_matching_rejects_mutual_pair():
    assert not is_valid_matching(["A", "B", "C", "D"], ["B", "A", "D", "C"])


def test_is_valid_matching_rejects_length_mismatch():
    with pytest.raises(ValueError):
        is_valid_matching(["A", "B"], ["B"])
