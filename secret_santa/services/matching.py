from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Hashable, Optional, Sequence, Tuple

from loguru import logger

MIN_PARTICIPANTS = 3
MAX_ATTEMPTS = 1000


class MatchingError(RuntimeError):
    pass


class TooFewParticipants(MatchingError):
    def __init__(self, count: int) -> None:
        super().__init__(
            f"Need at least {MIN_PARTICIPANTS} participants for Secret Santa, got {count}."
        )
        self.count = count


class ExhaustedAttempts(MatchingError):
    def __init__(self, attempts: int) -> None:
        super().__init__(f"Failed to generate a valid matching after {attempts} attempts.")
        self.attempts = attempts


@dataclass(frozen=True)
class Participant:
    name: str
    email: str


@dataclass(frozen=True)
class Pairing:
    giver: Participant
    receiver: Participant


def is_valid_matching(givers: Sequence[Hashable], receivers: Sequence[Hashable]) -> bool:
    """Return True when nobody gives to themselves and no two people swap gifts.

    ``givers`` and ``receivers`` are parallel sequences: ``givers[i]`` gives to
    ``receivers[i]``.
    """
    if len(givers) != len(receivers):
        raise ValueError("givers and receivers must have the same length.")

    for i, (giver, receiver) in enumerate(zip(givers, receivers)):
        if giver == receiver:
            return False
        for j in range(len(givers)):
            if i != j and givers[j] == receiver and receivers[j] == giver:
                return False
    return True


def generate_matching(
    participants: Sequence[Participant],
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> Tuple[Pairing, ...]:
    if len(participants) < MIN_PARTICIPANTS:
        raise TooFewParticipants(len(participants))

    rng = rng or random.Random(seed)
    givers = list(participants)
    giver_names = [giver.name for giver in givers]

    for attempt in range(1, max_attempts + 1):
        receivers = list(givers)
        # Fisher-Yates: swaps i (last..1) with a uniform index in [0, i].
        rng.shuffle(receivers)
        if is_valid_matching(giver_names, [receiver.name for receiver in receivers]):
            logger.bind(participants=len(givers), attempts=attempt).debug("Matching generated")
            return tuple(
                Pairing(giver=giver, receiver=receiver)
                for giver, receiver in zip(givers, receivers)
            )

    raise ExhaustedAttempts(max_attempts)
