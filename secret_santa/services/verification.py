from __future__ import annotations

from collections import Counter, abc
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from secret_santa.services.matching import Pairing

NamePair = Tuple[str, str]


@dataclass(frozen=True)
class CheckResult:
    name: str
    description: str
    passed: bool
    detail: Optional[str] = None


@dataclass(frozen=True)
class VerificationReport:
    valid: bool
    checks: Tuple[CheckResult, ...]
    total: int

    @property
    def failures(self) -> List[CheckResult]:
        return [check for check in self.checks if not check.passed]


def split_pairing_line(line: str) -> Optional[NamePair]:
    """Split a ``giver: receiver`` line on its first colon.

    Returns None when the line has no colon.
    """
    giver, separator, receiver = line.partition(":")
    if not separator:
        return None
    return giver.strip(), receiver.strip()


def _as_name_pair(pairing: Union[Pairing, str, Sequence[str]]) -> Optional[NamePair]:
    if isinstance(pairing, Pairing):
        return pairing.giver.name, pairing.receiver.name
    if isinstance(pairing, str):
        return split_pairing_line(pairing)
    if not isinstance(pairing, abc.Sequence) or len(pairing) != 2:
        return None
    giver, receiver = pairing
    return giver, receiver


def _check_well_formed(malformed: List[str]) -> CheckResult:
    return CheckResult(
        "well_formed_pairings",
        "Every pairing has a giver and a receiver",
        False,
        f"Malformed pairings (expected 'giver: receiver'): {', '.join(malformed)}",
    )


def _duplicates(names: Iterable[str]) -> List[str]:
    return [name for name, count in Counter(names).items() if count > 1]


def _check_unique(name: str, role: str, names: List[str]) -> CheckResult:
    description = f"Each person is a {role} exactly once"
    repeated = _duplicates(names)
    if repeated:
        return CheckResult(
            name,
            description,
            False,
            f"Some people are {role}s more than once: {', '.join(repeated)}",
        )
    return CheckResult(name, description, True)


def _check_no_self_gifts(pairs: List[NamePair]) -> CheckResult:
    description = "No one gives to themselves"
    self_gifts = [giver for giver, receiver in pairs if giver == receiver]
    if self_gifts:
        return CheckResult(
            "no_self_gifts", description, False, f"Self-gifting found: {', '.join(self_gifts)}"
        )
    return CheckResult("no_self_gifts", description, True)


def _check_no_mutual_exchanges(pairs: List[NamePair]) -> CheckResult:
    description = "No mutual gift exchanges"
    mutual: List[str] = []
    for i, (giver, receiver) in enumerate(pairs):
        for other_giver, other_receiver in pairs[i + 1:]:
            if giver == other_receiver and receiver == other_giver:
                mutual.append(f"{giver} ↔ {receiver}")
    mutual = list(dict.fromkeys(mutual))
    if mutual:
        return CheckResult(
            "no_mutual_exchanges",
            description,
            False,
            f"Mutual exchanges found: {', '.join(mutual)}",
        )
    return CheckResult("no_mutual_exchanges", description, True)


def _check_closure(givers: List[str], receivers: List[str]) -> CheckResult:
    description = "All participants give and receive"
    giver_set, receiver_set = set(givers), set(receivers)
    if giver_set == receiver_set:
        return CheckResult("givers_match_receivers", description, True)

    parts = ["Mismatch between givers and receivers"]
    only_give = [name for name in dict.fromkeys(givers) if name not in receiver_set]
    only_receive = [name for name in dict.fromkeys(receivers) if name not in giver_set]
    if only_give:
        parts.append(f"only give: {', '.join(only_give)}")
    if only_receive:
        parts.append(f"only receive: {', '.join(only_receive)}")
    return CheckResult("givers_match_receivers", description, False, "; ".join(parts))


def verify_assignment(pairings: Iterable[Union[Pairing, str, Sequence[str]]]) -> VerificationReport:
    """Re-check a persisted assignment from its raw giver/receiver names.

    Items may be ``Pairing`` objects, ``(giver, receiver)`` pairs or raw
    ``"giver: receiver"`` lines. All five checks always run over the
    well-formed items; the report is valid only when every one of them
    passes. Items that cannot be read as a pair add a failed
    ``well_formed_pairings`` check instead of raising. An empty assignment is
    vacuously valid.
    """
    pairs: List[NamePair] = []
    malformed: List[str] = []
    for pairing in pairings:
        if isinstance(pairing, str) and not pairing.strip():
            continue
        pair = _as_name_pair(pairing)
        if pair is None:
            malformed.append(repr(pairing))
        else:
            pairs.append(pair)

    givers = [giver for giver, _ in pairs]
    receivers = [receiver for _, receiver in pairs]

    checks = (
        _check_unique("unique_givers", "giver", givers),
        _check_unique("unique_receivers", "receiver", receivers),
        _check_no_self_gifts(pairs),
        _check_no_mutual_exchanges(pairs),
        _check_closure(givers, receivers),
    )
    if malformed:
        checks = (_check_well_formed(malformed),) + checks
    return VerificationReport(
        valid=all(check.passed for check in checks),
        checks=checks,
        total=len(pairs) + len(malformed),
    )
