from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union

from loguru import logger

from secret_santa.services.matching import Participant


class ParticipantSourceError(RuntimeError):
    pass


def parse_participants(lines: Iterable[str]) -> List[Participant]:
    """Parse ``name email`` lines into participants.

    Blank lines are ignored and lines missing an email are skipped. A name
    that appears twice is rejected, since names identify participants.
    """
    participants: List[Participant] = []
    seen = set()
    for line_number, line in enumerate(lines, start=1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) < 2:
            logger.bind(line=line_number).warning(
                "Skipping participant line without email: {text}", text=line.strip()
            )
            continue

        name, email = fields[0], fields[1]
        if name in seen:
            raise ParticipantSourceError(f"Duplicate participant name on line {line_number}: {name}")
        seen.add(name)
        participants.append(Participant(name=name, email=email))
    return participants


def read_participants(path: Union[str, Path]) -> List[Participant]:
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ParticipantSourceError(f"Error reading {path}: {exc}") from exc
    return parse_participants(content.splitlines())
