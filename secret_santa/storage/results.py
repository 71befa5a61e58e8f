from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple, Union

from loguru import logger

from secret_santa.services.matching import Pairing
from secret_santa.services.verification import split_pairing_line


class ResultStorageError(RuntimeError):
    pass


def format_pairing(pairing: Pairing) -> str:
    return f"{pairing.giver.name}: {pairing.receiver.name}"


def write_pairings(pairings: Iterable[Pairing], path: Union[str, Path]) -> int:
    lines = [format_pairing(pairing) for pairing in pairings]
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("\n".join(lines) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ResultStorageError(f"Error writing {path}: {exc}") from exc

    logger.bind(path=str(target)).info("Wrote {count} pairings to {path}", count=len(lines), path=target)
    return len(lines)


def parse_pairing_line(line: str) -> Tuple[str, str]:
    pair = split_pairing_line(line)
    if pair is None:
        raise ResultStorageError(f"Expected 'giver: receiver', got {line.strip()!r}")
    return pair


def parse_pairings(lines: Iterable[str]) -> List[Tuple[str, str]]:
    return [parse_pairing_line(line) for line in lines if line.strip()]


def read_pairings(path: Union[str, Path]) -> List[Tuple[str, str]]:
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ResultStorageError(f"Error reading {path}: {exc}") from exc
    return parse_pairings(content.splitlines())
