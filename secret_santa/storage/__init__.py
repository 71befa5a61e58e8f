from secret_santa.storage.participants import (
    ParticipantSourceError,
    parse_participants,
    read_participants,
)
from secret_santa.storage.results import (
    ResultStorageError,
    format_pairing,
    parse_pairing_line,
    parse_pairings,
    read_pairings,
    write_pairings,
)

__all__ = [
    "ParticipantSourceError",
    "parse_participants",
    "read_participants",
    "ResultStorageError",
    "format_pairing",
    "parse_pairing_line",
    "parse_pairings",
    "read_pairings",
    "write_pairings",
]
