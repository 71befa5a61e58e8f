from secret_santa.services.matching import (
    ExhaustedAttempts,
    MatchingError,
    Pairing,
    Participant,
    TooFewParticipants,
    generate_matching,
    is_valid_matching,
)
from secret_santa.services.verification import CheckResult, VerificationReport, verify_assignment

__all__ = [
    "ExhaustedAttempts",
    "MatchingError",
    "Pairing",
    "Participant",
    "TooFewParticipants",
    "generate_matching",
    "is_valid_matching",
    "CheckResult",
    "VerificationReport",
    "verify_assignment",
]
