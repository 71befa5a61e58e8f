from __future__ import annotations

import sys

from loguru import logger

from secret_santa.core.config import load_settings
from secret_santa.core.logging import setup_logging
from secret_santa.services import VerificationReport, verify_assignment
from secret_santa.storage import ResultStorageError, read_pairings

BANNER = "=" * 50


def log_report(report: VerificationReport) -> None:
    for check in report.checks:
        if check.passed:
            logger.info("PASS {description}", description=check.description)
        else:
            logger.error("FAIL {detail}", detail=check.detail)

    logger.info(BANNER)
    if report.valid:
        logger.info("VALID MATCHING! All checks passed.")
        logger.info("   Total participants: {total}", total=report.total)
    else:
        logger.warning("INVALID MATCHING! Issues found:")
        for check in report.failures:
            logger.warning("   {detail}", detail=check.detail)
    logger.info(BANNER)


def main() -> int:
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_path)

    try:
        pairings = read_pairings(settings.output_path)
    except ResultStorageError as exc:
        logger.error("{error}", error=str(exc))
        return 1

    logger.info("Verifying Secret Santa matching in {path}...", path=settings.output_path)
    report = verify_assignment(pairings)
    log_report(report)
    return 0 if report.valid else 1


if __name__ == "__main__":
    sys.exit(main())
