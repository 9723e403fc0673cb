#!/usr/bin/env python3
"""Check emails or domains against the DNS reputation zone."""

import argparse
import asyncio
import logging

from mailguard.config import get_settings
from mailguard.reputation import DetectorConfig, MailGuardError, ReputationDetector

logger = logging.getLogger(__name__)

SAMPLE_EMAILS = [
    "test@gmail.com",
    "user@10minutemail.com",
    "temp@guerrillamail.com",
    "example@mailinator.com",
    "valid@outlook.com",
    "invalid-email",
]


def format_result(subject: str, result) -> str:
    """Format one check result as a single line."""
    if isinstance(result, MailGuardError):
        return f"  {subject} -> ERROR: {result}"

    if result.is_threat:
        threat = result.threat_type
        verdict = f"LISTED ({threat.description}, severity {threat.severity})"
    else:
        verdict = "clean"

    cached = " [cached]" if result.from_cache else ""
    return f"  {subject} -> {verdict}{cached}"


async def run(subjects: list[str], domains: bool, config: DetectorConfig):
    detector = ReputationDetector.with_config(config)

    if domains:
        results = await detector.check_domains_batch(subjects)
    else:
        results = await detector.check_emails_batch(subjects)

    print(f"Checked {len(subjects)} {'domains' if domains else 'emails'}:")
    for subject, result in zip(subjects, results):
        print(format_result(subject, result))

    threats = sum(
        1 for r in results if not isinstance(r, MailGuardError) and r.is_threat
    )
    failures = sum(1 for r in results if isinstance(r, MailGuardError))
    logger.info(f"Threats: {threats}, failures: {failures}")

    cache_size = detector.cache_size()
    if cache_size is not None:
        print(f"Cache entries: {cache_size}")


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Check email/domain reputation")
    parser.add_argument("subjects", nargs="*", help="Emails (or domains with --domains)")
    parser.add_argument("--domains", action="store_true", help="Inputs are domains")
    parser.add_argument(
        "--timeout", type=float, default=settings.detector.dns_timeout,
        help="DNS timeout in seconds",
    )
    parser.add_argument("--no-cache", action="store_true", help="Disable result caching")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)

    subjects = args.subjects or SAMPLE_EMAILS
    config = DetectorConfig(
        dns_timeout=args.timeout,
        enable_cache=not args.no_cache,
        cache_ttl=settings.detector.cache_ttl,
    )
    asyncio.run(run(subjects, args.domains and bool(args.subjects), config))


if __name__ == "__main__":
    main()
