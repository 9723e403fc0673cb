"""MailGuard: disposable email and malicious domain detection via DNS reputation lists."""

from typing import Union

from .reputation import (
    DetectorConfig,
    DnsLookupError,
    DomainStatus,
    EmailStatus,
    InvalidDomainError,
    InvalidEmailError,
    MailGuardError,
    ReputationDetector,
    ThreatCategory,
    ThreatType,
)

__version__ = "0.1.0"


async def check_email(email: str) -> EmailStatus:
    """Check a single email address with a default detector."""
    detector = ReputationDetector()
    return await detector.check_email(email)


async def check_domain(domain: str) -> DomainStatus:
    """Check a domain with a default detector."""
    detector = ReputationDetector()
    return await detector.check_domain(domain)


async def check_emails_batch(emails: list[str]) -> list[Union[EmailStatus, MailGuardError]]:
    """Check emails in order with a default detector."""
    detector = ReputationDetector()
    return await detector.check_emails_batch(emails)


__all__ = [
    "check_email",
    "check_domain",
    "check_emails_batch",
    "DetectorConfig",
    "DnsLookupError",
    "DomainStatus",
    "EmailStatus",
    "InvalidDomainError",
    "InvalidEmailError",
    "MailGuardError",
    "ReputationDetector",
    "ThreatCategory",
    "ThreatType",
]
