"""Reputation check engine."""

from .threat import ThreatCategory, ThreatType, classify, description, severity
from .cache import (
    CacheLookup,
    CacheRecord,
    InMemoryReputationCache,
    NullReputationCache,
    ReputationCache,
    build_cache,
)
from .dns_client import REPUTATION_ZONE, BlacklistQueryClient
from .errors import DnsLookupError, InvalidDomainError, InvalidEmailError, MailGuardError
from .detector import DetectorConfig, DomainStatus, EmailStatus, ReputationDetector

__all__ = [
    "ThreatCategory",
    "ThreatType",
    "classify",
    "description",
    "severity",
    "CacheLookup",
    "CacheRecord",
    "InMemoryReputationCache",
    "NullReputationCache",
    "ReputationCache",
    "build_cache",
    "REPUTATION_ZONE",
    "BlacklistQueryClient",
    "DnsLookupError",
    "InvalidDomainError",
    "InvalidEmailError",
    "MailGuardError",
    "DetectorConfig",
    "DomainStatus",
    "EmailStatus",
    "ReputationDetector",
]
