"""Email and domain reputation detector."""

import logging
import re
import time
from dataclasses import dataclass
from typing import Optional, Union

from mailguard.monitoring.metrics import MetricsCollector

from .cache import DEFAULT_TTL_SECONDS, NullReputationCache, ReputationCache, build_cache
from .dns_client import DEFAULT_TIMEOUT_SECONDS, BlacklistQueryClient
from .errors import DnsLookupError, InvalidDomainError, InvalidEmailError, MailGuardError
from .threat import ThreatCategory

logger = logging.getLogger(__name__)

# local-part@label(.label)*, labels 1-63 chars, no leading/trailing hyphen
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


@dataclass(frozen=True)
class DetectorConfig:
    """Detector configuration."""

    dns_timeout: float = DEFAULT_TIMEOUT_SECONDS
    enable_cache: bool = True
    cache_ttl: float = DEFAULT_TTL_SECONDS

    @classmethod
    def from_settings(cls, settings) -> "DetectorConfig":
        """Build from DetectorSettings."""
        return cls(
            dns_timeout=settings.dns_timeout,
            enable_cache=settings.enable_cache,
            cache_ttl=settings.cache_ttl,
        )


@dataclass(frozen=True)
class DomainStatus:
    """Domain check result."""

    domain: str
    threat_type: Optional[ThreatCategory]
    from_cache: bool

    @property
    def is_threat(self) -> bool:
        return self.threat_type is not None

    @property
    def subject(self) -> str:
        return self.domain

    def to_dict(self) -> dict:
        return {
            "domain": self.domain,
            "is_threat": self.is_threat,
            "threat_type": self.threat_type.to_dict() if self.threat_type else None,
            "from_cache": self.from_cache,
        }


@dataclass(frozen=True)
class EmailStatus:
    """Email check result."""

    email: str
    domain: str
    threat_type: Optional[ThreatCategory]
    from_cache: bool

    @property
    def is_threat(self) -> bool:
        return self.threat_type is not None

    @property
    def subject(self) -> str:
        return self.email

    def to_dict(self) -> dict:
        return {
            "email": self.email,
            "domain": self.domain,
            "is_threat": self.is_threat,
            "threat_type": self.threat_type.to_dict() if self.threat_type else None,
            "from_cache": self.from_cache,
        }


class ReputationDetector:
    """
    Checks emails and domains against the DNS reputation zone.

    One instance is meant to be shared by concurrent callers. The cache is
    owned by the instance and is the only shared mutable state. Concurrent
    checks of the same uncached domain each reach the network.
    """

    def __init__(
        self,
        config: Optional[DetectorConfig] = None,
        query_client: Optional[BlacklistQueryClient] = None,
        cache: Optional[ReputationCache] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        """
        Initialize detector.

        Args:
            config: Detector configuration (defaults: 5s timeout, cache on, 300s TTL)
            query_client: Reputation-zone client
            cache: Cache store; overrides config.enable_cache/cache_ttl
            metrics: Metrics collector
        """
        self.config = config or DetectorConfig()
        self._client = query_client or BlacklistQueryClient(timeout=self.config.dns_timeout)
        self._cache = cache if cache is not None else build_cache(
            self.config.enable_cache, self.config.cache_ttl
        )
        self._metrics = metrics or MetricsCollector()

    @classmethod
    def with_config(cls, config: DetectorConfig) -> "ReputationDetector":
        """Create a detector with explicit configuration."""
        return cls(config=config)

    @property
    def cache_enabled(self) -> bool:
        return not isinstance(self._cache, NullReputationCache)

    async def check_email(self, email: str) -> EmailStatus:
        """
        Check an email address.

        Args:
            email: Email address to check

        Returns:
            EmailStatus for the address domain

        Raises:
            InvalidEmailError: Address fails mailbox syntax
            InvalidDomainError: Domain part fails domain syntax
            DnsLookupError: Reputation-zone lookup failed
        """
        if not EMAIL_PATTERN.fullmatch(email):
            self._metrics.record_validation_failure("email")
            raise InvalidEmailError(email)

        domain = self._extract_domain(email)
        status = await self.check_domain(domain)

        return EmailStatus(
            email=email,
            domain=status.domain,
            threat_type=status.threat_type,
            from_cache=status.from_cache,
        )

    async def check_domain(self, domain: str) -> DomainStatus:
        """
        Check a domain.

        Clean results are cached as well as listed ones. Nothing is cached
        when the lookup fails.

        Raises:
            InvalidDomainError: Domain fails syntax validation
            DnsLookupError: Reputation-zone lookup failed
        """
        try:
            self._client.validate_domain(domain)
        except InvalidDomainError:
            self._metrics.record_validation_failure("domain")
            raise

        domain = domain.lower()

        cached = self._cache.get(domain)
        if cached is not None:
            self._metrics.record_cache_hit()
            logger.debug(f"Cache hit: {domain}")
            return DomainStatus(
                domain=domain,
                threat_type=cached.classification,
                from_cache=True,
            )
        if self.cache_enabled:
            self._metrics.record_cache_miss()

        start = time.perf_counter()
        try:
            threat_type = await self._client.query(domain)
        except DnsLookupError:
            self._metrics.record_lookup("error", time.perf_counter() - start)
            raise

        latency = time.perf_counter() - start
        if threat_type is not None:
            self._metrics.record_lookup("listed", latency)
            self._metrics.record_threat(threat_type.threat_type.value)
        else:
            self._metrics.record_lookup("clean", latency)

        self._cache.set(domain, threat_type)
        if self.cache_enabled:
            self._metrics.set_cache_entries(self._cache.size())

        return DomainStatus(domain=domain, threat_type=threat_type, from_cache=False)

    async def check_emails_batch(
        self, emails: list[str]
    ) -> list[Union[EmailStatus, MailGuardError]]:
        """
        Check emails one at a time, in order.

        Returns:
            One entry per input; a failed input holds its MailGuardError
        """
        results: list[Union[EmailStatus, MailGuardError]] = []
        for email in emails:
            try:
                results.append(await self.check_email(email))
            except MailGuardError as e:
                logger.debug(f"Batch item failed: {email} - {e}")
                results.append(e)
        return results

    async def check_domains_batch(
        self, domains: list[str]
    ) -> list[Union[DomainStatus, MailGuardError]]:
        """Check domains one at a time, in order."""
        results: list[Union[DomainStatus, MailGuardError]] = []
        for domain in domains:
            try:
                results.append(await self.check_domain(domain))
            except MailGuardError as e:
                logger.debug(f"Batch item failed: {domain} - {e}")
                results.append(e)
        return results

    def _extract_domain(self, email: str) -> str:
        """Extract domain after the last '@'."""
        at_pos = email.rfind("@")
        if at_pos < 0:
            raise InvalidEmailError(email)

        domain = email[at_pos + 1:]
        if not domain:
            raise InvalidEmailError("Email domain is empty")
        return domain

    def cleanup_cache(self) -> int:
        """Remove expired cache records."""
        removed = self._cache.cleanup()
        if self.cache_enabled:
            self._metrics.set_cache_entries(self._cache.size())
        return removed

    def cache_size(self) -> Optional[int]:
        """Get number of cached records, or None when caching is disabled."""
        if not self.cache_enabled:
            return None
        return self._cache.size()

    def clear_cache(self) -> None:
        """Remove all cache records."""
        self._cache.clear()
        if self.cache_enabled:
            self._metrics.set_cache_entries(0)
