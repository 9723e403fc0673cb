"""DNS reputation-zone query client."""

import ipaddress
import logging
from typing import Optional

import dns.asyncresolver
import dns.exception
import dns.resolver

from .errors import DnsLookupError, InvalidDomainError
from .threat import ThreatCategory, classify

logger = logging.getLogger(__name__)

# Lookup name format: <domain>.tempmail.so.multi.surbl.org
REPUTATION_ZONE = "tempmail.so.multi.surbl.org"

MAX_DOMAIN_LENGTH = 253
DEFAULT_TIMEOUT_SECONDS = 5.0


class BlacklistQueryClient:
    """Queries the reputation zone and interprets its answers."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS, resolver=None):
        """
        Initialize query client.

        Args:
            timeout: Seconds allowed for one lookup, retries included
            resolver: Object with an async resolve(name, rdtype, lifetime=...)
                method; a dnspython async resolver is created when omitted
        """
        self.timeout = timeout
        self._resolver = resolver

    def _get_resolver(self):
        """Get resolver instance (system configuration, created lazily)."""
        if self._resolver is None:
            resolver = dns.asyncresolver.Resolver()
            resolver.timeout = self.timeout
            resolver.lifetime = self.timeout
            self._resolver = resolver
        return self._resolver

    @staticmethod
    def lookup_name(domain: str) -> str:
        """Build the reputation-zone name for a domain."""
        return f"{domain}.{REPUTATION_ZONE}"

    @staticmethod
    def is_positive_response(address: ipaddress.IPv4Address) -> bool:
        """Check if an answer is a listing (127.0.0.x with x > 1)."""
        octets = address.packed
        return octets[:3] == b"\x7f\x00\x00" and octets[3] > 1

    async def query(self, domain: str) -> Optional[ThreatCategory]:
        """
        Look up a domain in the reputation zone.

        Args:
            domain: Validated, lower-cased domain

        Returns:
            ThreatCategory of the first positive answer, or None if the
            domain is not listed

        Raises:
            DnsLookupError: Timeout, server failure or network error
        """
        name = self.lookup_name(domain)
        logger.debug(f"Querying reputation zone: {name}")

        try:
            answer = await self._get_resolver().resolve(name, "A", lifetime=self.timeout)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
            logger.debug(f"Domain {domain} not listed")
            return None
        except (dns.exception.DNSException, OSError) as e:
            logger.warning(f"DNS query failed: {name} - {e}")
            raise DnsLookupError(f"{name}: {e}") from e

        for rdata in answer:
            try:
                address = ipaddress.ip_address(str(rdata.address))
            except (AttributeError, ValueError):
                continue
            if address.version != 4 or not self.is_positive_response(address):
                continue

            category = classify(address.packed[3])
            logger.info(f"Detected threat domain: {domain} -> {category.threat_type.value}")
            return category

        logger.debug(f"Domain {domain} not listed")
        return None

    @staticmethod
    def validate_domain(domain: str) -> None:
        """
        Validate domain syntax.

        Raises:
            InvalidDomainError: Empty, too long, illegal characters or
                malformed dot structure
        """
        if not domain:
            raise InvalidDomainError("Domain cannot be empty")

        if len(domain) > MAX_DOMAIN_LENGTH:
            raise InvalidDomainError("Domain length exceeds limit")

        if not all(c.isalnum() or c in ".-" for c in domain):
            raise InvalidDomainError(f"Invalid domain characters: {domain}")

        if domain.startswith(".") or domain.endswith(".") or ".." in domain:
            raise InvalidDomainError(f"Malformed dot structure: {domain}")
