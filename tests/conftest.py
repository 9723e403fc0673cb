"""Shared test fixtures."""

from types import SimpleNamespace

import dns.resolver
import pytest

from mailguard.reputation.dns_client import REPUTATION_ZONE, BlacklistQueryClient


class FakeResolver:
    """
    Stand-in for dns.asyncresolver.Resolver.

    Answers are keyed by domain (without the reputation zone). A value is
    either a list of address strings or an exception to raise. Unknown
    domains raise NXDOMAIN.
    """

    def __init__(self, answers=None):
        self.answers = dict(answers or {})
        self.queries: list[str] = []

    async def resolve(self, name, rdtype="A", lifetime=None):
        self.queries.append(name)
        domain = name[: -len(REPUTATION_ZONE) - 1]
        answer = self.answers.get(domain)
        if answer is None:
            raise dns.resolver.NXDOMAIN()
        if isinstance(answer, Exception):
            raise answer
        return [SimpleNamespace(address=a) for a in answer]


@pytest.fixture
def resolver():
    """Create fake resolver with a few listed domains."""
    return FakeResolver(
        {
            "spam.example": ["127.0.0.2"],
            "phish.example": ["127.0.0.3"],
            "malware.example": ["127.0.0.11"],
        }
    )


@pytest.fixture
def query_client(resolver):
    """Create query client backed by the fake resolver."""
    return BlacklistQueryClient(timeout=1.0, resolver=resolver)
