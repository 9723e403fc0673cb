"""Reputation check error types."""


class MailGuardError(Exception):
    """Base class for all reputation check failures."""

    prefix = "Reputation check failed"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class InvalidEmailError(MailGuardError):
    """Address does not match mailbox syntax or has an empty domain part."""

    prefix = "Invalid email format"


class InvalidDomainError(MailGuardError):
    """Domain is empty, too long, or malformed."""

    prefix = "Invalid domain format"


class DnsLookupError(MailGuardError):
    """Reputation-zone lookup failed (timeout, server or network error).

    Distinct from "not listed", which is a successful negative result.
    """

    prefix = "DNS query failed"
