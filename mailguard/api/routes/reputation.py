"""Reputation check API endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from mailguard.api import dependencies
from mailguard.reputation.errors import (
    DnsLookupError,
    InvalidDomainError,
    InvalidEmailError,
    MailGuardError,
)

logger = logging.getLogger(__name__)
router = APIRouter()

MAX_BATCH_SIZE = 100


class EmailCheckRequest(BaseModel):
    """Request model for a single email check."""

    email: str


class DomainCheckRequest(BaseModel):
    """Request model for a single domain check."""

    domain: str


class EmailBatchRequest(BaseModel):
    """Request model for batch email checks."""

    emails: list[str] = Field(..., max_length=MAX_BATCH_SIZE)


class DomainBatchRequest(BaseModel):
    """Request model for batch domain checks."""

    domains: list[str] = Field(..., max_length=MAX_BATCH_SIZE)


class ThreatInfo(BaseModel):
    """Threat category details."""

    type: str
    code: int
    description: str
    severity: int


class StatusResponse(BaseModel):
    """Response model for one checked email or domain."""

    subject: str
    domain: str
    is_threat: bool
    threat_type: Optional[ThreatInfo] = None
    from_cache: bool


class BatchItem(BaseModel):
    """One entry of a batch response."""

    subject: str
    result: Optional[StatusResponse] = None
    error: Optional[str] = None


class BatchResponse(BaseModel):
    """Response model for batch checks."""

    total: int
    threats: int
    failures: int
    results: list[BatchItem]


class CacheStatsResponse(BaseModel):
    """Cache statistics."""

    enabled: bool
    size: Optional[int]
    removed: Optional[int] = None


def _to_response(status) -> StatusResponse:
    threat = status.threat_type.to_dict() if status.threat_type else None
    return StatusResponse(
        subject=status.subject,
        domain=status.domain,
        is_threat=status.is_threat,
        threat_type=ThreatInfo(**threat) if threat else None,
        from_cache=status.from_cache,
    )


def _raise_http(error: MailGuardError):
    """Map a check failure to an HTTP error."""
    if isinstance(error, (InvalidEmailError, InvalidDomainError)):
        raise HTTPException(status_code=422, detail=str(error))
    if isinstance(error, DnsLookupError):
        raise HTTPException(status_code=503, detail=str(error))
    raise HTTPException(status_code=500, detail=str(error))


def _batch_response(subjects: list[str], results: list) -> BatchResponse:
    items = []
    threats = 0
    failures = 0
    for subject, result in zip(subjects, results):
        if isinstance(result, MailGuardError):
            failures += 1
            items.append(BatchItem(subject=subject, error=str(result)))
        else:
            if result.is_threat:
                threats += 1
            items.append(BatchItem(subject=subject, result=_to_response(result)))

    return BatchResponse(
        total=len(items),
        threats=threats,
        failures=failures,
        results=items,
    )


@router.post("/email", response_model=StatusResponse)
async def check_email(request: EmailCheckRequest):
    """
    Check an email address against the reputation zone.

    Returns 422 for malformed input and 503 when the lookup fails.
    """
    detector = dependencies.get_detector()
    try:
        status = await detector.check_email(request.email)
    except MailGuardError as e:
        _raise_http(e)
    return _to_response(status)


@router.post("/domain", response_model=StatusResponse)
async def check_domain(request: DomainCheckRequest):
    """Check a domain against the reputation zone."""
    detector = dependencies.get_detector()
    try:
        status = await detector.check_domain(request.domain)
    except MailGuardError as e:
        _raise_http(e)
    return _to_response(status)


@router.post("/emails/batch", response_model=BatchResponse)
async def check_emails_batch(request: EmailBatchRequest):
    """Check several emails; failures are reported per item."""
    detector = dependencies.get_detector()
    results = await detector.check_emails_batch(request.emails)
    return _batch_response(request.emails, results)


@router.post("/domains/batch", response_model=BatchResponse)
async def check_domains_batch(request: DomainBatchRequest):
    """Check several domains; failures are reported per item."""
    detector = dependencies.get_detector()
    results = await detector.check_domains_batch(request.domains)
    return _batch_response(request.domains, results)


@router.get("/cache", response_model=CacheStatsResponse)
async def get_cache_stats():
    """Get cache statistics."""
    detector = dependencies.get_detector()
    return CacheStatsResponse(enabled=detector.cache_enabled, size=detector.cache_size())


@router.post("/cache/cleanup", response_model=CacheStatsResponse)
async def cleanup_cache():
    """Remove expired cache records."""
    detector = dependencies.get_detector()
    removed = detector.cleanup_cache()
    logger.info(f"Cache cleanup removed {removed} records")
    return CacheStatsResponse(
        enabled=detector.cache_enabled,
        size=detector.cache_size(),
        removed=removed,
    )


@router.delete("/cache", response_model=CacheStatsResponse)
async def clear_cache():
    """Remove all cache records."""
    detector = dependencies.get_detector()
    detector.clear_cache()
    logger.info("Cache cleared")
    return CacheStatsResponse(enabled=detector.cache_enabled, size=detector.cache_size())
