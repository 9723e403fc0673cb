"""Threat taxonomy for reputation-zone response codes."""

from dataclasses import dataclass
from enum import Enum


class ThreatType(Enum):
    """Threat categories encoded by the reputation zone."""

    SPAM = "spam"  # 127.0.0.2, 127.0.0.9
    PHISHING = "phishing"  # 127.0.0.3
    MALWARE = "malware"  # 127.0.0.4, .6, .7, .11
    BOTNET = "botnet"  # 127.0.0.5
    UNWANTED_PROGRAM = "unwanted_program"  # 127.0.0.10
    UNKNOWN = "unknown"


# Response code (last octet) -> threat type
CODE_MAP = {
    2: ThreatType.SPAM,
    9: ThreatType.SPAM,
    3: ThreatType.PHISHING,
    4: ThreatType.MALWARE,
    6: ThreatType.MALWARE,
    7: ThreatType.MALWARE,
    11: ThreatType.MALWARE,
    5: ThreatType.BOTNET,
    10: ThreatType.UNWANTED_PROGRAM,
}

DESCRIPTIONS = {
    ThreatType.SPAM: "Spam Source",
    ThreatType.PHISHING: "Phishing Website",
    ThreatType.MALWARE: "Malware",
    ThreatType.BOTNET: "Botnet",
    ThreatType.UNWANTED_PROGRAM: "Potentially Unwanted Program",
    ThreatType.UNKNOWN: "Unknown Threat Type",
}

# 1-5, 5 is highest
SEVERITY_LEVELS = {
    ThreatType.MALWARE: 5,
    ThreatType.PHISHING: 4,
    ThreatType.BOTNET: 4,
    ThreatType.UNKNOWN: 3,
    ThreatType.SPAM: 2,
    ThreatType.UNWANTED_PROGRAM: 1,
}


@dataclass(frozen=True)
class ThreatCategory:
    """Classification of a listed domain."""

    threat_type: ThreatType
    code: int

    @property
    def description(self) -> str:
        return description(self)

    @property
    def severity(self) -> int:
        return severity(self)

    def to_dict(self) -> dict:
        """Serialize for API responses and logs."""
        return {
            "type": self.threat_type.value,
            "code": self.code,
            "description": self.description,
            "severity": self.severity,
        }


def classify(code: int) -> ThreatCategory:
    """
    Map a reputation-zone response code to a threat category.

    Args:
        code: Last octet of the 127.0.0.x response address

    Returns:
        ThreatCategory; unmapped codes give ThreatType.UNKNOWN
    """
    if not 0 <= code <= 255:
        raise ValueError(f"Response code out of range: {code}")
    return ThreatCategory(CODE_MAP.get(code, ThreatType.UNKNOWN), code)


def description(category: ThreatCategory) -> str:
    """Human readable label for a category."""
    return DESCRIPTIONS[category.threat_type]


def severity(category: ThreatCategory) -> int:
    """Severity level of a category."""
    return SEVERITY_LEVELS[category.threat_type]
