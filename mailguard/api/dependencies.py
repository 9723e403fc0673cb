"""API dependency injection."""

import logging
from typing import Optional

from mailguard.config import get_settings
from mailguard.reputation.detector import DetectorConfig, ReputationDetector

logger = logging.getLogger(__name__)

# Global instance (lazily initialized)
_detector: Optional[ReputationDetector] = None


def get_detector() -> ReputationDetector:
    """Get shared ReputationDetector instance."""
    global _detector

    if _detector is not None:
        return _detector

    settings = get_settings()
    config = DetectorConfig.from_settings(settings.detector)
    _detector = ReputationDetector.with_config(config)
    logger.info(
        f"Created detector (timeout={config.dns_timeout}s, "
        f"cache={'on' if config.enable_cache else 'off'}, ttl={config.cache_ttl}s)"
    )
    return _detector


def cleanup():
    """Drop the shared detector on shutdown."""
    global _detector

    if _detector is not None:
        _detector.clear_cache()
        _detector = None

    logger.info("Cleaned up detector")
