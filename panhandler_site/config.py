"""
Configuration Layer
===================

Centralized, type-safe configuration for the Panhandler drivers.
Every credential and plugin-level default is read from the environment
once, here, and injected into drivers at construction.

Usage:
    from panhandler_site.config import config

    # Access vendor credentials
    app_id = config.ebay.app_id

    # Check which drivers can send requests
    if config.is_configured("amazon"):
        ...
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List
import logging

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


def load_environment(path=None) -> bool:
    """
    Load a .env file into os.environ without overriding variables already set.

    Defaults to the nearest .env above the working directory. Must run before
    the config singleton below is built.
    """
    return load_dotenv(path or find_dotenv(usecwd=True))


load_environment()


def _env_bool(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes", "on")


# =============================================================================
# Vendor Configuration Classes
# =============================================================================

@dataclass(frozen=True)
class AmazonConfig:
    """Amazon Product Advertising API credentials and locale."""
    site: str = field(default_factory=lambda: os.getenv("AMAZON_SITE", "ecs.amazonaws.com"))
    access_key_id: str = field(default_factory=lambda: os.getenv("AMAZON_ACCESS_KEY_ID", ""))
    secret_access_key: str = field(default_factory=lambda: os.getenv("AMAZON_SECRET_ACCESS_KEY", ""))
    associate_tag: str = field(default_factory=lambda: os.getenv("AMAZON_ASSOCIATE_TAG", ""))

    @property
    def is_configured(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)


@dataclass(frozen=True)
class CafePressConfig:
    """CafePress open API settings."""
    api_key: str = field(default_factory=lambda: os.getenv("CAFEPRESS_API_KEY", ""))
    store_id: str = field(default_factory=lambda: os.getenv("CAFEPRESS_STORE_ID", "cybersprocket"))
    section_id: str = field(default_factory=lambda: os.getenv("CAFEPRESS_SECTION_ID", "0"))
    # Commission Junction publisher id for tracking links
    cj_pid: str = field(default_factory=lambda: os.getenv("CAFEPRESS_CJ_PID", ""))

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class CommissionJunctionConfig:
    """Commission Junction product search credentials."""
    developer_key: str = field(default_factory=lambda: os.getenv("CJ_DEVELOPER_KEY", ""))
    website_id: str = field(default_factory=lambda: os.getenv("CJ_WEBSITE_ID", ""))

    @property
    def is_configured(self) -> bool:
        return bool(self.developer_key and self.website_id)


@dataclass(frozen=True)
class EbayConfig:
    """eBay Finding API application id."""
    app_id: str = field(default_factory=lambda: os.getenv("EBAY_APP_ID", ""))

    @property
    def is_configured(self) -> bool:
        return bool(self.app_id)


@dataclass(frozen=True)
class SecurityConfig:
    """Security-related settings for the host project."""
    secret_key: str = field(default_factory=lambda: os.getenv("SECRET_KEY", "django-insecure-dev-key-change-in-production"))
    allowed_hosts: List[str] = field(default_factory=lambda: os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(","))

    @property
    def is_secure_key(self) -> bool:
        """Check if using a proper secret key."""
        return "insecure" not in self.secret_key.lower() and len(self.secret_key) >= 50


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration - aggregates all config sections."""

    # Environment
    environment: str = field(default_factory=lambda: os.getenv("DJANGO_ENV", "development"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", "True"))

    # Driver-wide defaults
    wait_for: int = field(default_factory=lambda: int(os.getenv("PANHANDLER_WAIT_FOR", "30")))
    debugging: bool = field(default_factory=lambda: _env_bool("PANHANDLER_DEBUG"))

    # Sub-configurations
    amazon: AmazonConfig = field(default_factory=AmazonConfig)
    cafepress: CafePressConfig = field(default_factory=CafePressConfig)
    commission_junction: CommissionJunctionConfig = field(default_factory=CommissionJunctionConfig)
    ebay: EbayConfig = field(default_factory=EbayConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    def vendor(self, driver_id: str):
        """Get the vendor section for a driver id, or None."""
        sections = {
            "amazon": self.amazon,
            "cafepress": self.cafepress,
            "commission_junction": self.commission_junction,
            "ebay": self.ebay,
        }
        return sections.get(driver_id.lower())

    def is_configured(self, driver_id: str) -> bool:
        """Check if a driver has its credentials configured."""
        section = self.vendor(driver_id)
        return bool(section and section.is_configured)

    @property
    def configured_drivers(self) -> List[str]:
        """Return list of drivers with valid credentials."""
        drivers = ["amazon", "cafepress", "commission_junction", "ebay"]
        return [d for d in drivers if self.is_configured(d)]

    def validate(self) -> List[str]:
        """
        Validate configuration and return list of warnings/errors.
        Call this on startup to catch misconfigurations early.
        """
        issues = []

        if self.wait_for <= 0:
            issues.append(f"CRITICAL: PANHANDLER_WAIT_FOR must be positive (got {self.wait_for})")

        if self.is_production:
            if not self.security.is_secure_key:
                issues.append("CRITICAL: Using insecure SECRET_KEY in production!")
            if self.debug:
                issues.append("WARNING: DEBUG=True in production!")
            if not self.configured_drivers:
                issues.append("WARNING: No vendor drivers configured")

        if self.amazon.access_key_id and not self.amazon.secret_access_key:
            issues.append("WARNING: AMAZON_SECRET_ACCESS_KEY not set (Amazon requests cannot be signed)")

        return issues

    def log_status(self) -> None:
        """Log configuration status on startup."""
        logger.info(f"Environment: {self.environment}")
        logger.info(f"Debug: {self.debug}")
        logger.info(f"Configured drivers: {', '.join(self.configured_drivers) or 'None'}")

        for issue in self.validate():
            if issue.startswith("CRITICAL"):
                logger.critical(issue)
            elif issue.startswith("WARNING"):
                logger.warning(issue)
            else:
                logger.info(issue)


# =============================================================================
# Singleton Instance
# =============================================================================

@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """
    Get the singleton configuration instance.
    Uses lru_cache to ensure single instance across the application.
    """
    return AppConfig()


# Convenience alias
config = get_config()
