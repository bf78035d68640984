"""
Centralized configuration with environment variable overrides.

Credentials, thresholds, and model settings are all read here so the
intake flow, notifier, and classifier never touch the environment directly.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from tenant_intake.logging_context import install_request_id_filter

load_dotenv()

logger = logging.getLogger(__name__)

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off", "")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    """Parse a boolean flag such as ``true``/``0``/``yes`` from an env var."""
    raw = os.getenv(env_var, default).strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


def _optional(env_var: str) -> Optional[str]:
    value = os.getenv(env_var, "").strip()
    return value or None


@dataclass(frozen=True)
class TwilioConfig:
    """SMS transport credentials. Any missing piece disables landlord alerts."""

    account_sid: Optional[str] = _optional("TWILIO_ACCOUNT_SID")
    auth_token: Optional[str] = _optional("TWILIO_AUTH_TOKEN")
    from_number: Optional[str] = _optional("TWILIO_FROM_NUMBER")

    @property
    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)


@dataclass(frozen=True)
class ModelConfig:
    """Language-model triage settings."""

    api_key: Optional[str] = _optional("OPENAI_API_KEY")
    llm_model: str = os.getenv("LLM_MODEL", "gpt-4.1-mini")
    llm_temperature: float = _safe_float("LLM_TEMPERATURE", "0.0")
    triage_backend: str = os.getenv("TRIAGE_BACKEND", "openai")
    fallback_asks_for_photo: bool = _safe_bool("TRIAGE_FALLBACK_ASKS_FOR_PHOTO", "false")


@dataclass(frozen=True)
class StoreConfig:
    """Document store backend selection."""

    backend: str = os.getenv("DOCUMENT_STORE", "firestore")
    firestore_project: Optional[str] = _optional("FIRESTORE_PROJECT")


@dataclass(frozen=True)
class IntakeConfig:
    """Thresholds and wording used by the intake flow."""

    company_name: str = os.getenv("COMPANY_NAME", "your property management team")
    followup_max_length: int = _safe_int("FOLLOWUP_MAX_LENGTH", "40")
    landlord_summary_max_length: int = _safe_int("LANDLORD_SUMMARY_MAX_LENGTH", "140")
    emergency_number: str = os.getenv("EMERGENCY_NUMBER", "911")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    twilio: TwilioConfig = field(default_factory=TwilioConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    intake: IntakeConfig = field(default_factory=IntakeConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = _safe_int("PORT", "8080")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not 0.0 <= config.model.llm_temperature <= 2.0:
        raise ValueError(
            f"LLM_TEMPERATURE must be between 0.0 and 2.0, got {config.model.llm_temperature}"
        )
    if config.model.triage_backend not in ("openai", "keyword"):
        raise ValueError(
            f"TRIAGE_BACKEND must be 'openai' or 'keyword', got {config.model.triage_backend!r}"
        )
    if config.store.backend not in ("firestore", "memory"):
        raise ValueError(
            f"DOCUMENT_STORE must be 'firestore' or 'memory', got {config.store.backend!r}"
        )
    if config.intake.followup_max_length < 1:
        raise ValueError(
            f"FOLLOWUP_MAX_LENGTH must be >= 1, got {config.intake.followup_max_length}"
        )
    # Room for the "..." marker.
    if config.intake.landlord_summary_max_length < 4:
        raise ValueError(
            "LANDLORD_SUMMARY_MAX_LENGTH must be >= 4, "
            f"got {config.intake.landlord_summary_max_length}"
        )
    if not 0 < config.port < 65536:
        raise ValueError(f"PORT must be between 1 and 65535, got {config.port}")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    install_request_id_filter()
    if not config.twilio.is_configured:
        logger.warning("Twilio credentials incomplete; landlord SMS alerts are disabled")
    logger.info("Configuration loaded (store=%s, triage=%s)",
                config.store.backend, config.model.triage_backend)
    return config


# Singleton instance
settings = load_config()
