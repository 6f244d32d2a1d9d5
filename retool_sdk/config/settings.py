"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..client import (
    DEFAULT_TIMEOUT,
    RetoolClient,
    with_max_pages,
    with_pagination_deadline,
    with_timeout,
)
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _read_secret(name: str, env_var: str) -> str | None:
    """Return the Docker secret ``name``, else ``env_var``, else None."""
    path = Path("/run/secrets") / name
    if path.is_file():
        try:
            value = path.read_text().strip()
        except OSError as e:
            logger.warning(f"Cannot read secret {name}: {e}")
        else:
            if value:
                logger.info(f"Using {name} from /run/secrets")
                return value

    return os.getenv(env_var) or None


def _positive_number(var_name: str, cast=float):
    """Parse an optional positive number from the environment."""
    raw = os.environ.get(var_name, "").strip()
    if not raw:
        return None
    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{var_name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{var_name} must be greater than 0")
    return value


@dataclass
class SDKSettings:
    """Client configuration container."""
    api_key: str
    endpoint: str
    timeout: float = DEFAULT_TIMEOUT
    max_pages: Optional[int] = None
    pagination_deadline: Optional[float] = None

    def __repr__(self) -> str:
        return (
            f"SDKSettings(api_key='***', endpoint={self.endpoint!r}, timeout={self.timeout}, "
            f"max_pages={self.max_pages}, pagination_deadline={self.pagination_deadline})"
        )


def load_settings(api_key: Optional[str] = None, endpoint: Optional[str] = None) -> SDKSettings:
    """Load client settings from /run/secrets and environment.

    An explicit ``api_key`` or ``endpoint`` argument (e.g. a CLI flag) wins
    over both sources.

    Variables:
        RETOOL_API_KEY (or /run/secrets/retool_api_key) - required
        RETOOL_ENDPOINT - required
        RETOOL_TIMEOUT - seconds, default 10
        RETOOL_MAX_PAGES - page budget per collection fetch
        RETOOL_PAGINATION_DEADLINE - seconds per collection fetch

    Raises:
        ConfigurationError: If a required value is missing or a number is invalid
    """
    api_key = api_key or _read_secret("retool_api_key", "RETOOL_API_KEY")
    if not api_key:
        raise ConfigurationError("RETOOL_API_KEY not found in /run/secrets or environment")

    endpoint = (endpoint or os.environ.get("RETOOL_ENDPOINT", "")).strip()
    if not endpoint:
        raise ConfigurationError("Environment variable RETOOL_ENDPOINT is required.")

    timeout = _positive_number("RETOOL_TIMEOUT") or DEFAULT_TIMEOUT
    max_pages = _positive_number("RETOOL_MAX_PAGES", int)
    pagination_deadline = _positive_number("RETOOL_PAGINATION_DEADLINE")

    logger.info(f"Settings loaded: endpoint={endpoint}; timeout={timeout}s; max_pages={max_pages}")

    return SDKSettings(
        api_key=api_key,
        endpoint=endpoint,
        timeout=timeout,
        max_pages=max_pages,
        pagination_deadline=pagination_deadline,
    )


def build_client(settings: Optional[SDKSettings] = None) -> RetoolClient:
    """Create a RetoolClient from settings (loaded from the environment if omitted)."""
    settings = settings or load_settings()

    options = [with_timeout(settings.timeout)]
    if settings.max_pages is not None:
        options.append(with_max_pages(settings.max_pages))
    if settings.pagination_deadline is not None:
        options.append(with_pagination_deadline(settings.pagination_deadline))

    return RetoolClient(settings.api_key, settings.endpoint, *options)
