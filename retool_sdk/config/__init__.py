"""Configuration module for the Retool SDK."""
from .settings import SDKSettings, build_client, load_settings

__all__ = ["SDKSettings", "build_client", "load_settings"]
