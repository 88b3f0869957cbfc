"""
Environment resolution for fetch-req defaults.

Values come from the environment first, then an optional config mapping,
then the built-in default.
"""
import logging
import os
from typing import Any, Dict, Optional, Sequence

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_TIMEOUT = "FETCH_REQ_TIMEOUT"
ENV_RETRIES = "FETCH_REQ_RETRIES"
ENV_DEBUG = "FETCH_REQ_DEBUG"
ENV_CA_BUNDLE = ("SSL_CERT_FILE", "REQUESTS_CA_BUNDLE")

_TRUTHY = ("true", "1", "yes", "on")


def load_env_file(path: Optional[str] = None, override: bool = False) -> bool:
    """Load a .env file into os.environ. Returns True if a file was loaded."""
    if path is not None and not os.path.exists(path):
        logger.debug(f"No .env file at {path}")
        return False
    loaded = load_dotenv(path, override=override)
    logger.debug(f"Loaded .env file: {path or '<discovered>'} ({loaded})")
    return loaded


def env_or_config(
    env_key: str, config: Optional[Dict[str, Any]], config_key: str, default: Any
) -> Any:
    """First of: ``env_key`` in the environment, ``config[config_key]``, ``default``."""
    val = os.getenv(env_key)
    if val is not None:
        return val
    if config and config_key in config:
        return config[config_key]
    return default


def resolve_bool(env_key: str, config: Optional[Dict[str, Any]], config_key: str, default: bool) -> bool:
    val = env_or_config(env_key, config, config_key, default)
    if isinstance(val, str):
        return val.strip().lower() in _TRUTHY
    return bool(val)


def resolve_int(env_key: str, config: Optional[Dict[str, Any]], config_key: str, default: int) -> int:
    """Integer setting; unparsable values fall back to ``default`` with a warning."""
    val = env_or_config(env_key, config, config_key, default)
    try:
        return int(val)
    except (ValueError, TypeError):
        logger.warning(f"Ignoring non-integer {config_key} {val!r} ({env_key})")
        return default


def resolve_float(env_key: str, config: Optional[Dict[str, Any]], config_key: str, default: float) -> float:
    """Float setting; unparsable values fall back to ``default`` with a warning."""
    val = env_or_config(env_key, config, config_key, default)
    try:
        return float(val)
    except (ValueError, TypeError):
        logger.warning(f"Ignoring non-numeric {config_key} {val!r} ({env_key})")
        return default


def is_ssl_verify_disabled_by_env() -> bool:
    """SSL_CERT_VERIFY=0 or NODE_TLS_REJECT_UNAUTHORIZED=0 turns verification off."""
    return "0" in (os.getenv("SSL_CERT_VERIFY"), os.getenv("NODE_TLS_REJECT_UNAUTHORIZED"))


def get_ca_bundle_from_env(keys: Sequence[str] = ENV_CA_BUNDLE) -> Optional[str]:
    """CA bundle path from the first set variable in ``keys``, user-expanded."""
    for key in keys:
        path = os.getenv(key)
        if path:
            return os.path.expanduser(os.path.expandvars(path))
    return None
