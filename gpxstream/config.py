import os
from typing import Mapping, Optional

from dotenv import load_dotenv

from .core.constants import DEFAULT_CHUNK_SIZE
from .streaming.decoder import DecoderConfig
from .utils.logging import log

# Environment variables read by load_config()
ENV_STRICT = "GPX_STRICT"
ENV_DEBUG = "GPX_DEBUG"
ENV_CHUNK_SIZE = "GPX_CHUNK_SIZE"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def select_env_file(env: Optional[str] = None, directory: str = ".") -> Optional[str]:
    """
    Pick the env file for the current environment.

    ``.env.<ENV>`` is preferred, then ``.env``. ENV defaults to
    "development" (also read from PYTHON_ENV).
    """
    if env is None:
        env = os.getenv("ENV", os.getenv("PYTHON_ENV", "development"))

    for name in (f".env.{env}", ".env"):
        path = os.path.join(directory, name)
        if os.path.exists(path):
            return path
    return None


def _env_bool(environ: Mapping[str, str], key: str, default: bool) -> bool:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{key} must be a boolean, got {raw!r}")


def _env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    value = int(raw)
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {raw!r}")
    return value


def load_config(env_file: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> DecoderConfig:
    """
    Build a DecoderConfig from environment variables.

    Args:
        env_file: Env file to load first (default: ``select_env_file()``).
            Variables already set in the environment are not overridden.
        environ: Mapping to read instead of ``os.environ`` (no env file is
            loaded in that case)

    Returns:
        DecoderConfig with GPX_STRICT / GPX_DEBUG / GPX_CHUNK_SIZE applied

    Raises:
        ValueError: A variable has an invalid value
    """
    if environ is None:
        env_file = env_file or select_env_file()
        if env_file:
            load_dotenv(env_file)
            log(f"[CONFIG] Loaded environment from {env_file}")
        environ = os.environ

    return DecoderConfig(
        strict=_env_bool(environ, ENV_STRICT, True),
        debug=_env_bool(environ, ENV_DEBUG, False),
        chunk_size=_env_int(environ, ENV_CHUNK_SIZE, DEFAULT_CHUNK_SIZE),
    )
