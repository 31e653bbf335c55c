# src/config/env.py
import os

ENV_DEV = "dev"
ENV_PROD = "prod"
KNOWN_ENVS = (ENV_DEV, ENV_PROD)

# Unknown values fall back to prod so a typo never pre-fills sample bills
_raw_env = os.getenv("APP_ENV", ENV_PROD).strip().lower()
APP_ENV = _raw_env if _raw_env in KNOWN_ENVS else ENV_PROD


def is_dev() -> bool:
    """True when the audit forms should start from the sample building."""
    return APP_ENV == ENV_DEV
