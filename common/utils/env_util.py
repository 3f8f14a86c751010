"""
Environment variable loading utility

Supports layered environment variable loading:
1. Load .env (default/base configuration)
2. Load .env.test or .env.prod based on RUN_ENV variable (overrides .env)
"""
import os
from pathlib import Path

import environ

_LAYERED_ENVIRONMENTS = ("test", "prod")


def load_env(base_dir: Path) -> environ.Env:
    """
    Load environment variables with layered support

    Loading order:
    1. Load .env (base/default configuration)
    2. If RUN_ENV=test, load .env.test (overrides .env)
    3. If RUN_ENV=prod, load .env.prod (overrides .env)

    Args:
        base_dir: Base directory where .env files are located

    Returns:
        environ.Env instance with loaded environment variables
    """
    env_file = base_dir / ".env"
    if env_file.exists():
        environ.Env.read_env(env_file)

    # RUN_ENV may come from the system environment or from the .env just read
    environment = os.environ.get("RUN_ENV", "").lower()
    if environment in _LAYERED_ENVIRONMENTS:
        layered_env_file = base_dir / f".env.{environment}"
        if layered_env_file.exists():
            environ.Env.read_env(layered_env_file, overwrite=True)

    return environ.Env()
