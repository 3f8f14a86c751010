"""
Mail application configuration

This module provides utilities for loading and accessing environment variables
for the mail application. It supports layered environment variable loading
(.env, .env.test, .env.prod) and provides convenient accessors for mail-specific
configuration values.
"""
from pathlib import Path
from typing import Dict

from common.utils.env_util import load_env


def get_base_dir() -> Path:
    """
    Get the project root directory.

    Returns:
        Path to the project root directory
    """
    # app_mail/config.py -> app_mail -> project root
    return Path(__file__).resolve().parent.parent


def get_env():
    """
    Load and return environment variables with layered support.

    Returns:
        environ.Env instance with loaded environment variables
    """
    base_dir = get_base_dir()
    return load_env(base_dir)


def get_app_config() -> Dict:
    """
    Get mail configuration from environment variables.

    Returns:
        Dictionary containing mail configuration values

    Raises:
        ConfigurationErrorException: If configuration values are invalid
    """
    from common.exceptions.configuration_error_exception import ConfigurationErrorException

    env = get_env()

    try:
        # Attachment store (S3-compatible endpoint)
        oss_bucket = env("MAIL_OSS_BUCKET", default="mail-attachments")
        oss_endpoint = env("MAIL_OSS_ENDPOINT", default="http://localhost:8000/api/oss")

        # Upload limits per request
        max_attachments = env.int("MAIL_MAX_ATTACHMENTS", default=5)
        max_attachment_size = env.int("MAIL_MAX_ATTACHMENT_SIZE", default=10 * 1024 * 1024)
        if max_attachments < 0 or max_attachment_size <= 0:
            raise ValueError("attachment limits must be positive")

        # Real-time "newEmail" notifications
        notify_enabled = env.bool("MAIL_NOTIFY_ENABLED", default=True)

        return {
            "oss_bucket": oss_bucket,
            "oss_endpoint": oss_endpoint,
            "max_attachments": max_attachments,
            "max_attachment_size": max_attachment_size,
            "notify_enabled": notify_enabled,
        }
    except Exception as e:
        raise ConfigurationErrorException(
            f"Failed to load mail configuration: {str(e)}"
        ) from e
