"""
Configuration loading: config.yaml plus secrets from the environment / .env.
"""

import os

import yaml
from dotenv import load_dotenv


ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CONFIG_PATH = os.path.join(ROOT_DIR, "config.yaml")

DEFAULT_API_KEY_ENV = "OPENROUTER_API_KEY"
DEFAULT_AUTH_TOKEN_ENV = "NOFAT_AUTH_TOKEN"
DEFAULT_DB_PATH = "data/nofat.db"


def load_config(config_path=None):
    """
    Load configuration from config.yaml.

    Raises:
        FileNotFoundError: if the file does not exist
    """
    config_path = config_path or DEFAULT_CONFIG_PATH
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"config.yaml not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    return config


def load_env(env_path=None):
    """Load .env from the app root (local development only)."""
    load_dotenv(env_path or os.path.join(ROOT_DIR, ".env"))


def get_db_path(config):
    return ((config or {}).get("database", {}) or {}).get("path", DEFAULT_DB_PATH)
