"""
Configuration management for the RFP reconciler.

Loads settings from environment variables with sensible defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'
if _env_file.exists():
    load_dotenv(_env_file)

# Values shipped in example .env files that must not count as a real key
PLACEHOLDER_API_KEYS = frozenset({'', 'your_openai_api_key_here', 'sk-...'})


class Config:
    """Configuration settings loaded from environment."""

    # OpenAI
    OPENAI_CHAT_MODEL: str = os.getenv('OPENAI_CHAT_MODEL', 'gpt-4.1-mini')
    OPENAI_TIMEOUT_SECONDS: float = float(os.getenv('OPENAI_TIMEOUT_SECONDS', '30'))

    # Fallback extraction
    MIN_BUDGET: float = float(os.getenv('MIN_BUDGET', '100'))
    DEFAULT_ITEM_PRICE: float = float(os.getenv('DEFAULT_ITEM_PRICE', '1000'))
    RAW_CONTENT_PREFIX_CHARS: int = int(os.getenv('RAW_CONTENT_PREFIX_CHARS', '200'))

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')


# Singleton config instance
config = Config()
