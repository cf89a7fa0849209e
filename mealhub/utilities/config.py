"""Configuration management for the mealhub application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
BASE_DIR: Final[Path] = Path(__file__).parent.parent
_env_path = BASE_DIR.parent / '.env'
if _env_path.exists():
    load_dotenv(_env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# AI Configuration
OPENAI_API_KEY: Final[str] = os.getenv('OPENAI_API_KEY', '')
AI_MODEL: Final[str] = os.getenv('AI_MODEL', 'gpt-4o-mini')

# Sessions
SESSION_COOKIE: Final[str] = os.getenv('SESSION_COOKIE', 'session')
SESSION_TTL_DAYS: Final[int] = int(os.getenv('SESSION_TTL_DAYS', '5'))

# Uploads
MAX_UPLOAD_BYTES: Final[int] = int(os.getenv('MAX_UPLOAD_BYTES', str(5 * 1024 * 1024)))

# File Paths
DATA_DIR: Final[Path] = Path(os.getenv('MEALHUB_DATA_DIR', str(BASE_DIR / 'data')))
STATIC_DIR: Final[Path] = BASE_DIR / 'static'
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
UPLOADS_DIR: Final[Path] = Path(os.getenv('UPLOADS_DIR', str(STATIC_DIR / 'uploads')))
