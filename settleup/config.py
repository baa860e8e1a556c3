import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from the package directory or the repo root
env_path = Path(__file__).parent / '.env'
if not env_path.exists():
    env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)


def _origins(value):
    origins = [o.strip() for o in value.split(',') if o.strip()]
    if origins == ['*']:
        return '*'
    return origins


class Config:
    DEBUG = os.environ.get('FLASK_DEBUG', '0').lower() in ('1', 'true', 'yes')
    PORT = int(os.environ.get('PORT', 5000))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Allow the React frontend to talk to the API
    CORS_ORIGINS = _origins(os.environ.get('CORS_ORIGINS', '*'))

    JSON_SORT_KEYS = False


class TestingConfig(Config):
    TESTING = True
    LOG_LEVEL = 'DEBUG'
