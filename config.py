# config.py
import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

load_dotenv()


def _int_env(name, default):
    value = os.getenv(name)
    return int(value) if value else default


class Config:
    SUPABASE_URL = os.getenv('SUPABASE_URL')
    SUPABASE_SERVICE_KEY = os.getenv('SUPABASE_SERVICE_KEY')

    # Base URL (http/https) or local directory holding the per-chapter JSON tree
    BIBLE_JSON_SOURCE = os.getenv('BIBLE_JSON_SOURCE', os.path.join(BASE_DIR, 'public'))
    DEFAULT_TRANSLATION_ROOT = 'bible-json'
    TRANSLATION_ROOTS = {
        'WEB': 'bible-json-web',
    }
    DEFAULT_TRANSLATION = os.getenv('DEFAULT_TRANSLATION', 'KJV')
    CHAPTER_FETCH_TIMEOUT = _int_env('CHAPTER_FETCH_TIMEOUT', 10)

    DEFAULT_SUGGESTION_LIMIT = _int_env('DEFAULT_SUGGESTION_LIMIT', 10)
    MAX_PAGE_SIZE = 100
    MAX_REFERENCE_LENGTH = 100
    MAX_QUERY_LENGTH = 200

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
