from supabase import create_client
from dotenv import load_dotenv
from contextlib import contextmanager
import logging

from config import Config

logger = logging.getLogger(__name__)

load_dotenv()


class SupabaseClient:
    def __init__(self, url=None, key=None):
        self._url = url
        self._key = key
        self._client = None
        # Defer initialization to first access

    @property
    def is_configured(self):
        return bool(self._url and self._key)

    def _get_or_init_client(self):
        if self._client is None:
            if not self.is_configured:
                raise ValueError("SUPABASE_URL or SUPABASE_SERVICE_KEY not found")
            try:
                if not self._key.startswith(('eyJ', 'sb_secret_')):
                    logger.warning("SUPABASE_SERVICE_KEY does not look like a service_role key")

                logger.info("Initializing Supabase client...")
                self._client = create_client(self._url, self._key)
                logger.info("Successfully initialized Supabase client")
            except Exception as e:
                logger.error(f"Error initializing Supabase client: {str(e)}")
                self._client = None
                raise
        return self._client

    @property
    def client(self):
        """Get the Supabase client, initializing if needed."""
        return self._get_or_init_client()

    @contextmanager
    def db_connection(self):
        """Context manager for Supabase client usage"""
        try:
            yield self.client  # Accessing .client ensures initialization
        except Exception as e:
            logger.error(f"Error in Supabase client operation: {str(e)}")
            raise


_supabase_client_instance = None


def _get_supabase_instance():
    global _supabase_client_instance
    if _supabase_client_instance is None:
        _supabase_client_instance = SupabaseClient(Config.SUPABASE_URL, Config.SUPABASE_SERVICE_KEY)
    return _supabase_client_instance


def get_supabase():
    """Get the process-wide SupabaseClient wrapper (client is created lazily)."""
    return _get_supabase_instance()


@contextmanager
def get_db():
    """Context manager for Supabase client operations."""
    instance = _get_supabase_instance()
    with instance.db_connection() as client:
        yield client
