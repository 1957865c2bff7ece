# utils/search.py
import logging

logger = logging.getLogger(__name__)

VERSES_TABLE = 'bible_verses'


class VerseStore:
    """Read-only access to the bible_verses table and the search RPCs.

    Wraps a ``database.SupabaseClient``; every query goes through its
    ``db_connection()`` context so client errors are logged in one place.
    """

    def __init__(self, supabase):
        self.supabase = supabase

    @property
    def configured(self):
        return self.supabase is not None and self.supabase.is_configured

    def find_by_reference(self, parsed, translation):
        """Verses for a parsed reference, ordered by chapter then verse"""
        with self.supabase.db_connection() as client:
            query = client.table(VERSES_TABLE)\
                          .select('*')\
                          .eq('book', parsed.book)\
                          .eq('translation', translation)

            if parsed.chapter is not None:
                query = query.eq('chapter', parsed.chapter)

            if parsed.verse is not None:
                if parsed.end_verse is not None:
                    query = query.gte('verse', parsed.verse).lte('verse', parsed.end_verse)
                else:
                    query = query.eq('verse', parsed.verse)

            response = query.order('chapter').order('verse').execute()
            return response.data or []

    def search_text(self, query, book=None, translation='KJV', limit=20, offset=0):
        """Full-text search through the search_verses database function"""
        with self.supabase.db_connection() as client:
            response = client.rpc('search_verses', {
                'search_query': query,
                'book_filter': book,
                'version_filter': translation,
                'limit_count': limit,
                'offset_count': offset
            }).execute()
            return response.data or []

    def count_text_matches(self, query, book=None, translation=None):
        with self.supabase.db_connection() as client:
            count_query = client.table(VERSES_TABLE)\
                                .select('id', count='exact')\
                                .text_search('search_vector', query)
            if book:
                count_query = count_query.eq('book', book)
            if translation:
                count_query = count_query.eq('translation', translation)

            response = count_query.limit(1).execute()
            return response.count or 0

    def popular_searches(self, term, limit=5):
        """Rows of {suggestion, search_type, popularity} from search analytics"""
        with self.supabase.db_connection() as client:
            response = client.rpc('get_search_suggestions', {
                'search_term': term,
                'limit_count': limit
            }).execute()
            return response.data or []

    def text_matches(self, term, limit=5):
        """Texts of verses matching the full-text filter"""
        with self.supabase.db_connection() as client:
            response = client.table(VERSES_TABLE)\
                             .select('text')\
                             .text_search('search_vector', term)\
                             .limit(limit)\
                             .execute()
            return [row['text'] for row in (response.data or []) if row.get('text')]

    def record_search(self, query, search_type):
        """Bump search analytics for a query. Failures are logged and ignored."""
        try:
            with self.supabase.db_connection() as client:
                client.rpc('update_search_analytics', {
                    'query_text': query,
                    'search_type_param': search_type
                }).execute()
        except Exception as e:
            logger.warning(f"Failed to update search analytics for '{query}': {str(e)}")

    def count_verses(self):
        with self.supabase.db_connection() as client:
            response = client.table(VERSES_TABLE).select('id', count='exact').limit(1).execute()
            return response.count or 0
