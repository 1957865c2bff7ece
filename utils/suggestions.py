# utils/suggestions.py
"""Search-as-you-type suggestions.

Candidates come from these pools, concatenated in this order:

* analytics: past searches with a popularity score (live)
* book: canonical book names containing the query
* popular: a curated list of common devotional search terms
* phrases: short phrases lifted from matching verse text (live)

The live pools need the verse store and are empty when it is unavailable
or failing. Candidates are deduplicated case-insensitively
(first occurrence wins), ranked and truncated by ``rank_suggestions``.
"""
import asyncio
import logging

from models.bible import BOOK_NAMES
from schemas.search_schemas import Suggestion

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
BOOK_POOL_SIZE = 5
POPULAR_POOL_SIZE = 3
ANALYTICS_POOL_SIZE = 5
VERSE_TEXT_POOL_SIZE = 5

# Common Bible search terms and phrases
COMMON_SEARCH_TERMS = [
    'love', 'faith', 'hope', 'peace', 'joy', 'salvation', 'grace', 'mercy',
    'forgiveness', 'prayer', 'wisdom', 'strength', 'comfort', 'healing',
    'blessing', 'eternal life', 'kingdom of heaven', 'holy spirit',
    'jesus christ', 'lord god', 'almighty', 'righteousness', 'truth',
    'light', 'darkness', 'sin', 'redemption', 'covenant', 'promise'
]


def normalize_query(query):
    return (query or '').lower().strip()


def book_pool(query):
    normalized = normalize_query(query)
    matches = [name for name in BOOK_NAMES if normalized in name.lower()]
    return [Suggestion(text=name, type='reference') for name in matches[:BOOK_POOL_SIZE]]


def popular_term_pool(query):
    normalized = normalize_query(query)
    matches = [term for term in COMMON_SEARCH_TERMS if normalized in term.lower()]
    return [Suggestion(text=term, type='popular') for term in matches[:POPULAR_POOL_SIZE]]


def analytics_suggestions(rows):
    suggestions = []
    for row in rows:
        text = row.get('suggestion')
        if not text:
            continue
        suggestions.append(Suggestion(
            text=text,
            type='reference' if row.get('search_type') == 'reference' else 'verse',
            popularity=row.get('popularity')
        ))
    return suggestions


def extract_phrase(text, query):
    """A short phrase around the first word containing the query's first word.

    Takes two words before and two after the hit. Returns None when there
    is no hit or the phrase would be no longer than the query itself.
    """
    normalized = normalize_query(query)
    if not normalized:
        return None

    first_word = normalized.split()[0]
    words = text.lower().split()
    for index, word in enumerate(words):
        if first_word in word:
            start = max(0, index - 2)
            end = min(len(words), index + 3)
            phrase = ' '.join(words[start:end])
            return phrase if len(phrase) > len(normalized) else None
    return None


def verse_text_suggestions(texts, query):
    suggestions = []
    for text in texts:
        phrase = extract_phrase(text, query)
        if phrase:
            suggestions.append(Suggestion(text=phrase, type='verse'))
    return suggestions


def _sort_key(query):
    normalized = normalize_query(query)

    def key(suggestion):
        has_popularity = suggestion.popularity is not None
        return (
            0 if has_popularity else 1,
            -suggestion.popularity if has_popularity else 0,
            0 if suggestion.text.lower().startswith(normalized) else 1,
            suggestion.text.casefold(),
            suggestion.text
        )
    return key


def rank_suggestions(candidates, query, limit):
    """Deduplicate, order and truncate a merged candidate list.

    Order: entries with a popularity score first (higher score first),
    then prefix matches on the query, then alphabetical.
    """
    seen = set()
    unique = []
    for suggestion in candidates:
        folded = suggestion.text.lower()
        if folded in seen:
            continue
        seen.add(folded)
        unique.append(suggestion)

    unique.sort(key=_sort_key(query))
    return unique[:max(limit, 0)]


class LiveSuggestionSource:
    """Analytics and verse-text suggestions backed by a VerseStore.

    ``fetch`` returns (analytics, phrases) and never raises; each backend
    call fails to an empty list.
    """

    def __init__(self, verse_store):
        self.verse_store = verse_store

    @property
    def available(self):
        return self.verse_store is not None and self.verse_store.configured

    def collect(self, query, limit):
        normalized = normalize_query(query)
        analytics = []
        phrases = []

        try:
            rows = self.verse_store.popular_searches(normalized, min(limit, ANALYTICS_POOL_SIZE))
            analytics.extend(analytics_suggestions(rows))
        except Exception as e:
            logger.error(f"Analytics suggestions error: {str(e)}")

        try:
            texts = self.verse_store.text_matches(normalized, VERSE_TEXT_POOL_SIZE)
            phrases.extend(verse_text_suggestions(texts, normalized))
        except Exception as e:
            logger.error(f"Verse suggestions error: {str(e)}")

        return analytics, phrases

    async def fetch(self, query, limit):
        if not self.available:
            return [], []
        try:
            return await asyncio.to_thread(self.collect, query, limit)
        except Exception as e:
            logger.error(f"Live suggestions failed for '{query}': {str(e)}")
            return [], []


async def suggest(partial_query, kind='all', limit=10, live_source=None):
    """Ranked suggestions for a partial query.

    ``kind`` is 'all', 'verse' or 'reference'. Queries shorter than two
    characters produce no suggestions. Pools merge as analytics, books,
    curated terms, then verse-text phrases; on a case-insensitive
    duplicate the earlier pool wins.
    """
    normalized = normalize_query(partial_query)
    if len(normalized) < MIN_QUERY_LENGTH:
        return []

    analytics, phrases = [], []
    if live_source is not None and kind in ('all', 'verse'):
        analytics, phrases = await live_source.fetch(normalized, limit)

    candidates = list(analytics)
    if kind in ('all', 'reference'):
        candidates.extend(book_pool(normalized))
    if kind in ('all', 'verse'):
        candidates.extend(popular_term_pool(normalized))
    candidates.extend(phrases)

    return rank_suggestions(candidates, normalized, limit)
