# tests/conftest.py
"""
Shared fakes for the search and reading tests. Nothing here touches the
network or a real Supabase project.
"""

from contextlib import contextmanager
from types import SimpleNamespace

import pytest

from app import create_app
from utils.chapter_loader import ChapterCache, ChapterLoader, ChapterNotAvailable


SAMPLE_VERSES = [
    {'id': 1, 'book': 'Genesis', 'chapter': 1, 'verse': 1, 'translation': 'KJV',
     'text': 'In the beginning God created the heaven and the earth.'},
    {'id': 2, 'book': 'Genesis', 'chapter': 1, 'verse': 2, 'translation': 'KJV',
     'text': 'And the earth was without form, and void.'},
    {'id': 3, 'book': 'Genesis', 'chapter': 1, 'verse': 3, 'translation': 'KJV',
     'text': 'And God said, Let there be light: and there was light.'},
    {'id': 4, 'book': 'Genesis', 'chapter': 1, 'verse': 4, 'translation': 'KJV',
     'text': 'And God saw the light, that it was good.'},
    {'id': 5, 'book': 'Genesis', 'chapter': 1, 'verse': 5, 'translation': 'KJV',
     'text': 'And God called the light Day, and the darkness he called Night.'},
    {'id': 6, 'book': 'Genesis', 'chapter': 1, 'verse': 6, 'translation': 'KJV',
     'text': 'And God said, Let there be a firmament in the midst of the waters.'},
    {'id': 7, 'book': 'John', 'chapter': 3, 'verse': 16, 'translation': 'KJV',
     'text': 'For God so loved the world, that he gave his only begotten Son.'},
    {'id': 8, 'book': 'John', 'chapter': 3, 'verse': 17, 'translation': 'KJV',
     'text': 'For God sent not his Son into the world to condemn the world.'},
    {'id': 9, 'book': 'John', 'chapter': 3, 'verse': 16, 'translation': 'WEB',
     'text': 'For God so loved the world, that he gave his one and only Son.'},
    {'id': 10, 'book': 'Psalms', 'chapter': 23, 'verse': 1, 'translation': 'KJV',
     'text': 'The LORD is my shepherd; I shall not want.'},
]


class FakeVerseStore:
    """In-memory stand-in for utils.search.VerseStore"""

    def __init__(self, verses=None, configured=True, popular=None, fail_live=False, fail_queries=False):
        self.verses = list(SAMPLE_VERSES if verses is None else verses)
        self.configured = configured
        self.popular = list(popular or [])
        self.fail_live = fail_live
        self.fail_queries = fail_queries
        self.reference_queries = []
        self.recorded = []

    def find_by_reference(self, parsed, translation):
        if self.fail_queries:
            raise RuntimeError("database unavailable")
        self.reference_queries.append((parsed, translation))
        rows = [v for v in self.verses if v['book'] == parsed.book and v['translation'] == translation]
        if parsed.chapter is not None:
            rows = [v for v in rows if v['chapter'] == parsed.chapter]
        if parsed.verse is not None:
            if parsed.end_verse is not None:
                rows = [v for v in rows if parsed.verse <= v['verse'] <= parsed.end_verse]
            else:
                rows = [v for v in rows if v['verse'] == parsed.verse]
        return sorted(rows, key=lambda v: (v['chapter'], v['verse']))

    def _text_hits(self, query, book=None, translation=None):
        words = query.lower().split()
        rows = [v for v in self.verses if all(w in v['text'].lower() for w in words)]
        if book:
            rows = [v for v in rows if v['book'] == book]
        if translation:
            rows = [v for v in rows if v['translation'] == translation]
        return rows

    def search_text(self, query, book=None, translation='KJV', limit=20, offset=0):
        if self.fail_queries:
            raise RuntimeError("database unavailable")
        return self._text_hits(query, book, translation)[offset:offset + limit]

    def count_text_matches(self, query, book=None, translation=None):
        return len(self._text_hits(query, book, translation))

    def popular_searches(self, term, limit=5):
        if self.fail_live:
            raise RuntimeError("analytics unavailable")
        return [row for row in self.popular if term in row['suggestion'].lower()][:limit]

    def text_matches(self, term, limit=5):
        if self.fail_live:
            raise RuntimeError("full-text search unavailable")
        return [row['text'] for row in self._text_hits(term)][:limit]

    def record_search(self, query, search_type):
        self.recorded.append((query, search_type))

    def count_verses(self):
        return len(self.verses)


def chapter_doc(book, chapter, texts):
    return {
        'book_name': book,
        'chapter': chapter,
        'verses': [{'book_name': book, 'chapter': chapter, 'verse': i + 1, 'text': text,
                    'header': '', 'footer': ''} for i, text in enumerate(texts)]
    }


class CountingChapterSource:
    """Chapter source backed by a dict, counting every fetch"""

    def __init__(self, documents=None):
        self.documents = dict(documents or {})
        self.calls = []
        self.fail = False

    def fetch(self, root, book, chapter):
        self.calls.append((root, book, chapter))
        if self.fail:
            raise ConnectionError("network down")
        try:
            return self.documents[(root, book, chapter)]
        except KeyError:
            raise ChapterNotAvailable(f"{root}/{book}/{chapter}.json not found")


class FakeQuery:
    """Chainable postgrest-style builder that records every call"""

    def __init__(self, log, response):
        self.log = log
        self.response = response

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.log.append((name, args, kwargs))
            return self
        return method

    def execute(self):
        self.log.append(('execute', (), {}))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class FakeSupabase:
    """Stand-in for database.SupabaseClient wrapping a recording client"""

    def __init__(self, data=None, count=None, error=None):
        self.log = []
        response = error if error is not None else SimpleNamespace(data=data, count=count)
        self.response = response
        self.is_configured = True

    @property
    def client(self):
        return self

    def table(self, name):
        self.log.append(('table', (name,), {}))
        return FakeQuery(self.log, self.response)

    def rpc(self, name, params):
        self.log.append(('rpc', (name, params), {}))
        return FakeQuery(self.log, self.response)

    @contextmanager
    def db_connection(self):
        yield self


@pytest.fixture
def verse_store():
    return FakeVerseStore()


@pytest.fixture
def chapter_source():
    return CountingChapterSource({
        ('bible-json', 'John', 3): chapter_doc('John', 3, [
            'There was a man of the Pharisees, named Nicodemus.',
            '<span>The same came to Jesus by night.</span>',
        ]),
        ('bible-json-web', 'John', 3): chapter_doc('John', 3, [
            'Now there was a man of the Pharisees named Nicodemus.',
        ]),
        ('bible-json', 'Psalms', 23): chapter_doc('Psalms', 23, [
            'Â¶ The LORD is my shepherd; I shall not want.',
        ]),
    })


@pytest.fixture
def chapter_loader(chapter_source):
    return ChapterLoader(
        chapter_source,
        cache=ChapterCache(),
        translation_roots={'WEB': 'bible-json-web'},
        default_root='bible-json'
    )


@pytest.fixture
def app(verse_store, chapter_loader):
    flask_app = create_app(verse_store=verse_store, chapter_loader=chapter_loader)
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
