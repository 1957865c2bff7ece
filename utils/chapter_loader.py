# utils/chapter_loader.py
"""Lazy, memoized loading of chapters from the static per-translation
JSON tree (``/{translation_root}/{book}/{chapter}.json``).

Chapter documents look like::

    {"book_name": "John", "chapter": 3,
     "verses": [{"book_name": "John", "chapter": 3, "verse": 1,
                 "text": "...", "header": "", "footer": ""}]}
"""
import asyncio
import json
import logging
import os
import re
import threading
from urllib.parse import quote

import requests

from schemas.search_schemas import Verse

logger = logging.getLogger(__name__)

HTML_TAG_RE = re.compile(r'<[^>]*>')
# Pilcrow, including its mis-decoded UTF-8 form "Â¶"
PARAGRAPH_MARKER_RE = re.compile(r'Â?¶\s*')
WHITESPACE_RE = re.compile(r'\s+')


class ChapterNotAvailable(Exception):
    """The chapter resource could not be fetched or parsed"""


def clean_verse_text(text):
    """Strip HTML tags and paragraph markers from raw verse text"""
    text = HTML_TAG_RE.sub('', text or '')
    text = PARAGRAPH_MARKER_RE.sub('', text)
    return text.strip()


def verse_id(book, chapter, verse):
    slug = WHITESPACE_RE.sub('-', book.lower())
    return f"{slug}-{chapter}-{verse}"


def chapter_to_verses(chapter_data, translation):
    """Convert a chapter document into Verse models with cleaned text"""
    try:
        raw_verses = chapter_data['verses']
        return [Verse(
            id=verse_id(item['book_name'], item['chapter'], item['verse']),
            book=item['book_name'],
            chapter=item['chapter'],
            verse=item['verse'],
            text=clean_verse_text(item.get('text')),
            translation=translation
        ) for item in raw_verses]
    except (KeyError, TypeError, ValueError) as e:
        raise ChapterNotAvailable(f"Malformed chapter document: {str(e)}") from e


def placeholder_verses(book, chapter, translation):
    return [Verse(
        id=verse_id(book, chapter, 1),
        book=book,
        chapter=chapter,
        verse=1,
        text=f"Loading {book} chapter {chapter} ({translation})... Please refresh if this persists.",
        translation=translation
    )]


class FileChapterSource:
    """Reads chapter documents from a local directory tree"""

    def __init__(self, base_dir):
        self.base_dir = base_dir

    def fetch(self, root, book, chapter):
        path = os.path.join(self.base_dir, root, book, f"{chapter}.json")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ChapterNotAvailable(f"Failed to read {path}: {str(e)}") from e


class HttpChapterSource:
    """Fetches chapter documents over HTTP from a static file host"""

    def __init__(self, base_url, timeout=10, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, root, book, chapter):
        url = f"{self.base_url}/{quote(root)}/{quote(book)}/{chapter}.json"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise ChapterNotAvailable(f"Failed to load {url}: {str(e)}") from e


def source_from_config(location, timeout=10):
    if location.startswith(('http://', 'https://')):
        return HttpChapterSource(location, timeout=timeout)
    return FileChapterSource(location)


class ChapterCache:
    """Append-only memo of loaded chapters, keyed '<translation>-<book>-<chapter>'.

    One instance lives as long as the app that owns it; nothing is evicted.
    """

    def __init__(self):
        self._entries = {}
        self._lock = threading.Lock()

    @staticmethod
    def key(translation, book, chapter):
        return f"{translation}-{book}-{chapter}"

    def get(self, translation, book, chapter):
        return self._entries.get(self.key(translation, book, chapter))

    def put(self, translation, book, chapter, verses):
        # Store an immutable snapshot so a cached entry is never partial
        with self._lock:
            self._entries[self.key(translation, book, chapter)] = tuple(verses)

    def __contains__(self, key):
        return key in self._entries

    def __len__(self):
        return len(self._entries)


class ChapterLoader:
    def __init__(self, source, cache=None, translation_roots=None, default_root='bible-json'):
        self.source = source
        self.cache = cache if cache is not None else ChapterCache()
        self.translation_roots = dict(translation_roots or {})
        self.default_root = default_root

    def root_for(self, translation):
        return self.translation_roots.get(translation, self.default_root)

    async def load(self, book, chapter, translation='KJV'):
        """Verses of one chapter.

        Cached chapters return without suspending. A failed fetch is not
        cached and yields a single placeholder verse instead of raising.
        """
        cached = self.cache.get(translation, book, chapter)
        if cached is not None:
            return list(cached)

        try:
            chapter_data = await asyncio.to_thread(self.source.fetch, self.root_for(translation), book, chapter)
            verses = chapter_to_verses(chapter_data, translation)
        except Exception as e:
            logger.error(f"Error loading {book} {chapter} ({translation}): {str(e)}")
            return placeholder_verses(book, chapter, translation)

        self.cache.put(translation, book, chapter, verses)
        return verses

    async def get_verse(self, book, chapter, verse, translation='KJV'):
        verses = await self.load(book, chapter, translation)
        return next((v for v in verses if v.verse == verse), None)
