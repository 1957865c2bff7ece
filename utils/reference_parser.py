# utils/reference_parser.py
"""Parse typed Scripture references such as "John 3:16", "Gen 1:1-5",
"Psalms 23" or "1co".

Patterns are tried in order, most specific first. A pattern whose shape
matches but whose book token does not resolve falls through to the next,
looser pattern; the first pattern that yields a known book wins.
"""
import re
import logging

from schemas.search_schemas import ParsedReference
from utils.book_names import resolve_book_name

logger = logging.getLogger(__name__)

WHITESPACE_RE = re.compile(r'\s+')

# (name, pattern). Groups: book, chapter, verse, end verse.
REFERENCE_PATTERNS = (
    # John 3:16 or John 3:16-17
    ('chapter_verse', re.compile(r'^([a-z0-9\s]+?)\s+(\d+):(\d+)(?:-(\d+))?$')),
    # John 3 (whole chapter)
    ('chapter', re.compile(r'^([a-z0-9\s]+?)\s+(\d+)$')),
    # Just the book name
    ('book', re.compile(r'^([a-z0-9\s]+?)$')),
)


def _group_int(match, index):
    if index > match.re.groups:
        return None
    value = match.group(index)
    return int(value, 10) if value is not None else None


def match_reference(normalized, original_input=None, patterns=REFERENCE_PATTERNS):
    """Return (pattern name, ParsedReference) for the first resolvable match.

    ``normalized`` must already be lowercased and trimmed. Returns None
    when no pattern yields a known book.
    """
    for name, pattern in patterns:
        match = pattern.match(normalized)
        if not match:
            continue

        book = resolve_book_name(match.group(1))
        if not book:
            logger.debug(f"Pattern '{name}' matched '{normalized}' but book token '{match.group(1).strip()}' is unknown")
            continue

        return name, ParsedReference(
            book=book,
            chapter=_group_int(match, 2),
            verse=_group_int(match, 3),
            end_verse=_group_int(match, 4),
            is_valid=True,
            original_input=normalized if original_input is None else original_input
        )
    return None


def parse_reference(reference):
    """Parse a raw query into a ParsedReference.

    Unresolvable input is not an error: it comes back with
    ``is_valid=False``, an empty book and the input kept verbatim.
    """
    normalized = WHITESPACE_RE.sub(' ', reference.lower().strip())
    result = match_reference(normalized, original_input=reference)

    if result is None:
        return ParsedReference(book='', is_valid=False, original_input=reference)

    _, parsed = result
    return parsed
