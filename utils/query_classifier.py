# utils/query_classifier.py
import re

# Optional leading book number, one or more words, then a chapter with an
# optional :verse and -endVerse. A shape test only; the book is not checked.
REFERENCE_SHAPE = re.compile(r'^\d*\s*[a-zA-Z]+(?:\s+[a-zA-Z]+)*\s*\d+(?::\d+(?:-\d+)?)?$')

REFERENCE = 'reference'
VERSE = 'verse'


def classify_query(query):
    """Route a search string to the 'reference' or 'verse' (free-text) path.

    False positives such as "Frobnicate 3:16" are expected; the reference
    path answers them with no verses and some book suggestions.
    """
    if REFERENCE_SHAPE.match(query.strip()):
        return REFERENCE
    return VERSE
