# utils/book_names.py
"""Book name resolution.

Maps user-typed book tokens (abbreviations, full names, numbered variants
such as "1co" or "1 corinthians") onto the canonical names in
``models.bible.BIBLE_BOOKS``. Resolution is an exact, case-insensitive
lookup; substring matching is only used to build suggestions.
"""
from models.bible import BIBLE_BOOKS

# Bible book name mappings and abbreviations
BOOK_ALIASES = {
    # Old Testament
    'gen': 'Genesis', 'ge': 'Genesis', 'gn': 'Genesis',
    'exo': 'Exodus', 'ex': 'Exodus', 'exod': 'Exodus',
    'lev': 'Leviticus', 'le': 'Leviticus',
    'num': 'Numbers', 'nu': 'Numbers',
    'deu': 'Deuteronomy', 'deut': 'Deuteronomy', 'dt': 'Deuteronomy',
    'jos': 'Joshua', 'josh': 'Joshua',
    'jdg': 'Judges', 'judg': 'Judges',
    'rut': 'Ruth', 'ru': 'Ruth',
    '1sa': '1 Samuel', '1sam': '1 Samuel',
    '2sa': '2 Samuel', '2sam': '2 Samuel',
    '1ki': '1 Kings', '1kgs': '1 Kings',
    '2ki': '2 Kings', '2kgs': '2 Kings',
    '1ch': '1 Chronicles', '1chr': '1 Chronicles',
    '2ch': '2 Chronicles', '2chr': '2 Chronicles',
    'ezr': 'Ezra',
    'neh': 'Nehemiah',
    'est': 'Esther', 'esth': 'Esther',
    'jb': 'Job',
    'psa': 'Psalms', 'ps': 'Psalms', 'psalm': 'Psalms', 'pss': 'Psalms',
    'pro': 'Proverbs', 'prov': 'Proverbs', 'pr': 'Proverbs',
    'ecc': 'Ecclesiastes', 'eccl': 'Ecclesiastes',
    'sng': 'Song of Solomon', 'sos': 'Song of Solomon', 'song': 'Song of Solomon',
    'song of songs': 'Song of Solomon',
    'isa': 'Isaiah',
    'jer': 'Jeremiah',
    'lam': 'Lamentations',
    'eze': 'Ezekiel', 'ezek': 'Ezekiel', 'ezk': 'Ezekiel',
    'dan': 'Daniel', 'dn': 'Daniel',
    'hos': 'Hosea',
    'joe': 'Joel', 'jol': 'Joel',
    'amo': 'Amos',
    'oba': 'Obadiah', 'obad': 'Obadiah',
    'jon': 'Jonah',
    'mic': 'Micah',
    'nah': 'Nahum',
    'hab': 'Habakkuk',
    'zep': 'Zephaniah', 'zeph': 'Zephaniah',
    'hag': 'Haggai',
    'zec': 'Zechariah', 'zech': 'Zechariah',
    'mal': 'Malachi',

    # New Testament
    'mat': 'Matthew', 'matt': 'Matthew', 'mt': 'Matthew',
    'mar': 'Mark', 'mrk': 'Mark', 'mk': 'Mark',
    'luk': 'Luke', 'lk': 'Luke',
    'joh': 'John', 'jhn': 'John', 'jn': 'John',
    'act': 'Acts',
    'rom': 'Romans', 'ro': 'Romans',
    '1co': '1 Corinthians', '1cor': '1 Corinthians',
    '2co': '2 Corinthians', '2cor': '2 Corinthians',
    'gal': 'Galatians',
    'eph': 'Ephesians',
    'phi': 'Philippians', 'phil': 'Philippians', 'php': 'Philippians',
    'col': 'Colossians',
    '1th': '1 Thessalonians', '1thess': '1 Thessalonians',
    '2th': '2 Thessalonians', '2thess': '2 Thessalonians',
    '1ti': '1 Timothy', '1tim': '1 Timothy',
    '2ti': '2 Timothy', '2tim': '2 Timothy',
    'tit': 'Titus',
    'phm': 'Philemon', 'phlm': 'Philemon',
    'heb': 'Hebrews',
    'jas': 'James', 'jam': 'James',
    '1pe': '1 Peter', '1pet': '1 Peter',
    '2pe': '2 Peter', '2pet': '2 Peter',
    '1jo': '1 John', '1jn': '1 John',
    '2jo': '2 John', '2jn': '2 John',
    '3jo': '3 John', '3jn': '3 John',
    'jud': 'Jude',
    'rev': 'Revelation', 'rv': 'Revelation',
}

# Every book is reachable through its own lowercased name
BOOK_ALIASES.update({book.name.lower(): book.name for book in BIBLE_BOOKS})


def normalize_book_token(token):
    return token.strip().lower()


def resolve_book_name(token):
    """Resolve a typed book token to its canonical name, or None"""
    if not token:
        return None
    return BOOK_ALIASES.get(normalize_book_token(token))


def suggest_book_names(text, limit=5):
    """Canonical names whose alias or name contains the typed text.

    Results keep alias-table order and are unique.
    """
    normalized = normalize_book_token(text)
    if not normalized:
        return []

    suggestions = []
    for alias, name in BOOK_ALIASES.items():
        if normalized in alias or normalized in name.lower():
            if name not in suggestions:
                suggestions.append(name)
                if len(suggestions) >= limit:
                    break
    return suggestions
