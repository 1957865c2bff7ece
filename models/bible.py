# models/bible.py
from dataclasses import dataclass


@dataclass(frozen=True)
class Book:
    name: str
    chapters: int
    testament: str
    abbrev: str

    def to_json(self):
        return {
            "name": self.name,
            "chapters": self.chapters,
            "testament": self.testament,
            "abbrev": self.abbrev
        }


# Canonical order, 66 books
BIBLE_BOOKS = (
    # Old Testament
    Book('Genesis', 50, 'old', 'GEN'),
    Book('Exodus', 40, 'old', 'EXO'),
    Book('Leviticus', 27, 'old', 'LEV'),
    Book('Numbers', 36, 'old', 'NUM'),
    Book('Deuteronomy', 34, 'old', 'DEU'),
    Book('Joshua', 24, 'old', 'JOS'),
    Book('Judges', 21, 'old', 'JDG'),
    Book('Ruth', 4, 'old', 'RUT'),
    Book('1 Samuel', 31, 'old', '1SA'),
    Book('2 Samuel', 24, 'old', '2SA'),
    Book('1 Kings', 22, 'old', '1KI'),
    Book('2 Kings', 25, 'old', '2KI'),
    Book('1 Chronicles', 29, 'old', '1CH'),
    Book('2 Chronicles', 36, 'old', '2CH'),
    Book('Ezra', 10, 'old', 'EZR'),
    Book('Nehemiah', 13, 'old', 'NEH'),
    Book('Esther', 10, 'old', 'EST'),
    Book('Job', 42, 'old', 'JOB'),
    Book('Psalms', 150, 'old', 'PSA'),
    Book('Proverbs', 31, 'old', 'PRO'),
    Book('Ecclesiastes', 12, 'old', 'ECC'),
    Book('Song of Solomon', 8, 'old', 'SNG'),
    Book('Isaiah', 66, 'old', 'ISA'),
    Book('Jeremiah', 52, 'old', 'JER'),
    Book('Lamentations', 5, 'old', 'LAM'),
    Book('Ezekiel', 48, 'old', 'EZK'),
    Book('Daniel', 12, 'old', 'DAN'),
    Book('Hosea', 14, 'old', 'HOS'),
    Book('Joel', 3, 'old', 'JOL'),
    Book('Amos', 9, 'old', 'AMO'),
    Book('Obadiah', 1, 'old', 'OBA'),
    Book('Jonah', 4, 'old', 'JON'),
    Book('Micah', 7, 'old', 'MIC'),
    Book('Nahum', 3, 'old', 'NAH'),
    Book('Habakkuk', 3, 'old', 'HAB'),
    Book('Zephaniah', 3, 'old', 'ZEP'),
    Book('Haggai', 2, 'old', 'HAG'),
    Book('Zechariah', 14, 'old', 'ZEC'),
    Book('Malachi', 4, 'old', 'MAL'),

    # New Testament
    Book('Matthew', 28, 'new', 'MAT'),
    Book('Mark', 16, 'new', 'MRK'),
    Book('Luke', 24, 'new', 'LUK'),
    Book('John', 21, 'new', 'JHN'),
    Book('Acts', 28, 'new', 'ACT'),
    Book('Romans', 16, 'new', 'ROM'),
    Book('1 Corinthians', 16, 'new', '1CO'),
    Book('2 Corinthians', 13, 'new', '2CO'),
    Book('Galatians', 6, 'new', 'GAL'),
    Book('Ephesians', 6, 'new', 'EPH'),
    Book('Philippians', 4, 'new', 'PHP'),
    Book('Colossians', 4, 'new', 'COL'),
    Book('1 Thessalonians', 5, 'new', '1TH'),
    Book('2 Thessalonians', 3, 'new', '2TH'),
    Book('1 Timothy', 6, 'new', '1TI'),
    Book('2 Timothy', 4, 'new', '2TI'),
    Book('Titus', 3, 'new', 'TIT'),
    Book('Philemon', 1, 'new', 'PHM'),
    Book('Hebrews', 13, 'new', 'HEB'),
    Book('James', 5, 'new', 'JAS'),
    Book('1 Peter', 5, 'new', '1PE'),
    Book('2 Peter', 3, 'new', '2PE'),
    Book('1 John', 5, 'new', '1JN'),
    Book('2 John', 1, 'new', '2JN'),
    Book('3 John', 1, 'new', '3JN'),
    Book('Jude', 1, 'new', 'JUD'),
    Book('Revelation', 22, 'new', 'REV'),
)

BOOK_NAMES = [book.name for book in BIBLE_BOOKS]

_BOOKS_BY_NAME = {book.name: book for book in BIBLE_BOOKS}


def get_book(name):
    """Look up a book by its canonical name (exact match)"""
    return _BOOKS_BY_NAME.get(name)


def get_books_by_testament(testament):
    return [book for book in BIBLE_BOOKS if book.testament == testament]
