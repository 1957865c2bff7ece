# This file makes the models directory a Python package
from .bible import Book, BIBLE_BOOKS, BOOK_NAMES, get_book, get_books_by_testament

__all__ = [
    'Book',
    'BIBLE_BOOKS',
    'BOOK_NAMES',
    'get_book',
    'get_books_by_testament',
]
