# routes/bible.py
from flask import Blueprint, current_app, jsonify, request
import logging

from config import Config
from models.bible import BIBLE_BOOKS, get_book, get_books_by_testament
from utils.book_names import resolve_book_name

bible_bp = Blueprint('bible', __name__)
logger = logging.getLogger(__name__)


def _chapter_loader():
    return current_app.extensions['chapter_loader']


def _lookup_book(book):
    """Canonical Book for a path segment (aliases accepted), or None"""
    name = resolve_book_name(book)
    return get_book(name) if name else None


@bible_bp.route('/books', methods=['GET'])
def get_books():
    testament = request.args.get('testament')
    if testament is None:
        books = BIBLE_BOOKS
    elif testament in ('old', 'new'):
        books = get_books_by_testament(testament)
    else:
        return jsonify({"error": "testament must be 'old' or 'new'"}), 400

    return jsonify([book.to_json() for book in books])


@bible_bp.route('/chapters/<book>', methods=['GET'])
def get_chapters(book):
    found = _lookup_book(book)
    if not found:
        return jsonify({"error": "Book not found"}), 404

    return jsonify(list(range(1, found.chapters + 1)))


@bible_bp.route('/verses/<book>/<int:chapter>', methods=['GET'])
async def get_verses(book, chapter):
    found = _lookup_book(book)
    if not found:
        return jsonify({"error": "Book not found"}), 404
    if chapter < 1 or chapter > found.chapters:
        return jsonify({"error": "Chapter not found"}), 404

    translation = request.args.get('translation', Config.DEFAULT_TRANSLATION)
    verses = await _chapter_loader().load(found.name, chapter, translation)

    return jsonify([verse.to_json() for verse in verses])


@bible_bp.route('/verse/<book>/<int:chapter>/<int:verse>', methods=['GET'])
async def get_single_verse(book, chapter, verse):
    found = _lookup_book(book)
    if not found:
        return jsonify({"error": "Book not found"}), 404
    if chapter < 1 or chapter > found.chapters or verse < 1:
        return jsonify({"error": "Verse not found"}), 404

    translation = request.args.get('translation', Config.DEFAULT_TRANSLATION)
    verse_obj = await _chapter_loader().get_verse(found.name, chapter, verse, translation)

    if not verse_obj:
        return jsonify({"error": "Verse not found"}), 404

    return jsonify(verse_obj.to_json())
