# routes/search.py
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
import asyncio
import logging
import math

from config import Config
from schemas.search_schemas import (
    ReferenceSearchRequest,
    SearchRequest,
    SuggestionRequest,
    Verse,
    VerseSearchRequest,
    validation_message,
)
from utils.book_names import suggest_book_names
from utils.query_classifier import REFERENCE, classify_query
from utils.reference_parser import parse_reference
from utils.suggestions import LiveSuggestionSource, normalize_query, suggest, MIN_QUERY_LENGTH

search_bp = Blueprint('search', __name__)
logger = logging.getLogger(__name__)


def _verse_store():
    return current_app.extensions['verse_store']


def _request_data():
    """Query string for GET, JSON body for POST"""
    if request.method == 'POST':
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.args.to_dict()


def _not_configured():
    return jsonify({'error': 'Database not configured'}), 503


def _format_verses(rows):
    return [Verse.from_row(row).to_json() for row in rows]


async def run_reference_search(reference, translation):
    """Look up the verses a typed reference points at.

    Returns (payload, status). Unresolvable references are a normal 200
    answer with no verses and some book-name suggestions.
    """
    store = _verse_store()
    parsed = parse_reference(reference)

    if not parsed.is_valid:
        logger.info(f"Reference '{reference}' did not resolve to a book")
        return {
            'reference': parsed.original_input,
            'parsed': None,
            'verses': [],
            'count': 0,
            'suggestions': suggest_book_names(reference)
        }, 200

    # Chapter or verse 0 parse fine but can never exist
    if (parsed.chapter is not None and parsed.chapter <= 0) or \
       (parsed.verse is not None and parsed.verse <= 0):
        return {
            'reference': parsed.original_input,
            'parsed': parsed.to_json(),
            'verses': [],
            'count': 0
        }, 200

    try:
        rows = await asyncio.to_thread(store.find_by_reference, parsed, translation)
    except Exception as e:
        logger.error(f"Reference search error: {str(e)}", exc_info=True)
        return {'error': 'Failed to fetch verses'}, 500

    await asyncio.to_thread(store.record_search, reference, 'reference')

    verses = _format_verses(rows)
    return {
        'reference': parsed.original_input,
        'parsed': parsed.to_json(),
        'verses': verses,
        'count': len(verses)
    }, 200


async def run_verse_search(params):
    """Free-text search with pagination. Returns (payload, status)."""
    store = _verse_store()
    translation = params.translation or Config.DEFAULT_TRANSLATION
    offset = (params.page - 1) * params.limit

    try:
        rows = await asyncio.to_thread(
            store.search_text, params.q, params.book, translation, params.limit, offset
        )
    except Exception as e:
        logger.error(f"Search error: {str(e)}", exc_info=True)
        return {'error': 'Failed to search verses'}, 500

    try:
        total = await asyncio.to_thread(store.count_text_matches, params.q, params.book, translation)
    except Exception as e:
        logger.error(f"Count error: {str(e)}")
        total = 0

    await asyncio.to_thread(store.record_search, params.q, 'verse')

    return {
        'verses': _format_verses(rows),
        'pagination': {
            'page': params.page,
            'limit': params.limit,
            'total': total,
            'totalPages': math.ceil(total / params.limit),
            'hasNext': params.page * params.limit < total,
            'hasPrev': params.page > 1
        },
        'query': {
            'text': params.q,
            'book': params.book,
            'translation': translation
        }
    }, 200


@search_bp.route('/reference', methods=['GET', 'POST'])
async def search_reference():
    if not _verse_store().configured:
        return _not_configured()

    try:
        params = ReferenceSearchRequest.model_validate(_request_data())
    except ValidationError as e:
        logger.info(f"Rejected reference search: {validation_message(e)}")
        return jsonify({'error': 'Reference parameter is required'}), 400

    payload, status = await run_reference_search(
        params.ref, params.translation or Config.DEFAULT_TRANSLATION
    )
    return jsonify(payload), status


@search_bp.route('/verses', methods=['GET', 'POST'])
async def search_verses():
    if not _verse_store().configured:
        return _not_configured()

    data = _request_data()
    if request.method == 'POST':
        # POST bodies carry {query, filters: {book, version, page, limit}}
        filters = data.get('filters') if isinstance(data.get('filters'), dict) else {}
        data = {**filters, **{k: v for k, v in data.items() if k != 'filters'}}

    try:
        params = VerseSearchRequest.model_validate(data)
    except ValidationError as e:
        return jsonify({'error': validation_message(e)}), 400

    payload, status = await run_verse_search(params)
    return jsonify(payload), status


@search_bp.route('/suggestions', methods=['GET', 'POST'])
async def search_suggestions():
    data = _request_data()
    if request.method == 'POST' and not (data.get('query') or data.get('q')):
        return jsonify({'error': 'Query is required'}), 400

    try:
        params = SuggestionRequest.model_validate(data)
    except ValidationError as e:
        return jsonify({'error': validation_message(e)}), 400

    normalized = normalize_query(params.q)
    if len(normalized) < MIN_QUERY_LENGTH:
        return jsonify({'suggestions': [], 'query': normalized, 'type': 'empty'})

    live_source = LiveSuggestionSource(_verse_store())
    suggestions = await suggest(normalized, params.type, params.limit, live_source=live_source)

    return jsonify({
        'suggestions': [s.to_json() for s in suggestions],
        'query': normalized,
        'type': params.type
    })


@search_bp.route('/', methods=['GET', 'POST'])
async def search():
    """Classify the query, then answer it as a reference or a text search"""
    if not _verse_store().configured:
        return _not_configured()

    data = _request_data()
    try:
        request_params = SearchRequest.model_validate(data)
    except ValidationError as e:
        logger.info(f"Rejected search: {validation_message(e)}")
        return jsonify({'error': 'Search query is required'}), 400

    query = request_params.q
    search_type = classify_query(query)
    translation = request_params.translation or Config.DEFAULT_TRANSLATION

    if search_type == REFERENCE:
        payload, status = await run_reference_search(query, translation)
    else:
        try:
            params = VerseSearchRequest.model_validate({**data, 'q': query, 'translation': translation})
        except ValidationError as e:
            return jsonify({'error': validation_message(e)}), 400
        payload, status = await run_verse_search(params)

    if status == 200:
        payload['searchType'] = search_type
    return jsonify(payload), status
