# tests/test_search_routes.py
"""
Tests for the /api/search endpoints.
"""

import pytest

from app import create_app

from conftest import FakeVerseStore


@pytest.fixture
def unconfigured_client(chapter_loader):
    flask_app = create_app(verse_store=FakeVerseStore(configured=False), chapter_loader=chapter_loader)
    return flask_app.test_client()


def test_reference_single_verse(client, verse_store):
    response = client.get('/api/search/reference', query_string={'ref': 'John 3:16'})
    assert response.status_code == 200

    data = response.get_json()
    assert data['reference'] == 'John 3:16'
    assert data['parsed'] == {'book': 'John', 'chapter': 3, 'verse': 16, 'isValid': True, 'originalInput': 'John 3:16'}
    assert data['count'] == 1
    assert data['verses'][0]['text'].startswith('For God so loved the world')
    assert data['verses'][0]['translation'] == 'KJV'
    assert verse_store.recorded == [('John 3:16', 'reference')]


def test_reference_range_is_ordered(client):
    data = client.get('/api/search/reference', query_string={'ref': 'gen 1:1-5'}).get_json()
    assert data['count'] == 5
    assert [v['verse'] for v in data['verses']] == [1, 2, 3, 4, 5]


def test_reference_uses_translation(client):
    data = client.get('/api/search/reference', query_string={'ref': 'John 3:16', 'translation': 'WEB'}).get_json()
    assert data['count'] == 1
    assert data['verses'][0]['translation'] == 'WEB'


def test_reference_unknown_book_returns_suggestions(client, verse_store):
    response = client.get('/api/search/reference', query_string={'ref': 'Frobnicate 3:16'})
    assert response.status_code == 200

    data = response.get_json()
    assert data['parsed'] is None
    assert data['verses'] == []
    assert data['count'] == 0
    assert data['reference'] == 'Frobnicate 3:16'
    assert isinstance(data['suggestions'], list)
    assert verse_store.reference_queries == []


def test_reference_partial_book_suggests_names(client):
    data = client.get('/api/search/reference?ref=corin').get_json()
    assert data['parsed'] is None
    assert data['suggestions'] == ['1 Corinthians', '2 Corinthians']


def test_reference_chapter_zero_is_not_found(client, verse_store):
    data = client.get('/api/search/reference', query_string={'ref': 'John 0:1'}).get_json()
    assert data['parsed']['chapter'] == 0
    assert data['verses'] == []
    assert data['count'] == 0
    assert verse_store.reference_queries == []


def test_reference_missing_parameter(client):
    response = client.get('/api/search/reference')
    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_reference_unconfigured_store(unconfigured_client):
    response = unconfigured_client.get('/api/search/reference', query_string={'ref': 'John 3:16'})
    assert response.status_code == 503
    assert response.get_json() == {'error': 'Database not configured'}


def test_reference_store_failure(chapter_loader):
    flask_app = create_app(verse_store=FakeVerseStore(fail_queries=True), chapter_loader=chapter_loader)
    response = flask_app.test_client().get('/api/search/reference', query_string={'ref': 'John 3:16'})
    assert response.status_code == 500


def test_reference_post_body(client):
    response = client.post('/api/search/reference', json={'reference': 'John 3:16', 'version': 'WEB'})
    assert response.status_code == 200
    assert response.get_json()['verses'][0]['translation'] == 'WEB'

    response = client.post('/api/search/reference', json={'ref': 'Psalms 23'})
    assert response.get_json()['count'] == 1


def test_reference_post_without_reference(client):
    assert client.post('/api/search/reference', json={}).status_code == 400
    assert client.post('/api/search/reference', data='not json').status_code == 400


def test_suggestions(client):
    response = client.get('/api/search/suggestions?q=Jo&type=reference&limit=3')
    assert response.status_code == 200

    data = response.get_json()
    assert data['query'] == 'jo'
    assert data['type'] == 'reference'
    assert [s['text'] for s in data['suggestions']] == ['Job', 'Joel', 'John']
    assert all(s['type'] == 'reference' for s in data['suggestions'])
    assert all('popularity' not in s for s in data['suggestions'])


def test_suggestions_with_analytics(chapter_loader):
    store = FakeVerseStore(popular=[{'suggestion': 'love one another', 'search_type': 'verse', 'popularity': 9}])
    flask_app = create_app(verse_store=store, chapter_loader=chapter_loader)

    data = flask_app.test_client().get('/api/search/suggestions?q=lov').get_json()
    assert data['suggestions'][0] == {'text': 'love one another', 'type': 'verse', 'popularity': 9}
    assert data['type'] == 'all'


def test_suggestions_short_query(client):
    data = client.get('/api/search/suggestions?q=j').get_json()
    assert data == {'suggestions': [], 'query': 'j', 'type': 'empty'}

    data = client.get('/api/search/suggestions').get_json()
    assert data['suggestions'] == []


def test_suggestions_bad_parameters(client):
    assert client.get('/api/search/suggestions?q=love&type=everything').status_code == 400
    assert client.get('/api/search/suggestions?q=love&limit=abc').status_code == 400
    assert client.get('/api/search/suggestions?q=love&limit=0').status_code == 400


def test_suggestions_work_without_store(unconfigured_client):
    response = unconfigured_client.get('/api/search/suggestions?q=gen')
    assert response.status_code == 200
    assert [s['text'] for s in response.get_json()['suggestions']] == ['Genesis']


def test_suggestions_survive_backend_failure(chapter_loader):
    flask_app = create_app(verse_store=FakeVerseStore(fail_live=True), chapter_loader=chapter_loader)
    response = flask_app.test_client().get('/api/search/suggestions?q=faith')
    assert response.status_code == 200
    assert [s['text'] for s in response.get_json()['suggestions']] == ['faith']


def test_suggestions_post(client):
    response = client.post('/api/search/suggestions', json={'query': 'gen', 'type': 'all', 'limit': 5})
    assert response.status_code == 200
    assert response.get_json()['suggestions'][0]['text'] == 'Genesis'

    assert client.post('/api/search/suggestions', json={'type': 'all'}).status_code == 400


def test_verse_search_with_pagination(client, verse_store):
    data = client.get('/api/search/verses?q=light&limit=2').get_json()

    assert len(data['verses']) == 2
    assert data['pagination'] == {
        'page': 1, 'limit': 2, 'total': 3, 'totalPages': 2, 'hasNext': True, 'hasPrev': False
    }
    assert data['query'] == {'text': 'light', 'book': None, 'translation': 'KJV'}
    assert verse_store.recorded == [('light', 'verse')]


def test_verse_search_post_with_filters(client):
    response = client.post('/api/search/verses', json={
        'query': 'light', 'filters': {'book': 'Genesis', 'page': 2, 'limit': 2}
    })
    data = response.get_json()
    assert response.status_code == 200
    assert len(data['verses']) == 1
    assert data['pagination']['hasPrev'] is True
    assert data['pagination']['hasNext'] is False


def test_verse_search_validation(client, unconfigured_client):
    assert client.get('/api/search/verses').status_code == 400
    assert client.get('/api/search/verses?q=light&limit=101').status_code == 400
    assert unconfigured_client.get('/api/search/verses?q=light').status_code == 503


def test_search_dispatches_references(client):
    data = client.get('/api/search/', query_string={'q': 'John 3:16'}).get_json()
    assert data['searchType'] == 'reference'
    assert data['count'] == 1


def test_search_dispatches_free_text(client):
    data = client.get('/api/search/', query_string={'q': 'shepherd'}).get_json()
    assert data['searchType'] == 'verse'
    assert data['verses'][0]['book'] == 'Psalms'


def test_search_false_positive_reference(client):
    response = client.get('/api/search/', query_string={'q': 'Frobnicate 3:16'})
    assert response.status_code == 200
    data = response.get_json()
    assert data['searchType'] == 'reference'
    assert data['verses'] == []


def test_search_requires_query(client):
    assert client.get('/api/search/', query_string={'q': '  '}).status_code == 400


def test_oversized_queries_are_rejected(client, verse_store):
    long_reference = 'a' + ' ' * 20000 + 'x'
    assert client.post('/api/search/reference', json={'ref': long_reference}).status_code == 400
    assert client.post('/api/search/verses', json={'query': 'l' * 201}).status_code == 400
    assert client.post('/api/search/suggestions', json={'query': 'l' * 201}).status_code == 400
    assert client.post('/api/search/', json={'q': long_reference}).status_code == 400
    assert verse_store.reference_queries == []
    assert verse_store.recorded == []


def test_search_rejects_non_string_query(client):
    response = client.post('/api/search/', json={'q': 5})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Search query is required'}

    assert client.post('/api/search/', json={'query': ['John 3:16']}).status_code == 400


def test_search_accepts_query_alias_in_post_body(client):
    data = client.post('/api/search/', json={'query': '  John 3:16 ', 'version': 'WEB'}).get_json()
    assert data['searchType'] == 'reference'
    assert data['verses'][0]['translation'] == 'WEB'
