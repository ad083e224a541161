from sqlmodel import SQLModel

from tutorial_api.exceptions import PersistenceError
from tutorial_api.repositories import TutorialRepository


def _create(client, title, description="", published=False):
    r = client.post('/api/tutorials', json={'title': title, 'description': description, 'published': published})
    assert r.status_code == 201
    return r.json()


def test_list_empty_returns_no_content(client):
    r = client.get('/api/tutorials')
    assert r.status_code == 204
    assert r.content == b''


def test_create_and_list(client):
    created = _create(client, 'Spring Boot', 'Spring Boot Tutorial')
    assert created['id'] > 0
    assert created['published'] is False
    _create(client, 'React', 'React Tutorial')
    r = client.get('/api/tutorials')
    assert r.status_code == 200
    body = r.json()
    assert [t['title'] for t in body] == ['Spring Boot', 'React']


def test_create_ignores_client_id(client):
    r = client.post('/api/tutorials', json={'id': 777, 'title': 'New Tutorial', 'description': 'New Description'})
    assert r.status_code == 201
    body = r.json()
    assert body['id'] != 777
    assert body == {'id': body['id'], 'title': 'New Tutorial', 'description': 'New Description', 'published': False}


def test_create_rejects_missing_title(client):
    r = client.post('/api/tutorials', json={'description': 'no title'})
    assert r.status_code == 422


def test_list_with_title_filter(client):
    _create(client, 'Spring Boot Basics')
    _create(client, 'React Tutorial')
    r = client.get('/api/tutorials', params={'title': 'Boot'})
    assert r.status_code == 200
    assert [t['title'] for t in r.json()] == ['Spring Boot Basics']
    assert client.get('/api/tutorials', params={'title': 'Angular'}).status_code == 204


def test_get_by_id(client):
    created = _create(client, 'Spring Boot', 'Spring Boot Tutorial')
    r = client.get(f"/api/tutorials/{created['id']}")
    assert r.status_code == 200
    assert r.json()['description'] == 'Spring Boot Tutorial'
    missing = client.get('/api/tutorials/999')
    assert missing.status_code == 404
    assert missing.json()['detail'] == 'tutorial not found'


def test_published_endpoint_returns_only_published(client):
    _create(client, 'Published Tutorial', 'This is published', True)
    _create(client, 'Unpublished Tutorial', 'This is not published', False)
    r = client.get('/api/tutorials/published')
    assert r.status_code == 200
    body = r.json()
    assert len(body) == 1
    assert body[0]['title'] == 'Published Tutorial'
    assert body[0]['published'] is True


def test_published_endpoint_empty_returns_no_content(client):
    _create(client, 'Draft', 'not published', False)
    assert client.get('/api/tutorials/published').status_code == 204


def test_search_endpoint(client):
    _create(client, 'Spring Boot Basics')
    _create(client, 'Spring Cloud Guide')
    _create(client, 'React Tutorial')
    _create(client, 'Spring Security', published=True)
    r = client.get('/api/tutorials/search', params={'title': 'Spring', 'published': 'false'})
    assert r.status_code == 200
    assert {t['title'] for t in r.json()} == {'Spring Boot Basics', 'Spring Cloud Guide'}
    r2 = client.get('/api/tutorials/search', params={'title': 'Spring', 'published': 'true'})
    assert [t['title'] for t in r2.json()] == ['Spring Security']


def test_update_unpublishes(client):
    created = _create(client, 'Tutorial', 'Description', True)
    r = client.put(f"/api/tutorials/{created['id']}", json={
        'title': 'Updated Tutorial', 'description': 'Updated Description', 'published': False
    })
    assert r.status_code == 200
    assert r.json()['published'] is False
    assert r.json()['title'] == 'Updated Tutorial'
    assert client.get(f"/api/tutorials/{created['id']}").json()['published'] is False


def test_update_publishes(client):
    created = _create(client, 'Tutorial', 'Description', False)
    r = client.put(f"/api/tutorials/{created['id']}", json={
        'title': 'Updated Tutorial', 'description': 'Updated Description', 'published': True
    })
    assert r.status_code == 200
    assert r.json()['published'] is True
    assert r.json()['id'] == created['id']


def test_update_missing_returns_not_found(client):
    r = client.put('/api/tutorials/999', json={'title': 'x', 'description': 'y', 'published': True})
    assert r.status_code == 404


def test_delete_endpoints_return_no_content(client):
    created = _create(client, 'Tutorial')
    assert client.delete(f"/api/tutorials/{created['id']}").status_code == 204
    assert client.delete(f"/api/tutorials/{created['id']}").status_code == 204
    _create(client, 'Another')
    assert client.delete('/api/tutorials').status_code == 204
    assert client.get('/api/tutorials').status_code == 204


def test_persistence_error_returns_500(client, monkeypatch):
    def broken(self):
        raise PersistenceError("tutorial find_all failed", operation="find_all")

    monkeypatch.setattr(TutorialRepository, "find_all", broken)
    r = client.get('/api/tutorials')
    assert r.status_code == 500
    body = r.json()
    assert body['error_code'] == 'PERSISTENCE_ERROR'
    assert body['operation'] == 'find_all'


def test_storage_failure_body_is_generic(client, engine):
    SQLModel.metadata.drop_all(engine)
    r = client.get('/api/tutorials')
    assert r.status_code == 500
    body = r.json()
    assert body == {
        'status': 'error',
        'error_code': 'PERSISTENCE_ERROR',
        'message': 'tutorial find_all failed',
        'operation': 'find_all',
    }
    assert 'SELECT' not in r.text
    assert 'no such table' not in r.text


def test_request_id_header_exists(client):
    r = client.get('/health')
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}
    assert 'X-Request-ID' in r.headers
    echoed = client.get('/health', headers={'X-Request-ID': 'abc123'})
    assert echoed.headers['X-Request-ID'] == 'abc123'
