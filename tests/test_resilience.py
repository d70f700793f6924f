import logging

import pytest

from kitchenops import create_app
from kitchenops.extensions import db
from kitchenops.logging_config import PiiRedactionFilter
from kitchenops.utils.error_messages import ErrorMessages as EM


@pytest.fixture
def csrf_app(tmp_path):
    app = create_app({
        'TESTING': True,
        'DATABASE_URL': f"sqlite:///{tmp_path / 'csrf.db'}",
        'WTF_CSRF_ENABLED': True,
        'RATELIMIT_ENABLED': False,
        'SECRET_KEY': 'csrf-test-key',
        'CACHE_TYPE': 'NullCache',
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


def test_unknown_route_returns_json_404(client):
    response = client.get('/api/nowhere')
    assert response.status_code == 404
    body = response.get_json()
    assert body['success'] is False
    assert body['errors'] == {}
    assert body['message'] == 'Endpoint not found'


def test_wrong_method_returns_json_405(client):
    response = client.delete('/api/dashboard')
    assert response.status_code == 405
    assert response.get_json()['message'] == EM.METHOD_NOT_ALLOWED


def test_health_and_index(client):
    assert client.get('/health').get_json() == {'status': 'ok'}
    assert client.get('/').get_json()['service'] == 'kitchenops'


def test_missing_resource_uses_service_message(client):
    response = client.get('/api/recipes/42')
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Recipe 42 not found'


def test_non_object_json_body_is_rejected(client):
    response = client.post('/api/products', json=['Cookies'])
    assert response.status_code == 422
    assert response.get_json()['message'] == 'Request body must be a JSON object'


def test_unhandled_error_returns_generic_500(app, client):
    @app.route('/boom')
    def boom():
        raise RuntimeError('kaboom')

    response = client.get('/boom')
    assert response.status_code == 500
    assert response.get_json()['message'] == EM.INTERNAL_ERROR


def test_csrf_is_enforced_for_writes(csrf_app):
    client = csrf_app.test_client()
    payload = {'name': 'Cookies', 'category': 'Bakery'}

    rejected = client.post('/api/products', json=payload)
    assert rejected.status_code == 400
    assert rejected.get_json()['errors']['error'] == 'csrf_validation_failed'

    token = client.get('/csrf-token').get_json()['csrf_token']
    accepted = client.post('/api/products', json=payload, headers={'X-CSRFToken': token})
    assert accepted.status_code == 201


def test_pii_redaction_filter():
    record = logging.LogRecord(
        'kitchenops', logging.INFO, __file__, 1,
        'Client %s reachable at %s, api_key=%s', ('orders@cafe.example', '+91 98765 43210', 'abc123'), None,
    )

    assert PiiRedactionFilter().filter(record) is True
    message = record.getMessage()
    assert 'orders@cafe.example' not in message
    assert '[REDACTED_EMAIL]' in message
    assert '[REDACTED_PHONE]' in message
    assert 'api_key=[REDACTED]' in message
