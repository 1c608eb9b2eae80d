"""Tests for Risk Classifier HTTP handler.

Tests the /analyze endpoint contract the chat pipeline depends on.
"""
import hashlib
import json
import logging

import pytest
from unittest.mock import patch

from steadyline.shared.utils import configure_pii_salt


@pytest.fixture(autouse=True)
def setup_pii_salt():
    """Configure PII salt before each test."""
    configure_pii_salt("test_salt_that_is_at_least_32_characters_long")


@pytest.fixture
def client():
    """Create Flask test client."""
    from steadyline.services.risk_classifier.handler import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    def test_health_returns_200(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['status'] == 'healthy'
        assert data['service'] == 'risk-classifier'
        assert 'pattern_version' in data


class TestReadyEndpoint:
    """Tests for /ready endpoint."""

    def test_ready_returns_200(self, client):
        response = client.get('/ready')
        assert response.status_code == 200
        assert json.loads(response.data)['status'] == 'ready'

    @patch('steadyline.services.risk_classifier.handler.classifier', None)
    def test_not_ready_without_classifier(self, client):
        response = client.get('/ready')
        assert response.status_code == 503


class TestAnalyzeEndpoint:
    """Tests for /analyze endpoint."""

    def test_benign_message(self, client):
        response = client.post(
            '/analyze',
            json={
                'message': 'I feel great today',
                'message_id': 'msg_001',
                'session_id': 'sess_001',
                'user_id': 'user_123',
            },
        )

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['isPotentialCrisis'] is False
        assert data['confidence'] == 'low'
        assert data['matchedPatterns'] == []
        assert 'crisis_ui' not in data

    def test_high_risk_message_includes_crisis_ui(self, client):
        response = client.post('/analyze', json={'message': 'I want to kill myself'})

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['isPotentialCrisis'] is True
        assert data['confidence'] == 'high'
        assert len(data['matchedPatterns']) >= 1
        assert data['crisis_ui']['show_emergency'] is True
        assert data['crisis_ui']['support']['resources'][0]['phone'] == '988'

    def test_medium_risk_message(self, client):
        response = client.post('/analyze', json={'message': 'I wish I was dead'})

        data = json.loads(response.data)
        assert data['isPotentialCrisis'] is True
        assert data['confidence'] == 'medium'
        assert 'crisis_ui' in data

    def test_low_tier_only_not_flagged(self, client):
        response = client.post('/analyze', json={'message': "I don't see a way out"})

        data = json.loads(response.data)
        assert data['isPotentialCrisis'] is False
        assert data['confidence'] == 'low'
        assert len(data['matchedPatterns']) == 1
        assert 'crisis_ui' not in data

    def test_exclusion_not_flagged(self, client):
        response = client.post('/analyze', json={'message': "I'm killing it at this job"})

        data = json.loads(response.data)
        assert data['isPotentialCrisis'] is False
        assert data['matchedPatterns'] == []

    def test_empty_message_is_valid(self, client):
        response = client.post('/analyze', json={'message': ''})

        assert response.status_code == 200
        assert json.loads(response.data)['isPotentialCrisis'] is False

    def test_region_selects_primary_resource(self, client):
        response = client.post(
            '/analyze',
            json={'message': 'I wish I was dead', 'region': 'UK'},
        )

        resources = json.loads(response.data)['crisis_ui']['support']['resources']
        assert resources[0]['name'] == 'Samaritans'

    def test_missing_message_returns_400(self, client):
        response = client.post('/analyze', json={'user_id': 'user_123'})
        assert response.status_code == 400

    def test_non_string_message_returns_400(self, client):
        response = client.post('/analyze', json={'message': 42})
        assert response.status_code == 400

    def test_empty_body_returns_400(self, client):
        response = client.post('/analyze', data='not json', content_type='text/plain')
        assert response.status_code == 400

    @patch('steadyline.services.risk_classifier.handler.classifier')
    def test_classifier_error_fails_safe(self, mock_classifier, client):
        """Errors must never fail open - the pipeline gets a flagged result."""
        mock_classifier.analyze.side_effect = RuntimeError("boom")

        response = client.post('/analyze', json={'message': 'hello'})

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['isPotentialCrisis'] is True
        assert data['confidence'] == 'medium'
        assert 'error' in data
        assert 'crisis_ui' in data

    def test_message_text_not_logged(self, client, caplog):
        with caplog.at_level(logging.INFO):
            client.post(
                '/analyze',
                json={'message': 'I want to kill myself', 'user_id': 'user_123'},
            )

        records = [r for r in caplog.records if r.name.startswith('steadyline')]
        assert records
        for record in records:
            rendered = " ".join(str(v) for v in vars(record).values())
            assert 'kill myself' not in rendered
            assert 'user_123' not in rendered

    def test_message_digest_not_logged(self, client, caplog):
        """Not even an unsalted digest of the message text is logged."""
        message = 'i want to kill myself'
        digest = hashlib.sha256(message.encode('utf-8')).hexdigest()

        with caplog.at_level(logging.INFO):
            client.post('/analyze', json={'message': message})

        records = [r for r in caplog.records if r.name.startswith('steadyline')]
        assert records
        for record in records:
            rendered = " ".join(str(v) for v in vars(record).values())
            assert digest not in rendered
            assert not hasattr(record, 'text_hash')


class TestResourcesEndpoint:
    """Tests for /resources endpoints."""

    def test_list_resources(self, client):
        response = client.get('/resources')

        assert response.status_code == 200
        data = json.loads(response.data)
        assert set(data) == {'US', 'UK', 'Canada', 'Australia', 'international'}

    def test_single_region(self, client):
        response = client.get('/resources/Australia')

        assert response.status_code == 200
        assert json.loads(response.data)['phone'] == '13 11 14'

    def test_unknown_region_returns_404(self, client):
        response = client.get('/resources/Atlantis')
        assert response.status_code == 404
