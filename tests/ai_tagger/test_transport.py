# tests/ai_tagger/test_transport.py
"""
Tests for the requests-based transport.
"""

import pytest
import requests
from unittest.mock import MagicMock

from ai_tagger.adapters.transport import DEFAULT_TIMEOUT, RequestsTransport
from ai_tagger.errors import NetworkError, ResponseFormatError


def mock_response(status=200, json_data=None, reason='OK'):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.reason = reason
    if json_data is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = json_data
    return response


class TestRequestsTransport:
    """Test HTTP error mapping."""

    def test_posts_json(self):
        session = MagicMock()
        session.post.return_value = mock_response(json_data={'ok': True})
        transport = RequestsTransport(session=session)

        result = transport.post('https://api.example.com', {'X-Test': '1'}, {'a': 1})

        assert result == {'ok': True}
        session.post.assert_called_once_with(
            'https://api.example.com',
            headers={'X-Test': '1'},
            json={'a': 1},
            timeout=DEFAULT_TIMEOUT,
        )

    def test_timeout_override(self):
        session = MagicMock()
        session.post.return_value = mock_response(json_data={})
        RequestsTransport(session=session, timeout=5).post('u', {}, {}, timeout=2)

        assert session.post.call_args.kwargs['timeout'] == 2

    def test_connection_error(self):
        session = MagicMock()
        session.post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(NetworkError, match="refused"):
            RequestsTransport(session=session).post('u', {}, {})

    def test_timeout(self):
        session = MagicMock()
        session.post.side_effect = requests.exceptions.Timeout()

        with pytest.raises(NetworkError, match="timed out"):
            RequestsTransport(session=session, timeout=1).post('u', {}, {})

    def test_http_error_keeps_payload(self):
        """Test non-2xx responses keep status and error body."""
        session = MagicMock()
        session.post.return_value = mock_response(
            status=401, reason='Unauthorized', json_data={'error': {'message': 'Invalid API key'}},
        )

        with pytest.raises(NetworkError) as exc_info:
            RequestsTransport(session=session).post('u', {}, {})

        assert exc_info.value.status_code == 401
        assert exc_info.value.payload == {'error': {'message': 'Invalid API key'}}
        assert '401 Unauthorized' in str(exc_info.value)

    def test_http_error_without_json(self):
        session = MagicMock()
        session.post.return_value = mock_response(status=502, reason='Bad Gateway')

        with pytest.raises(NetworkError) as exc_info:
            RequestsTransport(session=session).post('u', {}, {})

        assert exc_info.value.payload is None

    def test_non_json_success(self):
        session = MagicMock()
        session.post.return_value = mock_response(status=200)

        with pytest.raises(ResponseFormatError):
            RequestsTransport(session=session).post('u', {}, {})
