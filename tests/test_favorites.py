"""
Tests for the favorites client using a mocked requests session.
"""

from unittest.mock import Mock

import pytest
import requests

from catalog.exceptions import FavoritesAuthError, FavoritesError
from catalog.favorites import FavoritesClient


def make_response(body=None, status_code=200, content=b"{}"):
    response = Mock()
    response.status_code = status_code
    response.content = content
    if body is None:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    return FavoritesClient("token-123", base_url="https://api.example.com/api", timeout=5, session=session)


class TestAuthentication:
    """Test token handling."""

    def test_is_authenticated(self, client, session):
        assert client.is_authenticated is True
        assert FavoritesClient(None, base_url="https://x", session=session).is_authenticated is False

    def test_missing_token_raises_before_request(self, session):
        client = FavoritesClient(None, base_url="https://api.example.com/api", session=session)

        with pytest.raises(FavoritesAuthError, match="log in"):
            client.add("abc")
        session.request.assert_not_called()

    def test_sends_bearer_header(self, client, session):
        session.request.return_value = make_response({"success": True})

        client.add("abc")

        session.request.assert_called_once_with(
            "POST", "https://api.example.com/api/favorites/abc",
            headers={"Authorization": "Bearer token-123"}, timeout=5,
        )

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_rejected_token(self, client, session, status_code):
        session.request.return_value = make_response({"message": "nope"}, status_code=status_code)

        with pytest.raises(FavoritesAuthError) as exc_info:
            client.is_favorited("abc")
        assert exc_info.value.status_code == status_code


class TestFavoriteCalls:
    """Test favorites endpoint calls."""

    def test_is_favorited(self, client, session):
        session.request.return_value = make_response({"success": True, "data": {"isFavorited": True}})
        assert client.is_favorited("abc") is True

        session.request.return_value = make_response({"success": True, "data": {"isFavorited": False}})
        assert client.is_favorited("abc") is False

    def test_is_favorited_unexpected_body(self, client, session):
        session.request.return_value = make_response({"success": False})
        assert client.is_favorited("abc") is False

    def test_toggle_adds_when_not_favorited(self, client, session):
        session.request.return_value = make_response(status_code=204, content=b"")

        assert client.toggle("abc", currently_favorited=False) is True
        assert session.request.call_args[0][0] == "POST"

    def test_toggle_removes_when_favorited(self, client, session):
        session.request.return_value = make_response({"success": True})

        assert client.toggle("abc", currently_favorited=True) is False
        assert session.request.call_args[0][0] == "DELETE"

    def test_server_error_message_is_used(self, client, session):
        session.request.return_value = make_response({"message": "Recipe already favorited"}, status_code=400)

        with pytest.raises(FavoritesError, match="already favorited") as exc_info:
            client.add("abc")
        assert exc_info.value.status_code == 400

    def test_server_error_without_message(self, client, session):
        session.request.return_value = make_response(None, status_code=502, content=b"Bad Gateway")

        with pytest.raises(FavoritesError, match="502"):
            client.remove("abc")

    def test_transport_error(self, client, session):
        session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(FavoritesError, match="Favorites request failed"):
            client.add("abc")

    def test_list_favorites_skips_unusable_documents(self, client, session):
        session.request.return_value = make_response({"success": True, "data": [
            {"_id": "a", "title": "Apple Pie"},
            {"title": "No id"},
            "junk",
        ]})

        recipes = client.list_favorites()

        assert [r.record_id for r in recipes] == ["a"]
        session.request.assert_called_once_with(
            "GET", "https://api.example.com/api/favorites",
            headers={"Authorization": "Bearer token-123"}, timeout=5,
        )

    def test_list_favorites_unexpected_body(self, client, session):
        session.request.return_value = make_response({"success": True, "data": None})
        assert client.list_favorites() == []
