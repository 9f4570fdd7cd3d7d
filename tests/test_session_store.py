"""Tests for the device-local session stores."""

from unittest.mock import MagicMock
from uuid import uuid4

from fair_verifier.models.dc_models import GameTypeModel, SessionMarkerModel
from fair_verifier.session_store import (
    CookieSessionStore,
    InMemorySessionStore,
    credential_id_key,
    parse_marker,
    username_key,
)


class TestKeys:
    def test_namespaced_by_game_type(self):
        assert credential_id_key(GameTypeModel.mines) == "mines_credential_id"
        assert username_key(GameTypeModel.color_prediction) == "color_prediction_username"


class TestParseMarker:
    def test_both_halves_required(self):
        credential_id = str(uuid4())
        assert parse_marker(credential_id, None) is None
        assert parse_marker(None, "alice") is None
        assert parse_marker(credential_id, "alice").username == "alice"

    def test_unreadable_id_counts_as_absent(self):
        assert parse_marker("not-a-uuid", "alice") is None


class TestInMemorySessionStore:
    def test_games_are_independent(self):
        store = InMemorySessionStore()
        mines = SessionMarkerModel(credential_id=uuid4(), username="a")
        aviator = SessionMarkerModel(credential_id=uuid4(), username="b")
        store.set(GameTypeModel.mines, mines)
        store.set(GameTypeModel.aviator, aviator)

        store.clear(GameTypeModel.mines)

        assert store.get(GameTypeModel.mines) is None
        assert store.get(GameTypeModel.aviator) == aviator

    def test_clear_missing_is_noop(self):
        store = InMemorySessionStore()
        store.clear(GameTypeModel.mines)
        assert store.get(GameTypeModel.mines) is None


class TestCookieSessionStore:
    def make_store(self, cookies):
        request = MagicMock()
        request.cookies = cookies
        response = MagicMock()
        return CookieSessionStore(request, response), response

    def test_reads_request_cookies(self):
        credential_id = uuid4()
        store, _ = self.make_store(
            {"aviator_credential_id": str(credential_id), "aviator_username": "alice"}
        )
        marker = store.get(GameTypeModel.aviator)
        assert marker.credential_id == credential_id
        assert store.get(GameTypeModel.mines) is None

    def test_set_writes_response_cookies(self):
        store, response = self.make_store({})
        marker = SessionMarkerModel(credential_id=uuid4(), username="alice")
        store.set(GameTypeModel.mines, marker)

        keys = [call.args[0] for call in response.set_cookie.call_args_list]
        assert keys == ["mines_credential_id", "mines_username"]
        assert store.get(GameTypeModel.mines) == marker

    def test_clear_deletes_cookies_and_hides_request_values(self):
        store, response = self.make_store(
            {"mines_credential_id": str(uuid4()), "mines_username": "alice"}
        )
        store.clear(GameTypeModel.mines)

        deleted = [call.args[0] for call in response.delete_cookie.call_args_list]
        assert deleted == ["mines_credential_id", "mines_username"]
        assert store.get(GameTypeModel.mines) is None

    def test_non_latin1_username_is_percent_encoded(self):
        store, response = self.make_store({})
        marker = SessionMarkerModel(credential_id=uuid4(), username="玩家")
        store.set(GameTypeModel.mines, marker)

        written = dict(call.args[:2] for call in response.set_cookie.call_args_list)
        assert written["mines_username"] == "%E7%8E%A9%E5%AE%B6"
        written["mines_username"].encode("latin-1")

        next_visit, _ = self.make_store(written)
        assert next_visit.get(GameTypeModel.mines) == marker
