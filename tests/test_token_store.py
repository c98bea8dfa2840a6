"""Tests for the on-disk token files."""

import json
import sys
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from ubi_auth.auth.token_store import TokenStore
from ubi_auth.models import AccountVariant, Credential


def _credential(**overrides) -> Credential:
    data = {
        "token": "ticket-abc",
        "session_id": "session-123",
        "expiration": datetime(2026, 1, 1, 14, 30, 15, 123456, tzinfo=timezone.utc),
        "obtained_at": datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc),
        "profile_id": "profile-1",
        "name_on_platform": "player",
    }
    data.update(overrides)
    return Credential(**data)


class TestTokenStore(unittest.TestCase):
    def test_round_trip(self):
        """A saved credential loads back with identical token, session id and expiration."""
        with tempfile.TemporaryDirectory() as tmp:
            store = TokenStore(tmp)
            credential = _credential()
            self.assertTrue(store.save(AccountVariant.V2, credential))

            loaded = TokenStore(tmp).load(AccountVariant.V2)
            self.assertIsNotNone(loaded)
            self.assertEqual(loaded.token, credential.token)
            self.assertEqual(loaded.session_id, credential.session_id)
            self.assertEqual(loaded.expiration, credential.expiration)
            self.assertEqual(loaded, credential)

    def test_round_trip_without_expiration(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = TokenStore(tmp)
            credential = _credential(expiration=None)
            store.save(AccountVariant.V3, credential)
            loaded = store.load(AccountVariant.V3)
            self.assertIsNone(loaded.expiration)
            self.assertEqual(loaded.obtained_at, credential.obtained_at)

    def test_file_per_variant_uses_api_field_names(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = TokenStore(tmp)
            store.save(AccountVariant.V2, _credential(token="v2-ticket"))
            store.save(AccountVariant.V3, _credential(token="v3-ticket"))

            self.assertEqual(store.path_for(AccountVariant.V2).name, "auth_token_v2.json")
            raw = json.loads((Path(tmp) / "auth_token_v3.json").read_text(encoding="utf-8"))
            self.assertEqual(raw["ticket"], "v3-ticket")
            self.assertEqual(raw["sessionId"], "session-123")
            self.assertEqual(store.load(AccountVariant.V2).token, "v2-ticket")

    def test_missing_file_loads_none(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(TokenStore(tmp).load(AccountVariant.V2))

    def test_corrupt_file_loads_none(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = TokenStore(tmp)
            store.path_for(AccountVariant.V2).write_text("{not json", encoding="utf-8")
            self.assertIsNone(store.load(AccountVariant.V2))

            store.path_for(AccountVariant.V3).write_text(json.dumps({"ticket": "t"}), encoding="utf-8")
            self.assertIsNone(store.load(AccountVariant.V3))

    def test_file_without_obtained_at_loads_none(self):
        """A file that cannot be aged is never reused."""
        with tempfile.TemporaryDirectory() as tmp:
            store = TokenStore(tmp)
            store.path_for(AccountVariant.V2).write_text(
                json.dumps({"ticket": "ancient", "sessionId": "session-old"}), encoding="utf-8"
            )
            self.assertIsNone(store.load(AccountVariant.V2))

    def test_save_failure_returns_false(self):
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "blocker"
            blocker.write_text("a file, not a directory", encoding="utf-8")
            store = TokenStore(blocker / "tokens")
            self.assertFalse(store.save(AccountVariant.V2, _credential()))

    def test_save_overwrites_and_clear_removes(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = TokenStore(tmp)
            store.save(AccountVariant.V2, _credential(token="old"))
            store.save(
                AccountVariant.V2,
                _credential(token="new", expiration=datetime(2026, 1, 2, tzinfo=timezone.utc) + timedelta(hours=1)),
            )
            self.assertEqual(store.load(AccountVariant.V2).token, "new")

            self.assertTrue(store.clear(AccountVariant.V2))
            self.assertIsNone(store.load(AccountVariant.V2))
            self.assertFalse(store.clear(AccountVariant.V2))


if __name__ == "__main__":
    unittest.main()
