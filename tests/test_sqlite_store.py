import os
import tempfile
import unittest

from auth.exceptions import AccountExists, NotAuthorized, StorageFailure
from auth.services.auth_service import AuthService
from auth.stores.sqlite_store import SQLiteCredentialStore
from tests.helpers import NOW, CountingRandomSource, FixedClock, seed_account


class TestSQLiteCredentialStore(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.store = SQLiteCredentialStore(os.path.join(self._tmp.name, "auth.db"))
        self.alice = await seed_account(self.store, "alice", "secret1", "s1", refresh_token="rt1")

    async def asyncTearDown(self):
        self._tmp.cleanup()

    async def test_account_lookups(self):
        self.assertEqual(self.alice.username, "alice")
        self.assertEqual(await self.store.find_account_by_refresh_token("rt1"), self.alice)
        self.assertIsNone(await self.store.find_account_by_refresh_token("nope"))
        self.assertIsNone(await self.store.find_account_by_refresh_token(""))
        self.assertIsNone(await self.store.find_account_by_username("bob"))

    async def test_session_rows(self):
        await self.store.insert_session(self.alice.id, "a", NOW - 1)
        await self.store.insert_session(self.alice.id, "b", NOW + 1)
        await self.store.delete_session("a")

        sessions = await self.store.find_sessions(self.alice.id)
        self.assertEqual([(s.session_token, s.expire_at) for s in sessions], [("b", NOW + 1)])

    async def test_conditional_refresh_token_update(self):
        self.assertFalse(await self.store.update_refresh_token(self.alice.id, "rt2", expected_token="stale"))
        self.assertTrue(await self.store.update_refresh_token(self.alice.id, "rt2", expected_token="rt1"))
        self.assertTrue(await self.store.update_refresh_token(self.alice.id, "rt3"))
        account = await self.store.find_account_by_username("alice")
        self.assertEqual(account.refresh_token, "rt3")

    async def test_delete_expired_sessions(self):
        await self.store.insert_session(self.alice.id, "old", NOW - 1)
        await self.store.insert_session(self.alice.id, "edge", NOW)
        self.assertEqual(await self.store.delete_expired_sessions(NOW), 1)
        self.assertEqual([s.session_token for s in await self.store.find_sessions(self.alice.id)], ["edge"])

    async def test_duplicate_username(self):
        with self.assertRaises(AccountExists):
            await self.store.create_account("alice", "s", "h")

    async def test_transaction_rolls_back_on_error(self):
        with self.assertRaises(RuntimeError):
            async with self.store.transaction() as tx:
                await tx.insert_session(self.alice.id, "pending", NOW + 10)
                await tx.update_refresh_token(self.alice.id, "rt2")
                raise RuntimeError("boom")

        self.assertEqual(await self.store.find_sessions(self.alice.id), [])
        account = await self.store.find_account_by_username("alice")
        self.assertEqual(account.refresh_token, "rt1")

    async def test_login_and_refresh_scenario(self):
        await self.store.insert_session(self.alice.id, "expired", NOW - 5)
        await self.store.insert_session(self.alice.id, "live", NOW + 5)
        service = AuthService(self.store, CountingRandomSource(), FixedClock())

        pair = await service.login("alice", "secret1", False)
        tokens = {s.session_token for s in await self.store.find_sessions(self.alice.id)}
        self.assertEqual(tokens, {"live", pair.session})

        rotated = await service.refresh(pair.refresh_token)
        with self.assertRaises(NotAuthorized):
            await service.refresh(pair.refresh_token)
        await service.refresh(rotated.refresh_token)


class TestSQLiteStorageFailure(unittest.TestCase):
    def test_unopenable_database_raises_storage_failure(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(StorageFailure):
                SQLiteCredentialStore(os.path.join(tmp, "missing", "auth.db"))


if __name__ == "__main__":
    unittest.main()
