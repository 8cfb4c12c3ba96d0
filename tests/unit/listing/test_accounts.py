"""Tests for owner/group resolution and the startup account snapshot."""

from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest import mock

from lsview.listing import accounts


class ResolveOwnerTests(unittest.TestCase):
    def test_live_lookup_wins(self) -> None:
        table = accounts.Accounts(users={1000: "cached"})
        with mock.patch("lsview.listing.accounts.lookup_user_name", return_value="live"):
            self.assertEqual(accounts.resolve_owner(1000, table), "live")

    def test_falls_back_to_cached_table(self) -> None:
        table = accounts.Accounts(users={1000: "cached"})
        with mock.patch("lsview.listing.accounts.lookup_user_name", return_value=None):
            self.assertEqual(accounts.resolve_owner(1000, table), "cached")

    def test_falls_back_to_numeric_uid(self) -> None:
        with mock.patch("lsview.listing.accounts.lookup_user_name", return_value=None):
            self.assertEqual(accounts.resolve_owner(4242, accounts.Accounts()), "4242")

    def test_live_lookup_handles_missing_database(self) -> None:
        with mock.patch("lsview.listing.accounts.pwd", None):
            self.assertIsNone(accounts.lookup_user_name(0))

    def test_live_lookup_handles_unknown_uid(self) -> None:
        fake_pwd = mock.Mock()
        fake_pwd.getpwuid.side_effect = KeyError("getpwuid(): uid not found")
        with mock.patch("lsview.listing.accounts.pwd", fake_pwd):
            self.assertIsNone(accounts.lookup_user_name(4242))


class ResolveGroupTests(unittest.TestCase):
    def test_uses_table_only(self) -> None:
        table = accounts.Accounts(groups={20: "staff"})
        self.assertEqual(accounts.resolve_group(20, table), "staff")
        self.assertEqual(accounts.resolve_group(21, table), "21")


class LoadAccountsTests(unittest.TestCase):
    def test_snapshots_platform_databases(self) -> None:
        fake_pwd = mock.Mock()
        fake_pwd.getpwall.return_value = [
            SimpleNamespace(pw_uid=0, pw_name="root"),
            SimpleNamespace(pw_uid=0, pw_name="toor"),
            SimpleNamespace(pw_uid=501, pw_name="alice"),
        ]
        fake_grp = mock.Mock()
        fake_grp.getgrall.return_value = [SimpleNamespace(gr_gid=20, gr_name="staff")]

        with mock.patch("lsview.listing.accounts.pwd", fake_pwd), mock.patch("lsview.listing.accounts.grp", fake_grp):
            loaded = accounts.load_accounts()

        self.assertEqual(dict(loaded.users), {0: "root", 501: "alice"})
        self.assertEqual(dict(loaded.groups), {20: "staff"})

    def test_missing_databases_yield_empty_tables(self) -> None:
        with mock.patch("lsview.listing.accounts.pwd", None), mock.patch("lsview.listing.accounts.grp", None):
            loaded = accounts.load_accounts()

        self.assertEqual(dict(loaded.users), {})
        self.assertEqual(dict(loaded.groups), {})

    def test_tables_are_read_only(self) -> None:
        source = {1: "daemon"}
        table = accounts.Accounts(users=source)
        source[2] = "bin"

        self.assertNotIn(2, table.users)
        with self.assertRaises(TypeError):
            table.users[3] = "sys"  # type: ignore[index]


if __name__ == "__main__":
    unittest.main()
