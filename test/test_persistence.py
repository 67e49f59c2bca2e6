# -*- coding: utf-8 -*-
"""
Tests for the flat-file account store.

Every unreadable or malformed file yields the full default account; a
readable file round-trips PIN, balance and history exactly.
"""

import os
import tempfile
import unittest
from decimal import Decimal

import atm.config as cfg
from atm.account import Account
from atm.persistence import AccountStore, StateSerializer


class StoreTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "atm_state.txt")
        self.store = AccountStore(self.path)

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, content: str, newline=None):
        with open(self.path, "w", encoding="utf-8", newline=newline) as f:
            f.write(content)

    def read(self) -> str:
        with open(self.path, "r", encoding="utf-8") as f:
            return f.read()

    def assertDefault(self, acc: Account):
        self.assertTrue(self.store.loaded_defaults)
        self.assertEqual(acc.pin, "1234")
        self.assertEqual(acc.get_balance(), Decimal("5000.00"))
        self.assertEqual(list(acc.history_snapshot()), ["Initial deposit: Rs. 5000.00"])


class TestLoad(StoreTestCase):
    def test_missing_file_gives_defaults(self):
        self.assertDefault(self.store.load())

    def test_load_valid_file(self):
        self.write("4321\n4800.0\nInitial deposit: Rs. 5000.00\nCash Withdrawal: Rs. 200.0\n")
        acc = self.store.load()
        self.assertFalse(self.store.loaded_defaults)
        self.assertEqual(acc.pin, "4321")
        self.assertEqual(acc.get_balance(), Decimal("4800.00"))
        self.assertEqual(
            list(acc.history_snapshot()),
            ["Initial deposit: Rs. 5000.00", "Cash Withdrawal: Rs. 200.0"],
        )

    def test_load_without_history(self):
        self.write("4321\n10.5")
        acc = self.store.load()
        self.assertFalse(self.store.loaded_defaults)
        self.assertEqual(acc.get_balance(), Decimal("10.50"))
        self.assertEqual(len(acc.history_snapshot()), 0)

    def test_load_crlf_file(self):
        self.write("4321\r\n99.99\r\nCash Deposit: Rs. 99.99\r\n", newline="")
        acc = self.store.load()
        self.assertEqual(acc.pin, "4321")
        self.assertEqual(acc.get_balance(), Decimal("99.99"))
        self.assertEqual(list(acc.history_snapshot()), ["Cash Deposit: Rs. 99.99"])

    def test_blank_history_lines_are_kept(self):
        self.write("4321\n1.0\nfirst\n\nlast\n")
        acc = self.store.load()
        self.assertEqual(list(acc.history_snapshot()), ["first", "", "last"])

    def test_malformed_files_give_full_defaults(self):
        """No partial recovery: any parse failure discards everything."""
        bad_contents = [
            "",
            "4321\n",
            "4321\nnot-a-number\nCash Deposit: Rs. 1.0\n",
            "4321\n\n",
            "4321\nNaN\n",
            "4321\n-10.0\n",
            "12\n100.0\n",
        ]
        for content in bad_contents:
            with self.subTest(content=content):
                self.write(content)
                self.assertDefault(self.store.load())

    def test_undecodable_file_gives_defaults(self):
        with open(self.path, "wb") as f:
            f.write(b"\xff\xfe\xfa\n1.0\n")
        self.assertDefault(self.store.load())

    def test_oversized_balance_gives_defaults(self):
        """A finite balance too large for two decimals at precision 28 is malformed."""
        for balance in ("1e27", "99999999999999999999999999.99", "1000000000000000000000000"):
            with self.subTest(balance=balance):
                self.write(f"1234\n{balance}\nx\n")
                self.assertDefault(self.store.load())

    def test_largest_allowed_balance_loads(self):
        self.write(f"1234\n{cfg.MAX_BALANCE}\n")
        acc = self.store.load()
        self.assertFalse(self.store.loaded_defaults)
        self.assertEqual(acc.get_balance(), Decimal(cfg.MAX_BALANCE))


class TestSave(StoreTestCase):
    def test_save_format(self):
        acc = Account("4321", Decimal("4800.00"), ["Initial deposit: Rs. 5000.00", "PIN Change"])
        self.store.save(acc)
        self.assertEqual(self.read(), "4321\n4800.0\nInitial deposit: Rs. 5000.00\nPIN Change\n")

    def test_save_overwrites(self):
        self.write("9999\n1.0\nold entry\nanother\n")
        self.store.save(Account("4321", Decimal("2.5"), []))
        self.assertEqual(self.read(), "4321\n2.5\n")

    def test_round_trip(self):
        acc = Account.default()
        acc.withdraw(Decimal("200.00"))
        acc.deposit(Decimal("12.34"))
        acc.balance_inquiry()
        acc.change_pin("1234", "24680")
        self.store.save(acc)

        loaded = AccountStore(self.path).load()
        self.assertEqual(loaded.pin, "24680")
        self.assertEqual(loaded.get_balance(), acc.get_balance())
        self.assertEqual(list(loaded.history_snapshot()), list(acc.history_snapshot()))

    def test_save_to_missing_directory_raises_oserror(self):
        store = AccountStore(os.path.join(self._tmp.name, "missing", "atm_state.txt"))
        with self.assertRaises(OSError):
            store.save(Account.default())

    def test_unencodable_pin_leaves_file_untouched(self):
        """Encoding happens before the file is opened, so nothing is truncated."""
        self.write("4321\n10.0\nold entry\n")
        with self.assertRaises(UnicodeEncodeError):
            self.store.save(Account("12\udcff34", Decimal("10")))
        self.assertEqual(self.read(), "4321\n10.0\nold entry\n")


class TestSerializer(unittest.TestCase):
    def test_to_text_uses_compact_balance(self):
        text = StateSerializer().to_text(Account("1234", Decimal("5000"), []))
        self.assertEqual(text, "1234\n5000.0\n")


if __name__ == '__main__':
    unittest.main(verbosity=2)
