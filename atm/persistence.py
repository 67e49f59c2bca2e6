# -*- coding: utf-8 -*-
"""
Persistence layer (flat text file).

The account is stored as a line-oriented text record:

    line 1      PIN
    line 2      balance, e.g. 4800.0
    line 3..N   one history entry per line, oldest first

- FileStorage: raw read/write, UTF-8 only.
- StateSerializer: Account <-> text.
- AccountStore: load with fallback to the default account, save on exit.

There is no escaping; a history entry containing a newline would split into
two entries on the next load.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional

import atm.config as cfg
from .account import Account
from .errors import StateFormatError
from .money import compact_amount

log = logging.getLogger(__name__)


class FileStorage:
    """File handling for load and save. Only reads and writes whole files."""

    def read_text(self, path: str) -> str:
        """
        Raises FileNotFoundError if the file is missing and OSError
        (or UnicodeDecodeError) on other read problems.
        """
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def write_text(self, path: str, content: str) -> None:
        """
        Encodes before opening, so an unencodable string (UnicodeEncodeError)
        leaves the existing file untouched.
        """
        data = content.encode("utf-8")
        with open(path, "wb") as f:
            f.write(data)


class StateSerializer:
    """Converts Account <-> the line-oriented text record."""

    def to_text(self, account: Account) -> str:
        lines = [account.pin, compact_amount(account.get_balance())]
        lines.extend(account.history_snapshot())
        return "".join(line + "\n" for line in lines)

    def from_text(self, raw: str) -> Account:
        lines: List[str] = raw.split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        if len(lines) < 2:
            raise StateFormatError("state file is truncated")

        pin, balance_text, history = lines[0], lines[1], lines[2:]

        if len(pin) < cfg.MIN_PIN_LENGTH:
            raise StateFormatError("stored PIN is too short")

        try:
            balance = Decimal(balance_text.strip())
        except InvalidOperation as e:
            raise StateFormatError(f"balance is not a number: {balance_text!r}") from e
        if not balance.is_finite() or balance < 0 or balance > Decimal(cfg.MAX_BALANCE):
            raise StateFormatError(f"balance out of range: {balance_text!r}")

        try:
            return Account(pin, balance, history)
        except InvalidOperation as e:
            raise StateFormatError(f"balance not representable: {balance_text!r}") from e


class AccountStore:
    """
    Repository for the single account file.
    - FileStorage for file access
    - StateSerializer for mapping
    """

    def __init__(
        self,
        path: Optional[str] = None,
        storage: Optional[FileStorage] = None,
        serializer: Optional[StateSerializer] = None,
    ) -> None:
        self._path = path or cfg.STATE_FILE
        self._storage = storage or FileStorage()
        self._serializer = serializer or StateSerializer()
        self.loaded_defaults = False

    @property
    def path(self) -> str:
        return self._path

    def load(self) -> Account:
        """
        Read the saved account. Any failure (missing file, unreadable or
        malformed content) discards whatever was read and returns the
        default account; `loaded_defaults` tells the caller which happened.
        """
        try:
            raw = self._storage.read_text(self._path)
            account = self._serializer.from_text(raw)
        except FileNotFoundError:
            log.warning("no saved state at %s, using defaults", self._path)
        except (OSError, UnicodeDecodeError, StateFormatError) as e:
            log.warning("could not load state from %s (%s), using defaults", self._path, e)
        else:
            self.loaded_defaults = False
            log.info("loaded state from %s: %r", self._path, account)
            return account

        self.loaded_defaults = True
        return Account.default()

    def save(self, account: Account) -> None:
        """
        Overwrite the file with the account. Raises OSError on I/O failure
        and UnicodeEncodeError if the account holds unencodable text.
        """
        self._storage.write_text(self._path, self._serializer.to_text(account))
        log.info("saved state to %s: %r", self._path, account)
