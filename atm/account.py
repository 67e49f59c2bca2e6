# -*- coding: utf-8 -*-
from __future__ import annotations
"""
Account - the in-memory state of the single ATM user.

- One instance per session, owned by whoever loaded it and passed into the
  session controller; there is no module-level account.
- Every mutating operation validates first and only then touches state,
  so balance/PIN and history always move together.
- Amounts are normalized via money.py utilities.
"""

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import Iterable, Iterator, List, Optional

import atm.config as cfg
from .errors import BalanceLimitExceeded, IncorrectPin, InsufficientFunds, PinTooShort
from .money import as_money, compact_amount, validate_amount_positive_in_limits

log = logging.getLogger(__name__)

PIN_CHANGE_RECORD = "PIN Change"


class HistoryView(Sequence):
    """
    Read-only window onto an account's transaction history.

    Iteration reads the live list on demand and can be restarted any
    number of times; there are no mutating methods.
    """

    def __init__(self, entries: List[str]):
        self._entries = entries

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"HistoryView({len(self._entries)} entries)"


class Account:
    def __init__(self, pin: str, balance, history: Optional[Iterable[str]] = None):
        self._pin = pin
        self._balance = as_money(balance)
        self._history: List[str] = list(history or [])

    @classmethod
    def default(cls) -> "Account":
        return cls(cfg.DEFAULT_PIN, Decimal(cfg.DEFAULT_BALANCE), [cfg.INITIAL_DEPOSIT_RECORD])

    def __repr__(self) -> str:
        return f"Account(balance={self._balance}, history={len(self._history)} entries)"

    @property
    def pin(self) -> str:
        return self._pin

    def get_balance(self) -> Decimal:
        return self._balance

    def validate_pin(self, candidate: str) -> bool:
        return candidate == self._pin

    def history_snapshot(self) -> HistoryView:
        return HistoryView(self._history)

    # -------- balance inquiry --------
    def balance_inquiry(self) -> Decimal:
        """Return the balance; the inquiry itself is recorded in history."""
        self._history.append(f"Balance Inquiry: {cfg.CURRENCY_PREFIX}{compact_amount(self._balance)}")
        return self._balance

    # -------- withdrawal --------
    def check_withdrawal(self, amount) -> Decimal:
        """
        Policy check without mutation. Insufficient funds is reported
        ahead of a non-positive or over-limit amount.
        """
        amt = as_money(amount)
        if amt > self._balance:
            raise InsufficientFunds("Insufficient funds")
        return validate_amount_positive_in_limits(amt)

    def withdraw(self, amount) -> Decimal:
        amt = self.check_withdrawal(amount)
        self._balance = as_money(self._balance - amt)
        self._history.append(f"Cash Withdrawal: {cfg.CURRENCY_PREFIX}{compact_amount(amt)}")
        log.info("withdraw amount=%s new_balance=%s", amt, self._balance)
        return self._balance

    # -------- deposit --------
    def check_deposit(self, amount) -> Decimal:
        amt = validate_amount_positive_in_limits(amount)
        if self._balance + amt > Decimal(cfg.MAX_BALANCE):
            raise BalanceLimitExceeded(f"Balance must stay <= {cfg.MAX_BALANCE}")
        return amt

    def deposit(self, amount) -> Decimal:
        amt = self.check_deposit(amount)
        self._balance = as_money(self._balance + amt)
        self._history.append(f"Cash Deposit: {cfg.CURRENCY_PREFIX}{compact_amount(amt)}")
        log.info("deposit amount=%s new_balance=%s", amt, self._balance)
        return self._balance

    # -------- PIN change --------
    def check_new_pin(self, proposed: str) -> str:
        if len(proposed) < cfg.MIN_PIN_LENGTH:
            raise PinTooShort(f"PIN must be at least {cfg.MIN_PIN_LENGTH} characters")
        return proposed

    def change_pin(self, current: str, proposed: str) -> None:
        """The history marker never contains the new PIN."""
        if not self.validate_pin(current):
            raise IncorrectPin("Current PIN does not match")
        self._pin = self.check_new_pin(proposed)
        self._history.append(PIN_CHANGE_RECORD)
        log.info("pin changed")
