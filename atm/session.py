# -*- coding: utf-8 -*-
"""
Session Controller

Drives one ATM session over an already loaded Account:

    AWAITING_PIN --match--> AUTHENTICATED --Exit--> CLOSED (state saved)
         |
         +--3rd mismatch--> LOCKED (nothing saved)

Input is read one line per prompt, so a bad token is always consumed and
the loop cannot wedge. Parse problems come back as ParseResult values;
policy rejections come back as ATMError subclasses raised by the Account
before it changes anything.
"""

from __future__ import annotations

import logging
import re
from enum import Enum, auto
from typing import Optional

import atm.config as cfg
from .account import Account
from .errors import AmountOverLimit, BalanceLimitExceeded, InsufficientFunds, InvalidAmount, PinTooShort
from .money import ParseResult, fmt_money, parse_amount
from .persistence import AccountStore
from .view import ConsoleView

log = logging.getLogger(__name__)


class SessionState(Enum):
    AWAITING_PIN = auto()
    AUTHENTICATED = auto()
    LOCKED = auto()
    CLOSED = auto()


_MENU_CHOICE_RE = re.compile(r"[+-]?\d+", re.ASCII)


def parse_menu_choice(text: str) -> ParseResult:
    """ASCII digits with an optional sign; no separators."""
    raw = (text or "").strip()
    if not _MENU_CHOICE_RE.fullmatch(raw):
        return ParseResult(False, error=f"not an integer: {raw!r}")
    return ParseResult(True, value=int(raw))


def is_affirmative(response: str) -> bool:
    """Only 'yes' in any letter case confirms; anything else declines."""
    return response.lower() == "yes"


class SessionController:
    """
    Owns the PIN gate and the menu loop.

    - account: the session's Account, mutated in place
    - store: saves the account on Exit
    - view: console input/output
    """

    def __init__(
        self,
        account: Account,
        store: AccountStore,
        view: Optional[ConsoleView] = None,
        max_attempts: int = cfg.MAX_PIN_ATTEMPTS,
    ) -> None:
        self._account = account
        self._store = store
        self._view = view or ConsoleView()
        self._max_attempts = max_attempts
        self._attempts = 0
        self._state = SessionState.AWAITING_PIN

    @property
    def state(self) -> SessionState:
        return self._state

    def run(self) -> SessionState:
        """Run the session to a terminal state (CLOSED or LOCKED) and return it."""
        if self.authenticate():
            self.menu_loop()
        return self._state

    # -------- PIN gate --------
    def authenticate(self) -> bool:
        while self._attempts < self._max_attempts:
            candidate = self._view.prompt("Enter your PIN: ")
            if self._account.validate_pin(candidate):
                self._state = SessionState.AUTHENTICATED
                log.info("session authenticated after %d failed attempt(s)", self._attempts)
                self._view.show_message("PIN Verified. Welcome!")
                return True

            self._attempts += 1
            log.warning("incorrect PIN, attempt %d of %d", self._attempts, self._max_attempts)
            self._view.show_message(
                f"Incorrect PIN. Attempts remaining: {self._max_attempts - self._attempts}"
            )

        self._state = SessionState.LOCKED
        log.warning("session locked after %d failed PIN attempts", self._attempts)
        self._view.show_message("Too many incorrect attempts. Exiting...")
        return False

    # -------- menu --------
    def menu_loop(self) -> None:
        while self._state is SessionState.AUTHENTICATED:
            self._view.render_menu()
            parsed = parse_menu_choice(self._view.prompt("Choose an option: "))
            if not parsed.ok:
                log.debug("menu input rejected: %s", parsed.error)
                self._view.show_message("Invalid input. Please enter a number.")
                continue
            self.dispatch(parsed.value)

    def dispatch(self, choice: int) -> None:
        if choice == 1:
            self.balance_inquiry()
        elif choice == 2:
            self.cash_withdrawal()
        elif choice == 3:
            self.cash_deposit()
        elif choice == 4:
            self.change_pin()
        elif choice == 5:
            self.show_history()
        elif choice == 6:
            self.exit_session()
        else:
            self._view.show_message("Invalid option. Please choose a valid menu option.")

    def balance_inquiry(self) -> None:
        balance = self._account.balance_inquiry()
        self._view.show_message(f"Your current balance is: {fmt_money(balance)}")

    def cash_withdrawal(self) -> None:
        amount = self._prompt_amount(f"Enter amount to withdraw: {cfg.CURRENCY_PREFIX}")
        if amount is None:
            return

        try:
            amount = self._account.check_withdrawal(amount)
        except InsufficientFunds:
            self._view.show_message("Insufficient balance. Transaction cancelled.")
            return
        except AmountOverLimit:
            self._report_over_limit()
            return
        except InvalidAmount:
            self._view.show_message("Invalid amount. Please enter a positive value.")
            return

        if self._confirm(f"Are you sure you want to withdraw {fmt_money(amount)}? (yes/no): "):
            self._account.withdraw(amount)
            self._view.show_message(f"Withdrawal successful. Amount withdrawn: {fmt_money(amount)}")
        else:
            self._view.show_message("Withdrawal cancelled.")

    def cash_deposit(self) -> None:
        amount = self._prompt_amount(f"Enter amount to deposit: {cfg.CURRENCY_PREFIX}")
        if amount is None:
            return

        try:
            amount = self._account.check_deposit(amount)
        except AmountOverLimit:
            self._report_over_limit()
            return
        except BalanceLimitExceeded:
            self._view.show_message("Deposit would exceed the maximum account balance. Transaction cancelled.")
            return
        except InvalidAmount:
            self._view.show_message("Invalid amount. Please enter a positive value.")
            return

        if self._confirm(f"Are you sure you want to deposit {fmt_money(amount)}? (yes/no): "):
            self._account.deposit(amount)
            self._view.show_message(f"Deposit successful. Amount deposited: {fmt_money(amount)}")
        else:
            self._view.show_message("Deposit cancelled.")

    def change_pin(self) -> None:
        current = self._view.prompt("Enter current PIN: ")
        if not self._account.validate_pin(current):
            log.warning("pin change refused: current PIN mismatch")
            self._view.show_message("Incorrect current PIN.")
            return

        proposed = self._view.prompt("Enter new PIN: ")
        try:
            self._account.check_new_pin(proposed)
        except PinTooShort:
            self._view.show_message(f"PIN must be at least {cfg.MIN_PIN_LENGTH} digits.")
            return

        if not self._confirm("Are you sure you want to change the PIN? (yes/no): "):
            self._view.show_message("PIN change cancelled.")
            return

        self._account.change_pin(current, proposed)
        self._view.show_message("PIN changed successfully.")

    def show_history(self) -> None:
        history = self._account.history_snapshot()
        if not history:
            self._view.show_message("No transactions recorded.")
            return
        self._view.show_message("\nTransaction History:")
        for entry in history:
            self._view.show_message(entry)

    def exit_session(self) -> None:
        self._view.show_message("Thank you for using the ATM. Goodbye!")
        self._state = SessionState.CLOSED
        try:
            self._store.save(self._account)
        except (OSError, UnicodeEncodeError):
            log.exception("failed to save state to %s", self._store.path)
            self._view.show_message("Error saving state to file.")

    # -------- helpers --------
    def _report_over_limit(self) -> None:
        self._view.show_message(
            f"Amount exceeds the limit of {fmt_money(cfg.MAX_TRANSACTION)} per transaction."
        )

    def _prompt_amount(self, question: str):
        parsed = parse_amount(self._view.prompt(question))
        if not parsed.ok:
            log.debug("amount input rejected: %s", parsed.error)
            self._view.show_message("Invalid input. Please enter a numeric value.")
            return None
        return parsed.value

    def _confirm(self, question: str) -> bool:
        return is_affirmative(self._view.prompt(question))
