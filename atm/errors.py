# -*- coding: utf-8 -*-
"""
Custom Exception Classes for the ATM Domain.

Purpose:
- Provide clear, domain-specific errors for account operations.
- Let the session controller turn policy rejections (bad amount, short PIN,
  wrong PIN) into user-facing messages instead of catching generic Exception.
- Every error is raised before any state is touched, so a caught error
  always means the account is unchanged.
"""


class ATMError(Exception):
    """Base class for policy rejections raised by the account."""
    pass


class InsufficientFunds(ATMError):
    """
    Raised when a withdrawal cannot be completed because
    the account balance is insufficient.
    """
    pass


class InvalidAmount(ATMError):
    """
    Raised when a transaction amount is zero or negative
    (after normalisation to two decimal places).
    """
    pass


class AmountOverLimit(InvalidAmount):
    """Raised when a single transaction exceeds MAX_TRANSACTION."""
    pass


class BalanceLimitExceeded(InvalidAmount):
    """Raised when a deposit would push the balance past MAX_BALANCE."""
    pass


class IncorrectPin(ATMError):
    """Raised when the current PIN given for a PIN change does not match."""
    pass


class PinTooShort(ATMError):
    """Raised when a proposed PIN is shorter than MIN_PIN_LENGTH."""
    pass


class StateFormatError(ValueError):
    """Raised when a saved state file cannot be parsed."""
    pass
