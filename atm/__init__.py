# -*- coding: utf-8 -*-
"""
Single-user ATM simulator: PIN gate, menu loop and a flat-file account.

This __init__ file sets the global `Decimal` context used by every money
calculation in the package: balances and amounts are quantized to cents,
never stored as binary floats.
"""
from decimal import getcontext, ROUND_HALF_EVEN

# Banker's rounding, as used for all quantization to 0.01.
getcontext().prec = 28
getcontext().rounding = ROUND_HALF_EVEN
