"""
Central Configuration File (SSOT).
"""
import os

# --- Business Rules ---
CURRENCY = "INR"
CURRENCY_PREFIX = "Rs. "
MIN_TRANSACTION = "0.01"
MAX_TRANSACTION = "1000000.00"
# Keeps balance + MAX_TRANSACTION quantizable at Decimal precision 28.
MAX_BALANCE = "999999999999999999999999.99"
MIN_PIN_LENGTH: int = 4
MAX_PIN_ATTEMPTS: int = 3

# --- Default account (used when no saved state can be read) ---
DEFAULT_PIN = "1234"
DEFAULT_BALANCE = "5000.00"
INITIAL_DEPOSIT_RECORD = f"Initial deposit: {CURRENCY_PREFIX}5000.00"

# --- Persistence ---
STATE_FILE = os.environ.get("ATM_STATE_FILE", "atm_state.txt")

# --- Logging ---
LOG_DIR = os.environ.get("ATM_LOG_DIR", os.path.join(os.getcwd(), "logs"))
LOG_FILE = os.path.join(LOG_DIR, "atm.log")
LOG_LEVEL = os.environ.get("ATM_LOG_LEVEL", "INFO").upper()
