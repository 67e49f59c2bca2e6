# -*- coding: utf-8 -*-
"""
ATM Simulator

Purpose:
- Loads the saved account (or the default one) from ./atm_state.txt,
  or from the file named by ATM_STATE_FILE.
- Runs one PIN-gated session on the console.
- Saves the account only when the user picks Exit from the menu.

Ending the session any other way (3 wrong PINs, Ctrl+C, end of input)
leaves the saved file as it was.
"""

from __future__ import annotations

import logging
import sys

from atm.logger_config import setup_logging
from atm.persistence import AccountStore
from atm.session import SessionController
from atm.view import ConsoleView

log = logging.getLogger("atm.main")


def main() -> None:
    setup_logging()
    view = ConsoleView()
    store = AccountStore()

    account = store.load()
    if store.loaded_defaults:
        view.show_message("No previous data found. Initializing default state.")

    controller = SessionController(account, store, view)
    try:
        state = controller.run()
    except (EOFError, KeyboardInterrupt):
        log.warning("session interrupted in state %s, nothing saved", controller.state.name)
        print("\nSession ended. No changes were saved.")
        sys.exit(1)

    log.info("session finished in state %s", state.name)


if __name__ == "__main__":
    main()
