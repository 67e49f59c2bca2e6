"""
Console UI layer.

All terminal input and output of a session goes through ConsoleView, so
tests can swap in a scripted view.
"""

from __future__ import annotations

MENU_LINES = (
    "",
    "ATM Machine Menu:",
    "1. Balance Inquiry",
    "2. Cash Withdrawal",
    "3. Cash Deposit",
    "4. Change PIN",
    "5. Transaction History",
    "6. Exit",
)


class ConsoleView:
    """View for the console (stdin/stdout)."""

    def render_menu(self) -> None:
        for line in MENU_LINES:
            self.show_message(line)

    def prompt(self, question: str) -> str:
        """
        Ask for one line of input. EOFError and KeyboardInterrupt
        propagate to the entry point.
        """
        return input(question)

    def show_message(self, text: str) -> None:
        print(text)
