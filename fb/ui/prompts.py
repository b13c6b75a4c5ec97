"""Questionary-based user input prompts for fb.

A prompt that the user aborts (Ctrl-C or end of input) raises
UserCancelledError. Validators re-prompt inline, so callers only ever see
accepted answers.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import questionary

from fb.integrations.models import Ticket
from fb.utils.errors import UserCancelledError

Validator = Callable[[str], bool | str]


def prompt_input(message: str, default: str = "", validate: Validator | None = None) -> str:
    """Prompt for one line of text.

    Args:
        message: Prompt message
        default: Pre-filled answer
        validate: Returns True to accept, or an error message to re-prompt

    Returns:
        The answer, stripped of surrounding whitespace

    Raises:
        UserCancelledError: If the prompt is aborted
    """
    try:
        result = questionary.text(message, default=default, validate=validate).ask()
    except EOFError:
        result = None
    if result is None:
        raise UserCancelledError("operation cancelled")
    return result.strip()


def parse_selection(raw: str, count: int) -> int | None:
    """Return a zero-based index for a 1-based selection, or None if invalid.

    Only plain decimal digits are accepted.
    """
    raw = raw.strip()
    if not raw.isdecimal():
        return None
    number = int(raw)
    if 1 <= number <= count:
        return number - 1
    return None


def selection_validator(count: int) -> Validator:
    """Accept a blank answer or a ticket number between 1 and count."""

    def validate(text: str) -> bool | str:
        if not text.strip() or parse_selection(text, count) is not None:
            return True
        return f"Invalid ticket number. Please enter a number between 1 and {count}."

    return validate


def validate_comment(text: str) -> bool | str:
    if text.strip():
        return True
    return "Comment cannot be empty. Please enter some text."


def select_ticket(tickets: Sequence[Ticket], action: str) -> Ticket:
    """Ask the user to pick a ticket from a numbered list.

    The list itself must already be displayed. A blank answer cancels.

    Args:
        tickets: Tickets in display order
        action: Verb phrase for the prompt, e.g. "checkout"

    Raises:
        UserCancelledError: On a blank answer or an aborted prompt
    """
    raw = prompt_input(
        f"Enter ticket number to {action}",
        validate=selection_validator(len(tickets)),
    )
    index = parse_selection(raw, len(tickets))
    if index is None:
        raise UserCancelledError("cancelled")
    return tickets[index]


def prompt_comment() -> str:
    """Ask for comment text; empty answers are rejected inline.

    Raises:
        UserCancelledError: If the prompt is aborted
    """
    return prompt_input("Enter comment", validate=validate_comment)


__all__ = [
    "prompt_input",
    "parse_selection",
    "selection_validator",
    "validate_comment",
    "select_ticket",
    "prompt_comment",
]
