"""UI components for fb.

This package contains:
- prompts: Questionary-based prompts for ticket selection and comment entry
"""

from fb.ui.prompts import (
    parse_selection,
    prompt_comment,
    prompt_input,
    select_ticket,
    selection_validator,
    validate_comment,
)

__all__ = [
    "prompt_input",
    "parse_selection",
    "selection_validator",
    "validate_comment",
    "select_ticket",
    "prompt_comment",
]
