"""Tests for fb.ui.prompts module."""

from unittest.mock import patch

import pytest

from fb.integrations.models import Ticket
from fb.ui.prompts import (
    parse_selection,
    prompt_comment,
    prompt_input,
    select_ticket,
    selection_validator,
    validate_comment,
)
from fb.utils.errors import ExitCode, UserCancelledError

TICKETS = [Ticket(id="t1", name="Fix login"), Ticket(id="t2", name="Write docs")]


class TestPromptInput:
    """Tests for prompt_input()."""

    @patch("fb.ui.prompts.questionary.text")
    def test_strips_answer(self, mock_text):
        mock_text.return_value.ask.return_value = "  hello  "

        assert prompt_input("Say something") == "hello"
        mock_text.assert_called_once_with("Say something", default="", validate=None)

    @patch("fb.ui.prompts.questionary.text")
    def test_aborted_prompt_cancels(self, mock_text):
        mock_text.return_value.ask.return_value = None

        with pytest.raises(UserCancelledError) as exc_info:
            prompt_input("Say something")

        assert exc_info.value.exit_code == ExitCode.USER_CANCELLED

    @patch("fb.ui.prompts.questionary.text")
    def test_end_of_input_cancels(self, mock_text):
        mock_text.return_value.ask.side_effect = EOFError

        with pytest.raises(UserCancelledError):
            prompt_input("Say something")


class TestParseSelection:
    """Tests for parse_selection()."""

    @pytest.mark.parametrize(("raw", "expected"), [("1", 0), ("2", 1), (" 2 ", 1)])
    def test_valid(self, raw, expected):
        assert parse_selection(raw, 2) == expected

    @pytest.mark.parametrize("raw", ["0", "21", "-1"])
    def test_out_of_range(self, raw):
        assert parse_selection(raw, 20) is None

    @pytest.mark.parametrize("raw", ["+1", "one", "1.5", "1_0", "²", ""])
    def test_not_plain_digits(self, raw):
        assert parse_selection(raw, 20) is None


class TestValidators:
    """Tests for selection_validator() and validate_comment()."""

    def test_selection_accepts_blank_and_in_range(self):
        validate = selection_validator(2)

        assert validate("") is True
        assert validate("2") is True

    @pytest.mark.parametrize("raw", ["3", "abc", "1_0"])
    def test_selection_rejects_with_message(self, raw):
        message = selection_validator(2)(raw)

        assert message == "Invalid ticket number. Please enter a number between 1 and 2."

    def test_comment(self):
        assert validate_comment("Looks good") is True
        assert validate_comment("   ") == "Comment cannot be empty. Please enter some text."


class TestSelectTicket:
    """Tests for select_ticket()."""

    def test_returns_selected_ticket(self, answers):
        script = answers("2")

        assert select_ticket(TICKETS, "checkout") == TICKETS[1]
        assert script.messages == ["Enter ticket number to checkout"]

    def test_reprompts_on_invalid_answer(self, answers):
        script = answers("abc", "7", "1")

        assert select_ticket(TICKETS, "comment on") == TICKETS[0]
        assert len(script.rejections) == 2
        assert "between 1 and 2" in script.rejections[-1]

    def test_blank_cancels(self, answers):
        answers("")

        with pytest.raises(UserCancelledError):
            select_ticket(TICKETS, "checkout")

    def test_abort_cancels(self, answers):
        answers()

        with pytest.raises(UserCancelledError):
            select_ticket(TICKETS, "checkout")


class TestPromptComment:
    """Tests for prompt_comment()."""

    def test_reprompts_until_text(self, answers):
        script = answers("", "   ", "Looks good")

        assert prompt_comment() == "Looks good"
        assert len(script.rejections) == 2

    def test_abort_cancels(self, answers):
        answers()

        with pytest.raises(UserCancelledError):
            prompt_comment()
