"""Tests for fb.utils.errors and fb.integrations.exceptions modules."""

import pytest

from fb.integrations.exceptions import (
    MAX_ERROR_BODY_LENGTH,
    ApiStatusError,
    EndpointDiscoveryError,
    FlowBoardsApiError,
    NameResolutionError,
    ResponseParseError,
    TransportError,
    truncate_body,
)
from fb.utils.errors import (
    BinContextMissingError,
    CheckoutConflictError,
    ConfigError,
    ExitCode,
    FbError,
    NoCheckoutError,
    StateError,
    TicketNotAssignedError,
    TicketNotFoundError,
    UserCancelledError,
)


class TestExitCode:
    """Tests for ExitCode enum."""

    def test_values(self):
        assert ExitCode.SUCCESS == 0
        assert ExitCode.GENERAL_ERROR == 1
        assert ExitCode.CONFIG_ERROR == 2
        assert ExitCode.API_ERROR == 3
        assert ExitCode.USER_CANCELLED == 4
        assert ExitCode.CHECKOUT_CONFLICT == 5

    def test_is_int(self):
        assert isinstance(ExitCode.API_ERROR, int)


class TestFbError:
    """Tests for FbError exit code handling."""

    def test_default_exit_code(self):
        assert FbError("boom").exit_code == ExitCode.GENERAL_ERROR

    def test_custom_exit_code(self):
        assert FbError("boom", ExitCode.API_ERROR).exit_code == ExitCode.API_ERROR

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (ConfigError("bad"), ExitCode.CONFIG_ERROR),
            (UserCancelledError("cancelled"), ExitCode.USER_CANCELLED),
            (StateError("disk full"), ExitCode.GENERAL_ERROR),
            (CheckoutConflictError("t1", "Fix login"), ExitCode.CHECKOUT_CONFLICT),
            (TicketNotFoundError("t1"), ExitCode.GENERAL_ERROR),
            (TicketNotAssignedError("t1"), ExitCode.GENERAL_ERROR),
            (NoCheckoutError(), ExitCode.GENERAL_ERROR),
            (BinContextMissingError(), ExitCode.GENERAL_ERROR),
            (NameResolutionError("bin", "x y"), ExitCode.GENERAL_ERROR),
            (TransportError("failed to get bins: request timed out"), ExitCode.API_ERROR),
            (EndpointDiscoveryError("no prefix"), ExitCode.API_ERROR),
            (ResponseParseError("bad json"), ExitCode.API_ERROR),
            (ApiStatusError("failed to get user", 401, "unauthorized"), ExitCode.API_ERROR),
        ],
    )
    def test_category_exit_codes(self, error, code):
        assert isinstance(error, FbError)
        assert error.exit_code == code

    def test_api_errors_share_base(self):
        for error_class in (TransportError, EndpointDiscoveryError, ResponseParseError):
            assert issubclass(error_class, FlowBoardsApiError)
        assert issubclass(ApiStatusError, FlowBoardsApiError)


class TestMessages:
    """Tests for user-facing error messages."""

    def test_conflict_with_force_remedy(self):
        error = CheckoutConflictError("t1", "Fix login")

        assert str(error) == (
            "ticket already checked out: Fix login\nUse 'fb clear' or 'fb checkout --force'"
        )
        assert error.ticket_id == "t1"

    def test_conflict_without_force_remedy(self):
        error = CheckoutConflictError("t1", "Fix login", allow_force=False)

        assert str(error).endswith("Use 'fb clear' first")

    def test_missing_bin_context(self):
        assert str(BinContextMissingError()) == (
            "no bin context found. Use 'fb checkout --bin \"Bin Name\"' first"
        )

    def test_no_checkout(self):
        assert str(NoCheckoutError()) == "no ticket checked out. Use 'fb checkout' first"

    def test_status_error_message(self):
        error = ApiStatusError("failed to get bins", 500, "  oops  ")

        assert str(error) == "failed to get bins: API request failed with status 500: oops"

    def test_original_error_kept(self):
        cause = ValueError("bad")
        error = ResponseParseError("failed to parse", original_error=cause)

        assert error.original_error is cause


class TestTruncateBody:
    """Tests for truncate_body()."""

    def test_short_body_unchanged(self):
        assert truncate_body("short") == "short"

    def test_exact_limit_unchanged(self):
        body = "x" * MAX_ERROR_BODY_LENGTH

        assert truncate_body(body) == body

    def test_long_body_truncated(self):
        assert truncate_body("y" * 600) == "y" * 500 + "..."
