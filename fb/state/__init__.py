"""Local checkout state for fb."""

from fb.state.store import (
    BinContext,
    CheckedOut,
    CheckoutRecord,
    CheckoutState,
    Empty,
    StateStore,
)

__all__ = [
    "BinContext",
    "CheckedOut",
    "CheckoutRecord",
    "CheckoutState",
    "Empty",
    "StateStore",
]
