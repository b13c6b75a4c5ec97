"""Workflow orchestration for fb.

This package contains:
- checkout: Checkout state transitions and quick comments
- comment: Interactive select-and-comment mode
"""

from fb.workflow.checkout import CheckoutManager, local_now
from fb.workflow.comment import comment_interactively

__all__ = [
    "CheckoutManager",
    "local_now",
    "comment_interactively",
]
