"""Plain-text rendering of tickets, bins, boards, and checkout status.

Every function returns a string; printing is left to the caller so output
can be tested without a terminal.
"""

from __future__ import annotations

import textwrap
from collections.abc import Sequence
from datetime import datetime, timedelta

from fb.integrations.models import Bin, Board, Ticket
from fb.state.store import CheckoutRecord

MAX_DESCRIPTION_LENGTH = 200
MAX_LINE_WIDTH = 80
FIELD_INDENT = "  "
DESCRIPTION_INDENT = "    "
DESCRIPTION_LABEL = FIELD_INDENT + "Description: "
EMPTY_DESCRIPTION = "(none)"
CHECKED_OUT_MARKER = " ← CHECKED OUT"


def prepare_description(description: str) -> str:
    """Trim, truncate to MAX_DESCRIPTION_LENGTH, and flatten newlines."""
    description = description.strip()
    if not description:
        return ""
    if len(description) > MAX_DESCRIPTION_LENGTH:
        description = description[:MAX_DESCRIPTION_LENGTH] + "..."
    return description.replace("\n", " ").replace("\r", "")


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap text on word boundaries; over-long words get their own line."""
    if len(text) <= width:
        return [text]
    return textwrap.wrap(text, width=width, break_long_words=False, break_on_hyphens=False) or [
        text
    ]


def format_ticket(ticket: Ticket, checked_out: bool = False) -> str:
    """Render one ticket as a block of lines, each ending in a newline."""
    header = f"[{ticket.id}] {ticket.name}"
    if checked_out:
        header += CHECKED_OUT_MARKER
    lines = [header, f"{FIELD_INDENT}Status: {ticket.status}"]

    for label, value in (
        ("Created", ticket.created_at),
        ("Updated", ticket.updated_at),
        ("Due", ticket.due_date),
    ):
        date = Ticket.format_date(value)
        if date:
            lines.append(f"{FIELD_INDENT}{label}: {date}")

    description = prepare_description(ticket.description)
    if not description:
        lines.append(DESCRIPTION_LABEL + EMPTY_DESCRIPTION)
    else:
        wrapped = wrap_text(description, MAX_LINE_WIDTH - len(DESCRIPTION_LABEL))
        lines.append(DESCRIPTION_LABEL + wrapped[0])
        lines.extend(DESCRIPTION_INDENT + line for line in wrapped[1:])

    return "\n".join(lines) + "\n"


def format_tickets(tickets: Sequence[Ticket], checked_out_id: str | None = None) -> str:
    """Render a ticket list, marking the checked-out ticket if present."""
    if not tickets:
        return "No tickets assigned to you.\n"

    blocks = [
        format_ticket(ticket, checked_out=checked_out_id is not None and ticket.id == checked_out_id)
        for ticket in tickets
    ]
    return f"Found {len(tickets)} ticket(s) assigned to you:\n\n" + "\n".join(blocks)


def format_selection_list(tickets: Sequence[Ticket]) -> str:
    """Numbered "N. [id] name" lines for interactive selection."""
    return "".join(f"{i}. [{t.id}] {t.name}\n" for i, t in enumerate(tickets, start=1))


def format_bins(bins: Sequence[Bin]) -> str:
    if not bins:
        return "No bins found.\n"
    return "Available Bins:\n\n" + "".join(f"  {b.id} - {b.name}\n" for b in bins)


def format_boards(boards: Sequence[Board]) -> str:
    if not boards:
        return "No boards found.\n"
    return "Available Boards:\n\n" + "".join(f"  {b.id} - {b.name}\n" for b in boards)


def format_duration(elapsed: timedelta) -> str:
    """Human-readable elapsed time, truncated to the largest whole unit."""
    seconds = elapsed.total_seconds()
    if seconds < 60:
        return "less than a minute"
    if seconds < 3600:
        return _plural(int(seconds // 60), "minute")
    if seconds < 86400:
        return _plural(int(seconds // 3600), "hour")
    return _plural(int(seconds // 86400), "day")


def _plural(count: int, unit: str) -> str:
    return f"1 {unit}" if count == 1 else f"{count} {unit}s"


def format_status(record: CheckoutRecord | None, now: datetime | None = None) -> str:
    """Render the "fb -o" checkout status report.

    The elapsed-time line is left out when the stored timestamp is unparseable.
    """
    if record is None:
        return (
            "No ticket currently checked out\n"
            "Use 'fb checkout --bin \"Bin Name\"' to check out a ticket\n"
        )

    lines = ["Currently checked out:", f"  Ticket: [{record.ticket_id}] {record.ticket_name}"]
    if record.bin_name:
        lines.append(f"  Bin: {record.bin_name}")

    checked_out_at = record.checked_out_time
    if checked_out_at is not None:
        current = now or datetime.now(checked_out_at.tzinfo)
        lines.append(f"  Checked out: {format_duration(current - checked_out_at)} ago")
    return "\n".join(lines) + "\n"


__all__ = [
    "CHECKED_OUT_MARKER",
    "prepare_description",
    "wrap_text",
    "format_ticket",
    "format_tickets",
    "format_selection_list",
    "format_bins",
    "format_boards",
    "format_duration",
    "format_status",
]
