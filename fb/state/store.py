"""Persistent checkout state.

Two small JSON files live in the fb base directory:

    checkout.json      the single checked-out ticket, if any
    bin_context.json   the bin used by the last bin-scoped checkout

Both are rewritten in full on every save. There is no locking; concurrent
invocations race and the last writer wins. An unreadable or malformed file
is logged and treated as absent so that "fb clear" can always recover.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from fb.config.settings import CONFIG_DIR
from fb.utils.errors import StateError

logger = logging.getLogger(__name__)

CHECKOUT_FILE_NAME = "checkout.json"
BIN_CONTEXT_FILE_NAME = "bin_context.json"
STATE_DIR_MODE = 0o700
STATE_FILE_MODE = 0o600


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class CheckoutRecord:
    """The ticket pinned by "fb checkout".

    Attributes:
        ticket_id: ID of the checked-out ticket
        ticket_name: Ticket name at checkout time
        bin_id: Bin the ticket was in at checkout time
        bin_name: Bin name at checkout time
        checked_out_at: Local-time ISO-8601 timestamp
    """

    ticket_id: str
    ticket_name: str
    bin_id: str
    bin_name: str
    checked_out_at: str

    @property
    def checked_out_time(self) -> datetime | None:
        """Parsed checkout time, or None if the stored value is not ISO-8601."""
        try:
            return datetime.fromisoformat(self.checked_out_at)
        except ValueError:
            return None

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CheckoutRecord:
        """Build a record from decoded JSON.

        Only ticket_id is required. Other fields default to "", and an
        unparseable checked_out_at is kept as-is.

        Raises:
            KeyError: If ticket_id is missing
            ValueError: If ticket_id is not a non-empty string
        """
        ticket_id = data["ticket_id"]
        if not isinstance(ticket_id, str) or not ticket_id:
            raise ValueError(f"ticket_id must be a non-empty string, got {ticket_id!r}")
        return cls(
            ticket_id=ticket_id,
            ticket_name=_text(data.get("ticket_name")),
            bin_id=_text(data.get("bin_id")),
            bin_name=_text(data.get("bin_name")),
            checked_out_at=_text(data.get("checked_out_at")),
        )


@dataclass(frozen=True)
class BinContext:
    """The bin of the most recent bin-scoped checkout."""

    bin_id: str
    bin_name: str


@dataclass(frozen=True)
class Empty:
    """No ticket is checked out."""


@dataclass(frozen=True)
class CheckedOut:
    """A ticket is checked out."""

    record: CheckoutRecord


CheckoutState = Empty | CheckedOut


class StateStore:
    """Reads and writes checkout state under one base directory.

    Attributes:
        base_dir: Directory holding the state files
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = base_dir or CONFIG_DIR

    @property
    def checkout_path(self) -> Path:
        return self.base_dir / CHECKOUT_FILE_NAME

    @property
    def bin_context_path(self) -> Path:
        return self.base_dir / BIN_CONTEXT_FILE_NAME

    def load_checkout(self) -> CheckoutState:
        """Return the current checkout state.

        A missing file is Empty. A corrupt file is logged and also Empty.
        """
        data = self._read_json(self.checkout_path)
        if data is None:
            return Empty()
        try:
            return CheckedOut(CheckoutRecord.from_dict(data))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring corrupt checkout file %s: %s", self.checkout_path, e)
            return Empty()

    def save_checkout(self, record: CheckoutRecord) -> None:
        """Overwrite the checkout record.

        Raises:
            StateError: If the file cannot be written
        """
        self._write_json(self.checkout_path, record.to_dict())
        logger.debug("Saved checkout of ticket %s", record.ticket_id)

    def clear_checkout(self) -> bool:
        """Remove the checkout record.

        Returns:
            True if a record was removed, False if there was none

        Raises:
            StateError: If the file exists but cannot be removed
        """
        try:
            self.checkout_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StateError(f"failed to remove checkout file: {e}") from e
        logger.debug("Removed %s", self.checkout_path)
        return True

    def load_bin_context(self) -> BinContext | None:
        """Return the last bin context, or None if absent or corrupt."""
        data = self._read_json(self.bin_context_path)
        if data is None:
            return None
        bin_id = data.get("bin_id")
        bin_name = data.get("bin_name")
        if not isinstance(bin_id, str) or not isinstance(bin_name, str) or not bin_name:
            logger.warning("Ignoring corrupt bin context file %s", self.bin_context_path)
            return None
        return BinContext(bin_id=bin_id, bin_name=bin_name)

    def save_bin_context(self, context: BinContext) -> None:
        """Overwrite the bin context.

        Raises:
            StateError: If the file cannot be written
        """
        self._write_json(self.bin_context_path, asdict(context))

    def _read_json(self, path: Path) -> dict[str, Any] | None:
        try:
            text = path.read_text()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Failed to read state file %s: %s", path, e)
            return None

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Failed to parse state file %s: %s", path, e)
            return None
        if not isinstance(data, dict):
            logger.warning("Unexpected content in state file %s", path)
            return None
        return data

    def _write_json(self, path: Path, data: dict[str, Any]) -> None:
        try:
            self.base_dir.mkdir(mode=STATE_DIR_MODE, parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2))
            path.chmod(STATE_FILE_MODE)
        except OSError as e:
            raise StateError(f"failed to write {path.name}: {e}") from e


__all__ = [
    "CheckoutRecord",
    "BinContext",
    "Empty",
    "CheckedOut",
    "CheckoutState",
    "StateStore",
]
