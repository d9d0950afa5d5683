from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from .errors import ClipboardError, ErrorInfo, get_clipboard_error

logger = logging.getLogger("data-inspector")


class Clipboard(Protocol):
    def copy(self, text: str) -> bool: ...

    def is_supported(self) -> bool: ...


class NullClipboard:
    """Server-side stand-in: copying happens in the browser via the copy button."""

    def copy(self, text: str) -> bool:
        raise ClipboardError("Clipboard access is not supported in this context")

    def is_supported(self) -> bool:
        return False


@dataclass
class CopyOutcome:
    success: bool
    error: Optional[ErrorInfo] = None


def safe_copy(clipboard: Clipboard, text: str) -> CopyOutcome:
    """Copy through the collaborator; failures become a reportable `ErrorInfo`."""
    try:
        if not clipboard.is_supported():
            raise ClipboardError("Clipboard access is not supported in this context")
        if clipboard.copy(text):
            return CopyOutcome(success=True)
        raise ClipboardError("Clipboard copy failed")
    except Exception as exc:
        logger.warning(f"Clipboard copy failed: {exc}")
        return CopyOutcome(success=False, error=get_clipboard_error(exc))
