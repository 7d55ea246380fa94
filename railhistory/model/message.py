"""Message - User-facing messages for the railway history viewer UI.

Architecture:
- CENTER (main area): blue loading message, red load error
- LEFT (sidebar): yellow data-quality warning when events reference unknown entities
- RIGHT (detail panel): blue hint until something is clicked, blue note for empty years

Toasts are transient and used for click feedback only.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class MessageLevel(Enum):
    """Display level for UI messages."""

    INFO = "info"  # Blue - context/status/loading
    WARNING = "warning"  # Yellow - data quality
    ERROR = "error"  # Red - failures


@dataclass(frozen=True)
class Message(ABC):
    """Abstract base class for messages displayed inline (sidebar/panels)."""

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for display in Streamlit."""
        raise NotImplementedError

    @property
    @abstractmethod
    def level(self) -> MessageLevel:
        """Display level."""
        raise NotImplementedError

    def display(self) -> None:
        """Render this message using the appropriate Streamlit function."""
        import streamlit as st

        render_fn = {
            MessageLevel.INFO: st.info,
            MessageLevel.WARNING: st.warning,
            MessageLevel.ERROR: st.error,
        }[self.level]
        render_fn(self.message)


@dataclass(frozen=True)
class ToastMessage(ABC):
    """Abstract base class for transient popup notifications."""

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for the toast notification."""
        raise NotImplementedError

    @property
    @abstractmethod
    def icon(self) -> str:
        """Icon to show in toast."""
        raise NotImplementedError

    def display(self) -> None:
        """Show this message as a toast notification and log it."""
        import streamlit as st

        logger = logging.getLogger(__name__)
        logger.info(f"[TOAST] {self.icon} {self.message}")
        st.toast(f"{self.icon} {self.message}")


# =============================================================================
# INLINE MESSAGES
# =============================================================================


@dataclass(frozen=True)
class DataLoadingMessage(Message):
    """Shown while the catalogue and event log load."""

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        return "🗄️ Loading database..."


@dataclass(frozen=True)
class DataLoadErrorMessage(Message):
    """Loading the database failed."""

    error: str

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.ERROR

    @property
    def message(self) -> str:
        return f"Error loading database: {self.error}"


@dataclass(frozen=True)
class DanglingReferencesMessage(Message):
    """Events reference stations or segments missing from the catalogue."""

    event_ids: tuple[str, ...]

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.WARNING

    @property
    def message(self) -> str:
        shown = ", ".join(self.event_ids[:5])
        more = f" and {len(self.event_ids) - 5} more" if len(self.event_ids) > 5 else ""
        return f"⚠️ {len(self.event_ids)} event(s) reference unknown entities and are ignored: {shown}{more}"


@dataclass(frozen=True)
class EmptyYearMessage(Message):
    """Nothing is recorded for the selected year."""

    year: int

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        return f"No stations or segments recorded as existing in {self.year}."


@dataclass(frozen=True)
class SelectionHintMessage(Message):
    """Detail panel placeholder before anything is selected."""

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        return "👆 Click a station or segment on the map to see its details."


# =============================================================================
# TOAST MESSAGES
# =============================================================================


@dataclass(frozen=True)
class NotVisibleInYearMessage(ToastMessage):
    """The selected entity does not exist in the newly selected year."""

    entity_id: str
    year: int

    @property
    def icon(self) -> str:
        return "🕰️"

    @property
    def message(self) -> str:
        return f"{self.entity_id} does not exist in {self.year}, selection cleared"
