"""Presenters: desktop notifications, console output and a recording mock."""

from battwatch.presentation.console import ConsolePresenter
from battwatch.presentation.desktop import DesktopPresenter
from battwatch.presentation.protocols import MockPresenter, Presenter

__all__ = ["ConsolePresenter", "DesktopPresenter", "MockPresenter", "Presenter"]
