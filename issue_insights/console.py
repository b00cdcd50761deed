"""Themed Rich console with verbose and quiet modes."""

from __future__ import annotations

from typing import Any

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.theme import Theme

_default_theme = Theme(
    {
        "accent": "bold rgb(255,149,0)",
        "muted": "dim",
        "title": "bold rgb(120,200,255)",
        "label": "bold rgb(160,160,160)",
        "value": "rgb(240,240,240)",
        "success": "bold rgb(104,255,203)",
        "warning": "bold rgb(255,213,128)",
        "danger": "bold rgb(255,128,128)",
        "divider": "rgb(85,85,85)",
    }
)


class Console(RichConsole):
    """Rich console pre-configured with the issue insights theme."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:  # noqa: D401 - mirror rich API
        theme = kwargs.pop("theme", None) or _default_theme
        super().__init__(*args, theme=theme, **kwargs)
        self._verbose = False
        self._quiet = False

    def set_verbose(self, verbose: bool) -> None:
        self._verbose = verbose

    def set_quiet(self, quiet: bool) -> None:
        self._quiet = quiet

    def is_verbose(self) -> bool:
        return self._verbose

    def is_quiet(self) -> bool:
        return self._quiet

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print with respect to quiet mode."""
        if not self._quiet:
            super().print(*args, **kwargs)

    def log(self, *args: Any, **kwargs: Any) -> None:
        """Log with respect to verbose mode."""
        if self._verbose and not self._quiet:
            super().log(*args, **kwargs)

    def print_error(self, message: Any) -> None:
        """Print an error; errors are shown even in quiet mode."""
        super().print(f"[danger]{escape(str(message))}[/]")

    def print_warning(self, message: Any) -> None:
        self.print(f"[warning]{escape(str(message))}[/]")

    def print_success(self, message: Any) -> None:
        self.print(f"[success]{escape(str(message))}[/]")


__all__ = ["Console"]
