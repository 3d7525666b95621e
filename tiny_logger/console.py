"""Color-coded console rendering of log records."""
from __future__ import annotations

from typing import Dict, Optional

from rich.console import Console
from rich.text import Text

from .utils.types import ConsoleStyle, Level, LogRecord

LEVEL_COLORS: Dict[Level, str] = {
    Level.DEBUG: "bright_blue",
    Level.INFO: "cyan",
    Level.WARN: "yellow",
    Level.ERROR: "red",
}


class ConsoleSink:
    """Print records on a :class:`rich.console.Console`.

    Record text is wrapped in :class:`rich.text.Text`, so square brackets in a
    subject or message are printed literally instead of being read as markup.
    """

    def __init__(
        self, style: ConsoleStyle = ConsoleStyle.RAW, console: Optional[Console] = None
    ) -> None:
        self.style = ConsoleStyle(style)
        self.console = console if console is not None else Console(highlight=False, soft_wrap=True)

    def emit(self, record: LogRecord) -> None:
        if self.style is ConsoleStyle.PRETTY:
            rendered = self.render_pretty(record)
        else:
            rendered = self.render_raw(record)
        self.console.print(rendered, highlight=False, soft_wrap=True)

    @staticmethod
    def render_raw(record: LogRecord) -> Text:
        color = LEVEL_COLORS[record.level]
        line = f"[ {record.level.value}, {record.timestamp}, {record.subject}, {record.message} ]"
        return Text(line, style=color)

    @staticmethod
    def render_pretty(record: LogRecord) -> Text:
        color = LEVEL_COLORS[record.level]
        text = Text()
        text.append(f"{record.level.value:<5}", style=f"bold {color}")
        text.append(f"  {record.timestamp}\n", style="dim")
        text.append("  subject: ", style="dim")
        text.append(f"{record.subject}\n", style=color)
        text.append("  message: ", style="dim")
        text.append(record.message, style=color)
        return text


__all__ = ["ConsoleSink", "LEVEL_COLORS"]
