"""
prompt_ui.py - Prompt capability used by the browser workflow, plus a Rich terminal backend.

The workflow only talks to the PromptUI protocol:
- select_one: pick an entry from a list, or fire a single-letter command
- text_input: edit a line of text
- confirm:    yes / no
- notify:     show a status line

Going back is reported as the CANCEL sentinel, never as an exception, so a
caller can tell "user backed out" apart from an empty answer or a "no".
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from prompt_toolkit import PromptSession
from prompt_toolkit.key_binding import KeyBindings
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.theme import Theme

THEME = Theme(
    {
        "title": "bold cyan",
        "accent": "cyan",
        "info": "bright_cyan",
        "ok": "bold green",
        "warn": "bold yellow",
        "err": "bold red",
        "dim": "dim",
        "path": "bright_white",
    }
)
console = Console(theme=THEME, highlight=False)

CANCEL_KEYS = ("b", "esc", "back")


class Cancel(enum.Enum):
    CANCEL = "cancel"


CANCEL = Cancel.CANCEL


@dataclass(frozen=True)
class Choice:
    label: str
    value: Any = None
    disabled: str | None = None  # reason shown next to the entry; "" disables silently
    separator: bool = False  # heading row, never selectable


@dataclass(frozen=True)
class Picked:
    value: Any


@dataclass(frozen=True)
class Command:
    key: str
    value: Any = None  # value of the entry the command applies to


Selection = Picked | Command | Cancel


class PromptUI(Protocol):
    def select_one(
        self,
        choices: Sequence[Choice],
        header: str = "",
        footer: str = "",
        initial: Any = None,
        commands: Iterable[str] = (),
    ) -> Selection: ...

    def text_input(
        self, message: str, header: str = "", footer: str = "", initial: str = ""
    ) -> str | Cancel: ...

    def confirm(self, message: str, footer: str = "") -> bool | Cancel: ...

    def notify(self, message: str, level: str = "info") -> None: ...


# ----------------------------
# Rich backend
# ----------------------------

_ICONS = {"info": "", "ok": "✅ ", "warn": "⚠ ", "err": "❌ "}


class RichPrompts:
    """PromptUI on top of rich tables/prompts and a prompt_toolkit line editor.

    In a list, type the entry number to pick it, a command letter optionally
    followed by an entry number ("r 3") to act on it, Enter for the
    highlighted entry, or b/esc to go back.
    """

    def __init__(self, con: Console | None = None) -> None:
        self.console = con or console

    def _render_frame(self, header: str) -> None:
        self.console.rule(style="dim")
        if header:
            self.console.print(Panel(escape(header), border_style="cyan", box=box.ROUNDED))

    def select_one(
        self,
        choices: Sequence[Choice],
        header: str = "",
        footer: str = "",
        initial: Any = None,
        commands: Iterable[str] = (),
    ) -> Selection:
        commands = {c.lower() for c in commands}
        self._render_frame(header)

        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("idx", style="cyan", justify="right")
        table.add_column("name")

        numbered: dict[int, Choice] = {}
        highlighted: int | None = None
        for choice in choices:
            if choice.separator:
                table.add_row("", f"[accent]{escape(choice.label)}[/]")
                continue
            idx = len(numbered) + 1
            numbered[idx] = choice
            marker = ""
            if highlighted is None and initial is not None and choice.value == initial:
                highlighted = idx
                marker = "› "
            label = escape(choice.label)
            if choice.disabled is not None:
                reason = f" ({escape(choice.disabled)})" if choice.disabled else ""
                label = f"[dim]{label}{reason}[/]"
            table.add_row(f"{marker}[{idx}]", label)

        self.console.print(table)
        if footer:
            self.console.print(f"[dim]{escape(footer)}[/]")

        while True:
            raw = Prompt.ask("Choose", console=self.console).strip()
            lowered = raw.lower()
            if lowered in CANCEL_KEYS:
                return CANCEL

            if not raw:
                if highlighted is None:
                    continue
                raw = lowered = str(highlighted)

            parts = lowered.split()
            if parts[0] in commands:
                target = numbered[highlighted].value if highlighted is not None else None
                if len(parts) > 1:
                    if not parts[1].isdigit() or int(parts[1]) not in numbered:
                        self.notify(f"No entry {parts[1]!r}", "warn")
                        continue
                    target = numbered[int(parts[1])].value
                return Command(parts[0], target)

            if raw.isdigit() and int(raw) in numbered:
                choice = numbered[int(raw)]
                if choice.disabled is not None:
                    self.notify(f"'{choice.label}' can't be selected", "warn")
                    continue
                return Picked(choice.value)

            self.notify(f"Invalid choice: {raw!r}", "warn")

    def text_input(
        self, message: str, header: str = "", footer: str = "", initial: str = ""
    ) -> str | Cancel:
        self._render_frame(header)
        if footer:
            self.console.print(f"[dim]{escape(footer)}[/]")

        bindings = KeyBindings()

        @bindings.add("escape", eager=True)
        def _(event: Any) -> None:
            event.app.exit(result=None)

        session: PromptSession[str] = PromptSession(key_bindings=bindings)
        answer = session.prompt(f"{message}: ", default=initial)
        if answer is None:
            return CANCEL
        return answer.strip()

    def confirm(self, message: str, footer: str = "") -> bool | Cancel:
        if footer:
            self.console.print(f"[dim]{escape(footer)}[/]")
        answer = Prompt.ask(
            escape(message), choices=["y", "n", "b"], default="n", console=self.console
        )
        if answer == "b":
            return CANCEL
        return answer == "y"

    def notify(self, message: str, level: str = "info") -> None:
        style = level if level in _ICONS else "info"
        self.console.print(f"[{style}]{_ICONS[style]}{escape(message)}[/]")
