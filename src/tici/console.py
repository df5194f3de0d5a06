from __future__ import annotations

from rich.console import Console

# Session data (paths, titles, layout tokens) is printed verbatim: no markup,
# emoji codes or highlighting.
console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def echo(text: str) -> None:
    console.print(text, markup=False, emoji=False)


def echo_error(text: str) -> None:
    err_console.print(text, markup=False, emoji=False)
