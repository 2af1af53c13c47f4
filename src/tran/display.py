"""Text rendering for help and language listings."""

from typing import Iterable

from .languages import LanguageEntry


HELP_ROWS = [
    ("h", "Show help", "h", ""),
    ("l", "Show language codes", "l en", "l nor"),
    ("s", "Source language", "s en", "s french"),
    ("t", "Target language", "t ja", "t italian"),
    ("q", "Quit", "q", ""),
]


def render_help() -> str:
    """Render the interactive command table."""
    lines = [
        "+-----+----------------------+------+-----------+",
        "| Cmd | Description          | Examples         |",
        "+-----+----------------------+------+-----------+",
    ]
    for cmd, description, example1, example2 in HELP_ROWS:
        lines.append(f"| {cmd:<3} | {description:<20} | {example1:<4} | {example2:<9} |")
    lines.append("+-----+----------------------+------+-----------+")
    return "\n".join(lines)


def render_language_table(entries: Iterable[LanguageEntry]) -> str:
    """Render languages as a boxed table for the interactive session."""
    border = "+---------+----------------------+"
    lines = [border, "| Code    | Language name        |", border]
    for entry in entries:
        lines.append(f"| {entry.code:<7} | {entry.name:<20} |")
    lines.append(border)
    return "\n".join(lines)


def render_language_list(entries: Iterable[LanguageEntry]) -> str:
    """Render languages as plain columns for non-interactive output."""
    lines = ["Code Language name", "---- -------------"]
    lines.extend(f" {entry.code}  {entry.name}" for entry in entries)
    return "\n".join(lines) + "\n"
