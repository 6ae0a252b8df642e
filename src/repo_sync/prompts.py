"""Operator prompts.

Every question the sync asks goes through a ``Prompter`` so automated
runs and tests can answer without a console.
"""

from typing import Protocol

import click


class Prompter(Protocol):
    """Asks the operator a question and returns the answer."""

    def confirm(self, question: str) -> bool: ...

    def choose(self, question: str, options: list[str]) -> str: ...


class ClickPrompter:
    """Console prompts backed by click."""

    def confirm(self, question: str) -> bool:
        return click.confirm(question, default=False)

    def choose(self, question: str, options: list[str]) -> str:
        """Show the options and return whatever the operator typed.

        Surrounding whitespace is stripped; the case-sensitive match
        against ``options`` is up to the caller.
        """
        for option in options:
            click.echo(f"  - {option}")
        return click.prompt(question, type=str).strip()
