"""Let the operator choose which candidates to keep, and in what order.

Choosing what goes on a page is the only interactive step in specdocs: the
tool lists related schema names or operation summaries and waits for one
line such as ``2,0,1``. The selection is returned exactly in the order
typed. The listing and the prompt go to stderr, leaving stdout to the
rendered text.

The line reader is injectable so tests (and non-terminal callers) can supply
input without a TTY::

    ask_for_ordered_list(["A", "B", "C"], "Pick:", read_line=lambda: "2,0")
    # ['C', 'A']
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import typer

from specdocs.exceptions import InvalidSelectionError

logger = logging.getLogger(__name__)


def _prompt_line() -> str:
    return typer.prompt("Enter comma-separated indices in the desired order", err=True)


def parse_selection(text: str, count: int) -> list[int]:
    """Parse ``"2, 0"`` into ``[2, 0]``, checking every index is below *count*.

    Raises:
        InvalidSelectionError: On empty input, a non-numeric entry, or an
            index out of range.
    """
    entries = [entry.strip() for entry in text.split(",")]
    if not any(entries):
        raise InvalidSelectionError("No indices entered")

    indices: list[int] = []
    for entry in entries:
        if not (entry.isascii() and entry.isdigit()):
            raise InvalidSelectionError(f"'{entry}' is not a valid index")
        index = int(entry)
        if index >= count:
            raise InvalidSelectionError(
                f"Index {index} is out of range (0-{count - 1})"
                if count
                else f"Index {index} is out of range (no candidates)"
            )
        indices.append(index)
    return indices


def ask_for_ordered_list(
    candidates: Sequence[str],
    prompt: str,
    read_line: Optional[Callable[[], str]] = None,
) -> list[str]:
    """Show numbered *candidates* and return the ones the operator picks.

    Args:
        candidates: Items to choose from.
        prompt: Heading printed above the numbered list.
        read_line: Returns one line of operator input. Defaults to a
            :func:`typer.prompt` on the terminal.

    Returns:
        The chosen candidates in the order entered. Repeated indices are
        kept as given.

    Raises:
        InvalidSelectionError: If the input does not select valid indices.
    """
    typer.echo(prompt, err=True)
    for index, candidate in enumerate(candidates):
        typer.echo(f"  {index}: {candidate}", err=True)

    line = (read_line or _prompt_line)()
    selected = [candidates[i] for i in parse_selection(line, len(candidates))]
    logger.debug("Operator selected %s", selected)
    return selected
