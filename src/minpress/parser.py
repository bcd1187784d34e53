"""Parser for the one-machine-per-line text format.

A line looks like ``[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}``: an
optional indicator diagram, one parenthesised index group per button and a
single braced list of counter targets.
"""

from __future__ import annotations

from .errors import InvalidInput
from .models import Machine


class ParseError(InvalidInput):
    """A line does not follow the machine text format."""

    kind = "PARSE_ERROR"


def _int_list(body: str, token: str) -> list[int]:
    if not body.strip():
        return []
    try:
        return [int(part) for part in body.split(",")]
    except ValueError as exc:
        raise ParseError(f"Expected comma-separated integers in {token!r}") from exc


def parse_line(line: str) -> Machine:
    """Parse a single machine description."""
    lights: str | None = None
    masks: list[list[int]] = []
    targets: list[int] | None = None

    for token in line.split():
        if token.startswith("[") and token.endswith("]"):
            lights = token[1:-1]
            if any(c not in ".#" for c in lights):
                raise ParseError(f"Indicator diagram {token!r} may only contain '.' and '#'")
        elif token.startswith("(") and token.endswith(")"):
            masks.append(_int_list(token[1:-1], token))
        elif token.startswith("{") and token.endswith("}"):
            if targets is not None:
                raise ParseError("Line has more than one target group")
            targets = _int_list(token[1:-1], token)
        else:
            raise ParseError(f"Unexpected token {token!r}")

    if targets is None:
        raise ParseError("Line has no {...} target group")
    if any(value < 0 for value in targets):
        raise ParseError(f"Targets must be non-negative: {targets}")
    for mask in masks:
        for row in mask:
            if row < 0 or row >= len(targets):
                raise ParseError(f"Button index {row} outside [0, {len(targets)})")
    if not targets or not masks:
        raise ParseError("Line needs at least one target and one button")
    return Machine(targets=targets, masks=masks, lights=lights)


def parse_lines(text: str) -> list[Machine]:
    """Parse every non-blank line; machine ids are the 1-based line numbers."""
    machines: list[Machine] = []
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            machine = parse_line(line)
        except ParseError as exc:
            raise ParseError(f"line {number}: {exc}") from exc
        machines.append(machine.model_copy(update={"id": f"line-{number}"}))
    return machines
