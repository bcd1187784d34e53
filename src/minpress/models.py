"""Pydantic models for solve requests and responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class Machine(BaseModel):
    """One machine: counter targets and the button masks that increment them.

    ``masks[j]`` lists the counter indices button ``j`` increments by one.
    ``lights`` is the optional indicator diagram; when present the fewest
    toggling presses that light it are reported alongside the counter total.
    """

    model_config = ConfigDict(extra="forbid")

    targets: list[NonNegativeInt] = Field(min_length=1)
    masks: list[list[NonNegativeInt]] = Field(min_length=1)
    id: str | None = None
    lights: str | None = None


class Options(BaseModel):
    """Solver tuning options."""

    model_config = ConfigDict(extra="forbid")

    maxFreeVariables: int = Field(default=3, ge=0)
    continueOnError: bool = True
    crossCheck: bool = False
    timeLimitSeconds: float = 10.0  # CP-SAT limit per machine, only used with crossCheck


class SolveRequest(BaseModel):
    """Request payload with structured machines."""

    model_config = ConfigDict(extra="forbid")

    machines: list[Machine]
    options: Options | None = None


class TextSolveRequest(BaseModel):
    """Request payload with machines in the puzzle line format."""

    model_config = ConfigDict(extra="forbid")

    input: str
    options: Options | None = None


class MachineResult(BaseModel):
    """Outcome for a single machine."""

    model_config = ConfigDict(extra="forbid")

    index: int
    id: str | None = None
    status: Literal["OPTIMAL", "ERROR"]
    total: int | None = None
    presses: list[int] | None = None
    statistics: dict[str, int | float] | None = None
    errorKind: str | None = None
    error: str | None = None
    crossCheck: Literal["MATCH", "MISMATCH", "UNAVAILABLE"] | None = None
    lightPresses: int | None = None


class SolveResponse(BaseModel):
    """Response payload produced by the solver service."""

    model_config = ConfigDict(extra="forbid")

    status: Literal["OPTIMAL", "PARTIAL", "ERROR"]
    total: int | None = None
    lightTotal: int | None = None
    results: list[MachineResult] = Field(default_factory=list)
    error: str | None = None
