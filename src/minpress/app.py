"""FastAPI entrypoint for the minimum-press solver service."""

from fastapi import FastAPI, HTTPException

from .models import SolveRequest, SolveResponse, TextSolveRequest
from .parser import ParseError, parse_lines
from .solver import solve_request

app = FastAPI(
    title="Minimum Press Solver",
    description="Exact integer solver for 0/1 counter machines",
    version="0.1.0",
)


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok", "service": "minpress"}


@app.post("/solve", response_model=SolveResponse)
async def solve(request: SolveRequest) -> SolveResponse:
    """Solve machines given as targets and masks."""
    return solve_request(request)


@app.post("/solve/text", response_model=SolveResponse)
async def solve_text(request: TextSolveRequest) -> SolveResponse:
    """Solve machines given in the one-machine-per-line text format."""
    try:
        machines = parse_lines(request.input)
    except ParseError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return solve_request(SolveRequest(machines=machines, options=request.options))
