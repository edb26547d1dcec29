"""Console game: rendering, input helpers and the turn loop."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from dropfour.agents import HINT_CODE, Agent, HumanAgent, MinimaxAgent
from dropfour.engine import COLS, DEFAULT_DEPTH, ROWS, Board, MoveError, Side, TerminalResult, new_board, terminal_result
from dropfour.messages import random_message
from dropfour.search import SearchConfig, SearchEngine

logger = logging.getLogger(__name__)

console = Console()
app = typer.Typer(add_completion=False)


class Mode(str, Enum):
    solo = "solo"
    friends = "friends"


@dataclass(frozen=True)
class Move:
    ply: int
    side: Side
    row: int
    col: int


def render_board(board: Board) -> str:
    sym = {None: ".", Side.FIRST: "X", Side.SECOND: "O"}
    lines: List[str] = []
    for r in range(ROWS):
        lines.append(" ".join(sym[board.cell(r, c)] for c in range(COLS)))
    lines.append("-" * (2 * COLS - 1))
    lines.append(" ".join(str(c) for c in range(COLS)))
    return "\n".join(lines)


def format_move_history(moves: Sequence[Move]) -> str:
    return " ".join(f"{m.ply}:{m.side.symbol}@{m.col}" for m in moves)


def _parse_column(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        col = int(raw)
    except ValueError:
        return None

    if col == HINT_CODE or 0 <= col < COLS:
        return col
    return None


def prompt_for_human_move(board: Board, side: Side, name: str) -> int:
    legal = board.legal_moves()
    prompt = f"{name} ({side.symbol}) to move. Column {legal} or {HINT_CODE} for a hint"

    while True:
        raw = typer.prompt(prompt)
        col = _parse_column(raw)
        if col is None:
            console.print(f"Enter a column index 0-{COLS - 1}, or {HINT_CODE} for a hint.")
            continue
        if col != HINT_CODE and not board.can_play(col):
            console.print("Illegal move: column full.")
            continue
        return col


def prompt_for_mode() -> Mode:
    while True:
        raw = typer.prompt("0 - play alone\n1 - play with a friend\n").strip()
        if raw == "0":
            return Mode.solo
        if raw == "1":
            return Mode.friends


def print_column_scores(side: Side, depth: int, scores: Dict[int, int]) -> None:
    table = Table(title=f"Minimax scores for {side.symbol} (depth {depth})")
    table.add_column("col", justify="right")
    table.add_column("score", justify="right")
    for col, score in scores.items():
        table.add_row(str(col), str(score))
    console.print(table)


def play_game(board: Board, agents: Dict[Side, Agent]) -> TerminalResult:
    side = Side.FIRST
    moves: List[Move] = []

    console.print(render_board(board))
    while True:
        tr = terminal_result(board)
        if tr.is_terminal:
            if tr.winner is None:
                console.print("Result: draw")
            else:
                console.print(f"Result: {tr.winner.symbol} wins ({tr.reason})")
            if moves:
                console.print(f"Moves: {format_move_history(moves)}")
            return tr

        agent = agents[side]
        col = agent.select_move(board, side)
        try:
            row = board.apply(col, side)
        except MoveError as exc:
            if not isinstance(agent, HumanAgent):
                raise
            logger.warning("%s picked an unplayable column: %s", agent.name, exc)
            continue

        moves.append(Move(ply=len(moves), side=side, row=row, col=col))
        console.print(f"Move: {side.symbol} -> col {col}, row {row}")
        console.print("")
        console.print(render_board(board))
        side = side.other


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@app.command()
def play(
    mode: Optional[Mode] = typer.Option(None, help="solo (vs AI) or friends (two humans); prompted if omitted"),
    depth: int = DEFAULT_DEPTH,
    workers: Optional[int] = typer.Option(None, help="search worker process count"),
    seed: Optional[int] = typer.Option(None, help="seed for the AI chatter"),
    show_scores: bool = False,
    log_level: str = "WARNING",
) -> None:
    """
    Play drop-four on a 12x9 board. X moves first.

    In solo mode you are X and the AI is O. Type 42 instead of a column to
    let the AI choose your move.
    """
    if depth < 1:
        raise typer.BadParameter("depth must be >= 1")
    if workers is not None and workers < 1:
        raise typer.BadParameter("workers must be >= 1")
    level = log_level.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise typer.BadParameter(f"unknown log level: {log_level}")
    _configure_logging(level)

    if mode is None:
        mode = prompt_for_mode()

    rng = random.Random(seed)

    def chatter(name: str) -> None:
        console.print(f"{name}: {random_message(rng)}")

    with SearchEngine(SearchConfig(depth=depth, workers=workers)) as engine:
        advisor = MinimaxAgent("Hint", engine)
        agents: Dict[Side, Agent] = {
            Side.FIRST: HumanAgent("Player X", prompt_for_human_move, advisor=advisor),
        }
        if mode is Mode.solo:
            agents[Side.SECOND] = MinimaxAgent(
                "AI",
                engine,
                on_move=chatter,
                on_scores=print_column_scores if show_scores else None,
            )
        else:
            agents[Side.SECOND] = HumanAgent("Player O", prompt_for_human_move, advisor=advisor)

        play_game(new_board(), agents)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
