"""Command-line interface for uchess."""

import getpass
import shutil
from pathlib import Path

import chess
import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from uchess import __version__
from uchess.core.configs import (
    CPU,
    AppConfig,
    ConfigurationError,
    config_to_yaml,
    default_config,
    load_config,
)
from uchess.core.input_buffer import InputBuffer
from uchess.core.material import board_balance
from uchess.engine import EngineUnreachable, start_engines
from uchess.game import GameController
from uchess.utils.logging import setup_logging

app = typer.Typer(
    name="uchess",
    help="uchess: play chess in the terminal against UCI engines",
    add_completion=False,
)
console = Console()


def win_probability(cp: int) -> float:
    """Chance that the side with score ``cp`` (centipawns) wins."""
    return 1 / (1 + 10 ** (-cp / 400))


def _player_name(config: AppConfig, color: chess.Color) -> str:
    if config.is_cpu(color):
        return config.uci_white if color == chess.WHITE else config.uci_black
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return "Human"


def build_config(cfg: Path | None, white: str | None, black: str | None) -> AppConfig:
    """Load the config file (or defaults) and apply command-line overrides."""
    if cfg is not None:
        config = load_config(cfg)
    else:
        config = default_config(shutil.which("stockfish") or "")

    if white is not None:
        config.white_piece = white
    if black is not None:
        config.black_piece = black
    config.validate()

    if not config.white_name:
        config.white_name = _player_name(config, chess.WHITE)
    if not config.black_name:
        config.black_name = _player_name(config, chess.BLACK)
    return config


def render(controller: GameController, message: str = "") -> None:
    """Print the board and the side panel."""
    session = controller.session
    config = controller.config
    board = session.board
    balance = board_balance(board)

    # Engine scores are from the side to move
    white_cp = session.score if board.turn == chess.WHITE else -session.score

    info = Table.grid(padding=(0, 2))
    info.add_column(justify="right", style="bold")
    info.add_column()
    white_icon = "🤖" if config.white_piece == CPU else "👤"
    black_icon = "🤖" if config.black_piece == CPU else "👤"
    info.add_row("White", f"{white_icon} {controller.white_name} {balance.white_advantage} {balance.white_diff}")
    info.add_row("Black", f"{black_icon} {controller.black_name} {balance.black_advantage} {balance.black_diff}")
    info.add_row("Score", f"{white_cp / 100:+.2f} ({win_probability(white_cp):.0%} white)")
    white_check, black_check = session.check_state()
    check = " (check)" if white_check or black_check else ""
    info.add_row("Turn", chess.COLOR_NAMES[board.turn] + check)
    if session.hint is not None:
        info.add_row("Hint", session.hint.uci())
    if not session.in_progress:
        info.add_row("Result", f"{session.outcome.value} {session.result()}")
    if message.strip():
        info.add_row("", escape(message))

    console.print(Panel(board.unicode(borders=True), title="uchess", expand=False))
    console.print(info)


def _autoplay(controller: GameController) -> None:
    """Engine against engine until the game ends or an engine fails."""
    while controller.session.in_progress:
        message = controller.play_automated_turn()
        if message is None or message.startswith("⚠"):
            render(controller, message or "")
            return
        controller.refresh_score()
        render(controller, message)


def _interact(controller: GameController) -> None:
    buffer = InputBuffer()
    while True:
        try:
            line = console.input("[bold cyan]> [/bold cyan]")
        except (EOFError, KeyboardInterrupt):
            return

        for char in line:
            buffer.append(char)
        result = controller.process_command(buffer.current())
        buffer.clear()

        if result.quit:
            return
        controller.refresh_score()
        render(controller, result.message)


@app.command()
def version() -> None:
    """Print version information."""
    console.print(f"[bold blue]uchess[/bold blue] v{__version__}")


@app.command()
def template() -> None:
    """Print a configuration template with defaults."""
    console.print(config_to_yaml(default_config(shutil.which("stockfish") or "")), markup=False, soft_wrap=True)


@app.command()
def play(
    cfg: Path | None = typer.Option(None, "--cfg", "-c", help="Config file (YAML or JSON)"),
    white: str | None = typer.Option(None, "--white", help="White player: human or cpu"),
    black: str | None = typer.Option(None, "--black", help="Black player: human or cpu"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Console log level"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Write a detailed log here"),
) -> None:
    """Play a game."""
    setup_logging(level=log_level, log_file=log_file)

    try:
        config = build_config(cfg, white, black)
        engines = start_engines(config)
    except (ConfigurationError, EngineUnreachable, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    try:
        controller = GameController(config, engines)
        render(controller, "Thinking..." if config.is_cpu(controller.session.turn) else "")
        message = controller.start()
        controller.refresh_score()
        render(controller, message)

        if config.is_interactive:
            _interact(controller)
        else:
            _autoplay(controller)
    finally:
        engines.stop()
        logger.debug("Engines stopped")


if __name__ == "__main__":
    app()
