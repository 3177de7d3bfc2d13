"""CLI command for playing Klondike in the terminal."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from klondike.engine.session import SessionConfig, deal_new_game
from klondike.engine.serialization import session_from_json, session_to_json
from klondike.playtest.console import ConsoleGame

logger = logging.getLogger(__name__)


@click.command()
@click.argument("saved_game", type=click.Path(exists=True), required=False)
@click.option(
    "--draw",
    "draw_count",
    type=click.Choice(["1", "3"]),
    default="1",
    help="Cards turned per draw",
)
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option("--max-recycles", type=int, default=None, help="Limit passes through the draw pile")
@click.option("--player", default="player", help="Name recorded as winner")
@click.option("--save", "save_path", type=click.Path(), default=None, help="Write the session JSON here on exit")
@click.option("--debug", is_flag=True, help="Show face-down cards")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    saved_game: str | None,
    draw_count: str,
    seed: int | None,
    max_recycles: int | None,
    player: str,
    save_path: str | None,
    debug: bool,
    verbose: bool,
):
    """Play a game of Klondike solitaire.

    SAVED_GAME is optional - resumes a session written with --save.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    if saved_game:
        session = session_from_json(Path(saved_game).read_text())
        click.echo(f"Resuming game from {saved_game}")
    else:
        try:
            config = SessionConfig(
                draw_count=int(draw_count),
                max_recycles=max_recycles,
                seed=seed,
                player=player,
            )
        except ValueError as e:
            raise click.BadParameter(str(e))
        session = deal_new_game(config=config)
        click.echo(f"Seed: {config.seed} (use --seed {config.seed} to replay)")

    game = ConsoleGame(session, debug=debug)
    try:
        summary = game.run(output_fn=click.echo)
    except KeyboardInterrupt:
        click.echo("\n\nGame interrupted.")
        summary = session.summary()

    click.echo("")
    click.echo(json.dumps(summary, indent=2))

    if save_path:
        Path(save_path).write_text(session_to_json(session))
        logger.info(f"Session saved to {save_path}")


if __name__ == "__main__":
    main()
