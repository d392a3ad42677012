"""Command-line utilities for the network_evolution package."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from . import get_version
from .api import evaluate_network, run_evolution
from .errors import EvolutionError
from .network import load_network

app = typer.Typer(help="Evolve feed-forward network weights without gradients")
console = Console()


@app.command()
def version() -> None:
    """Print the installed package version."""
    typer.echo(get_version())


@app.command()
def run(
    config: Annotated[Path, typer.Argument(..., exists=True, readable=True)],
    generations: Annotated[int | None, typer.Option(min=1)] = None,
    seed: Annotated[int, typer.Option()] = 0,
    out: Annotated[Path, typer.Option()] = Path("runs/best.json"),
    history: Annotated[Path | None, typer.Option(help="Write per-generation stats.")] = None,
    quiet: Annotated[bool, typer.Option(help="Only print the summary.")] = False,
) -> None:
    """Execute an evolutionary run and save the best network."""
    try:
        runner = run_evolution(
            config_path=config,
            generations=generations,
            seed=seed,
            out_path=out,
            history_path=history,
            quiet=quiet,
        )
    except EvolutionError as exc:
        console.print(f"[red]Run failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(runner.history_table())
    best = runner.best()
    if best is not None:
        console.print(f"[bold green]Best fitness:[/] {best.fitness:.6f}")
    console.print(f"[bold green]Network written:[/] {out}")


@app.command(context_settings={"ignore_unknown_options": True})
def predict(
    network: Annotated[Path, typer.Argument(..., exists=True, readable=True)],
    values: Annotated[list[float], typer.Argument(help="Input values.")],
) -> None:
    """Run a saved network on one input vector."""
    model = load_network(network)
    output = model.predict(values)
    typer.echo(" ".join(f"{value:.6f}" for value in output))


@app.command()
def evaluate(
    config: Annotated[Path, typer.Argument(..., exists=True, readable=True)],
    network: Annotated[Path, typer.Argument(..., exists=True, readable=True)],
) -> None:
    """Score a saved network against a config's training set."""
    try:
        fitness = evaluate_network(config, network)
    except EvolutionError as exc:
        console.print(f"[red]Evaluation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    typer.echo(f"{fitness:.6f}")


def main() -> None:
    """Entry point for `python -m network_evolution.cli`."""
    app()


if __name__ == "__main__":
    main()
