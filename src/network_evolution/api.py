"""Public API for downstream modules."""

from __future__ import annotations

from pathlib import Path

import ujson as json

from .dsl import RunConfig, load_run_config, save_run_config
from .evaluation import FitnessCalc
from .network import load_network
from .orchestrator import EvolutionRunner

__all__ = [
    "RunConfig",
    "load_config",
    "save_config",
    "run_evolution",
    "evaluate_network",
]


def load_config(path: str | Path) -> RunConfig:
    """Read a run config from disk."""
    return load_run_config(path)


def save_config(config: RunConfig, path: str | Path) -> None:
    """Persist a run config to disk."""
    save_run_config(config, path)


def run_evolution(
    config_path: str | Path,
    generations: int | None = None,
    seed: int = 0,
    out_path: str | Path = "runs/best.json",
    history_path: str | Path | None = None,
    quiet: bool = False,
) -> EvolutionRunner:
    """Entry point used by the CLI to run a full search."""
    config = load_config(config_path)
    runner = EvolutionRunner(config, seed=seed, quiet=quiet)
    runner.run(generations)
    runner.save_best(Path(out_path))
    if history_path is not None:
        history_path = Path(history_path)
        history_path.parent.mkdir(parents=True, exist_ok=True)
        history_path.write_text(
            json.dumps([stats.serialize() for stats in runner.history], indent=2)
        )
    return runner


def evaluate_network(config_path: str | Path, network_path: str | Path) -> float:
    """Fitness of a saved network against a config's training set."""
    config = load_config(config_path)
    network = load_network(network_path)
    return FitnessCalc(config.training).check(network)
