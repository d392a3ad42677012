"""Export the JSON Schema for the run configuration DSL.

Editors and CI can validate run configs against the exported schema.
"""

from __future__ import annotations

from pathlib import Path

import typer
import ujson as json

from network_evolution.dsl import RunConfig

app = typer.Typer(help="Export JSON Schema for `RunConfig`.")


@app.command()
def main(
    out: Path = typer.Argument(..., help="Output path (usually .json)."),
    pretty: bool = typer.Option(True, help="Write pretty-printed JSON."),
) -> None:
    schema = RunConfig.model_json_schema()
    text = json.dumps(schema, indent=2 if pretty else 0)
    out.write_text(text)
    typer.echo(f"Wrote config schema to {out}")


if __name__ == "__main__":
    app()
