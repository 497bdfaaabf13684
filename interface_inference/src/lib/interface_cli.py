#!/usr/bin/env python3
"""
Command line entry point: read a JSON document and print inferred interfaces.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from infer_interfaces import infer_interfaces
from interface_config import (
    InterfaceConfigError,
    inference_defaults,
    render_options_from_config,
    root_name_from_config,
)

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


def _read_document(path: Optional[Path]) -> Any:
    if path is None or str(path) == "-":
        raw = sys.stdin.read()
        source = "<stdin>"
    else:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise typer.BadParameter(f"cannot read {path}: {exc}") from exc
        source = str(path)
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{source} is not valid JSON: {exc}") from exc


@app.command()
def main(
    path: Optional[Path] = typer.Argument(None, help="JSON file to read; '-' or omitted reads stdin."),
    root_name: Optional[str] = typer.Option(None, "--root-name", "-r", help="Name of the root interface."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to interface_inference.toml."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the listing here instead of stdout."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log registry decisions."),
) -> None:
    """Infer TypeScript interfaces from a JSON document."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    section = inference_defaults(config_path=config)
    try:
        options = render_options_from_config(section)
        name = root_name or root_name_from_config(section)
    except InterfaceConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc

    document = _read_document(path)
    listing = infer_interfaces(document, name, options)

    if output is None:
        typer.echo(listing)
    else:
        output.write_text(listing + "\n", encoding="utf-8")
        logger.info("Wrote interfaces to %s", output)


if __name__ == "__main__":
    app()
