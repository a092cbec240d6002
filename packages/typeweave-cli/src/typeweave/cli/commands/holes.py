from pathlib import Path
from typing import List, Optional

import typer

from typeweave.analysis import fill_holes, strip_annotations
from typeweave.cli.factories import load_module, make_config
from typeweave.common import bus
from typeweave.spec import AnnotationKind


def holes_command(
    path: Path = typer.Argument(..., help="The Python file to print."),
    strip: bool = typer.Option(
        False, "--strip", help="Turn every existing annotation into a hole as well."
    ),
    kind: Optional[List[AnnotationKind]] = typer.Option(
        None,
        "--kind",
        "-k",
        help="Annotation sites to touch. Defaults to the configured kinds.",
    ),
):
    config = make_config()
    kinds = kind or config.kinds

    module = load_module(path)
    if strip:
        module = strip_annotations(module, hole=config.hole_marker, kinds=kinds)
    module = fill_holes(module, hole=config.hole_marker, kinds=kinds)
    bus.data(module.code)
