from pathlib import Path

import libcst as cst
import typer

from typeweave.common import bus
from typeweave.config import TypeweaveConfig, load_config_from_path


def get_project_root() -> Path:
    return Path.cwd()


def make_config() -> TypeweaveConfig:
    try:
        return load_config_from_path(get_project_root())
    except ValueError as e:
        bus.error("config.error", error=str(e))
        raise typer.Exit(code=1)


def load_module(path: Path) -> cst.Module:
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        bus.error("file.read_error", path=str(path), error=str(e))
        raise typer.Exit(code=1)

    try:
        return cst.parse_module(source)
    except cst.ParserSyntaxError as e:
        bus.error("file.parse_error", path=str(path), error=str(e))
        raise typer.Exit(code=1)
