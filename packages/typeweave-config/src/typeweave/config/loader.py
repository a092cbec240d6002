import keyword
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

from typeweave.spec import (
    AnnotationKind,
    DEFAULT_HOLE_MARKER,
    DEFAULT_PLACEHOLDER,
    DEFAULT_WEAK_TYPES,
    WeakTypeRule,
)

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib


@dataclass
class TypeweaveConfig:
    hole_marker: str = DEFAULT_HOLE_MARKER
    placeholder: str = DEFAULT_PLACEHOLDER
    # Checked in order, the first matching rule wins.
    weak_types: Tuple[WeakTypeRule, ...] = DEFAULT_WEAK_TYPES
    kinds: List[AnnotationKind] = field(default_factory=lambda: list(AnnotationKind))


def _find_pyproject_toml(search_path: Path) -> Path:
    current_dir = search_path.resolve()
    while True:
        pyproject_path = current_dir / "pyproject.toml"
        if pyproject_path.is_file():
            return pyproject_path
        if current_dir.parent == current_dir:
            break
        current_dir = current_dir.parent
    raise FileNotFoundError("Could not find pyproject.toml in any parent directory.")


def _parse_kinds(raw: List[str]) -> List[AnnotationKind]:
    kinds = []
    for name in raw:
        try:
            kinds.append(AnnotationKind(name))
        except ValueError:
            valid = ", ".join(k.value for k in AnnotationKind)
            raise ValueError(
                f"Unknown annotation kind '{name}' in [tool.typeweave]. Expected one of: {valid}"
            )
    return kinds


def _parse_marker(key: str, value: Any) -> str:
    # Markers are written into code as plain names.
    if (
        not isinstance(value, str)
        or not value.isidentifier()
        or keyword.iskeyword(value)
    ):
        raise ValueError(
            f"'{key}' in [tool.typeweave] must be a Python identifier, got {value!r}"
        )
    return value


def load_config_from_path(search_path: Path) -> TypeweaveConfig:
    try:
        config_path = _find_pyproject_toml(search_path)
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        typeweave_data: Dict[str, Any] = data.get("tool", {}).get("typeweave", {})
    except FileNotFoundError:
        return TypeweaveConfig()

    config = TypeweaveConfig(
        hole_marker=_parse_marker(
            "hole_marker", typeweave_data.get("hole_marker", DEFAULT_HOLE_MARKER)
        ),
        placeholder=_parse_marker(
            "placeholder", typeweave_data.get("placeholder", DEFAULT_PLACEHOLDER)
        ),
    )
    if "weak_types" in typeweave_data:
        # TOML tables keep their key order.
        config.weak_types = tuple(
            WeakTypeRule(needle, int(weight))
            for needle, weight in typeweave_data["weak_types"].items()
        )
    if "kinds" in typeweave_data:
        config.kinds = _parse_kinds(typeweave_data["kinds"])
    return config
