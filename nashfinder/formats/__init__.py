"""Game file parsers and serializers.

Formats register themselves by file extension. Only the native JSON format
(``.json``) ships with nashfinder.
"""
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from nashfinder.core.errors import GameFormatError

if TYPE_CHECKING:
    from nashfinder.models.game import StrategicGame

Parser = Callable[..., "StrategicGame"]
Serializer = Callable[["StrategicGame"], str]

# Format registry: extension -> (parser, serializer)
_FORMATS: dict[str, tuple[Parser, Serializer | None]] = {}


def register_format(
    extension: str,
    parser: Parser,
    serializer: Serializer | None = None,
) -> None:
    """Register a format handler."""
    _FORMATS[extension.lower()] = (parser, serializer)


def _handlers(ext: str) -> tuple[Parser, Serializer | None]:
    if ext not in _FORMATS:
        supported = ", ".join(_FORMATS.keys())
        raise GameFormatError(f"Unsupported format: {ext or '(none)'}. Supported: {supported}")
    return _FORMATS[ext]


def load_game(path: str | Path) -> "StrategicGame":
    """Load a game from a file path."""
    path = Path(path)
    parser, _ = _handlers(path.suffix.lower())
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise GameFormatError(f"Could not read game file {path}: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise GameFormatError(f"Could not read game file {path}: not UTF-8 text") from e
    return parser(content, filename=path.name)


def parse_game(content: str, filename: str) -> "StrategicGame":
    """Parse game content, inferring format from filename."""
    parser, _ = _handlers(Path(filename).suffix.lower())
    return parser(content, filename=filename)


def save_game(game: "StrategicGame", path: str | Path, format: str | None = None) -> None:
    """Save a game to a file."""
    path = Path(path)
    _, serializer = _handlers(format or path.suffix.lower())
    if serializer is None:
        raise GameFormatError(f"Format {format or path.suffix} does not support serialization")
    path.write_text(serializer(game), encoding="utf-8")


def supported_formats() -> list[str]:
    """Return list of supported file extensions."""
    return list(_FORMATS.keys())


# Import format modules to trigger registration
from nashfinder.formats import json_format  # noqa: E402, F401
