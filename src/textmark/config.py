"""Project configuration loaded from pyproject.toml."""

from __future__ import annotations

import re
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

# Named colors, #rgb[a] and #rrggbb[aa] hex, and rgb()/hsl() style functions
COLOR_PATTERN = re.compile(
    r"(?:[a-zA-Z]+|#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})"
    r"|(?:rgb|rgba|hsl|hsla)\(\s*[0-9.%\s,/]+\))"
)


class TextMarkConfig(BaseModel):
    """Configuration for textmark."""

    # Annotator rendering
    base_selector: str = "text"
    extra_stopwords: list[str] = Field(default_factory=list)

    # Occurrence map
    occurrence_selector: str = "occurrence"
    map_extent: float = Field(default=1000.0, gt=0)
    map_margin: float = Field(default=10.0, ge=0)
    snippet_half_width: int = Field(default=100, gt=0)
    highlight_color: str = "yellow"

    @field_validator("highlight_color")
    @classmethod
    def _check_color(cls, value: str) -> str:
        if not COLOR_PATTERN.fullmatch(value):
            raise ValueError(f"highlight_color={value!r} is not a CSS color")
        return value

    @model_validator(mode="after")
    def _check_axis(self) -> TextMarkConfig:
        if 2 * self.map_margin >= self.map_extent:
            raise ValueError(
                f"map_margin={self.map_margin} leaves no room on an axis of "
                f"extent {self.map_extent}"
            )
        return self


@lru_cache(maxsize=1)
def load_config() -> TextMarkConfig:
    """Load configuration from pyproject.toml.

    Returns:
        TextMarkConfig with settings from [tool.textmark] section,
        falling back to defaults if not found.
    """
    pyproject_path = _find_pyproject()
    if pyproject_path is None:
        return TextMarkConfig()

    with pyproject_path.open("rb") as f:
        data = tomllib.load(f)

    tool_config: dict[str, Any] = data.get("tool", {}).get("textmark", {})
    return TextMarkConfig(**tool_config)


def _find_pyproject() -> Path | None:
    """Find pyproject.toml by walking up from current file."""
    current = Path(__file__).resolve().parent
    for _ in range(10):  # Max 10 levels up
        candidate = current / "pyproject.toml"
        if candidate.exists():
            return candidate
        if current.parent == current:
            break
        current = current.parent
    return None


# Convenience accessor
config = load_config()
