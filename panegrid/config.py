"""
Container Configuration
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .tabs import DEFAULT_LABEL_TEMPLATE
from .tracks import MIN_TRACK_SIZE


def _env_flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() not in ("", "0", "false", "no")


@dataclass
class ContainerConfig:
    """Layout engine configuration."""

    # Initial viewport, used for the first row and column
    width: int = 1920
    height: int = 1080

    # Floor for tracks receiving space under priority redistribution
    min_track_size: int = MIN_TRACK_SIZE

    # Default tab label; {n} is the 1-based position of the new tab
    label_template: str = DEFAULT_LABEL_TEMPLATE

    # Log every event published on the bus
    debug_events: bool = False

    def __post_init__(self):
        """Reject sizes the grid cannot be built from."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Invalid viewport: {self.width}x{self.height}. Use positive sizes"
            )
        if self.min_track_size < 1:
            raise ValueError(
                f"Invalid min_track_size: {self.min_track_size}. Use 1 or more"
            )
        if "{n}" not in self.label_template:
            raise ValueError(
                f"Invalid label_template: {self.label_template!r}. Include {{n}}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ContainerConfig:
        """
        Build a configuration from PANEGRID_* environment variables.

        Recognised: PANEGRID_WIDTH, PANEGRID_HEIGHT, PANEGRID_MIN_TRACK_SIZE,
        PANEGRID_LABEL_TEMPLATE, PANEGRID_DEBUG. Unset variables keep the
        defaults.
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        for key, name in (
            ("width", "PANEGRID_WIDTH"),
            ("height", "PANEGRID_HEIGHT"),
            ("min_track_size", "PANEGRID_MIN_TRACK_SIZE"),
        ):
            if name in env:
                try:
                    kwargs[key] = int(env[name])
                except ValueError:
                    raise ValueError(f"Invalid {name}: {env[name]!r}. Use an integer")
        if "PANEGRID_LABEL_TEMPLATE" in env:
            kwargs["label_template"] = env["PANEGRID_LABEL_TEMPLATE"]
        kwargs["debug_events"] = _env_flag(env.get("PANEGRID_DEBUG"))
        return cls(**kwargs)
