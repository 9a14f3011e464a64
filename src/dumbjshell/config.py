"""Shell configuration.

Configuration via environment variables, overridable per field:

- ``DUMBJSHELL_PROMPT`` — prompt shown before each line (default: ``dumbjshell> ``)
- ``DUMBJSHELL_LOG_LEVEL`` — stdlib logging level name (default: ``WARNING``)
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

DEFAULT_PROMPT = "dumbjshell> "
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class ShellConfig:
    prompt: str = DEFAULT_PROMPT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(
        cls,
        prompt: str | None = None,
        log_level: str | None = None,
    ) -> ShellConfig:
        """Build a config from the environment; explicit arguments win."""
        return cls(
            prompt=prompt
            if prompt is not None
            else os.environ.get("DUMBJSHELL_PROMPT", DEFAULT_PROMPT),
            log_level=(
                log_level
                if log_level is not None
                else os.environ.get("DUMBJSHELL_LOG_LEVEL", DEFAULT_LOG_LEVEL)
            ).upper(),
        )


def configure_logging(config: ShellConfig) -> None:
    """Send log records to stderr so they never mix with shell output."""
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format=LOG_FORMAT)
    logging.getLogger("dumbjshell").setLevel(level)
