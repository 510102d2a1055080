from typing import Dict, Optional

import typer

from stubsmith.common.messaging import Renderer

_LEVEL_COLORS: Dict[str, Optional[str]] = {
    "debug": typer.colors.BRIGHT_BLACK,
    "info": None,
    "success": typer.colors.GREEN,
    "warning": typer.colors.YELLOW,
    "error": typer.colors.RED,
}

# Generated source owns stdout, so it can be piped into a file.
_STDERR_LEVELS = {"debug", "warning", "error"}


class CliRenderer(Renderer):
    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def render(self, message: str, level: str):
        if level == "debug" and not self.verbose:
            return
        typer.secho(
            message, fg=_LEVEL_COLORS.get(level), err=level in _STDERR_LEVELS
        )
