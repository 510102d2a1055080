import sys
from pathlib import Path
from typing import List, Optional

import typer

from stubsmith.app import StubsmithApp
from stubsmith.common import bus
from stubsmith.generation import load_rules_file, parse_rule
from stubsmith.needle import L
from stubsmith.spec import StubOptions, StubsmithError, TypeReplacement


def read_body(body: Optional[str]) -> Optional[str]:
    if body is None:
        return None
    if body == "-":
        return sys.stdin.read()
    try:
        return Path(body).read_text(encoding="utf-8")
    except OSError as e:
        raise StubsmithError(f"Could not read body fragment '{body}': {e}") from e


def build_options(
    app: StubsmithApp,
    name: Optional[str] = None,
    body: Optional[str] = None,
    replace_type: Optional[List[str]] = None,
    rules: Optional[Path] = None,
    keep_common: bool = False,
    exclude: Optional[List[str]] = None,
    no_help: bool = False,
    decorator: Optional[List[str]] = None,
) -> StubOptions:
    type_rules: List[TypeReplacement] = []
    if rules is not None:
        type_rules.extend(load_rules_file(rules))
    type_rules.extend(parse_rule(text) for text in replace_type or [])

    return app.options_from_config(
        name=name,
        body=read_body(body),
        type_replacements=type_rules,
        exclude=exclude or [],
        # Only an explicit flag overrides the project config.
        exclude_common=False if keep_common else None,
        include_help=False if no_help else None,
        decorators=decorator or [],
    )


def emit(text: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(text.rstrip("\n"))
        return

    if not text.endswith("\n"):
        text += "\n"
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        bus.error(L.stub.error, error=e)
        raise typer.Exit(code=1)
    bus.success(L.stub.written, path=output)
