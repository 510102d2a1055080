from pathlib import Path
from typing import List, Optional

import typer

from stubsmith.cli.factories import make_app
from stubsmith.common import bus, stubsmith_needle as nexus
from stubsmith.needle import L
from stubsmith.spec import StubsmithError
from .options import build_options, emit


def stub_command(
    target: str = typer.Argument(..., help="Callable to stub, e.g. 'pkg.mod:func'."),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help=nexus.get(L.cli.option.name.help)
    ),
    body: Optional[str] = typer.Option(
        None, "--body", "-b", help=nexus.get(L.cli.option.body.help)
    ),
    replace_type: Optional[List[str]] = typer.Option(
        None, "--replace-type", "-r", help=nexus.get(L.cli.option.replace_type.help)
    ),
    rules: Optional[Path] = typer.Option(
        None, "--rules", help=nexus.get(L.cli.option.rules.help)
    ),
    keep_common: bool = typer.Option(
        False, "--keep-common", help=nexus.get(L.cli.option.keep_common.help)
    ),
    exclude: Optional[List[str]] = typer.Option(
        None, "--exclude", "-x", help=nexus.get(L.cli.option.exclude.help)
    ),
    no_help: bool = typer.Option(
        False, "--no-help", help=nexus.get(L.cli.option.no_help.help)
    ),
    decorator: Optional[List[str]] = typer.Option(
        None, "--decorator", "-d", help=nexus.get(L.cli.option.decorator.help)
    ),
    static: bool = typer.Option(
        False, "--static", help=nexus.get(L.cli.option.static.help)
    ),
    imports: bool = typer.Option(
        True, "--imports/--no-imports", help=nexus.get(L.cli.option.imports.help)
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help=nexus.get(L.cli.option.output.help)
    ),
):
    try:
        app_instance = make_app(static=static)
        options = build_options(
            app_instance,
            name=name,
            body=body,
            replace_type=replace_type,
            rules=rules,
            keep_common=keep_common,
            exclude=exclude,
            no_help=no_help,
            decorator=decorator,
        )
        bus.debug(
            L.stub.inspecting, target=target, mode="static" if static else "runtime"
        )
        text = app_instance.generate_stub(target, options, with_imports=imports)
    except StubsmithError as e:
        bus.error(L.stub.error, error=e)
        raise typer.Exit(code=1)

    emit(text, output)
