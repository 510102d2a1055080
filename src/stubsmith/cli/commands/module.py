from pathlib import Path
from typing import List, Optional

import typer

from stubsmith.cli.factories import make_app
from stubsmith.common import bus, stubsmith_needle as nexus
from stubsmith.needle import L
from stubsmith.spec import StubsmithError
from .options import build_options, emit


def module_command(
    module: str = typer.Argument(..., help="Importable module name, e.g. 'json'."),
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
    include_imported: bool = typer.Option(
        False,
        "--include-imported",
        help=nexus.get(L.cli.option.include_imported.help),
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help=nexus.get(L.cli.option.output.help)
    ),
):
    try:
        app_instance = make_app()
        options = build_options(
            app_instance,
            body=body,
            replace_type=replace_type,
            rules=rules,
            keep_common=keep_common,
            exclude=exclude,
            no_help=no_help,
            decorator=decorator,
        )
        text = app_instance.generate_module_stubs(
            module, options, include_imported=include_imported
        )
    except StubsmithError as e:
        bus.error(L.stub.error, error=e)
        raise typer.Exit(code=1)

    emit(text, output)
