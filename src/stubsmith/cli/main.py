import typer

from stubsmith.common import bus, stubsmith_needle as nexus
from stubsmith.needle import L
from .rendering import CliRenderer

from .commands.stub import stub_command
from .commands.module import module_command

app = typer.Typer(
    name="stubsmith",
    help=nexus.get(L.cli.app.description),
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=nexus.get(L.cli.option.verbose.help)
    ),
):
    # The CLI is the composition root. It decides *which* renderer to use.
    bus.set_renderer(CliRenderer(verbose=verbose))


app.command(name="stub", help=nexus.get(L.cli.command.stub.help))(stub_command)
app.command(name="module", help=nexus.get(L.cli.command.module.help))(module_command)


if __name__ == "__main__":
    app()
