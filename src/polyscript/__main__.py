import click

from polyscript.cli.run import run_script
from polyscript.core import PACKAGE_NAME, PACKAGE_VERSION


@click.group(invoke_without_command=True)
@click.version_option(PACKAGE_VERSION, prog_name=PACKAGE_NAME)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """polyscript CLI"""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(run_script)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
