import asyncio
from pathlib import Path
from typing import Any

import click

from polyscript.core.config import load_runtime_config
from polyscript.engines import MachineType, available_engines, from_loader
from polyscript.platform.context import ExecutionContext
from polyscript.platform.script.loader import FromDisk, Loader, infer_loader
from polyscript.telemetry import configure_telemetry, shutdown_telemetry

from .utils import (
    configure_logging,
    configure_logging_from_config,
    load_json_argument,
    output_error,
    output_result,
)

_MACHINE_BY_SUFFIX = {".py": MachineType.PYTHON, ".sql": MachineType.DUCKDB}


def _resolve_loader(script: str) -> Loader:
    path = Path(script)
    if path.is_file():
        return FromDisk(path.resolve())
    return infer_loader(script)


def _resolve_machine(machine: str | None, script: str) -> MachineType:
    if machine:
        return MachineType(machine)
    return _MACHINE_BY_SUFFIX.get(Path(script).suffix.lower(), MachineType.PYTHON)


def _load_map(value: str, option: str) -> dict[str, Any]:
    data = load_json_argument(value, option)
    if not isinstance(data, dict):
        raise click.BadParameter("expected a JSON object", param_hint=option)
    return data


@click.command(name="run")
@click.argument("script")
@click.option(
    "--machine",
    "-m",
    type=click.Choice([m.value for m in MachineType]),
    help="Engine to run the script with (default: from the file extension, else python)",
)
@click.option("--static", "static", help="Static data as a JSON object or @file.json")
@click.option(
    "--data",
    "-d",
    multiple=True,
    help="Runtime data as a JSON object or @file.json; may be repeated",
)
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Config file")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def run_script(
    script: str,
    machine: str | None,
    static: str | None,
    data: tuple[str, ...],
    config_path: Path | None,
    json_output: bool,
    debug: bool,
) -> None:
    """Compile a script once and evaluate it.

    \b
    SCRIPT can be a file path, an http(s):// URL or inline script text.
    Runtime data is merged in the order given; later values win.

    \b
    Examples:
        polyscript run greet.py --data '{"name": "World"}'
        polyscript run "ctx['input_data']['x'] * 2" --data '{"x": 21}'
        polyscript run report.sql --static @defaults.json --data '{"limit": 5}'
    """
    # Configure logging first
    configure_logging(debug)

    try:
        asyncio.run(
            _run_script_impl(
                script=script,
                machine=machine,
                static=static,
                data=data,
                config_path=config_path,
                json_output=json_output,
                debug=debug,
            )
        )
    except click.ClickException:
        raise
    except KeyboardInterrupt:
        if not json_output:
            click.echo("\nOperation cancelled by user", err=True)
        raise click.Abort() from None
    except Exception as e:
        output_error(e, json_output, debug)


async def _run_script_impl(
    *,
    script: str,
    machine: str | None,
    static: str | None,
    data: tuple[str, ...],
    config_path: Path | None,
    json_output: bool,
    debug: bool,
) -> None:
    """Async implementation of the run command."""
    config = load_runtime_config(config_path)
    configure_logging_from_config(config.logging, debug)

    static_data = _load_map(static, "--static") if static else None
    runtime_data = [_load_map(value, "--data") for value in data]

    machine_type = _resolve_machine(machine, script)
    if machine_type not in available_engines():
        raise click.BadParameter(
            f"no engine available for {machine_type.value}", param_hint="--machine"
        )

    configure_telemetry(config.telemetry)
    try:
        evaluator = from_loader(
            machine_type, _resolve_loader(script), static_data, keys=config.context
        )

        ctx = ExecutionContext()
        if runtime_data:
            ctx = evaluator.add_data_to_context(ctx, *runtime_data)

        response = await evaluator.eval(ctx)
    finally:
        shutdown_telemetry()

    output_result(response.interface(), json_output)
    if debug and not json_output:
        click.echo(
            f"{response.type().value} result from {response.script_exe_id} in {response.exec_time}",
            err=True,
        )
