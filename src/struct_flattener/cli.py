"""Command line interface entry point."""

from __future__ import annotations

import dataclasses
import logging
import sys

import click

from struct_flattener.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    FailureMode,
    OutputFormat,
    ProcessingOrder,
    default_configuration,
    load_configuration,
    write_placeholder_configuration,
)
from struct_flattener.definition_ingestion import (
    DefinitionDocumentError,
    read_definition_document,
)
from struct_flattener.expansion_run import (
    ExpansionReport,
    ExpansionRunError,
    execute_expansion_run,
)
from struct_flattener.flattening import FlattenError
from struct_flattener.results_writing import render_expansion_report, write_expansion_report

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="struct-flattener")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log flattening steps.")
def cli(verbose: bool) -> None:
    """Expand flatten markers in struct definitions into flat field lists."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=_LOG_FORMAT)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML settings template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a commented YAML settings file with the default values."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="expand")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML/JSON definition document",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path to a YAML/JSON settings file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Write the expansion report here instead of stdout",
)
@click.option(
    "--format",
    "output_format",
    required=False,
    type=click.Choice([member.value for member in OutputFormat]),
    help="Report format, overrides output.format",
)
@click.option(
    "--order",
    "processing_order",
    required=False,
    type=click.Choice([member.value for member in ProcessingOrder]),
    help="Processing order, overrides run.processing_order",
)
@click.option(
    "--lenient",
    is_flag=True,
    default=False,
    help="Report failing definitions and keep going instead of aborting.",
)
def expand(
    input_path: str,
    config_path: str | None,
    output_path: str | None,
    output_format: str | None,
    processing_order: str | None,
    lenient: bool,
) -> None:
    """Flatten every struct of a definition document and emit the report."""
    configuration = _resolve_configuration(
        config_path,
        output_format=output_format,
        processing_order=processing_order,
        lenient=lenient,
    )
    report = _run_expansion(input_path, configuration)
    if output_path:
        try:
            destination = write_expansion_report(
                report, output_path, configuration.output.format
            )
        except OSError as exc:
            raise CliError(str(exc)) from exc
        click.echo(str(destination))
    else:
        click.echo(render_expansion_report(report, configuration.output.format), nl=False)
    if not report.is_ok:
        raise CliError(f"{len(report.failures)} definition(s) could not be flattened.")


@cli.command(name="inspect")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML/JSON definition document",
)
@click.option(
    "--type",
    "type_name",
    required=True,
    help="Name of the struct whose flat fields should be listed",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path to a YAML/JSON settings file",
)
@click.option(
    "--order",
    "processing_order",
    required=False,
    type=click.Choice([member.value for member in ProcessingOrder]),
    help="Processing order, overrides run.processing_order",
)
def inspect_type(
    input_path: str,
    type_name: str,
    config_path: str | None,
    processing_order: str | None,
) -> None:
    """List the resolved fields of one struct."""
    configuration = _resolve_configuration(config_path, processing_order=processing_order)
    report = _run_expansion(input_path, configuration)
    flat_fields = report.registry.lookup(type_name)
    if flat_fields is None:
        raise CliError(f"Type '{type_name}' is not defined or failed to flatten.")
    for field in flat_fields:
        click.echo(f"{field.name}: {field.type_name}")


def _resolve_configuration(
    config_path: str | None,
    *,
    output_format: str | None = None,
    processing_order: str | None = None,
    lenient: bool = False,
) -> Configuration:
    try:
        configuration = (
            load_configuration(config_path) if config_path else default_configuration()
        )
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc

    run = configuration.run
    if processing_order:
        run = dataclasses.replace(run, processing_order=ProcessingOrder(processing_order))
    if lenient:
        run = dataclasses.replace(run, failure_mode=FailureMode.LENIENT)
    output = configuration.output
    if output_format:
        output = dataclasses.replace(output, format=OutputFormat(output_format))
    return dataclasses.replace(configuration, run=run, output=output)


def _run_expansion(input_path: str, configuration: Configuration) -> ExpansionReport:
    try:
        document = read_definition_document(input_path, configuration.flatten_marker)
        return execute_expansion_run(
            document.definitions,
            configuration=configuration,
            rejections=document.rejections,
        )
    except (
        DefinitionDocumentError,
        FlattenError,
        ExpansionRunError,
        OSError,
        ValueError,
    ) as exc:
        raise CliError(str(exc)) from exc


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), prog_name="struct-flattener", standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
