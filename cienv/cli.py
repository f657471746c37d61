"""
cienv CLI - query the CI orchestrator running the current process.

Command output goes to stdout, logs go to stderr.
"""

from __future__ import annotations

import json
import sys

import click

from cienv import __version__
from cienv.config import GeneralConfig
from cienv.detector import detect_orchestrator, new_orchestrator_specific_config_provider
from cienv.exceptions import LogRetrievalError, PipelineEnvError
from cienv.pipeline_env import read_pipeline_env
from cienv.telemetry import CustomData, Telemetry
from cienv.utils.logger import logger, register_secret, setup_logger


def _provider(config: GeneralConfig):
    return new_orchestrator_specific_config_provider(settings=config.orchestrator)


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


@click.group()
@click.version_option(version=__version__, prog_name="cienv")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit log records as JSON lines")
@click.option("--env-root-path", default=None, help="Root path of the pipeline environment")
@click.option("--correlation-id", default=None, help="Id attached to every log record")
@click.pass_context
def cli(ctx, verbose, json_logs, env_root_path, correlation_id):
    """Normalize CI orchestrator metadata."""
    config = GeneralConfig.from_env(
        verbose=verbose,
        json_logs=json_logs,
        env_root_path=env_root_path,
        correlation_id=correlation_id,
    )
    setup_logger(verbose=config.verbose, json_logs=config.json_logs, correlation_id=config.correlation_id)
    for secret in config.orchestrator.secrets():
        register_secret(secret)
    ctx.obj = config


@cli.command()
def detect():
    """Print the detected orchestrator."""
    click.echo(detect_orchestrator().value)


@cli.command()
@click.pass_obj
def info(config: GeneralConfig):
    """Print all orchestrator metadata as JSON."""
    _echo_json(_provider(config).info().to_dict())


@cli.command()
@click.pass_obj
def pr(config: GeneralConfig):
    """Print the pull-request config as JSON."""
    provider = _provider(config)
    pull_request = provider.get_pull_request_config()
    _echo_json(
        {
            "isPullRequest": provider.is_pull_request(),
            "branch": pull_request.branch,
            "base": pull_request.base,
            "key": pull_request.key,
        }
    )


@cli.command()
@click.pass_obj
def logs(config: GeneralConfig):
    """Print the logs of the current run, if the orchestrator provides them."""
    try:
        content = _provider(config).get_log()
    except LogRetrievalError as e:
        logger.warning(f"Could not retrieve logs: {e}")
        content = b""
    sys.stdout.buffer.write(content)
    sys.stdout.flush()


@cli.command("read-pipeline-env")
@click.option(
    "--secret",
    envvar="PIPER_pipelineEnv_SECRET",
    default="",
    show_envvar=True,
    help="Encrypt the output with this secret",
)
@click.pass_obj
def read_pipeline_env_command(config: GeneralConfig, secret: str):
    """Print the common pipeline environment as JSON (encrypted if a secret is given)."""
    register_secret(secret)
    try:
        output = read_pipeline_env(config.env_root_path, secret=secret, orchestrator=detect_orchestrator())
    except PipelineEnvError as e:
        logger.error(f"Error when reading pipeline environment: {e}")
        sys.exit(1)
    sys.stdout.buffer.write(output)
    sys.stdout.flush()


@cli.command()
@click.argument("step_name")
@click.option("--duration", default="0", help="Step duration in milliseconds")
@click.option("--error-code", default="0", help="Step error code")
@click.option("--error-category", default="", help="Step error category")
@click.option("--no-telemetry", is_flag=True, help="Only log the telemetry data")
@click.pass_obj
def telemetry(config: GeneralConfig, step_name, duration, error_code, error_category, no_telemetry):
    """Record telemetry for STEP_NAME."""
    telemetry_config = config.telemetry
    if no_telemetry:
        telemetry_config = telemetry_config.model_copy(update={"disabled": True})

    step_telemetry = Telemetry(telemetry_config, _provider(config))
    step_telemetry.initialize(step_name)
    step_telemetry.set_data(
        CustomData(duration=duration, error_code=error_code, error_category=error_category)
    )
    step_telemetry.send()


def main() -> None:
    """Main entry point for the cienv CLI."""
    cli()


if __name__ == "__main__":
    main()
