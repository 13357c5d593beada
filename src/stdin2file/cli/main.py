"""
Main CLI entry point for stdin2file.
"""

import click

from stdin2file import __version__
from stdin2file.core import CompressionFormat, Config, Stdin2FileError
from stdin2file.core.logging_config import setup_logging
from stdin2file.pipeline import run_pipeline


def reject_execute(ctx, param, value):
    """--execute is reserved; running a command instead of reading stdin is not supported."""
    if value is not None:
        raise click.BadParameter("running a command is not supported, pipe its output to stdin")
    return value


@click.command()
@click.option("--chunk", "-c", required=True, type=click.IntRange(min=1), help="Maximum size of a single file [MiB]")
@click.option("--output", "-o", required=True, type=str, help="Base output file name")
@click.option("--compress", "-s", type=click.Choice(["xz", "gz", "zst"]), default=None, help="Compression mode")
@click.option("--max-files", "-m", type=click.IntRange(min=1), default=None, help="Number of files to keep (default: all)")
@click.option("--max-in-flight", type=click.IntRange(min=1), default=None, help="Maximum number of chunks being written at once (default: unbounded)")
@click.option(
    "--log-level",
    envvar="LOG_LEVEL",
    default="ERROR",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log verbosity (logs go to stderr)",
)
@click.option("--execute", "-e", default=None, hidden=True, expose_value=False, callback=reject_execute)
@click.version_option(__version__, prog_name="stdin2file")
def cli(chunk, output, compress, max_files, max_in_flight, log_level):
    """Write stdin to numbered files of fixed size, optionally compressed, keeping only the newest ones."""
    setup_logging("stdin2file", log_level=log_level)

    config = Config.from_megabytes(
        output,
        chunk,
        compression=CompressionFormat.parse(compress),
        max_files=max_files,
        max_in_flight=max_in_flight,
    )
    stdin = click.get_binary_stream("stdin")

    try:
        run_pipeline(config, stdin)
    except Stdin2FileError as e:
        raise click.ClickException(str(e))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
