"""CLI entrypoint for bytefind."""

from typing import Optional, Tuple

import click

from bytefind.config import ConfigurationError, load_config
from bytefind.logging_setup import configure_logging
from bytefind.tools.coordinator import SearchCoordinator


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("args", nargs=-1, metavar="QUERY [ROOT]...")
@click.option("-r", "recursive", is_flag=True, help="Search directories recursively")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="YAML file with concurrency limits and log level",
)
def main(args: Tuple[str, ...], recursive: bool, config_path: Optional[str]) -> None:
    """Print files under ROOT (default: .) whose content contains QUERY."""
    if not args:
        click.echo("no arguments")
        return

    configure_logging()
    try:
        config = load_config(config_path).config
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc

    if recursive:
        config = config.model_copy(update={"recursive": True})
    configure_logging(config.log_level)

    query, roots = args[0], list(args[1:]) or ["."]
    summary = SearchCoordinator(config).run(query, roots, on_match=click.echo)
    for line in summary.summary_lines():
        click.echo(line)
