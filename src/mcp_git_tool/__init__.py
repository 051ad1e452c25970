import asyncio
import logging
from pathlib import Path

import click

from .config import AdapterConfig, load_environment_variables
from .logging_config import configure_logging
from .server import serve


@click.command()
@click.option(
    "--working-dir",
    "-w",
    type=click.Path(file_okay=False, path_type=Path),
    help="Default directory for operations that give no path",
)
@click.option(
    "--timeout",
    "-t",
    type=float,
    help="Seconds before a git invocation is killed",
)
@click.option("-v", "--verbose", count=True)
@click.option(
    "--test-mode",
    is_flag=True,
    help="Run in test mode for CI (stays alive without immediate stdio)",
)
def main(
    working_dir: Path | None, timeout: float | None, verbose: int, test_mode: bool
) -> None:
    """MCP Git Tool - git operations for MCP"""
    load_environment_variables(working_dir)

    log_level = None
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"

    config = AdapterConfig.from_env(
        working_dir=working_dir, timeout=timeout, log_level=log_level
    )
    configure_logging(config.log_level)
    logging.getLogger(__name__).debug(f"Configuration: {config}")

    asyncio.run(serve(config, test_mode=test_mode))


if __name__ == "__main__":
    main()
