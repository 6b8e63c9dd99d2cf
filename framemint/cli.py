"""Command line entry point.

Running ``framemint`` without a command mints the configured collection and its members once.
"""

import logging
from typing import Optional

import click

from framemint.config import Config
from framemint.logging import logger

__all__ = ["main"]


def _run(ctx: click.Context, func, done: Optional[str] = "Finished successfully"):
    try:
        func(Config.from_env())
    except Exception as e:
        click.echo(e)
        ctx.exit(1)
    if done:
        click.echo(done)


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, help="Log backend state at debug level.")
@click.pass_context
def main(ctx, verbose):
    """Mint an animated NFT collection and its members."""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if ctx.invoked_subcommand is None:
        ctx.invoke(mint)


@main.command()
@click.pass_context
def mint(ctx):
    """Mint the collection and its members (default)."""

    def _mint(config: Config):
        collection, members = config.nfts()
        result = config.orchestrator().run(collection, members)
        logger.info(f"Minted collection {result.collection.address}")

    _run(ctx, _mint)


@main.command()
@click.argument("address")
@click.option(
    "--member",
    default=0,
    show_default=True,
    help="Index of the member in the NFT plan whose data is uploaded.",
)
@click.pass_context
def update(ctx, address, member):
    """Upload new metadata and point the NFT at ADDRESS to it."""

    def _update(config: Config):
        _, members = config.nfts()
        if not 0 <= member < len(members):
            raise IndexError(f"NFT plan has no member {member}")
        config.orchestrator().update_nft(members[member], address)

    _run(ctx, _update)


@main.command()
@click.pass_context
def serve(ctx):
    """Start the HTTP trigger."""

    def _serve(config: Config):
        from framemint.server import create_app

        collection, members = config.nfts()
        app = create_app(config.orchestrator(), collection, members)
        app.run(host=config.host, port=config.port)

    # the server only returns once it is stopped
    _run(ctx, _serve, done=None)
