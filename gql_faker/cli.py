"""Command-line interface for gql-faker."""

import asyncio
import logging
import threading
from pathlib import Path

import click
import httpx
import uvicorn

from .core.composer import SchemaComposer
from .core.config import DEFAULT_SCHEMA_DIR, ServerConfig, parse_header
from .core.editor import EditorSession
from .core.errors import CompositionError
from .server import create_app


@click.group()
@click.version_option()
def main():
    """Mock or extend a GraphQL API from an editable IDL schema.

    Serves an IDL editor, stores schemas per name and answers GraphQL
    queries with fake data.
    """
    pass


@main.command()
@click.option(
    "--schema-dir",
    "-d",
    default=DEFAULT_SCHEMA_DIR,
    type=click.Path(file_okay=False),
    help="Directory holding one <name>.graphql file per schema.",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="HTTP port (default: $PORT or 9002).",
)
@click.option(
    "--enable-edit-mode/--disable-edit-mode",
    "-E/-D",
    "edit_mode",
    default=True,
    help="Allow saving schemas. ENABLE_EDIT_MODE overrides this option.",
)
@click.option(
    "--forward-headers",
    "forward_headers",
    multiple=True,
    help="Request header to forward to the execution layer (repeatable).",
)
@click.option(
    "--cors-origin",
    "--co",
    "cors_origin",
    default=None,
    help="Value for Access-Control-Allow-Origin. Defaults to the request's Origin.",
)
@click.option(
    "--open",
    "-o",
    "open_browser",
    is_flag=True,
    help="Open the IDL editor in a browser.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def serve(
    schema_dir: str,
    port: int | None,
    edit_mode: bool,
    forward_headers: tuple[str, ...],
    cors_origin: str | None,
    open_browser: bool,
    verbose: bool,
):
    """Run the editor and the fake GraphQL API.

    Examples:

        gql-faker serve --open

        ENABLE_EDIT_MODE=false gql-faker serve -p 8080

        gql-faker serve --forward-headers Authorization
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = ServerConfig.from_env(
        schema_dir=Path(schema_dir),
        port=port,
        edit_mode=edit_mode,
        forward_headers=list(forward_headers),
        cors_origin=cors_origin,
        open_browser=open_browser,
    )
    click.secho(f"ENABLE_EDIT_MODE={config.edit_mode}", fg="magenta")

    app = create_app(config)
    editor_url = f"http://localhost:{config.port}/editor"

    click.echo()
    click.echo(click.style("✔", fg="green") + " Your GraphQL Fake API is ready to use")
    click.echo("  Here are your links:\n")
    click.echo(f"  {click.style('❯', fg='blue')} Interactive Editor:\t {editor_url}")
    click.echo(f"  {click.style('❯', fg='blue')} GraphQL API:\t http://localhost:{config.port}/graphql\n")

    if config.open_browser:
        threading.Timer(0.5, click.launch, args=[editor_url]).start()

    uvicorn.run(app, host="0.0.0.0", port=config.port, log_level="debug" if verbose else "info")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--extend",
    "-e",
    "base",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Base schema IDL the file extends.",
)
@click.option(
    "--print",
    "print_schema",
    is_flag=True,
    help="Print the composed schema.",
)
def check(file: str, base: str | None, print_schema: bool):
    """Check that an IDL file composes into a valid schema.

    Examples:

        gql-faker check ./schemas/default.graphql

        gql-faker check ./ext.graphql --extend ./base.graphql
    """
    composer = SchemaComposer()
    base_idl = Path(base).read_text(encoding="utf-8") if base else None
    try:
        schema = composer.compose(Path(file).read_text(encoding="utf-8"), base_idl, source_name=file)
    except CompositionError as e:
        click.secho(f"✘ {file}", fg="red", err=True)
        click.echo(e.message, err=True)
        raise SystemExit(1)

    click.secho(f"✔ {file}", fg="green")
    if print_schema:
        click.echo(composer.print_user_schema(schema))


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--name",
    "-n",
    default="",
    help="Schema name to save to (default schema if omitted).",
)
@click.option(
    "--url",
    "-u",
    default="http://localhost:9002",
    show_default=True,
    help="Root URL of a running gql-faker server.",
)
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="Extra request header as 'Name: value' (repeatable).",
)
def push(file: str, name: str, url: str, headers: tuple[str, ...]):
    """Replace a stored schema with the content of FILE.

    The text is composed first and only sent when it is valid.

    Examples:

        gql-faker push ./schema.graphql --name petstore
    """
    try:
        extra_headers = dict(parse_header(h) for h in headers)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--header")

    text = Path(file).read_text(encoding="utf-8")
    try:
        state = asyncio.run(_push(url, name, text, extra_headers))
    except httpx.HTTPError as e:
        raise click.ClickException(str(e) or e.__class__.__name__)

    if state.error:
        click.secho("✘ Not saved", fg="red", err=True)
        click.echo(state.error, err=True)
        raise SystemExit(1)
    click.secho(f"✔ Saved {file} as {name or 'default'}", fg="green")


async def _push(url: str, name: str, text: str, headers: dict[str, str]):
    async with EditorSession(url, name, headers=headers) as session:
        await session.initialize(fallback_to_default=False)
        session.edit(text)
        if not session.state.dirty:
            return session.state
        await session.save()
        return session.state


if __name__ == "__main__":
    main()
