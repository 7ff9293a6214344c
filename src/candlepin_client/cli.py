"""Command-line interface for interacting with a Candlepin server.

Connection and credential options belong to the top-level command and
apply to every subcommand::

    candlepin --host cp.example.com -u admin -p admin owners list
"""
from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests
import typer

try:  # pragma: no cover - exercised in runtime environments
    from rich import box
    from rich.console import Console
    from rich.table import Table
except ImportError as exc:  # pragma: no cover - optional dependency guard
    raise RuntimeError(
        "The CLI requires Rich for table rendering. Install the CLI extras via "
        "'pip install candlepin-client[cli]' to enable this command."
    ) from exc

from .client import BasicAuthClient, CandlepinClient, ClientCertificateClient, NoAuthClient
from .cli_schema import CLI_TABLE_VIEWS, TableView
from .exceptions import CandlepinError, RequestError
from .http import HttpResponse

app = typer.Typer(help="Candlepin entitlement server CLI.", no_args_is_help=True)

owners_app = typer.Typer(help="Owner operations.")
consumers_app = typer.Typer(help="Consumer operations.")
users_app = typer.Typer(help="User operations.")
roles_app = typer.Typer(help="Role operations.")
app.add_typer(owners_app, name="owners")
app.add_typer(consumers_app, name="consumers")
app.add_typer(users_app, name="users")
app.add_typer(roles_app, name="roles")

console = Console(force_terminal=False, color_system=None)

JSON_OPTION = typer.Option(False, "--json", "-j", help="Return raw JSON instead of a table.")


@dataclass(slots=True)
class ConnectionOptions:
    """Options collected by the top-level callback; turned into a client per command."""

    host: str = "localhost"
    port: int = 8443
    base_path: str = "/candlepin"
    use_ssl: bool = True
    verify_ssl: bool = False
    ca_path: Path | None = None
    timeout: float = 3.0
    username: str | None = None
    password: str | None = None
    cert_path: Path | None = None
    key_path: Path | None = None


def _build_client(options: ConnectionOptions) -> CandlepinClient:
    connection: dict[str, Any] = {
        "host": options.host,
        "port": options.port,
        "base_path": options.base_path,
        "use_ssl": options.use_ssl,
        "insecure": not options.verify_ssl,
        "timeout": options.timeout,
    }

    if options.ca_path:
        expanded_ca = Path(options.ca_path).expanduser()
        if not expanded_ca.exists():
            raise typer.BadParameter("CA file not found for --ca-path option.")
        if not options.verify_ssl:
            raise typer.BadParameter("Cannot combine --ca-path with --no-verify.")
        connection["ca_path"] = str(expanded_ca)

    if options.cert_path or options.key_path:
        if not (options.cert_path and options.key_path):
            raise typer.BadParameter("--cert and --key must be given together.")
        if options.username:
            raise typer.BadParameter("Cannot combine --cert/--key with --username.")
        return ClientCertificateClient.from_files(
            Path(options.cert_path).expanduser(),
            Path(options.key_path).expanduser(),
            **connection,
        )

    if options.username:
        if options.password is None:
            raise typer.BadParameter("--password is required when --username is given.")
        return BasicAuthClient(username=options.username, password=options.password, **connection)

    return NoAuthClient(**connection)


def _echo_json(payload: Any) -> None:
    # Bodies without a JSON content type arrive undecoded.
    if isinstance(payload, bytes):
        typer.echo(payload.decode("utf-8", errors="replace"))
        return
    typer.echo(json.dumps(payload, indent=2, default=str))


def _render_rich_table(view: TableView, rows: Sequence[Mapping[str, Any]]) -> None:
    table = Table(title=view.title, box=box.SIMPLE, header_style="bold cyan")
    for column in view.columns:
        table.add_column(column.header, justify=column.justify)
    ordered = sorted(rows, key=view.sort_key) if view.sort_key else rows
    for row in ordered:
        table.add_row(*(column.render(row) for column in view.columns))
    console.print(table)


def _present_output(payload: Any, *, view_id: str, json_output: bool) -> None:
    view = CLI_TABLE_VIEWS.get(view_id)
    rows: list[Mapping[str, Any]] = []
    if isinstance(payload, list):
        rows = [item for item in payload if isinstance(item, Mapping)]
    if json_output or view is None or not rows:
        _echo_json(payload)
        return
    _render_rich_table(view, rows)


def _handle_request_error(exc: RequestError) -> None:
    message = f"Request failed (status {exc.status_code}): {exc}"
    if exc.details:
        message += f"\nDetails: {exc.details}"
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _fail(message: str) -> None:
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _call(ctx: typer.Context, operation: Callable[[CandlepinClient], HttpResponse]) -> Any:
    """Build a client from the global options, run ``operation`` and unwrap its payload.

    Failing to load credentials or to complete the request ends the command
    with exit code 1.
    """

    try:
        client = _build_client(ctx.obj)
    except (OSError, ValueError) as exc:
        _fail(f"Could not load client credentials: {exc}")
    with client:
        try:
            return operation(client).ok_content()
        except RequestError as exc:
            _handle_request_error(exc)
        except requests.RequestException as exc:
            reason = str(exc).strip() or exc.__class__.__name__
            _fail(f"Failed to communicate with Candlepin at {client.base_url}: {reason}")
        except CandlepinError as exc:
            _fail(str(exc))


@app.callback()
def main_options(
    ctx: typer.Context,
    host: str = typer.Option(
        "localhost", "--host", envvar="CANDLEPIN_HOST", help="Candlepin server host."
    ),
    port: int = typer.Option(8443, "--port", envvar="CANDLEPIN_PORT", help="Server port."),
    base_path: str = typer.Option(
        "/candlepin",
        "--base-path",
        envvar="CANDLEPIN_BASE_PATH",
        help="Servlet context the API is served under.",
    ),
    use_ssl: bool = typer.Option(
        True, "--ssl/--no-ssl", envvar="CANDLEPIN_USE_SSL", help="Connect over HTTPS."
    ),
    verify_ssl: bool = typer.Option(
        False,
        "--verify/--no-verify",
        envvar="CANDLEPIN_VERIFY_SSL",
        help="Enable or disable TLS certificate verification.",
    ),
    ca_path: Path | None = typer.Option(
        None,
        "--ca-path",
        envvar="CANDLEPIN_CA_PATH",
        help="Path to a CA bundle used for TLS verification.",
    ),
    timeout: float = typer.Option(3.0, "--timeout", help="Connection timeout (seconds)."),
    username: str | None = typer.Option(
        None, "--username", "-u", envvar="CANDLEPIN_USERNAME", help="Username for basic auth."
    ),
    password: str | None = typer.Option(
        None, "--password", "-p", envvar="CANDLEPIN_PASSWORD", help="Password for basic auth."
    ),
    cert_path: Path | None = typer.Option(
        None,
        "--cert",
        envvar="CANDLEPIN_CLIENT_CERT",
        help="PEM client certificate for certificate authentication.",
    ),
    key_path: Path | None = typer.Option(
        None, "--key", envvar="CANDLEPIN_CLIENT_KEY", help="PEM private key matching --cert."
    ),
) -> None:
    ctx.obj = ConnectionOptions(
        host=host,
        port=port,
        base_path=base_path,
        use_ssl=use_ssl,
        verify_ssl=verify_ssl,
        ca_path=ca_path,
        timeout=timeout,
        username=username,
        password=password,
        cert_path=cert_path,
        key_path=key_path,
    )


@app.command("status")
def status(ctx: typer.Context) -> None:
    """Show the server status."""

    _echo_json(_call(ctx, lambda client: client.status.get()))


@owners_app.command("list")
def owners_list(ctx: typer.Context, output_json: bool = JSON_OPTION) -> None:
    """List owners."""

    owners = _call(ctx, lambda client: client.owners.list())
    _present_output(owners, view_id="owners.list", json_output=output_json)


@owners_app.command("create")
def owners_create(
    ctx: typer.Context,
    key: str = typer.Option(..., "--key", help="Owner key."),
    display_name: str | None = typer.Option(None, "--display-name", help="Defaults to the key."),
    parent: str | None = typer.Option(None, "--parent", help="Parent owner id."),
) -> None:
    """Create an owner."""

    owner = _call(
        ctx,
        lambda client: client.owners.create(
            key=key, display_name=display_name or key, parent_owner=parent
        ),
    )
    _echo_json(owner)


@owners_app.command("pools")
def owners_pools(
    ctx: typer.Context,
    key: str = typer.Option(..., "--key", help="Owner key."),
    consumer: str | None = typer.Option(None, "--consumer", help="Consumer uuid filter."),
    product: str | None = typer.Option(None, "--product", help="Product id filter."),
    listall: bool = typer.Option(False, "--listall", help="Include pools the consumer cannot use."),
    output_json: bool = JSON_OPTION,
) -> None:
    """List the pools of an owner."""

    pools = _call(
        ctx,
        lambda client: client.owners.pools(
            key=key, consumer=consumer, product=product, listall=listall or None
        ),
    )
    _present_output(pools, view_id="pools.list", json_output=output_json)


@consumers_app.command("register")
def consumers_register(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Consumer name."),
    owner: str = typer.Option(..., "--owner", help="Owner key to register under."),
    consumer_type: str = typer.Option("system", "--type", help="Consumer type label."),
    activation_key: list[str] = typer.Option(
        [], "--activation-key", help="Activation key (repeatable).", show_default=False
    ),
    as_user: str | None = typer.Option(None, "--as-user", help="Register on behalf of a user."),
) -> None:
    """Register a consumer and print it, identity certificate included."""

    consumer = _call(
        ctx,
        lambda client: client.consumers.register(
            name=name,
            owner=owner,
            type=consumer_type,
            activation_keys=list(activation_key),
            username=as_user,
        ),
    )
    _echo_json(consumer)


@consumers_app.command("get")
def consumers_get(
    ctx: typer.Context,
    uuid: str = typer.Option(..., "--uuid", help="Consumer uuid."),
) -> None:
    """Show a consumer."""

    _echo_json(_call(ctx, lambda client: client.consumers.get(uuid=uuid)))


@users_app.command("list")
def users_list(ctx: typer.Context, output_json: bool = JSON_OPTION) -> None:
    """List users."""

    users = _call(ctx, lambda client: client.users.list())
    _present_output(users, view_id="users.list", json_output=output_json)


@roles_app.command("list")
def roles_list(ctx: typer.Context, output_json: bool = JSON_OPTION) -> None:
    """List roles."""

    roles = _call(ctx, lambda client: client.roles.list())
    _present_output(roles, view_id="roles.list", json_output=output_json)


def main() -> None:  # pragma: no cover - console entrypoint
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
