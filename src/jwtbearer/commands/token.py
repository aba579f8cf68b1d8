"""Token commands -- obtain access tokens and inspect assertions.

Provides the top-level ``token``, ``assertion`` and ``whoami`` commands.
All three act on the active provider, resolved from ``--provider``,
``JWTBEARER_PROVIDER``, ``./jwtbearer.json`` or the global default.

Typical workflow::

    jwtbearer assertion --decode     # check the claims that will be signed
    jwtbearer token                  # print an access token
    curl -H "$(jwtbearer token --header)" https://api.example.com/
"""

from __future__ import annotations

from typing import NoReturn, Optional

import typer

from jwtbearer.exceptions import JWTBearerError
from jwtbearer.output import OutputFormat, error, format_response, get_output, print_data, suggest
from jwtbearer.provider import JWTBearerProvider


def _fail(exc: JWTBearerError) -> NoReturn:
    error(str(exc))
    raise typer.Exit(code=exc.exit_code)


def _active_provider(ctx: typer.Context) -> JWTBearerProvider:
    """Resolve the active provider or exit with a usage error."""
    from jwtbearer.config import resolve_config

    cli_provider = ctx.obj.get("provider") if ctx.obj else None
    try:
        _, config = resolve_config(cli_provider=cli_provider)
    except JWTBearerError as exc:
        _fail(exc)
    if config is None:
        error("No provider selected.")
        suggest("Add one: jwtbearer provider add <name> --token-endpoint <url> ...")
        raise typer.Exit(code=2)
    return JWTBearerProvider(config)


def token_command(
    ctx: typer.Context,
    subject: Optional[str] = typer.Option(
        None, "--subject", "-s", help="Subject for per-user providers."
    ),
    header: bool = typer.Option(
        False, "--header", help="Print an Authorization header line instead."
    ),
) -> None:
    """Sign an assertion, exchange it, and print the access token.

    In JSON mode the whole token response is printed.

    Example::

        jwtbearer token
        jwtbearer --json token
        jwtbearer -p billing token --header
    """
    provider = _active_provider(ctx)
    try:
        token = provider.retrieve_token(subject)
    except JWTBearerError as exc:
        _fail(exc)

    if header:
        print_data(f"Authorization: {token.token_type or 'Bearer'} {token.access_token}")
    elif get_output().format == OutputFormat.JSON:
        format_response(token.model_dump(mode="json", exclude_none=True))
    else:
        print_data(token.access_token)


def assertion_command(
    ctx: typer.Context,
    subject: Optional[str] = typer.Option(
        None, "--subject", "-s", help="Subject for per-user providers."
    ),
    decode: bool = typer.Option(
        False, "--decode", "-d", help="Print the decoded header and claims."
    ),
) -> None:
    """Mint a signed client assertion without calling the token endpoint.

    Example::

        jwtbearer assertion
        jwtbearer assertion --decode
    """
    from jwtbearer.jose import decode_jws

    provider = _active_provider(ctx)
    try:
        assertion = provider.mint_assertion(subject)
    except JWTBearerError as exc:
        _fail(exc)

    if decode:
        header, claims = decode_jws(assertion)
        format_response({"header": header, "claims": claims})
    else:
        print_data(assertion)


def whoami_command(ctx: typer.Context) -> None:
    """Show the identity record reported for the active provider."""
    provider = _active_provider(ctx)
    format_response(provider.get_user_info().model_dump())
