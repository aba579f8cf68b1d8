"""Provider commands -- manage stored provider configurations.

Provides the ``jwtbearer provider`` sub-command group to add, import, list,
show, remove and select providers. Each provider is one JSON file in the
providers directory; see :mod:`jwtbearer.config`.

Typical workflow::

    jwtbearer provider add billing \\
        --token-endpoint https://auth.example.com/oauth/token \\
        --certificate file:~/.keys/billing.pem \\
        --issuer billing-svc --subject billing-svc \\
        --audience https://auth.example.com
    jwtbearer provider use billing
    jwtbearer provider list
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from jwtbearer.output import error, format_response, get_output, info, success, suggest, warning


provider_app = typer.Typer(no_args_is_help=True)


def _check_and_save(name: str, raw: dict[str, object]) -> None:
    """Build a provider from *raw*, reject bad algorithms, warn on gaps, save."""
    from jwtbearer.config import save_provider
    from jwtbearer.exceptions import JWTBearerError
    from jwtbearer.jose import (
        check_algorithm_pair,
        validate_header_algorithm,
        validate_signing_algorithm,
    )
    from jwtbearer.models import ProviderConfig

    raw.setdefault("provider_name", name)
    try:
        config = ProviderConfig.from_mapping(raw)
    except ValueError as exc:
        error(f"Invalid provider configuration: {exc}")
        raise typer.Exit(code=2) from None

    try:
        check_algorithm_pair(
            validate_header_algorithm(config.jws_algorithm),
            validate_signing_algorithm(config.signing_algorithm),
        )
    except JWTBearerError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    for message in config.validate_config():
        warning(message)

    save_provider(name, config)
    success(f'Provider "{name}" saved.')
    suggest(f"Try it: jwtbearer -p {name} assertion --decode")


@provider_app.command("add")
def provider_add(
    name: str = typer.Argument(help="Provider name."),
    token_endpoint: str = typer.Option(..., "--token-endpoint", help="Token endpoint URL."),
    certificate: str = typer.Option(
        ..., "--certificate", help="Signing key source: env:VAR or file:/path."
    ),
    issuer: str = typer.Option("", "--issuer", help="iss claim."),
    subject: str = typer.Option("", "--subject", help="sub claim."),
    audience: str = typer.Option("", "--audience", help="aud claim."),
    jws_algorithm: str = typer.Option("RS256", "--alg", help="JOSE header algorithm."),
    signing_algorithm: str = typer.Option(
        "RSA-SHA256", "--signing-alg", help="Signing algorithm matching --alg."
    ),
    key_id: str = typer.Option("", "--kid", help="JOSE header key id."),
    jws_type: str = typer.Option("JWT", "--typ", help="JOSE header type."),
    grant_type: str = typer.Option("client_credentials", "--grant-type", help="grant_type value."),
    additional_headers: str = typer.Option(
        "", "--headers", help="Extra headers as 'key : value, key : value'."
    ),
    additional_body_params: str = typer.Option(
        "", "--body-params", help="Extra form fields as 'key : value, key : value'."
    ),
    scope: Optional[str] = typer.Option(None, "--scope", help="Scope to request."),
    per_user_mode: bool = typer.Option(
        False, "--per-user", help="Take the subject from each token request."
    ),
    callback_url: str = typer.Option("", "--callback-url", help="Host callback URL."),
) -> None:
    """Create or replace a provider from command-line options.

    Example::

        jwtbearer provider add billing --token-endpoint https://auth.example.com/oauth/token \\
            --certificate env:BILLING_KEY --issuer billing --subject billing \\
            --audience https://auth.example.com --alg ES256 --signing-alg ECDSA-SHA256
    """
    raw: dict[str, object] = {
        "token_endpoint": token_endpoint,
        "certificate": certificate,
        "issuer": issuer,
        "subject": subject,
        "audience": audience,
        "jws_algorithm": jws_algorithm,
        "signing_algorithm": signing_algorithm,
        "key_id": key_id,
        "jws_type": jws_type,
        "grant_type": grant_type,
        "additional_headers": additional_headers,
        "additional_body_params": additional_body_params,
        "per_user_mode": per_user_mode,
        "callback_url": callback_url,
    }
    if scope:
        raw["scope"] = scope
        raw["use_scope"] = True
    _check_and_save(name, raw)


@provider_app.command("import")
def provider_import(
    name: str = typer.Argument(help="Provider name."),
    path: Path = typer.Argument(help="JSON file mapping configuration keys to values."),
) -> None:
    """Create or replace a provider from a JSON key/value file.

    Unknown keys are ignored and values are trimmed, so exports from other
    configuration stores can be used as they are.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        error(f"Cannot read {path}: {exc}")
        raise typer.Exit(code=2) from None
    if not isinstance(raw, dict):
        error(f"{path} must contain a JSON object")
        raise typer.Exit(code=2)
    _check_and_save(name, raw)


@provider_app.command("list")
def provider_list() -> None:
    """List configured providers."""
    from jwtbearer.config import list_providers, load_global_config, load_provider
    from jwtbearer.exceptions import ConfigError

    names = list_providers()
    if not names:
        info("No providers configured.")
        suggest("Create one: jwtbearer provider add <name> --token-endpoint <url> ...")
        return

    default = load_global_config().default_provider
    rows: list[list[str]] = []
    for name in names:
        marker = "*" if name == default else ""
        try:
            config = load_provider(name)
        except ConfigError:
            rows.append([name, marker, "error", "-", "-"])
            continue
        rows.append([name, marker, config.token_endpoint, config.jws_algorithm, config.subject])

    get_output().print_table(
        ["Provider", "Default", "Token Endpoint", "Algorithm", "Subject"],
        rows,
        title="Configured Providers",
    )


@provider_app.command("show")
def provider_show(name: str = typer.Argument(help="Provider name.")) -> None:
    """Show a provider's configuration."""
    from jwtbearer.config import load_provider
    from jwtbearer.exceptions import ConfigError

    try:
        config = load_provider(name)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=2) from None
    format_response(config.model_dump(mode="json"))


@provider_app.command("remove")
def provider_remove(
    ctx: typer.Context,
    name: str = typer.Argument(help="Provider name."),
) -> None:
    """Delete a provider. Asks for confirmation unless ``--force`` is active."""
    from jwtbearer.config import delete_provider, load_global_config, save_global_config
    from jwtbearer.exceptions import ConfigError

    force = ctx.obj.get("force", False) if ctx.obj else False
    if not force and not typer.confirm(f'Remove provider "{name}"?'):
        info("Cancelled.")
        raise typer.Exit()

    try:
        delete_provider(name)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=2) from None

    config = load_global_config()
    if config.default_provider == name:
        config.default_provider = None
        save_global_config(config)
    success(f'Provider "{name}" removed.')


@provider_app.command("use")
def provider_use(name: str = typer.Argument(help="Provider name.")) -> None:
    """Make a provider the global default."""
    from jwtbearer.config import load_global_config, provider_exists, save_global_config

    if not provider_exists(name):
        error(f'Provider "{name}" not found.')
        raise typer.Exit(code=2)
    config = load_global_config()
    config.default_provider = name
    save_global_config(config)
    success(f'Default provider set to "{name}".')
