"""SEAL CLI application using Typer.

This module provides command-line utilities for the SEAL backend:
key generation for deployment configuration, one-off encryption and
decryption with the configured key, and running the API server.
"""

import typer
import uvicorn
from pydantic import ValidationError as SettingsValidationError
from rich.console import Console

from seal.domain.security.exceptions import (
    InvalidEncryptionKeyError,
    SecurityDomainError,
)
from seal.infrastructure.security import AesGcmCipherService, KeyMaterial
from seal_config.settings import get_settings

app = typer.Typer(
    name="seal",
    help="SEAL - authenticated encryption service CLI",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


# Create keys subcommand group
keys_app = typer.Typer(
    name="keys",
    help="Key generation utilities",
    no_args_is_help=True,
)
app.add_typer(keys_app)


def _load_cipher_service() -> AesGcmCipherService:
    """Build the cipher service from the configured key, or exit."""
    try:
        settings = get_settings()
    except SettingsValidationError:
        err_console.print(
            "[red]ENCRYPTION_KEY is not configured.[/red] "
            "Run [bold]seal keys generate[/bold] and add it to your .env file."
        )
        raise typer.Exit(code=1) from None

    try:
        key_material = KeyMaterial.load(settings.encryption_key.get_secret_value())
    except InvalidEncryptionKeyError as e:
        err_console.print(f"[red]Invalid ENCRYPTION_KEY:[/red] {e.message}")
        raise typer.Exit(code=1) from None

    return AesGcmCipherService(key_material)


@keys_app.command("generate")
def generate_key(
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Print only the key",
    ),
) -> None:
    """Generate a new AES-256-GCM keyset for SEAL configuration.

    Copy the output to your .env file as ENCRYPTION_KEY.
    """
    try:
        key = KeyMaterial.generate().export()
    except SecurityDomainError as e:
        err_console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1) from None

    if quiet:
        typer.echo(key)
        return

    console.print("\n[bold green]SEAL Key Generation[/bold green]")
    console.print("=" * 60)
    console.print(f"\n[cyan]ENCRYPTION_KEY[/cyan]={key}", soft_wrap=True)
    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]⚠  Keep this key secure and never commit it "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above value to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


@app.command("encrypt")
def encrypt(
    plaintext: str = typer.Argument(..., help="Text to encrypt"),
) -> None:
    """Encrypt TEXT with the configured key and print base64 ciphertext."""
    service = _load_cipher_service()
    try:
        typer.echo(service.encrypt(plaintext))
    except SecurityDomainError as e:
        err_console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1) from None


@app.command("decrypt")
def decrypt(
    ciphertext: str = typer.Argument(..., help="Base64 ciphertext to decrypt"),
) -> None:
    """Decrypt base64 CIPHERTEXT with the configured key."""
    service = _load_cipher_service()
    try:
        typer.echo(service.decrypt(ciphertext.strip()))
    except SecurityDomainError as e:
        err_console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1) from None


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Bind port (default: API_PORT)"),
) -> None:
    """Run the SEAL API server with uvicorn."""
    _load_cipher_service()
    settings = get_settings()
    uvicorn.run(
        "seal.presentation.api.app:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
