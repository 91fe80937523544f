"""Typer CLI definition for ttsgate."""

import asyncio
import logging
import sys
from pathlib import Path

import typer

from . import config as config_file
from .config import load_config
from .core import build_gateway
from .tts.errors import UpstreamError, ValidationError
from .tts.models import SynthesisRequest

app = typer.Typer(help="HTTP gateway in front of Gemini text-to-speech")


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (from config if omitted)"),
    port: int | None = typer.Option(None, "-p", "--port", help="Port (from config if omitted)"),
    debug: bool = typer.Option(False, "--debug", help="Verbose logging"),
) -> None:
    """Run the HTTP server."""
    configure_logging(debug)

    # SystemExit(1) here happens before any socket is bound
    config = load_config().with_overrides(host=host, port=port)

    from .server import run_server

    try:
        run_server(config, debug=debug)
    except UpstreamError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


@app.command()
def synth(
    text: str | None = typer.Argument(None, help="Text to convert to speech (stdin if omitted)"),
    output: Path = typer.Option(Path("out.wav"), "-o", "--output", help="File to write"),
    voice: str | None = typer.Option(None, "-v", "--voice", help="Voice name (from config if omitted)"),
    model: str | None = typer.Option(None, "-m", "--model", help="Model ID (from config if omitted)"),
    pcm: bool = typer.Option(False, "--pcm", help="Write raw PCM instead of WAV"),
    debug: bool = typer.Option(False, "--debug", help="Show verbose error messages"),
) -> None:
    """Synthesize one clip to a file."""
    if debug:
        configure_logging(debug)

    if text is None and not sys.stdin.isatty():
        text = sys.stdin.read().strip()

    config = load_config()

    try:
        request = SynthesisRequest.build(
            text,
            voice,
            model,
            default_voice=config.tts.voice,
            default_model=config.tts.model,
        )
        gateway = build_gateway(config)
        audio = asyncio.run(gateway.synthesize(request, want_wav=not pcm))
        output.write_bytes(audio)
        typer.echo(f"Wrote {output} ({len(audio)} bytes)")

    except ValidationError as e:
        if debug:
            typer.echo(f"Debug - Validation error: {e!r}", err=True)
        else:
            typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except UpstreamError as e:
        if debug:
            typer.echo(f"Debug - TTS API error: {e!r}", err=True)
        else:
            typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except OSError as e:
        if debug:
            typer.echo(f"Debug - File system error: {e!r}", err=True)
        else:
            typer.echo(f"Error: Failed to save audio file: {e}", err=True)
        raise typer.Exit(1) from None


@app.command("init-config")
def init_config(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write the default config file."""
    if config_file.CONFIG_PATH.exists() and not force:
        typer.echo(f"Config already exists at {config_file.CONFIG_PATH} (use --force to overwrite)")
        raise typer.Exit(1)
    path = config_file.generate_config()
    typer.echo(f"Wrote {path}")
