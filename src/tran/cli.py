"""CLI entry point for the translator."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import BACKENDS, TranConfig, current_language
from .core import BatchService, Message, MessageKind, Session, interact
from .display import render_help, render_language_list
from .errors import StreamOpenError, TranError
from .languages import DEFAULT_TABLE, LanguageResolver
from .translation import PhraseBook, TranslationEngine, TranslationPipeline

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def message_color(config: TranConfig, kind: MessageKind) -> str:
    return {
        MessageKind.INFO: config.info_color,
        MessageKind.STATE: config.state_color,
        MessageKind.ERROR: config.error_color,
        MessageKind.RESULT: config.result_color,
    }[kind]


def fail(config: TranConfig, error: Exception):
    click.secho(f"tran: {error}", fg=config.error_color, err=True)
    raise SystemExit(1)


def read_line(prompt: str) -> str:
    """Show the prompt on stderr and read a line; EOFError at end of input."""
    click.echo(prompt, nl=False, err=True)
    return input()


def backend_status(config: TranConfig) -> str:
    if config.backend == "endpoint":
        return f"  Endpoint URL: {config.endpoint_url}"
    return f"  Ollama URL: {config.ollama_url}\n  Model: {config.ollama_model}"


def check_backend(config: TranConfig, engine: TranslationEngine):
    """Report whether the translation backend is available and exit."""
    if engine.is_available():
        click.secho("Translation backend is ready!", fg="green")
        click.echo(backend_status(config))
        return

    click.secho("Error: translation backend is not available", fg=config.error_color)
    click.echo(backend_status(config))
    if config.backend == "ollama":
        click.echo("\nTo fix this:")
        click.echo("  1. Make sure Ollama is running: ollama serve")
        click.echo(f"  2. Pull the model: ollama pull {config.ollama_model}")
    raise SystemExit(1)


def run_interactive(config: TranConfig, session: Session, ready: bool = True):
    """Run the session loop on the terminal."""
    def emit(message: Message):
        click.secho(message.text, fg=message_color(config, message.kind), err=True)

    click.echo(f"Welcome to tran! (Ver {__version__})", err=True)
    click.secho(render_help(), fg=config.info_color, err=True)
    if not ready:
        click.secho(
            "Warning: translation backend is not available (run tran --check)",
            fg=config.error_color, err=True
        )
    state = interact(session, read_line, emit)
    logger.debug("Session closed at %s:%s", state.source, state.target)


def run_batch(config: TranConfig, service: BatchService, files: tuple[Path, ...]) -> bool:
    """Translate standard input or each file to standard output.

    Returns:
        True if every input was translated.
    """
    def report_error(report):
        click.secho(f"tran: {report.path}: {report.error}", fg=config.error_color, err=True)

    if not files:
        report = service.translate_stream(sys.stdin, sys.stdout)
        if report.error:
            report_error(report)
        return not report.error

    try:
        batch = service.translate_files(list(files), sys.stdout, on_error=report_error)
    except StreamOpenError as e:
        click.secho(f"tran: {e}", fg=config.error_color, err=True)
        return False
    return batch.ok


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-v", "--version", message="tran version %(version)s")
@click.argument('files', nargs=-1, type=click.Path(path_type=Path))
@click.option('--list', '-l', 'list_languages', is_flag=True, help='List the language codes (ISO 639-1)')
@click.option('--source', '-s', envvar='TRAN_SOURCE', help='Source language code or name')
@click.option('--target', '-t', envvar='TRAN_TARGET', default='ja', show_default=True, help='Target language code or name')
@click.option('--backend', envvar='TRAN_BACKEND', type=click.Choice(BACKENDS), default='ollama', show_default=True, help='Translation backend')
@click.option('--ollama-url', envvar='TRAN_OLLAMA_URL', default='http://localhost:11434', help='Ollama API URL')
@click.option('--model', envvar='TRAN_MODEL', default='translategemma:12b', help='Ollama model name')
@click.option('--endpoint-url', envvar='TRAN_ENDPOINT_URL', help='HTTP translation endpoint URL')
@click.option('--limit', envvar='TRAN_LIMIT', type=int, default=5000, show_default=True, help='Maximum characters per backend request')
@click.option('--timeout', envvar='TRAN_TIMEOUT', type=float, default=120, help='Backend request timeout in seconds')
@click.option('--phrases', envvar='TRAN_PHRASES', type=click.Path(path_type=Path), help='JSON phrase book to add to the built-in one')
@click.option('--check', is_flag=True, help='Check if the translation backend is available')
@click.option('--verbose', is_flag=True, help='Verbose output')
def cli(
    files: tuple[Path, ...],
    list_languages: bool,
    source: Optional[str],
    target: str,
    backend: str,
    ollama_url: str,
    model: str,
    endpoint_url: Optional[str],
    limit: int,
    timeout: float,
    phrases: Optional[Path],
    check: bool,
    verbose: bool
):
    """Translate text interactively or from FILES.

    With no FILES and a terminal on standard input, starts an interactive
    session. Otherwise translates standard input or each FILE in order to
    standard output.
    """
    configure_logging(verbose)

    if list_languages:
        click.echo(render_language_list(DEFAULT_TABLE.all()), nl=False)
        return

    config = TranConfig(
        source_language=source or current_language()[0],
        target_language=target,
        backend=backend,
        ollama_url=ollama_url,
        ollama_model=model,
        endpoint_url=endpoint_url,
        limit_chars=limit,
        timeout=timeout,
        phrases_file=str(phrases) if phrases else None,
        verbose=verbose
    )

    try:
        config.validate()
        engine = TranslationEngine(config)
        resolver = LanguageResolver.with_external(engine.language_source())
        default_source = resolver.resolve(config.source_language)
        default_target = resolver.resolve(config.target_language)
    except TranError as e:
        fail(config, e)

    if check:
        check_backend(config, engine)
        return

    logger.debug(
        "Defaults: %s (%s) -> %s (%s), backend=%s",
        default_source.name, default_source.code,
        default_target.name, default_target.code, config.backend
    )

    if not files and sys.stdin.isatty():
        try:
            book = PhraseBook.from_file(Path(config.phrases_file)) if config.phrases_file else PhraseBook()
        except TranError as e:
            fail(config, e)
        session = Session(resolver, engine.translate, default_source, default_target, book)
        run_interactive(config, session, ready=engine.is_available())
        return

    pipeline = TranslationPipeline(engine.translate, config.limit_chars)
    service = BatchService(pipeline, default_source.code, default_target.code)
    if not run_batch(config, service, files):
        raise SystemExit(1)


def main():
    cli()


if __name__ == '__main__':
    main()
