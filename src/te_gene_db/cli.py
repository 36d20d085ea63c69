"""Command-line interface for the gene database."""

import sys
from pathlib import Path
from typing import Optional

import click

from .cli_utils import EXIT_USER_WARNING, echo, fail, secho, set_quiet_mode, warn
from .config import Config, create_example_config, get_default_config_path
from .display import (
    EMPTY_QUERY_HINT, EMPTY_QUERY_MESSAGE, LOAD_FAILURE_MESSAGE, NO_RESULTS_HINT,
    NO_RESULTS_MESSAGE, RESULT_TABLE_COLUMNS, format_page_window, format_primer,
    format_row, te_relevance_category,
)
from .error_handler import EmptyExport, GeneDatabaseError, InvalidInput, LoadFailure, setup_error_handler
from .exporter import EXPORT_FORMATS, write_export
from .external_links import ExternalService, build_url, open_externally
from .logging_config import get_logger, setup_logging
from .models import Page, SearchResult, SearchState
from .paginator import page_window
from .record_store import RecordStore
from .search_engine import SearchSession
from . import sequence_toolkit as toolkit

logger = get_logger('cli')


class AppContext:
    """Per-invocation state shared by all commands."""

    def __init__(self, config: Config):
        self.config = config
        self._store: Optional[RecordStore] = None

    @property
    def store(self) -> RecordStore:
        """The record store, loaded on first use."""
        if self._store is None:
            self._store = RecordStore(
                timeout_seconds=self.config.data.timeout_seconds,
                retry_attempts=self.config.data.retry_attempts,
            )
            try:
                self._store.load(self.config.data.source)
            except LoadFailure as e:
                fail(e, operation='load_database', message=LOAD_FAILURE_MESSAGE, item_id=e.source)
        return self._store

    def new_session(self, page_size: Optional[int] = None) -> SearchSession:
        page_size = page_size or self.config.search.page_size
        try:
            return SearchSession(self.store.records, page_size)
        except InvalidInput as e:
            _user_error(e, operation='new_session', item_id=str(page_size))


pass_app = click.make_pass_decorator(AppContext)


def _user_error(error: GeneDatabaseError, operation: str, item_id: Optional[str] = None) -> None:
    warn(error, operation=operation, item_id=item_id)
    sys.exit(EXIT_USER_WARNING)


def render_result(result: SearchResult, page: Optional[Page]) -> None:
    """Print the prompt, no-results or results view for a search."""
    if result.state == SearchState.EMPTY_QUERY:
        echo(EMPTY_QUERY_MESSAGE)
        echo(EMPTY_QUERY_HINT)
        return

    if result.state == SearchState.NO_MATCHES:
        echo(NO_RESULTS_MESSAGE)
        echo(NO_RESULTS_HINT)
        return

    echo(f"Showing {page.start_item}-{page.end_item} of {page.total_items} results")
    echo("")
    for number, record in enumerate(page.items, page.start_item):
        cells = format_row(record)
        secho(f"{number}. {cells[0]} ({cells[1]})", bold=True)
        for (header, field, _), cell in zip(RESULT_TABLE_COLUMNS[2:], cells[2:]):
            if field == 'te_relevance' and te_relevance_category(record.te_relevance):
                cell = f"{cell} [{te_relevance_category(record.te_relevance)}]"
            echo(f"   {header}: {cell}")
        echo("")

    if page.total_pages > 1:
        echo(format_page_window(page_window(page.page_index, page.total_pages),
                                page.page_index, page.total_pages))


@click.group()
@click.option('--data', envvar='TE_GENE_DB_DATA', help='Record file path or URL (bundled catalog by default)')
@click.option('--config', type=click.Path(exists=True), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress all output except errors')
@click.option('--log-dir', help='Directory for log files')
@click.version_option(package_name='te-gene-db')
@click.pass_context
def cli(ctx, data, config, verbose, quiet, log_dir):
    """Tissue-Engineering Alzheimer's Gene Database.

    Search the gene catalog, export results and run sequence tools.

    Examples:
        te-gene-db search APOE
        te-gene-db search "neural tissue engineering" --page 2
        te-gene-db seq primers ATGC...
    """
    if quiet and verbose:
        click.echo("Error: Cannot use both --quiet and --verbose", err=True)
        sys.exit(1)

    set_quiet_mode(quiet)

    config_path = Path(config) if config else get_default_config_path()
    cfg = Config.from_file(config_path)
    try:
        cfg.merge_env_vars()
    except InvalidInput as e:
        click.secho(f"Warning: {e}", fg='yellow', err=True)
        sys.exit(EXIT_USER_WARNING)
    cfg.merge_cli_args(data=data, log_dir=log_dir, verbose=verbose)

    setup_logging(
        log_level=cfg.logging.level,
        log_dir=cfg.logging.log_dir,
        colors=cfg.logging.colors,
        quiet=quiet
    )
    setup_error_handler()

    ctx.obj = AppContext(cfg)


@cli.command()
@click.argument('query', required=False, default='')
@click.option('--page', type=int, default=1, help='Page number to show')
@click.option('--page-size', type=click.IntRange(min=1), help='Results per page')
@click.option('--export', 'do_export', is_flag=True, help='Also export all matching records')
@click.option('--output-dir', type=click.Path(file_okay=False), help='Export directory')
@click.option('--format', 'export_format', type=click.Choice(EXPORT_FORMATS), help='Export format')
@pass_app
def search(app, query, page, page_size, do_export, output_dir, export_format):
    """Search every field of every record for QUERY."""
    app.config.merge_cli_args(page_size=page_size, output_dir=output_dir, export_format=export_format)
    session = app.new_session()
    result = session.submit(query)

    current = None
    if result.state == SearchState.MATCHES:
        try:
            current = session.go_to(page)
        except InvalidInput as e:
            _user_error(e, operation='paginate', item_id=str(page))

    render_result(result, current)

    if do_export:
        _export(app, result)


def _export(app: AppContext, result: SearchResult) -> None:
    try:
        path = write_export(
            result.records,
            directory=app.config.export.directory,
            format=app.config.export.format,
            excel_compatible=app.config.export.excel_compatible
        )
    except EmptyExport as e:
        _user_error(e, operation='export', item_id=result.query)
    except OSError as e:
        warn(e, operation='export', item_id=result.query)
        sys.exit(EXIT_USER_WARNING)
    echo(f"Exported {result.total} records to: {path}")


@cli.command()
@click.argument('query', required=False, default='')
@click.option('--output-dir', type=click.Path(file_okay=False), help='Export directory')
@click.option('--format', 'export_format', type=click.Choice(EXPORT_FORMATS), help='Export format')
@click.option('--excel-compatible', is_flag=True, help='Write a UTF-8 BOM for Excel')
@pass_app
def export(app, query, output_dir, export_format, excel_compatible):
    """Export all records matching QUERY to a dated file."""
    app.config.merge_cli_args(output_dir=output_dir, export_format=export_format,
                              excel_compatible=excel_compatible)
    result = app.new_session().submit(query)
    _export(app, result)


BROWSE_HELP = "Commands: :n next, :p previous, :g N go to page, :e export, :c clear, :q quit"


@cli.command()
@click.option('--page-size', type=click.IntRange(min=1), help='Results per page')
@pass_app
def browse(app, page_size):
    """Interactive search session."""
    session = app.new_session(page_size)
    echo(f"{len(app.store)} records loaded. {BROWSE_HELP}")
    render_result(session.result, None)

    while True:
        try:
            line = click.prompt('search', default='', show_default=False)
        except click.Abort:
            break

        command = line.strip()
        if command == ':q':
            break

        try:
            if command == ':n':
                session.next_page()
            elif command == ':p':
                session.previous_page()
            elif command.startswith(':g'):
                target = command[2:].strip()
                if not target.isdigit():
                    raise InvalidInput("Usage: :g PAGE")
                session.go_to(int(target))
            elif command == ':e':
                path = write_export(
                    session.result.records,
                    directory=app.config.export.directory,
                    format=app.config.export.format,
                    excel_compatible=app.config.export.excel_compatible
                )
                echo(f"Exported {session.result.total} records to: {path}")
                continue
            elif command == ':c':
                session.clear()
            else:
                session.submit(command)
        except (InvalidInput, EmptyExport, OSError) as e:
            warn(e, operation='browse', item_id=command)
            continue

        page = session.current_page() if session.state == SearchState.MATCHES else None
        render_result(session.result, page)


@cli.group()
@click.option('--chunk-size', type=click.IntRange(min=1), help='Bases per display group')
@pass_app
def seq(app, chunk_size):
    """Sequence tools: complement, transcription, translation, primers."""
    app.config.merge_cli_args(chunk_size=chunk_size)


def _read_sequence(sequence: str) -> str:
    if sequence == '-':
        sequence = click.get_text_stream('stdin').read()
    try:
        return toolkit.require_sequence(sequence)
    except InvalidInput as e:
        _user_error(e, operation='sequence_input')


def _show_sequence(app: AppContext, title: str, sequence: str, unit: Optional[str] = None) -> None:
    try:
        formatted = toolkit.format_sequence(sequence, app.config.toolkit.chunk_size)
    except InvalidInput as e:
        _user_error(e, operation='format_sequence', item_id=str(app.config.toolkit.chunk_size))

    secho(title, bold=True)
    echo(formatted)
    if unit:
        echo(f"Length: {len(sequence)} {unit}")


@seq.command()
@click.argument('sequence')
@pass_app
def complement(app, sequence):
    """Complement of SEQUENCE ('-' reads stdin)."""
    _show_sequence(app, "Complement Sequence", toolkit.complement(_read_sequence(sequence)))


@seq.command('reverse-complement')
@click.argument('sequence')
@pass_app
def reverse_complement(app, sequence):
    """Reverse complement of SEQUENCE."""
    _show_sequence(app, "Reverse Complement", toolkit.reverse_complement(_read_sequence(sequence)))


@seq.command()
@click.argument('sequence')
@pass_app
def transcribe(app, sequence):
    """Transcribe DNA SEQUENCE to RNA."""
    _show_sequence(app, "Transcribed RNA Sequence", toolkit.transcribe(_read_sequence(sequence)), "nucleotides")


@seq.command()
@click.argument('sequence')
@pass_app
def translate(app, sequence):
    """Translate SEQUENCE to a protein sequence."""
    _show_sequence(app, "Translated Protein Sequence", toolkit.translate(_read_sequence(sequence)), "amino acids")


@seq.command()
@click.argument('sequence')
def gc(sequence):
    """GC content of SEQUENCE."""
    echo(f"GC: {toolkit.gc_percent(_read_sequence(sequence))}%")


@seq.command()
@click.argument('sequence')
def tm(sequence):
    """Wallace-rule melting temperature of a short primer."""
    echo(f"Tm: {toolkit.melting_temp_c(_read_sequence(sequence))}°C")


@seq.command()
@click.argument('sequence')
@click.option('--primer-length', type=click.IntRange(min=1), help='Primer length in bases (default 20)')
@pass_app
def primers(app, sequence, primer_length):
    """Design forward and reverse primers for a target SEQUENCE."""
    app.config.merge_cli_args(primer_length=primer_length)
    target = _read_sequence(sequence)
    try:
        pair = toolkit.design_primers(target, app.config.toolkit.primer_length)
    except InvalidInput as e:
        _user_error(e, operation='design_primers', item_id=f"{len(target)} bp")

    secho("Designed Primers", bold=True)
    for line in format_primer("Forward Primer", pair.forward) + format_primer("Reverse Primer", pair.reverse):
        echo(line)


@cli.group()
def link():
    """Build request URLs for external analysis services."""


def _link_command(service: ExternalService, help_text: str):
    @click.argument('text')
    @click.option('--open', 'open_url', is_flag=True, help='Open the URL in the default browser')
    def command(text, open_url):
        try:
            url = build_url(service, text)
        except InvalidInput as e:
            _user_error(e, operation=f"{service.value}_link")
        click.echo(url)
        if open_url:
            open_externally(url)

    command.__doc__ = help_text
    return link.command(service.value)(command)


_link_command(ExternalService.BLAST, "NCBI BLAST (blastn vs nr) URL for a sequence.")
_link_command(ExternalService.KEGG, "KEGG entry URL for an ID such as hsa:348 or map05010.")
_link_command(ExternalService.UNIPROT, "UniProt search URL for an accession or protein name.")
_link_command(ExternalService.CHEMBL, "ChEMBL search URL for an ID or compound name.")


@cli.command('generate-config')
@click.argument('path', type=click.Path(dir_okay=False), required=False)
def generate_config(path):
    """Write an example configuration file."""
    config_path = create_example_config(Path(path) if path else None)
    echo(f"Generated example configuration file: {config_path}")


def main():
    cli()


if __name__ == '__main__':
    main()
