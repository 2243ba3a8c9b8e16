"""CLI entry point for editing .properties files."""

import logging
from pathlib import Path
from typing import Optional

import click

from .config import (
    DEFAULT_CHARSET,
    DEFAULT_FORMAT,
    AttachCommentsTo,
    MissingKeyAction,
    ReformatOptions,
    UnicodeHandling,
    WriteOptions,
)
from .core import PropertiesDocument
from .entries import BasicEntry
from .errors import PropertiesError
from .escaping import unescape
from .reorder import Reformatter


def _fail(message: str):
    click.secho(f"Error: {message}", fg='red', err=True)
    raise SystemExit(1)


def _load(path: Path, charset: str) -> PropertiesDocument:
    try:
        return PropertiesDocument.from_path(path, charset)
    except PropertiesError as e:
        _fail(str(e))


@click.group()
@click.version_option(version="0.1.0")
@click.option('--charset', default=DEFAULT_CHARSET, show_default=True, help='Encoding of the properties files')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx: click.Context, charset: str, verbose: bool):
    """Format-preserving editing of Java .properties files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )
    ctx.ensure_object(dict)
    ctx.obj['charset'] = charset


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def show(ctx: click.Context, file: Path):
    """Display the entries of a .properties file.

    FILE is the path to the .properties file.
    """
    document = _load(file, ctx.obj['charset'])

    if not document.entry_count:
        click.secho("No entries found.", fg='yellow')
        return

    click.echo(
        f"Entries ({document.entry_count} total, "
        f"{document.property_count} properties):\n"
    )

    for entry in document.entries:
        if isinstance(entry, BasicEntry):
            click.secho(entry.content.rstrip("\r\n"), dim=True)
        else:
            click.echo(f"{unescape(entry.key)} = {unescape(entry.value)}")

    for diagnostic in document.diagnostics:
        click.secho(f"Warning: {diagnostic.message}", fg='yellow', err=True)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('key')
@click.pass_context
def get(ctx: click.Context, file: Path, key: str):
    """Print the value of KEY."""
    document = _load(file, ctx.obj['charset'])
    value = document.get(key)
    if value is None:
        _fail(f"Key not found: {key}")
    click.echo(value)


@cli.command(name='set')
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('key')
@click.argument('value')
@click.option('--unicode', 'unicode_handling', default=UnicodeHandling.DO_NOTHING.value,
              type=click.Choice([u.value for u in UnicodeHandling]),
              help='How to write non-ASCII characters')
@click.pass_context
def set_value(ctx: click.Context, file: Path, key: str, value: str, unicode_handling: str):
    """Set KEY to VALUE, keeping the formatting of the file."""
    charset = ctx.obj['charset']
    document = _load(file, charset)
    existed = key in document
    document.set(key, value)

    try:
        document.overwrite(file, WriteOptions(
            charset=charset,
            unicode_handling=UnicodeHandling(unicode_handling)
        ))
    except PropertiesError as e:
        _fail(str(e))

    action = "Updated" if existed else "Added"
    click.secho(f"{action} {key}", fg='green')


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('key')
@click.pass_context
def remove(ctx: click.Context, file: Path, key: str):
    """Remove KEY from the file."""
    charset = ctx.obj['charset']
    document = _load(file, charset)
    if not document.remove(key):
        _fail(f"Key not found: {key}")

    try:
        document.overwrite(file, WriteOptions(charset=charset))
    except PropertiesError as e:
        _fail(str(e))

    click.secho(f"Removed {key}", fg='green')


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--format', 'format_', default=DEFAULT_FORMAT, show_default=True,
              help='Layout of key/value lines')
@click.option('--reformat-key-and-value', is_flag=True,
              help='Also normalize escaping of keys and values')
@click.pass_context
def reformat(ctx: click.Context, file: Path, format_: str, reformat_key_and_value: bool):
    """Apply a uniform format to all entries of FILE."""
    options = ReformatOptions(
        charset=ctx.obj['charset'],
        format=format_,
        reformat_key_and_value=reformat_key_and_value
    )

    try:
        Reformatter(options).reformat_file(file)
    except PropertiesError as e:
        _fail(str(e))

    click.secho(f"Reformatted {file}", fg='green')


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--template', '-t', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Order the entries like the keys in this file')
@click.option('--attach-comments', default=AttachCommentsTo.NEXT.value, show_default=True,
              type=click.Choice([a.value for a in AttachCommentsTo]),
              help='Which property comments and blank lines move with')
@click.pass_context
def reorder(ctx: click.Context, file: Path, template: Optional[Path], attach_comments: str):
    """Reorder the entries of FILE by key or by a template."""
    options = ReformatOptions(
        charset=ctx.obj['charset'],
        attach_comments_to=AttachCommentsTo(attach_comments)
    )
    reformatter = Reformatter(options)

    try:
        if template is not None:
            reformatter.reorder_file_by_template(template, file)
        else:
            reformatter.reorder_file_by_key(file)
    except PropertiesError as e:
        _fail(str(e))

    click.secho(f"Reordered {file}", fg='green')


@cli.command()
@click.argument('source', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('target', type=click.Path(dir_okay=False, path_type=Path))
@click.option('--missing-keys', default=MissingKeyAction.NOTHING.value, show_default=True,
              type=click.Choice([m.value for m in MissingKeyAction]),
              help='What to do with keys of TARGET that SOURCE does not have')
@click.option('--unicode', 'unicode_handling', default=UnicodeHandling.DO_NOTHING.value,
              show_default=True, type=click.Choice([u.value for u in UnicodeHandling]),
              help='How to write non-ASCII characters')
@click.pass_context
def merge(ctx: click.Context, source: Path, target: Path, missing_keys: str, unicode_handling: str):
    """Write the properties of SOURCE into TARGET.

    TARGET keeps its comments, order and formatting. If it does not exist
    yet, it is created as a copy of SOURCE.
    """
    charset = ctx.obj['charset']
    document = _load(source, charset)
    options = WriteOptions(
        charset=charset,
        missing_key_action=MissingKeyAction(missing_keys),
        unicode_handling=UnicodeHandling(unicode_handling)
    )

    try:
        document.save_to(target, options)
    except PropertiesError as e:
        _fail(str(e))

    click.secho(f"Merged {source} into {target}", fg='green')


if __name__ == '__main__':
    cli()
