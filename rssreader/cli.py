# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

import os
from typing import Optional

import typer
import uvicorn

from ._utils import configure_logger
from .cfg import Config, ConfigError, ConfigHelper
from .core import FeedReader, create_reader
from .presenters import display_date, display_title
from .settings import load_settings

app = typer.Typer(add_completion=False, help='Read feeds from a fixed catalog.')


def _config_option():
    return typer.Option(None, '--config', '-c', help='Path of the YAML config file.')


def _get_config(config_path: str | None) -> Config:
    settings = load_settings()
    configure_logger(settings.log_level.upper())
    try:
        conf = ConfigHelper(config_path or settings.config).get_config()
        conf.get_catalog()
        conf.get_timezone()
        return conf
    except ConfigError as error:
        typer.echo(f'error: {error}', err=True)
        raise typer.Exit(2)

def _load(reader: FeedReader, index: int) -> None:
    try:
        loaded = reader.reload(index)
    except IndexError:
        typer.echo(f'error: no feed at index {index}', err=True)
        raise typer.Exit(2)
    if not loaded:
        typer.echo(f'error: unable to load {reader.sources[index].name}', err=True)
        raise typer.Exit(1)


@app.command('feeds')
def list_feeds(config: Optional[str] = _config_option()) -> None:
    '''List the feeds of the catalog.'''
    for index, source in enumerate(_get_config(config).get_catalog()):
        typer.echo(f'{index}\t{source.name}\t{source.url}')


@app.command('show')
def show_feed(index: int, config: Optional[str] = _config_option()) -> None:
    '''Load a feed and print its items.'''
    conf = _get_config(config)
    tz = conf.get_timezone()
    reader = create_reader(conf)
    _load(reader, index)
    for row, item in enumerate(reader.items):
        typer.echo(f'{row}\t{display_date(item, tz)}\t{display_title(item)}')


@app.command('open')
def open_item(index: int, row: int, config: Optional[str] = _config_option()) -> None:
    '''Load a feed and open one of its items in the browser.'''
    reader = create_reader(_get_config(config))
    _load(reader, index)
    if not 0 <= row < len(reader.items):
        typer.echo(f'error: no item at row {row}', err=True)
        raise typer.Exit(2)
    if not reader.open_item(row):
        typer.echo('nothing to open.', err=True)


@app.command('serve')
def serve(
        host: str = typer.Option('127.0.0.1', '--host', help='Bind address.'),
        port: int = typer.Option(8000, '--port', help='Bind port.'),
        config: Optional[str] = _config_option(),
    ) -> None:
    '''Serve the catalog and feed items over HTTP.'''
    if config:
        # the server reads its settings from the environment
        os.environ['RSSREADER_CONFIG'] = config
    _get_config(config)
    uvicorn.run('rssreader.server:app', host=host, port=port)
