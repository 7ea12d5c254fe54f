# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

import queue
import threading
from collections.abc import Callable, Sequence
from functools import partial
from typing import TypeAlias

from pydantic import ValidationError

from ._utils import get_logger
from .cfg import Config, ConfigHelper
from .errors import FeedError, ParseFailedError
from .links import BrowserLinkOpener, LinkOpener, open_link
from .models import FeedSource, RawFeedResult, UniformFeedItem
from .normalizer import normalize
from .parsers import fetch_feed
from .settings import Settings

FeedParser: TypeAlias = Callable[[FeedSource], RawFeedResult]
ItemsObserver: TypeAlias = Callable[[tuple[UniformFeedItem, ...]], None]
_Outcome: TypeAlias = tuple[int, FeedSource, list[UniformFeedItem] | FeedError]


def load_feed(source: FeedSource, parser: FeedParser = fetch_feed) -> list[UniformFeedItem]:
    '''
    Fetch, parse and normalize a feed synchronously.
    '''
    return normalize(parser(source))


class FeedReader:
    '''
    Owns the current items and loads feeds from the catalog on background threads.

    Loaded results are queued until the owner calls `process_results()`,
    so `items` is only replaced on the thread that owns the presentation.
    '''

    def __init__(self,
            catalog: Sequence[FeedSource], *,
            parser: FeedParser = fetch_feed,
            opener: LinkOpener | None = None,
            on_items_changed: ItemsObserver | None = None,
        ) -> None:
        self._catalog = tuple(catalog)
        self._parser = parser
        self._opener = opener if opener is not None else BrowserLinkOpener()
        self._on_items_changed = on_items_changed
        self._items: tuple[UniformFeedItem, ...] = ()
        self._results: queue.Queue[_Outcome] = queue.Queue()
        self._lock = threading.Condition()
        self._last_started = 0
        self._last_reported = 0
        self._in_flight = 0

    @property
    def sources(self) -> tuple[FeedSource, ...]:
        return self._catalog

    @property
    def items(self) -> tuple[UniformFeedItem, ...]:
        return self._items

    def load(self, index: int) -> int:
        '''
        Start loading the feed at `index` of the catalog.

        Return the generation of this load; newer generations win.
        '''
        if not 0 <= index < len(self._catalog):
            raise IndexError(f'no feed at index {index}')
        source = self._catalog[index]

        with self._lock:
            self._last_started += 1
            self._in_flight += 1
            generation = self._last_started

        logger = get_logger().getChild(source.url)
        logger.info('load %r (#%d)', source.name, generation)

        def worker() -> None:
            try:
                items = load_feed(source, self._parser)
            except FeedError as error:
                self._results.put((generation, source, error))
            except Exception as error:
                logger.error('load %r failure with %s', source.name, error, exc_info=True)
                self._results.put((generation, source, ParseFailedError(error)))
            else:
                logger.info('total found %s items', len(items))
                self._results.put((generation, source, items))
            finally:
                with self._lock:
                    self._in_flight -= 1
                    self._lock.notify_all()

        threading.Thread(target=worker, daemon=True).start()
        return generation

    def wait(self, timeout: float | None = None) -> bool:
        '''
        Wait until every started load has reported. Return False on timeout.
        '''
        with self._lock:
            return self._lock.wait_for(lambda: self._in_flight == 0, timeout)

    def process_results(self, *, block: bool = False, timeout: float | None = None) -> int:
        '''
        Apply reported loads on the calling thread.

        Return the count of loads which replaced `items`.
        '''
        applied = 0
        while True:
            try:
                generation, source, outcome = self._results.get(block=block, timeout=timeout)
            except queue.Empty:
                return applied
            block = False

            if generation < self._last_reported:
                get_logger().debug('drop stale result of %r (#%d)', source.name, generation)
                continue
            self._last_reported = generation

            if isinstance(outcome, FeedError):
                get_logger().error('load %r failure with %s', source.name, outcome)
                continue

            self._items = tuple(outcome)
            applied += 1
            if self._on_items_changed is not None:
                self._on_items_changed(self._items)

    def reload(self, index: int, timeout: float | None = None) -> bool:
        '''
        Load the feed at `index` and wait for the result.

        Return True if `items` was replaced.
        '''
        self.load(index)
        self.wait(timeout)
        return self.process_results() > 0

    def link_at(self, row: int) -> str | None:
        return self._items[row].link

    def open_item(self, row: int) -> bool:
        return open_link(self.link_at(row), self._opener)


def create_reader(config: Config, **kwargs) -> FeedReader:
    kwargs.setdefault('parser', partial(fetch_feed, timeout=config.get_timeout()))
    return FeedReader(config.get_catalog(), **kwargs)


def load_config_helper() -> ConfigHelper:
    def _load_settings() -> Settings:
        try:
            return Settings() # type: ignore
        except ValidationError as e:
            get_logger().error(e)
            exit(1)

    settings = _load_settings()
    config_helper = ConfigHelper(settings.config)
    return config_helper
