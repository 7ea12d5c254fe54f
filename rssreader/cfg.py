# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

import os
from collections import ChainMap
from contextlib import suppress
from logging import getLogger
from typing import Dict, Iterable, List, NotRequired, Optional, Tuple, TypedDict
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from cachetools import cachedmethod
from pydantic import ValidationError

from .models import FeedSource

logger = getLogger(__name__)

DEFAULT_FEEDS: tuple[FeedSource, ...] = (
    FeedSource(name='TechChrunch Japan', url='http://jp.techcrunch.com/feed/'),
    FeedSource(name='Engadget Japaneese', url='http://japanese.engadget.com/rss.xml'),
    FeedSource(name='Impress Watch', url='http://www.watch.impress.co.jp/headline/rss/headline.rdf'),
    FeedSource(name='ASCII.jp', url='http://ascii.jp/cate/1/rss.xml'),
    FeedSource(name='GIZMODO', url='https://www.gizmodo.jp/index.xml'),
    FeedSource(name='GIGAZINE', url='http://gigazine.net/news/rss_2.0/'),
    FeedSource(name='マイナビニュース', url='http://feeds.news.mynavi.jp/rss/mynavi/index'),
    FeedSource(name='ITmedia', url='http://rss.itmedia.co.jp/rss/2.0/itmedia_all.xml'),
)


class ConfigError(Exception):
    pass


class FeedSection(TypedDict):
    name: str
    url: str
    enable: NotRequired[bool]
    proxy: NotRequired[str]
    proxies: NotRequired[Dict[str, str]]


class DefaultSection(TypedDict):
    enable: NotRequired[bool]
    proxy: NotRequired[str]
    proxies: NotRequired[Dict[str, str]]


class OptionsSection(TypedDict):
    timezone: NotRequired[str]
    timeout: NotRequired[int]


class RootSection(TypedDict):
    options: Optional[OptionsSection]
    default: Optional[DefaultSection]
    feeds: Optional[List[FeedSection] | Dict[str, FeedSection]]


class Config:
    def __init__(self, config_data: RootSection, *, mtime_ns: int) -> None:
        self.config_data: RootSection = config_data
        self.mtime_ns = mtime_ns
        self._cache = {}

    def _get_section(self, key: str) -> dict:
        section = self.config_data.get(key) or {}
        if not isinstance(section, dict):
            raise ConfigError(f'Section {key!r} must be a mapping.')
        return section

    @property
    def options(self) -> OptionsSection:
        return self._get_section('options') # type: ignore

    def _iter_feed_sections(self) -> Iterable[Tuple[str, str | None, FeedSection]]:
        '''
        Yield `(feed_id, default_name, section)` for the list form and the `{feed_id: section}` form.
        '''
        feeds = self.config_data.get('feeds')
        if isinstance(feeds, dict):
            items = [(str(k), str(k), v) for k, v in feeds.items()]
        elif isinstance(feeds, list):
            items = [(f'#{i}', None, v) for i, v in enumerate(feeds)]
        else:
            raise ConfigError('Section \'feeds\' must be a list or a mapping.')

        for feed_id, default_name, feed_section in items:
            if not isinstance(feed_section, dict):
                raise ConfigError(f'Feed {feed_id} must be a mapping.')
            yield feed_id, default_name, feed_section # type: ignore

    @cachedmethod(cache=lambda x: x._cache)
    def get_catalog(self) -> tuple[FeedSource, ...]:
        '''
        Get the enabled feeds in config order, or the built-in feeds if none is configured.
        '''
        if not self.config_data.get('feeds'):
            return DEFAULT_FEEDS

        default = self._get_section('default')
        catalog = []
        for feed_id, default_name, feed_section in self._iter_feed_sections():
            section = ChainMap(feed_section, default) # type: ignore
            if not section.get('enable', True):
                logger.info('Feed %s is disabled.', feed_id)
                continue
            try:
                catalog.append(FeedSource(
                    name=section.get('name') or default_name or section.get('url'),
                    url=section.get('url'),
                    proxy=section.get('proxy'),
                    proxies=section.get('proxies'),
                ))
            except ValidationError as error:
                raise ConfigError(f'Invalid feed {feed_id}: {error}') from error
        return tuple(catalog)

    def get_timezone(self) -> ZoneInfo | None:
        if name := self.options.get('timezone'):
            try:
                return ZoneInfo(name)
            except (ZoneInfoNotFoundError, ValueError, TypeError) as error:
                raise ConfigError(f'Unknown timezone: {name}') from error
        return None

    def get_timeout(self) -> tuple[float, float]:
        timeout = self.options.get('timeout')
        if isinstance(timeout, (int, float)) and timeout > 0:
            return (5, timeout)
        return (5, 60)


class ConfigHelper:
    def __init__(self, config_path: str | None) -> None:
        self.__config_path = config_path
        self.__config: Config | None = None

    @property
    def config_path(self) -> str | None:
        return self.__config_path

    def _load_config(self, path: str) -> Config | None:
        config_content: RootSection | None = None
        mtime_ns = -1

        if os.path.isfile(path):
            with suppress(FileNotFoundError):
                with open(path, mode='r', encoding='utf8') as fp:
                    try:
                        config_content = yaml.safe_load(fp) or {}
                    except yaml.YAMLError as error:
                        raise ConfigError(f'Invalid config file: {path}') from error
                    if not isinstance(config_content, dict):
                        raise ConfigError(f'Config root must be a mapping: {path}')
                    mtime_ns = os.stat(fp.fileno()).st_mtime_ns
                    logger.info('Load config from %s', path)
            if config_content is None:
                logger.warning('Unable open file: %s', path)
        else:
            logger.warning('No such file: %s', path)

        if config_content is not None:
            return Config(config_content, mtime_ns=mtime_ns)

    def reload_config(self) -> bool:
        config_path = self.__config_path

        if config_path is None:
            self.__config = Config({}, mtime_ns=-1) # type: ignore
            logger.info('No config path, use built-in feeds.')
            return True

        if (config := self._load_config(config_path)) is not None:
            self.__config = config
            logger.info('Config loaded from %s', config_path)
            return True

        return False

    def reload_config_if_updated(self) -> bool:
        '''
        Return True if updated and reloaded.
        '''
        config_path = self.__config_path
        if config_path is None:
            return False

        with suppress(FileNotFoundError):
            mtime_ns = os.stat(config_path).st_mtime_ns
            if mtime_ns != self.get_config().mtime_ns:
                logger.info('Config file (%s) is updated, try reload...', config_path)
                if self.reload_config():
                    logger.info('Reload completed')
                    return True
                else:
                    logger.warning('Reload failed')

        return False

    def get_config(self) -> Config:
        '''
        Get config snapshot.
        '''
        if self.__config is None:
            if not self.reload_config():
                raise ConfigError('Unable load config')
            assert self.__config is not None

        return self.__config
