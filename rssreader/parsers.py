# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

import time
from datetime import datetime, timezone
from urllib.parse import urlparse

import feedparser
import requests
from pydantic import ValidationError

from ._utils import get_logger
from .models import AtomEntry, AtomFeed, AtomLink, FeedFailure, FeedSource, JsonFeed, RawFeedResult, RssFeed, RssItem

JSON_FEED_CONTENT_TYPES = ('application/feed+json', 'application/json')

DEFAULT_TIMEOUT = (5, 60)


class UnknownFeedFormatError(ValueError):
    pass


def _to_datetime(value: time.struct_time | None) -> datetime | None:
    # feedparser normalizes every parsed date to UTC
    if value is not None:
        return datetime(*value[:6], tzinfo=timezone.utc)

def _is_json_document(body: bytes, content_type: str | None) -> bool:
    if content_type:
        mime = content_type.split(';', 1)[0].strip().lower()
        if mime in JSON_FEED_CONTENT_TYPES:
            return True
    return body.lstrip()[:1] == b'{'

def _to_atom_feed(parsed: feedparser.FeedParserDict) -> AtomFeed:
    entries = []
    for entry in parsed.entries:
        links = entry.get('links')
        entries.append(AtomEntry(
            title=entry.get('title'),
            updated=_to_datetime(entry.get('updated_parsed')),
            links=[AtomLink(href=x.get('href')) for x in links] if links is not None else None,
        ))
    return AtomFeed(entries=entries)

def _rss_link(entry: feedparser.FeedParserDict) -> str | None:
    # entry.link may be copied from a permalink guid, links only holds <link> elements
    for link in entry.get('links') or ():
        if link.get('rel', 'alternate') == 'alternate' and link.get('href'):
            return link['href']
    return None

def _to_rss_feed(parsed: feedparser.FeedParserDict) -> RssFeed:
    items = []
    for entry in parsed.entries:
        # RSS 1.0 carries its date as dc:date, which feedparser reports as updated
        pub_date = entry.get('published_parsed') or entry.get('updated_parsed')
        items.append(RssItem(
            title=entry.get('title'),
            pub_date=_to_datetime(pub_date),
            link=_rss_link(entry),
        ))
    return RssFeed(items=items)

def parse_document(body: bytes, content_type: str | None = None) -> RawFeedResult:
    '''
    Parse a feed document into one of the raw feed shapes.

    Problems are reported as `FeedFailure`, never raised.
    '''
    if _is_json_document(body, content_type):
        try:
            return JsonFeed.model_validate_json(body)
        except ValidationError as error:
            return FeedFailure(error=error)

    parsed = feedparser.parse(body)
    version: str = parsed.get('version') or ''
    if version.startswith('atom'):
        return _to_atom_feed(parsed)
    if version.startswith('rss'):
        return _to_rss_feed(parsed)

    if parsed.get('bozo') and (error := parsed.get('bozo_exception')) is not None:
        return FeedFailure(error=error)
    return FeedFailure(error=UnknownFeedFormatError(f'unknown feed format: {version!r}'))

def _resolve_proxies(source: FeedSource) -> dict[str, str] | None:
    proxies = source.proxies
    if proxies is None:
        proxy = source.proxy
        if proxy:
            scheme = urlparse(proxy).scheme
            if not scheme:
                scheme = urlparse(source.url).scheme or 'http'
                proxy = scheme + '://' + proxy
            proxies = {}
            proxies[scheme] = proxy
    return proxies

def fetch_feed(source: FeedSource, *, timeout: tuple[float, float] = DEFAULT_TIMEOUT) -> RawFeedResult:
    logger = get_logger().getChild(source.url)

    proxies = _resolve_proxies(source)
    if proxies:
        logger.info('use proxies: %s', proxies)

    try:
        r = requests.get(source.url, proxies=proxies, timeout=timeout)
    except requests.RequestException as error:
        logger.info('fetch %r failure with %s', source.url, error, exc_info=False)
        return FeedFailure(error=error)

    try:
        r.raise_for_status()
    except requests.HTTPError as error:
        logger.error('raised %s: %s', type(error).__name__, error)
        return FeedFailure(error=error)

    result = parse_document(r.content, r.headers.get('Content-Type'))
    logger.info('parsed as %s', type(result).__name__)
    return result
