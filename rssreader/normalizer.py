# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

from .errors import ParseFailedError
from .models import (
    AtomEntry, AtomFeed, FeedFailure, JsonFeed, JsonFeedItem, RawFeedResult, RssFeed, RssItem, UniformFeedItem
)


def _from_atom_entry(entry: AtomEntry) -> UniformFeedItem:
    return UniformFeedItem(
        title=entry.title,
        date=entry.updated,
        link=entry.links[0].href if entry.links else None,
    )

def _from_rss_item(item: RssItem) -> UniformFeedItem:
    return UniformFeedItem(title=item.title, date=item.pub_date, link=item.link)

def _from_json_feed_item(item: JsonFeedItem) -> UniformFeedItem:
    return UniformFeedItem(title=item.title, date=item.date_published, link=item.url)

def normalize(result: RawFeedResult) -> list[UniformFeedItem]:
    '''
    Map a parsed feed into uniform items, one per entry and in source order.

    Raise `ParseFailedError` if the parser reported a failure.
    '''
    match result:
        case AtomFeed(entries=entries):
            return [_from_atom_entry(x) for x in entries or ()]
        case RssFeed(items=items):
            return [_from_rss_item(x) for x in items or ()]
        case JsonFeed(items=items):
            return [_from_json_feed_item(x) for x in items or ()]
        case FeedFailure(error=error):
            raise ParseFailedError(error) from error
        case _:
            raise TypeError(f'unknown feed result: {type(result).__name__}')
