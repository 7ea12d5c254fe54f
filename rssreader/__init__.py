# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

from .core import FeedReader, create_reader, load_feed
from .errors import FeedError, MalformedLinkError, ParseFailedError
from .links import BrowserLinkOpener, LinkOpener, open_link
from .models import (
    AtomEntry, AtomFeed, AtomLink, FeedFailure, FeedSource, JsonFeed, JsonFeedItem, RawFeedResult, RssFeed, RssItem,
    UniformFeedItem
)
from .normalizer import normalize
from .parsers import fetch_feed, parse_document
