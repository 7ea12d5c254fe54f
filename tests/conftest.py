# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

from datetime import datetime, timezone

import pytest

from rssreader.models import FeedSource, RssFeed, RssItem

T1 = datetime(2017, 12, 4, 1, 0, tzinfo=timezone.utc)


class FakeOpener:
    def __init__(self) -> None:
        self.allow = True
        self.checked: list[str] = []
        self.opened: list[str] = []

    def can_open(self, url: str) -> bool:
        self.checked.append(url)
        return self.allow

    def open(self, url: str) -> None:
        self.opened.append(url)


@pytest.fixture
def opener() -> FakeOpener:
    return FakeOpener()

@pytest.fixture
def catalog() -> list[FeedSource]:
    return [
        FeedSource(name='A', url='http://a.example.com/feed'),
        FeedSource(name='B', url='http://b.example.com/feed'),
    ]

@pytest.fixture
def rss_feed() -> RssFeed:
    return RssFeed(items=[
        RssItem(title='A', pub_date=T1, link='http://x'),
        RssItem(),
    ])
