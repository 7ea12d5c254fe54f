# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

from datetime import datetime, timezone

import requests

from rssreader import parsers
from rssreader.models import AtomFeed, FeedFailure, FeedSource, JsonFeed, RssFeed
from rssreader.normalizer import normalize
from rssreader.parsers import fetch_feed, parse_document

ATOM_DOC = b'''<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example</title>
  <id>urn:example:feed</id>
  <updated>2017-12-04T10:00:00Z</updated>
  <entry>
    <title>First</title>
    <link href="http://example.com/1"/>
    <link rel="related" href="http://example.com/1/related"/>
    <id>urn:example:1</id>
    <updated>2017-12-04T09:30:00Z</updated>
  </entry>
  <entry>
    <title>Second</title>
    <link href="http://example.com/2"/>
    <id>urn:example:2</id>
  </entry>
</feed>
'''

RSS2_DOC = '''<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0">
  <channel>
    <title>Example</title>
    <link>http://example.com/</link>
    <description>example</description>
    <item>
      <title>ニュース</title>
      <link>http://example.com/a</link>
      <pubDate>Mon, 04 Dec 2017 10:00:00 +0900</pubDate>
    </item>
    <item>
      <description>nothing else</description>
    </item>
  </channel>
</rss>
'''.encode('utf-8')

RSS1_DOC = b'''<?xml version="1.0" encoding="utf-8"?>
<rdf:RDF
  xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
  xmlns="http://purl.org/rss/1.0/"
  xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel rdf:about="http://example.com/">
    <title>Example</title>
    <link>http://example.com/</link>
    <description>example</description>
  </channel>
  <item rdf:about="http://example.com/1">
    <title>One</title>
    <link>http://example.com/1</link>
    <dc:date>2017-12-04T10:00:00+09:00</dc:date>
  </item>
</rdf:RDF>
'''

JSON_DOC = b'''{
  "version": "https://jsonfeed.org/version/1.1",
  "title": "Example",
  "items": [
    {"id": "1", "title": "J1", "url": "https://example.com/j1", "date_published": "2017-12-04T10:00:00+09:00"},
    {"id": "2"}
  ]
}'''

T1 = datetime(2017, 12, 4, 1, 0, tzinfo=timezone.utc)


def test_parse_atom():
    result = parse_document(ATOM_DOC, 'application/atom+xml')
    assert isinstance(result, AtomFeed)
    items = normalize(result)
    assert [x.title for x in items] == ['First', 'Second']
    assert [x.link for x in items] == ['http://example.com/1', 'http://example.com/2']
    assert items[0].date == datetime(2017, 12, 4, 9, 30, tzinfo=timezone.utc)
    assert items[1].date is None

def test_parse_rss2():
    result = parse_document(RSS2_DOC)
    assert isinstance(result, RssFeed)
    items = normalize(result)
    assert len(items) == 2
    assert items[0].title == 'ニュース'
    assert items[0].link == 'http://example.com/a'
    assert items[0].date == T1
    assert items[1].title is None
    assert items[1].link is None
    assert items[1].date is None

def test_parse_rss_ignores_permalink_guid():
    body = b'''<rss version="2.0"><channel><title>x</title>
      <item><title>guid only</title><guid>http://guid.example.com/1</guid></item>
      <item><title>both</title><guid>http://guid.example.com/2</guid><link>http://example.com/2</link></item>
    </channel></rss>'''
    items = normalize(parse_document(body))
    assert [x.title for x in items] == ['guid only', 'both']
    assert [x.link for x in items] == [None, 'http://example.com/2']

def test_parse_rss1_reads_dc_date():
    result = parse_document(RSS1_DOC, 'application/rdf+xml')
    assert isinstance(result, RssFeed)
    items = normalize(result)
    assert [x.title for x in items] == ['One']
    assert items[0].link == 'http://example.com/1'
    assert items[0].date == T1

def test_parse_json_feed_by_content_type():
    result = parse_document(JSON_DOC, 'application/feed+json; charset=utf-8')
    assert isinstance(result, JsonFeed)
    items = normalize(result)
    assert items[0].title == 'J1'
    assert items[0].link == 'https://example.com/j1'
    assert items[0].date == T1
    assert items[1].title is None

def test_parse_json_feed_by_body():
    assert isinstance(parse_document(JSON_DOC, 'text/plain'), JsonFeed)

def test_parse_json_feed_without_items():
    result = parse_document(b'{"version": "https://jsonfeed.org/version/1.1"}')
    assert normalize(result) == []

def test_parse_json_feed_unreadable_date_keeps_item():
    body = b'{"version": "https://jsonfeed.org/version/1.1", ' \
        b'"items": [{"title": "a", "date_published": "yesterday"}, {"title": "b"}]}'
    result = parse_document(body)
    assert isinstance(result, JsonFeed)
    items = normalize(result)
    assert [x.title for x in items] == ['a', 'b']
    assert [x.date for x in items] == [None, None]

def test_parse_invalid_json():
    assert isinstance(parse_document(b'{not json', 'application/json'), FeedFailure)

def test_parse_json_without_version():
    assert isinstance(parse_document(b'{"items": []}'), FeedFailure)

def test_parse_garbage():
    assert isinstance(parse_document(b'this is not a feed'), FeedFailure)


class _Response:
    def __init__(self, content: bytes, status_code: int = 200, content_type: str | None = None) -> None:
        self.content = content
        self.status_code = status_code
        self.headers = {'Content-Type': content_type} if content_type else {}

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} Error')


def test_fetch_feed(monkeypatch):
    calls = []
    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        return _Response(RSS2_DOC, content_type='application/rss+xml')
    monkeypatch.setattr(parsers.requests, 'get', fake_get)

    result = fetch_feed(FeedSource(name='x', url='http://example.com/rss'), timeout=(1, 2))
    assert isinstance(result, RssFeed)
    assert calls == [('http://example.com/rss', {'proxies': None, 'timeout': (1, 2)})]

def test_fetch_feed_connection_error_should_return_failure(monkeypatch):
    def fake_get(url, **kwargs):
        raise requests.ConnectionError('refused')
    monkeypatch.setattr(parsers.requests, 'get', fake_get)

    result = fetch_feed(FeedSource(name='x', url='http://127.0.0.1:7777'))
    assert isinstance(result, FeedFailure)
    assert isinstance(result.error, requests.ConnectionError)

def test_fetch_feed_http_error_should_return_failure(monkeypatch):
    monkeypatch.setattr(parsers.requests, 'get', lambda url, **kwargs: _Response(b'', status_code=404))

    result = fetch_feed(FeedSource(name='x', url='http://example.com/missing'))
    assert isinstance(result, FeedFailure)
    assert isinstance(result.error, requests.HTTPError)

def test_fetch_feed_uses_proxy(monkeypatch):
    calls = []
    def fake_get(url, **kwargs):
        calls.append(kwargs['proxies'])
        return _Response(ATOM_DOC)
    monkeypatch.setattr(parsers.requests, 'get', fake_get)

    fetch_feed(FeedSource(name='x', url='https://example.com/atom', proxy='127.0.0.1:8080'))
    fetch_feed(FeedSource(name='x', url='https://example.com/atom', proxy='socks5://127.0.0.1:1080'))
    fetch_feed(FeedSource(name='x', url='https://example.com/atom', proxy='127.0.0.1:8080',
                          proxies={'http': 'http://10.0.0.1:3128'}))
    assert calls == [
        {'https': 'https://127.0.0.1:8080'},
        {'socks5': 'socks5://127.0.0.1:1080'},
        {'http': 'http://10.0.0.1:3128'},
    ]
