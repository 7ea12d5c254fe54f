# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

import webbrowser
from typing import Protocol
from urllib.parse import urlparse

from ._utils import get_logger
from .errors import MalformedLinkError


class LinkOpener(Protocol):
    def can_open(self, url: str) -> bool: ...

    def open(self, url: str) -> None: ...


class BrowserLinkOpener:
    '''
    Open links with the system web browser.
    '''
    SCHEMES = frozenset(['http', 'https', 'mailto'])

    def can_open(self, url: str) -> bool:
        if urlparse(url).scheme.lower() not in self.SCHEMES:
            return False
        try:
            webbrowser.get()
        except webbrowser.Error:
            return False
        return True

    def open(self, url: str) -> None:
        webbrowser.open(url)


def parse_link(link: str) -> str:
    '''
    Return the link if it is an absolute URL, otherwise raise `MalformedLinkError`.

    Whitespace anywhere, including around the link, makes it malformed.
    '''
    if not link or any(c.isspace() for c in link):
        raise MalformedLinkError(link)
    try:
        parsed = urlparse(link)
    except ValueError as error:
        raise MalformedLinkError(link) from error
    if not parsed.scheme or not (parsed.netloc or parsed.path):
        raise MalformedLinkError(link)
    return link

def open_link(link: str | None, opener: LinkOpener) -> bool:
    '''
    Ask the opener to open the link.

    Return True if an open request was issued.
    '''
    if link is None:
        return False

    try:
        url = parse_link(link)
    except MalformedLinkError as error:
        get_logger().debug('ignore %s', error)
        return False

    if not opener.can_open(url):
        get_logger().debug('no handler for %s', url)
        return False

    opener.open(url)
    return True
