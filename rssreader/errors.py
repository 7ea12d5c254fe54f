# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------


class FeedError(Exception):
    pass


class ParseFailedError(FeedError):
    '''
    Raised when the feed parser reported a failure instead of a feed.
    '''
    def __init__(self, error: BaseException) -> None:
        super().__init__(f'parse failed: {error}')
        self.error = error


class MalformedLinkError(FeedError):
    def __init__(self, link: str) -> None:
        super().__init__(f'malformed link: {link!r}')
        self.link = link
