# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

from datetime import datetime, tzinfo

from .models import UniformFeedItem

DATE_FORMAT = '%Y/%m/%d %H:%M:%S'
MISSING_TITLE = ''
MISSING_DATE = '-'


def display_title(item: UniformFeedItem) -> str:
    return item.title if item.title is not None else MISSING_TITLE

def display_date(item: UniformFeedItem, tz: tzinfo | None = None) -> str:
    '''
    Format the item date as `yyyy/MM/dd HH:mm:ss` in `tz` (local time if None).
    '''
    if item.date is None:
        return MISSING_DATE
    return _localize(item.date, tz).strftime(DATE_FORMAT)

def _localize(date: datetime, tz: tzinfo | None) -> datetime:
    if date.tzinfo is None:
        return date
    return date.astimezone(tz)
