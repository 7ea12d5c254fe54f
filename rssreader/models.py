# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

from datetime import datetime
from typing import TypeAlias

from pydantic import BaseModel, ValidationError, ValidatorFunctionWrapHandler, field_validator


class FeedSource(BaseModel):
    model_config = {
        'frozen': True,
    }

    name: str
    url: str
    proxy: str | None = None
    proxies: dict[str, str] | None = None


class AtomLink(BaseModel):
    model_config = {
        'frozen': True,
    }

    href: str | None = None


class AtomEntry(BaseModel):
    model_config = {
        'frozen': True,
    }

    title: str | None = None
    updated: datetime | None = None
    links: list[AtomLink] | None = None


class AtomFeed(BaseModel):
    model_config = {
        'frozen': True,
    }

    entries: list[AtomEntry] | None = None


class RssItem(BaseModel):
    model_config = {
        'frozen': True,
    }

    title: str | None = None
    pub_date: datetime | None = None
    link: str | None = None


class RssFeed(BaseModel):
    model_config = {
        'frozen': True,
    }

    items: list[RssItem] | None = None


class JsonFeedItem(BaseModel):
    # keys follow https://www.jsonfeed.org/version/1.1/
    model_config = {
        'frozen': True,
        'extra': 'ignore',
    }

    id: str | int | None = None
    title: str | None = None
    url: str | None = None
    date_published: datetime | None = None

    @field_validator('date_published', mode='wrap')
    @classmethod
    def lenient_date(cls, value: object, handler: ValidatorFunctionWrapHandler) -> datetime | None:
        # an unreadable date only drops the date, not the item
        try:
            return handler(value)
        except ValidationError:
            return None


class JsonFeed(BaseModel):
    model_config = {
        'frozen': True,
        'extra': 'ignore',
    }

    version: str
    title: str | None = None
    items: list[JsonFeedItem] | None = None


class FeedFailure(BaseModel):
    model_config = {
        'frozen': True,
        'arbitrary_types_allowed': True,
    }

    error: Exception


RawFeedResult: TypeAlias = AtomFeed | RssFeed | JsonFeed | FeedFailure


class UniformFeedItem(BaseModel):
    model_config = {
        'frozen': True,
    }

    title: str | None = None
    date: datetime | None = None
    link: str | None = None
