# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Annotated, cast

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, Response, status

from ._utils import configure_logger, get_logger
from .cfg import Config, ConfigHelper
from .core import load_config_helper, load_feed
from .errors import ParseFailedError
from .models import FeedSource, RawFeedResult, UniformFeedItem
from .parsers import fetch_feed
from .settings import load_settings


def _get_config_from_request(request: Request) -> Config:
    config_helper = cast(ConfigHelper, request.app.state.config_helper)
    config_helper.reload_config_if_updated()
    return config_helper.get_config()

ConfigDeps = Annotated[Config, Depends(_get_config_from_request)]


def _get_parser(config: ConfigDeps) -> Callable[[FeedSource], RawFeedResult]:
    timeout = config.get_timeout()
    return lambda source: fetch_feed(source, timeout=timeout)

ParserDeps = Annotated[Callable[[FeedSource], RawFeedResult], Depends(_get_parser)]


router = APIRouter()


@router.get('/feeds')
def get_feeds(config: ConfigDeps) -> list[FeedSource]:
    return list(config.get_catalog())


# sync endpoint, fastapi runs it in the threadpool
@router.get('/feeds/{index}/items')
def get_feed_items(index: int, config: ConfigDeps, parser: ParserDeps) -> dict:
    catalog = config.get_catalog()
    if not 0 <= index < len(catalog):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f'No feed at index {index}')
    source = catalog[index]

    try:
        items: list[UniformFeedItem] = load_feed(source, parser)
    except ParseFailedError as error:
        get_logger().error('load %r failure with %s', source.name, error)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(error))

    return {
        'feed': source.model_dump(include={'name', 'url'}),
        'items': [x.model_dump(mode='json') for x in items],
    }


@router.head('/ping')
@router.get('/ping')
def ping() -> Response:
    return Response(status_code=200)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logger(load_settings().log_level.upper())

    config_helper = load_config_helper()
    config_helper.get_config()
    app.state.config_helper = config_helper
    yield

app = FastAPI(
    lifespan=lifespan,
)
app.include_router(router)
