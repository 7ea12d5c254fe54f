# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

import logging
from functools import cache


@cache
def get_logger() -> logging.Logger:
    return logging.getLogger('rssreader')

def configure_logger(level: str | int = logging.INFO) -> None:
    logging.basicConfig(
        format='%(asctime)s [%(levelname)s] - %(name)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p',
        level=level
    )
    get_logger().setLevel(level)
