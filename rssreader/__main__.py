# -*- coding: utf-8 -*-
#
# Copyright (c) 2025~2999 - Cologler <skyoflw@gmail.com>
# ----------
#
# ----------

from .cli import app

if __name__ == '__main__':
    app(prog_name='rssreader')
