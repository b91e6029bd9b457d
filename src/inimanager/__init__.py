# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:20:37
# @Author : Kariko Lin

import logging

from .errors import IniError, IniIOError, IniUsageError
from .ini import (
    IniClass, IniManager, IniParser,
    IniSectionProxy, IniSectionView, trim
)

__all__ = [
    'IniClass', 'IniManager', 'IniParser',
    'IniSectionProxy', 'IniSectionView', 'trim',
    'IniError', 'IniIOError', 'IniUsageError'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
