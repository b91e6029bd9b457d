# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:16:53
# @Author : Kariko Lin

from .model import (
    IniClass, IniSectionProxy, IniSectionView,
    coerce, to_bool, to_str, trim
)
from .parser import IniParser
from .manager import IniManager
