# flake8: noqa

from .base import *
from .crossmint import *
from .pinata import *
