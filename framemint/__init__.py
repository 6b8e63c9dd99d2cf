# flake8: noqa

from .backend import *
from .exception import *
from .keyframes import *
from .metadata import *
from .network import *
from .nft import *
from .orchestrator import *
from .uploader import *
