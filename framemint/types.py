import os
from functools import partial
from typing import Any, Dict, Union

import typeguard

# https://github.com/python/typing/issues/182#issuecomment-199532520
JsonDict = Dict[str, Any]

Number = Union[int, float]


def typechecked(func=None, *args, **kwargs):
    if os.getenv("FRAMEMINT_NO_TYPE_CHECK", "False").lower() in ("true", "1"):
        if func is None:
            return partial(typechecked, *args, **kwargs)
        return func
    return typeguard.typechecked(func, *args, **kwargs)

