from ._aiter import AsyncIter
from ._core import Config, Pipeable, get_config, set_config
from ._errors import EmptyReduceError
from ._iter import Iter
from ._results import NONE, NoneOption, Option, OptionUnwrapError, Some
from ._source import AsyncSource, SyncSource
from ._types import Done, Indexed, Next, Partitioned, PullResult

__all__ = [
    "NONE",
    "AsyncIter",
    "AsyncSource",
    "Config",
    "Done",
    "EmptyReduceError",
    "Indexed",
    "Iter",
    "Next",
    "NoneOption",
    "Option",
    "OptionUnwrapError",
    "Partitioned",
    "Pipeable",
    "PullResult",
    "Some",
    "SyncSource",
    "get_config",
    "set_config",
]
