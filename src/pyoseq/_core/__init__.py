from ._config import Config, get_config, set_config
from ._depreciation import deprecated_alias
from ._main import Pipeable

__all__ = ["Config", "Pipeable", "deprecated_alias", "get_config", "set_config"]
