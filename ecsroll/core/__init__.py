from ._provider import Provider
from ._yaml_loader import YamlLoader
from .data_model import (
    DataModel,
    DataModelField,
    FrozenDataModel,
    PassThroughModel,
)
from .time import Time

__all__ = [
    "DataModel",
    "DataModelField",
    "FrozenDataModel",
    "PassThroughModel",
    "Provider",
    "Time",
    "YamlLoader",
]
