from . import machine
from . import store
from . import maintenance
from . import asset_tag

__all__ = [
    "machine",
    "store",
    "maintenance",
    "asset_tag",
]
