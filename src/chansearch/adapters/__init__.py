from .base import BaseAdapter
from .fourchan import FourChanAdapter

__all__ = [
    "BaseAdapter",
    "FourChanAdapter",
]
