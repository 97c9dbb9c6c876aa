"""
ファンマウント用のパラメトリック形状ライブラリ。
"""

from .config import SMIDGE, GeometryConfig, get_config, set_config
from .expo import expo, expo_points
from .pair import PairOrder, pair_order

__all__ = [
    "SMIDGE",
    "GeometryConfig",
    "get_config",
    "set_config",
    "expo",
    "expo_points",
    "PairOrder",
    "pair_order",
]
