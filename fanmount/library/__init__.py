"""
部品ライブラリモジュール - 公開API

このモジュールは以下の主要インターフェースを提供する:
1. 締結部品カタログの読み込みと属性の参照
2. 寸法からの導出値（六角の換算、ねじの回転数）
3. 腕・締結部品・補助形状の生成
"""

from .catalog import (
    FastenerCatalog,
    Specification,
    distance_to_turns,
    exists,
    get,
    get_attribute,
    get_attribute_or_zero,
    get_catalog,
    get_or_default,
    get_spec,
    has_attribute,
    hex_flats_to_diameter,
    hex_flats_to_radius,
    nominal_circular_diameter,
    nominal_circular_radius,
    reload_catalog,
    resolve_spec,
    turns_to_distance,
)
from .generator import generate_fastener, generate_hardware_set, list_available_generators
from .generators import FastenerModel
from .threads import PlainThreads, ThreadPrimitive, parse_thread_spec

__all__ = [
    # カタログ
    "FastenerCatalog",
    "Specification",
    "get_catalog",
    "reload_catalog",
    "get_spec",
    "resolve_spec",
    "get",
    "get_or_default",
    "exists",
    "get_attribute",
    "get_attribute_or_zero",
    "has_attribute",
    # 導出値
    "hex_flats_to_diameter",
    "hex_flats_to_radius",
    "distance_to_turns",
    "turns_to_distance",
    "nominal_circular_diameter",
    "nominal_circular_radius",
    # ねじ
    "ThreadPrimitive",
    "PlainThreads",
    "parse_thread_spec",
    # 生成
    "FastenerModel",
    "generate_fastener",
    "generate_hardware_set",
    "list_available_generators",
]
