"""
部品メッシュ生成モジュール。

腕、締結部品、構造用補助形状の生成関数を含む。
"""

from .arm_generators import (
    arm,
    arm_mixed,
    arm_tapered,
    arm_to_circle,
    tangent_points_on_circle,
    tangent_quad_candidates,
)
from .fastener_generators import (
    FastenerModel,
    fender_washer,
    hex_bolt,
    hex_nut,
    washer,
)
from .structural_generators import (
    grill,
    line,
    polar_lines,
    rounded_box,
    rounded_square,
    screw_hole,
    tangent_line_connector,
)

__all__ = [
    # 腕
    "arm",
    "arm_mixed",
    "arm_tapered",
    "arm_to_circle",
    "tangent_points_on_circle",
    "tangent_quad_candidates",
    # 締結部品
    "FastenerModel",
    "hex_bolt",
    "hex_nut",
    "washer",
    "fender_washer",
    # 構造用補助形状
    "rounded_square",
    "rounded_box",
    "line",
    "tangent_line_connector",
    "polar_lines",
    "grill",
    "screw_hole",
]
