"""
ねじ山生成の外部プリミティブとの境界。

ねじ山の形状そのものはこのパッケージの対象外。ボルト/ナット生成は
ThreadPrimitive を介してねじ部を受け取る。同梱の PlainThreads は
ねじ山を省略し、呼び径の円柱で代用する。
"""

import re
from fractions import Fraction
from typing import Optional, Protocol, Tuple

import trimesh

from ..config import GeometryConfig, get_config
from ..solids import circle, extrude, union_2d

MM_PER_INCH = 25.4

# ねじ込み始端の面取り角（度）
DEFAULT_HIGBEE_ARC = 20

_METRIC_RE = re.compile(r"^M(?P<diameter>\d+(?:\.\d+)?)x(?P<pitch>\d+(?:\.\d+)?)$", re.IGNORECASE)
_UNIFIED_RE = re.compile(r"^(?P<diameter>\d+(?:/\d+)?)-(?P<tpi>\d+)$")


def parse_thread_spec(thread_spec: str) -> Tuple[float, float]:
    """
    ねじ呼びを (呼び径mm, ピッチmm) に変換する。

    "M6x1" のようなメートルねじと "1/4-20" のようなユニファイねじに対応する。

    例外:
        ValueError: 解釈できない呼びの場合
    """
    text = thread_spec.strip()
    match = _METRIC_RE.match(text)
    if match:
        return float(match.group("diameter")), float(match.group("pitch"))
    match = _UNIFIED_RE.match(text)
    if match:
        diameter = float(Fraction(match.group("diameter"))) * MM_PER_INCH
        return diameter, MM_PER_INCH / int(match.group("tpi"))
    raise ValueError(f"Unknown thread designator: {thread_spec!r}")


class ThreadPrimitive(Protocol):
    """ねじ部を生成するプリミティブのインターフェース。"""

    def external(self, thread_spec: str, turns: float,
                 higbee_arc: float = DEFAULT_HIGBEE_ARC) -> trimesh.Trimesh:
        """おねじ。z=0 から turns * ピッチ の高さ。"""
        ...

    def internal(self, thread_spec: str, turns: float, outer_diameter: float,
                 higbee_arc: float = DEFAULT_HIGBEE_ARC) -> trimesh.Trimesh:
        """めねじ付きの筒。端部の逃げとして1回転分長く、(turns + 1) * ピッチ の高さ。"""
        ...


class PlainThreads:
    """ねじ山を省略した円柱で代用するプリミティブ。"""

    def __init__(self, config: Optional[GeometryConfig] = None):
        self.config = config

    def external(self, thread_spec, turns, higbee_arc=DEFAULT_HIGBEE_ARC):
        diameter, pitch = parse_thread_spec(thread_spec)
        height = turns * pitch
        return extrude(circle(diameter / 2.0, config=self.config or get_config()), height)

    def internal(self, thread_spec, turns, outer_diameter, higbee_arc=DEFAULT_HIGBEE_ARC):
        diameter, pitch = parse_thread_spec(thread_spec)
        if outer_diameter <= diameter:
            raise ValueError(
                f"Nut outer diameter {outer_diameter} must exceed thread diameter {diameter}"
            )
        config = self.config or get_config()
        height = (turns + 1) * pitch
        ring = circle(outer_diameter / 2.0, config=config).difference(circle(diameter / 2.0, config=config))
        return extrude(union_2d([ring]), height)
