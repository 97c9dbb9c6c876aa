"""
指数関数型の漸近曲線プロファイル。

腕（アーム）形状の曲線部はすべてこの曲線を基にする。
曲線は (0, 0) から (width, height) へ立ち上がり、(width, 0) で閉じた
多角形になる。曲率が負のときは対角線で反転し、直線側と曲線側が入れ替わる。
"""

import logging
import math
import numbers
from typing import List, Optional, Tuple

from shapely.geometry import Polygon

from .config import GeometryConfig, get_config
from .solids import extrude

logger = logging.getLogger(__name__)


def asym_raw(x: float, s: float) -> float:
    """(1 - e^(-x/s)) / x。x=0 で特異なので呼び出し側でずらす。"""
    return (1.0 - math.exp(-x / s)) / x


def _parse_size(size) -> Tuple[float, float, Optional[float]]:
    if isinstance(size, numbers.Real):
        return float(size), float(size), None
    dims = [float(v) for v in size]
    if len(dims) == 2:
        return dims[0], dims[1], None
    if len(dims) == 3:
        return dims[0], dims[1], dims[2]
    raise ValueError(f"Curve size must be a scalar or 2/3 values, got {size!r}")


def expo_points(size, curvature: float, config: Optional[GeometryConfig] = None) -> List[Tuple[float, float]]:
    """
    曲線プロファイルの点列を生成する。

    引数:
        size: 一辺、(width, height) または (width, height, depth)
        curvature: 0以外。絶対値が大きいほど曲がりがきつく、符号で凹凸が反転する
        config: 分割数の設定

    戻り値:
        (0, 0) で始まり (width, 0) で終わる閉じた多角形の点列

    例外:
        ValueError: 寸法が正でない場合、または curvature が0の場合
    """
    width, height, depth = _parse_size(size)
    if width <= 0 or height <= 0:
        raise ValueError(f"Curve width and height must be positive, got {width}x{height}")
    if depth is not None and depth <= 0:
        raise ValueError(f"Curve depth must be positive, got {depth}")
    if curvature == 0:
        raise ValueError("Curve curvature must be non-zero")

    config = config or get_config()
    segments = config.segments()
    s = 1.0 / abs(curvature)
    offset = 0.01 * s

    # x=width で最大、x=0 で最小になるよう定義域を反転して評価する
    xs = [width * i / segments for i in range(segments + 1)]
    values = [asym_raw((width - x) / width + offset, s) for x in xs]
    floor = values[0]
    peak = values[-1]
    scale = height / (peak - floor)

    points = [(x, (v - floor) * scale) for x, v in zip(xs, values)]
    points[0] = (0.0, 0.0)
    points[-1] = (width, height)

    if curvature < 0:
        points = [(y / height * width, x / width * height) for x, y in points]

    points.append((width, 0.0))
    return points


def expo(size, curvature: float, config: Optional[GeometryConfig] = None):
    """
    曲線プロファイルを生成する。

    size に奥行きがあれば押し出した trimesh.Trimesh、なければ Polygon を返す。
    """
    _, _, depth = _parse_size(size)
    polygon = Polygon(expo_points(size, curvature, config))
    logger.debug("expo size=%s curvature=%s area=%.3f", size, curvature, polygon.area)
    if depth is None:
        return polygon
    return extrude(polygon, depth)
