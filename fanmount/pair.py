"""
2点の組を基準点に対して並べ替えるユーティリティ。
"""

from enum import Enum
from typing import Sequence, Tuple, Union

import numpy as np

from .utils import as_point


class PairOrder(str, Enum):
    """並べ替えの基準。"""

    CLOSEST = "closest"
    FARTHEST = "farthest"
    CLOSEST_X = "closest-x"
    CLOSEST_Y = "closest-y"
    CLOSEST_Z = "closest-z"
    FARTHEST_X = "farthest-x"
    FARTHEST_Y = "farthest-y"
    FARTHEST_Z = "farthest-z"
    FIRST = "first"
    LAST = "last"


_AXES = {"x": 0, "y": 1, "z": 2}


def _measure(reference: np.ndarray, point: np.ndarray, axis: Union[int, None]) -> float:
    if axis is None:
        return float(np.linalg.norm(point - reference))
    if axis >= len(point) or axis >= len(reference):
        raise ValueError(f"Axis {axis} is out of range for points of dimension {len(point)}")
    return abs(float(point[axis] - reference[axis]))


def pair_order(reference, pair: Sequence, criterion: Union[PairOrder, str]) -> Tuple:
    """
    2点の組を基準点からの距離で並べ替える。

    距離が等しい場合は元の順序を保つ（先の要素が勝つ）。

    引数:
        reference: 基準点
        pair: 2点の組
        criterion: PairOrder またはその文字列値

    戻り値:
        並べ替えた2点のタプル（元の要素をそのまま返す）

    例外:
        ValueError: 未知の基準、または組が2点でない場合
    """
    try:
        criterion = PairOrder(criterion)
    except ValueError:
        raise ValueError(f"Unknown pair order criterion: {criterion!r}") from None

    items = tuple(pair)
    if len(items) != 2:
        raise ValueError(f"Expected a pair of points, got {len(items)} items")
    first, second = items

    if criterion is PairOrder.FIRST:
        return first, second
    if criterion is PairOrder.LAST:
        return second, first

    name = criterion.value
    axis = _AXES[name[-1]] if "-" in name else None
    ref = as_point(reference)
    d_first = _measure(ref, as_point(first), axis)
    d_second = _measure(ref, as_point(second), axis)

    if name.startswith("closest"):
        swap = d_second < d_first
    else:
        swap = d_first < d_second
    return (second, first) if swap else (first, second)
