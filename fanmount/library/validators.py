"""
形状生成関数の引数検証ユーティリティ。
"""

import math
import numbers
from typing import Any, Optional, Sequence, Tuple

from ..utils import is_positive_vector
from .catalog import Specification, get


DEFAULT_TANG_ANGLE = 45.0
DEFAULT_TANG_PIVOT = 100.0


def require_positive(name: str, value: Any) -> float:
    """正の有限数であることを確認する。"""
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive number, got {value!r}")
    return float(value)


def require_vector(name: str, value: Any, length: int = 2) -> Tuple[float, ...]:
    """正の数からなる長さ length のベクトルであることを確認する。"""
    if not is_positive_vector(value, length):
        raise ValueError(f"{name} must be a {length}-vector of positive numbers, got {value!r}")
    return tuple(float(v) for v in value)


def require_percent(name: str, value: Any, allow_zero: bool = True) -> float:
    """0〜100 の百分率であることを確認する。"""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a percentage, got {value!r}")
    lower_ok = value >= 0 if allow_zero else value > 0
    if not lower_ok or value > 100:
        bounds = "[0, 100]" if allow_zero else "(0, 100]"
        raise ValueError(f"{name} must be within {bounds}, got {value}")
    return float(value)


def normalize_tang(tang: Any) -> Optional[Tuple[float, float, float]]:
    """
    タング指定を (高さ%, 角度deg, 支点%) にそろえる。

    引数:
        tang: None/0（タング無し）、高さ% の数値、または1〜3要素の組

    戻り値:
        タング無しなら None
    """
    if tang is None:
        return None
    if isinstance(tang, numbers.Real) and not isinstance(tang, bool):
        if tang == 0:
            return None
        values: Sequence[Any] = (tang,)
    else:
        try:
            values = tuple(tang)
        except TypeError:
            raise ValueError(f"Tang must be a percentage or a (height%, angle, pivot%) tuple, got {tang!r}") from None
        if not 1 <= len(values) <= 3:
            raise ValueError(f"Tang tuple must have 1 to 3 entries, got {len(values)}")

    defaults = (None, DEFAULT_TANG_ANGLE, DEFAULT_TANG_PIVOT)
    height_pct, angle, pivot_pct = [
        values[i] if i < len(values) and values[i] is not None else defaults[i]
        for i in range(3)
    ]
    height_pct = require_percent("Tang height", height_pct, allow_zero=False)
    pivot_pct = require_percent("Tang pivot", pivot_pct, allow_zero=False)
    if isinstance(angle, bool) or not isinstance(angle, numbers.Real) or not 0 < angle <= 90:
        raise ValueError(f"Tang angle must be within (0, 90] degrees, got {angle!r}")
    return height_pct, float(angle), pivot_pct


def fill_default(spec: Specification, value: Optional[float], attribute: str) -> float:
    """
    未指定（None/0）の寸法をカタログの公称値で補完する。

    例外:
        KeyError: 公称値がカタログに無い場合
    """
    if value:
        return require_positive(attribute, value)
    return float(get(spec, attribute))
