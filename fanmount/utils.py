import json
import math
import numbers

import numpy as np


def read_json(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def as_point(value, dims=None):
    point = np.asarray(value, dtype=float)
    if point.ndim != 1 or (dims is not None and point.shape[0] != dims):
        raise ValueError(f"Expected a {dims or 'N'}-dimensional point, got {value!r}")
    return point


def distance(a, b):
    return float(np.linalg.norm(as_point(a) - as_point(b)))


def polygon_area(points):
    """靴紐公式による多角形の面積（絶対値）。"""
    total = 0.0
    n = len(points)
    for i in range(n):
        x1, y1 = points[i][0], points[i][1]
        x2, y2 = points[(i + 1) % n][0], points[(i + 1) % n][1]
        total += x1 * y2 - x2 * y1
    return abs(total) / 2.0


def is_positive_vector(value, length):
    try:
        items = list(value)
    except TypeError:
        return False
    if len(items) != length:
        return False
    for item in items:
        if isinstance(item, bool) or not isinstance(item, numbers.Real):
            return False
        if not math.isfinite(item) or item <= 0:
            return False
    return True
