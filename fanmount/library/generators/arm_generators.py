"""
腕（アーム）形状の生成関数。

腕は XY 平面の輪郭として作り、必要に応じて Z 方向へ押し出す。
根元は y=0 の辺（x ∈ [0, 根元厚]）、先端は x=width の辺
（y ∈ [height - 先端厚, height]）で、+Y 方向へ伸びる。
"""

import logging
import math
from typing import List, Optional, Tuple

import trimesh
from shapely.geometry import MultiPolygon, Polygon, box

from ...config import SMIDGE, GeometryConfig, get_config
from ...expo import expo, expo_points
from ...solids import (
    YZ_TO_X_EXTRUSION,
    circle,
    extrude,
    intersection,
    translate_2d,
    union_2d,
)
from ...utils import as_point, polygon_area
from ..validators import normalize_tang, require_percent, require_positive, require_vector

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]


def _largest(geometry) -> Polygon:
    """差分で生じた分割誤差の細片を除き、最大の多角形を返す。"""
    if isinstance(geometry, MultiPolygon):
        return max(geometry.geoms, key=lambda g: g.area)
    return geometry


def arm(size, base_thickness: float, tip_thickness: float, curvature: float,
        config: Optional[GeometryConfig] = None) -> Polygon:
    """
    曲線に沿った厚み可変の腕を生成する。

    曲線プロファイルから、厚み分だけ内側にずらした小さい曲線プロファイルを
    差し引く。

    引数:
        size: (width, height)
        base_thickness: 根元の厚み（x方向）
        tip_thickness: 先端の厚み（y方向）
        curvature: 曲率（0以外）
    """
    width, height = require_vector("Arm size", size)
    base_thickness = require_positive("Arm base thickness", base_thickness)
    tip_thickness = require_positive("Arm tip thickness", tip_thickness)
    if base_thickness >= width:
        raise ValueError(f"Arm base thickness {base_thickness} must be less than width {width}")
    if tip_thickness >= height:
        raise ValueError(f"Arm tip thickness {tip_thickness} must be less than height {height}")

    config = config or get_config()
    outer = expo((width, height), curvature, config)

    # 内側の曲線は外形と共有する右辺・底辺の外まで広げて差し引く
    inner_points = [
        (x + base_thickness, y)
        for x, y in expo_points((width - base_thickness, height - tip_thickness), curvature, config)[:-1]
    ]
    inner = Polygon(
        [(base_thickness, -SMIDGE)]
        + inner_points
        + [(width + SMIDGE, height - tip_thickness), (width + SMIDGE, -SMIDGE)]
    )
    return _largest(outer.difference(inner))


def arm_mixed(size, base_thickness: float, tip_thickness: float, straight_percent: float,
              curvature: float, config: Optional[GeometryConfig] = None) -> Polygon:
    """
    直線部と曲線部を連結した腕を生成する。

    引数:
        size: (width, height)
        straight_percent: 高さのうち直線部が占める割合（%）
    """
    width, height = require_vector("Arm size", size)
    straight_percent = require_percent("Straight percentage", straight_percent)
    base_thickness = require_positive("Arm base thickness", base_thickness)
    straight = height * straight_percent / 100.0

    if straight_percent == 100:
        return box(0.0, 0.0, base_thickness, height)
    if straight_percent == 0:
        return arm((width, height), base_thickness, tip_thickness, curvature, config)

    curved = arm((width, height - straight), base_thickness, tip_thickness, curvature, config)
    return union_2d([box(0.0, 0.0, base_thickness, straight), translate_2d(curved, dy=straight)])


def tang_polygon(width: float, height: float, tip_thickness: float,
                 tang: Tuple[float, float, float]) -> Polygon:
    """
    先端面に付けるタング（爪）の輪郭を生成する。

    引数:
        tang: (高さ%, 角度deg, 支点%)。高さは先端厚に対する突出量、
              支点は先端面の下端からの位置
    """
    height_pct, angle, pivot_pct = tang
    bottom = height - tip_thickness
    pivot = bottom + tip_thickness * pivot_pct / 100.0
    length = tip_thickness * height_pct / 100.0
    outer_low = max(bottom, pivot - length / math.tan(math.radians(angle)))

    points = [(width, bottom), (width, pivot), (width + length, outer_low)]
    if outer_low > bottom:
        points.append((width + length, bottom))
    return Polygon(points)


def arm_tapered(size, base_profile, tip_profile, tang=None, straight_percent: float = 0,
                curvature: float = -2, balance: float = 50,
                config: Optional[GeometryConfig] = None) -> trimesh.Trimesh:
    """
    幅が根元から先端へ変化する立体の腕を生成する。

    引数:
        size: (width, height)
        base_profile: 根元の (幅, 厚み)
        tip_profile: 先端の (幅, 厚み)
        tang: None、高さ%、または (高さ%, 角度deg, 支点%)
        straight_percent: 直線部の割合（%）
        curvature: 曲率（0以外）
        balance: 幅を +Z 側に振り分ける割合（%）。50で左右対称

    戻り値:
        z=0 を中心に幅方向へ広がる trimesh.Trimesh
    """
    width, height = require_vector("Arm size", size)
    base_width, base_thickness = require_vector("Arm base profile", base_profile)
    tip_width, tip_thickness = require_vector("Arm tip profile", tip_profile)
    balance = require_percent("Arm balance", balance)
    tang = normalize_tang(tang)
    config = config or get_config()

    silhouette = arm_mixed((width, height), base_thickness, tip_thickness,
                           straight_percent, curvature, config)
    tang_length = 0.0
    if tang is not None:
        # 全長が直線部のときは棒の上端側面に付ける
        tip_x = base_thickness if straight_percent == 100 else width
        silhouette = union_2d([silhouette, tang_polygon(tip_x, height, tip_thickness, tang)])
        tang_length = tip_thickness * tang[0] / 100.0

    symmetric = balance == 50 and base_width == tip_width
    depth = max(base_width, tip_width)
    if not symmetric:
        depth *= 2
    solid = extrude(silhouette, depth, z_offset=-depth / 2.0)
    if symmetric:
        return solid

    def limits(y: float) -> Tuple[float, float]:
        span = base_width + (tip_width - base_width) * y / height
        return -span * (100.0 - balance) / 100.0, span * balance / 100.0

    y0, y1 = -SMIDGE, height + SMIDGE
    left0, right0 = limits(y0)
    left1, right1 = limits(y1)
    clip = extrude(
        Polygon([(y0, left0), (y1, left1), (y1, right1), (y0, right0)]),
        width + tang_length + 2 * SMIDGE,
        transform=YZ_TO_X_EXTRUSION,
    )
    clip.apply_translation((-SMIDGE, 0.0, 0.0))
    logger.debug("arm_tapered base=%s tip=%s balance=%s depth=%.3f",
                 base_profile, tip_profile, balance, depth)
    return intersection([solid, clip])


def tangent_points_on_circle(p, c, radius: float) -> Tuple[Point2D, Point2D]:
    """
    外部の点 p から円 (c, radius) への2つの接点を求める。

    例外:
        ValueError: p が円の内部または円周上にある場合
    """
    p = as_point(p, 2)
    c = as_point(c, 2)
    radius = require_positive("Circle radius", radius)
    dx, dy = c - p
    dist = math.hypot(dx, dy)
    if radius >= dist:
        raise ValueError(
            f"Point {tuple(p)} lies inside or on the circle at {tuple(c)} with radius {radius}"
        )
    base = math.atan2(dy, dx)
    spread = math.asin(radius / dist)
    length = math.sqrt(dist * dist - radius * radius)
    return tuple(
        (float(p[0] + length * math.cos(base + sign * spread)),
         float(p[1] + length * math.sin(base + sign * spread)))
        for sign in (1, -1)
    )


def tangent_quad_candidates(p1, p2, c, radius: float) -> List[List[Point2D]]:
    """p1, p2 それぞれの接点を組み合わせた4つの四角形 [p1, t1, t2, p2]。"""
    t1s = tangent_points_on_circle(p1, c, radius)
    t2s = tangent_points_on_circle(p2, c, radius)
    start = tuple(float(v) for v in p1)
    end = tuple(float(v) for v in p2)
    return [[start, t1, t2, end] for t1 in t1s for t2 in t2s]


def arm_to_circle(p1, p2, c, radius: float, with_circle: bool = False,
                  config: Optional[GeometryConfig] = None) -> Polygon:
    """
    2点を共通の円へ接線でつなぐ輪郭を生成する。

    4つの候補のうち面積最大の四角形を採用する。面積最大の候補が自己交差
    している場合は警告を出し、自己交差しない候補の中で面積最大のものを使う。

    引数:
        p1, p2: 円の外側の点
        c, radius: 円の中心と半径
        with_circle: 円そのものも結合する
    """
    candidates = tangent_quad_candidates(p1, p2, c, radius)
    best = max(candidates, key=polygon_area)
    quad = Polygon(best)
    if not quad.is_valid:
        simple = [q for q in candidates if Polygon(q).is_valid]
        if not simple:
            raise ValueError(f"No simple tangent quadrilateral joins {p1} and {p2} to the circle")
        fallback = max(simple, key=polygon_area)
        logger.warning(
            "Largest tangent quadrilateral (area %.3f) self-intersects; using %.3f instead",
            polygon_area(best), polygon_area(fallback),
        )
        quad = Polygon(fallback)

    if with_circle:
        return union_2d([quad, circle(radius, tuple(as_point(c, 2)), config)])
    return quad
