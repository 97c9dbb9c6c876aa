"""
構造用の補助形状（角丸箱、線、放射状の線、グリル、ねじ穴）の生成関数。
"""

import math
from typing import Optional

import trimesh
from shapely.geometry import LineString, MultiPolygon, Polygon, box
from shapely.ops import unary_union

from ...config import SMIDGE, GeometryConfig, get_config
from ...solids import circle, cylinder, extrude, hexagon, union
from ...utils import as_point, distance
from ..catalog import FastenerCatalog, SpecLike, get, resolve_spec
from ..validators import require_positive, require_vector


def _arc_points(center, radius, start_deg, end_deg, segments):
    cx, cy = center
    pts = []
    for i in range(segments + 1):
        theta = math.radians(start_deg + (end_deg - start_deg) * i / float(segments))
        pts.append((cx + radius * math.cos(theta), cy + radius * math.sin(theta)))
    return pts


def rounded_square(size, radius: float, config: Optional[GeometryConfig] = None) -> Polygon:
    """
    角丸矩形を生成する（左下が原点）。

    角の半径は短辺の半分までに制限する。半径0なら通常の矩形。
    """
    width, height = require_vector("Rounded square size", size)
    if radius < 0:
        raise ValueError(f"Corner radius must not be negative, got {radius}")
    r = min(float(radius), width / 2.0, height / 2.0)
    if r == 0:
        return box(0.0, 0.0, width, height)

    config = config or get_config()
    segments = max(1, config.fragments(r) // 4)
    corners = [
        ((width - r, r), -90),        # 右下
        ((width - r, height - r), 0),  # 右上
        ((r, height - r), 90),         # 左上
        ((r, r), 180),                 # 左下
    ]
    points = []
    for center, start in corners:
        points.extend(_arc_points(center, r, start, start + 90, segments))
    return Polygon(points).buffer(0)


def rounded_box(size, radius: float, config: Optional[GeometryConfig] = None) -> trimesh.Trimesh:
    """XY 平面の角を丸めた箱を生成する。"""
    width, height, depth = require_vector("Rounded box size", size, 3)
    return extrude(rounded_square((width, height), radius, config), depth)


def line(p1, p2, width: float) -> Polygon:
    """2点を結ぶ幅 width の帯（端は平ら）を生成する。"""
    width = require_positive("Line width", width)
    if distance(p1, p2) == 0:
        raise ValueError("Line end points must differ")
    return LineString([tuple(as_point(p1, 2)), tuple(as_point(p2, 2))]).buffer(width / 2.0, cap_style=2)


def tangent_line_connector(c1, r1: float, c2, r2: float,
                           config: Optional[GeometryConfig] = None) -> Polygon:
    """2つの円を外側の共通接線でつないだ形状（凸包）を生成する。"""
    r1 = require_positive("First radius", r1)
    r2 = require_positive("Second radius", r2)
    config = config or get_config()
    first = circle(r1, tuple(as_point(c1, 2)), config)
    second = circle(r2, tuple(as_point(c2, 2)), config)
    return MultiPolygon([first, second]).convex_hull


def polar_lines(count: int, inner_radius: float, outer_radius: float, width: float,
                start_angle: float = 0.0):
    """
    原点から放射状に等間隔で並ぶ線を生成する。

    引数:
        count: 線の本数
        inner_radius, outer_radius: 線の内端・外端の半径
        width: 線の幅
        start_angle: 最初の線の角度（度）
    """
    if count < 1:
        raise ValueError(f"Line count must be at least 1, got {count}")
    if inner_radius < 0 or outer_radius <= inner_radius:
        raise ValueError(f"Invalid radii {inner_radius}..{outer_radius}")
    spokes = []
    for i in range(count):
        theta = math.radians(start_angle + 360.0 * i / count)
        direction = (math.cos(theta), math.sin(theta))
        start = (direction[0] * inner_radius, direction[1] * inner_radius)
        end = (direction[0] * outer_radius, direction[1] * outer_radius)
        spokes.append(line(start, end, width))
    return unary_union(spokes)


def grill(diameter: float, ring_count: int, ring_width: float, spoke_count: int,
          spoke_width: float, config: Optional[GeometryConfig] = None):
    """
    ファンのグリル（同心リング＋放射状のスポーク）を生成する。

    外周のリングは直径 diameter に接する。結果は円板の内側に切り取る。
    """
    radius = require_positive("Grill diameter", diameter) / 2.0
    ring_width = require_positive("Ring width", ring_width)
    if ring_count < 1:
        raise ValueError(f"Grill needs at least one ring, got {ring_count}")
    if ring_width * ring_count >= radius:
        raise ValueError(f"{ring_count} rings of width {ring_width} do not fit radius {radius}")
    config = config or get_config()

    shapes = []
    pitch = radius / ring_count
    for i in range(1, ring_count + 1):
        outer = pitch * i
        shapes.append(circle(outer, config=config).difference(circle(outer - ring_width, config=config)))
    if spoke_count > 0:
        shapes.append(polar_lines(spoke_count, 0.0, radius, require_positive("Spoke width", spoke_width)))
    return unary_union(shapes).intersection(circle(radius, config=config))


def screw_hole(
    spec: SpecLike,
    depth: float,
    clearance: float = 0.2,
    nut_trap_depth: float = 0.0,
    catalog: Optional[FastenerCatalog] = None,
    config: Optional[GeometryConfig] = None,
) -> trimesh.Trimesh:
    """
    ねじ穴の切削用ソリッドを生成する（z=0 から depth まで）。

    引数:
        depth: 穴の深さ
        clearance: 呼び径に加える隙間（直径）
        nut_trap_depth: z=0 側に設ける六角ナット逃げの深さ（0で無し）
    """
    depth = require_positive("Hole depth", depth)
    if clearance < 0 or nut_trap_depth < 0:
        raise ValueError("Clearance and nut trap depth must not be negative")
    spec = resolve_spec(spec, catalog)
    config = config or get_config()

    bore = cylinder(get(spec, "thread_diameter") + clearance, depth + 2 * SMIDGE,
                    z_offset=-SMIDGE, config=config)
    if nut_trap_depth == 0:
        return bore
    trap = extrude(hexagon(get(spec, "nut_across_flats") + clearance), nut_trap_depth + SMIDGE,
                   z_offset=-SMIDGE)
    return union([bore, trap])
