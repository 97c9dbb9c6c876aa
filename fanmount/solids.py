"""
2D/3D基本形状とブーリアン演算のラッパー。

2D形状は shapely の Polygon、3D形状は trimesh.Trimesh で表す。
3Dのブーリアン演算は manifold エンジンを使う。
"""

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
import trimesh
from shapely import affinity
from shapely.geometry import MultiPolygon, Polygon
from shapely.ops import unary_union

from .config import GeometryConfig, get_config


BOOLEAN_ENGINE = "manifold"


def _circle_points(center: Tuple[float, float], radius: float, segments: int = 48) -> List[Tuple[float, float]]:
    """円周上の点を生成する。"""
    cx, cy = center
    pts = []
    for i in range(segments):
        theta = 2.0 * math.pi * i / segments
        x = cx + radius * math.cos(theta)
        y = cy + radius * math.sin(theta)
        pts.append((x, y))
    return pts


def regular_polygon(sides: int, radius: float, center: Tuple[float, float] = (0.0, 0.0)) -> Polygon:
    """
    正多角形を生成する（最初の頂点は +X 方向）。

    引数:
        sides: 辺の数（3以上）
        radius: 外接円の半径
        center: 中心座標
    """
    if sides < 3:
        raise ValueError(f"A regular polygon needs at least 3 sides, got {sides}")
    if radius <= 0:
        raise ValueError(f"Polygon radius must be positive, got {radius}")
    return Polygon(_circle_points(center, radius, sides))


def circle(radius: float, center: Tuple[float, float] = (0.0, 0.0),
           config: Optional[GeometryConfig] = None) -> Polygon:
    """設定の分割数で近似した円を生成する。"""
    config = config or get_config()
    return regular_polygon(config.fragments(radius), radius, center)


def hexagon(across_flats: float, center: Tuple[float, float] = (0.0, 0.0)) -> Polygon:
    """二面幅から六角形を生成する。"""
    radius = across_flats / math.cos(math.radians(30)) / 2.0
    return regular_polygon(6, radius, center)


def as_polygon(geometry) -> Polygon:
    """ブーリアン演算結果を単一のPolygonに整える。"""
    if isinstance(geometry, Polygon):
        return geometry
    if isinstance(geometry, MultiPolygon):
        parts = [g for g in geometry.geoms if not g.is_empty]
        if len(parts) == 1:
            return parts[0]
    raise ValueError(f"Expected a single polygon, got {geometry.geom_type}")


def union_2d(shapes: Sequence) -> Polygon:
    return as_polygon(unary_union(list(shapes)))


def translate_2d(shape, dx: float = 0.0, dy: float = 0.0):
    return affinity.translate(shape, xoff=dx, yoff=dy)


def extrude(shape, height: float, z_offset: float = 0.0,
            transform: Optional[np.ndarray] = None) -> trimesh.Trimesh:
    """
    2D形状を+Z方向に押し出す。

    引数:
        shape: Polygon または点列
        height: 押し出し高さ
        z_offset: 押し出し開始位置のZ
        transform: 押し出し後に適用する4x4変換行列
    """
    if height <= 0:
        raise ValueError(f"Extrusion height must be positive, got {height}")
    poly = shape if isinstance(shape, (Polygon, MultiPolygon)) else Polygon(shape)
    if not poly.is_valid:
        poly = poly.buffer(0)
    if poly.is_empty:
        raise ValueError("Cannot extrude an empty profile")

    if isinstance(poly, MultiPolygon):
        mesh = trimesh.util.concatenate(
            [trimesh.creation.extrude_polygon(p, height=height) for p in poly.geoms]
        )
    else:
        mesh = trimesh.creation.extrude_polygon(poly, height=height)
    if z_offset:
        mesh.apply_translation((0.0, 0.0, z_offset))
    if transform is not None:
        mesh.apply_transform(transform)
    return mesh


def cylinder(diameter: float, height: float, z_offset: float = 0.0,
             config: Optional[GeometryConfig] = None) -> trimesh.Trimesh:
    """底面を z_offset に置いた円柱を生成する。"""
    if diameter <= 0:
        raise ValueError(f"Cylinder diameter must be positive, got {diameter}")
    return extrude(circle(diameter / 2.0, config=config), height, z_offset=z_offset)


def union(meshes: Sequence[trimesh.Trimesh]) -> trimesh.Trimesh:
    meshes = list(meshes)
    if len(meshes) == 1:
        return meshes[0]
    return trimesh.boolean.union(meshes, engine=BOOLEAN_ENGINE)


def difference(base: trimesh.Trimesh, *tools: trimesh.Trimesh) -> trimesh.Trimesh:
    if not tools:
        return base
    return trimesh.boolean.difference([base] + list(tools), engine=BOOLEAN_ENGINE)


def intersection(meshes: Sequence[trimesh.Trimesh]) -> trimesh.Trimesh:
    return trimesh.boolean.intersection(list(meshes), engine=BOOLEAN_ENGINE)


# 押し出し方向(Z)をXへ、平面の(x, y)を(Y, Z)へ写す回転
YZ_TO_X_EXTRUSION = np.array([
    [0.0, 0.0, 1.0, 0.0],
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, 0.0, 1.0],
])
