"""
締結部品のメッシュ生成関数。

寸法はすべてカタログの Specification から取る。spec 引数には
サイズ名（"M6" など）と解決済みの Specification のどちらも渡せる。
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import trimesh

from ...config import SMIDGE, GeometryConfig, get_config
from ...solids import cylinder, difference, extrude, hexagon, union
from ..catalog import (
    FastenerCatalog,
    SpecLike,
    Specification,
    distance_to_turns,
    get,
    resolve_spec,
)
from ..threads import PlainThreads, ThreadPrimitive
from ..validators import fill_default

logger = logging.getLogger(__name__)


@dataclass
class FastenerModel:
    """締結部品の生成結果。"""

    mesh: trimesh.Trimesh
    spec: Specification
    parameters: Dict[str, Any]
    components: Dict[str, trimesh.Trimesh] = field(default_factory=dict)
    turns: float = 0.0


def _threads(threads: Optional[ThreadPrimitive], config: Optional[GeometryConfig]) -> ThreadPrimitive:
    return threads if threads is not None else PlainThreads(config)


def hex_bolt(
    spec: SpecLike,
    length: float,
    shank: float = 0.0,
    threads: Optional[ThreadPrimitive] = None,
    catalog: Optional[FastenerCatalog] = None,
    config: Optional[GeometryConfig] = None,
) -> FastenerModel:
    """
    六角ボルトのメッシュを生成する。

    頭部は z ∈ [-頭部厚, 0]、円筒部は z ∈ [0, shank]、ねじ部は
    z ∈ [shank, length] に置く。

    引数:
        spec: サイズ名または Specification
        length: 首下長さ
        shank: ねじ無し円筒部の長さ

    例外:
        ValueError: length < 0 または shank が範囲外の場合
    """
    if length < 0 or shank < 0 or length < shank:
        raise ValueError(f"Bolt length {length} must be non-negative and at least the shank {shank}")
    spec = resolve_spec(spec, catalog)
    config = config or get_config()

    head_thickness = get(spec, "head_thickness")
    head = extrude(hexagon(get(spec, "head_across_flats")), head_thickness, z_offset=-head_thickness)
    components = {"head": head}

    if shank > 0:
        components["shank"] = cylinder(get(spec, "thread_diameter"), shank, config=config)

    turns = distance_to_turns(spec, length - shank)
    if turns > 0:
        thread = _threads(threads, config).external(get(spec, "thread_spec"), turns)
        thread.apply_translation((0.0, 0.0, shank))
        components["thread"] = thread

    logger.debug("hex_bolt %s length=%s shank=%s turns=%.3f", spec.name, length, shank, turns)
    return FastenerModel(
        mesh=union(list(components.values())),
        spec=spec,
        parameters={"length": length, "shank": shank},
        components=components,
        turns=turns,
    )


def hex_nut(
    spec: SpecLike,
    thickness: Optional[float] = None,
    threads: Optional[ThreadPrimitive] = None,
    catalog: Optional[FastenerCatalog] = None,
    config: Optional[GeometryConfig] = None,
) -> FastenerModel:
    """
    六角ナットのメッシュを生成する。

    めねじ付きの筒と、ねじ穴を抜いた六角のカラーを結合する。
    ねじ側は端部の逃げとして1回転分長く作るため、回転数は1減らして渡す。

    引数:
        thickness: ナット厚（未指定ならカタログの nut_thickness）
    """
    spec = resolve_spec(spec, catalog)
    config = config or get_config()
    thickness = fill_default(spec, thickness, "nut_thickness")
    across_flats = get(spec, "nut_across_flats")
    bore = get(spec, "thread_diameter")

    turns = distance_to_turns(spec, thickness) - 1
    blank = _threads(threads, config).internal(get(spec, "thread_spec"), turns, across_flats)
    collar = extrude(hexagon(across_flats), thickness)
    collar = difference(collar, cylinder(bore, thickness + 2 * SMIDGE, z_offset=-SMIDGE, config=config))

    logger.debug("hex_nut %s thickness=%s turns=%.3f", spec.name, thickness, turns)
    return FastenerModel(
        mesh=union([blank, collar]),
        spec=spec,
        parameters={"thickness": thickness},
        components={"thread": blank, "collar": collar},
        turns=turns,
    )


def _annulus(outer_diameter: float, inner_diameter: float, thickness: float,
             config: GeometryConfig) -> Dict[str, trimesh.Trimesh]:
    if inner_diameter >= outer_diameter:
        raise ValueError(
            f"Washer inner diameter {inner_diameter} must be smaller than outer diameter {outer_diameter}"
        )
    outer = cylinder(outer_diameter, thickness, config=config)
    # 内径側は上下に SMIDGE だけはみ出させて同一平面を避ける
    inner = cylinder(inner_diameter, thickness + 2 * SMIDGE, z_offset=-SMIDGE, config=config)
    return {"outer": outer, "inner": inner}


def _washer(spec: Specification, prefix: str, thickness: Optional[float],
            config: GeometryConfig) -> FastenerModel:
    thickness = fill_default(spec, thickness, f"{prefix}_thickness")
    outer_diameter = get(spec, f"{prefix}_outer_diameter")
    inner_diameter = get(spec, f"{prefix}_inner_diameter")
    parts = _annulus(outer_diameter, inner_diameter, thickness, config)
    logger.debug("%s %s thickness=%s", prefix, spec.name, thickness)
    return FastenerModel(
        mesh=difference(parts["outer"], parts["inner"]),
        spec=spec,
        parameters={
            "thickness": thickness,
            "outer_diameter": outer_diameter,
            "inner_diameter": inner_diameter,
        },
        components=parts,
    )


def washer(
    spec: SpecLike,
    thickness: Optional[float] = None,
    catalog: Optional[FastenerCatalog] = None,
    config: Optional[GeometryConfig] = None,
) -> FastenerModel:
    """平ワッシャのメッシュを生成する。"""
    return _washer(resolve_spec(spec, catalog), "washer", thickness, config or get_config())


def fender_washer(
    spec: SpecLike,
    thickness: Optional[float] = None,
    catalog: Optional[FastenerCatalog] = None,
    config: Optional[GeometryConfig] = None,
) -> FastenerModel:
    """
    大径（フェンダー）ワッシャのメッシュを生成する。

    例外:
        KeyError: カタログにフェンダーワッシャの寸法が無い場合
    """
    return _washer(resolve_spec(spec, catalog), "fender_washer", thickness, config or get_config())
