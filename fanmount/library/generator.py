"""
締結部品の生成関数を種類名で呼び分ける。
"""

import logging
from typing import Any, Callable, Dict, Optional

from .catalog import FastenerCatalog, SpecLike, has_attribute, resolve_spec
from .generators.fastener_generators import (
    FastenerModel,
    fender_washer,
    hex_bolt,
    hex_nut,
    washer,
)

logger = logging.getLogger(__name__)


GENERATORS: Dict[str, Callable[..., FastenerModel]] = {
    "hex_bolt": hex_bolt,
    "hex_nut": hex_nut,
    "washer": washer,
    "fender_washer": fender_washer,
}


def generate_fastener(
    kind: str,
    spec: SpecLike,
    catalog: Optional[FastenerCatalog] = None,
    **params: Any
) -> FastenerModel:
    """
    種類名を指定して締結部品を生成する。

    引数:
        kind: "hex_bolt", "hex_nut", "washer", "fender_washer"
        spec: サイズ名または Specification
        params: 生成関数へ渡す引数

    戻り値:
        生成メッシュを含むFastenerModel

    例外:
        ValueError: 未知の種類の場合
        KeyError: カタログにサイズ・寸法が無い場合
        RuntimeError: 生成に失敗した場合
    """
    func = GENERATORS.get(kind)
    if func is None:
        raise ValueError(f"Unknown fastener kind: {kind}")
    spec = resolve_spec(spec, catalog)

    try:
        return func(spec, catalog=catalog, **params)
    except (KeyError, ValueError, TypeError):
        raise
    except Exception as e:
        raise RuntimeError(f"Failed to generate {kind} for {spec.name}: {e}") from e


def generate_hardware_set(
    spec: SpecLike,
    bolt_length: float,
    shank: float = 0.0,
    catalog: Optional[FastenerCatalog] = None,
) -> Dict[str, Any]:
    """
    ボルト・ナット・ワッシャ一式を生成する。

    カタログにフェンダーワッシャの寸法が無いサイズでは、
    フェンダーワッシャを省いて警告に記録する。

    戻り値:
        'models'（種類名 -> FastenerModel）と 'warnings' を含む辞書
    """
    spec = resolve_spec(spec, catalog)
    results: Dict[str, Any] = {
        "models": {},
        "warnings": [],
    }

    results["models"]["hex_bolt"] = generate_fastener(
        "hex_bolt", spec, catalog=catalog, length=bolt_length, shank=shank
    )
    results["models"]["hex_nut"] = generate_fastener("hex_nut", spec, catalog=catalog)
    results["models"]["washer"] = generate_fastener("washer", spec, catalog=catalog)

    if has_attribute(spec, "fender_washer_thickness"):
        results["models"]["fender_washer"] = generate_fastener("fender_washer", spec, catalog=catalog)
    else:
        message = f"{spec.name}: no fender washer dimensions in catalog, skipped"
        logger.warning(message)
        results["warnings"].append(message)

    return results


def list_available_generators() -> Dict[str, str]:
    """
    利用可能な生成関数を一覧する。

    戻り値:
        種類名と生成関数パスの対応辞書
    """
    return {
        kind: f"{func.__module__}.{func.__name__}"
        for kind, func in GENERATORS.items()
    }
