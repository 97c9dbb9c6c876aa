"""
締結部品の寸法表を読み込み、索引化するカタログモジュール。

主な責務:
1. library/parts/fasteners/ から全てのJSON寸法表を読み込む
2. サイズ名（"M6", "1/4-20" など）とカテゴリの索引を構築する
3. 属性の取得・存在確認と、寸法から導出される値の計算を提供する
"""

import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from ..utils import read_json

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class Specification:
    """1サイズ分の締結部品寸法（不変・順序付き）。"""

    name: str
    category: str
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @classmethod
    def from_json(cls, name: str, category: str, data: dict) -> "Specification":
        """JSON辞書からSpecificationを生成する。"""
        return cls(name=name, category=category, attributes=data)

    def __getitem__(self, key: str) -> Any:
        return get(self, key)

    def __contains__(self, key: object) -> bool:
        return key in self.attributes

    def keys(self) -> List[str]:
        return list(self.attributes.keys())


def _table(table) -> Mapping[str, Any]:
    if isinstance(table, Specification):
        return table.attributes
    return table


def get(table, key: str) -> Any:
    """
    キーの値を取得する。

    例外:
        KeyError: キーが存在しない場合
    """
    value = _table(table).get(key, _MISSING)
    if value is _MISSING:
        owner = f" in {table.name}" if isinstance(table, Specification) else ""
        raise KeyError(f"Unknown attribute {key!r}{owner}")
    return value


def get_or_default(table, key: str, default: Any = None) -> Any:
    """キーの値を取得する。存在しなければ default を返す。"""
    return _table(table).get(key, default)


def exists(table, key: str) -> bool:
    """キーが存在するかを返す。"""
    return key in _table(table)


class FastenerCatalog:
    """
    全ての締結部品寸法を扱うカタログの中心クラス。

    使用例:
        catalog = FastenerCatalog()
        catalog.load()  # library/parts/fasteners/ から全件読み込み

        # サイズ名で取得
        m6 = catalog.get("M6")

        # カテゴリ内の全件取得
        metric = catalog.by_category("metric")
    """

    def __init__(self, parts_dir: Optional[str] = None):
        if parts_dir is None:
            parts_dir = os.getenv("FANMOUNT_CATALOG_DIR") or Path(__file__).parent / "parts" / "fasteners"
        self.parts_dir = Path(parts_dir)
        self._specs: Dict[str, Specification] = {}
        self._category_index: Dict[str, List[str]] = {}  # カテゴリ -> [サイズ名]

    def load(self) -> None:
        """JSONファイルから寸法表を読み込む。"""
        self._specs.clear()
        self._category_index.clear()

        if not self.parts_dir.exists():
            logger.warning("Fastener catalog directory %s does not exist", self.parts_dir)
            return

        for json_file in sorted(self.parts_dir.glob("*.json")):
            self._load_table(json_file)

        self._build_indices()
        logger.debug("Loaded %d fastener specifications from %s", len(self._specs), self.parts_dir)

    def _load_table(self, path: Path) -> None:
        """単一の寸法表ファイルを読み込む。"""
        try:
            data = read_json(path)
            category = data.get("category", path.stem)
            specs = [
                Specification.from_json(name, category, attrs)
                for name, attrs in data["sizes"].items()
            ]
        except (ValueError, KeyError, AttributeError) as e:
            logger.warning("Failed to load fastener table from %s: %s", path, e)
            return
        for spec in specs:
            if spec.name in self._specs:
                logger.warning("Duplicate fastener size %s in %s ignored", spec.name, path)
                continue
            self._specs[spec.name] = spec

    def _build_indices(self) -> None:
        """カテゴリの索引を構築する。"""
        for name, spec in self._specs.items():
            self._category_index.setdefault(spec.category, []).append(name)

    def get(self, name: str) -> Specification:
        """
        サイズ名で寸法を取得する。

        例外:
            KeyError: サイズ名がカタログに存在しない場合
        """
        spec = self._specs.get(name)
        if spec is None:
            raise KeyError(f"Unknown fastener specification: {name}")
        return spec

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def by_category(self, category: str) -> List[Specification]:
        """カテゴリ内の全ての寸法を取得する。"""
        return [self._specs[name] for name in self._category_index.get(category, [])]

    def all_specs(self) -> List[Specification]:
        """読み込み済みの寸法を全て取得する。"""
        return list(self._specs.values())

    def names(self) -> List[str]:
        return list(self._specs.keys())

    def categories(self) -> List[str]:
        """全てのカテゴリ名を取得する。"""
        return list(self._category_index.keys())


# グローバルシングルトン
_catalog: Optional[FastenerCatalog] = None


def get_catalog() -> FastenerCatalog:
    """グローバルなカタログインスタンスを取得または作成する。"""
    global _catalog
    if _catalog is None:
        _catalog = FastenerCatalog()
        _catalog.load()
    return _catalog


def reload_catalog() -> FastenerCatalog:
    """カタログを強制的に再読み込みする。"""
    global _catalog
    _catalog = FastenerCatalog()
    _catalog.load()
    return _catalog


SpecLike = Union[str, Specification]


def get_spec(name: str, catalog: Optional[FastenerCatalog] = None) -> Specification:
    """サイズ名から寸法を取得する。"""
    return (catalog or get_catalog()).get(name)


def resolve_spec(spec: SpecLike, catalog: Optional[FastenerCatalog] = None) -> Specification:
    """サイズ名または解決済みの寸法を Specification にそろえる。"""
    if isinstance(spec, Specification):
        return spec
    if isinstance(spec, str):
        return get_spec(spec, catalog)
    raise TypeError(f"Expected a fastener name or Specification, got {type(spec).__name__}")


def get_attribute(spec: SpecLike, attribute: str, catalog: Optional[FastenerCatalog] = None) -> Any:
    return get(resolve_spec(spec, catalog), attribute)


def get_attribute_or_zero(spec: SpecLike, attribute: str, catalog: Optional[FastenerCatalog] = None) -> Any:
    """属性を取得する。データに無い属性は0として扱う。"""
    return get_or_default(resolve_spec(spec, catalog), attribute, 0)


def has_attribute(spec: SpecLike, attribute: str, catalog: Optional[FastenerCatalog] = None) -> bool:
    return exists(resolve_spec(spec, catalog), attribute)


def hex_flats_to_diameter(distance: float) -> float:
    """六角の二面幅を外接円の直径に変換する。"""
    return distance / math.cos(math.radians(30))


def hex_flats_to_radius(distance: float) -> float:
    return hex_flats_to_diameter(distance) / 2


def thread_pitch(spec: SpecLike, catalog: Optional[FastenerCatalog] = None) -> float:
    pitch = get_attribute(spec, "thread_pitch", catalog)
    if pitch <= 0:
        raise ValueError(f"Thread pitch must be positive, got {pitch}")
    return pitch


def distance_to_turns(spec: SpecLike, distance: float, catalog: Optional[FastenerCatalog] = None) -> float:
    """長さをねじの回転数に変換する。"""
    return distance / thread_pitch(spec, catalog)


def turns_to_distance(spec: SpecLike, turns: float, catalog: Optional[FastenerCatalog] = None) -> float:
    """ねじの回転数を長さに変換する。"""
    return turns * thread_pitch(spec, catalog)


def nominal_circular_diameter(spec: SpecLike, catalog: Optional[FastenerCatalog] = None) -> float:
    """六角頭/ナットを包む円の直径。"""
    return hex_flats_to_diameter(get_attribute(spec, "head_across_flats", catalog))


def nominal_circular_radius(spec: SpecLike, catalog: Optional[FastenerCatalog] = None) -> float:
    return nominal_circular_diameter(spec, catalog) / 2
