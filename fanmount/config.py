"""
形状生成の設定モジュール。

曲線の分割数（テッセレーション）とブーリアン演算用の微小量を扱う。
設定は不変で、既定インスタンスをプロセス全体で共有するか、
各関数の config 引数で明示的に渡す。
"""

import math
import os
from dataclasses import dataclass
from typing import Optional


# 同一平面での差分演算を確実にするための微小量（mm）
SMIDGE = 0.01


@dataclass(frozen=True)
class GeometryConfig:
    """曲線分割の設定。"""

    fa: float = 6.0   # 最小分割角（度）
    fs: float = 0.5   # 最小分割長（mm）
    fn: int = 0       # 分割数の明示指定（0で未指定）

    def __post_init__(self):
        if self.fa <= 0:
            raise ValueError(f"fa must be positive, got {self.fa}")
        if self.fs <= 0:
            raise ValueError(f"fs must be positive, got {self.fs}")
        if self.fn < 0:
            raise ValueError(f"fn must not be negative, got {self.fn}")

    @classmethod
    def from_env(cls) -> "GeometryConfig":
        """環境変数 FANMOUNT_FA / FANMOUNT_FS / FANMOUNT_FN から生成する。"""
        defaults = cls()
        return cls(
            fa=float(os.getenv("FANMOUNT_FA", defaults.fa)),
            fs=float(os.getenv("FANMOUNT_FS", defaults.fs)),
            fn=int(os.getenv("FANMOUNT_FN", defaults.fn)),
        )

    def segments(self) -> int:
        """半径に依存しない曲線（expo等）の分割数。"""
        if self.fn > 0:
            return self.fn
        return max(1, int(round(360.0 / self.fa)))

    def fragments(self, radius: float) -> int:
        """半径 radius の円の分割数。"""
        if self.fn > 0:
            return max(self.fn, 3)
        if radius <= 0:
            return 3
        return int(math.ceil(max(min(360.0 / self.fa, radius * 2.0 * math.pi / self.fs), 5)))


# グローバルシングルトン
_config: Optional[GeometryConfig] = None


def get_config() -> GeometryConfig:
    """グローバルな設定インスタンスを取得または作成する。"""
    global _config
    if _config is None:
        _config = GeometryConfig.from_env()
    return _config


def set_config(config: GeometryConfig) -> GeometryConfig:
    """既定の設定を差し替える。差し替え前の設定を返す。"""
    global _config
    previous = get_config()
    _config = config
    return previous
