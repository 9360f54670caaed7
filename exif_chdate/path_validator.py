"""
パス検証ユーティリティ

コマンドラインで指定されたファイルパスの展開と検証を提供します。
"""

import glob
import os
from pathlib import Path
from typing import List, Sequence

from .exceptions import ValidationError


# シェルで展開されなかった場合に自前で展開するワイルドカード文字
GLOB_CHARACTERS = ('*', '?', '[')


class PathValidator:
    """パス検証を行うユーティリティクラス"""

    @staticmethod
    def has_glob_pattern(path_str: str) -> bool:
        """パス文字列にワイルドカードが含まれるかどうかを判定"""
        return any(c in path_str for c in GLOB_CHARACTERS)

    @staticmethod
    def expand_targets(path_args: Sequence[str]) -> List[Path]:
        """
        パス引数を対象ファイルのリストに展開

        Windowsのcmd.exeなどシェルがワイルドカードを展開しない環境のため、
        存在しないパスにワイルドカードが含まれる場合はglobで展開します。
        何にもマッチしないパターンはそのまま残し、ファイル単位のエラーとして報告させます。
        重複は最初の出現位置を残して除外します。

        Args:
            path_args: コマンドラインのパス引数

        Returns:
            対象ファイルのパスのリスト（引数の順序を維持）

        Raises:
            ValidationError: パスが1つも指定されていない場合
        """
        if not path_args:
            raise ValidationError("入力ファイルが指定されていません")

        targets: List[Path] = []
        seen = set()

        for path_str in path_args:
            if PathValidator.has_glob_pattern(path_str) and not os.path.exists(path_str):
                matches = sorted(glob.glob(os.path.expanduser(path_str)))
                expanded = [Path(m) for m in matches] if matches else [Path(path_str)]
            else:
                expanded = [Path(path_str)]

            for path in expanded:
                if path not in seen:
                    seen.add(path)
                    targets.append(path)

        return targets

    @staticmethod
    def validate_file(path: Path) -> None:
        """
        対象ファイルの存在とアクセス権を検証

        Args:
            path: 検証するファイルパス

        Raises:
            ValidationError: ファイルが存在しない、通常ファイルではない、
                           または読み書きできない場合
        """
        if not path.exists():
            raise ValidationError(f"ファイルが存在しません: {path}")

        if not path.is_file():
            raise ValidationError(f"指定されたパスはファイルではありません: {path}")

        if not os.access(path, os.R_OK | os.W_OK):
            raise ValidationError(f"ファイルに読み書き権限がありません: {path}")
