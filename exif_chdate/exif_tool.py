"""
ExifTool呼び出しモジュール

画像ファイルの撮影日時の読み取りと書き込みをExifToolの外部コマンド実行で行います。
Exif情報の解析・書き込み自体はすべてExifToolに任せます。
"""

import logging
import os
import re
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .exceptions import ExifReadError, ExifWriteError, ToolNotFoundError
from .models import InvocationResult


# 撮影日時として読み取るタグ
CAPTURE_DATETIME_TAG = 'DateTimeOriginal'

# 日付を書き換えるExifタグ（撮影日時・作成日時・更新日時を揃える）
DATE_TAGS = ('DateTimeOriginal', 'CreateDate', 'ModifyDate')

_UPDATED_COUNT_PATTERN = re.compile(r'(\d+) image files? updated')

INSTALL_HINT = (
    "ExifTool が見つかりません。以下の方法でインストールしてください:\n"
    "Windows: https://exiftool.org/ からダウンロードしてPATHに追加\n"
    "macOS: brew install exiftool\n"
    "Linux: sudo apt-get install libimage-exiftool-perl (Ubuntu/Debian)"
)


class ExifTool:
    """ExifTool を使用した撮影日時の読み書きクラス"""

    def __init__(self, exiftool_path: Optional[Path] = None):
        """
        ExifToolを初期化

        Args:
            exiftool_path: ExifToolの実行ファイル（省略時はPATHなどから検索）

        Raises:
            ToolNotFoundError: ExifToolが見つからない、または実行できない場合
        """
        self.logger = logging.getLogger(__name__)
        self.exiftool_path: Optional[Path] = exiftool_path
        self.version: Optional[str] = None

        # ファイルを処理する前に存在を確認する
        self._check_exiftool_availability()

    def _check_exiftool_availability(self) -> None:
        """ExifToolが利用可能かチェックし、パスを設定"""
        try:
            if self.exiftool_path is None:
                self.exiftool_path = self._find_exiftool()
            result = subprocess.run(
                [str(self.exiftool_path), '-ver'],
                capture_output=True,
                text=True,
                timeout=10
            )
        except (OSError, subprocess.SubprocessError) as e:
            self.logger.debug(f"ExifToolの確認に失敗: {e}")
            raise ToolNotFoundError(INSTALL_HINT) from e

        if result.returncode != 0:
            raise ToolNotFoundError(
                f"ExifTool の実行に失敗しました: {self.exiftool_path}\n{INSTALL_HINT}"
            )

        self.version = result.stdout.strip()
        self.logger.debug(f"ExifTool が見つかりました: {self.exiftool_path} (バージョン: {self.version})")

    def _find_exiftool(self) -> Path:
        """ExifToolの実行可能ファイルを検索"""
        exiftool_name = 'exiftool.exe' if sys.platform == 'win32' else 'exiftool'
        exiftool_path = shutil.which(exiftool_name)

        if exiftool_path:
            return Path(exiftool_path)

        # 一般的なインストール場所を検索
        if sys.platform == 'win32':
            common_paths = [
                Path('C:/Windows/exiftool.exe'),
                Path('C:/Program Files/exiftool/exiftool.exe'),
                Path('C:/Program Files (x86)/exiftool/exiftool.exe'),
            ]
        else:
            common_paths = [
                Path('/usr/local/bin/exiftool'),
                Path('/usr/bin/exiftool'),
                Path('/opt/homebrew/bin/exiftool'),  # Apple Silicon Mac
            ]

        for path in common_paths:
            if path.exists() and path.is_file():
                return path

        raise FileNotFoundError("ExifTool が見つかりません")

    @staticmethod
    def _file_argument(file_path: Path) -> str:
        """ファイルパスをコマンド引数に変換（"-"始まりをオプションと誤認させない）"""
        path_str = str(file_path)
        if path_str.startswith('-'):
            return os.path.join(os.curdir, path_str)
        return path_str

    def run(self, args: Sequence[str]) -> InvocationResult:
        """
        ExifToolを実行して結果を返す

        タイムアウトは設けません。Ctrl-Cで実行中のExifToolが中断されないよう、
        POSIX環境では別セッションで起動します。

        Args:
            args: ExifToolに渡す引数

        Returns:
            実行結果

        Raises:
            ToolNotFoundError: ExifToolを起動できない場合
        """
        cmd: List[str] = [str(self.exiftool_path), *args]
        self.logger.debug(f"ExifTool実行: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
                start_new_session=sys.platform != 'win32'
            )
        except FileNotFoundError as e:
            raise ToolNotFoundError(INSTALL_HINT) from e

        return InvocationResult(
            returncode=result.returncode,
            stdout=result.stdout or '',
            stderr=result.stderr or ''
        )

    def read_capture_datetime(self, file_path: Path) -> str:
        """
        ファイルから撮影日時の生の文字列を読み取る

        Args:
            file_path: 読み取り対象のファイルパス

        Returns:
            撮影日時（例: "2020:01:03 14:22:10"）

        Raises:
            ExifReadError: ExifToolがエラーを返した、または撮影日時がない場合
        """
        result = self.run([
            f'-{CAPTURE_DATETIME_TAG}', '-s', '-s', '-s',
            self._file_argument(file_path)
        ])

        if not result.success:
            raise ExifReadError(f"ExifTool実行エラー: {result.diagnostic}")

        value = result.stdout.strip()
        if not value:
            raise ExifReadError(f"{CAPTURE_DATETIME_TAG} が見つかりません")

        return value

    def write_datetime(self, file_path: Path, new_datetime: str) -> InvocationResult:
        """
        撮影日時・作成日時・更新日時を書き込む

        元ファイルは上書きされ、バックアップ（*_original）は作成しません。

        Args:
            file_path: 書き込み対象のファイルパス
            new_datetime: 書き込む日時（例: "2020:06:15 14:22:10"）

        Returns:
            実行結果

        Raises:
            ExifWriteError: ExifToolがエラーを返した、またはファイルが更新されなかった場合
        """
        args = ['-overwrite_original']
        args.extend(f'-{tag}={new_datetime}' for tag in DATE_TAGS)
        args.append(self._file_argument(file_path))

        result = self.run(args)

        if not result.success:
            raise ExifWriteError(f"ExifTool実行エラー: {result.diagnostic}")

        match = _UPDATED_COUNT_PATTERN.search(result.stdout)
        if match and int(match.group(1)) == 0:
            raise ExifWriteError(f"ファイルが更新されませんでした: {result.diagnostic}")

        return result
