"""
データモデル定義

exif-chdateで使用するデータクラスを定義します。
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class DateSpec:
    """変更後の日付（年を省略した場合は各ファイルの元の年を維持）"""
    day: int
    month: int
    year: Optional[int] = None


@dataclass
class InvocationResult:
    """ExifTool呼び出し結果"""
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def diagnostic(self) -> str:
        """エラー表示用の診断メッセージ"""
        message = self.stderr.strip() or self.stdout.strip()
        return message or f"終了コード {self.returncode}"


@dataclass
class FileResult:
    """ファイル単位の処理結果"""
    path: Path
    success: bool
    original: Optional[str] = None
    updated: Optional[str] = None
    error: Optional[str] = None


@dataclass
class ProcessingStats:
    """処理統計情報"""
    files_total: int = 0
    files_updated: int = 0
    files_failed: int = 0
    files_skipped: int = 0
    interrupted: bool = False
    errors: List[Tuple[str, str]] = field(default_factory=list)  # (file_path, error_message)

    def record(self, result: FileResult) -> None:
        """ファイル単位の結果を集計に反映"""
        if result.success:
            self.files_updated += 1
        else:
            self.files_failed += 1
            self.errors.append((str(result.path), result.error or "不明なエラー"))

    @property
    def all_succeeded(self) -> bool:
        return self.files_failed == 0 and not self.interrupted
