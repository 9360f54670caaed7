"""
日付変更管理モジュール

対象ファイルを1つずつ順番に処理し、撮影日時の日付部分だけを書き換えます。
ファイル単位のエラーは記録して処理を継続し、最後に結果をまとめて報告します。
"""

import signal
import threading
from pathlib import Path
from typing import List, Optional

from .date_spec import compose_datetime
from .exceptions import ProcessingError, ToolNotFoundError
from .exif_tool import ExifTool
from .logger import ProgressLogger, create_default_logger
from .models import DateSpec, FileResult, ProcessingStats
from .path_validator import PathValidator


class DateChanger:
    """撮影日時の日付変更を担当するクラス"""

    def __init__(self, exif_tool: ExifTool, progress_logger: Optional[ProgressLogger] = None):
        """
        DateChangerを初期化

        Args:
            exif_tool: 初期化済み（存在確認済み）のExifTool
            progress_logger: 進捗ロガー（省略時はデフォルト設定で作成）
        """
        self.exif_tool = exif_tool
        self.progress_logger = progress_logger or create_default_logger()
        self._stop_requested = False

    def request_stop(self) -> None:
        """実行中のファイルの処理後に停止するよう要求"""
        self._stop_requested = True

    def change_file(self, file_path: Path, spec: DateSpec) -> FileResult:
        """
        1ファイルの撮影日時の日付部分を変更

        エラーは例外として送出せず、FileResultに記録して返します。

        Args:
            file_path: 対象ファイル
            spec: 変更後の日付

        Returns:
            処理結果
        """
        original = None
        try:
            PathValidator.validate_file(file_path)
            original = self.exif_tool.read_capture_datetime(file_path)
            updated = compose_datetime(original, spec)
            self.exif_tool.write_datetime(file_path, updated)
        except ToolNotFoundError:
            raise
        except ProcessingError as e:
            self.progress_logger.log_error(file_path, str(e), e)
            return FileResult(path=file_path, success=False, original=original, error=str(e))

        self.progress_logger.log_file_updated(file_path, original, updated)
        return FileResult(path=file_path, success=True, original=original, updated=updated)

    def change_dates(self, targets: List[Path], spec: DateSpec) -> ProcessingStats:
        """
        全対象ファイルの撮影日時を順番に変更

        Ctrl-Cを受けた場合は実行中のファイルの処理を終えてから停止し、
        残りのファイルは未処理として集計します。

        Args:
            targets: 対象ファイルのリスト（この順序で処理）
            spec: 変更後の日付

        Returns:
            処理統計情報
        """
        stats = ProcessingStats(files_total=len(targets))
        self._stop_requested = False
        self.progress_logger.log_processing_start(targets, spec)

        with _InterruptHandler(self):
            for i, file_path in enumerate(targets):
                if self._stop_requested:
                    stats.interrupted = True
                    stats.files_skipped = len(targets) - i
                    self.progress_logger.log_interrupted(stats.files_skipped)
                    break

                self.progress_logger.log_file_start(file_path, i + 1, len(targets))
                stats.record(self.change_file(file_path, spec))

        if self._stop_requested:
            stats.interrupted = True

        self.progress_logger.log_processing_complete(stats)
        return stats


class _InterruptHandler:
    """処理中のSIGINTを停止要求に置き換えるコンテキストマネージャー"""

    def __init__(self, changer: DateChanger):
        self.changer = changer
        self._previous = None
        self._installed = False

    def _handle(self, signum, frame):
        self.changer.request_stop()

    def __enter__(self):
        # シグナルハンドラーはメインスレッドでのみ設定できる
        if threading.current_thread() is threading.main_thread():
            self._previous = signal.signal(signal.SIGINT, self._handle)
            self._installed = True
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if self._installed:
            signal.signal(signal.SIGINT, self._previous)
            self._installed = False
        return False
