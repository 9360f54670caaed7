"""
ロギングシステム

exif-chdateのロギング機能を提供します。
通常のメッセージは標準出力、警告とエラーは標準エラー出力に表示し、
必要に応じてファイルにも記録します。
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .models import DateSpec, ProcessingStats


LOGGER_NAME = 'exif_chdate'


@dataclass
class LogConfig:
    """ログ設定"""
    console_level: int = logging.INFO
    file_level: int = logging.DEBUG
    log_file: Optional[Path] = None
    verbose: bool = False


class _MaxLevelFilter(logging.Filter):
    """指定レベル未満のレコードだけを通すフィルター"""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


class ProgressLogger:
    """進捗表示とロギングを管理するクラス"""

    def __init__(self, config: LogConfig):
        self.config = config
        self.logger = self._setup_logger()
        self._start_time: Optional[datetime] = None

    def _setup_logger(self) -> logging.Logger:
        """ロガーのセットアップ"""
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(logging.DEBUG)

        # 既存のハンドラーをクリア
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

        console_formatter = logging.Formatter('%(message)s')
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # 標準出力（WARNING未満）
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setLevel(self.config.console_level)
        stdout_handler.addFilter(_MaxLevelFilter(logging.WARNING))
        stdout_handler.setFormatter(console_formatter)
        logger.addHandler(stdout_handler)

        # 標準エラー出力（WARNING以上）
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(max(self.config.console_level, logging.WARNING))
        stderr_handler.setFormatter(console_formatter)
        logger.addHandler(stderr_handler)

        # ファイルハンドラー（指定されている場合）
        if self.config.log_file:
            self.config.log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(self.config.log_file, encoding='utf-8')
            file_handler.setLevel(self.config.file_level)
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)

        return logger

    def log_processing_start(self, targets: List[Path], spec: DateSpec):
        """処理開始時のサマリー表示"""
        self._start_time = datetime.now()

        self.logger.info(f"対象ファイル: {len(targets)}個")
        if spec.year is None:
            self.logger.info(f"変更後の日付: {spec.month:02d}月{spec.day:02d}日（年は元の値を維持）")
        else:
            self.logger.info(f"変更後の日付: {spec.year:04d}年{spec.month:02d}月{spec.day:02d}日")
        self.logger.debug(f"開始時刻: {self._start_time.strftime('%Y-%m-%d %H:%M:%S')}")

        if self.config.verbose:
            for target in targets:
                self.logger.debug(f"  - {target}")

    def log_file_start(self, file_path: Path, index: int, total: int):
        """ファイル単位の処理開始（詳細モードのみ）"""
        if self.config.verbose:
            self.logger.debug(f"処理中 ({index}/{total}): {file_path}")

    def log_file_updated(self, file_path: Path, original: str, updated: str):
        """ファイル更新成功のログ"""
        self.logger.info(f"✅ {file_path} → {updated}")
        self.logger.debug(f"  元の撮影日時: {original}")

    def log_error(self, file_path: Path, error_message: str, exception: Optional[Exception] = None):
        """エラーログの詳細記録"""
        error_msg = f"❌ {file_path}: {error_message}"

        if exception:
            error_msg += f" ({type(exception).__name__})"

        self.logger.error(error_msg)

        # 詳細なスタックトレースはファイルログのみに記録
        if exception and self.config.log_file:
            self.logger.debug("スタックトレース:", exc_info=exception)

    def log_interrupted(self, remaining: int):
        """中断時のログ"""
        self.logger.warning(f"⚠️  中断されました。未処理のファイル: {remaining}個")

    def log_processing_complete(self, stats: ProcessingStats):
        """処理完了時のサマリー表示"""
        end_time = datetime.now()
        total_time = (end_time - self._start_time).total_seconds() if self._start_time else 0

        self.logger.info("")
        self.logger.info(
            f"処理完了: 更新 {stats.files_updated}個 / 失敗 {stats.files_failed}個"
            + (f" / 未処理 {stats.files_skipped}個" if stats.files_skipped else "")
            + f"（合計 {stats.files_total}個）"
        )
        self.logger.debug(f"総処理時間: {total_time:.2f}秒")

        if stats.errors:
            self.logger.error(f"エラー詳細 ({len(stats.errors)}件):")
            for file_path, error_msg in stats.errors:
                self.logger.error(f"  - {file_path}: {error_msg}")

    def log_debug(self, message: str):
        """デバッグメッセージのログ"""
        self.logger.debug(message)


def create_default_logger(verbose: bool = False, log_file: Optional[Path] = None) -> ProgressLogger:
    """デフォルトのロガーを作成"""
    config = LogConfig(
        console_level=logging.DEBUG if verbose else logging.INFO,
        file_level=logging.DEBUG,
        log_file=log_file,
        verbose=verbose
    )
    return ProgressLogger(config)


def get_default_log_file() -> Path:
    """デフォルトのログファイルパスを取得"""
    log_dir = Path.home() / '.exif_chdate' / 'logs'
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return log_dir / f'exif_chdate_{timestamp}.log'
