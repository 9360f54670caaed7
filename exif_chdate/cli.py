"""
コマンドラインインターフェース

exif-chdateのメインエントリーポイントです。
`exif-chdate <day> <month> [year] <path>...` の形式で引数を受け取り、
各ファイルの撮影日時の日付部分だけを変更します（時刻は維持されます）。
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from . import __version__
from .date_changer import DateChanger
from .date_spec import looks_like_year, parse_date_spec
from .exceptions import ProcessingError, ToolNotFoundError, ValidationError
from .exif_tool import ExifTool
from .logger import create_default_logger, get_default_log_file
from .models import DateSpec
from .path_validator import PathValidator


EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def create_parser() -> argparse.ArgumentParser:
    """
    コマンドライン引数パーサーを作成

    Returns:
        設定済みのArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='exif-chdate',
        usage='%(prog)s [options] <day> <month> [year] <path>...',
        description='画像ファイルの撮影日時の日付（日・月・年）だけを変更し、時刻はそのまま維持します。',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  # 6月15日に変更（年と時刻は各ファイルの元の値を維持）
  exif-chdate 15 6 photo1.RAW photo2.RAW

  # 1999年1月1日に変更（時刻は維持）
  exif-chdate 1 1 1999 img.RAW

  # シェルが展開しない場合もワイルドカードを展開
  exif-chdate 24 12 2001 "scans/*.jpg"

ExifTool (https://exiftool.org/) がインストールされている必要があります。
        """
    )
    parser.add_argument(
        'day',
        type=str,
        help='日（1-31）'
    )
    parser.add_argument(
        'month',
        type=str,
        help='月（1-12）'
    )
    parser.add_argument(
        'paths',
        nargs='*',
        metavar='[year] path',
        help='年（4桁、省略時は元の年を維持）と対象ファイル'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='詳細ログを表示（ログファイルにも記録）'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        help='ログファイルのパス'
    )
    parser.add_argument(
        '--exiftool',
        type=str,
        metavar='PATH',
        help='ExifToolの実行ファイル（省略時はPATHから検索）'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def split_arguments(day: str, month: str, rest: Sequence[str]) -> Tuple[DateSpec, List[str]]:
    """
    位置引数を日付指定とファイルパスに分割

    日・月に続く引数が4桁の数字で、同名のファイルが存在しない場合は年として扱います。

    Args:
        day: 日の引数
        month: 月の引数
        rest: 残りの位置引数

    Returns:
        (DateSpec, ファイルパス引数のリスト)

    Raises:
        ValidationError: 日付が不正、またはファイルが指定されていない場合
    """
    year = None
    paths = list(rest)
    if paths and looks_like_year(paths[0]) and not os.path.exists(paths[0]):
        year = paths.pop(0)

    spec = parse_date_spec(day, month, year)

    if not paths:
        raise ValidationError("入力ファイルが指定されていません")

    return spec, paths


def run(args: argparse.Namespace) -> int:
    """
    解析済みの引数で日付変更を実行

    Args:
        args: 解析されたコマンドライン引数

    Returns:
        終了コード（0: 全て成功、1: エラーあり、130: 中断）
    """
    try:
        # 引数とExifToolの確認が済むまでファイルには触れない
        spec, path_args = split_arguments(args.day, args.month, args.paths)
        targets = PathValidator.expand_targets(path_args)

        exiftool_path = Path(args.exiftool) if args.exiftool else None
        exif_tool = ExifTool(exiftool_path)

        if args.log_file:
            log_file = Path(args.log_file)
        elif args.verbose:
            log_file = get_default_log_file()
        else:
            log_file = None
        progress_logger = create_default_logger(verbose=args.verbose, log_file=log_file)
        progress_logger.log_debug(f"ExifTool: {exif_tool.exiftool_path} (バージョン: {exif_tool.version})")

        changer = DateChanger(exif_tool, progress_logger)
        stats = changer.change_dates(targets, spec)

    except KeyboardInterrupt:
        print("⚠️  中断されました", file=sys.stderr)
        return EXIT_INTERRUPTED
    except ValidationError as e:
        print(f"❌ 入力エラー: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except ToolNotFoundError as e:
        print(f"❌ ExifToolエラー: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except ProcessingError as e:
        print(f"❌ 処理エラー: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        print(f"❌ 予期しないエラー: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if stats.interrupted:
        return EXIT_INTERRUPTED
    return EXIT_OK if stats.all_succeeded else EXIT_FAILURE


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    メインエントリーポイント

    Returns:
        終了コード
    """
    parser = create_parser()

    if argv is None:
        argv = sys.argv[1:]

    # 引数が指定されていない場合はヘルプを表示
    if not argv:
        parser.print_help(sys.stderr)
        return EXIT_FAILURE

    args = parser.parse_intermixed_args(argv)
    return run(args)


if __name__ == '__main__':
    sys.exit(main())
