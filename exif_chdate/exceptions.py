"""
カスタム例外クラス定義

exif-chdateで使用する例外クラスを定義します。
"""


class ProcessingError(Exception):
    """処理エラーの基底クラス"""
    pass


class ValidationError(ProcessingError):
    """引数検証エラー"""
    pass


class ToolNotFoundError(ProcessingError):
    """ExifToolが利用できない"""
    pass


class ExifReadError(ProcessingError):
    """Exif読取エラー"""
    pass


class ExifWriteError(ProcessingError):
    """Exif書き込みエラー"""
    pass


class DateFormatError(ProcessingError):
    """撮影日時の形式エラー"""
    pass
