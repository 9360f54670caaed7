# exif-chdate
# Change the date of image capture timestamps while keeping the time of day

__version__ = '0.1.0'

from .models import DateSpec, InvocationResult, FileResult, ProcessingStats
from .exceptions import (
    ProcessingError, ValidationError, ToolNotFoundError,
    ExifReadError, ExifWriteError, DateFormatError
)
from .date_spec import parse_date_spec, compose_datetime
from .path_validator import PathValidator
from .exif_tool import ExifTool
from .logger import ProgressLogger, LogConfig, create_default_logger, get_default_log_file
from .date_changer import DateChanger

__all__ = [
    'DateSpec',
    'InvocationResult',
    'FileResult',
    'ProcessingStats',
    'ProcessingError',
    'ValidationError',
    'ToolNotFoundError',
    'ExifReadError',
    'ExifWriteError',
    'DateFormatError',
    'parse_date_spec',
    'compose_datetime',
    'PathValidator',
    'ExifTool',
    'ProgressLogger',
    'LogConfig',
    'create_default_logger',
    'get_default_log_file',
    'DateChanger'
]
