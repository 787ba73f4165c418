"""
Logging utilities for AquaPreset
Provides console logging setup and import progress statistics
"""

import logging
import sys
from typing import Optional, Dict, Any
from datetime import datetime

import colorlog

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ImportStats:
    """Tracks preset import statistics"""

    def __init__(self):
        """Initialize import statistics"""
        self.start_time = datetime.now()
        self.total_files = 0
        self.processed_files = 0
        self.imported_files = 0
        self.rejected_files = 0
        self.rejection_reasons = {}
        self.errors = []
        self.warning_count = 0

    def set_total(self, total: int):
        """Set total number of files to import"""
        self.total_files = total

    def add_imported(self, warnings: int = 0):
        """Record a successfully imported preset and its validator warnings"""
        self.processed_files += 1
        self.imported_files += 1
        self.warning_count += warnings

    def add_rejected(self, reason: str):
        """Record a file refused before it was read"""
        self.processed_files += 1
        self.rejected_files += 1
        self.rejection_reasons[reason] = self.rejection_reasons.get(reason, 0) + 1

    def add_error(self, file_path: str, error: str):
        """Record a file that failed to read or parse"""
        self.processed_files += 1
        self.errors.append({
            'file': file_path,
            'error': error,
            'time': datetime.now()
        })

    def get_elapsed_time(self) -> float:
        """Get elapsed time in seconds"""
        return (datetime.now() - self.start_time).total_seconds()

    def get_summary(self) -> Dict[str, Any]:
        """Get import summary"""
        elapsed = self.get_elapsed_time()

        return {
            'total_files': self.total_files,
            'processed_files': self.processed_files,
            'imported_files': self.imported_files,
            'rejected_files': self.rejected_files,
            'rejection_reasons': self.rejection_reasons,
            'errors': len(self.errors),
            'warnings': self.warning_count,
            'elapsed_time': elapsed,
            'files_per_second': self.processed_files / elapsed if elapsed > 0 else 0
        }

    def print_summary(self):
        """Print import summary to console"""
        summary = self.get_summary()

        print("\n" + "=" * 60)
        print("IMPORT SUMMARY")
        print("=" * 60)
        print(f"Total files:      {summary['total_files']}")
        print(f"Imported:         {summary['imported_files']}")
        print(f"Rejected:         {summary['rejected_files']}")
        print(f"Warnings:         {summary['warnings']}")

        if summary['rejection_reasons']:
            print("\nRejection reasons:")
            for reason, count in sorted(summary['rejection_reasons'].items()):
                print(f"  - {reason}: {count}")

        print(f"\nErrors:           {summary['errors']}")
        print(f"Elapsed time:     {summary['elapsed_time']:.1f}s")
        print("=" * 60)

        if self.errors:
            print("\nERRORS:")
            for error in self.errors[:10]:  # First 10 only
                print(f"  - {error['file']}: {error['error']}")
            if len(self.errors) > 10:
                print(f"  ... and {len(self.errors) - 10} more errors")


def setup_console_logging(level: str = "INFO", color: bool = True,
                          fmt: Optional[str] = None):
    """
    Setup console logging with optional color support

    Logs go to stderr so command output on stdout stays machine-readable.
    Calling this again replaces the handler installed by the previous call.

    Args:
        level: Logging level name
        color: Whether to use colored output when stderr is a terminal
        fmt: Log format; the colored variant wraps it in level colors
    """
    fmt = fmt or DEFAULT_FORMAT
    stream = sys.stderr
    console_handler = logging.StreamHandler(stream)
    console_handler._aquapreset_console = True

    if color and stream.isatty():
        formatter = colorlog.ColoredFormatter(
            '%(log_color)s' + fmt + '%(reset)s',
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            }
        )
    else:
        formatter = logging.Formatter(fmt)

    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_aquapreset_console", False):
            root_logger.removeHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(console_handler)
