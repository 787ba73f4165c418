"""
XMP sidecar processing.

Parsing is synchronous and pure over the sidecar text. The only blocking
step, reading the file, happens in `read_sidecar_text`, which runs in a
worker thread so many files can be ingested concurrently.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..config import get_config_value, get_default_config
from ..exceptions import SidecarError, SidecarReadError, SidecarRejectedError
from ..models import AdjustmentSet, ParsedXMPResult
from ..utils.async_processing import AsyncProcessor
from .hsl import parse_hsl_channels
from .local_adjustments import parse_local_adjustments
from .mapping import map_parameters
from .metadata import extract_process_version, parse_metadata
from .tone_curve import parse_tone_curve

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class FileCheckResult:
    valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class SidecarOutcome:
    """Result of one file in a batch: exactly one of result/error is set."""
    path: Path
    result: Optional[ParsedXMPResult] = None
    error: Optional[SidecarError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _limits(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    defaults = get_default_config()['ingestion']
    if config is None:
        return defaults
    return {
        key: get_config_value(config, f'ingestion.{key}', default)
        for key, default in defaults.items()
    }


def parse_adjustments(source: str) -> AdjustmentSet:
    """Global adjustments: mapped parameters, HSL bands and the master curve."""
    values: Dict[str, Any] = dict(map_parameters(source))
    values.update(parse_hsl_channels(source))
    curve = parse_tone_curve(source)
    if curve is not None:
        values['master_curve'] = curve
    return AdjustmentSet(**values)


def parse_sidecar(source: str) -> ParsedXMPResult:
    """
    Parse sidecar text into a ParsedXMPResult.

    Never raises on malformed attributes: each field degrades to absent
    or to its documented default.
    """
    return ParsedXMPResult(
        adjustments=parse_adjustments(source),
        metadata=parse_metadata(source),
        local_adjustments=parse_local_adjustments(source),
        raw_source=source,
        process_version=extract_process_version(source),
    )


def check_sidecar_file(name: str, size: int,
                       config: Optional[Dict[str, Any]] = None) -> FileCheckResult:
    """
    Pre-flight checks run before a file is read.

    Args:
        name: File name (only the extension is inspected)
        size: File size in bytes
        config: Optional configuration with an `ingestion` section
    """
    limits = _limits(config)
    extension = limits['extension'].lower()

    if not name.lower().endswith(extension):
        return FileCheckResult(False, f"File must have {extension} extension")

    if size > limits['max_bytes']:
        max_mb = limits['max_bytes'] / (1024 * 1024)
        return FileCheckResult(False, f"XMP file too large (max {max_mb:g}MB)")

    if size < limits['min_bytes']:
        return FileCheckResult(False, "XMP file too small to contain valid data")

    return FileCheckResult(True)


def _read_text(path: Path) -> str:
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


async def read_sidecar_text(path: PathLike, processor: Optional[AsyncProcessor] = None) -> str:
    """Read a sidecar as UTF-8 text without blocking the event loop."""
    path = Path(path)
    owns_processor = processor is None
    processor = processor or AsyncProcessor(max_workers=1)
    try:
        return await processor.run_in_thread(_read_text, path)
    except (OSError, UnicodeDecodeError) as e:
        raise SidecarReadError(f"Failed to read XMP sidecar file: {e}", path=str(path)) from e
    finally:
        if owns_processor:
            processor.shutdown(wait=False)


def preflight(path: Path, config: Optional[Dict[str, Any]] = None) -> None:
    """Run the pre-flight checks against a file on disk; raise if rejected."""
    try:
        size = path.stat().st_size
    except OSError as e:
        raise SidecarReadError(f"Failed to read XMP sidecar file: {e}", path=str(path)) from e
    check = check_sidecar_file(path.name, size, config)
    if not check.valid:
        raise SidecarRejectedError(check.error, path=str(path))


async def process_sidecar_file(path: PathLike, config: Optional[Dict[str, Any]] = None,
                               processor: Optional[AsyncProcessor] = None) -> ParsedXMPResult:
    """
    Check, read and parse one sidecar file.

    Raises:
        SidecarRejectedError: The file failed the pre-flight checks
        SidecarReadError: The file could not be read as text
    """
    path = Path(path)
    preflight(path, config)
    source = await read_sidecar_text(path, processor)
    result = parse_sidecar(source)
    logger.debug(f"Parsed {path.name}: {len(result.adjustments.to_dict())} adjustments, "
                 f"{len(result.local_adjustments)} local adjustments")
    return result


async def process_sidecar_batch(paths: Sequence[PathLike],
                                config: Optional[Dict[str, Any]] = None,
                                max_concurrent: Optional[int] = None) -> List[SidecarOutcome]:
    """
    Process many sidecars concurrently.

    One outcome per input path, in input order. A failing file is reported
    in its outcome and does not stop the rest of the batch.
    """
    paths = [Path(p) for p in paths]
    if max_concurrent is None:
        max_concurrent = _limits(config)['max_concurrent']

    with AsyncProcessor(max_workers=max_concurrent) as processor:
        results = await processor.concurrent_map(
            lambda path: process_sidecar_file(path, config, processor),
            paths,
            max_concurrent=max_concurrent,
        )

    outcomes = []
    for path, result in zip(paths, results):
        if isinstance(result, SidecarError):
            logger.warning(f"Skipping {path.name}: {result}")
            outcomes.append(SidecarOutcome(path=path, error=result))
        elif isinstance(result, BaseException):
            raise result
        else:
            outcomes.append(SidecarOutcome(path=path, result=result))
    return outcomes
