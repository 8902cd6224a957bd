"""
Artboard Exporter for Driftboard

Writes the placed artwork to disk:
- standard PNG at display size with a 1 px border
- high-resolution PNG (B2 at 300 DPI) with DPI metadata
- single page vector PDF

All three paint through ArtboardMapping and the shared item painter, so
exported geometry matches what is shown on screen.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Union
import logging
import math

import numpy as np

from PyQt6.QtCore import QMarginsF, QSizeF
from PyQt6.QtGui import QImage, QPageLayout, QPageSize, QPainter, QPdfWriter

from ..core.artboard import Artboard, ArtboardMapping
from ..core.errors import ExportError
from ..core.scene import SceneContext
from ..core.text_metrics import DEFAULT_FONT_FAMILY
from ..graphics.painter import paint_artboard

try:
    from PIL import Image
    HAS_PIL = True
except ImportError:
    HAS_PIL = False

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
BORDER_WIDTH = 1.0
PDF_RESOLUTION = 72


def timestamp_string(now: Optional[datetime] = None) -> str:
    """Timestamp used in export file names (YYYYMMDD_HHMMSS)."""
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def stdres_filename(stamp: str) -> str:
    return f"artboard_stdres_{stamp}.png"


def hires_filename(width: int, height: int, stamp: str) -> str:
    return f"artboard_HIRES_{width}x{height}_{stamp}.png"


def pdf_filename(stamp: str) -> str:
    return f"artboard_pdf_{stamp}.pdf"


def qimage_to_array(image: QImage) -> np.ndarray:
    """
    Copy a QImage into an (height, width, 4) RGBA uint8 array.

    Row padding (bytesPerLine) is stripped.
    """
    if image.format() != QImage.Format.Format_RGBA8888:
        image = image.convertToFormat(QImage.Format.Format_RGBA8888)

    width = image.width()
    height = image.height()
    bytes_per_line = image.bytesPerLine()

    ptr = image.constBits()
    ptr.setsize(image.sizeInBytes())
    data = np.frombuffer(ptr, dtype=np.uint8).reshape(height, bytes_per_line)
    return data[:, :width * 4].reshape(height, width, 4).copy()


def _resolve_directory(directory: Optional[Union[str, Path]]) -> Path:
    path = Path(directory) if directory else Path.cwd()
    if not path.is_dir():
        raise ExportError(f"Export directory does not exist: {path}")
    return path


def _save_rgba(array: np.ndarray, filepath: Path, dpi: Optional[int] = None):
    """Encode an RGBA array as PNG with Pillow."""
    if not HAS_PIL:
        raise ExportError("Pillow (PIL) is required for PNG export")

    try:
        img = Image.fromarray(array).convert('RGB')
        if dpi is None:
            img.save(filepath, format='PNG')
        else:
            img.save(filepath, format='PNG', dpi=(dpi, dpi))
    except OSError as e:
        raise ExportError(f"Could not write {filepath}: {e}") from e
    except Exception as e:
        raise ExportError(f"Could not encode {filepath.name}: {e}") from e


def render_artboard_image(scene: SceneContext, mapping: ArtboardMapping,
                          width: int, height: int, border_width: float,
                          font_family: str = DEFAULT_FONT_FAMILY) -> np.ndarray:
    """
    Render placed items into a new RGBA array of the given size.

    The temporary image and its painter are released before returning,
    whether or not painting succeeded.
    """
    image = QImage(width, height, QImage.Format.Format_RGBA8888)
    if image.isNull():
        raise ExportError(f"Could not allocate a {width}x{height} image")

    painter = QPainter()
    try:
        if not painter.begin(image):
            raise ExportError("Could not start painting the export image")
        paint_artboard(painter, scene.exportable_items(), scene.artboard, mapping,
                       width, height, border_width, font_family)
        painter.end()
        return qimage_to_array(image)
    except ExportError:
        raise
    except Exception as e:
        raise ExportError(f"Could not render the {width}x{height} export image: {e}") from e
    finally:
        if painter.isActive():
            painter.end()
        del painter
        del image


def export_png(scene: SceneContext, directory: Optional[Union[str, Path]] = None,
               now: Optional[datetime] = None,
               font_family: str = DEFAULT_FONT_FAMILY) -> Path:
    """
    Export the artboard at display size.

    Args:
        scene: Scene whose placed items are exported
        directory: Output directory (current directory if None)
        now: Timestamp override

    Returns:
        Path of the written file

    Raises:
        ExportError: If rendering or writing fails
    """
    filepath = _resolve_directory(directory) / stdres_filename(timestamp_string(now))
    artboard = scene.artboard
    width = max(1, int(math.ceil(artboard.width)))
    height = max(1, int(math.ceil(artboard.height)))

    array = render_artboard_image(scene, artboard.local_mapping(),
                                  width, height, BORDER_WIDTH, font_family)
    _save_rgba(array, filepath)
    logger.info(f"Exported standard PNG {filepath} ({width}x{height})")
    return filepath


def export_hires_png(scene: SceneContext, directory: Optional[Union[str, Path]] = None,
                     now: Optional[datetime] = None,
                     font_family: str = DEFAULT_FONT_FAMILY) -> Path:
    """
    Export the artboard at print resolution.

    Content is scaled to the target width and centered vertically; the
    border weight scales with it. Target size and DPI come from the
    scene settings.

    Raises:
        ExportError: If rendering or writing fails
    """
    settings = scene.settings
    width, height = settings.hires_width, settings.hires_height
    filepath = _resolve_directory(directory) / hires_filename(width, height,
                                                              timestamp_string(now))

    mapping = scene.artboard.fit_width_mapping(width, height)
    logger.info(f"Rendering {width}x{height} export at scale {mapping.scale:.3f}")

    array = render_artboard_image(scene, mapping, width, height,
                                  BORDER_WIDTH * mapping.scale, font_family)
    _save_rgba(array, filepath, dpi=settings.hires_dpi)
    logger.info(f"Exported high-resolution PNG {filepath}")
    return filepath


def export_pdf(scene: SceneContext, directory: Optional[Union[str, Path]] = None,
               now: Optional[datetime] = None,
               font_family: str = DEFAULT_FONT_FAMILY) -> Path:
    """
    Export the artboard as a one page vector PDF.

    The page is the artboard size in points with zero margins; items are
    recorded as vector paths by the same painter code used on screen.

    Raises:
        ExportError: If the PDF cannot be written
    """
    filepath = _resolve_directory(directory) / pdf_filename(timestamp_string(now))
    artboard: Artboard = scene.artboard

    writer = QPdfWriter(str(filepath))
    writer.setResolution(PDF_RESOLUTION)
    writer.setPageSize(QPageSize(QSizeF(artboard.width, artboard.height),
                                 QPageSize.Unit.Point, "Artboard",
                                 QPageSize.SizeMatchPolicy.ExactMatch))
    writer.setPageOrientation(QPageLayout.Orientation.Portrait)
    writer.setPageMargins(QMarginsF(0, 0, 0, 0), QPageLayout.Unit.Point)
    writer.setTitle("Artboard")

    painter = QPainter()
    try:
        if not painter.begin(writer):
            raise ExportError(f"Could not open {filepath} for writing")
        paint_artboard(painter, scene.exportable_items(), artboard,
                       artboard.local_mapping(), artboard.width, artboard.height,
                       font_family=font_family)
    except ExportError:
        raise
    except Exception as e:
        raise ExportError(f"Could not record {filepath.name}: {e}") from e
    finally:
        if painter.isActive():
            painter.end()

    logger.info(f"Exported PDF {filepath}")
    return filepath
