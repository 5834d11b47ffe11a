"""
Persistent viewer settings backed by QSettings
"""

import logging
from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import QByteArray, QSettings

logger = logging.getLogger(__name__)

ORGANIZATION_NAME = "visxml.net"
APPLICATION_NAME = "LotusXmlViewer"


@dataclass
class ViewerSettings:
    """Application settings"""
    last_directory: str = ""
    window_geometry: Optional[QByteArray] = None
    debug_mode: bool = False


def get_settings() -> QSettings:
    return QSettings(ORGANIZATION_NAME, APPLICATION_NAME)


def _read_bool(settings: QSettings, key: str, default: bool) -> bool:
    """Read a boolean that QSettings may have stored as a string"""
    value = settings.value(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes", "on")
    return bool(value)


def load_settings(settings: QSettings = None) -> ViewerSettings:
    """Load settings, falling back to defaults for anything missing"""
    settings = settings or get_settings()
    result = ViewerSettings()
    try:
        result.last_directory = str(settings.value("paths/last_directory", "") or "")
        geometry = settings.value("window/geometry")
        if isinstance(geometry, QByteArray) and not geometry.isEmpty():
            result.window_geometry = geometry
        result.debug_mode = _read_bool(settings, "flags/debug_mode", False)
    except (TypeError, ValueError) as e:
        logger.warning("Error reading settings, using defaults: %s", e)
        return ViewerSettings()
    return result


def save_settings(viewer_settings: ViewerSettings, settings: QSettings = None):
    """Write settings back"""
    settings = settings or get_settings()
    settings.setValue("paths/last_directory", viewer_settings.last_directory)
    if viewer_settings.window_geometry is not None:
        settings.setValue("window/geometry", viewer_settings.window_geometry)
    settings.setValue("flags/debug_mode", viewer_settings.debug_mode)
    settings.sync()
    if settings.status() != QSettings.Status.NoError:
        logger.warning("Error saving settings: %s", settings.status())
