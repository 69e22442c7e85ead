"""
Euler-convention settings loaded from YAML.

A settings file carries an optional ``euler`` mapping:

.. code-block:: yaml

    euler:
      extraction_order: ZYX     # XYZ, XZY, YZX or ZYX
      external: true            # fixed (true) or moving (false) axes
      construction_order: XYZ   # XYZ, YXZ, ZYX, YZX or ZXY

Missing keys keep the library defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from hamilton.core.constants import (
    CONSTRUCTION_ORDERS,
    DEFAULT_CONSTRUCTION_ORDER,
    DEFAULT_EXTERNAL,
    DEFAULT_EXTRACTION_ORDER,
    EXTRACTION_ORDERS,
)
from hamilton.core.euler import EulerOrder, from_euler, to_euler
from hamilton.core.quaternion import Quaternion

logger = logging.getLogger(__name__)

_KNOWN_KEYS = ("extraction_order", "external", "construction_order")


@dataclass(frozen=True)
class EulerSettings:
    """
    Euler conventions applied by :meth:`to_euler` and :meth:`from_euler`.

    Attributes
    ----------
    extraction_order : str
        Order used when converting quaternions to angles.
    external : bool
        Extrinsic (True) or intrinsic (False) extraction.
    construction_order : str
        Order used when building quaternions from angles.
    """
    extraction_order: str = DEFAULT_EXTRACTION_ORDER
    external: bool = DEFAULT_EXTERNAL
    construction_order: str = DEFAULT_CONSTRUCTION_ORDER

    def __post_init__(self) -> None:
        EulerOrder.parse(self.extraction_order, EXTRACTION_ORDERS)
        EulerOrder.parse(self.construction_order, CONSTRUCTION_ORDERS)
        if not isinstance(self.external, bool):
            raise TypeError(
                f"'external' must be a boolean, got {type(self.external).__name__}"
            )

    def to_euler(self, q: Quaternion):
        return to_euler(q, self.extraction_order, self.external)

    def from_euler(self, roll, pitch, yaw) -> Quaternion:
        return from_euler(roll, pitch, yaw, self.construction_order)


def load_settings(path: Optional[Union[str, Path]] = None) -> EulerSettings:
    """
    Load Euler settings from a YAML file.

    Args:
        path: YAML file to read. ``None`` returns the defaults.

    Returns:
        Validated EulerSettings

    Raises:
        ValueError: If the ``euler`` section has unknown keys or is not a
            mapping. UnsupportedRotationOrder (a ValueError) for bad order
            codes.
    """
    if path is None:
        return EulerSettings()

    logger.info("Loading Euler settings from %s", path)
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}

    section = data.get('euler') or {}
    if not isinstance(section, dict):
        raise ValueError(f"'euler' section in {path} must be a mapping")

    unknown = sorted(set(section) - set(_KNOWN_KEYS))
    if unknown:
        raise ValueError(f"Unknown Euler settings in {path}: {', '.join(unknown)}")

    return EulerSettings(**section)
