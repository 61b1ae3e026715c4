"""
Read-only export of the polynomial coefficients.

Diagnostics and logging collaborators read the coefficients of every segment
through the segments' read-only accessor; nothing here can modify a motion.
"""

from __future__ import annotations

from typing import Any

from gaitpro.logging import get_logger
from gaitpro.motion import EndeffectorsMotion

log = get_logger(__name__)


def export_coefficients(motion: EndeffectorsMotion) -> dict[int, dict[str, Any]]:
    """
    Per-limb dump of segment metadata and coefficients.

    Args:
        motion: Motion to export

    Returns:
        ``{limb: {"offset", "n_parameters", "total_time", "segments"}}`` where
        ``segments`` lists one dictionary per segment
    """
    export: dict[int, dict[str, Any]] = {}
    for limb in motion.limb_ids:
        limb_motion = motion.limb_motion(limb)
        export[limb] = {
            "offset": motion.index_start(limb),
            "n_parameters": limb_motion.n_parameters,
            "total_time": limb_motion.get_total_time(),
            "segments": [segment.to_dict() for segment in limb_motion.segments],
        }
    log.debug("Exported coefficients of %d limbs", len(export))
    return export
