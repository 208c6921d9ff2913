# PROV: MOTIONDIFF.PKG.01
# WHY: Expose the event comparison entrypoint and its configuration.

from .config import DEFAULT_CONFIG, DiffConfig, load_config
from .errors import MalformedEventError
from .events import build_diff_report, diff_motion_events

__all__ = [
    "DEFAULT_CONFIG",
    "DiffConfig",
    "MalformedEventError",
    "build_diff_report",
    "diff_motion_events",
    "load_config",
]
