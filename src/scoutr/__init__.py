"""scoutr.

Possession and pass sequencing, event velocities and pitch-grid
velocity summaries for spatio-temporal soccer event logs.
"""

from scoutr.config import PipelineConfig
from scoutr.exceptions import ScoutrError
from scoutr.schemas import Event, PitchDimensions, PitchFrame, events_to_frame

__version__ = "0.1.0"

__all__ = [
    "Event",
    "PipelineConfig",
    "PitchDimensions",
    "PitchFrame",
    "ScoutrError",
    "__version__",
    "events_to_frame",
]
