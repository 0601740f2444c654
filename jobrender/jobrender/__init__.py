"""jobrender - manifest-property driven renderer for BOSH job templates.

Turns a job's manifest properties into the start scripts, command-line flags,
certificate files and lifecycle hooks the job ships.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .core.models import RedactMode, RenderedArtifact
from .core.tree import ABSENT, ConfigTree, Presence
from .rendering.engine import render, render_job

__all__ = [
    "ABSENT",
    "ConfigTree",
    "Presence",
    "RedactMode",
    "RenderedArtifact",
    "render",
    "render_job",
]
