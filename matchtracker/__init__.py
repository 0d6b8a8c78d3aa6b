"""In-memory match tracking service: repository, FastAPI app and client."""

__version__ = "0.1.0"

from matchtracker.models import Match, MatchPayload  # noqa: E402
from matchtracker.repository import MatchRepository  # noqa: E402

__all__ = ["Match", "MatchPayload", "MatchRepository"]
