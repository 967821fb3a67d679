"""Services for running and sharing scenario projections."""

from .projection_service import ProjectionService
from .url_state import decode_scenario, encode_scenario, share_path

__all__ = [
    "ProjectionService",
    "decode_scenario",
    "encode_scenario",
    "share_path",
]
