# Re-export primary service layer entry points for convenience.
from .thread import (
    list_threads,
    create_thread,
    update_thread,
    delete_thread,
)
from .transcript import (
    list_transcripts,
    create_transcript,
    get_transcript,
    get_current_transcript,
    update_transcript,
    delete_transcript,
)
from .action_point import (
    list_action_points,
    create_action_point,
    update_action_point,
    delete_action_point,
)
from .generation import generate_action_points
from .ownership import (
    verify_thread_ownership,
    verify_transcript_ownership,
    verify_action_point_ownership,
)

__all__ = [
    # thread
    "list_threads",
    "create_thread",
    "update_thread",
    "delete_thread",
    # transcript
    "list_transcripts",
    "create_transcript",
    "get_transcript",
    "get_current_transcript",
    "update_transcript",
    "delete_transcript",
    # action point
    "list_action_points",
    "create_action_point",
    "update_action_point",
    "delete_action_point",
    "generate_action_points",
    # ownership guard
    "verify_thread_ownership",
    "verify_transcript_ownership",
    "verify_action_point_ownership",
]
