# Import every model so Base.metadata is complete for Alembic and test setup.
from .user import User
from .thread import Thread
from .transcript import Transcript
from .action_point import ActionPoint

__all__ = ["User", "Thread", "Transcript", "ActionPoint"]
