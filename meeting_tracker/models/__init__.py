from meeting_tracker.db.base import Base  # noqa: F401

from .user import User  # noqa: F401
from .project import Project  # noqa: F401
from .meeting import Meeting  # noqa: F401
from .document import Document  # noqa: F401
from .data_chunk import DataChunk  # noqa: F401
from .action_item import ActionItem, Task  # noqa: F401
from .business_requirement import BusinessRequirement  # noqa: F401
