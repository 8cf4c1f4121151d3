from .feeds import Feeds, ResponseOrder
from .poller import Poller, Schedule

__all__ = ["Feeds", "ResponseOrder", "Poller", "Schedule"]
