from gitpipe.core.time.abc import Time
from gitpipe.core.time.fake import FakeTime
from gitpipe.core.time.real import RealTime

__all__ = [
    "FakeTime",
    "RealTime",
    "Time",
]
