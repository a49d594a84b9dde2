__all__ = [
    "AuthContainer",
    "BootConfiguration",
    "BrainBurstContainer",
    "ProgressContainer",
    "StorageContainer",
]

from .auth import AuthContainer
from .brainburst import BootConfiguration, BrainBurstContainer
from .progress import ProgressContainer
from .storage import StorageContainer
