from ifdkg.app.ceremony import CeremonyInfo
from ifdkg.app.runner import Runner
from ifdkg.app.session import session

__all__ = [
    "CeremonyInfo",
    "Runner",
    "session",
]
