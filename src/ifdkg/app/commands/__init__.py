from ifdkg.app.commands import dkg, session, state

COMMAND_MODULES = [session, dkg, state]

__all__ = ["COMMAND_MODULES"]
