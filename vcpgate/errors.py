"""Exceptions raised by the VCP Security Gate."""


class GateError(Exception):
    """Base class for gate errors."""


class InputParseError(GateError, ValueError):
    """
    The hook input could not be understood.

    Always fatal: the gate blocks when it cannot reason about a call.
    """
