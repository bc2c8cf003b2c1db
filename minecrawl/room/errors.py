class RoomGenerationError(RuntimeError):
    """Generated layout violates a structural invariant that cannot be repaired.

    Raised only when walls alone separate entrance from exit, which the layout
    builder's own revert checks should make unreachable.
    """


__all__ = ["RoomGenerationError"]
