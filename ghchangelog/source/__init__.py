"""Tag and issue sources."""

from .snapshot import SnapshotError, SnapshotSource

__all__ = ["SnapshotError", "SnapshotSource"]
