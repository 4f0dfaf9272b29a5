"""
MiniBTree Storage Hooks
=======================
Node read/write extension points for the B-Tree.

Usage:
    from storage import NodeIO, TrackingNodeIO
"""

from storage.node_io import NodeIO, TrackingNodeIO

__all__ = ["NodeIO", "TrackingNodeIO"]
