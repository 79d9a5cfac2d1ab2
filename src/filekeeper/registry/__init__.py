"""File registry: records, line codec and the persistent store.

Layout:
    ~/.fms_data/
    ├── registry.dat        # One record per line: id|name|path|category|created|updated|content
    └── registry.dat.tmp    # Scratch file during a rewrite, renamed over registry.dat

The store keeps every record in memory and rewrites the whole file on each
mutation.
"""

from filekeeper.registry.record import DEFAULT_CATEGORY, Record
from filekeeper.registry.store import Registry

__all__ = ["DEFAULT_CATEGORY", "Record", "Registry"]
