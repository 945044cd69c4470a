"""File-based JSON storage for slide queues.

Data layout:
  data/
    queues/
      <name>.json        {"owner": "<username>", "slides": ["<slide-id>", ...]}
    slides/
      <slide-id>.json    Slide record (name, owner, queue_name, index, ...)

Queue names and user names match [A-Za-z0-9_-]+ with a configured maximum
length; slide ids are 32 lowercase hex characters. Every file read and write
holds an exclusive flock on that file (see locked.py).

Ordering: a queue's playback order comes from each slide's stored index.
Queue.normalize() renumbers to 0..n-1; Queue.juggle(id) repositions one slide
and then normalizes.
"""

# Re-export all public symbols so `from signage import storage` keeps working.

from .core import (  # noqa: F401
    StorageConfig,
    config,
    init_storage,
    queues_dir,
    slides_dir,
)

from .locked import (  # noqa: F401
    read_json,
    read_locked,
    write_json,
    write_locked,
)

from .validation import (  # noqa: F401
    validate_name,
    validate_queue_name,
    validate_username,
)

from .slides import (  # noqa: F401
    Slide,
    SlideRecord,
    validate_slide_id,
)

from .queues import (  # noqa: F401
    Queue,
    QueueRecord,
    SlideList,
)
