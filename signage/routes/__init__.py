"""FastAPI API endpoints under /api.

Endpoint groups: queues (list, get, create, delete, normalize) and slides
(get, create, update, delete). A slide always belongs to exactly one queue;
creating or moving a slide re-juggles that queue's indices, deleting one
renormalizes it.

ArgumentError and InternalError raised by storage are turned into 400 and
500 responses by the handlers registered in signage.app; routes raise 404
themselves where a queue or slide is missing.
"""

from fastapi import APIRouter

from .queues import router as queues_router
from .slides import router as slides_router

router = APIRouter()
router.include_router(queues_router)
router.include_router(slides_router)
