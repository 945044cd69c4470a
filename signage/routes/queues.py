"""Queue CRUD endpoints."""

from fastapi import APIRouter, HTTPException

from signage.storage import Queue

from .models import CreateQueue

router = APIRouter()


def load_queue(name: str) -> Queue:
    """Load queue name with dangling slide references pruned, or 404."""
    queue = Queue(name)
    if not Queue.exists(name):
        raise HTTPException(404, "Queue not found")
    queue.load(fix_errors=True)
    return queue


def queue_response(queue: Queue) -> dict:
    return {
        "name": queue.get_name(),
        "owner": queue.get_owner(),
        "slides": [s.public() for s in queue.slides()],
    }


@router.get("/queues")
async def list_queues():
    """List all queue names."""
    return Queue.list()


@router.get("/queues/{name}")
async def get_queue(name: str):
    """Get a queue with its slides in playback order."""
    return queue_response(load_queue(name))


@router.post("/queues", status_code=201)
async def create_queue(body: CreateQueue):
    """Create an empty queue."""
    if Queue.exists(body.name):
        raise HTTPException(409, f"Queue '{body.name}' already exists")
    queue = Queue.create(body.name, body.owner)
    return queue.public()


@router.delete("/queues/{name}")
async def delete_queue(name: str):
    """Delete a queue and every slide in it."""
    queue = load_queue(name)
    queue.remove()
    return {"ok": True}


@router.post("/queues/{name}/normalize")
async def normalize_queue(name: str):
    """Renumber slide indices to 0..n-1 in playback order."""
    queue = load_queue(name)
    queue.normalize()
    queue.write()
    return queue_response(queue)
