"""Slide CRUD endpoints. Every change keeps the owning queue's indices gap-free."""

from fastapi import APIRouter, HTTPException

from signage.errors import ArgumentError
from signage.storage import Queue, Slide, validate_slide_id

from .models import CreateSlide, UpdateSlide
from .queues import load_queue

router = APIRouter()


def _load_with_queue(slide_id: str) -> tuple[Queue, Slide]:
    """Return (queue, slide) where slide is the queue's own instance."""
    validate_slide_id(slide_id)
    try:
        stored = Slide().load(slide_id)
    except ArgumentError:
        raise HTTPException(404, "Slide not found")
    queue = load_queue(stored.get_queue_name())
    slide = queue.get_slide(slide_id)
    if slide is None:
        raise HTTPException(404, "Slide not found in its queue")
    return queue, slide


@router.get("/slides/{slide_id}")
async def get_slide(slide_id: str):
    """Get a single slide by id."""
    validate_slide_id(slide_id)
    try:
        slide = Slide().load(slide_id)
    except ArgumentError:
        raise HTTPException(404, "Slide not found")
    return slide.public()


@router.post("/slides", status_code=201)
async def create_slide(body: CreateSlide):
    """Create a slide and insert it into its queue at the requested index.

    Without an index the slide is appended.
    """
    queue = load_queue(body.queue_name)
    index = body.index if body.index is not None else len(queue.slides())
    slide = Slide.new(
        owner=body.owner,
        queue_name=body.queue_name,
        name=body.name,
        index=index,
        duration=body.duration,
        markup=body.markup,
        enabled=body.enabled,
    )
    slide.write()
    queue.add(slide)
    queue.juggle(slide.get_id())
    queue.write()
    return slide.public()


@router.patch("/slides/{slide_id}")
async def update_slide(slide_id: str, body: UpdateSlide):
    """Update slide fields. Changing the index moves the slide in its queue."""
    queue, slide = _load_with_queue(slide_id)
    if body.name is not None:
        slide.set_name(body.name)
    if body.duration is not None:
        slide.set_duration(body.duration)
    if body.markup is not None:
        slide.set_markup(body.markup)
    if body.enabled is not None:
        slide.set_enabled(body.enabled)
    if body.index is not None:
        slide.set_index(body.index)
    slide.write()
    if body.index is not None:
        queue.juggle(slide_id)
        queue.write()
    return slide.public()


@router.delete("/slides/{slide_id}")
async def delete_slide(slide_id: str):
    """Delete a slide and close the gap it leaves in its queue."""
    queue, slide = _load_with_queue(slide_id)
    queue.remove_slide(slide)
    queue.normalize()
    queue.write()
    slide.remove()
    return {"ok": True}
