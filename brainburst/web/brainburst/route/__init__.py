"""Route aggregation for the BrainBurst web application."""

from fastapi import APIRouter

from . import assignment, classroom

router = APIRouter()
router.include_router(assignment.router)
router.include_router(classroom.router)
