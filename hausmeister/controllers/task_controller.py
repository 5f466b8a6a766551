# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Duty checklist and link endpoints.
Thin HTTP layer — delegates ALL logic to TaskService / LinkRepository.
"""

from fastapi import APIRouter, Depends, HTTPException, Path

from hausmeister.core.dependencies import get_link_repo, get_task_service
from hausmeister.repositories.link_repository import LinkRepository
from hausmeister.schemas.duty import TaskListResponse, TaskResponse, TaskUpdateRequest
from hausmeister.services.task_service import TaskService

router = APIRouter(prefix="/api/v1", tags=["Tasks"])


@router.get("/tasks", response_model=TaskListResponse)
def list_tasks(service: TaskService = Depends(get_task_service)):
    """Daily and weekly tasks; stale done flags are reset first."""
    return service.list_tasks()


@router.patch("/tasks/{kind}/{name}", response_model=TaskResponse)
def update_task(
    payload: TaskUpdateRequest,
    kind: str = Path(..., pattern="^(daily|weekly)$"),
    name: str = Path(..., min_length=1),
    service: TaskService = Depends(get_task_service),
):
    """Tick off (or un-tick) a single task."""
    try:
        return service.set_done(kind, name, payload.done)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=e.args[0])


@router.get("/links")
def list_links(repo: LinkRepository = Depends(get_link_repo)):
    """Useful links for the duty holder."""
    return [link.model_dump() for link in repo.get_all()]
