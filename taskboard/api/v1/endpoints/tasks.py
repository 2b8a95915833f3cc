from fastapi import APIRouter, Depends, status
from typing import List, Optional

from taskboard.api.deps import get_association_service, get_task_service
from taskboard.domain.entities import TaskStatus
from taskboard.schemas.task import TagAttach, TaskCreate, TaskRead, TaskUpdate
from taskboard.services.association import TaskTagAssociationService
from taskboard.services.tasks import TaskService

router = APIRouter()


@router.get("/", response_model=List[TaskRead])
def list_tasks(
    status: Optional[TaskStatus] = None,
    tag_id: Optional[str] = None,
    service: TaskService = Depends(get_task_service)
):
    return [TaskRead.from_task(t) for t in service.list_tasks(status=status, tag_id=tag_id)]

@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    task_create: TaskCreate,
    service: TaskService = Depends(get_task_service)
):
    task = service.create_task(
        title=task_create.title,
        description=task_create.description,
        status=task_create.status,
        due_date=task_create.due_date,
        tag_ids=task_create.tag_ids,
    )
    return TaskRead.from_task(task)

@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    return TaskRead.from_task(service.get_task(task_id))

@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    service: TaskService = Depends(get_task_service)
):
    task_data = task_update.model_dump(exclude_unset=True)
    return TaskRead.from_task(service.update_task(task_id, **task_data))

@router.delete("/{task_id}")
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    service.delete_task(task_id)
    return {"ok": True}

@router.post("/{task_id}/tags", response_model=TaskRead)
def attach_tags(
    task_id: str,
    body: TagAttach,
    associations: TaskTagAssociationService = Depends(get_association_service)
):
    return TaskRead.from_task(associations.attach_tags(task_id, body.tag_ids))

@router.delete("/{task_id}/tags/{tag_id}", response_model=TaskRead)
def detach_tag(
    task_id: str,
    tag_id: str,
    associations: TaskTagAssociationService = Depends(get_association_service)
):
    return TaskRead.from_task(associations.detach_tag(task_id, tag_id))
