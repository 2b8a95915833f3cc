from fastapi import APIRouter, Depends, status
from typing import List

from taskboard.api.deps import get_tag_service
from taskboard.schemas.tag import TagCreate, TagRead, TagUpdate
from taskboard.services.tags import TagService

router = APIRouter()


@router.get("/", response_model=List[TagRead])
def list_tags(service: TagService = Depends(get_tag_service)):
    return [TagRead.from_tag(t) for t in service.list_tags()]

@router.post("/", response_model=TagRead, status_code=status.HTTP_201_CREATED)
def create_tag(tag_create: TagCreate, service: TagService = Depends(get_tag_service)):
    return TagRead.from_tag(service.create_tag(tag_create.name, tag_create.color))

@router.get("/{tag_id}", response_model=TagRead)
def get_tag(tag_id: str, service: TagService = Depends(get_tag_service)):
    return TagRead.from_tag(service.get_tag(tag_id))

@router.put("/{tag_id}", response_model=TagRead)
def update_tag(tag_id: str, tag_update: TagUpdate, service: TagService = Depends(get_tag_service)):
    return TagRead.from_tag(service.update_tag(tag_id, name=tag_update.name, color=tag_update.color))

@router.delete("/{tag_id}")
def delete_tag(tag_id: str, service: TagService = Depends(get_tag_service)):
    service.delete_tag(tag_id)
    return {"ok": True}
