from fastapi import Depends
from sqlmodel import Session

from taskboard.core.config import settings
from taskboard.db.session import get_session
from taskboard.services.association import AttachPolicy, TaskTagAssociationService
from taskboard.services.tags import TagService
from taskboard.services.tasks import TaskService
from taskboard.stores.tag_store import SqlTagStore
from taskboard.stores.task_store import SqlTaskStore


def get_association_service(session: Session = Depends(get_session)) -> TaskTagAssociationService:
    return TaskTagAssociationService(
        SqlTaskStore(session),
        SqlTagStore(session),
        policy=AttachPolicy(settings.TAG_ATTACH_POLICY),
    )


def get_task_service(
    session: Session = Depends(get_session),
    associations: TaskTagAssociationService = Depends(get_association_service),
) -> TaskService:
    return TaskService(SqlTaskStore(session), associations)


def get_tag_service(
    session: Session = Depends(get_session),
    associations: TaskTagAssociationService = Depends(get_association_service),
) -> TagService:
    return TagService(SqlTagStore(session), associations)
