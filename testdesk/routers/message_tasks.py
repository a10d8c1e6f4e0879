# File: /testdesk/routers/message_tasks.py | Version: 1.0 | Title: Notice message task endpoints
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from testdesk.core.i18n import Translator
from testdesk.core.result_codes import ResultCode
from testdesk.db.session import get_db
from testdesk.dependencies import get_me, get_translator
from testdesk.models.core_entities import User
from testdesk.schemas.message_task import MessageTaskOut, MessageTaskRequest, MessageTaskSaveOut
from testdesk.schemas.result import ResultHolder
from testdesk.services import message_task_service

router = APIRouter(prefix="/notice/message/task", tags=["Notice Message Tasks"])


@router.post(
    "/save",
    response_model=ResultHolder[MessageTaskSaveOut],
    summary="Create or update the message task of each receiver",
)
def save_message_task(
    request: MessageTaskRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_me),
    translator: Translator = Depends(get_translator),
):
    result = message_task_service.save(db, request, str(current_user.id))
    data = MessageTaskSaveOut(
        tasks=[MessageTaskOut.model_validate(t) for t in result.tasks],
        unresolved_receivers=result.unresolved_receivers,
    )
    if result.partial:
        return ResultHolder(
            code=int(ResultCode.NOTICE_PARTIAL_RECEIVERS),
            message=translator.get(
                "notice.receivers_partially_saved",
                receivers=", ".join(result.unresolved_receivers),
            ),
            data=data,
        )
    return ResultHolder.success(data)


@router.get(
    "/get/{project_id}",
    response_model=ResultHolder[List[MessageTaskOut]],
    summary="List the message tasks of a project",
)
def get_message_tasks(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_me),
):
    tasks = message_task_service.get(db, project_id)
    return ResultHolder.success([MessageTaskOut.model_validate(t) for t in tasks])
