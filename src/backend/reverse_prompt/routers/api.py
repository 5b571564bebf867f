from fastapi import APIRouter, Depends
from reverse_prompt.schemas import TaskStatus, SessionStateResponse
from reverse_prompt.config import settings
from reverse_prompt.dependencies import get_session_id
from reverse_prompt.rendering import render_result
from reverse_prompt.session_state import UIState
from reverse_prompt import session_state
from reverse_prompt.task_manager import get_task_status
from starlette.responses import JSONResponse

router = APIRouter()


def build_state_response(state: UIState) -> SessionStateResponse:
    return SessionStateResponse(
        image=state.image_data_url,
        image_mime_type=state.image_mime_type,
        image_resolution=state.image_resolution,
        result=state.result,
        rendered_result=str(render_result(state.result)),
        is_loading=state.is_loading,
        is_modifying=state.is_modifying,
        copied=state.active_copy_mode(),
        modify_instruction=state.modify_instruction,
    )

@router.get("/config", tags=["Configuration"])
def get_app_config():
    """
    Returns public configuration details to the frontend.
    """
    return JSONResponse({
        "model": settings.GEMINI_MODEL,
        "copy_ack_seconds": settings.COPY_ACK_SECONDS
    })

@router.get("/tasks/{task_id}", tags=["Tasks"], response_model=TaskStatus)
def get_task_status_endpoint(task_id: str):
    """
    Retrieves the status of a background task.
    """
    status = get_task_status(task_id)
    return TaskStatus(**status)

@router.get("/session", tags=["Session"], response_model=SessionStateResponse)
def get_session_state(session_id: str = Depends(get_session_id)):
    return build_state_response(session_state.get_state(session_id))

@router.post("/session/reset", tags=["Session"], response_model=SessionStateResponse)
def reset_session(session_id: str = Depends(get_session_id)):
    session_state.reset(session_id)
    return build_state_response(session_state.get_state(session_id))
