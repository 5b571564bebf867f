from fastapi import APIRouter, Depends, HTTPException, File, UploadFile
from reverse_prompt.schemas import TaskResponse, ModifyRequest, ExportRequest, ExportResponse
from reverse_prompt.services import PromptService, get_prompt_service
from reverse_prompt.config import settings
from reverse_prompt.dependencies import get_session_id
from reverse_prompt.export import export_text
from reverse_prompt.ingestion import is_image_mime, load_image
from reverse_prompt import session_state
from reverse_prompt.task_manager import create_task
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/analyze", response_model=TaskResponse)
async def analyze_image(
    file: UploadFile = File(...),
    session_id: str = Depends(get_session_id),
    prompt_service: PromptService = Depends(get_prompt_service)
):
    logger.info(f"Received image analysis request for session {session_id}: '{file.filename}' ({file.content_type})")

    if not is_image_mime(file.content_type):
        logger.error(f"Validation Error: Invalid file type '{file.content_type}'. Only images are allowed.")
        raise HTTPException(status_code=400, detail="Invalid file type. Only images are allowed.")

    if file.size is not None and file.size > settings.MAX_UPLOAD_BYTES:
        logger.error(f"Validation Error: Upload of {file.size} bytes exceeds {settings.MAX_UPLOAD_BYTES}.")
        raise HTTPException(status_code=413, detail="Image is too large.")

    # One byte past the limit is enough to tell an oversized upload apart.
    file_bytes = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(file_bytes) > settings.MAX_UPLOAD_BYTES:
        logger.error(f"Validation Error: Upload exceeds {settings.MAX_UPLOAD_BYTES} bytes.")
        raise HTTPException(status_code=413, detail="Image is too large.")

    image = load_image(file.filename, file.content_type, file_bytes)
    generation = session_state.start_analysis(session_id, image)

    logger.info("Submitting image analysis task to the background processor.")
    task_id = create_task(
        prompt_service.analyze_image,
        on_success=lambda result, **kwargs: session_state.finish_analysis(session_id, generation, result),
        on_error=lambda e, **kwargs: session_state.fail_analysis(session_id, generation),
        image_bytes=image.data,
        mime_type=image.mime_type
    )
    logger.info(f"Task {task_id} created for image analysis (generation {generation}).")
    return TaskResponse(task_id=task_id)

@router.post("/modify", response_model=TaskResponse)
def modify_prompt(
    request: ModifyRequest,
    session_id: str = Depends(get_session_id),
    prompt_service: PromptService = Depends(get_prompt_service)
):
    pending = session_state.start_modification(session_id, request.instruction)
    if pending is None:
        logger.info(f"Skipping modification for session {session_id}: nothing to modify.")
        return TaskResponse()

    generation, current_result = pending

    logger.info("Submitting prompt modification task to the background processor.")
    task_id = create_task(
        prompt_service.modify_prompt,
        on_success=lambda result, **kwargs: session_state.finish_modification(session_id, generation, result),
        on_error=lambda e, **kwargs: session_state.finish_modification(session_id, generation, None),
        current_result=current_result,
        instruction=request.instruction
    )
    logger.info(f"Task {task_id} created for prompt modification.")
    return TaskResponse(task_id=task_id)

@router.post("/export", response_model=ExportResponse)
def export_prompt(request: ExportRequest, session_id: str = Depends(get_session_id)):
    state = session_state.get_state(session_id)
    text = export_text(state.result, request.mode) if state.has_editable_result else None
    if text is not None:
        session_state.mark_copied(session_id, request.mode)
    return ExportResponse(mode=request.mode, text=text)
