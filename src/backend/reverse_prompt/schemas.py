from pydantic import BaseModel
from typing import Optional, Dict, Any

from reverse_prompt.export import ExportMode


class TaskResponse(BaseModel):
    task_id: Optional[str] = None


class TaskStatus(BaseModel):
    status: str
    result: Optional[dict] = None
    error: Optional[str] = None


class ModifyRequest(BaseModel):
    instruction: str = ""


class ExportRequest(BaseModel):
    mode: ExportMode = ExportMode.ALL


class ExportResponse(BaseModel):
    mode: ExportMode
    text: Optional[str] = None


class SessionStateResponse(BaseModel):
    image: Optional[str] = None
    image_mime_type: Optional[str] = None
    image_resolution: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
    rendered_result: str = ""
    is_loading: bool = False
    is_modifying: bool = False
    copied: Optional[ExportMode] = None
    modify_instruction: str = ""
