from functools import lru_cache
from reverse_prompt.config import settings
from reverse_prompt.session_state import new_session_id
import google.genai as genai
from fastapi import Request

SESSION_KEY = 'sid'

def get_session_id(request: Request) -> str:
    session_id = request.session.get(SESSION_KEY)
    if not session_id:
        session_id = new_session_id()
        request.session[SESSION_KEY] = session_id
    return session_id

@lru_cache()
def get_genai_client():
    if settings.GEMINI_API_KEY:
        return genai.Client(api_key=settings.GEMINI_API_KEY)
    return genai.Client(vertexai=True, project=settings.PROJECT_ID, location=settings.LOCATION)
