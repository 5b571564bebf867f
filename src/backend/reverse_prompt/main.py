import os
import uvicorn
import logging
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.sessions import SessionMiddleware

from reverse_prompt.config import settings
from reverse_prompt.dependencies import get_session_id
from reverse_prompt.routers.api import router as api_router, build_state_response
from reverse_prompt.routers.prompts import router as prompts_router
from reverse_prompt import session_state


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent

# ==============================================================================
# 1. FASTAPI APP AND MIDDLEWARE SETUP
# ==============================================================================

app = FastAPI(title="Prompt Reverse Engineer API")

SECRET_KEY = os.environ.get('SECRET_KEY', 'a-very-secret-key-for-dev')
app.add_middleware(SessionMiddleware, secret_key=SECRET_KEY, max_age=settings.SESSION_TTL_SECONDS)

origins = [
    settings.FRONTEND_URL,
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

app.include_router(api_router, prefix="/api")
app.include_router(prompts_router, prefix="/api/prompts", tags=["Prompts"])

# ==============================================================================
# 2. PAGE ROUTING AND STARTUP
# ==============================================================================

@app.get("/", include_in_schema=False)
def index(request: Request, session_id: str = Depends(get_session_id)):
    state = build_state_response(session_state.get_state(session_id))
    return templates.TemplateResponse(
        request,
        "index.html",
        {"state": state, "copy_ack_seconds": settings.COPY_ACK_SECONDS},
    )

app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")


if __name__ == '__main__':
    port = int(os.getenv("PORT", "7860"))
    logger.info(f"Starting Uvicorn server on http://0.0.0.0:{port}")
    uvicorn.run("reverse_prompt.main:app", host="0.0.0.0", port=port)
