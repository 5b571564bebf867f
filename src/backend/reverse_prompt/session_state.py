import time
import uuid
import logging
import threading
from dataclasses import dataclass, replace
from typing import Dict, Any, Optional, Tuple

from reverse_prompt.config import settings
from reverse_prompt.export import ExportMode
from reverse_prompt.ingestion import ImagePayload
from reverse_prompt.prompt_schema import error_result, is_error_result

logger = logging.getLogger(__name__)

# ==============================================================================
# 1. Per-session UI state
# ==============================================================================

@dataclass
class UIState:
    image_data_url: Optional[str] = None
    image_mime_type: Optional[str] = None
    image_resolution: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
    is_loading: bool = False
    is_modifying: bool = False
    copied: Optional[ExportMode] = None
    copied_at: Optional[float] = None
    modify_instruction: str = ""
    generation: int = 0
    last_seen: float = 0.0

    @property
    def has_editable_result(self) -> bool:
        return self.result is not None and not is_error_result(self.result)

    def active_copy_mode(self, now: Optional[float] = None) -> Optional[ExportMode]:
        if self.copied is None or self.copied_at is None:
            return None
        now = time.monotonic() if now is None else now
        if now - self.copied_at >= settings.COPY_ACK_SECONDS:
            return None
        return self.copied


# ==============================================================================
# 2. In-memory session store
# ==============================================================================

# Sessions live only as long as the process, and idle ones are evicted.
_session_store: Dict[str, UIState] = {}
_lock = threading.Lock()
_clock = time.monotonic


def new_session_id() -> str:
    return uuid.uuid4().hex


def _evict_expired(now: float) -> None:
    # Caller holds _lock.
    expired = [
        session_id for session_id, state in _session_store.items()
        if now - state.last_seen >= settings.SESSION_TTL_SECONDS
    ]
    for session_id in expired:
        del _session_store[session_id]
    if expired:
        logger.info(f"Evicted {len(expired)} idle session(s).")


def _lookup(session_id: str) -> Optional[UIState]:
    # Caller holds _lock.
    now = _clock()
    _evict_expired(now)
    state = _session_store.get(session_id)
    if state is not None:
        state.last_seen = now
    return state


def _touch(session_id: str) -> UIState:
    # Caller holds _lock.
    state = _lookup(session_id)
    if state is None:
        state = _session_store[session_id] = UIState(last_seen=_clock())
    return state


def get_state(session_id: str) -> UIState:
    """
    Returns a snapshot copy of the session's state. Unknown sessions read as
    empty without being stored.
    """
    with _lock:
        state = _lookup(session_id)
        return replace(state) if state is not None else UIState()


def start_analysis(session_id: str, image: ImagePayload) -> int:
    """
    Stores a new preview image and marks analysis as running.
    Returns the generation the pending analysis belongs to.
    """
    with _lock:
        state = _touch(session_id)
        state.generation += 1
        state.image_data_url = image.data_url
        state.image_mime_type = image.mime_type
        state.image_resolution = image.resolution
        state.result = None
        state.is_loading = True
        state.is_modifying = False
        return state.generation


def finish_analysis(session_id: str, generation: int, result: Dict[str, Any]) -> bool:
    with _lock:
        state = _lookup(session_id)
        if state is None or state.generation != generation:
            logger.info(f"Discarding stale analysis for session {session_id} (generation {generation}).")
            return False
        state.result = result
        state.is_loading = False
        return True


def fail_analysis(session_id: str, generation: int) -> bool:
    return finish_analysis(session_id, generation, error_result())


def start_modification(session_id: str, instruction: str) -> Optional[Tuple[int, Dict[str, Any]]]:
    """
    Marks a modification as running and returns the generation and result it
    applies to. Returns None when there is nothing to modify or one is already
    running.
    """
    with _lock:
        state = _lookup(session_id)
        if state is None:
            return None
        state.modify_instruction = instruction
        if not instruction.strip() or not state.has_editable_result or state.is_modifying:
            return None
        state.is_modifying = True
        return state.generation, dict(state.result)


def finish_modification(session_id: str, generation: int, result: Optional[Dict[str, Any]]) -> bool:
    """
    Ends a running modification. A result of None keeps the previous one.
    """
    with _lock:
        state = _lookup(session_id)
        if state is None or state.generation != generation:
            logger.info(f"Discarding stale modification for session {session_id} (generation {generation}).")
            return False
        state.is_modifying = False
        if result is not None:
            state.result = result
            state.modify_instruction = ""
        return True


def mark_copied(session_id: str, mode: ExportMode, now: Optional[float] = None) -> None:
    with _lock:
        state = _touch(session_id)
        state.copied = ExportMode(mode)
        state.copied_at = time.monotonic() if now is None else now


def reset(session_id: str) -> None:
    with _lock:
        state = _lookup(session_id)
        if state is not None:
            _session_store[session_id] = UIState(generation=state.generation + 1, last_seen=state.last_seen)


def clear_all() -> None:
    with _lock:
        _session_store.clear()
