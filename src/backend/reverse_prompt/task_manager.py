import time
import uuid
import threading
from concurrent.futures import ThreadPoolExecutor, Future
from typing import Dict, Any, Callable, Optional
import logging

from reverse_prompt.config import settings

logger = logging.getLogger(__name__)

# ==============================================================================
# 1. In-Memory Task Store
# ==============================================================================

_task_store: Dict[str, Dict[str, Any]] = {}
_futures: Dict[str, Future] = {}
_finished_at: Dict[str, float] = {}
_lock = threading.Lock()
_clock = time.monotonic
_executor = ThreadPoolExecutor(max_workers=settings.TASK_WORKERS)

# ==============================================================================
# 2. Task Management Functions
# ==============================================================================

def _prune_finished(now: float) -> None:
    # Caller holds _lock. Running tasks are never pruned.
    expired = [
        task_id for task_id, finished_at in _finished_at.items()
        if now - finished_at >= settings.TASK_TTL_SECONDS
    ]
    for task_id in expired:
        _finished_at.pop(task_id, None)
        _task_store.pop(task_id, None)
    if expired:
        logger.info(f"Pruned {len(expired)} finished task(s).")

def _finish(task_id: str, entry: Dict[str, Any]) -> None:
    with _lock:
        _task_store[task_id] = entry
        _finished_at[task_id] = _clock()

def create_task(
    target_func: Callable,
    on_success: Optional[Callable] = None,
    on_error: Optional[Callable] = None,
    *args,
    **kwargs
) -> str:
    """
    Submits a function to the thread pool, returning a task ID.
    Executes on_success or on_error callbacks upon completion, before the
    task's final status becomes visible to pollers.
    """
    task_id = str(uuid.uuid4())
    logger.info(f"Creating task {task_id} for function: {target_func.__name__}")

    func_kwargs = kwargs.copy()

    def task_wrapper(task_id: str):
        logger.info(f"Task {task_id} started.")
        try:
            result = target_func(*args, **func_kwargs)
        except Exception as e:
            logger.error(f"Task {task_id} failed with error: {e}", exc_info=True)
            if on_error:
                try:
                    logger.info(f"Executing on_error callback for task {task_id}.")
                    on_error(e, **func_kwargs)
                except Exception as cb_e:
                    logger.error(f"Error in on_error callback for task {task_id}: {cb_e}", exc_info=True)
            _finish(task_id, {"status": "failed", "error": str(e)})
            return

        if on_success:
            try:
                logger.info(f"Executing on_success callback for task {task_id}.")
                on_success(result, **func_kwargs)
            except Exception as cb_e:
                logger.error(f"Error in on_success callback for task {task_id}: {cb_e}", exc_info=True)
        _finish(task_id, {"status": "completed", "result": result})
        logger.info(f"Task {task_id} completed successfully.")

    # Stored before submit so a fast task cannot be overwritten back to running.
    with _lock:
        _prune_finished(_clock())
        _task_store[task_id] = {"status": "running"}
    future = _executor.submit(task_wrapper, task_id)
    _futures[task_id] = future
    future.add_done_callback(lambda _: _futures.pop(task_id, None))
    logger.info(f"Task {task_id} is now running.")

    return task_id

def get_task_status(task_id: str) -> Dict[str, Any]:
    """
    Retrieves the status of a task from the in-memory store.
    """
    with _lock:
        _prune_finished(_clock())
        return _task_store.get(task_id, {"status": "not_found"})

def wait_for_task(task_id: str, timeout: Optional[float] = None) -> Dict[str, Any]:
    """
    Blocks until the task finishes and returns its final status.
    """
    future = _futures.pop(task_id, None)
    if future is not None:
        future.result(timeout=timeout)
    return get_task_status(task_id)
