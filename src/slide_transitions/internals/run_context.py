"""Process-global IDs used to correlate log lines and run manifests.

- session_id: one per process (a CLI invocation, or a long-lived library user)
- pipeline_run_id: a fresh one for every file we process
"""

from __future__ import annotations

import os
import threading
import uuid

_session_id: str | None = None
_pipeline_run_id: str | None = None

_session_lock = threading.Lock()
_pipeline_lock = threading.Lock()


def _new_id() -> str:
    return uuid.uuid4().hex[:8]


# region seed_session_id
def seed_session_id(value: str) -> None:
    """Set the session ID ahead of time (tests, embedding apps). No-op once it exists."""
    global _session_id
    with _session_lock:
        if _session_id is None:
            _session_id = value


# endregion


# region get_session_id
def get_session_id() -> str:
    """
    Return the session ID, creating it on first use.

    Resolution order:
    1. A value already seeded with `seed_session_id()`
    2. The SLIDE_TRANSITIONS_SESSION_ID environment variable, so CI jobs or wrapper
       scripts can line our logs up with theirs
    3. A random 8-character hex string
    """
    global _session_id

    # Double-checked so the common path doesn't take the lock
    if _session_id is None:
        with _session_lock:
            if _session_id is None:
                _session_id = os.environ.get("SLIDE_TRANSITIONS_SESSION_ID") or _new_id()
    return _session_id


# endregion


# region start_pipeline_run
def start_pipeline_run() -> str:
    """Replace the pipeline run ID with a new one and return it. Call once per processed file."""
    global _pipeline_run_id
    with _pipeline_lock:
        _pipeline_run_id = _new_id()
    return _pipeline_run_id


# endregion


# region get_pipeline_run_id
def get_pipeline_run_id() -> str:
    """Current pipeline run ID, or "Unknown" when called outside a run (e.g. library use)."""
    if _pipeline_run_id is None:
        return "Unknown"
    return _pipeline_run_id


# endregion


# region seed_pipeline_run_id
def seed_pipeline_run_id(value: str | None) -> None:
    """Force the pipeline run ID. Meant for tests; None resets it."""
    global _pipeline_run_id
    with _pipeline_lock:
        _pipeline_run_id = value


# endregion
