"""Track and record metadata for pipeline runs."""

from __future__ import annotations

import json
import logging
import platform
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from slide_transitions.internals.define_config import UserConfig
from slide_transitions.internals.paths import user_log_dir_path, user_manifests_dir
from slide_transitions.internals.run_context import get_session_id
from slide_transitions.models import TransitionReport

log = logging.getLogger("slide_transitions")

# Schema version for this implementation
MANIFEST_VERSION = "1.0"


# region RunManifest
class RunManifest:
    """Tracks and records metadata for a pipeline run.

    Writing the manifest is best-effort: a failure to write it is logged and
    never stops a run.
    """

    def __init__(self, cfg: UserConfig, run_id: str) -> None:
        """Creates a run manifest object in memory. Caller must call .start() to write it."""
        self.cfg = cfg
        self.run_id = run_id
        self.start_time: datetime = datetime.now()
        self.manifest_path = user_manifests_dir() / f"run_{self.run_id}_manifest.json"
        self.manifest: dict[str, Any] = self._build_manifest()
        self.end_time: datetime | None = None
        self.duration: float | None = None

    # region start
    def start(self) -> None:
        """Write initial manifest to disk"""
        self.manifest["status"] = "running"
        log.info(
            f"Writing initial manifest to disk with status = running, at {self.manifest_path}"
        )
        self._write_manifest()

    # endregion

    # region complete
    def complete(self, output_path: Path, report: TransitionReport) -> None:
        """Update manifest on success, with per-slide results."""
        self._finish("success")
        self.manifest["output_path"] = str(output_path)
        self._record_report(report)
        self._write_manifest()
        log.info(f"Updated manifest: success, at {self.manifest_path}")

    # endregion

    # region fail
    def fail(
        self,
        error: Exception | str,
        output_path: Path | None = None,
        report: TransitionReport | None = None,
    ) -> None:
        """Update manifest on failure with error information.

        `output_path` is set when the original file was still written out unchanged.
        """
        self._finish("fail")
        self.manifest["error"] = str(error)
        self.manifest["error_type"] = (
            type(error).__name__ if isinstance(error, Exception) else None
        )
        if output_path is not None:
            self.manifest["output_path"] = str(output_path)
        if report is not None:
            self._record_report(report)
        self._write_manifest()
        log.error(f"Updated manifest ({self.manifest_path}): failed - {error}")

    # endregion

    def _finish(self, status: str) -> None:
        self.end_time = datetime.now()
        self.duration = (self.end_time - self.start_time).total_seconds()
        self.manifest["status"] = status
        self.manifest["end_time"] = self.end_time.isoformat()
        self.manifest["duration_seconds"] = self.duration

    def _record_report(self, report: TransitionReport) -> None:
        self.manifest["slides"] = report.summary()
        self.manifest["slide_outcomes"] = [
            {
                "position": o.position,
                "path": o.path,
                "status": o.status.value,
                "transition_id": o.transition_id,
                "detail": o.detail,
            }
            for o in report.outcomes
        ]

    # region _build_manifest
    def _build_manifest(self) -> dict[str, Any]:
        """Build manifest structure."""
        return {
            "manifest_version": MANIFEST_VERSION,
            "run_id": self.run_id,
            "session_id": get_session_id(),
            "environment": self._get_environment_info(),
            "start_time": self.start_time.isoformat(),
            "end_time": None,
            "duration_seconds": None,
            "input_file": str(self.cfg.get_input_pptx_file()),
            "output_path": None,
            "log_path": str(user_log_dir_path()),
            "config": self.cfg.config_to_dict(),
            "slides": None,
            "slide_outcomes": [],
            "error": None,
            "error_type": None,
        }

    # endregion

    # region _write_manifest
    def _write_manifest(self) -> None:
        """Write manifest to disk."""
        try:
            with open(self.manifest_path, "w", encoding="utf-8", newline="\n") as f:
                json.dump(self.manifest, f, indent=2)
        except OSError as e:
            log.error(f"Failed to write manifest to {self.manifest_path}: {e}")

    # endregion

    # region _get_environment_info
    def _get_environment_info(self) -> dict[str, Any]:
        """Get execution environment information."""
        from slide_transitions import __version__

        return {
            "python_version": sys.version.split()[0],
            "platform": platform.system(),
            "platform_release": platform.release(),
            "app_version": __version__,
        }

    # endregion


# endregion
