from __future__ import annotations

import logging

from ..core.enums import ViewMode
from ..core.exceptions import InvalidTransition
from .model import AudioRecording, CapturedPhoto, CaptureSession

logger = logging.getLogger(__name__)


class CaptureFlow:
    """HOME -> CAMERA -> HOME and HOME -> AUDIO_RECORDER -> HOME."""

    def __init__(self, session: CaptureSession | None = None):
        self._session = session or CaptureSession()

    @property
    def session(self) -> CaptureSession:
        return self._session

    @property
    def current_view(self) -> ViewMode:
        return self._session.current_view

    def _move(self, *, expected: ViewMode, target: ViewMode) -> None:
        if self._session.current_view != expected:
            raise InvalidTransition(
                f"Cannot go to {target.value} from {self._session.current_view.value}"
            )
        logger.debug("Capture view %s -> %s", self._session.current_view.value, target.value)
        self._session.current_view = target

    def open_camera(self) -> None:
        self._move(expected=ViewMode.HOME, target=ViewMode.CAMERA)

    def accept_photo(self, photo: CapturedPhoto) -> None:
        self._move(expected=ViewMode.CAMERA, target=ViewMode.HOME)
        self._session.photo = photo

    def open_audio_recorder(self) -> None:
        self._move(expected=ViewMode.HOME, target=ViewMode.AUDIO_RECORDER)

    def accept_recording(self, recording: AudioRecording) -> None:
        self._move(expected=ViewMode.AUDIO_RECORDER, target=ViewMode.HOME)
        self._session.audio_recording = recording

    def back(self) -> None:
        """Leave the camera or recorder without keeping anything."""
        if self._session.current_view == ViewMode.HOME:
            return
        self._session.current_view = ViewMode.HOME

    def retake_all(self) -> None:
        uploading = self._session.uploading
        self._session = CaptureSession(uploading=uploading)
