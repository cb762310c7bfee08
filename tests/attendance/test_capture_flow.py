import pytest

from src.campus_attendance.campus_attendance.attendance.capture import CaptureFlow
from src.campus_attendance.campus_attendance.attendance.model import AudioRecording, CapturedPhoto
from src.campus_attendance.campus_attendance.core.enums import ViewMode
from src.campus_attendance.campus_attendance.core.exceptions import InvalidTransition


def test_photo_and_recording_round_trip_through_home():
    flow = CaptureFlow()
    assert flow.current_view == ViewMode.HOME

    flow.open_camera()
    assert flow.current_view == ViewMode.CAMERA
    flow.accept_photo(CapturedPhoto(uri="file:///tmp/p.jpg"))
    assert flow.current_view == ViewMode.HOME

    flow.open_audio_recorder()
    assert flow.current_view == ViewMode.AUDIO_RECORDER
    flow.accept_recording(AudioRecording(uri="file:///tmp/a.m4a", duration=2.0))

    assert flow.current_view == ViewMode.HOME
    assert flow.session.is_complete


def test_cannot_jump_between_camera_and_recorder():
    flow = CaptureFlow()
    flow.open_camera()

    with pytest.raises(InvalidTransition):
        flow.open_audio_recorder()


def test_accept_outside_matching_view_is_rejected():
    flow = CaptureFlow()

    with pytest.raises(InvalidTransition):
        flow.accept_photo(CapturedPhoto(uri="file:///tmp/p.jpg"))
    assert flow.session.photo is None


def test_back_discards_nothing_already_captured():
    flow = CaptureFlow()
    flow.open_camera()
    flow.accept_photo(CapturedPhoto(uri="file:///tmp/p.jpg"))

    flow.open_audio_recorder()
    flow.back()

    assert flow.current_view == ViewMode.HOME
    assert flow.session.photo is not None
    assert flow.session.audio_recording is None


def test_retake_all_clears_media_but_keeps_upload_flag():
    flow = CaptureFlow()
    flow.open_camera()
    flow.accept_photo(CapturedPhoto(uri="file:///tmp/p.jpg"))
    flow.session.uploading = True

    flow.retake_all()

    assert flow.session.photo is None
    assert flow.session.uploading
    assert flow.current_view == ViewMode.HOME
