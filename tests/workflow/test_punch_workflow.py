from __future__ import annotations

import asyncio

import pytest

from fakes import ROSTER, FakeCamera, FakeGeolocation, FakeRegistration, FakeRoster
from timeclock.core.constants import HAVE_METADATA
from timeclock.core.enums import MessageKind, PunchDirection, PunchMethod, WorkflowStep
from timeclock.core.exceptions import (
    CameraPermissionDenied,
    GeolocationTimeout,
    GeolocationUnsupported,
    InvalidTransitionError,
    NotFoundError,
    RegistrationNetworkError,
)
from timeclock.devices.imaging import DATA_URL_PREFIX
from timeclock.workflow.punch_workflow import (
    CAMERA_ERROR_TEXT,
    LOCATION_FAILED_TEXT,
    LOCATION_UNSUPPORTED_TEXT,
    ROSTER_FAILED_TEXT,
    SUBMIT_FAILED_TEXT,
    WAITING_FRAME_TEXT,
    PunchWorkflow,
)


def make_workflow(camera=None, geolocation=None, registration=None, roster=None, *, reset_delay=0.05):
    return PunchWorkflow(
        camera=camera or FakeCamera(),
        geolocation=geolocation or FakeGeolocation(),
        registration=registration or FakeRegistration(),
        roster=roster or FakeRoster(ROSTER),
        reset_delay=reset_delay,
    )


async def ready_to_capture(workflow, employee_id="c1", direction=PunchDirection.CHECK_IN):
    await workflow.start(direction)
    workflow.select_employee_by_id(employee_id)
    await workflow.settle()


def test_check_in_happy_path_registers_once_and_resets(camera, geolocation, registration, roster):
    async def scenario():
        wf = make_workflow(camera, geolocation, registration, roster, reset_delay=0.05)

        await wf.start(PunchDirection.CHECK_IN)
        assert wf.step == WorkflowStep.SELECT_EMPLOYEE

        wf.set_search_term("joão")
        [joao] = wf.filtered_employees
        wf.select_employee(joao)
        assert wf.step == WorkflowStep.CAPTURING

        await wf.settle()
        assert wf.can_confirm

        punch = await wf.confirm_capture()
        assert punch is not None
        assert punch.direction == PunchDirection.CHECK_IN
        assert punch.method == PunchMethod.FACIAL
        assert punch.has_coordinates

        assert len(registration.calls) == 1
        call = registration.calls[0]
        assert call["employee_id"] == "c1"
        assert call["image_data"].startswith(DATA_URL_PREFIX)
        assert (call["latitude"], call["longitude"]) == (-8.8383, 13.2344)

        snap = wf.snapshot()
        assert snap.step == WorkflowStep.COMPLETED
        assert snap.message.kind == MessageKind.SUCCESS
        assert snap.message.text == "ENTRADA registada para João Operário às 08:30:15"
        assert wf.stream is None
        assert camera.streams[0].stop_calls == 1

        await asyncio.sleep(0.15)
        snap = wf.snapshot()
        assert snap.step == WorkflowStep.SELECT_DIRECTION
        assert snap.direction is None
        assert snap.employee is None
        assert snap.last_punch == punch

    asyncio.run(scenario())


def test_reset_does_not_fire_before_delay():
    async def scenario():
        wf = make_workflow(reset_delay=0.3)
        await ready_to_capture(wf)
        await wf.confirm_capture()

        await asyncio.sleep(0.1)
        assert wf.step == WorkflowStep.COMPLETED

        await asyncio.sleep(0.35)
        assert wf.step == WorkflowStep.SELECT_DIRECTION

    asyncio.run(scenario())


def test_camera_denied_keeps_confirm_disabled_until_cancel():
    camera = FakeCamera(error=CameraPermissionDenied("denied"))
    registration = FakeRegistration()

    async def scenario():
        wf = make_workflow(camera, registration=registration)
        await ready_to_capture(wf)

        snap = wf.snapshot()
        assert snap.step == WorkflowStep.CAPTURING
        assert snap.camera_error == CAMERA_ERROR_TEXT
        assert snap.message.kind == MessageKind.ERROR
        assert not wf.can_confirm

        assert await wf.confirm_capture() is None
        await asyncio.sleep(0.1)
        assert wf.step == WorkflowStep.CAPTURING
        assert not wf.can_confirm

        wf.cancel()
        assert wf.step == WorkflowStep.SELECT_DIRECTION
        assert wf.snapshot().camera_error is None

    asyncio.run(scenario())
    assert registration.calls == []
    assert camera.calls == 1


def test_location_failure_submits_without_coordinates():
    registration = FakeRegistration()

    async def scenario():
        wf = make_workflow(geolocation=FakeGeolocation(error=GeolocationTimeout("timeout")), registration=registration)
        await ready_to_capture(wf)

        assert wf.snapshot().location_error == LOCATION_FAILED_TEXT
        assert wf.can_confirm
        return await wf.confirm_capture()

    punch = asyncio.run(scenario())
    assert punch is not None
    assert not punch.has_coordinates
    assert registration.calls[0]["latitude"] is None
    assert registration.calls[0]["longitude"] is None


def test_location_unsupported_is_advisory_only():
    async def scenario():
        wf = make_workflow(geolocation=FakeGeolocation(error=GeolocationUnsupported("no gps")))
        await ready_to_capture(wf)
        snap = wf.snapshot()
        assert snap.location_error == LOCATION_UNSUPPORTED_TEXT
        assert snap.location is None
        assert snap.can_confirm

    asyncio.run(scenario())


def test_double_confirm_during_slow_submission_submits_once():
    registration = FakeRegistration(delay=0.05)

    async def scenario():
        wf = make_workflow(registration=registration)
        await ready_to_capture(wf)
        return await asyncio.gather(wf.confirm_capture(), wf.confirm_capture())

    first, second = asyncio.run(scenario())
    assert first is not None
    assert second is None
    assert len(registration.calls) == 1


def test_confirm_while_submitting_is_a_no_op():
    registration = FakeRegistration(delay=0.05)

    async def scenario():
        wf = make_workflow(registration=registration)
        await ready_to_capture(wf)
        task = asyncio.create_task(wf.confirm_capture())
        await asyncio.sleep(0)
        assert wf.step == WorkflowStep.SUBMITTING
        assert wf.snapshot().processing
        assert await wf.confirm_capture() is None
        await task

    asyncio.run(scenario())
    assert len(registration.calls) == 1


def test_premature_capture_shows_waiting_message():
    camera = FakeCamera(ready_state=HAVE_METADATA)
    registration = FakeRegistration()

    async def scenario():
        wf = make_workflow(camera, registration=registration)
        await ready_to_capture(wf)
        assert await wf.confirm_capture() is None
        snap = wf.snapshot()
        assert snap.step == WorkflowStep.CAPTURING
        assert snap.message.kind == MessageKind.INFO
        assert snap.message.text == WAITING_FRAME_TEXT
        assert snap.stream_live

    asyncio.run(scenario())
    assert registration.calls == []


def test_failed_submission_keeps_camera_live_and_allows_retry():
    camera = FakeCamera()
    registration = FakeRegistration(error=RegistrationNetworkError("offline"))

    async def scenario():
        wf = make_workflow(camera, registration=registration)
        await ready_to_capture(wf)

        assert await wf.confirm_capture() is None
        snap = wf.snapshot()
        assert snap.step == WorkflowStep.CAPTURING
        assert snap.message.text == SUBMIT_FAILED_TEXT
        assert snap.stream_live
        assert camera.streams[0].stop_calls == 0
        assert wf.can_confirm

        registration.error = None
        return await wf.confirm_capture()

    punch = asyncio.run(scenario())
    assert punch is not None
    assert len(registration.calls) == 2


def test_cancel_during_capture_releases_the_stream():
    camera = FakeCamera()

    async def scenario():
        wf = make_workflow(camera)
        await ready_to_capture(wf)
        assert wf.stream is camera.streams[0]
        wf.cancel()
        assert wf.stream is None
        assert wf.step == WorkflowStep.SELECT_DIRECTION

    asyncio.run(scenario())
    assert camera.streams[0].stop_calls == 1


def test_stream_arriving_after_cancel_is_stopped():
    camera = FakeCamera()

    async def scenario():
        camera.gate = asyncio.Event()
        wf = make_workflow(camera)
        await wf.start(PunchDirection.CHECK_OUT)
        wf.select_employee_by_id("c2")
        await asyncio.sleep(0)

        wf.cancel()
        camera.gate.set()
        await wf.settle()
        assert wf.stream is None

    asyncio.run(scenario())
    assert len(camera.streams) == 1
    assert camera.streams[0].stop_calls == 1


def test_each_selection_acquires_devices_once(camera, geolocation):
    async def scenario():
        wf = make_workflow(camera, geolocation)
        await ready_to_capture(wf)
        await asyncio.sleep(0.05)

    asyncio.run(scenario())
    assert camera.calls == 1
    assert geolocation.calls == 1
    assert camera.requests[0] == {"facing": "user", "width": 1280, "height": 720}


def test_close_releases_everything(camera):
    async def scenario():
        wf = make_workflow(camera)
        await ready_to_capture(wf)
        await wf.close()
        assert wf.step == WorkflowStep.SELECT_DIRECTION

    asyncio.run(scenario())
    assert camera.streams[0].stop_calls == 1


def test_roster_failure_stays_on_direction_step():
    async def scenario():
        wf = make_workflow(roster=FakeRoster(error=RegistrationNetworkError("offline")))
        await wf.start(PunchDirection.CHECK_IN)
        snap = wf.snapshot()
        assert snap.step == WorkflowStep.SELECT_DIRECTION
        assert snap.message.text == ROSTER_FAILED_TEXT

    asyncio.run(scenario())


def test_roster_is_loaded_on_every_activation(roster):
    async def scenario():
        wf = make_workflow(roster=roster)
        await wf.start(PunchDirection.CHECK_IN)
        wf.cancel()
        await wf.start(PunchDirection.CHECK_OUT)

    asyncio.run(scenario())
    assert roster.calls == 2


def test_out_of_order_actions_are_rejected():
    async def scenario():
        wf = make_workflow()
        with pytest.raises(InvalidTransitionError):
            wf.select_employee(ROSTER[0])
        assert await wf.confirm_capture() is None

        await wf.start(PunchDirection.CHECK_IN)
        with pytest.raises(InvalidTransitionError):
            await wf.start(PunchDirection.CHECK_OUT)
        with pytest.raises(NotFoundError):
            wf.select_employee_by_id("c99")

    asyncio.run(scenario())


def test_search_filters_by_name_or_job_title():
    async def scenario():
        wf = make_workflow()
        await wf.start(PunchDirection.CHECK_IN)

        wf.set_search_term("LOGÍSTICA")
        assert [e.employee_id for e in wf.filtered_employees] == ["c3"]

        wf.set_search_term("silva")
        assert [e.employee_id for e in wf.filtered_employees] == ["c2"]

        wf.set_search_term("")
        assert len(wf.filtered_employees) == 3

    asyncio.run(scenario())


def test_cancel_during_submission_releases_camera_and_ignores_late_result():
    camera = FakeCamera()
    registration = FakeRegistration(delay=0.1)

    async def scenario():
        wf = make_workflow(camera, registration=registration, reset_delay=0.05)
        await ready_to_capture(wf)

        submission = asyncio.create_task(wf.confirm_capture())
        while not registration.calls:
            await asyncio.sleep(0.005)
        assert wf.step == WorkflowStep.SUBMITTING

        wf.cancel()
        assert wf.step == WorkflowStep.SELECT_DIRECTION
        assert wf.stream is None
        assert camera.streams[0].stop_calls == 1

        punch = await submission
        await asyncio.sleep(0.1)
        snap = wf.snapshot()
        assert snap.step == WorkflowStep.SELECT_DIRECTION
        assert snap.employee is None
        assert snap.message is None
        assert snap.last_punch == punch
        assert not wf.reset_pending
        return punch

    assert asyncio.run(scenario()) is not None
    assert len(registration.calls) == 1
    assert camera.streams[0].stop_calls == 1


def test_cancel_on_result_screen_resets_at_once():
    async def scenario():
        wf = make_workflow(reset_delay=0.2)
        await ready_to_capture(wf)
        punch = await wf.confirm_capture()
        assert wf.step == WorkflowStep.COMPLETED
        assert wf.reset_pending

        wf.cancel()
        snap = wf.snapshot()
        assert snap.step == WorkflowStep.SELECT_DIRECTION
        assert snap.message is None
        assert snap.last_punch == punch
        assert not wf.reset_pending

        # the old delay elapsing does not disturb the next activation
        await wf.start(PunchDirection.CHECK_OUT)
        await asyncio.sleep(0.3)
        assert wf.step == WorkflowStep.SELECT_EMPLOYEE

    asyncio.run(scenario())
