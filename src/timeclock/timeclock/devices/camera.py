from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Optional, Protocol

import cv2
from PIL import Image

from ..core.constants import HAVE_CURRENT_DATA, HAVE_METADATA, HAVE_NOTHING
from ..core.exceptions import CameraDeviceError, CameraUnsupported, FrameNotReadyError

logger = logging.getLogger(__name__)


class VideoStream(Protocol):
    """A live camera stream owned by one workflow instance."""

    @property
    def ready_state(self) -> int:
        raise NotImplementedError

    @property
    def active(self) -> bool:
        raise NotImplementedError

    def snapshot(self) -> Image.Image:
        """Return the latest frame as it comes from the sensor (not mirrored)."""
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError


class CameraCapture(Protocol):
    async def acquire_stream(self, *, facing: str, ideal_width: int, ideal_height: int) -> VideoStream:
        raise NotImplementedError

    def stop_stream(self, stream: VideoStream) -> None:
        raise NotImplementedError


class OpenCVStream:
    """Frames are pulled by a reader thread; the latest one is kept for capture/preview."""

    def __init__(self, capture: "cv2.VideoCapture", *, facing: str):
        self.facing = facing
        self._capture = capture
        self._lock = threading.Lock()
        self._frame = None
        self._active = True
        self._reader = threading.Thread(target=self._read_loop, name="camera-reader", daemon=True)
        self._reader.start()

    @property
    def ready_state(self) -> int:
        if not self._active:
            return HAVE_NOTHING
        with self._lock:
            return HAVE_CURRENT_DATA if self._frame is not None else HAVE_METADATA

    @property
    def active(self) -> bool:
        return self._active

    def _read_loop(self) -> None:
        try:
            while self._active:
                ok, frame = self._capture.read()
                if not ok:
                    time.sleep(0.05)
                    continue
                with self._lock:
                    self._frame = frame
        finally:
            self._capture.release()
            logger.info("Camera device released")

    def snapshot(self) -> Image.Image:
        with self._lock:
            frame = self._frame
        if frame is None:
            raise FrameNotReadyError("Sem imagem da câmara")
        return Image.fromarray(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))

    def stop(self) -> None:
        # The reader thread releases the device on its way out.
        self._active = False


class OpenCVCamera:
    """Local webcam of the kiosk through OpenCV.

    `facing` is accepted for parity with browser cameras; OpenCV picks the
    device by index only.
    """

    def __init__(self, device_index: Optional[int] = 0):
        self._device_index = device_index

    async def acquire_stream(self, *, facing: str, ideal_width: int, ideal_height: int) -> OpenCVStream:
        if self._device_index is None:
            raise CameraUnsupported("Nenhuma câmara configurada neste posto")
        return await asyncio.to_thread(self._open, facing, ideal_width, ideal_height)

    def _open(self, facing: str, ideal_width: int, ideal_height: int) -> OpenCVStream:
        capture = cv2.VideoCapture(self._device_index)
        if not capture.isOpened():
            capture.release()
            raise CameraDeviceError(f"Não foi possível abrir a webcam {self._device_index}")

        capture.set(cv2.CAP_PROP_FRAME_WIDTH, ideal_width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, ideal_height)
        logger.info("Camera %s opened (%sx%s requested)", self._device_index, ideal_width, ideal_height)
        return OpenCVStream(capture, facing=facing)

    def stop_stream(self, stream: VideoStream) -> None:
        stream.stop()
