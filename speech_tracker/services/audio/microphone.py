"""Local microphone backed by ``sounddevice`` (PortAudio)."""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class _SoundDeviceStream:
    def __init__(self, stream) -> None:  # noqa: ANN001
        self._stream = stream

    def close(self) -> None:
        try:
            self._stream.stop()
        finally:
            self._stream.close()


class SoundDeviceMicrophone:
    """Capture 16-bit PCM from the default (or a named) input device.

    ``sounddevice`` is imported on first use so importing this module does
    not require PortAudio.
    """

    def __init__(self, device: int | str | None = None, blocksize: int = 1024) -> None:
        self._device = device
        self._blocksize = blocksize

    def open(
        self,
        on_chunk: Callable[[bytes], None],
        sample_rate: int,
        channels: int,
    ) -> _SoundDeviceStream:
        import sounddevice as sd

        def _callback(indata, _frames, _time, status) -> None:  # noqa: ANN001
            if status:
                logger.debug("Input stream status: %s", status)
            on_chunk(bytes(indata))

        try:
            stream = sd.RawInputStream(
                samplerate=sample_rate,
                channels=channels,
                dtype="int16",
                device=self._device,
                blocksize=self._blocksize,
                callback=_callback,
            )
            stream.start()
        except sd.PortAudioError as exc:
            raise PermissionError(f"Microphone unavailable: {exc}") from exc
        return _SoundDeviceStream(stream)
