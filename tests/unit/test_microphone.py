"""Tests for the sounddevice stream handle returned by SoundDeviceMicrophone."""

from unittest.mock import MagicMock

import pytest

from speech_tracker.services.audio.microphone import _SoundDeviceStream


class TestSoundDeviceStreamClose:
    def test_stops_then_closes(self):
        stream = MagicMock()

        _SoundDeviceStream(stream).close()

        assert [c[0] for c in stream.method_calls] == ["stop", "close"]

    def test_closes_even_when_stop_fails(self):
        stream = MagicMock()
        stream.stop.side_effect = OSError("PortAudio error")

        with pytest.raises(OSError):
            _SoundDeviceStream(stream).close()

        stream.close.assert_called_once()
