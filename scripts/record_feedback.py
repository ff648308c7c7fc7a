#!/usr/bin/env python3
"""
Speech Tracker microphone practice from the terminal.

Records from the local microphone, sends the recording to the backend,
and prints the transcript and feedback.

Usage:
    python scripts/record_feedback.py
    python scripts/record_feedback.py --paragraph Formal
    python scripts/record_feedback.py --api-url http://localhost:8000 --device 2
"""

import argparse
import logging
import sys

from speech_tracker.core.config import get_settings
from speech_tracker.core.exceptions import SpeechTrackerError
from speech_tracker.core.models import ParagraphStyle, PipelineStatus
from speech_tracker.services.audio import AudioRecorder
from speech_tracker.services.audio.microphone import SoundDeviceMicrophone
from speech_tracker.services.pipeline import PipelineController
from speech_tracker.ui.api_client import APIClient


def _print_paragraph(client: APIClient, mode: str) -> None:
    paragraph = client.generate_paragraph(mode)
    print("\nRead this aloud:")
    print("-" * 60)
    print(paragraph)
    print("-" * 60)


def _record_once(recorder: AudioRecorder, pipeline: PipelineController) -> bool:
    """Run one capture -> transcribe -> feedback cycle. Returns True on success."""
    input("\nPress Enter to start recording...")
    pipeline.begin_capture()
    try:
        recorder.start()
        input("Recording. Press Enter to stop...")
        payload = recorder.stop()
    except SpeechTrackerError as exc:
        state = pipeline.fail_capture(exc)
        print(f"\nError: {state.error}")
        return False

    print("Analyzing your speech...")
    state = pipeline.submit(payload)

    if state.transcript:
        print("\nTranscription:")
        print(state.transcript)
    if state.status == PipelineStatus.failed:
        print(f"\nError: {state.error}")
        return False

    print("\nFeedback:")
    print(state.feedback)
    return True


def main() -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Record a speech and get feedback")
    parser.add_argument("--api-url", default=settings.api_base_url, help="Backend API URL")
    parser.add_argument(
        "--paragraph",
        choices=[style.value for style in ParagraphStyle],
        help="Generate a practice paragraph to read first",
    )
    parser.add_argument("--device", default=None, help="Input device index or name")
    parser.add_argument("--once", action="store_true", help="Record a single take and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    device = int(args.device) if args.device and args.device.isdigit() else args.device
    client = APIClient(base_url=args.api_url, timeout=settings.api_timeout)
    pipeline = PipelineController(client)
    recorder = AudioRecorder(
        SoundDeviceMicrophone(device=device),
        sample_rate=settings.recording_sample_rate,
        channels=settings.recording_channels,
    )

    ok = True
    try:
        if args.paragraph:
            _print_paragraph(client, args.paragraph)
        while True:
            ok = _record_once(recorder, pipeline)
            if args.once:
                break
            again = input("\nRecord again? [y/N] ").strip().lower()
            if again != "y":
                break
    except SpeechTrackerError as exc:
        print(f"\nError: {exc.detail}")
        ok = False
    except KeyboardInterrupt:
        print("\nInterrupted")
    finally:
        client.close()

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
