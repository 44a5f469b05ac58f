#!/usr/bin/env python3
"""
Pixverse Manual Smoke Test Script.

This script performs a basic end-to-end run against the live Pixverse API by:
1. Uploading a local video (upload token -> signed OSS PUT -> media registration)
2. Extracting the video's last frame
3. Creating a lip-sync job for the uploaded video
4. Polling until the job succeeds, fails or times out
5. Printing results summary

PREREQUISITES:
- A valid Pixverse web token in PIXVERSE_TOKEN (or passed with --token)
- Enough credits on the account for one lip-sync job

RUNNING THIS SCRIPT:
    pip install -e .
    PIXVERSE_TOKEN=... python scripts/manual_smoke_run.py clip.mp4 --duration 5

OPTIONAL ARGUMENTS:
    --text       Text the subject should speak
    --speaker    TTS speaker id
    --timeout    Max seconds to wait for the job (default: 600)
    --verbose    Enable verbose output

EXAMPLE:
    python scripts/manual_smoke_run.py clip.mp4 --duration 5 --text "Hello!" --verbose
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from pixverse import (
    LipSyncRequest,
    PixverseClient,
    PixverseException,
    get_settings,
)


@dataclass
class SmokeTestConfig:
    """Configuration for smoke test."""

    video_path: Path
    duration: float
    text: str = "Hello! This is a Pixverse lip-sync smoke test."
    speaker_id: str | None = None
    token: str | None = None
    timeout_seconds: int = 600
    poll_interval_seconds: int = 10
    verbose: bool = False


class SmokeTestRunner:
    """Runs the Pixverse smoke test."""

    def __init__(self, config: SmokeTestConfig):
        self.config = config

    def log(self, message: str, verbose_only: bool = False) -> None:
        """Print log message."""
        if verbose_only and not self.config.verbose:
            return
        print(message)

    async def run(self) -> bool:
        """Run the full flow. Returns True when the job succeeds."""
        try:
            async with PixverseClient(token=self.config.token) as client:
                self.log("\n[1/4] Uploading video...")
                media = await client.upload_file(
                    self.config.video_path.read_bytes(),
                    self.config.video_path.name,
                )
                self.log(f"  Media path: {media.path}")
                self.log(f"  Media URL:  {media.url}", verbose_only=True)

                self.log("\n[2/4] Extracting last frame...")
                frame = await client.get_last_video_frame(
                    {"video_path": media.path, "duration": self.config.duration}
                )
                self.log(f"  Last frame: {frame.resp.last_frame}")

                self.log("\n[3/4] Creating lip-sync job...")
                job = await client.create_lip_sync(
                    LipSyncRequest(
                        customer_video_path=media.path,
                        customer_video_url=media.url,
                        customer_video_duration=self.config.duration,
                        customer_video_last_frame_url=frame.resp.last_frame,
                        lip_sync_tts_content=self.config.text,
                        lip_sync_tts_speaker_id=self.config.speaker_id,
                    )
                )
                self.log(f"  Video ID: {job.resp.video_id}")

                self.log("\n[4/4] Polling for completion...")
                details = await client.wait_for_video(
                    job.resp.video_id,
                    poll_interval=self.config.poll_interval_seconds,
                    max_poll_time=self.config.timeout_seconds,
                )

            self.log("\n" + "=" * 60)
            self.log("SMOKE TEST SUMMARY")
            self.log("=" * 60)
            self.log(f"  Video ID:  {details.video_id}")
            self.log(f"  Duration:  {details.video_duration}s")
            self.log(f"  URL:       {details.video_url}")
            self.log("\nRESULT: PASSED")
            return True

        except PixverseException as e:
            self.log(f"\n\nERROR: {e.message}")
            self.log(f"  Details: {e.details}", verbose_only=True)
            return False


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Pixverse Manual Smoke Test",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("video", type=Path, help="Local video file to upload")
    parser.add_argument(
        "--duration",
        type=float,
        required=True,
        help="Video duration in seconds",
    )
    parser.add_argument("--text", default=SmokeTestConfig.text, help="Text to speak")
    parser.add_argument("--speaker", default=None, help="TTS speaker id")
    parser.add_argument("--token", default=None, help="Pixverse token (default: PIXVERSE_TOKEN)")
    parser.add_argument(
        "--timeout",
        type=int,
        default=600,
        help="Max seconds to wait for the job (default: 600)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SmokeTestConfig(
        video_path=args.video,
        duration=args.duration,
        text=args.text,
        speaker_id=args.speaker,
        token=args.token,
        timeout_seconds=args.timeout,
        verbose=args.verbose,
    )

    runner = SmokeTestRunner(config)
    success = asyncio.run(runner.run())

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
