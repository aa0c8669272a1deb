#!/usr/bin/env python3
"""Generate a synthetic test video for framecut strategy testing.

Produces a 20-second 320x240 @ 30fps clip with a burnt-in frame counter and a
440 Hz tone. The GOP is pinned so keyframes fall exactly every 2 seconds:

  keyframes at 0, 2, 4, ..., 18s

which makes the snapping of each strategy easy to check by eye, e.g.

  framecut extract -i synthetic.mp4 -s 3.5 -e 7.2 -o out.mp4 --strategy smart-copy

should start on frame 60 (the 2s keyframe).
"""

import subprocess
import sys
from pathlib import Path

DURATION = 20
FPS = 30
GOP_SECONDS = 2


def generate_test_video(output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)

    video_src = (
        f"testsrc2=s=320x240:d={DURATION}:r={FPS},"
        "drawtext=text='%{frame_num}':x=10:y=10:fontsize=32:fontcolor=white:box=1:boxcolor=black"
    )
    audio_src = f"sine=f=440:d={DURATION}"

    gop = FPS * GOP_SECONDS
    cmd = [
        "ffmpeg", "-y",
        "-f", "lavfi", "-i", video_src,
        "-f", "lavfi", "-i", audio_src,
        "-c:v", "libx264",
        "-g", str(gop),
        "-keyint_min", str(gop),
        "-sc_threshold", "0",
        "-pix_fmt", "yuv420p",
        "-c:a", "aac",
        "-shortest",
        str(output),
    ]
    subprocess.run(cmd, check=True)
    print(f"Generated: {output}")


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("tests/fixtures/synthetic.mp4")
    generate_test_video(out)
