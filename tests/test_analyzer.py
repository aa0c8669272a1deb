"""Tests for the ffprobe-backed video analyzer and keyframe helpers."""

import json
from unittest.mock import patch

import pytest

from framecut.analyzer import (
    NoVideoStreamError,
    analyze,
    estimate_keyframe_interval,
    find_nearest_keyframe,
    find_previous_keyframe,
    get_keyframes,
)

STREAM_JSON = {
    "streams": [
        {
            "codec_name": "h264",
            "width": 1920,
            "height": 1080,
            "r_frame_rate": "30000/1001",
            "duration": "12.5",
            "nb_frames": "375",
        }
    ]
}

FORMAT_JSON = {"format": {"duration": "13.0"}}


# ---------------------------------------------------------------------------
# analyze (mocked ffprobe)
# ---------------------------------------------------------------------------

class TestAnalyze:
    @patch("framecut.analyzer.ffutil.run_ffprobe")
    def test_basic(self, mock_probe):
        mock_probe.side_effect = [json.dumps(STREAM_JSON), json.dumps(FORMAT_JSON)]
        info = analyze("video.mp4")

        assert info.file == "video.mp4"
        assert info.width == 1920
        assert info.height == 1080
        assert info.codec == "h264"
        assert info.framerate == pytest.approx(29.97, abs=0.01)
        assert info.duration == 12.5
        assert info.keyframes is None
        assert info.keyframe_interval is None

    @patch("framecut.analyzer.ffutil.run_ffprobe")
    def test_selects_first_video_stream(self, mock_probe):
        mock_probe.side_effect = [json.dumps(STREAM_JSON), json.dumps(FORMAT_JSON)]
        analyze("video.mp4")

        stream_args = mock_probe.call_args_list[0][0][0]
        assert "-select_streams" in stream_args
        assert stream_args[stream_args.index("-select_streams") + 1] == "v:0"
        assert stream_args[-1] == "video.mp4"

    @patch("framecut.analyzer.ffutil.run_ffprobe")
    def test_duration_falls_back_to_format(self, mock_probe):
        stream = dict(STREAM_JSON["streams"][0])
        del stream["duration"]
        mock_probe.side_effect = [json.dumps({"streams": [stream]}), json.dumps(FORMAT_JSON)]
        assert analyze("video.mkv").duration == 13.0

    @patch("framecut.analyzer.ffutil.run_ffprobe")
    def test_zero_denominator_defaults_to_one(self, mock_probe):
        stream = dict(STREAM_JSON["streams"][0], r_frame_rate="25/0")
        mock_probe.side_effect = [json.dumps({"streams": [stream]}), json.dumps(FORMAT_JSON)]
        assert analyze("video.mp4").framerate == 25.0

    @patch("framecut.analyzer.ffutil.run_ffprobe")
    def test_no_video_stream(self, mock_probe):
        mock_probe.return_value = json.dumps({"streams": []})
        with pytest.raises(NoVideoStreamError, match="No video stream"):
            analyze("audio.m4a")
        assert mock_probe.call_count == 1


# ---------------------------------------------------------------------------
# get_keyframes (mocked ffprobe)
# ---------------------------------------------------------------------------

class TestGetKeyframes:
    @patch("framecut.analyzer.ffutil.run_ffprobe")
    def test_filters_and_sorts(self, mock_probe):
        frames = [
            {"key_frame": 1, "pts_time": "4.000000"},
            {"key_frame": 0, "pts_time": "0.033333"},
            {"key_frame": 1, "pts_time": "0.000000"},
            {"key_frame": 0, "pts_time": "2.100000"},
            {"key_frame": 1, "pts_time": "2.000000"},
        ]
        mock_probe.return_value = json.dumps({"frames": frames})
        assert get_keyframes("video.mp4") == [0.0, 2.0, 4.0]

    @patch("framecut.analyzer.ffutil.run_ffprobe")
    def test_legacy_pkt_pts_time(self, mock_probe):
        frames = [
            {"key_frame": 1, "pkt_pts_time": "0.0"},
            {"key_frame": 1, "pkt_pts_time": "1.5"},
        ]
        mock_probe.return_value = json.dumps({"frames": frames})
        assert get_keyframes("video.mp4") == [0.0, 1.5]

    @patch("framecut.analyzer.ffutil.run_ffprobe")
    def test_skips_frames_without_timestamp(self, mock_probe):
        frames = [
            {"key_frame": 1, "pts_time": "N/A"},
            {"key_frame": 1},
            {"key_frame": 1, "pts_time": "3.0"},
        ]
        mock_probe.return_value = json.dumps({"frames": frames})
        assert get_keyframes("video.mp4") == [3.0]

    @patch("framecut.analyzer.ffutil.run_ffprobe")
    def test_no_frames(self, mock_probe):
        mock_probe.return_value = "{}"
        assert get_keyframes("video.mp4") == []


# ---------------------------------------------------------------------------
# Keyframe lookups (pure)
# ---------------------------------------------------------------------------

class TestFindPreviousKeyframe:
    KEYFRAMES = [0.5, 1.0, 2.5, 10.0]

    def test_between_keyframes(self):
        assert find_previous_keyframe(2.0, self.KEYFRAMES) == 1.0

    def test_exact_match(self):
        assert find_previous_keyframe(10.0, self.KEYFRAMES) == 10.0

    def test_after_last(self):
        assert find_previous_keyframe(99.0, self.KEYFRAMES) == 10.0

    def test_none_qualifies_returns_stream_start(self):
        assert find_previous_keyframe(2.0, [3.0, 4.0]) == 0


class TestFindNearestKeyframe:
    KEYFRAMES = [1.0, 3.0, 6.0, 8.0]

    def test_snaps_down(self):
        assert find_nearest_keyframe(2.1, self.KEYFRAMES) == 3.0

    def test_snaps_up(self):
        assert find_nearest_keyframe(7.7, self.KEYFRAMES) == 8.0

    def test_tie_prefers_earlier(self):
        assert find_nearest_keyframe(2.0, self.KEYFRAMES) == 1.0

    def test_before_first(self):
        assert find_nearest_keyframe(0.0, self.KEYFRAMES) == 1.0


class TestEstimateKeyframeInterval:
    def test_median_gap(self):
        assert estimate_keyframe_interval([0, 2, 4, 7]) == 2

    def test_even_gap_count_takes_index_half_length(self):
        # gaps sorted [1, 2, 3, 4]; index 2
        assert estimate_keyframe_interval([0, 1, 3, 6, 10]) == 3

    def test_single_keyframe_default(self):
        assert estimate_keyframe_interval([0.0]) == 2.0

    def test_empty_default(self):
        assert estimate_keyframe_interval([]) == 2.0

    def test_only_first_twenty_sampled(self):
        keyframes = [float(i) for i in range(20)] + [100.0, 200.0, 300.0]
        assert estimate_keyframe_interval(keyframes) == 1.0
