"""Tests for the SSE frame parser in glint.testing.sse."""

from glint.testing.sse import parse_sse_frames


class TestParseSSEFrames:
    def test_single_data_event(self) -> None:
        events = parse_sse_frames("data: hello\n\n")
        assert len(events) == 1
        assert events[0].data == "hello"
        assert events[0].event is None

    def test_multiple_events(self) -> None:
        events = parse_sse_frames("data: first\n\ndata: second\n\n")
        assert [e.data for e in events] == ["first", "second"]

    def test_multiline_data(self) -> None:
        events = parse_sse_frames("data: line1\ndata: line2\n\n")
        assert events[0].data == "line1\nline2"

    def test_error_frame(self) -> None:
        events = parse_sse_frames("data: Error: broken: invalid template\n\n")
        assert events[0].data.startswith("Error: ")

    def test_comments_ignored(self) -> None:
        events = parse_sse_frames(": keepalive\n\ndata: payload\n\n")
        assert len(events) == 1
        assert events[0].data == "payload"

    def test_incomplete_trailing_frame_still_parsed(self) -> None:
        events = parse_sse_frames("data: one\n\ndata: tw")
        assert [e.data for e in events] == ["one", "tw"]

    def test_empty_input(self) -> None:
        assert parse_sse_frames("") == []

    def test_id_and_retry(self) -> None:
        events = parse_sse_frames("id: 3\nretry: 500\ndata: x\n\n")
        assert events[0].id == "3"
        assert events[0].retry == 500

    def test_bad_retry_ignored(self) -> None:
        events = parse_sse_frames("retry: soon\ndata: x\n\n")
        assert events[0].retry is None
