"""SSEEvent — one Server-Sent Events frame.

The push stream writes these; the test client parses them back.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SSEEvent:
    """A single Server-Sent Event."""

    data: str
    event: str | None = None
    id: str | None = None
    retry: int | None = None

    def encode(self) -> str:
        """Serialize to SSE wire format.

        A one-line payload with no other fields encodes as
        ``"data: <payload>\\n\\n"``. Multi-line payloads get one
        ``data:`` line per line, which clients join back with ``\\n``.
        """
        lines: list[str] = []
        if self.event:
            lines.append(f"event: {self.event}")
        if self.id:
            lines.append(f"id: {self.id}")
        if self.retry is not None:
            lines.append(f"retry: {self.retry}")
        lines.extend(f"data: {line}" for line in self.data.split("\n"))
        lines.append("")
        return "\n".join(lines) + "\n"
