"""Render port and its terminal, headless and recording implementations."""

from .interfaces import CandidateView, RenderPortProtocol
from .layout import GridLayout, frame_text, summary_text
from .recording import HeadlessRenderer, RecordedFrame, RecordingRenderer
from .terminal import TerminalRenderer

__all__ = [
    "CandidateView",
    "GridLayout",
    "HeadlessRenderer",
    "RecordedFrame",
    "RecordingRenderer",
    "RenderPortProtocol",
    "TerminalRenderer",
    "frame_text",
    "summary_text",
]
