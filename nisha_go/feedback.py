"""Fire-and-forget sinks for sound and visual feedback.

The simulation emits events and never looks at what a sink does with them.
Sinks that aren't wired to anything fall back to NullFeedback.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class FeedbackEvent(Enum):
    MOVED = "moved"
    COLLECTED = "collected"
    COLLIDED = "collided"
    GAME_STARTED = "game_started"
    GAME_OVER = "game_over"
    MOMENTUM_LOW = "momentum_low"


class FeedbackSink:
    def __init__(self, enabled=True):
        self.enabled = enabled

    def emit(self, event, **payload):
        if not self.enabled:
            return
        self.handle(event, payload)

    def handle(self, event, payload):
        raise NotImplementedError

    def toggle(self):
        self.enabled = not self.enabled
        logger.info("Feedback %s", "enabled" if self.enabled else "muted")
        return self.enabled


class NullFeedback(FeedbackSink):
    def handle(self, event, payload):
        pass


class RecordingFeedback(FeedbackSink):
    """Keeps every event it receives, in order."""

    def __init__(self, enabled=True):
        super().__init__(enabled)
        self.events = []

    def handle(self, event, payload):
        self.events.append((event, payload))

    def count(self, event):
        return sum(1 for e, _ in self.events if e is event)

    def drain(self):
        events, self.events = self.events, []
        return events
