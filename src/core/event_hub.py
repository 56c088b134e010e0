import logging
from typing import Callable, Dict, List, Any

logger = logging.getLogger(__name__)

# Topics
SAMPLE_RECEIVED = "sample_received"      # message: (device_id, LocationRecord)
TELEMETRY_CLEARED = "telemetry_cleared"  # message: None


class EventHub:
    """
    Topic based pub/sub between the telemetry ingress and its consumers.
    Handlers are plain callables, called as handler(topic, message) in the
    publisher's thread before send_all_on_topic returns.
    """
    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}

    def subscribe(self, topic: str, handler: Callable):
        if topic not in self._subscribers:
            self._subscribers[topic] = []
        if handler not in self._subscribers[topic]:
            self._subscribers[topic].append(handler)
        logger.debug(f"Subscribed to {topic}")

    def unsubscribe(self, topic: str, handler: Callable):
        if topic in self._subscribers:
            if handler in self._subscribers[topic]:
                self._subscribers[topic].remove(handler)
                logger.debug(f"Unsubscribed from {topic}")

    def send_all_on_topic(self, topic: str, message: Any):
        if topic not in self._subscribers:
            return
        # Copy so handlers may unsubscribe while we iterate
        handlers = self._subscribers[topic][:]
        for handler in handlers:
            try:
                handler(topic, message)
            except Exception as e:
                logger.error(f"Error handling message on topic {topic}: {e}")


# Global instance
event_hub = EventHub()
