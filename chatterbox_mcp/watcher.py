import logging
from typing import Dict, List

from .formatting import format_message
from .scheduler import PeriodicTask
from .whatsapp import WhatsAppService

logger = logging.getLogger(__name__)

MESSAGES_TO_CHECK = 10


class MissedMessageWatcher:
    """Polls a set of chats and tells the admin about unanswered messages.

    Each unanswered message is reported once; the watcher remembers the
    timestamp of the last message it reported per number.
    """

    def __init__(self, whatsapp: WhatsAppService, numbers: List[str], admin_number: str = "", interval: float = 60):
        self.whatsapp = whatsapp
        self.numbers = [n.strip() for n in numbers if n.strip()]
        self.admin_number = admin_number.strip()
        self.task = PeriodicTask(interval, self.check, name="missed-message-watcher")
        self._notified: Dict[str, int] = {}

    def start(self) -> None:
        self.task.start()

    def stop(self) -> None:
        self.task.stop()

    def check(self) -> None:
        if not self.numbers:
            logger.info("No auto response numbers configured, stopping the missed message watcher")
            self.task.stop()
            return

        logger.info(f"Auto response numbers configured: {', '.join(self.numbers)}")
        for number in self.numbers:
            try:
                self.check_number(number)
            except Exception:
                logger.exception(f"Failed to check messages for {number}")

    def check_number(self, number: str) -> None:
        result = self.whatsapp.get_messages(number, MESSAGES_TO_CHECK)
        last = result.last
        if not result.has_new_messages or last is None:
            return

        logger.info(f"Missed messages for {number}: {len(result.messages)} fetched, last from {last.sender}")
        if not self.admin_number or self.admin_number == number:
            return
        if self._notified.get(number) == last.timestamp:
            return

        self.whatsapp.send_message(self.admin_number, f"New messages for {number}: {format_message(last)}")
        self._notified[number] = last.timestamp
