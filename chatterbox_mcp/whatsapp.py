import logging
from typing import List, Optional
from urllib.parse import quote

from .client import FailoverClient
from .config import SecretStore
from .models import Chat, Contact, HealthResult, MissedMessages
from .pool import ServerPool

logger = logging.getLogger(__name__)

WHATSAPP_PREFIX = "/api/whatsapp"


def _segment(value) -> str:
    # WhatsApp ids look like 27820000000@c.us
    return quote(str(value), safe="@")


class WhatsAppService:
    """WhatsApp endpoints of the WhatsApp server."""

    def __init__(self, pool: ServerPool, secret: SecretStore):
        self.pool = pool
        self.secret = secret
        self.client = FailoverClient(pool, secret, base_prefix=WHATSAPP_PREFIX)

    def get_messages(self, phone_number: str, number_of_records) -> MissedMessages:
        """Get the latest messages of a chat.

        Args:
            phone_number: Phone number or WhatsApp id of the chat
            number_of_records: How many messages to fetch
        """
        endpoint = f"/missedMessages/{_segment(phone_number)}/{_segment(number_of_records)}"
        response = self.client.call(endpoint, method="GET")
        return MissedMessages.from_dict(response.json())

    def lookup_contact(self, contact_name: str) -> str:
        """Return the WhatsApp id of the first contact whose name matches."""
        response = self.client.call(
            f"/lookupContact/{_segment(contact_name)}",
            method="GET",
            headers={"Content-Type": "application/json"},
        )
        return response.json().get("whatsAppId", "")

    def send_message(self, phone_number: str, message: str) -> str:
        """Send a text message and return the server's confirmation text."""
        response = self.client.call(
            f"/sendMessage/{_segment(phone_number)}",
            method="POST",
            headers={"Content-Type": "application/json"},
            body={"message": message},
        )
        return response.text

    def get_all_contacts(self) -> List[Contact]:
        response = self.client.call("/getAllContacts", method="GET")
        return [Contact.from_dict(c) for c in response.json().get("contacts") or []]

    def get_all_chats(self) -> List[Chat]:
        response = self.client.call("/getAllChats", method="GET")
        return [Chat.from_dict(c) for c in response.json().get("chats") or []]

    def get_server_health(self) -> bool:
        """Probe the active server, selecting one first if needed."""
        if not self.pool.is_initialized:
            self.pool.select_initial()
        return self.pool.probe.probe(self.pool.active_url)

    def get_all_servers_health(self) -> List[HealthResult]:
        return self.pool.probe.probe_all(self.pool.urls)

    def get_current_server_url(self) -> str:
        return self.pool.active_url

    def get_available_server_urls(self) -> List[str]:
        return self.pool.urls

    def update_configuration(self, server_urls: Optional[str] = None, secret: Optional[str] = None) -> None:
        """Replace the server list and/or the shared secret.

        A new server list forgets the active server, so the next call probes
        the candidates again.
        """
        if server_urls:
            self.pool.configure(server_urls)
            logger.info(f"WhatsApp servers reconfigured: {', '.join(self.pool.urls)}")
        if secret:
            self.secret.update(secret)
