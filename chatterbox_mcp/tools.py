"""Tool bodies behind the MCP server.

Every function returns text. Errors never escape: they are logged and
turned into an ``Error <action>: <message>`` string for the agent.
"""

import functools
import logging
from typing import Callable

from .formatting import (
    format_chats,
    format_contacts,
    format_error,
    format_health,
    format_messages_list,
    format_playlist_songs,
    format_playlists,
    format_server_status,
)
from .whatsapp import WhatsAppService
from .youtube import DEFAULT_PLAYLIST_DESCRIPTION, YouTubeService

logger = logging.getLogger(__name__)


def returns_error_text(action: str) -> Callable:
    def decorator(func: Callable[..., str]) -> Callable[..., str]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> str:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error {action}: {e}")
                return format_error(action, e)
        return wrapper
    return decorator


@returns_error_text("fetching WhatsApp messages")
def read_messages(whatsapp: WhatsAppService, phone_number: str, number_of_records: int) -> str:
    result = whatsapp.get_messages(phone_number, number_of_records)
    return format_messages_list(result, phone_number)


@returns_error_text("looking up contact")
def retrieve_user(whatsapp: WhatsAppService, contact_name: str) -> str:
    return whatsapp.lookup_contact(contact_name)


@returns_error_text("sending WhatsApp message")
def send_message(whatsapp: WhatsAppService, phone_number: str, message: str) -> str:
    if not phone_number:
        return "Recipient must be provided"
    return whatsapp.send_message(phone_number, message)


@returns_error_text("checking WhatsApp server health")
def health_check(whatsapp: WhatsAppService) -> str:
    healthy = whatsapp.get_server_health()
    return format_health(healthy, whatsapp.get_current_server_url())


@returns_error_text("checking server status")
def server_status(whatsapp: WhatsAppService) -> str:
    results = whatsapp.get_all_servers_health()
    return format_server_status(results, whatsapp.get_current_server_url())


@returns_error_text("getting all contacts")
def get_all_contacts(whatsapp: WhatsAppService) -> str:
    return format_contacts(whatsapp.get_all_contacts())


@returns_error_text("getting all chats")
def get_all_chats(whatsapp: WhatsAppService) -> str:
    return format_chats(whatsapp.get_all_chats())


@returns_error_text("creating playlist")
def create_playlist(youtube: YouTubeService, playlist_name: str) -> str:
    return youtube.create_playlist(playlist_name, DEFAULT_PLAYLIST_DESCRIPTION)


@returns_error_text("retrieving playlists")
def get_playlists(youtube: YouTubeService) -> str:
    return format_playlists(youtube.get_playlists())


@returns_error_text("retrieving playlist songs")
def get_playlist_songs(youtube: YouTubeService, playlist_id: str) -> str:
    return format_playlist_songs(youtube.get_playlist_songs(playlist_id), playlist_id)


@returns_error_text("adding song")
def add_song(youtube: YouTubeService, playlist_id: str, song_name: str) -> str:
    return youtube.add_song(playlist_id, song_name)


@returns_error_text("deleting song")
def delete_song(youtube: YouTubeService, playlist_id: str, song_name: str) -> str:
    return youtube.delete_song(playlist_id, song_name)
