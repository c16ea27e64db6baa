"""Text layouts returned to the agent by the MCP tools."""

from typing import List

from .models import Chat, Contact, HealthResult, MessageData, MissedMessages, Playlist, PlaylistItem

PREVIEW_LENGTH = 50


def format_message(message: MessageData) -> str:
    return f"[{message.timestamp}] {message.sender} : {message.body}"


def format_messages_list(result: MissedMessages, target: str) -> str:
    """Render fetched messages, and ask for a reply when the last one is unanswered."""
    if result.messages:
        body = "\r\n".join(format_message(m) for m in result.messages)
    else:
        body = "No messages found"
    output = f"Last {len(result.messages)} WhatsApp messages for {target} were:\r\n {body}"

    if result.has_new_messages and result.last is not None:
        output += f"\n\nYou need to respond to the last message from {result.last.sender}"
    return output


def format_contacts(contacts: List[Contact]) -> str:
    output = "All WhatsApp Contacts:\n\n"
    for contact in contacts:
        output += f"• {contact.display_name} ({contact.phone}) - ID: {contact.id}\n"
    return output


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    return text[:length] + ("..." if len(text) > length else "")


def format_chats(chats: List[Chat]) -> str:
    """Unread chats first, with a preview of their last message, then every chat."""
    output = "All WhatsApp Chats:\n\n"

    unread = [chat for chat in chats if chat.unread_count > 0]
    if unread:
        output += "📱 CHATS WITH UNREAD MESSAGES:\n"
        for chat in unread:
            output += f"• {chat.name} - {chat.unread_count} unread messages\n"
            if chat.last_message:
                output += f'  Last: "{preview(chat.last_message)}"\n'
        output += "\n"

    output += "📂 ALL CHATS:\n"
    for chat in chats:
        badge = f" ({chat.unread_count} unread)" if chat.unread_count > 0 else ""
        output += f"• {chat.name}{badge}\n"
    return output


def format_playlists(playlists: List[Playlist]) -> str:
    if not playlists:
        return "No playlists found."
    output = "YouTube Playlists:\n\n"
    for playlist in playlists:
        output += f"• {playlist.title} (ID: {playlist.id})\n"
    return output


def format_playlist_songs(songs: List[PlaylistItem], playlist_id: str) -> str:
    if not songs:
        return "No songs found in this playlist."
    output = f"Songs in Playlist ({playlist_id}):\n\n"
    for idx, song in enumerate(songs, start=1):
        output += f"{idx}. {song.title} (ID: {song.id})\n"
    return output


def format_health(healthy: bool, url: str) -> str:
    if healthy:
        return f"WhatsApp server is healthy and accessible at: {url}"
    return f"WhatsApp server is not accessible at: {url}"


def format_server_status(results: List[HealthResult], current_url: str) -> str:
    output = "WhatsApp Server Status:\n\n"
    output += f"Current Active Server: {current_url}\n\n"
    output += "All Configured Servers:\n"
    for result in results:
        status = "✅ HEALTHY" if result.healthy else "❌ UNHEALTHY"
        active = " (ACTIVE)" if result.url == current_url else ""
        output += f"- {result.url}: {status}{active}\n"
    return output


def format_error(action: str, error: BaseException) -> str:
    return f"Error {action}: {str(error) or 'Unknown error'}"
