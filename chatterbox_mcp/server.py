from dataclasses import dataclass

from mcp.server.fastmcp import FastMCP

from . import tools
from .config import SecretStore, Settings
from .health import ServerHealthProbe
from .pool import ServerPool
from .watcher import MissedMessageWatcher
from .whatsapp import WhatsAppService
from .youtube import YouTubeService

INSTRUCTIONS = """Chatterbox MCP: read and send WhatsApp messages, look up contacts, list chats, check the WhatsApp servers, and manage YouTube playlists.

All tools talk to the Chatterbox WhatsApp server. When several servers are configured the tools switch to the next healthy one automatically; use WhatsappServerStatus to see which one is active.

To message someone by name, call WhatsappRetrieveUser first and pass the returned WhatsApp ID as the phone number."""


@dataclass
class Services:
    """Everything the tools need, built once per process."""
    settings: Settings
    pool: ServerPool
    whatsapp: WhatsAppService
    youtube: YouTubeService


def build_services(settings: Settings) -> Services:
    # Both services share one pool so they always use the same server.
    secret = SecretStore(settings.secret)
    pool = ServerPool(ServerHealthProbe(secret), settings.server_urls)
    return Services(
        settings=settings,
        pool=pool,
        whatsapp=WhatsAppService(pool, secret),
        youtube=YouTubeService(pool, secret),
    )


def build_watcher(services: Services) -> MissedMessageWatcher:
    settings = services.settings
    return MissedMessageWatcher(
        services.whatsapp,
        settings.auto_response_numbers,
        admin_number=settings.admin_phone_number,
        interval=settings.check_interval_ms / 1000,
    )


def create_server(services: Services) -> FastMCP:
    mcp = FastMCP("chatterbox", instructions=INSTRUCTIONS)
    whatsapp = services.whatsapp
    youtube = services.youtube

    @mcp.tool(name="WhatsappReader")
    def whatsapp_reader(phone_number: str, number_of_records: int = 10) -> str:
        """A tool to retrieve WhatsApp messages.

        Args:
            phone_number: The phone number to use if we want to retrieve a message
            number_of_records: The total number of records to retrieve
        """
        return tools.read_messages(whatsapp, phone_number, number_of_records)

    @mcp.tool(name="WhatsappRetrieveUser")
    def whatsapp_retrieve_user(contact_name: str) -> str:
        """Look for a WhatsApp user by name and get back a WhatsApp ID that can be used as the phone number.

        Args:
            contact_name: The name of the contact to lookup
        """
        return tools.retrieve_user(whatsapp, contact_name)

    @mcp.tool(name="WhatsappSender")
    def whatsapp_sender(phone_number: str, message: str) -> str:
        """A tool to send WhatsApp messages.

        Args:
            phone_number: The phone number or WhatsApp ID to send the message to
            message: The message to send
        """
        return tools.send_message(whatsapp, phone_number, message)

    @mcp.tool(name="WhatsappHealthCheck")
    def whatsapp_health_check() -> str:
        """Check if the WhatsApp server is running and accessible."""
        return tools.health_check(whatsapp)

    @mcp.tool(name="WhatsappServerStatus")
    def whatsapp_server_status() -> str:
        """Get detailed status of all configured WhatsApp servers."""
        return tools.server_status(whatsapp)

    @mcp.tool(name="WhatsappGetAllContacts")
    def whatsapp_get_all_contacts() -> str:
        """Get all WhatsApp contacts."""
        return tools.get_all_contacts(whatsapp)

    @mcp.tool(name="WhatsappGetAllChats")
    def whatsapp_get_all_chats() -> str:
        """Get all WhatsApp chats with unread count."""
        return tools.get_all_chats(whatsapp)

    @mcp.tool(name="youtubeCreatePlaylist")
    def youtube_create_playlist(playlist_name: str) -> str:
        """Create a YouTube playlist.

        Args:
            playlist_name: The name of the playlist to create
        """
        return tools.create_playlist(youtube, playlist_name)

    @mcp.tool(name="youtubeGetPlaylists")
    def youtube_get_playlists() -> str:
        """Retrieve a list of all user YouTube playlists."""
        return tools.get_playlists(youtube)

    @mcp.tool(name="youtubeGetPlaylistSongs")
    def youtube_get_playlist_songs(playlist_id: str) -> str:
        """Retrieve the songs of a specific YouTube playlist.

        Args:
            playlist_id: The ID of the playlist to retrieve songs from
        """
        return tools.get_playlist_songs(youtube, playlist_id)

    @mcp.tool(name="youtubeAddSong")
    def youtube_add_song(playlist_id: str, song_name: str) -> str:
        """Add a song to a specific playlist.

        Args:
            playlist_id: The ID of the playlist to add the song to
            song_name: The name of the song to add
        """
        return tools.add_song(youtube, playlist_id, song_name)

    @mcp.tool(name="youtubeDeleteSong")
    def youtube_delete_song(playlist_id: str, song_name: str) -> str:
        """Delete a song from a specific playlist.

        Args:
            playlist_id: The ID of the playlist to delete the song from
            song_name: The exact title of the song to delete
        """
        return tools.delete_song(youtube, playlist_id, song_name)

    return mcp
