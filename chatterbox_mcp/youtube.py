import logging
from typing import Any, List
from urllib.parse import quote

from .client import FailoverClient
from .config import SecretStore
from .models import Playlist, PlaylistItem
from .pool import ServerPool

logger = logging.getLogger(__name__)

YOUTUBE_PREFIX = "/api/youtube"
DEFAULT_PLAYLIST_DESCRIPTION = "A new playlist"


def _items(data: Any, key: str) -> List[dict]:
    """The server answers either ``{key: [...]}`` or the bare list."""
    if isinstance(data, dict):
        data = data.get(key, data)
    return [item for item in data if isinstance(item, dict)] if isinstance(data, list) else []


class YouTubeService:
    """YouTube playlist endpoints of the WhatsApp server."""

    def __init__(self, pool: ServerPool, secret: SecretStore):
        self.client = FailoverClient(pool, secret, base_prefix=YOUTUBE_PREFIX)

    def create_playlist(self, title: str, description: str = DEFAULT_PLAYLIST_DESCRIPTION) -> str:
        response = self.client.call(
            "/playlist",
            method="POST",
            headers={"Content-Type": "application/json"},
            body={"playlistName": title, "description": description},
        )
        data = response.json()
        logger.info(f"Response from the server: {data}")
        return data.get("message", "")

    def get_playlists(self) -> List[Playlist]:
        response = self.client.call("/playlist", method="GET")
        return [Playlist.from_dict(p) for p in _items(response.json(), "playlist")]

    def get_playlist_songs(self, playlist_id: str) -> List[PlaylistItem]:
        response = self.client.call(f"/playlist/{quote(playlist_id, safe='')}/songs", method="GET")
        return [PlaylistItem.from_dict(s) for s in _items(response.json(), "songs")]

    def add_song(self, playlist_id: str, song_name: str) -> str:
        """Search YouTube for ``song_name`` and add the first hit to the playlist."""
        return self._song_action(playlist_id, "add-song", song_name)

    def delete_song(self, playlist_id: str, song_name: str) -> str:
        """Remove the playlist item whose title is exactly ``song_name``."""
        return self._song_action(playlist_id, "delete-song", song_name)

    def _song_action(self, playlist_id: str, action: str, song_name: str) -> str:
        response = self.client.call(
            f"/playlist/{quote(playlist_id, safe='')}/{action}",
            method="POST",
            headers={"Content-Type": "application/json"},
            body={"songName": song_name},
        )
        data = response.json()
        logger.info(f"Response from server: {data}")
        return data.get("message", "")
