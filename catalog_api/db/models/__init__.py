from catalog_api.db.models.user import User
from catalog_api.db.models.artist import Artist, ArtistFollow
from catalog_api.db.models.album import Album, SavedAlbum
from catalog_api.db.models.song import Song, SongLike
from catalog_api.db.models.playlist import Playlist, PlaylistSong, PlaylistFollow, PlaylistCollaborator

__all__ = [
    "User",
    "Artist",
    "ArtistFollow",
    "Album",
    "SavedAlbum",
    "Song",
    "SongLike",
    "Playlist",
    "PlaylistSong",
    "PlaylistFollow",
    "PlaylistCollaborator",
]
