"""
Tests for the /api/v1/playlists endpoints.

These tests verify:
- Creator-only update/delete/collaborator management
- Creator-or-collaborator song membership, idempotent adds
- Private playlist visibility
- Follow/unfollow counter transactions
"""

import pytest
from fastapi.testclient import TestClient

from catalog_api.db.models import Playlist, PlaylistFollow, PlaylistSong, User
from catalog_api.services.playlist_service import playlist_service
from conftest import auth_header, make_user

API = "/api/v1/playlists"


@pytest.fixture
def songs(make_artist, make_song):
    artist = make_artist()
    return [make_song(artist, title=f"track {i}") for i in range(3)]


@pytest.fixture
def playlist(make_playlist, user: User) -> Playlist:
    return make_playlist(user)


# =============================================================================
# Create / update / delete
# =============================================================================


class TestPlaylistCrud:
    """Tests for playlist lifecycle."""

    def test_create_defaults(self, client: TestClient, user: User, user_headers: dict) -> None:
        response = client.post(API, json={"name": " 'Focus' ", "description": "deep work"}, headers=user_headers)
        assert response.status_code == 201
        playlist = response.json()["playlist"]
        assert playlist["name"] == "Focus"
        assert playlist["description"] == "deep work"
        assert playlist["isPublic"] is True
        assert playlist["followerCount"] == 0
        assert playlist["creatorId"] == user.id
        assert playlist["creator"]["username"] == user.username

    def test_create_requires_name(self, client: TestClient, user_headers: dict) -> None:
        response = client.post(API, json={"name": "   "}, headers=user_headers)
        assert response.status_code == 400

    def test_create_requires_auth(self, client: TestClient) -> None:
        assert client.post(API, json={"name": "x"}).status_code == 401

    def test_cover_upload(self, client: TestClient, user_headers: dict) -> None:
        response = client.post(
            API,
            data={"name": "Covered", "isPublic": "false"},
            files={"coverImage": ("cover.png", b"png", "image/png")},
            headers=user_headers,
        )
        assert response.status_code == 201
        playlist = response.json()["playlist"]
        assert playlist["coverImage"].startswith("https://cdn.test/catalog/playlists/")
        assert playlist["isPublic"] is False

    def test_update_by_creator(self, client: TestClient, playlist: Playlist, user_headers: dict) -> None:
        response = client.put(f"{API}/{playlist.id}", json={"description": "updated"}, headers=user_headers)
        assert response.status_code == 200
        body = response.json()["playlist"]
        assert body["description"] == "updated"
        assert body["name"] == playlist.name

    def test_update_by_other_user(self, client: TestClient, playlist: Playlist, other_headers: dict) -> None:
        response = client.put(f"{API}/{playlist.id}", json={"name": "hijack"}, headers=other_headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to update this playlist"

    def test_collaborator_cannot_update(self, client: TestClient, db, playlist: Playlist, user_headers: dict,
                                        other_user: User, other_headers: dict) -> None:
        client.post(f"{API}/{playlist.id}/collaborators", json={"userId": other_user.id}, headers=user_headers)
        response = client.put(f"{API}/{playlist.id}", json={"name": "mine now"}, headers=other_headers)
        assert response.status_code == 403

    def test_delete(self, client: TestClient, db, playlist: Playlist, user_headers: dict,
                    other_headers: dict) -> None:
        playlist_id = playlist.id
        assert client.delete(f"{API}/{playlist_id}", headers=other_headers).status_code == 403

        response = client.delete(f"{API}/{playlist_id}", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Playlist deleted successfully"
        db.expire_all()
        assert db.get(Playlist, playlist_id) is None

    def test_missing_playlist(self, client: TestClient, user_headers: dict) -> None:
        response = client.put(f"{API}/999", json={"name": "x"}, headers=user_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Playlist not found"


# =============================================================================
# Songs
# =============================================================================


class TestPlaylistSongs:
    """Tests for song membership."""

    def test_add_songs_idempotent(self, client: TestClient, playlist: Playlist, songs, user_headers: dict) -> None:
        ids = [songs[0].id, songs[1].id]
        response = client.post(f"{API}/{playlist.id}/songs", json={"songIds": ids}, headers=user_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Successfully added 2 song(s) to playlist"

        response = client.post(
            f"{API}/{playlist.id}/songs", json={"songIds": [songs[1].id, songs[2].id]}, headers=user_headers
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Successfully added 1 song(s) to playlist"
        members = [entry["songId"] for entry in response.json()["playlist"]["songs"]]
        assert members == [songs[0].id, songs[1].id, songs[2].id]
        assert response.json()["playlist"]["songCount"] == 3

    def test_outsider_gets_403_and_nothing_changes(self, client: TestClient, db, playlist: Playlist, songs,
                                                   other_headers: dict) -> None:
        response = client.post(f"{API}/{playlist.id}/songs", json={"songIds": [songs[0].id]}, headers=other_headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to modify this playlist"
        assert db.query(PlaylistSong).filter(PlaylistSong.playlist_id == playlist.id).count() == 0

    def test_collaborator_can_add_and_remove(self, client: TestClient, playlist: Playlist, songs,
                                             user_headers: dict, other_user: User, other_headers: dict) -> None:
        response = client.post(
            f"{API}/{playlist.id}/collaborators", json={"userId": other_user.id}, headers=user_headers
        )
        assert response.status_code == 200
        assert [c["id"] for c in response.json()["playlist"]["collaborators"]] == [other_user.id]

        response = client.post(f"{API}/{playlist.id}/songs", json={"songIds": [songs[0].id]}, headers=other_headers)
        assert response.status_code == 200

        response = client.delete(f"{API}/{playlist.id}/songs/{songs[0].id}", headers=other_headers)
        assert response.status_code == 200
        assert response.json()["playlist"]["songs"] == []

    def test_unknown_songs(self, client: TestClient, playlist: Playlist, songs, user_headers: dict) -> None:
        response = client.post(
            f"{API}/{playlist.id}/songs", json={"songIds": [songs[0].id, 4242]}, headers=user_headers
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Songs not found: 4242"

    def test_invalid_song_ids(self, client: TestClient, playlist: Playlist, user_headers: dict) -> None:
        response = client.post(f"{API}/{playlist.id}/songs", json={"songIds": ["abc"]}, headers=user_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid song ID: abc"

    def test_checks_run_before_body_validation(self, client: TestClient, playlist: Playlist,
                                               other_headers: dict) -> None:
        bad_body = {"songIds": ["abc"]}
        response = client.post(f"{API}/999/songs", json=bad_body, headers=other_headers)
        assert response.status_code == 404

        response = client.post(f"{API}/{playlist.id}/songs", json=bad_body, headers=other_headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to modify this playlist"

    def test_concurrent_add_retries_without_duplicate(self, client: TestClient, playlist: Playlist, songs,
                                                      user_headers: dict, monkeypatch) -> None:
        first, second = songs[0].id, songs[1].id
        client.post(f"{API}/{playlist.id}/songs", json={"songIds": [first]}, headers=user_headers)

        # First lookup misses the existing row, as if another request inserted it meanwhile
        lookup = playlist_service._present_song_ids
        calls = []

        def stale_then_fresh(db, playlist_id, song_ids):
            calls.append(playlist_id)
            return set() if len(calls) == 1 else lookup(db, playlist_id, song_ids)

        monkeypatch.setattr(playlist_service, "_present_song_ids", stale_then_fresh)

        response = client.post(f"{API}/{playlist.id}/songs", json={"songIds": [first, second]}, headers=user_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Successfully added 1 song(s) to playlist"
        assert [entry["songId"] for entry in response.json()["playlist"]["songs"]] == [first, second]
        assert len(calls) == 2

    def test_remove_song_not_member(self, client: TestClient, playlist: Playlist, songs, user_headers: dict) -> None:
        response = client.delete(f"{API}/{playlist.id}/songs/{songs[0].id}", headers=user_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Song is not in this playlist"


# =============================================================================
# Collaborators
# =============================================================================


class TestCollaborators:
    """Only the creator manages collaborators."""

    def test_creator_cannot_be_collaborator(self, client: TestClient, playlist: Playlist, user: User,
                                            user_headers: dict) -> None:
        response = client.post(f"{API}/{playlist.id}/collaborators", json={"userId": user.id}, headers=user_headers)
        assert response.status_code == 400

    def test_duplicate_collaborator(self, client: TestClient, playlist: Playlist, other_user: User,
                                    user_headers: dict) -> None:
        url = f"{API}/{playlist.id}/collaborators"
        assert client.post(url, json={"userId": other_user.id}, headers=user_headers).status_code == 200
        assert client.post(url, json={"userId": other_user.id}, headers=user_headers).status_code == 400

    def test_unknown_user(self, client: TestClient, playlist: Playlist, user_headers: dict) -> None:
        response = client.post(f"{API}/{playlist.id}/collaborators", json={"userId": 999}, headers=user_headers)
        assert response.status_code == 404

    def test_only_creator_manages(self, client: TestClient, db, playlist: Playlist, user_headers: dict,
                                  other_user: User, other_headers: dict) -> None:
        third = make_user(db, "third@example.com", username="third")
        response = client.post(f"{API}/{playlist.id}/collaborators", json={"userId": third.id}, headers=other_headers)
        assert response.status_code == 403

        client.post(f"{API}/{playlist.id}/collaborators", json={"userId": other_user.id}, headers=user_headers)
        response = client.delete(f"{API}/{playlist.id}/collaborators/{other_user.id}", headers=other_headers)
        assert response.status_code == 403

        response = client.delete(f"{API}/{playlist.id}/collaborators/{other_user.id}", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["playlist"]["collaborators"] == []


# =============================================================================
# Visibility
# =============================================================================


class TestVisibility:
    """Private playlists are hidden from everyone but their members."""

    def test_public_listing_excludes_private(self, client: TestClient, user: User, make_playlist) -> None:
        make_playlist(user, name="Open")
        make_playlist(user, name="Secret", is_public=False)
        names = [p["name"] for p in client.get(API).json()["playlists"]]
        assert names == ["Open"]

    def test_private_playlist_access(self, client: TestClient, db, user: User, user_headers: dict,
                                     other_user: User, other_headers: dict, make_playlist) -> None:
        secret = make_playlist(user, name="Secret", is_public=False)
        url = f"{API}/{secret.id}"

        assert client.get(url).status_code == 404
        assert client.get(url, headers=other_headers).status_code == 404
        assert client.get(url, headers=user_headers).status_code == 200

        client.post(f"{url}/collaborators", json={"userId": other_user.id}, headers=user_headers)
        assert client.get(url, headers=other_headers).status_code == 200

    def test_my_playlists(self, client: TestClient, user: User, other_user: User, user_headers: dict,
                          make_playlist) -> None:
        make_playlist(user, name="Mine", is_public=False)
        make_playlist(other_user, name="Theirs")
        data = client.get(f"{API}/user/me", headers=user_headers).json()
        assert data["count"] == 1
        assert data["playlists"][0]["name"] == "Mine"


# =============================================================================
# Follow / unfollow
# =============================================================================


class TestFollow:
    """Follower counter and join row move together."""

    def test_follow_then_unfollow(self, client: TestClient, db, playlist: Playlist, other_headers: dict) -> None:
        response = client.post(f"{API}/{playlist.id}/follow", headers=other_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Playlist followed successfully"
        assert response.json()["playlist"]["followerCount"] == 1

        followed = client.get("/api/v1/users/me/followed-playlists", headers=other_headers).json()["playlists"]
        assert [p["id"] for p in followed] == [playlist.id]

        response = client.delete(f"{API}/{playlist.id}/follow", headers=other_headers)
        assert response.status_code == 200
        assert response.json()["playlist"]["followerCount"] == 0
        assert db.query(PlaylistFollow).count() == 0

    def test_double_follow_and_unfollow(self, client: TestClient, db, playlist: Playlist,
                                        other_headers: dict) -> None:
        url = f"{API}/{playlist.id}/follow"
        assert client.post(url, headers=other_headers).status_code == 200

        response = client.post(url, headers=other_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "You are already following this playlist"

        assert client.delete(url, headers=other_headers).status_code == 200
        response = client.delete(url, headers=other_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "You are not following this playlist"

        db.expire_all()
        assert db.get(Playlist, playlist.id).follower_count == 0

    def test_many_followers(self, client: TestClient, db, playlist: Playlist) -> None:
        followers = [make_user(db, f"fan{i}@example.com") for i in range(3)]
        for fan in followers:
            assert client.post(f"{API}/{playlist.id}/follow", headers=auth_header(fan)).status_code == 200

        db.expire_all()
        assert db.get(Playlist, playlist.id).follower_count == 3
        assert db.query(PlaylistFollow).filter(PlaylistFollow.playlist_id == playlist.id).count() == 3
