from unittest import mock

import pytest

from mopidy_spotifyweb import backend


@pytest.fixture
def config():
    return {
        "proxy": {
            "scheme": None,
            "hostname": None,
            "port": None,
            "username": None,
            "password": None,
        },
        "spotifyweb": {
            "enabled": True,
            "api_url": "https://api.spotify.com/v1/",
            "token_endpoint": "https://accounts.spotify.com/api/token",
            "client_id": None,
            "client_secret": None,
            "market": None,
            "timeout": 10,
            "verify_cert": True,
        },
    }


@pytest.fixture
def client(config):
    return backend.APIClient(config)


@pytest.fixture
def make_response():
    def _make(json=None, status_code=200):
        resp = mock.MagicMock()
        resp.status_code = status_code
        resp.__bool__.return_value = status_code < 400
        resp.json.return_value = json
        return resp

    return _make


@pytest.fixture
def fake_backend():
    """Stand-in for the backend actor, with a mocked API client."""
    fake = mock.Mock()
    fake.client = mock.Mock(spec=backend.APIClient)
    return fake


@pytest.fixture
def artist_json():
    return {
        "id": "7ubUEBqbef0F5Z7GLo1t8j",
        "uri": "spotify:artist:7ubUEBqbef0F5Z7GLo1t8j",
        "href": "https://api.spotify.com/v1/artists/7ubUEBqbef0F5Z7GLo1t8j",
        "name": "Nasum",
        "external_urls": {
            "spotify": "https://open.spotify.com/artist/7ubUEBqbef0F5Z7GLo1t8j"
        },
        "genres": ["grindcore"],
        "images": [
            {"url": "https://i.scdn.co/image/nasum640", "height": 640, "width": 640},
            {"url": "https://i.scdn.co/image/nasum64", "height": 64, "width": 64},
        ],
        "popularity": 30,
    }


@pytest.fixture
def album_json(artist_json):
    return {
        "id": "1YOYVUg964ocNniFFZD0jd",
        "uri": "spotify:album:1YOYVUg964ocNniFFZD0jd",
        "name": "Human 2.0",
        "album_type": "album",
        "artists": [artist_json],
        "release_date": "2000-01-01",
        "release_date_precision": "day",
        "images": [
            {"url": "https://i.scdn.co/image/human640", "height": 640, "width": 640},
        ],
        "tracks": {
            "total": 2,
            "limit": 50,
            "offset": 0,
            "next": None,
            "previous": None,
            "items": [],
        },
    }


@pytest.fixture
def track_json(artist_json, album_json):
    album = dict(album_json)
    del album["tracks"]
    return {
        "id": "5BeBvRU23OfuMy4jVlkDdm",
        "uri": "spotify:track:5BeBvRU23OfuMy4jVlkDdm",
        "name": "Idiot Parade",
        "track_number": 3,
        "disc_number": 1,
        "duration_ms": 101000,
        "explicit": False,
        "preview_url": "https://p.scdn.co/mp3-preview/idiotparade",
        "artists": [artist_json],
        "album": album,
        "popularity": 20,
    }
