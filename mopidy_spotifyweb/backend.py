import logging

import pykka
import requests
import requests_oauthlib
from oauthlib.oauth2 import BackendApplicationClient, OAuth2Error

from mopidy import exceptions, httpclient
from mopidy import backend
from . import __version__, uri, converter


logger = logging.getLogger(__name__)


class SessionWithUrlBase(requests.Session):
    def __init__(self, url_base=None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.url_base = url_base

    def request(self, method, url, **kwargs):
        # Pagination links and the token endpoint are already absolute.
        if url.startswith("http://") or url.startswith("https://"):
            modified_url = url
        else:
            modified_url = self.url_base + url

        return super().request(method, modified_url, **kwargs)


class OAuth2Session(SessionWithUrlBase, requests_oauthlib.OAuth2Session):
    pass


def resolve(p_uri):
    """Return the parsed URI for ``p_uri`` when it names a (type, id) pair."""
    try:
        resource = uri.parse(p_uri)
    except uri.InvalidUri as e:
        logger.warning("Cannot resolve %s: %s", p_uri, e)
        return None
    if len(resource.components()) != 2:
        logger.warning("Cannot resolve %s: expected type and id", p_uri)
        return None
    return resource


def fetch(client, p_uri):
    """Return ``(type, json)`` for ``p_uri``; ``json`` is ``None`` on failure."""
    resource = resolve(p_uri)
    if resource is None:
        return None, None
    type = resource.components()[0]
    try:
        return type, client.get(resource)
    except ValueError as e:
        logger.warning("Cannot fetch %s: %s", p_uri, e)
        return type, None


class SpotifyWebPlaybackProvider(backend.PlaybackProvider):
    def translate_uri(self, p_uri):
        resource = resolve(p_uri)
        if resource is None or resource.components()[0] != uri.TRACK:
            return None
        track = self.backend.client.get(resource)

        if track is None:
            return None
        url = track.get("preview_url")
        if not url:
            logger.info("No preview available for %s", p_uri)
            return None
        return url


class SpotifyWebLibraryProvider(backend.LibraryProvider):
    def lookup(self, p_uri):
        type, json = fetch(self.backend.client, p_uri)
        if json is None:
            return []
        if type == uri.ALBUM:
            return self._get_album(json)
        if type == uri.ARTIST:
            return self._get_artist(json)
        return [converter.json_to_track(json)]

    def _get_album(self, json):
        album = converter.json_to_album(json)
        tracks = self.backend.client.get_album_tracks(json["id"])
        return [converter.json_to_track(track, album=album) for track in tracks]

    def _get_artist(self, json):
        tracks = self.backend.client.get_artist_top_tracks(json["id"])
        if tracks is not None:
            return [converter.json_to_track(track) for track in tracks]
        return []

    def get_images(self, p_uris):
        images = dict()
        for p_uri in p_uris:
            type, json = fetch(self.backend.client, p_uri)
            if type == uri.TRACK and json is not None:
                json = json.get("album")
            if json is not None:
                images[p_uri] = converter.json_to_images(json)
        return images


class APIClient:
    def __init__(self, config):
        self.config = config
        ext_config = config["spotifyweb"]
        credentials = [ext_config.get("client_id"), ext_config.get("client_secret")]
        if any(credentials) and not all(credentials):
            raise exceptions.ExtensionError(
                "You need to provide client_id and client_secret to authenticate with the Spotify Web API"
            )

        base_url = ext_config["api_url"]
        if not base_url.endswith("/"):
            base_url += "/"
        self.timeout = ext_config.get("timeout") or None
        self.market = ext_config.get("market") or "US"
        self.token_endpoint = (
            ext_config.get("token_endpoint")
            or "https://accounts.spotify.com/api/token"
        )

        proxy = httpclient.format_proxy(config["proxy"])
        full_user_agent = httpclient.format_user_agent("%s/%s" % ("Mopidy-SpotifyWeb", __version__))

        if ext_config.get("client_id"):
            self.session = OAuth2Session(
                url_base=base_url,
                client=BackendApplicationClient(client_id=ext_config["client_id"]),
            )
        else:
            self.session = SessionWithUrlBase(url_base=base_url)

        self.session.proxies.update({"http": proxy, "https": proxy})
        self.session.headers.update({"user-agent": full_user_agent})

        self.session.verify = ext_config.get("verify_cert", True)

    @property
    def authenticated(self):
        return isinstance(self.session, OAuth2Session)

    def fetch_token(self):
        if not self.authenticated:
            return None
        ext_config = self.config["spotifyweb"]
        try:
            return self.session.fetch_token(
                self.token_endpoint,
                client_id=ext_config["client_id"],
                client_secret=ext_config["client_secret"],
                timeout=self.timeout,
            )
        except (requests.RequestException, OAuth2Error) as e:
            logger.error("Cannot fetch Spotify Web API token: %s", e)
            return None

    def _request(self, url, params):
        try:
            return self.session.get(url, params=params, timeout=self.timeout)
        except OAuth2Error:
            if not self.authenticated:
                raise
            logger.info("Spotify Web API token expired, fetching a new one")
            self.fetch_token()
            return self.session.get(url, params=params, timeout=self.timeout)

    def _get(self, url, params=None):
        try:
            response = self._request(url, params)
        except (requests.RequestException, OAuth2Error) as e:
            logger.warning("Spotify Web API request for %s failed: %s", url, e)
            return None
        if not response:
            logger.warning(
                "Spotify Web API returned HTTP %s for %s", response.status_code, url
            )
            return None
        return response.json()

    def _get_paginated(self, url, params=None):
        json = self._get(url, params)
        results = []
        while json is not None:
            results.extend(json["items"])
            if json.get("next") is None:
                break
            json = self._get(json["next"])
        return results

    def get(self, resource):
        """Fetch the Web API object for a parsed :class:`uri.SpotifyUri`."""
        components = resource.components()
        if len(components) != 2:
            raise ValueError(f"Expected a type and an id in {resource}")
        type, id = components
        if type == uri.TRACK:
            return self.get_track(id)
        if type == uri.ALBUM:
            return self.get_album(id)
        if type == uri.ARTIST:
            return self.get_artist(id)
        raise ValueError(f"Unsupported resource type {type!r} in {resource}")

    def get_track(self, id):
        return self._get(f"tracks/{id}")

    def get_album(self, id):
        return self._get(f"albums/{id}")

    def get_album_tracks(self, id):
        return self._get_paginated(f"albums/{id}/tracks", params={"limit": 50})

    def get_artist(self, id):
        return self._get(f"artists/{id}")

    def get_artist_top_tracks(self, id):
        json = self._get(f"artists/{id}/top-tracks", params={"market": self.market})
        if json is not None:
            return json["tracks"]


class SpotifyWebBackend(pykka.ThreadingActor, backend.Backend):
    uri_schemes = [uri.PREFIX]

    def __init__(self, config, audio):
        super().__init__()
        self.config = config
        self.client = APIClient(config)
        self.library = SpotifyWebLibraryProvider(backend=self)
        self.playback = SpotifyWebPlaybackProvider(audio=audio, backend=self)

    def on_start(self):
        if self.client.authenticated:
            logger.info("Using Spotify Web API with client credentials")
            self.client.fetch_token()
        else:
            logger.info('Using "%s" anonymously', self.config["spotifyweb"]["api_url"])
