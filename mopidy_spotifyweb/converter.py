import logging

from mopidy import models

from . import uri

logger = logging.getLogger(__name__)


def json_to_uri(json, type):
    """Compact form URI for a Web API object.

    The ``uri`` field is preferred; anything that does not parse falls back
    to building one from ``id``.
    """
    raw = json.get("uri")
    if raw:
        try:
            return str(uri.parse(raw).to_uri())
        except uri.InvalidUri as e:
            logger.debug("Ignoring %r from Web API: %s", raw, e)
    return uri.get_uri(type, json["id"])


def json_to_track(json, album=None):
    if album is None and json.get("album"):
        album = json_to_album(json["album"])
    return models.Track(
        uri = json_to_uri(json, uri.TRACK),
        name = json["name"],
        artists = [json_to_artist(artist) for artist in json.get("artists", [])],
        album = album,
        track_no = json.get("track_number"),
        disc_no = json.get("disc_number"),
        date = album.date if album is not None else None,
        length = json.get("duration_ms"),
    )


def json_to_album(json):
    num_tracks = json.get("total_tracks")
    if num_tracks is None and json.get("tracks"):
        num_tracks = json["tracks"].get("total")
    return models.Album(
        uri = json_to_uri(json, uri.ALBUM),
        name = json["name"],
        artists = [json_to_artist(artist) for artist in json.get("artists", [])],
        num_tracks = num_tracks,
        date = json.get("release_date"),
    )


def json_to_artist(json):
    return models.Artist(
        uri = json_to_uri(json, uri.ARTIST),
        name = json["name"],
        sortname = json["name"],
    )


def json_to_images(json):
    return [
        models.Image(
            uri=image["url"],
            width=image.get("width"),
            height=image.get("height"),
        )
        for image in json.get("images") or []
    ]
