from mopidy import commands

from . import backend as client
from . import uri


def format_track(json):
    artists = ", ".join(artist["name"] for artist in json.get("artists", []))
    album = json.get("album", {}).get("name", "")
    return "{} ♫ {} ♪ {}".format(artists, album, json["name"])


class SpotifyWebCommand(commands.Command):
    def __init__(self):
        super().__init__()
        self.add_child("query", QueryCommand())
        self.add_child("convert", ConvertCommand())


class QueryCommand(commands.Command):
    help = "Look up Spotify tracks by URI or open.spotify.com URL and print them."

    def __init__(self):
        super().__init__()
        self.add_argument("uris", nargs="+", metavar="URI")

    def run(self, args, config):
        api = client.APIClient(config)
        api.fetch_token()
        status = 0
        for raw in args.uris:
            try:
                resource = uri.parse(raw)
            except uri.InvalidUri as e:
                print("{}: {}".format(raw, e))
                status = 1
                continue
            components = resource.components()
            if len(components) != 2 or components[0] != uri.TRACK:
                print("{}: not a track".format(raw))
                status = 1
                continue
            track = api.get(resource)
            if track is None:
                print("{}: lookup failed".format(raw))
                status = 1
                continue
            print(format_track(track))
        return status


class ConvertCommand(commands.Command):
    help = "Print the spotify: URI and open.spotify.com URL forms of each argument."

    def __init__(self):
        super().__init__()
        self.add_argument("uris", nargs="+", metavar="URI")

    def run(self, args, config):
        status = 0
        for raw in args.uris:
            try:
                resource = uri.parse(raw)
            except uri.InvalidUri as e:
                print("{}: {}".format(raw, e))
                status = 1
                continue
            print("{}\t{}".format(resource.to_uri(), resource.to_url()))
        return status
