import logging
import os

import mopidy
from mopidy import config, ext


logger = logging.getLogger(__name__)

__version__ = "0.1.0"

class Extension(ext.Extension):

    dist_name = "Mopidy-SpotifyWeb"
    ext_name = "spotifyweb"
    version = __version__

    def get_default_config(self):
        conf_file = os.path.join(os.path.dirname(__file__), "ext.conf")
        return config.read(conf_file)

    def get_config_schema(self):
        schema = super().get_config_schema()
        schema["api_url"] = mopidy.config.String()
        schema["token_endpoint"] = mopidy.config.String(optional=True)
        schema["client_id"] = mopidy.config.String(optional=True)
        schema["client_secret"] = mopidy.config.Secret(optional=True)
        schema["market"] = mopidy.config.String(optional=True)

        schema["timeout"] = mopidy.config.Integer(minimum=0)
        schema["verify_cert"] = mopidy.config.Boolean(optional=True)
        return schema

    def setup(self, registry):
        from .backend import SpotifyWebBackend

        registry.add("backend", SpotifyWebBackend)

    def get_command(self):
        from . import commands

        return commands.SpotifyWebCommand()
