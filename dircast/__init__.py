import logging
from flask import Flask
from dotenv import load_dotenv
load_dotenv()

from .config import Config, store_settings_from_config
from .commands import register_commands
from .routes.main import main as main_blueprint
from .routes.feed import feed_bp
from .util.auth import load_credential_store
from .util.slug import get_slug_codec


def configure_app_logging():
    logger = logging.getLogger("dircast")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s %(levelname)s [%(name)s] %(message)s')
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)


def create_app(config_object=None, overrides=None):
    configure_app_logging()

    app = Flask(__name__)

    # Load config from object, then explicit overrides
    app.config.from_object(config_object or Config)
    if overrides:
        app.config.update(overrides)

    # An unreadable password file is a deployment error: refuse to start
    load_credential_store(app.config["HTPASSWD_PATH"])

    settings = store_settings_from_config(app.config)
    if not settings.bucket:
        logging.getLogger("dircast").warning("DIRCAST_BUCKET_NAME unset, searches will return nothing")
    app.extensions["dircast.store"] = settings
    app.extensions["dircast.slug_codec"] = get_slug_codec(app.config)

    # Register Blueprints
    app.register_blueprint(main_blueprint)
    app.register_blueprint(feed_bp)

    register_commands(app)

    return app
