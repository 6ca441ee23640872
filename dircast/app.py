from dircast import create_app
from flask_cors import CORS
import logging

logger = logging.getLogger(__name__)


app = create_app()
# Web podcast players fetch feeds cross-origin
CORS(app, resources={r"/gen_feed/*": {"origins": "*"}})

if __name__ == "__main__":
    app.run(host=app.config["HOST"], port=app.config["PORT"])
