# settleup/app.py
import logging

from flask import Flask
from flask_cors import CORS

from settleup.config import Config


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.json.sort_keys = app.config['JSON_SORT_KEYS']

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    logging.getLogger('settleup').setLevel(app.config['LOG_LEVEL'])

    CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})

    from settleup.routes import bp
    app.register_blueprint(bp)

    return app
