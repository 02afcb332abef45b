#!/usr/bin/env python
import logging

from flask import Flask, jsonify

from config import get_config_object
from docusign_blueprint import ds


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or get_config_object())

    app.register_blueprint(ds,
                           url_prefix=f'{app.config["APPLICATION_ROOT"]}/ds')

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'}), 200

    return app


# local development ($ python app.py)
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(host="0.0.0.0", port=8080)
