"""
FLASK APP ENTRY POINT - WAUTH API SERVER
========================================

Thiết lập Flask app, bật CORS và đăng ký blueprint /api.

Chạy:
    wauth-server                       # host/port từ WAUTH_HOST / WAUTH_PORT
    flask --app wauth.backend.app:create_app run
"""
from flask import Flask, jsonify
from flask_cors import CORS

from wauth.common.log_handler import log
from wauth.config import Config, server_address
from wauth.core.application import TOTPApplication
from .api import sites_bp


def create_app(application: TOTPApplication = None) -> Flask:
    """
    Tạo Flask app.

    Arguments:
        application: TOTPApplication dùng cho các request; nếu None thì
                     đọc Config và tạo store SQLite tương ứng.
    """
    if application is None:
        application = TOTPApplication.from_config(Config.load())

    app = Flask(__name__)
    # Cho phép frontend (chạy trên domain/port khác) gọi API
    CORS(app)

    app.extensions["wauth"] = application
    app.register_blueprint(sites_bp)

    @app.route('/', methods=['GET'])
    def index():
        return jsonify({
            "service": "wauth",
            "endpoints": [
                "GET /api/sites",
                "GET /api/sites/<site_name>/code",
                "POST /api/sites",
                "DELETE /api/sites/<site_name>",
            ],
        })

    return app


def main():
    host, port = server_address()
    app = create_app()
    log.info(f"Starting wauth API server on {host}:{port}")
    app.run(host=host, port=port)


if __name__ == '__main__':
    main()
