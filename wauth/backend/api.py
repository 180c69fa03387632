"""
WAUTH HTTP API - FLASK BLUEPRINT

Các endpoint tương ứng với các operation:
- listSites     GET    /api/sites
- getTotpCode   GET    /api/sites/<site_name>/code
- addSite       POST   /api/sites          body: {"siteName": "...", "secret": "..."}
- deleteSite    DELETE /api/sites/<site_name>

VÍ DỤ:
curl http://localhost:5000/api/sites
curl -X POST http://localhost:5000/api/sites -H "Content-Type: application/json" \
     -d '{"siteName": "github", "secret": "JBSWY3DPEHPK3PXPJBSWY3DP"}'
curl http://localhost:5000/api/sites/github/code
"""

from flask import Blueprint, current_app, jsonify, request
import time

from wauth.common.log_handler import log
from wauth.core.errors import (
    DuplicateSiteName,
    InvalidSecret,
    InvalidTimestamp,
    NotFound,
    StoreError,
    ValidationError,
    WauthError,
)

sites_bp = Blueprint('sites', __name__, url_prefix='/api')

STATUS_CODES = {
    ValidationError: 400,
    InvalidSecret: 400,
    InvalidTimestamp: 400,
    NotFound: 404,
    DuplicateSiteName: 409,
    StoreError: 500,
}


def _application():
    return current_app.extensions["wauth"]


def error_response(error: WauthError):
    status = next(
        (code for cls, code in STATUS_CODES.items() if isinstance(error, cls)),
        500,
    )
    return jsonify({"error": error.to_dict()}), status


@sites_bp.errorhandler(WauthError)
def handle_wauth_error(error: WauthError):
    return error_response(error)


@sites_bp.route('/sites', methods=['GET'])
def list_sites():
    """
    LIỆT KÊ CÁC SITE

      curl http://localhost:5000/api/sites
    """
    try:
        sites = _application().list_sites()
    except WauthError as e:
        log.error(f"Failed to list sites: {e}")
        raise

    log.info(f"Retrieved {len(sites)} sites")
    return jsonify({"sites": [{"name": name} for name in sites]})


@sites_bp.route('/sites/<string:site_name>/code', methods=['GET'])
def get_totp_code(site_name):
    """
    LẤY MÃ TOTP HIỆN TẠI CỦA MỘT SITE

    Output:
      {"site_name": "github", "code": "123456", "remaining_seconds": 17}
    """
    try:
        result = _application().get_code(site_name, int(time.time()))
    except NotFound:
        log.warning(f"TOTP code requested for unknown site '{site_name}'")
        raise
    except WauthError as e:
        log.error(f"Failed to generate TOTP code for site {site_name}: {e}")
        raise

    return jsonify(result.to_dict())


@sites_bp.route('/sites', methods=['POST'])
def add_site():
    """
    THÊM SITE MỚI

    Input (JSON body):
      {"siteName": "github", "secret": "JBSWY3DPEHPK3PXPJBSWY3DP"}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": {"kind": "bad_request", "message": "JSON body required"}}), 400

    site_name = data.get('siteName')
    secret = data.get('secret')
    if not isinstance(site_name, str) or not isinstance(secret, str):
        return jsonify({"error": {
            "kind": "bad_request",
            "message": "siteName and secret are required strings",
        }}), 400

    try:
        _application().add_secret(site_name, secret)
    except WauthError as e:
        log.error(f"Failed to add site {site_name}: {e}")
        raise

    return jsonify({"name": site_name}), 201


@sites_bp.route('/sites/<string:site_name>', methods=['DELETE'])
def delete_site(site_name):
    """
    XÓA SITE (không lỗi nếu site không tồn tại)
    """
    try:
        _application().delete_secret(site_name)
    except WauthError as e:
        log.error(f"Failed to delete site {site_name}: {e}")
        raise

    return jsonify({"name": site_name})
