"""
TOTP Demo Service
Main Flask Application

Exposes the JSON endpoints the browser UI calls:
  POST /api/generate      accountName, issuer -> new secret, QR code, current code
  POST /api/verify        code -> isValid, userCode, expectedCode
  GET  /api/current-code  -> currentCode
"""
import logging
import uuid
from functools import partial

from flask import Flask, request, session

from auth.config_manager import ConfigManager, ConfigRegistry, totp_info
from auth.errors import InvalidInput, NotConfigured
from config import settings
from provisioning.qr import qr_data_uri
from utils.responses import json_endpoint, success

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = settings.secret_key

registry = ConfigRegistry(
    partial(ConfigManager, tolerance_steps=settings.tolerance_steps),
    max_slots=settings.max_slots,
)


def current_manager(create=False):
    """
    ConfigManager for this request: the shared slot, or one per session

    Only generate() creates a slot. Reads from a client without one get
    NotConfigured and leave the registry untouched.
    """
    if not settings.per_session_slots:
        key = ConfigRegistry.DEFAULT_KEY
    elif create:
        key = session.setdefault('slot_id', uuid.uuid4().hex)
    else:
        key = session.get('slot_id')

    manager = registry.get(key) if create else registry.find(key)
    if manager is None:
        raise NotConfigured()
    return manager


@app.after_request
def add_cors_headers(response):
    response.headers['Access-Control-Allow-Origin'] = settings.cors_allow_origin
    response.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
    return response


@app.route('/api/generate', methods=['POST'])
@json_endpoint('Failed to generate TOTP configuration')
def generate():
    """Create a new TOTP configuration, replacing the current one"""
    result = current_manager(create=True).generate(
        request.form.get('accountName'),
        request.form.get('issuer'),
    )
    config = result.config

    qr_code_image = qr_data_uri(
        config.provisioning_uri,
        box_size=settings.qr_box_size,
        border=settings.qr_border,
    )

    return success('TOTP configuration generated', {
        'accountName': config.account_name,
        'issuer': config.issuer,
        'configInfo': config.info(),
        'provisioningUri': config.provisioning_uri,
        'qrCodeImage': qr_code_image,
        'currentCode': result.current_code,
    })


@app.route('/api/verify', methods=['POST'])
@json_endpoint('Failed to verify TOTP code')
def verify():
    """Verify a code against the current configuration"""
    manager = current_manager()
    user_code = request.form.get('code')

    if not manager.is_configured:
        # Checked first so an empty form still reports the missing configuration
        raise NotConfigured()
    if not (user_code or '').strip():
        raise InvalidInput('Please enter a code')

    # Passed through unmodified; padding around the digits is a non-match
    result = manager.verify(user_code)
    message = 'Code is valid' if result.is_valid else 'Code is invalid'
    return success(message, result.to_dict())


@app.route('/api/current-code', methods=['GET'])
@json_endpoint('Failed to get current TOTP code')
def current_code():
    """Code for the current 30 second window"""
    config, code = current_manager().current()
    return success('Current code', {'currentCode': code, 'configInfo': config.info()})


@app.route('/api/info', methods=['GET'])
def info():
    """Protocol parameters, identical for every configuration"""
    return success('TOTP parameters', totp_info())


if __name__ == '__main__':
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    logger.info('TOTP parameters: %s', totp_info())
    logger.info('Starting TOTP service on http://%s:%s', settings.host, settings.port)

    app.run(host=settings.host, port=settings.port, debug=settings.debug)
