"""
JSON response envelope for the API
Every response is {success, message, data?}; failures never carry data
"""
import logging
from functools import wraps

from flask import jsonify

from auth.errors import OTPError

logger = logging.getLogger(__name__)


def success(message, data=None, status=200):
    body = {'success': True, 'message': message}
    if data is not None:
        body['data'] = data
    return jsonify(body), status


def error(message, status=400):
    return jsonify({'success': False, 'message': message}), status


def json_endpoint(failure_message):
    """
    Decorator turning engine errors into success=false responses

    OTPError subclasses keep their own message and status. Anything else
    is logged with its traceback and reported as a generic 500.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except OTPError as e:
                if e.status_code >= 500:
                    logger.error('%s: %s', failure_message, e.message)
                return error(e.message, e.status_code)
            except Exception:
                logger.exception(failure_message)
                return error(failure_message, 500)
        return decorated_function
    return decorator
