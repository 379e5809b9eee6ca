"""
Error taxonomy for the TOTP engine
Each error knows the HTTP status it is surfaced with
"""


class OTPError(Exception):
    """Base class for errors the HTTP layer reports as success=false"""

    error_code = 'OTP_ERROR'
    status_code = 400

    def __init__(self, message, error_code=None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code


class InvalidInput(OTPError):
    """Empty account name or issuer, missing code, bad base32 secret"""

    error_code = 'INVALID_INPUT'


class NotConfigured(OTPError):
    """An operation needed a configuration before generate() was called"""

    error_code = 'NOT_CONFIGURED'

    def __init__(self, message='No TOTP configuration yet, generate one first'):
        super().__init__(message)


class EntropyExhaustion(OTPError):
    """The secure random source could not produce a secret"""

    error_code = 'ENTROPY_EXHAUSTED'
    status_code = 500
