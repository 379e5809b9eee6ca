"""
otpauth:// provisioning URIs (Google Authenticator key URI format)
"""
from urllib.parse import quote

from crypto.hotp import CODE_DIGITS, TIME_STEP_SECONDS


def _escape(value):
    # Nothing is left unescaped so ':' or '/' in a name cannot split the label
    return quote(value, safe='')


def build(account_name, issuer, secret):
    """
    Format the URI an authenticator app imports the secret from

    otpauth://totp/{issuer}:{account}?secret=..&issuer=..&digits=6&period=30
    """
    label = f'{_escape(issuer)}:{_escape(account_name)}'
    return (
        f'otpauth://totp/{label}'
        f'?secret={secret.base32}'
        f'&issuer={_escape(issuer)}'
        f'&digits={CODE_DIGITS}'
        f'&period={TIME_STEP_SECONDS}'
    )
