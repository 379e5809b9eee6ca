"""
Base32 encoding utilities for shared secrets
Authenticator apps expect RFC 4648 base32 without '=' padding
"""
import base64
import binascii


def encode_base32(data):
    """
    Encode bytes to an unpadded, upper-case Base32 string
    """
    return base64.b32encode(data).decode('ascii').rstrip('=')


def decode_base32(encoded):
    """
    Decode a Base32 string to bytes

    Accepts lower case, spaces and missing padding, the way secrets are
    usually typed in by hand. Raises ValueError on anything else.
    """
    cleaned = encoded.replace(' ', '').replace('=', '').upper()
    padding = '=' * (-len(cleaned) % 8)
    try:
        return base64.b32decode(cleaned + padding)
    except binascii.Error as e:
        raise ValueError(f'Invalid base32 data: {e}') from e
