"""
HOTP / TOTP code derivation (RFC 4226, RFC 6238)

Codes must match the RFCs bit for bit, otherwise authenticator apps
such as Google Authenticator will show different numbers.
"""
import struct

from cryptography.hazmat.primitives import hashes, hmac


TIME_STEP_SECONDS = 30
CODE_DIGITS = 6
ALGORITHM = 'SHA1'

MIN_DIGITS = 6
MAX_DIGITS = 8


def hotp(key, counter, digits=CODE_DIGITS):
    """
    Compute an HOTP value for a raw key and counter

    Process:
    1. Pack the counter as an 8-byte big-endian unsigned integer
    2. HMAC-SHA1 the counter with the key
    3. Dynamic truncation to a 31-bit integer
    4. Reduce modulo 10^digits and zero-pad
    """
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise ValueError(f'digits must be between {MIN_DIGITS} and {MAX_DIGITS}, got {digits}')
    if counter < 0:
        raise ValueError('counter must not be negative')

    mac = hmac.HMAC(key, hashes.SHA1())
    mac.update(struct.pack('>Q', counter))
    digest = mac.finalize()

    offset = digest[19] & 0x0F
    truncated = struct.unpack('>I', digest[offset:offset + 4])[0] & 0x7FFFFFFF

    return str(truncated % 10 ** digits).zfill(digits)


def time_step(unix_seconds, period=TIME_STEP_SECONDS):
    """Quantize a unix timestamp into a TOTP counter"""
    return int(unix_seconds // period)


def derive(secret, step, digits=CODE_DIGITS):
    """Derive the code for a Secret at a given time step"""
    return hotp(secret.value, step, digits)
