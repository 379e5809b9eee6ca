"""
TOTP verification with clock-drift tolerance
"""
import re
from dataclasses import dataclass

from crypto.hash_utils import codes_equal
from crypto.hotp import CODE_DIGITS, derive, time_step

CODE_PATTERN = re.compile(r'\d{%d}' % CODE_DIGITS, re.ASCII)
DEFAULT_TOLERANCE_STEPS = 1

# Never matches a decimal code; stands in for malformed input so the
# comparison loop runs exactly as for a well-formed guess.
_PLACEHOLDER = '\x00' * CODE_DIGITS


@dataclass(frozen=True)
class VerificationResult:
    is_valid: bool
    user_code: str
    expected_code: str

    def to_dict(self):
        return {
            'isValid': self.is_valid,
            'userCode': self.user_code,
            'expectedCode': self.expected_code,
        }


def is_well_formed(user_code):
    """True if the code is exactly six ASCII decimal digits"""
    return isinstance(user_code, str) and CODE_PATTERN.fullmatch(user_code) is not None


def verify(secret, user_code, now, tolerance_steps=DEFAULT_TOLERANCE_STEPS):
    """
    Verify a user-submitted code against the codes around `now`

    Every step in [current - tolerance, current + tolerance] is derived
    and compared in constant time, without stopping at the first match.
    Malformed input is a non-match, not an error.

    expected_code is always the code of the current step, even when the
    match came from a neighbouring step.
    """
    if secret is None:
        raise ValueError('verify() requires a secret')
    if tolerance_steps < 0:
        raise ValueError('tolerance_steps must not be negative')

    current = time_step(now)
    well_formed = is_well_formed(user_code)
    probe = user_code if well_formed else _PLACEHOLDER

    expected_code = derive(secret, current)
    matched = False
    for step in range(current - tolerance_steps, current + tolerance_steps + 1):
        if step < 0:
            continue
        candidate = expected_code if step == current else derive(secret, step)
        matched |= codes_equal(candidate, probe)

    return VerificationResult(
        is_valid=well_formed and matched,
        user_code=user_code if isinstance(user_code, str) else '',
        expected_code=expected_code,
    )
