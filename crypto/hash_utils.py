"""
Constant-time comparison helpers for one-time codes
"""
from cryptography.hazmat.primitives import constant_time


def codes_equal(expected, candidate):
    """
    Compare two codes without leaking how many leading characters match
    """
    return constant_time.bytes_eq(expected.encode('utf-8'), candidate.encode('utf-8'))
