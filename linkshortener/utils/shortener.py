"""Shortcode generation utility

This module provides the helpers used to obtain shortcodes for new links:
random generation for anonymous codes and validation for caller-chosen
(custom) codes.

Functions:
    generate_shortcode(length=7):
        Generate a random URL-safe shortcode.
    validate_shortcode(shortcode, max_length=64):
        Check a custom shortcode against the shortcode alphabet.

Example:
    >>> from linkshortener.utils import generate_shortcode
    >>> generate_shortcode()
    'V1StGXR'
    >>> generate_shortcode(length=10)
    '8_Jqp-dU0a'
"""

import secrets
import string

from linkshortener.constants import Shortcode
from linkshortener.exceptions import ValidationError


ALPHABET = string.ascii_letters + string.digits + '-_'
ALPHABET_SET = frozenset(ALPHABET)


def generate_shortcode(length: int = Shortcode.LENGTH) -> str:
    """Generate a random, URL-safe shortcode.

    Characters are drawn uniformly from [A-Za-z0-9_-] (64 symbols) using the
    `secrets` CSPRNG, so codes are case-sensitive and not guessable from
    previously issued ones.

    The generator is stateless and does NOT guarantee uniqueness: the data
    store's insert is the uniqueness gate, and callers retry on collisions.

    Args:
        length (int, optional):
            Length of the resulting shortcode. Defaults to 7
            (64^7 ~ 4.4e12 possible codes).

    Returns:
        str: A random shortcode.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is not positive.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))


def validate_shortcode(shortcode: str, max_length: int = Shortcode.MAX_CUSTOM_LENGTH) -> str:
    """Validate a caller-supplied shortcode and return it unchanged.

    Raises:
        ValidationError: If the code is empty, too long or uses characters
                         outside [A-Za-z0-9_-].

    Example:
        >>> validate_shortcode('my-link_2024')
        'my-link_2024'
    """
    if not isinstance(shortcode, str) or not shortcode:
        raise ValidationError('Custom shortcode must be a non-empty string.')
    if len(shortcode) > max_length:
        raise ValidationError(f'Custom shortcode must be at most {max_length} characters long.')
    if not ALPHABET_SET.issuperset(shortcode):
        raise ValidationError('Custom shortcode may only contain letters, digits, "-" and "_".')
    return shortcode
