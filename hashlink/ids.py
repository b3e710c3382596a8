# -*- coding: utf-8 -*-
"""Short identifier generation.

Identifiers are drawn uniformly from an alphabet with :mod:`secrets`.
Nothing here checks an identifier against the ones already issued;
uniqueness is probabilistic and governed by the alphabet size and the
length, see :func:`collision_probability`.
"""

import secrets

# Omits the visually ambiguous "l", "I" and "O".
DEFAULT_ALPHABET = "0123456789abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNOPQRSTUVWXYZ"
DEFAULT_LENGTH = 12


def generate(alphabet: str = DEFAULT_ALPHABET, length: int = DEFAULT_LENGTH) -> str:
    """Return a random token of `length` characters picked independently from
    `alphabet`.

    Raises:
        ValueError: If `alphabet` is empty or `length` is not positive.
    """
    if not alphabet:
        raise ValueError("Identifier alphabet must not be empty")

    if length <= 0:
        raise ValueError("Identifier length must be positive, got {0!r}".format(length))

    return "".join(secrets.choice(alphabet) for _ in range(length))


def collision_probability(count: int, alphabet_size: int, length: int) -> float:
    """Approximate birthday-collision probability after issuing `count`
    identifiers, ``N**2 / (2 * A**L)``, capped at ``1.0``.
    """
    space = alphabet_size ** length
    return min(1.0, count * count / (2.0 * space))
