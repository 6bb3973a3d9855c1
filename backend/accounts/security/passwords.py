"""Password hashing using bcrypt.

Salts are generated and stored separately from the hash so the persisted
record carries both values; hashing is deterministic for a given
``(plaintext, salt)`` pair.
"""

from __future__ import annotations

import bcrypt


class PasswordHasher:
    """Derive bcrypt salts and salted password hashes.

    Examples
    --------
    >>> hasher = PasswordHasher(rounds=4)
    >>> salt = hasher.generate_salt()
    >>> hasher.hash("mock123!", salt) == hasher.hash("mock123!", salt)
    True
    """

    #: bcrypt accepts work factors in this closed range
    MIN_ROUNDS = 4
    MAX_ROUNDS = 31

    def __init__(self, rounds: int = 12) -> None:
        """Initialize the hasher.

        Parameters
        ----------
        rounds
            bcrypt work factor (log2 of iterations). Higher is slower and
            harder to brute force.

        Raises
        ------
        ValueError
            If ``rounds`` lies outside bcrypt's supported range.
        """
        if not self.MIN_ROUNDS <= int(rounds) <= self.MAX_ROUNDS:
            raise ValueError(
                f"bcrypt rounds must be between {self.MIN_ROUNDS} and {self.MAX_ROUNDS}"
            )
        self._rounds = int(rounds)

    @property
    def rounds(self) -> int:
        return self._rounds

    def generate_salt(self) -> str:
        """Return a fresh random bcrypt salt (``$2b$<rounds>$...``)."""
        return bcrypt.gensalt(rounds=self._rounds).decode("utf-8")

    def hash(self, plaintext: str, salt: str) -> str:
        """Hash ``plaintext`` with ``salt``.

        Parameters
        ----------
        plaintext
            Password as typed by the user.
        salt
            Salt from :meth:`generate_salt`.

        Returns
        -------
        The bcrypt hash as a string. It embeds the salt, never the plaintext.

        Raises
        ------
        ValueError
            If the password is empty or the salt is malformed.
        """
        if not plaintext:
            raise ValueError("Password must be a non-empty string.")
        hashed = bcrypt.hashpw(plaintext.encode("utf-8"), salt.encode("utf-8"))
        return hashed.decode("utf-8")
