"""
Password hashing helpers.

Passwords are stored as bcrypt hashes (``$2b$<cost>$<salt+digest>``),
the format existing deployments already hold, so seeded accounts
keep working.  bcrypt is deliberately slow; both ``hash`` and
``verify`` are run in a worker thread by the async wrappers so a login
does not block the event loop.
"""

import asyncio

import bcrypt

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


class PasswordHasher:
    """Salted one-way hashing with a configurable bcrypt cost factor.

    Parameters
    ----------
    rounds : int
        bcrypt log2 cost.  ``10`` is the production default; tests use
        the bcrypt minimum of ``4``.
    """

    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds
        # Verified against when the username is unknown so that both
        # failure paths of a login cost the same.
        self._dummy_hash = self.hash("dummy-password-for-timing")

    def hash(self, password: str) -> str:
        """Hash ``password`` with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        """Return True only if ``password`` matches the stored ``hashed``.

        A malformed stored hash never matches.
        """
        try:
            return bcrypt.checkpw(_encode(password), hashed.encode("ascii"))
        except (ValueError, TypeError, UnicodeEncodeError):
            return False

    def dummy_verify(self, password: str) -> bool:
        """Spend the time of a real verify; always False."""
        self.verify(password, self._dummy_hash)
        return False

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, hashed: str) -> bool:
        return await asyncio.to_thread(self.verify, password, hashed)

    async def dummy_verify_async(self, password: str) -> bool:
        return await asyncio.to_thread(self.dummy_verify, password)
