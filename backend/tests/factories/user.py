"""Factory Boy definition for :class:`rentaride.models.user.User`."""

from __future__ import annotations

import factory
from rentaride.models.base import utcnow
from rentaride.models.user import ROLE_ADMIN, ROLE_BUSINESS, ROLE_STANDARD, User
from werkzeug.security import generate_password_hash

from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted, email-verified :class:`User` instances.

    Notes
    -----
    - ``password`` is a factory parameter hashed into ``password_hash`` with a
      cheap pbkdf2 round count; ``verify_password`` accepts any werkzeug hash.
    - Traits: ``admin``, ``business`` and ``unverified``.
    """

    class Meta:
        model = User

    class Params:
        password = DEFAULT_PASSWORD
        admin = factory.Trait(roles=[ROLE_ADMIN])
        business = factory.Trait(roles=[ROLE_BUSINESS])
        unverified = factory.Trait(email_verified_at=None)

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    password_hash = factory.LazyAttribute(
        lambda o: generate_password_hash(o.password, method="pbkdf2:sha256:1000")
    )
    roles = factory.LazyFunction(lambda: [ROLE_STANDARD])
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    email_verified_at = factory.LazyFunction(utcnow)
    verified = False
    active = True
