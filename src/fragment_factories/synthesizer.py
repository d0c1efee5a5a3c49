"""Literal mock values for scalar fields, produced with Faker."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Callable

from faker import Faker

# String generators chosen by substring of the lower-cased field name.
# Order matters: the first matching rule wins.
STRING_RULES: list[tuple[tuple[str, ...], Callable[[Faker], str]]] = [
    (("email",), lambda fake: fake.email()),
    (("fullname",), lambda fake: fake.name()),
    (("first",), lambda fake: fake.first_name()),
    (("last",), lambda fake: fake.last_name()),
    (("username",), lambda fake: fake.user_name()),
    (("url", "uri"), lambda fake: fake.url()),
    (("phone",), lambda fake: fake.phone_number()),
    (("city",), lambda fake: fake.city()),
    (("country",), lambda fake: fake.country()),
    (("address",), lambda fake: fake.street_address()),
]

# Window for synthesized dates; fixed so output does not depend on today.
DATE_RANGE_START = datetime(2020, 1, 1, tzinfo=timezone.utc)
DATE_RANGE_END = datetime(2025, 1, 1, tzinfo=timezone.utc)


def quote(value: str) -> str:
    """Return ``value`` as a TypeScript string literal."""
    return json.dumps(value, ensure_ascii=False)


class MockValueSynthesizer:
    """Produces TypeScript literal tokens for scalar fields.

    The Faker instance is re-seeded from the seed, scalar name and field name
    before each value, so a given field always receives the same literal.
    """

    def __init__(self, seed: int = 0, locale: str = "en_US") -> None:
        self.seed = seed
        self.fake = Faker(locale)

    def synthesize(self, scalar: str, field_name: str) -> str:
        """Return a literal for a field of scalar type ``scalar``."""
        name = field_name.lower()
        self.fake.seed_instance(f"{self.seed}:{scalar}:{name}")

        if scalar == "String":
            return quote(self._string_value(name))
        if scalar == "Int":
            return str(self.fake.pyint(min_value=0, max_value=1000))
        if scalar == "Float":
            return f"{self.fake.pyfloat(min_value=0, max_value=1000, right_digits=2):.2f}"
        if scalar == "Boolean":
            return "true" if self.fake.pybool() else "false"
        if scalar in ("Date", "DateTime"):
            moment = self.fake.date_time_between(
                start_date=DATE_RANGE_START, end_date=DATE_RANGE_END, tzinfo=timezone.utc
            )
            return quote(moment.strftime("%Y-%m-%dT%H:%M:%S.000Z"))
        return quote(f"mock-{name}")

    def _string_value(self, name: str) -> str:
        for needles, generate in STRING_RULES:
            if any(needle in name for needle in needles):
                return generate(self.fake)
        return self.fake.word()
