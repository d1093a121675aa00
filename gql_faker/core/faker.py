"""Fake data resolvers driven by the auxiliary directives.

Fields resolve to real data when the parent value carries it, otherwise to a
plausible fake value derived from the field's type and its directives:

    @fake(type: email)                      -> "jane.doe@example.com"
    @examples(values: ["IT", "Media"])      -> one of the listed values
    @listLength(min: 1, max: 3)             -> list size bounds

The resolvers plug into graphql-core execution as ``field_resolver`` and
``type_resolver``.
"""

import random
import string
import uuid
from datetime import datetime, timedelta
from typing import Any, Callable

from graphql import (
    GraphQLAbstractType,
    GraphQLField,
    GraphQLOutputType,
    GraphQLResolveInfo,
    GraphQLSchema,
    default_field_resolver,
    is_abstract_type,
    is_enum_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_scalar_type,
)
from graphql.execution.values import get_directive_values

DEFAULT_LIST_LENGTH = (2, 4)

FIRST_NAMES = ["Ada", "Alan", "Grace", "Linus", "Margaret", "Dennis", "Barbara", "Ken"]
LAST_NAMES = ["Lovelace", "Turing", "Hopper", "Torvalds", "Hamilton", "Ritchie", "Liskov", "Thompson"]
WORDS = [
    "lorem", "ipsum", "dolor", "sit", "amet", "consectetur", "adipiscing",
    "elit", "sed", "do", "eiusmod", "tempor", "incididunt", "labore", "magna",
]
CITIES = ["Amsterdam", "Berlin", "Kyiv", "Lisbon", "Oslo", "Prague", "Vienna", "Warsaw"]
COUNTRIES = ["Austria", "Czechia", "Germany", "Netherlands", "Norway", "Poland", "Portugal", "Ukraine"]
STREETS = ["Main St", "Oak Ave", "Pine Rd", "Maple Dr", "Cedar Ln", "Elm St"]
COMPANY_SUFFIXES = ["Inc", "LLC", "Group", "Labs", "Systems"]


class FakeValueGenerator:
    """Produces fake scalar values.

    Args:
        seed: Optional seed for reproducible output
    """

    def __init__(self, seed: int | None = None):
        self.random = random.Random(seed)
        self._fakers: dict[str, Callable[[dict[str, Any]], Any]] = {
            "firstName": lambda _: self.random.choice(FIRST_NAMES),
            "lastName": lambda _: self.random.choice(LAST_NAMES),
            "fullName": lambda _: f"{self.random.choice(FIRST_NAMES)} {self.random.choice(LAST_NAMES)}",
            "userName": lambda _: f"{self.random.choice(FIRST_NAMES).lower()}{self.random.randint(1, 999)}",
            "email": self._email,
            "phoneNumber": lambda _: "+1-" + "-".join(
                "".join(self.random.choices(string.digits, k=k)) for k in (3, 3, 4)
            ),
            "url": lambda _: f"https://{self._word()}.example.com",
            "imageUrl": lambda _: f"https://picsum.photos/seed/{self._word()}/640/480",
            "uuid": lambda _: self.uuid(),
            "word": lambda _: self._word(),
            "words": lambda options: self._words(options.get("wordCount") or 3),
            "sentence": lambda options: self._words(options.get("wordCount") or 6).capitalize() + ".",
            "paragraph": lambda _: " ".join(
                self._words(self.random.randint(5, 10)).capitalize() + "." for _ in range(3)
            ),
            "city": lambda _: self.random.choice(CITIES),
            "country": lambda _: self.random.choice(COUNTRIES),
            "streetAddress": lambda _: f"{self.random.randint(1, 999)} {self.random.choice(STREETS)}",
            "zipCode": lambda _: "".join(self.random.choices(string.digits, k=5)),
            "companyName": lambda _: f"{self.random.choice(LAST_NAMES)} {self.random.choice(COMPANY_SUFFIXES)}",
            "colorHex": lambda _: "#%06x" % self.random.getrandbits(24),
            "number": self._number,
            "money": lambda options: round(self._number({"precisionNumber": 0.01, **options}), 2),
            "boolean": lambda _: self.random.random() < 0.5,
            "date": lambda options: self._date(options, -3650, 3650),
            "pastDate": lambda options: self._date(options, -3650, -1),
            "futureDate": lambda options: self._date(options, 1, 3650),
        }

    def fake(self, fake_type: str, options: dict[str, Any] | None = None) -> Any:
        """Generate a value for a ``fake__Types`` name."""
        faker = self._fakers.get(fake_type)
        if faker is None:
            raise ValueError(f"Unknown fake type: {fake_type}")
        return faker(options or {})

    def scalar(self, type_name: str) -> Any:
        """Generate a value for a scalar with no faking directives."""
        if type_name == "Int":
            return self.random.randint(0, 100)
        if type_name == "Float":
            return round(self.random.uniform(0, 100), 2)
        if type_name == "Boolean":
            return self.random.random() < 0.5
        if type_name == "ID":
            return self.uuid()
        if type_name == "String":
            return self._words(4).capitalize()
        return self._word()

    def choice(self, values: list[Any]) -> Any:
        return self.random.choice(values)

    def list_length(self, minimum: int, maximum: int) -> int:
        return self.random.randint(minimum, max(minimum, maximum))

    def uuid(self) -> str:
        return str(uuid.UUID(int=self.random.getrandbits(128), version=4))

    def _word(self) -> str:
        return self.random.choice(WORDS)

    def _words(self, count: int) -> str:
        return " ".join(self.random.choices(WORDS, k=count))

    def _email(self, _options: dict[str, Any]) -> str:
        first = self.random.choice(FIRST_NAMES).lower()
        last = self.random.choice(LAST_NAMES).lower()
        return f"{first}.{last}@example.com"

    def _number(self, options: dict[str, Any]) -> float:
        low = options.get("minNumber")
        high = options.get("maxNumber")
        low = 0 if low is None else low
        high = 1000 if high is None else high
        precision = options.get("precisionNumber") or 1
        steps = int((high - low) / precision)
        return low + self.random.randint(0, max(steps, 0)) * precision

    def _date(self, options: dict[str, Any], min_days: int, max_days: int) -> str:
        value = datetime(2024, 1, 1) + timedelta(days=self.random.randint(min_days, max_days))
        date_format = options.get("dateFormat")
        return value.strftime(date_format) if date_format else value.date().isoformat()


class FakeResolvers:
    """Field and type resolvers that fill a schema with fake data."""

    def __init__(
        self,
        generator: FakeValueGenerator | None = None,
        default_list_length: tuple[int, int] = DEFAULT_LIST_LENGTH,
    ):
        self.generator = generator or FakeValueGenerator()
        self.default_list_length = default_list_length

    def field_resolver(self, source: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        """Resolve real data when present, fake data otherwise."""
        if isinstance(source, dict):
            if info.field_name in source:
                return default_field_resolver(source, info, **args)
        elif source is not None and hasattr(source, info.field_name):
            return default_field_resolver(source, info, **args)

        field = info.parent_type.fields[info.field_name]
        return self.fake_value(info.schema, field, field.type)

    def type_resolver(self, value: Any, info: GraphQLResolveInfo, abstract_type: GraphQLAbstractType) -> str | None:
        if isinstance(value, dict) and "__typename" in value:
            return value["__typename"]
        possible = info.schema.get_possible_types(abstract_type)
        return self.generator.choice(possible).name if possible else None

    def fake_value(self, schema: GraphQLSchema, field: GraphQLField, type_: GraphQLOutputType) -> Any:
        """Generate a value of ``type_`` for ``field``."""
        if is_non_null_type(type_):
            return self.fake_value(schema, field, type_.of_type)

        if is_list_type(type_):
            minimum, maximum = self.default_list_length
            list_length = self._directive(schema, "listLength", field.ast_node)
            if list_length:
                minimum, maximum = list_length["min"], list_length["max"]
            length = self.generator.list_length(minimum, maximum)
            return [self.fake_value(schema, field, type_.of_type) for _ in range(length)]

        examples = self._directive(schema, "examples", field.ast_node)
        if examples and examples.get("values"):
            return self.generator.choice(examples["values"])

        if is_abstract_type(type_):
            possible = schema.get_possible_types(type_)
            if not possible:
                return None
            return {"__typename": self.generator.choice(possible).name}

        if is_object_type(type_):
            return {}

        if is_enum_type(type_):
            return self.generator.choice(list(type_.values.values())).value

        if is_scalar_type(type_):
            fake = self._directive(schema, "fake", field.ast_node) or self._directive(
                schema, "fake", type_.ast_node
            )
            if fake:
                value = self.generator.fake(fake["type"], fake.get("options"))
                if type_.name == "Int" and isinstance(value, float):
                    return round(value)
                return value
            return self.generator.scalar(type_.name)

        return None

    @staticmethod
    def _directive(schema: GraphQLSchema, name: str, node) -> dict[str, Any] | None:
        directive = schema.get_directive(name)
        if directive is None or node is None:
            return None
        return get_directive_values(directive, node)
