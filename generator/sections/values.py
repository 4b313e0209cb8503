# ============================================================================
# SEED VALUE SYNTHESIS
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Section support - Synthetic column values
# PURPOSE: Reproducible SQL literals for seed rows, chosen by key/type/name
# CREATED: 15 OCT 2026
# ============================================================================
"""
Seed Value Synthesis

Picks one SQL literal per (table, field, row). Priority:

    1. primary key     -> row index (quoted when the key is textual)
    2. foreign key     -> ((row - 1) mod row_count) + 1, always an emitted PK
    3. allowedValues   -> cycle through the list in declared order
    4. type category   -> text / number / date / boolean, refined by name

Text name heuristics: description, name, title, code, status, email, phone,
address, city, country, url/website, color, category/type.
Number heuristics: priority, quantity/count, amount/price/cost, percent,
age, year, month, day, rating/score, weight, height, duration/time.
Date heuristics: birth, created/start, modified/updated, end/expire.

Faker is re-seeded with CRC32("table|field|row") before every value, so the
output never depends on generation order or wall-clock time. Dates are
offsets from a fixed base date.
"""

import re
import zlib
from datetime import datetime, time, timedelta
from typing import Optional, Tuple

from faker import Faker

from core.config import SeedDefaults
from core.contracts import TypeCategory
from core.models import FieldDefinition, SchemaDefinition, TableDefinition
from core.schema.ddl_utils import LiteralFormatter

STATUS_VOCABULARY = (
    "ACTIVE",
    "INACTIVE",
    "PENDING",
    "COMPLETED",
    "SUSPENDED",
    "IN_PROGRESS",
    "CANCELLED",
    "DRAFT",
    "PUBLISHED",
    "ARCHIVED",
)

_NUMBER_PRECISION = re.compile(
    r"(?:number|numeric|decimal)\s*\(\s*(\d+)\s*(?:,\s*(\d+)\s*)?\)", re.IGNORECASE
)

# Name fragment(s) -> inclusive integer range
_NUMBER_RANGES = (
    (("priority",), (1, 5)),
    (("quantity", "count"), (1, 250)),
    (("percent",), (0, 100)),
    (("age",), (18, 95)),
    (("year",), (2020, 2025)),
    (("month",), (1, 12)),
    (("day",), (1, 31)),
    (("rating", "score"), (1, 10)),
    (("weight",), (1, 1000)),
    (("height",), (150, 200)),
    (("duration", "time"), (5, 480)),
)

# Name fragment(s) -> day offset range from the base date
_DATE_OFFSETS = (
    (("birth", "born"), (-80 * 365, -18 * 365)),
    (("created", "start"), (-365, 0)),
    (("modified", "updated"), (-30, 0)),
    (("end", "expire"), (30, 730)),
)


def seed_for(table: str, field: str, row: int) -> int:
    """Stable per-value seed."""
    return zlib.crc32(f"{table.lower()}|{field.lower()}|{row}".encode("utf-8"))


def numeric_limits(field: FieldDefinition) -> Tuple[Optional[int], int]:
    """(integer digits, scale) from NUMBER(p[,s]); (None, 0) when unsized."""
    match = _NUMBER_PRECISION.search(field.type)
    if not match:
        return None, 0
    precision = int(match.group(1))
    scale = int(match.group(2) or 0)
    return max(precision - scale, 0), scale


class SeedValueFactory:
    """
    Builds SQL literals for synthetic rows.

    One instance per run; holds a Faker generator that is re-seeded for
    every value.
    """

    def __init__(self, schema: SchemaDefinition, defaults: Optional[SeedDefaults] = None):
        self.schema = schema
        self.defaults = defaults or SeedDefaults()
        self.fake = Faker(self.defaults.locale)

    # =========================================================================
    # INCLUSION
    # =========================================================================

    @staticmethod
    def is_database_populated(field: FieldDefinition) -> bool:
        """Live timestamp defaults and trigger-managed fields are left to the database."""
        return field.has_live_default or field.is_trigger_managed

    # =========================================================================
    # DISPATCH
    # =========================================================================

    def value(self, table: TableDefinition, field: FieldDefinition, row: int) -> str:
        """
        SQL literal for one field of one seed row.

        Args:
            table: Owning table
            field: Field definition
            row: 1-based row index

        Returns:
            SQL literal text (quoted string, bare number, TO_DATE(...), NULL)
        """
        self.fake.seed_instance(seed_for(table.name, field.name, row))

        if field.is_primary_key:
            return self._key_literal(field, row)

        if field.is_foreign_key:
            target = ((row - 1) % self.defaults.row_count) + 1
            reference = self.schema.find_reference(field)
            key_field = reference[1] if reference else field
            return self._key_literal(key_field, target)

        if field.allowed_values:
            choice = field.allowed_values[(row - 1) % len(field.allowed_values)]
            return LiteralFormatter.value(choice)

        category = field.type_category
        if category == TypeCategory.TEXT:
            return LiteralFormatter.quote(self.text_value(table, field, row))
        if category == TypeCategory.NUMBER:
            return self.number_value(field, row)
        if category.is_temporal():
            return self.date_value(field, row)
        if category == TypeCategory.BOOLEAN:
            return "TRUE" if self.fake.pybool() else "FALSE"

        if field.nullable:
            return "NULL"
        return LiteralFormatter.quote(f"DEFAULT_{row}")

    def _key_literal(self, field: FieldDefinition, row: int) -> str:
        if field.type_category == TypeCategory.TEXT:
            return LiteralFormatter.quote(str(row))
        return str(row)

    # =========================================================================
    # TEXT
    # =========================================================================

    def text_value(self, table: TableDefinition, field: FieldDefinition, row: int) -> str:
        """Unquoted text, fitted to the declared length."""
        name = field.lower_name
        fake = self.fake

        if "description" in name:
            text = fake.sentence(nb_words=8)
        elif "name" in name:
            text = fake.name()
        elif "title" in name:
            text = fake.sentence(nb_words=4).rstrip(".")
        elif "code" in name:
            text = f"{table.upper_name[:4]}-{fake.bothify('??###').upper()}"
        elif "status" in name:
            text = self.status_word(row, field.max_length)
        elif "email" in name:
            text = fake.email()
        elif "phone" in name:
            text = fake.phone_number()
        elif "address" in name:
            text = fake.street_address()
        elif "city" in name:
            text = fake.city()
        elif "country" in name:
            text = fake.country()
        elif "url" in name or "website" in name:
            text = fake.url()
        elif "color" in name:
            text = fake.color_name()
        elif "category" in name or "type" in name:
            text = fake.word().capitalize()
        else:
            text = " ".join(fake.words(nb=fake.random_int(1, 3)))

        if field.unique:
            text = self._make_unique(text, row, is_email="email" in name)
        return self._fit(text, field.max_length, row if field.unique else None)

    @staticmethod
    def status_word(row: int, max_length: Optional[int] = None) -> str:
        """
        Vocabulary word for a row, cycling every ten rows.

        Words longer than the column are passed over in favour of the next
        word that fits, so values never leave the vocabulary.
        """
        size = len(STATUS_VOCABULARY)
        start = (row - 1) % size
        for step in range(size):
            word = STATUS_VOCABULARY[(start + step) % size]
            if max_length is None or len(word) <= max_length:
                return word
        return STATUS_VOCABULARY[start]

    def _make_unique(self, text: str, row: int, is_email: bool = False) -> str:
        if is_email and "@" in text:
            local, domain = text.split("@", 1)
            return f"{local}{row}@{domain}"
        return f"{text} {row}"

    def _fit(self, text: str, max_length: Optional[int], row: Optional[int] = None) -> str:
        """Truncate to max_length; unique values keep their row suffix."""
        if max_length is None or len(text) <= max_length:
            return text
        if row is None:
            return text[:max_length]
        suffix = str(row)
        if len(suffix) >= max_length:
            return suffix[-max_length:]
        return text[: max_length - len(suffix)] + suffix

    # =========================================================================
    # NUMBERS
    # =========================================================================

    def number_value(self, field: FieldDefinition, row: int) -> str:
        """Bare numeric literal, clamped to NUMBER(p,s) when sized."""
        name = field.lower_name
        digits, scale = numeric_limits(field)

        if field.unique:
            value: float = row
        elif any(k in name for k in ("amount", "price", "cost")):
            value = self.fake.random_int(1000, 999900) / 100
        else:
            low, high = 1, 1000
            for fragments, bounds in _NUMBER_RANGES:
                if any(k in name for k in fragments):
                    low, high = bounds
                    break
            value = self.fake.random_int(low, high)

        if digits is not None:
            value = min(value, 10 ** digits - 1) if digits else 0
        if isinstance(value, float) and (scale or digits is None):
            return f"{value:.2f}"
        return str(int(value))

    # =========================================================================
    # DATES
    # =========================================================================

    def date_value(self, field: FieldDefinition, row: int) -> str:
        """TO_DATE / TO_TIMESTAMP literal offset from the base date."""
        name = field.lower_name
        low, high = -180, 0
        for fragments, bounds in _DATE_OFFSETS:
            if any(k in name for k in fragments):
                low, high = bounds
                break

        offset = row if field.unique else self.fake.random_int(low, high)
        day = self.defaults.base_date + timedelta(days=offset)

        if field.type_category == TypeCategory.TIMESTAMP:
            moment = datetime.combine(
                day,
                time(self.fake.random_int(0, 23), self.fake.random_int(0, 59), self.fake.random_int(0, 59)),
            )
            return (
                f"TO_TIMESTAMP('{moment.strftime('%Y-%m-%d %H:%M:%S')}', "
                f"'YYYY-MM-DD HH24:MI:SS')"
            )
        return f"TO_DATE('{day.isoformat()}', 'YYYY-MM-DD')"


__all__ = [
    "STATUS_VOCABULARY",
    "SeedValueFactory",
    "seed_for",
    "numeric_limits",
]
