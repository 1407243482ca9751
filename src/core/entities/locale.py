"""Locale value object used for number and date presentation."""

from pydantic import BaseModel, ConfigDict


class NumberLocale(BaseModel):
    """Separators and month names for one presentation locale."""

    model_config = ConfigDict(frozen=True)

    decimal_separator: str = ","
    thousands_separator: str = "."
    month_abbreviations: tuple[str, ...] = (
        "jan", "fev", "mar", "abr", "mai", "jun",
        "jul", "ago", "set", "out", "nov", "dez",
    )


PT_BR = NumberLocale()
