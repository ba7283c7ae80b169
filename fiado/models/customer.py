"""Customer model for the ledger."""

from dataclasses import dataclass
from datetime import datetime

from fiado.exceptions import ValidationError


@dataclass(frozen=True)
class CustomerFields:
    """Editable customer fields, as entered in the customer form."""

    first_name: str
    last_name: str
    national_id: str
    phone: str = ""

    def validate(self) -> "CustomerFields":
        """Return a whitespace-trimmed copy, or raise if a required field is blank."""
        cleaned = CustomerFields(
            first_name=self.first_name.strip(),
            last_name=self.last_name.strip(),
            national_id=self.national_id.strip(),
            phone=(self.phone or "").strip(),
        )
        missing = [
            name
            for name in ("first_name", "last_name", "national_id")
            if not getattr(cleaned, name)
        ]
        if missing:
            raise ValidationError(f"Missing required customer fields: {', '.join(missing)}")
        return cleaned


@dataclass(frozen=True)
class Customer:
    """A merchant's account-holding client."""

    customer_id: str
    first_name: str
    last_name: str
    national_id: str
    phone: str
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def fields(self) -> CustomerFields:
        """Editable fields of this customer (used to prefill the edit form)."""
        return CustomerFields(
            first_name=self.first_name,
            last_name=self.last_name,
            national_id=self.national_id,
            phone=self.phone or "",
        )
