"""Application view state and the reducer that advances it.

The whole screen state lives in one frozen ``AppState``. Every user event
is expressed as an action dataclass and applied with ``reduce``, which
returns a new state and never touches the old one.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Union

from fiado.models import Customer, TransactionKind
from fiado.serialization import dataclass_to_dict


class View(str, Enum):
    CUSTOMERS = "clientes"
    DETAIL = "detalle"
    NOTIFICATIONS = "notificaciones"


@dataclass(frozen=True)
class CustomerForm:
    first_name: str = ""
    last_name: str = ""
    national_id: str = ""
    phone: str = ""


@dataclass(frozen=True)
class TransactionForm:
    kind: TransactionKind = TransactionKind.PURCHASE
    amount: str = ""
    note: str = ""


@dataclass(frozen=True)
class AppState:
    """Everything the interface needs besides the loaded collections."""

    view: View = View.CUSTOMERS
    selected_customer_id: str | None = None
    search_query: str = ""
    customer_form: CustomerForm = field(default_factory=CustomerForm)
    editing_customer_id: str | None = None
    show_customer_form: bool = False
    transaction_form: TransactionForm = field(default_factory=TransactionForm)
    show_transaction_form: bool = False
    increase_percentage: Decimal = Decimal(0)
    loading: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-safe primitives."""
        return dataclass_to_dict(self)


# Actions


@dataclass(frozen=True)
class ShowCustomers:
    """Back to the customer list; clears the selection."""


@dataclass(frozen=True)
class SelectCustomer:
    customer_id: str


@dataclass(frozen=True)
class ShowNotifications:
    pass


@dataclass(frozen=True)
class SetSearchQuery:
    query: str


@dataclass(frozen=True)
class OpenNewCustomerForm:
    pass


@dataclass(frozen=True)
class StartEditingCustomer:
    customer: Customer


@dataclass(frozen=True)
class UpdateCustomerForm:
    field_name: str
    value: str


@dataclass(frozen=True)
class CloseCustomerForm:
    pass


@dataclass(frozen=True)
class CustomerSaved:
    """The customer form was stored successfully."""


@dataclass(frozen=True)
class OpenTransactionForm:
    pass


@dataclass(frozen=True)
class UpdateTransactionForm:
    field_name: str
    value: str


@dataclass(frozen=True)
class CloseTransactionForm:
    pass


@dataclass(frozen=True)
class TransactionSaved:
    pass


@dataclass(frozen=True)
class SetIncreasePercentage:
    """Raw percentage input; anything unparseable counts as 0."""

    value: str


@dataclass(frozen=True)
class IncreaseApplied:
    pass


@dataclass(frozen=True)
class LoadingStarted:
    pass


@dataclass(frozen=True)
class LoadingFinished:
    pass


Action = Union[
    ShowCustomers,
    SelectCustomer,
    ShowNotifications,
    SetSearchQuery,
    OpenNewCustomerForm,
    StartEditingCustomer,
    UpdateCustomerForm,
    CloseCustomerForm,
    CustomerSaved,
    OpenTransactionForm,
    UpdateTransactionForm,
    CloseTransactionForm,
    TransactionSaved,
    SetIncreasePercentage,
    IncreaseApplied,
    LoadingStarted,
    LoadingFinished,
]

CUSTOMER_FORM_FIELDS = ("first_name", "last_name", "national_id", "phone")
TRANSACTION_FORM_FIELDS = ("kind", "amount", "note")


def _parse_percentage(value: str) -> Decimal:
    try:
        percentage = Decimal(value.strip())
    except ArithmeticError:
        return Decimal(0)
    return percentage if percentage.is_finite() else Decimal(0)


def reduce(state: AppState, action: Action) -> AppState:
    """Apply one action and return the resulting state.

    Raises
    ------
    ValueError
        For form updates naming an unknown field or transaction kind.
    TypeError
        For objects that are not actions.
    """
    if isinstance(action, ShowCustomers):
        return replace(state, view=View.CUSTOMERS, selected_customer_id=None)
    if isinstance(action, SelectCustomer):
        return replace(state, view=View.DETAIL, selected_customer_id=action.customer_id)
    if isinstance(action, ShowNotifications):
        return replace(state, view=View.NOTIFICATIONS)
    if isinstance(action, SetSearchQuery):
        return replace(state, search_query=action.query)

    if isinstance(action, OpenNewCustomerForm):
        return replace(
            state,
            show_customer_form=True,
            editing_customer_id=None,
            customer_form=CustomerForm(),
        )
    if isinstance(action, StartEditingCustomer):
        c = action.customer
        return replace(
            state,
            show_customer_form=True,
            editing_customer_id=c.customer_id,
            customer_form=CustomerForm(
                first_name=c.first_name,
                last_name=c.last_name,
                national_id=c.national_id,
                phone=c.phone or "",
            ),
        )
    if isinstance(action, UpdateCustomerForm):
        if action.field_name not in CUSTOMER_FORM_FIELDS:
            raise ValueError(f"Unknown customer form field: {action.field_name!r}")
        form = replace(state.customer_form, **{action.field_name: action.value})
        return replace(state, customer_form=form)
    if isinstance(action, (CloseCustomerForm, CustomerSaved)):
        return replace(
            state,
            show_customer_form=False,
            editing_customer_id=None,
            customer_form=CustomerForm(),
        )

    if isinstance(action, OpenTransactionForm):
        return replace(state, show_transaction_form=True)
    if isinstance(action, UpdateTransactionForm):
        if action.field_name not in TRANSACTION_FORM_FIELDS:
            raise ValueError(f"Unknown transaction form field: {action.field_name!r}")
        value: Any = action.value
        if action.field_name == "kind":
            value = TransactionKind.parse(value)
        form = replace(state.transaction_form, **{action.field_name: value})
        return replace(state, transaction_form=form)
    if isinstance(action, (CloseTransactionForm, TransactionSaved)):
        return replace(state, show_transaction_form=False, transaction_form=TransactionForm())

    if isinstance(action, SetIncreasePercentage):
        return replace(state, increase_percentage=_parse_percentage(action.value))
    if isinstance(action, IncreaseApplied):
        return replace(state, increase_percentage=Decimal(0))

    if isinstance(action, LoadingStarted):
        return replace(state, loading=True)
    if isinstance(action, LoadingFinished):
        return replace(state, loading=False)

    raise TypeError(f"Not an action: {action!r}")
