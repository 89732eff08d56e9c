"""
Ledger service — the consistency engine.

This module enforces the ledger's cascading rules:
1. An account balance moves with every transaction on it
   (+amount for income, -amount for expense)
2. A budget's cached `spent` moves with every matching expense
3. Editing or deleting a transaction reverses exactly what it
   caused, using the stored transaction as the reversal basis
4. Transfers move money between accounts without touching budgets

Each action is a pure function `(state, input) -> new state`.
Scratch copies are built locally and the new state is assembled
in one step, so an action is observed completely or not at all.
LedgerService owns the current state and swaps it per action.

Missing references (an account or budget that no longer exists)
skip that cascade step. They are never errors here.
"""

import threading
import uuid
from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import TypeVar

import structlog

from personal_ledger.config import get_settings
from personal_ledger.models.account import ACCOUNT_CLASSES, Account
from personal_ledger.models.budget import Budget
from personal_ledger.models.category import Category
from personal_ledger.models.enums import (
    AccountType,
    TransactionType,
    TRANSFER_CATEGORY_ID,
)
from personal_ledger.models.goal import Goal
from personal_ledger.models.recurring_payment import RecurringPayment
from personal_ledger.models.state import LedgerState
from personal_ledger.models.transaction import Transaction
from personal_ledger.schemas.account import AccountCreate, AccountUpdate
from personal_ledger.schemas.budget import BudgetCreate, BudgetUpdate
from personal_ledger.schemas.category import CategoryCreate, CategoryUpdate
from personal_ledger.schemas.goal import GoalCreate, GoalUpdate
from personal_ledger.schemas.recurring_payment import (
    RecurringPaymentCreate,
    RecurringPaymentUpdate,
)
from personal_ledger.schemas.report import (
    CategoryBreakdown,
    PeriodSummary,
    TotalBalanceResponse,
    UpcomingPayment,
)
from personal_ledger.schemas.transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransferRequest,
)
from personal_ledger.services import reports
from personal_ledger.services.aggregates import budget_matches, recalculate_budget
from personal_ledger.services.currency import RateTable

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Budget fields that define which transactions a budget covers.
# Changing any of them invalidates the accumulated `spent`.
BUDGET_CRITERIA_FIELDS = frozenset({"start_date", "end_date", "category_ids"})

# Patch fields that may legitimately be cleared to None.
NULLABLE_FIELDS = frozenset({
    "account_id",
    "recurring_id",
    "credit_limit",
})

DEFAULT_CATEGORIES = [
    # Income
    {"name": "Salary", "icon": "briefcase", "color": "#10B981", "type": TransactionType.INCOME},
    {"name": "Freelance", "icon": "laptop", "color": "#3B82F6", "type": TransactionType.INCOME},
    {"name": "Investments", "icon": "trending-up", "color": "#8B5CF6", "type": TransactionType.INCOME},
    {"name": "Other Income", "icon": "cash", "color": "#06B6D4", "type": TransactionType.INCOME},
    # Expense
    {"name": "Food", "icon": "restaurant", "color": "#EF4444", "type": TransactionType.EXPENSE},
    {"name": "Transport", "icon": "car", "color": "#F59E0B", "type": TransactionType.EXPENSE},
    {"name": "Housing", "icon": "home", "color": "#8B5CF6", "type": TransactionType.EXPENSE},
    {"name": "Entertainment", "icon": "game-controller", "color": "#EC4899", "type": TransactionType.EXPENSE},
    {"name": "Health", "icon": "medkit", "color": "#10B981", "type": TransactionType.EXPENSE},
    {"name": "Education", "icon": "school", "color": "#3B82F6", "type": TransactionType.EXPENSE},
    {"name": "Shopping", "icon": "cart", "color": "#06B6D4", "type": TransactionType.EXPENSE},
    {"name": "Utilities", "icon": "flash", "color": "#6B7280", "type": TransactionType.EXPENSE},
]


def new_id() -> str:
    return uuid.uuid4().hex


# --- Collection helpers ---

def find_by_id(items: Iterable[T], item_id: str) -> T | None:
    return next((item for item in items if item.id == item_id), None)


def _replace(items: tuple[T, ...], updated: T) -> tuple[T, ...]:
    return tuple(updated if item.id == updated.id else item for item in items)


def _remove(items: tuple[T, ...], item_id: str) -> tuple[T, ...]:
    return tuple(item for item in items if item.id != item_id)


def _without(state: LedgerState, field: str, item_id: str) -> LedgerState:
    """State minus one entity. Unknown ids return the state unchanged."""
    items = getattr(state, field)
    if find_by_id(items, item_id) is None:
        return state
    return state.model_copy(update={field: _remove(items, item_id)})


def _changes(patch) -> dict:
    """Fields explicitly set on a patch, minus Nones for required fields."""
    return {
        name: value
        for name, value in patch.model_dump(exclude_unset=True).items()
        if value is not None or name in NULLABLE_FIELDS
    }


# --- Cascade helpers ---

def _adjust_balance(
    accounts: dict[str, Account],
    account_id: str | None,
    delta: Decimal,
    now: datetime,
) -> None:
    """Apply a balance delta to a scratch account map. Missing accounts are skipped."""
    if account_id is None:
        return
    account = accounts.get(account_id)
    if account is None:
        logger.debug("cascade_skipped", reason="account_not_found", account_id=account_id)
        return
    accounts[account_id] = account.model_copy(
        update={"balance": account.balance + delta, "updated_at": now}
    )


def _adjust_budgets(
    budgets: tuple[Budget, ...],
    transaction: Transaction,
    apply: bool,
    now: datetime,
) -> tuple[Budget, ...]:
    """Add (apply=True) or remove a transaction's amount from every matching budget."""
    adjusted = []
    for budget in budgets:
        if budget_matches(budget, transaction):
            spent = (
                budget.spent + transaction.amount
                if apply
                else budget.spent - transaction.amount
            )
            budget = budget.model_copy(update={"spent": spent, "updated_at": now})
        adjusted.append(budget)
    return tuple(adjusted)


def _accounts_map(state: LedgerState) -> dict[str, Account]:
    return {account.id: account for account in state.accounts}


# --- Transactions ---

def add_transaction(
    state: LedgerState,
    request: TransactionCreate,
    now: datetime | None = None,
) -> tuple[LedgerState, Transaction]:
    """Insert a transaction and apply its account and budget effects."""
    now = now or datetime.utcnow()
    transaction = Transaction(
        id=new_id(),
        created_at=now,
        updated_at=now,
        **request.model_dump(),
    )

    accounts = _accounts_map(state)
    _adjust_balance(accounts, transaction.account_id, transaction.signed_amount, now)
    budgets = _adjust_budgets(state.budgets, transaction, apply=True, now=now)

    new_state = state.model_copy(update={
        "transactions": (transaction,) + state.transactions,
        "accounts": tuple(accounts.values()),
        "budgets": budgets,
    })
    return new_state, transaction


def update_transaction(
    state: LedgerState,
    transaction_id: str,
    patch: TransactionUpdate,
    now: datetime | None = None,
) -> tuple[LedgerState, Transaction | None]:
    """
    Edit a transaction, reversing its old effects and applying the new ones.

    The account step and the budget step run independently, and
    both reverse from the stored (pre-update) transaction, so an
    edit touching account, amount, type and category at once
    composes correctly.
    """
    old = find_by_id(state.transactions, transaction_id)
    if old is None:
        return state, None

    now = now or datetime.utcnow()
    new = old.model_copy(update={**_changes(patch), "updated_at": now})

    accounts = _accounts_map(state)
    if (old.account_id, old.amount, old.type) != (new.account_id, new.amount, new.type):
        _adjust_balance(accounts, old.account_id, -old.signed_amount, now)
        _adjust_balance(accounts, new.account_id, new.signed_amount, now)

    budgets = state.budgets
    expense_side = TransactionType.EXPENSE in (old.type, new.type)
    budget_fields_changed = (
        (old.category_id, old.amount, old.type, old.date)
        != (new.category_id, new.amount, new.type, new.date)
    )
    if expense_side and budget_fields_changed:
        budgets = _adjust_budgets(budgets, old, apply=False, now=now)
        budgets = _adjust_budgets(budgets, new, apply=True, now=now)

    new_state = state.model_copy(update={
        "transactions": _replace(state.transactions, new),
        "accounts": tuple(accounts.values()),
        "budgets": budgets,
    })
    return new_state, new


def delete_transaction(
    state: LedgerState,
    transaction_id: str,
    now: datetime | None = None,
) -> tuple[LedgerState, Transaction | None]:
    """Reverse a stored transaction's effects, then remove it."""
    transaction = find_by_id(state.transactions, transaction_id)
    if transaction is None:
        return state, None

    now = now or datetime.utcnow()
    accounts = _accounts_map(state)
    _adjust_balance(accounts, transaction.account_id, -transaction.signed_amount, now)
    budgets = _adjust_budgets(state.budgets, transaction, apply=False, now=now)

    new_state = state.model_copy(update={
        "transactions": _remove(state.transactions, transaction_id),
        "accounts": tuple(accounts.values()),
        "budgets": budgets,
    })
    return new_state, transaction


def transfer_money(
    state: LedgerState,
    request: TransferRequest,
    now: datetime | None = None,
) -> tuple[LedgerState, tuple[Transaction, Transaction] | None]:
    """
    Move money between two accounts.

    Both balances change and two transactions are recorded (an
    expense on the source, an income on the destination), all
    tagged with the reserved transfer category so budgets never
    see them. Missing accounts or a non-positive amount make
    this a no-op.
    """
    accounts = _accounts_map(state)
    source = accounts.get(request.source_account_id)
    destination = accounts.get(request.destination_account_id)

    if source is None or destination is None or request.amount <= 0:
        logger.info(
            "transfer_skipped",
            source_account_id=request.source_account_id,
            destination_account_id=request.destination_account_id,
            amount=str(request.amount),
        )
        return state, None

    now = now or datetime.utcnow()
    on = request.date or now.date()

    expense = Transaction(
        id=new_id(),
        type=TransactionType.EXPENSE,
        amount=request.amount,
        category_id=TRANSFER_CATEGORY_ID,
        account_id=source.id,
        description=request.description or f"Transfer to {destination.title}",
        date=on,
        created_at=now,
        updated_at=now,
    )
    income = Transaction(
        id=new_id(),
        type=TransactionType.INCOME,
        amount=request.amount,
        category_id=TRANSFER_CATEGORY_ID,
        account_id=destination.id,
        description=request.description or f"Transfer from {source.title}",
        date=on,
        created_at=now,
        updated_at=now,
    )

    _adjust_balance(accounts, source.id, -request.amount, now)
    _adjust_balance(accounts, destination.id, request.amount, now)

    new_state = state.model_copy(update={
        "transactions": (expense, income) + state.transactions,
        "accounts": tuple(accounts.values()),
    })
    return new_state, (expense, income)


# --- Budgets ---

def add_budget(
    state: LedgerState,
    request: BudgetCreate,
    now: datetime | None = None,
) -> tuple[LedgerState, Budget]:
    """
    Create a budget with spent = 0.

    Existing transactions are not counted. Callers backdating a
    budget recalculate afterwards.
    """
    now = now or datetime.utcnow()
    budget = Budget(
        id=new_id(),
        spent=Decimal("0"),
        created_at=now,
        updated_at=now,
        **request.model_dump(),
    )
    return state.model_copy(update={"budgets": state.budgets + (budget,)}), budget


def update_budget(
    state: LedgerState,
    budget_id: str,
    patch: BudgetUpdate,
    now: datetime | None = None,
) -> tuple[LedgerState, Budget | None]:
    """
    Patch a budget.

    A change to the window or the category set recomputes spent
    from the full transaction log instead of adjusting it.
    """
    budget = find_by_id(state.budgets, budget_id)
    if budget is None:
        return state, None

    now = now or datetime.utcnow()
    changes = _changes(patch)
    if "category_ids" in changes:
        changes["category_ids"] = frozenset(changes["category_ids"])

    updated = budget.model_copy(update={**changes, "updated_at": now})
    if BUDGET_CRITERIA_FIELDS & changes.keys():
        updated = recalculate_budget(updated, state.transactions)

    return state.model_copy(update={"budgets": _replace(state.budgets, updated)}), updated


def delete_budget(state: LedgerState, budget_id: str) -> LedgerState:
    return _without(state, "budgets", budget_id)


def recalculate_budgets_spent(state: LedgerState) -> LedgerState:
    """
    Rebuild every budget's spent from the transaction log.

    This is the authoritative repair for any drift. It only
    touches `spent`, so running it twice yields the same state.
    """
    budgets = tuple(
        recalculate_budget(budget, state.transactions) for budget in state.budgets
    )
    return state.model_copy(update={"budgets": budgets})


# --- Accounts ---

def add_account(
    state: LedgerState,
    request: AccountCreate,
    now: datetime | None = None,
) -> tuple[LedgerState, Account]:
    now = now or datetime.utcnow()
    account = ACCOUNT_CLASSES[AccountType(request.type)].model_validate({
        **request.model_dump(),
        "type": AccountType(request.type).value,
        "id": new_id(),
        "created_at": now,
        "updated_at": now,
    })
    return state.model_copy(update={"accounts": state.accounts + (account,)}), account


def update_account(
    state: LedgerState,
    account_id: str,
    patch: AccountUpdate,
    now: datetime | None = None,
) -> tuple[LedgerState, Account | None]:
    """
    Patch an account.

    The account is rebuilt through its variant class so a type
    change drops or gains the credit-only fields. A balance in
    the patch overrides the cached balance directly.
    """
    account = find_by_id(state.accounts, account_id)
    if account is None:
        return state, None

    now = now or datetime.utcnow()
    merged = {**account.model_dump(), **_changes(patch), "updated_at": now}
    account_type = AccountType(merged["type"])
    merged["type"] = account_type.value
    updated = ACCOUNT_CLASSES[account_type].model_validate(merged)
    return state.model_copy(update={"accounts": _replace(state.accounts, updated)}), updated


def delete_account(state: LedgerState, account_id: str) -> LedgerState:
    """Remove an account. Its transactions stay in the log."""
    return _without(state, "accounts", account_id)


# --- Goals ---

def add_goal(
    state: LedgerState,
    request: GoalCreate,
    now: datetime | None = None,
) -> tuple[LedgerState, Goal]:
    now = now or datetime.utcnow()
    goal = Goal(id=new_id(), created_at=now, updated_at=now, **request.model_dump())
    return state.model_copy(update={"goals": state.goals + (goal,)}), goal


def update_goal(
    state: LedgerState,
    goal_id: str,
    patch: GoalUpdate,
    now: datetime | None = None,
) -> tuple[LedgerState, Goal | None]:
    goal = find_by_id(state.goals, goal_id)
    if goal is None:
        return state, None
    now = now or datetime.utcnow()
    updated = goal.model_copy(update={**_changes(patch), "updated_at": now})
    return state.model_copy(update={"goals": _replace(state.goals, updated)}), updated


def delete_goal(state: LedgerState, goal_id: str) -> LedgerState:
    return _without(state, "goals", goal_id)


def add_to_goal(
    state: LedgerState,
    goal_id: str,
    amount: Decimal,
    now: datetime | None = None,
) -> tuple[LedgerState, Goal | None]:
    """Contribute to a goal. Strictly additive."""
    goal = find_by_id(state.goals, goal_id)
    if goal is None:
        return state, None
    now = now or datetime.utcnow()
    updated = goal.model_copy(update={
        "current_amount": goal.current_amount + amount,
        "updated_at": now,
    })
    return state.model_copy(update={"goals": _replace(state.goals, updated)}), updated


# --- Recurring payments ---

def add_recurring_payment(
    state: LedgerState,
    request: RecurringPaymentCreate,
    now: datetime | None = None,
) -> tuple[LedgerState, RecurringPayment]:
    now = now or datetime.utcnow()
    payment = RecurringPayment(
        id=new_id(), created_at=now, updated_at=now, **request.model_dump()
    )
    return state.model_copy(
        update={"recurring_payments": state.recurring_payments + (payment,)}
    ), payment


def update_recurring_payment(
    state: LedgerState,
    payment_id: str,
    patch: RecurringPaymentUpdate,
    now: datetime | None = None,
) -> tuple[LedgerState, RecurringPayment | None]:
    payment = find_by_id(state.recurring_payments, payment_id)
    if payment is None:
        return state, None
    now = now or datetime.utcnow()
    updated = payment.model_copy(update={**_changes(patch), "updated_at": now})
    return state.model_copy(
        update={"recurring_payments": _replace(state.recurring_payments, updated)}
    ), updated


def delete_recurring_payment(state: LedgerState, payment_id: str) -> LedgerState:
    return _without(state, "recurring_payments", payment_id)


# --- Categories ---

def add_category(
    state: LedgerState,
    request: CategoryCreate,
    now: datetime | None = None,
) -> tuple[LedgerState, Category]:
    category = Category(
        id=new_id(), created_at=now or datetime.utcnow(), **request.model_dump()
    )
    return state.model_copy(update={"categories": state.categories + (category,)}), category


def update_category(
    state: LedgerState,
    category_id: str,
    patch: CategoryUpdate,
) -> tuple[LedgerState, Category | None]:
    category = find_by_id(state.categories, category_id)
    if category is None:
        return state, None
    updated = category.model_copy(update=_changes(patch))
    return state.model_copy(update={"categories": _replace(state.categories, updated)}), updated


def delete_category(state: LedgerState, category_id: str) -> LedgerState:
    """Remove a user category. Default categories and the transfer id are kept."""
    category = find_by_id(state.categories, category_id)
    if category is None or category.is_default or category_id == TRANSFER_CATEGORY_ID:
        return state
    return state.model_copy(update={"categories": _remove(state.categories, category_id)})


# --- Settings ---

def set_preferred_currency(state: LedgerState, currency: str) -> LedgerState:
    if state.preferred_currency == currency:
        return state
    return state.model_copy(update={"preferred_currency": currency})


def initialize_default_data(
    state: LedgerState, now: datetime | None = None
) -> LedgerState:
    """Seed the default categories once. Later calls are no-ops."""
    if state.is_initialized:
        return state
    now = now or datetime.utcnow()
    defaults = tuple(
        Category(id=new_id(), is_default=True, created_at=now, **fields)
        for fields in DEFAULT_CATEGORIES
    )
    return state.model_copy(update={
        "categories": defaults + state.categories,
        "is_initialized": True,
    })


# --- Stateful owner ---

StateListener = Callable[[LedgerState, str], None]


class LedgerService:
    """
    Owns the current ledger state and applies actions to it.

    Each method runs one pure transition and swaps the held state
    in a single assignment. Subscribers (the persistence
    collaborator) receive the full new state and the action name
    after every mutation that changed something.

    Mutations are serialized by a lock: the read of the current
    state, the transition and the swap happen as one step, so
    concurrent callers (FastAPI runs sync endpoints on a thread
    pool) never transition from the same old state. Reads need
    no lock; a state value is immutable.

    The service has no global instance; whoever builds it owns it.
    """

    def __init__(
        self,
        state: LedgerState | None = None,
        rate_provider: Callable[[], RateTable] | None = None,
    ):
        if state is None:
            state = LedgerState(preferred_currency=get_settings().PREFERRED_CURRENCY)
        self._state = state
        self._rate_provider = rate_provider
        self._subscribers: list[StateListener] = []
        self._lock = threading.RLock()

    # --- State plumbing ---

    @property
    def state(self) -> LedgerState:
        return self._state

    def subscribe(self, listener: StateListener) -> None:
        self._subscribers.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        if listener in self._subscribers:
            self._subscribers.remove(listener)

    def _commit(self, new_state: LedgerState, action: str) -> None:
        if new_state is self._state:
            return
        self._state = new_state
        logger.debug("ledger_action_applied", action=action)
        for listener in list(self._subscribers):
            listener(new_state, action)

    def _apply(self, action: str, transition, *args):
        """
        Run a transition against the current state and commit it.

        Transitions return either a new state or a (state, result)
        pair; the result (or None) is handed back to the caller.
        """
        with self._lock:
            outcome = transition(self._state, *args)
            if isinstance(outcome, tuple):
                new_state, result = outcome
            else:
                new_state, result = outcome, None
            self._commit(new_state, action)
            return result

    def restore(self, state: LedgerState, recalculate: bool = True) -> LedgerState:
        """
        Replace the whole ledger state (snapshot load or backup import).

        Cached budget aggregates in an imported state are untrusted
        and re-derived unless recalculate is False. Balances are kept:
        they include opening balances and manual overrides the log
        cannot reproduce.
        """
        if recalculate:
            state = recalculate_budgets_spent(state)
        with self._lock:
            self._commit(state, "restore")
        logger.info(
            "ledger_restored",
            transactions=len(state.transactions),
            accounts=len(state.accounts),
            recalculated=recalculate,
        )
        return state

    # --- Transactions ---

    def add_transaction(self, request: TransactionCreate) -> Transaction:
        transaction = self._apply("add_transaction", add_transaction, request)
        logger.info(
            "transaction_added",
            transaction_id=transaction.id,
            type=transaction.type.value,
            amount=str(transaction.amount),
            account_id=transaction.account_id,
        )
        return transaction

    def update_transaction(
        self, transaction_id: str, patch: TransactionUpdate
    ) -> Transaction | None:
        return self._apply(
            "update_transaction", update_transaction, transaction_id, patch
        )

    def delete_transaction(self, transaction_id: str) -> Transaction | None:
        return self._apply("delete_transaction", delete_transaction, transaction_id)

    def transfer_money(
        self, request: TransferRequest
    ) -> tuple[Transaction, Transaction] | None:
        pair = self._apply("transfer_money", transfer_money, request)
        if pair is not None:
            logger.info(
                "transfer_completed",
                source_account_id=request.source_account_id,
                destination_account_id=request.destination_account_id,
                amount=str(request.amount),
            )
        return pair

    # --- Budgets ---

    def add_budget(self, request: BudgetCreate) -> Budget:
        return self._apply("add_budget", add_budget, request)

    def update_budget(self, budget_id: str, patch: BudgetUpdate) -> Budget | None:
        return self._apply("update_budget", update_budget, budget_id, patch)

    def delete_budget(self, budget_id: str) -> None:
        self._apply("delete_budget", delete_budget, budget_id)

    def recalculate_budgets_spent(self) -> tuple[Budget, ...]:
        with self._lock:
            self._apply("recalculate_budgets_spent", recalculate_budgets_spent)
            return self._state.budgets

    # --- Accounts ---

    def add_account(self, request: AccountCreate) -> Account:
        return self._apply("add_account", add_account, request)

    def update_account(self, account_id: str, patch: AccountUpdate) -> Account | None:
        return self._apply("update_account", update_account, account_id, patch)

    def delete_account(self, account_id: str) -> None:
        self._apply("delete_account", delete_account, account_id)

    # --- Goals ---

    def add_goal(self, request: GoalCreate) -> Goal:
        return self._apply("add_goal", add_goal, request)

    def update_goal(self, goal_id: str, patch: GoalUpdate) -> Goal | None:
        return self._apply("update_goal", update_goal, goal_id, patch)

    def delete_goal(self, goal_id: str) -> None:
        self._apply("delete_goal", delete_goal, goal_id)

    def add_to_goal(self, goal_id: str, amount: Decimal) -> Goal | None:
        return self._apply("add_to_goal", add_to_goal, goal_id, amount)

    # --- Recurring payments ---

    def add_recurring_payment(self, request: RecurringPaymentCreate) -> RecurringPayment:
        return self._apply("add_recurring_payment", add_recurring_payment, request)

    def update_recurring_payment(
        self, payment_id: str, patch: RecurringPaymentUpdate
    ) -> RecurringPayment | None:
        return self._apply(
            "update_recurring_payment", update_recurring_payment, payment_id, patch
        )

    def delete_recurring_payment(self, payment_id: str) -> None:
        self._apply("delete_recurring_payment", delete_recurring_payment, payment_id)

    # --- Categories ---

    def add_category(self, request: CategoryCreate) -> Category:
        return self._apply("add_category", add_category, request)

    def update_category(self, category_id: str, patch: CategoryUpdate) -> Category | None:
        return self._apply("update_category", update_category, category_id, patch)

    def delete_category(self, category_id: str) -> None:
        self._apply("delete_category", delete_category, category_id)

    # --- Settings ---

    def set_preferred_currency(self, currency: str) -> None:
        self._apply("set_preferred_currency", set_preferred_currency, currency)

    def initialize_default_data(self) -> None:
        self._apply("initialize_default_data", initialize_default_data)

    # --- Queries ---

    def _get(self, items: Iterable[T], item_id: str, label: str) -> T:
        item = find_by_id(items, item_id)
        if item is None:
            raise ValueError(f"{label} {item_id} not found")
        return item

    def get_transaction(self, transaction_id: str) -> Transaction:
        return self._get(self._state.transactions, transaction_id, "Transaction")

    def get_account(self, account_id: str) -> Account:
        return self._get(self._state.accounts, account_id, "Account")

    def get_budget(self, budget_id: str) -> Budget:
        return self._get(self._state.budgets, budget_id, "Budget")

    def get_goal(self, goal_id: str) -> Goal:
        return self._get(self._state.goals, goal_id, "Goal")

    def get_category(self, category_id: str) -> Category:
        return self._get(self._state.categories, category_id, "Category")

    def get_recurring_payment(self, payment_id: str) -> RecurringPayment:
        return self._get(
            self._state.recurring_payments, payment_id, "Recurring payment"
        )

    def get_transactions_by_date_range(
        self, start_date: date, end_date: date
    ) -> list[Transaction]:
        """Transactions dated inside [start_date, end_date], newest first."""
        return [
            t for t in self._state.transactions
            if start_date <= t.date <= end_date
        ]

    def get_transactions_by_account(self, account_id: str) -> list[Transaction]:
        return [t for t in self._state.transactions if t.account_id == account_id]

    @property
    def rates(self) -> Mapping[str, Decimal]:
        """Latest cached rate table from the rate collaborator."""
        if self._rate_provider is None:
            return {get_settings().REFERENCE_CURRENCY: Decimal("1")}
        return self._rate_provider()

    # --- Reports ---

    def total_balance(self, currency: str | None = None) -> TotalBalanceResponse:
        return reports.total_balance(
            self._state, currency or self._state.preferred_currency, self.rates
        )

    def period_summary(
        self, start_date: date, end_date: date, currency: str | None = None
    ) -> PeriodSummary:
        return reports.period_summary(
            self._state,
            start_date,
            end_date,
            currency or self._state.preferred_currency,
            self.rates,
        )

    def category_breakdown(
        self,
        start_date: date,
        end_date: date,
        transaction_type: TransactionType = TransactionType.EXPENSE,
        currency: str | None = None,
    ) -> CategoryBreakdown:
        return reports.category_breakdown(
            self._state,
            start_date,
            end_date,
            transaction_type,
            currency or self._state.preferred_currency,
            self.rates,
        )

    def upcoming_payments(
        self, today: date | None = None, days: int = 7
    ) -> list[UpcomingPayment]:
        return reports.upcoming_payments(self._state, today or date.today(), days)
