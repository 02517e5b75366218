"""Initial dataset loaded into an empty store on first request."""

from decimal import Decimal

from expense_app.domain.models import ApprovalStep, DecisionStatus, Expense, ExpenseStatus, User, UserRole

SEED_USERS: tuple[User, ...] = (
    User(id="u1", name="Alice Johnson", email="alice@example.com", role=UserRole.EMPLOYEE),
    User(id="u2", name="Bob Williams", email="bob@example.com", role=UserRole.MANAGER),
    User(id="u3", name="Charlie Brown", email="charlie@example.com", role=UserRole.ADMIN),
    User(id="u4", name="Diana Prince", email="diana@example.com", role=UserRole.EMPLOYEE),
)

SEED_EXPENSES: tuple[Expense, ...] = (
    Expense(
        id="exp-1",
        user_id="u1",
        merchant="Blue Bottle Coffee",
        amount=Decimal("12.50"),
        date=1717200000000,
        description="Client coffee meeting",
        status=ExpenseStatus.PENDING,
        category="Meals",
    ),
    Expense(
        id="exp-2",
        user_id="u1",
        merchant="United Airlines",
        amount=Decimal("480.00"),
        date=1716940800000,
        description="Flight to Chicago for the quarterly review",
        status=ExpenseStatus.APPROVED,
        category="Travel",
        history=[
            ApprovalStep(
                approver_id="u2",
                approver_name="Bob Williams",
                status=DecisionStatus.APPROVED,
                timestamp=1717027200000,
                notes="Approved",
            )
        ],
    ),
    Expense(
        id="exp-3",
        user_id="u4",
        merchant="Staples",
        amount=Decimal("64.99"),
        date=1716681600000,
        description="Printer toner",
        status=ExpenseStatus.REJECTED,
        category="Office Supplies",
        history=[
            ApprovalStep(
                approver_id="u2",
                approver_name="Bob Williams",
                status=DecisionStatus.REJECTED,
                timestamp=1716768000000,
                notes="Use the office supply portal instead",
            )
        ],
    ),
    Expense(
        id="exp-4",
        user_id="u4",
        merchant="Hilton",
        amount=Decimal("329.40"),
        date=1717372800000,
        description="Two nights, conference hotel",
        status=ExpenseStatus.PENDING,
        category="Lodging",
    ),
)
