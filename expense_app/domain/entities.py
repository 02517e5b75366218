"""Entity type descriptions for users and expenses."""

from expense_app.domain.models import Expense, User
from expense_app.domain.seed_data import SEED_EXPENSES, SEED_USERS
from expense_app.persistence.entity import EntitySpec

USER_ENTITY: EntitySpec[User] = EntitySpec(
    name="user",
    model=User,
    initial_state=User(id="", name="", email=""),
    seed=SEED_USERS,
    id_prefix="u-",
)

EXPENSE_ENTITY: EntitySpec[Expense] = EntitySpec(
    name="expense",
    model=Expense,
    initial_state=Expense(id="", user_id="", merchant=""),
    seed=SEED_EXPENSES,
    id_prefix="exp-",
)
