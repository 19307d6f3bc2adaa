from enum import Enum


class Category(str, Enum):
    """Spending categories, in the order the classifier emits scores."""

    FOOD = "Food"
    GROCERIES = "Groceries"
    INCOME = "Income"
    SHOPPING = "Shopping"
    SPAM = "Spam"
    SUBSCRIPTION = "Subscription"
    TRANSFER = "Transfer"
    TRANSPORT = "Transport"
    UTILITIES = "Utilities"

    @classmethod
    def from_index(cls, index: int) -> "Category":
        if index < 0 or index >= len(CATEGORY_ORDER):
            raise IndexError(f"Category index {index} out of range")
        return CATEGORY_ORDER[index]


CATEGORY_ORDER: tuple[Category, ...] = tuple(Category)


class Icon(str, Enum):
    FOOD = "ic_food"
    INCOME = "ic_income"
    SHOPPING = "ic_shopping"
    SUBSCRIPTION = "ic_subscription"
    TRANSPORT = "ic_transport"
    DEBIT = "ic_debit"
    CREDIT = "ic_credit"


# None means "generic debit/credit icon".
_CATEGORY_ICONS: dict[Category, Icon | None] = {
    Category.FOOD: Icon.FOOD,
    Category.GROCERIES: None,
    Category.INCOME: Icon.INCOME,
    Category.SHOPPING: Icon.SHOPPING,
    Category.SPAM: None,
    Category.SUBSCRIPTION: Icon.SUBSCRIPTION,
    Category.TRANSFER: None,
    Category.TRANSPORT: Icon.TRANSPORT,
    Category.UTILITIES: None,
}


def icon_for(category: Category | None, is_debit: bool) -> Icon:
    icon = _CATEGORY_ICONS.get(category) if category is not None else None
    if icon is not None:
        return icon
    return Icon.DEBIT if is_debit else Icon.CREDIT
